# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import logging
import math

import numpy as np

__version__ = "0.2.0"

logger = logging.getLogger(__name__)

IRR_MAX_ITERATIONS = 100
IRR_TOLERANCE = 1e-7


# =============================================================================
# Rate Conversions
# =============================================================================

def monthly_rate_from_annual_pct(annual_pct: float) -> float:
    """
    Convert a nominal annual rate in percent to a monthly decimal rate.

    Formula:
        r = annual_pct / 100 / 12

    Args:
        annual_pct: Nominal annual rate as percentage (e.g., 6.3 for 6.3%)

    Returns:
        Monthly rate as decimal (e.g., 0.00525)
    """
    return annual_pct / 100 / 12


def annualize_monthly_rate(monthly_rate: float) -> float:
    """
    Compound a monthly decimal rate to an effective annual rate: (1 + r)^12 - 1.

    A diverged IRR estimate can be finite but enormous; its annual figure
    overflows to inf rather than raising.

    Example:
        >>> annualize_monthly_rate(1e300)
        inf
    """
    with np.errstate(over="ignore"):
        return float(np.power(np.float64(1.0) + monthly_rate, 12) - 1.0)


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound value to the closed interval [lo, hi]."""
    return max(lo, min(hi, value))


# =============================================================================
# Level Payment
# =============================================================================

def amortized_payment(principal: float, annual_rate_pct: float, term_months: int) -> float:
    """
    Level monthly payment that fully amortizes principal over term_months.

    Formula:
        PMT = P * r / [1 - (1 + r)^-n]

    Where:
        P = principal
        r = monthly rate (annual_rate_pct / 1200)
        n = term in months

    When r is exactly zero the payment is straight-line, P / n.

    Callers must guarantee term_months > 0. A zero or negative term is a
    contract violation and is not checked here (division by zero for a zero
    rate, a meaningless figure otherwise).

    Args:
        principal: Amount to amortize ($)
        annual_rate_pct: Nominal annual rate as percentage (e.g., 6.3 for 6.3%)
        term_months: Number of level payments

    Returns:
        Level monthly payment ($)

    Example:
        >>> round(amortized_payment(800_000, 6.3, 360), 2)
        4951.78
    """
    r = monthly_rate_from_annual_pct(annual_rate_pct)
    if r == 0:
        return principal / term_months
    return (principal * r) / (1 - (1 + r) ** (-term_months))


# =============================================================================
# Discounted Cash Flow
# =============================================================================

def _discount_terms(cashflows: np.ndarray, rate: float) -> tuple[float, float]:
    """NPV of cashflows at a periodic rate and its derivative with respect to rate."""
    t = np.arange(len(cashflows), dtype=float)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        denom = np.power(1.0 + rate, t)
        npv = float(np.sum(cashflows / denom))
        derivative = float(-np.sum(t * cashflows / (denom * (1.0 + rate))))
    return npv, derivative


def internal_rate_of_return(
        cashflows: list[float] | np.ndarray,
        initial_guess: float = 0.05
) -> float:
    """
    Periodic internal rate of return by Newton-Raphson iteration.

    The cash flow at index 0 is time-zero (undiscounted); index t is
    discounted by (1 + rate)^t. Iteration:

        rate_{k+1} = rate_k - NPV(rate_k) / NPV'(rate_k)

    Stops after IRR_MAX_ITERATIONS steps, when successive estimates differ by
    less than IRR_TOLERANCE (the new estimate is returned), or when the next
    estimate is not finite (the last finite estimate is returned).

    Convergence is not guaranteed: single-signed series have no root and
    series with several sign changes can have several. The result is a
    best-effort figure; callers may check it against the cash flow signs.

    Args:
        cashflows: Periodic cash flows, index 0 at time zero
        initial_guess: Starting periodic rate as decimal

    Returns:
        Periodic rate as decimal
    """
    flows = np.asarray(cashflows, dtype=float)
    rate = initial_guess
    for iteration in range(IRR_MAX_ITERATIONS):
        npv, derivative = _discount_terms(flows, rate)
        if derivative == 0 or not math.isfinite(derivative) or not math.isfinite(npv):
            logger.debug("IRR diverged at iteration %d, rate=%s", iteration, rate)
            break
        next_rate = rate - npv / derivative
        if not math.isfinite(next_rate):
            logger.debug("IRR diverged at iteration %d, rate=%s", iteration, rate)
            break
        if abs(next_rate - rate) < IRR_TOLERANCE:
            return next_rate
        rate = next_rate
    return rate


def net_present_value(
        annual_discount_rate_pct: float,
        monthly_cashflows: list[float] | np.ndarray
) -> float:
    """
    Present value of monthly cash flows at an annual discount rate.

    Formula:
        NPV = sum_t cf_t / (1 + r)^t,   r = annual_discount_rate_pct / 1200

    Args:
        annual_discount_rate_pct: Nominal annual discount rate as percentage
        monthly_cashflows: Monthly cash flows, index 0 at time zero

    Returns:
        Net present value ($)
    """
    flows = np.asarray(monthly_cashflows, dtype=float)
    r = monthly_rate_from_annual_pct(annual_discount_rate_pct)
    t = np.arange(len(flows), dtype=float)
    return float(np.sum(flows / np.power(1.0 + r, t)))
