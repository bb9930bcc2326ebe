# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from mortgage_scenarios.financial_formulas import (
    amortized_payment,
    annualize_monthly_rate,
    internal_rate_of_return,
    monthly_rate_from_annual_pct,
    net_present_value,
)
from mortgage_scenarios.loan_config import InvestmentTrack, LoanConfiguration
from mortgage_scenarios.schedule import MonthlyRow, build_monthly_rows

logger = logging.getLogger(__name__)

IRR_GUESS_MONTHLY = 0.005


# =============================================================================
# Result Containers
# =============================================================================

@dataclass(frozen=True)
class InvestmentTrackResult:
    """Outcome of investing the monthly savings series in one track."""
    label: str
    annual_return_pct: float
    final_balance: float
    total_contributed: float
    profit: float


@dataclass(frozen=True, eq=False)
class ScheduleResult:
    """
    Container for one projection run.

    Fields:
    - rows: MonthlyRow per projected month
    - cum_family_interest / cum_reinvest_earnings: full-precision run totals
    - bank_full_monthly: level payment on price - down at the bank rate (savings baseline)
    - monthly_savings: max(bank_full_monthly - (bank + family payment), 0) per month
    - cash_owner / cash_household: monthly cash-flow vectors, index 0 is the
      upfront outlay, final-month equity added to the last entry
    - irr_annual / irr_annual_household: annualised IRR, 4 dp (inf when the
      solver runs away to a huge monthly rate)
    - npv / npv_household: NPV at the configured discount rate, 2 dp
    - investment_tracks: one InvestmentTrackResult per configured track

    Results compare by identity; the array fields have no single truth value.
    """
    rows: tuple[MonthlyRow, ...]
    cum_family_interest: float
    cum_reinvest_earnings: float
    bank_full_monthly: float
    monthly_savings: np.ndarray
    cash_owner: np.ndarray
    cash_household: np.ndarray
    irr_annual: float
    irr_annual_household: float
    npv: float
    npv_household: float
    investment_tracks: tuple[InvestmentTrackResult, ...]

    def column(self, name: str) -> np.ndarray:
        """A MonthlyRow field across all rows as an array."""
        return np.array([getattr(row, name) for row in self.rows])

    @property
    def cumulative_debt_interest(self) -> float:
        """Bank plus family interest over the projection, from rounded rows."""
        return float(sum(r.bank_interest + r.family_interest for r in self.rows))


# =============================================================================
# Aggregations
# =============================================================================

def bank_full_monthly_payment(config: LoanConfiguration) -> float:
    """Level payment if the whole price - down were borrowed from the bank."""
    return amortized_payment(config.principal_bank_full, config.bank_rate, config.bank_term_months)


def monthly_savings_series(rows: list[MonthlyRow], baseline_payment: float) -> np.ndarray:
    """
    Debt-service savings against a fixed baseline payment.

    savings[m] = max(baseline - (bank_payment[m] + family_payment[m]), 0)
    """
    actual = np.array([r.bank_payment + r.family_payment for r in rows], dtype=float)
    return np.round(np.maximum(baseline_payment - actual, 0.0), 2)


def compound_investment_track(track: InvestmentTrack, deposits: np.ndarray) -> InvestmentTrackResult:
    """
    Grow monthly deposits in a fixed-return account.

        balance = balance * (1 + r) + deposit,  r = annual_return_pct / 1200
    """
    r = monthly_rate_from_annual_pct(track.annual_return_pct)
    balance = 0.0
    for deposit in deposits:
        balance = balance * (1 + r) + float(deposit)
    contributed = float(np.sum(deposits))
    return InvestmentTrackResult(
        label=track.label,
        annual_return_pct=track.annual_return_pct,
        final_balance=round(balance, 2),
        total_contributed=round(contributed, 2),
        profit=round(balance - contributed, 2),
    )


def upfront_outlay(config: LoanConfiguration) -> float:
    """Cash paid at closing: down payment, closing costs and points."""
    return config.down + config.closing_costs + config.points_cost


def build_cashflows(config: LoanConfiguration, rows: list[MonthlyRow], household: bool = False) -> np.ndarray:
    """
    Monthly cash-flow vector for IRR/NPV.

    [-(upfront outlay), -total_1, ..., -total_N], with the final month's
    equity added back to the last entry as a terminal liquidation value.
    household=True uses the household-inclusive totals.
    """
    field_name = "household_monthly" if household else "total_monthly"
    flows = np.empty(len(rows) + 1, dtype=float)
    flows[0] = -upfront_outlay(config)
    flows[1:] = [-getattr(r, field_name) for r in rows]
    if rows:
        flows[-1] += rows[-1].equity
    return flows


def build_schedule(config: LoanConfiguration) -> ScheduleResult:
    """
    Run the full projection for one configuration.

    Builds the monthly rows, then derives the savings series, investment
    tracks, owner and household cash flows, IRR and NPV.
    """
    rows, final_state = build_monthly_rows(config)

    baseline = bank_full_monthly_payment(config)
    savings = monthly_savings_series(rows, baseline)
    tracks = tuple(compound_investment_track(t, savings) for t in config.investment_tracks)

    cash_owner = build_cashflows(config, rows)
    cash_household = build_cashflows(config, rows, household=True)

    irr_owner = annualize_monthly_rate(internal_rate_of_return(cash_owner, IRR_GUESS_MONTHLY))
    irr_household = annualize_monthly_rate(internal_rate_of_return(cash_household, IRR_GUESS_MONTHLY))

    result = ScheduleResult(
        rows=tuple(rows),
        cum_family_interest=final_state.cum_family_interest,
        cum_reinvest_earnings=final_state.cum_reinvest_earnings,
        bank_full_monthly=baseline,
        monthly_savings=savings,
        cash_owner=cash_owner,
        cash_household=cash_household,
        irr_annual=round(irr_owner, 4),
        irr_annual_household=round(irr_household, 4),
        npv=round(net_present_value(config.discount_rate_pct, cash_owner), 2),
        npv_household=round(net_present_value(config.discount_rate_pct, cash_household), 2),
        investment_tracks=tracks,
    )
    logger.debug("Schedule built: irr=%s npv=%s", result.irr_annual, result.npv)
    return result
