# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Scenario orchestration over the projection engine.

A scenario carries two down-payment figures, one for buying with the bank
alone and one for buying with family help. The engine never sees which
variant it is running; this module derives a plain LoanConfiguration for the
chosen variant and calls build_schedule on it.

  config_for_variant      - derive the configuration for one variant
  build_scenario_variants - both variants of one scenario
  compare_scenarios       - yearly cumulative cost/interest aligned across scenarios
  first_month_cost_breakdown - month-1 cost components per scenario
  interest_earned_series  - what the family earns by lending vs investing
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from mortgage_scenarios.financial_formulas import monthly_rate_from_annual_pct
from mortgage_scenarios.loan_config import LoanConfiguration
from mortgage_scenarios.metrics import ScheduleResult, build_schedule

logger = logging.getLogger(__name__)

INTEREST_EARNED_MAX_MONTHS = 360


# =============================================================================
# ENUMS
# =============================================================================

class Variant(Enum):
    """Financing variant of a scenario."""
    BANK = "bank"
    FAMILY = "family"


class ComparisonMetric(Enum):
    """Yearly cumulative value plotted across scenarios."""
    HOUSEHOLD = "household"
    INTEREST = "interest"


# =============================================================================
# Scenario Types
# =============================================================================

@dataclass(frozen=True)
class ScenarioInputs:
    """Base configuration plus the down payment used by each variant."""
    config: LoanConfiguration
    down_bank_only: float
    down_with_family: float


@dataclass(frozen=True)
class NamedScenario:
    name: str
    inputs: ScenarioInputs
    variant: Variant = Variant.FAMILY

    def __post_init__(self) -> None:
        object.__setattr__(self, "variant", Variant(self.variant))


@dataclass(frozen=True)
class VariantPair:
    with_family: ScheduleResult
    bank_only: ScheduleResult


@dataclass(frozen=True)
class CostBreakdown:
    """Month-1 cost components of a scenario's selected variant."""
    name: str
    bank: float
    family: float
    pmi: float
    tax: float
    insurance: float
    hoa: float
    maintenance: float
    utilities: float


@dataclass(frozen=True)
class YearlyInterestEarned:
    year: int
    family_interest: float
    bank_interest: float


# =============================================================================
# Variants
# =============================================================================

def config_for_variant(inputs: ScenarioInputs, variant: Variant | str) -> LoanConfiguration:
    """
    Configuration for one financing variant.

    bank:   down_bank_only and no family loan
    family: down_with_family and the configured family loan
    """
    variant = Variant(variant)
    base = inputs.config
    if variant is Variant.BANK:
        return replace(base, down=inputs.down_bank_only, family=replace(base.family, amount=0.0))
    return replace(base, down=inputs.down_with_family)


def build_scenario_variants(inputs: ScenarioInputs) -> VariantPair:
    """Project both the family-assisted and the bank-only variant."""
    return VariantPair(
        with_family=build_schedule(config_for_variant(inputs, Variant.FAMILY)),
        bank_only=build_schedule(config_for_variant(inputs, Variant.BANK)),
    )


def build_named_scenario(scenario: NamedScenario) -> ScheduleResult:
    """Project a scenario using its own selected variant."""
    return build_schedule(config_for_variant(scenario.inputs, scenario.variant))


# =============================================================================
# Cross-Scenario Comparison
# =============================================================================

def yearly_cumulative(result: ScheduleResult, metric: ComparisonMetric | str, years: int = 30) -> np.ndarray:
    """
    Cumulative value at the end of years 1..years.

    HOUSEHOLD sums household_monthly, INTEREST sums bank + family interest.
    Years past the projection repeat the final cumulative value.
    """
    metric = ComparisonMetric(metric)
    if metric is ComparisonMetric.HOUSEHOLD:
        monthly = result.column("household_monthly")
    else:
        monthly = result.column("bank_interest") + result.column("family_interest")
    running = np.concatenate([[0.0], np.cumsum(monthly, dtype=float)])
    idx = np.minimum(np.arange(1, years + 1) * 12, len(monthly))
    return np.round(running[idx], 2)


def compare_scenarios(
        scenarios: Sequence[NamedScenario],
        metric: ComparisonMetric | str = ComparisonMetric.HOUSEHOLD,
        years: int = 30
) -> list[dict[str, float | str]]:
    """
    Align scenarios' yearly cumulative values on a shared year axis.

    Returns:
        One dict per year: {"name": "Y<n>", <scenario name>: value, ...}
    """
    series = {s.name: yearly_cumulative(build_named_scenario(s), metric, years) for s in scenarios}
    merged: list[dict[str, float | str]] = []
    for i in range(years):
        point: dict[str, float | str] = {"name": f"Y{i + 1}"}
        for name, values in series.items():
            point[name] = float(values[i])
        merged.append(point)
    logger.debug("Compared %d scenarios over %d years", len(series), years)
    return merged


def first_month_cost_breakdown(scenarios: Sequence[NamedScenario]) -> list[CostBreakdown]:
    """Month-1 cost components of each scenario's selected variant."""
    out = []
    for s in scenarios:
        rows = build_named_scenario(s).rows
        if not rows:
            out.append(CostBreakdown(s.name, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0))
            continue
        r0 = rows[0]
        out.append(CostBreakdown(
            name=s.name,
            bank=r0.bank_payment,
            family=r0.family_payment,
            pmi=r0.pmi,
            tax=r0.tax,
            insurance=r0.insurance,
            hoa=r0.hoa,
            maintenance=r0.maintenance,
            utilities=r0.utilities,
        ))
    return out


def interest_earned_series(
        inputs: ScenarioInputs,
        include_reinvest: bool = False,
        net_vs_bank: bool = False
) -> list[YearlyInterestEarned]:
    """
    Interest the family earns by lending vs keeping the capital invested.

    Family path: interest on the declining lent balance, optionally plus the
    interest earned by reinvesting repayments received.
    Bank path: the same capital left in the alternative investment, after-tax
    interest compounding monthly.

    Both paths are cumulative, reported at each year end over at most
    INTEREST_EARNED_MAX_MONTHS months of the family-assisted projection.
    net_vs_bank reports the family line minus the bank line.
    """
    family = inputs.config.family
    rows = build_schedule(config_for_variant(inputs, Variant.FAMILY)).rows

    r_family = monthly_rate_from_annual_pct(family.rate)
    r_alt = monthly_rate_from_annual_pct(family.alt_annual_pct)
    alt_tax = family.alt_tax_pct / 100
    r_reinvest = monthly_rate_from_annual_pct(family.reinvest_annual_pct)

    lend_remaining = family.amount
    family_cum = 0.0
    reinvest_balance = 0.0
    reinvest_cum = 0.0
    bank_cum = 0.0
    bank_base = family.amount

    yearly = []
    for m in range(1, min(len(rows), INTEREST_EARNED_MAX_MONTHS) + 1):
        row = rows[m - 1]

        alt_after_tax = bank_base * r_alt * (1 - alt_tax)
        bank_cum += alt_after_tax
        bank_base += alt_after_tax

        family_cum += lend_remaining * r_family

        reinvest_interest = reinvest_balance * r_reinvest
        reinvest_cum += reinvest_interest
        reinvest_balance += reinvest_interest + row.family_payment

        lend_remaining = max(lend_remaining - row.family_principal, 0.0)

        if m % 12 == 0:
            family_raw = family_cum + reinvest_cum if include_reinvest else family_cum
            yearly.append(YearlyInterestEarned(
                year=m // 12,
                family_interest=round(family_raw - bank_cum if net_vs_bank else family_raw, 2),
                bank_interest=round(bank_cum, 2),
            ))
    return yearly
