# Requires Python 3.12+
"""
Mortgage Scenarios: monthly projections for bank-only vs family-assisted home purchases.

Amortization, PMI, escrow drift, ARM resets and prepayments month by month,
with IRR/NPV and opportunity-cost metrics on top.
"""

from __future__ import annotations

import logging

__version__ = "0.2.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Financial primitives
from mortgage_scenarios.financial_formulas import (
    monthly_rate_from_annual_pct,
    annualize_monthly_rate,
    clamp,
    amortized_payment,
    internal_rate_of_return,
    net_present_value,
)

# Configuration
from mortgage_scenarios.loan_config import (
    MAX_PROJECTION_MONTHS,
    BankLoanType,
    FamilyLoanMode,
    RateCaps,
    ArmTerms,
    FamilyLoanTerms,
    PmiRule,
    LumpSum,
    PrepaymentPlan,
    InvestmentTrack,
    LoanConfiguration,
)

# Schedule builder
from mortgage_scenarios.schedule import (
    MonthlyRow,
    ScheduleSetup,
    ScheduleState,
    prepare_schedule,
    advance_month,
    build_monthly_rows,
)

# Derived metrics
from mortgage_scenarios.metrics import (
    InvestmentTrackResult,
    ScheduleResult,
    bank_full_monthly_payment,
    monthly_savings_series,
    compound_investment_track,
    build_cashflows,
    build_schedule,
)

# Scenario orchestration
from mortgage_scenarios.scenarios import (
    Variant,
    ComparisonMetric,
    ScenarioInputs,
    NamedScenario,
    VariantPair,
    CostBreakdown,
    YearlyInterestEarned,
    config_for_variant,
    build_scenario_variants,
    build_named_scenario,
    yearly_cumulative,
    compare_scenarios,
    first_month_cost_breakdown,
    interest_earned_series,
)

# Export
from mortgage_scenarios.export import (
    SCHEDULE_COLUMNS,
    schedule_to_csv,
    schedule_filename,
)

# Presets
from mortgage_scenarios.presets import (
    BASELINE_CONFIG,
    BASELINE,
    baseline_scenario,
)

__all__ = [
    "__version__",
    # Financial primitives
    "monthly_rate_from_annual_pct",
    "annualize_monthly_rate",
    "clamp",
    "amortized_payment",
    "internal_rate_of_return",
    "net_present_value",
    # Configuration
    "MAX_PROJECTION_MONTHS",
    "BankLoanType",
    "FamilyLoanMode",
    "RateCaps",
    "ArmTerms",
    "FamilyLoanTerms",
    "PmiRule",
    "LumpSum",
    "PrepaymentPlan",
    "InvestmentTrack",
    "LoanConfiguration",
    # Schedule builder
    "MonthlyRow",
    "ScheduleSetup",
    "ScheduleState",
    "prepare_schedule",
    "advance_month",
    "build_monthly_rows",
    # Derived metrics
    "InvestmentTrackResult",
    "ScheduleResult",
    "bank_full_monthly_payment",
    "monthly_savings_series",
    "compound_investment_track",
    "build_cashflows",
    "build_schedule",
    # Scenarios
    "Variant",
    "ComparisonMetric",
    "ScenarioInputs",
    "NamedScenario",
    "VariantPair",
    "CostBreakdown",
    "YearlyInterestEarned",
    "config_for_variant",
    "build_scenario_variants",
    "build_named_scenario",
    "yearly_cumulative",
    "compare_scenarios",
    "first_month_cost_breakdown",
    "interest_earned_series",
    # Export
    "SCHEDULE_COLUMNS",
    "schedule_to_csv",
    "schedule_filename",
    # Presets
    "BASELINE_CONFIG",
    "BASELINE",
    "baseline_scenario",
]
