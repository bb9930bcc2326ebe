# Requires Python 3.12+
"""
Preset scenario inputs.

BASELINE: a $1M purchase, 6.3% fixed 30-year bank loan, and a $300k family
loan at 4.5% over 30 years. The family variant puts $200k down, the
bank-only variant $150k.
"""

from __future__ import annotations

from mortgage_scenarios.loan_config import (
    ArmTerms,
    BankLoanType,
    FamilyLoanMode,
    FamilyLoanTerms,
    InvestmentTrack,
    LoanConfiguration,
    PmiRule,
    RateCaps,
)
from mortgage_scenarios.scenarios import NamedScenario, ScenarioInputs, Variant

BASELINE_CONFIG = LoanConfiguration(
    price=1_000_000,
    down=200_000,
    bank_type=BankLoanType.FIXED,
    bank_rate=6.3,
    bank_term_months=360,
    arm=ArmTerms(margin=2.0, caps=RateCaps(first=2, periodic=2, lifetime=5),
                 index_forecast=(3.5, 3.25, 3.0, 3.0, 3.0)),
    io_months=0,
    points_pct=0.5,
    closing_costs=12_000,
    family=FamilyLoanTerms(
        amount=300_000,
        rate=4.5,
        term_months=360,
        mode=FamilyLoanMode.AMORTIZED,
        alt_annual_pct=5,
        alt_tax_pct=30,
        reinvest_annual_pct=5,
    ),
    tax_pct=1.2,
    tax_inflation_pct=2.5,
    insurance_annual=2_000,
    insurance_inflation_pct=3,
    hoa_monthly=90,
    maint_pct_annual=1.0,
    utilities_monthly=350,
    escrow=True,
    pmi=PmiRule(enabled=True, drop_ltv=0.78, pmi_pct_annual=0.6),
    horizon_years=30,
    discount_rate_pct=5.0,
    investment_tracks=(
        InvestmentTrack("Equities", 7.0),
        InvestmentTrack("Bonds", 4.0),
    ),
)

BASELINE = ScenarioInputs(
    config=BASELINE_CONFIG,
    down_bank_only=150_000,
    down_with_family=200_000,
)


def baseline_scenario(name: str = "Baseline", variant: Variant | str = Variant.FAMILY) -> NamedScenario:
    """A named scenario built on the baseline inputs."""
    return NamedScenario(name=name, inputs=BASELINE, variant=Variant(variant))
