# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Loan and cost configuration for a home purchase scenario.

Structure:
  (1) Enums - bank loan type, family loan amortization mode
  (2) Optional groups - ARM terms, family loan, PMI, prepayment, investment tracks
  (3) LoanConfiguration - everything one projection run needs

Every optional group defaults to a neutral value (zero family amount, PMI
disabled, no prepayments, no investment tracks) so a configuration built from
just a price and a down payment is usable.

Rate convention: all rates are stored as percentages (e.g. 6.3 for 6.3%),
except drop_ltv which is a plain ratio (0.78).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from mortgage_scenarios.financial_formulas import monthly_rate_from_annual_pct

MAX_PROJECTION_MONTHS = 720


# =============================================================================
# ENUMS
# =============================================================================

class BankLoanType(Enum):
    """Bank loan amortization types."""
    FIXED = "fixed"
    ARM = "arm"
    INTEREST_ONLY = "io"


class FamilyLoanMode(Enum):
    """Family loan repayment modes."""
    AMORTIZED = "amortized"
    INTEREST_ONLY = "interest_only"


# =============================================================================
# OPTIONAL GROUPS
# =============================================================================

@dataclass(frozen=True)
class RateCaps:
    """ARM rate-change caps in percentage points."""
    first: float = 2.0      # max move at the first reset
    periodic: float = 2.0   # max move at each later reset
    lifetime: float = 5.0   # max rise above the starting rate


@dataclass(frozen=True)
class ArmTerms:
    """Adjustable-rate terms. index_forecast holds one index value (%) per loan year."""
    margin: float = 2.0
    caps: RateCaps = field(default_factory=RateCaps)
    index_forecast: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "index_forecast", tuple(float(v) for v in self.index_forecast))

    def index_path(self, years: int) -> list[float]:
        """
        Index value for each loan year 0..years-1.

        A forecast shorter than the loan holds its last value for the
        remaining years; an empty forecast is an index of zero.
        """
        forecast = self.index_forecast
        if not forecast:
            return [0.0] * years
        return [forecast[i] if i < len(forecast) else forecast[-1] for i in range(years)]


@dataclass(frozen=True)
class FamilyLoanTerms:
    """
    Intra-family loan and the lender's alternatives.

    alt_annual_pct / alt_tax_pct describe what the family would earn (and pay
    tax on) if the capital stayed invested; reinvest_annual_pct is what the
    family earns on repayments it receives.
    """
    amount: float = 0.0
    rate: float = 4.5
    term_months: int = 360
    mode: FamilyLoanMode = FamilyLoanMode.AMORTIZED
    alt_annual_pct: float = 5.0
    alt_tax_pct: float = 30.0
    reinvest_annual_pct: float = 5.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", FamilyLoanMode(self.mode))
        if self.term_months <= 0:
            raise ValueError(f"family term_months must be positive, got {self.term_months}")

    @property
    def monthly_rate(self) -> float:
        return monthly_rate_from_annual_pct(self.rate)


@dataclass(frozen=True)
class PmiRule:
    """Private mortgage insurance. Charged only when initial LTV exceeds 80%."""
    enabled: bool = False
    drop_ltv: float = 0.78
    pmi_pct_annual: float = 0.6


@dataclass(frozen=True)
class LumpSum:
    """One-off principal prepayment applied in a given month (1-indexed)."""
    month: int
    amount: float

    def __post_init__(self) -> None:
        if self.month < 0:
            raise ValueError(f"lump sum month must be non-negative, got {self.month}")


@dataclass(frozen=True)
class PrepaymentPlan:
    """Extra bank principal: a flat monthly amount plus tagged lump sums."""
    monthly_extra: float = 0.0
    lump_sums: tuple[LumpSum, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "lump_sums", tuple(
            ls if isinstance(ls, LumpSum) else LumpSum(**ls) for ls in self.lump_sums
        ))

    def amount_for_month(self, month: int) -> float:
        """Total prepayment scheduled for a month."""
        return self.monthly_extra + sum(ls.amount for ls in self.lump_sums if ls.month == month)


@dataclass(frozen=True)
class InvestmentTrack:
    """A named fixed-return account that receives the monthly savings."""
    label: str
    annual_return_pct: float


# =============================================================================
# LOAN CONFIGURATION
# =============================================================================

_GROUP_TYPES: dict[str, type] = {
    "arm": ArmTerms,
    "family": FamilyLoanTerms,
    "pmi": PmiRule,
    "prepay": PrepaymentPlan,
}


@dataclass(frozen=True)
class LoanConfiguration:
    """
    Complete input for one projection run.

    Required fields:
        price, down.

    Computed properties:
        principal_bank_full: price - down (bank principal with no family loan)
        principal_bank: bank principal net of the family loan, floored at 0
        horizon_months: projected months, capped at MAX_PROJECTION_MONTHS
    """
    # Purchase
    price: float
    down: float

    # Bank loan
    bank_type: BankLoanType = BankLoanType.FIXED
    bank_rate: float = 6.3
    bank_term_months: int = 360
    arm: ArmTerms = field(default_factory=ArmTerms)
    io_months: int = 0
    points_pct: float = 0.0
    closing_costs: float = 0.0

    # Family loan
    family: FamilyLoanTerms = field(default_factory=FamilyLoanTerms)

    # Recurring costs
    tax_pct: float = 1.2
    tax_inflation_pct: float = 2.5
    insurance_annual: float = 2000.0
    insurance_inflation_pct: float = 3.0
    hoa_monthly: float = 0.0
    maint_pct_annual: float = 1.0
    utilities_monthly: float = 0.0
    escrow: bool = True

    pmi: PmiRule = field(default_factory=PmiRule)
    prepay: PrepaymentPlan = field(default_factory=PrepaymentPlan)

    # Projection
    horizon_years: int = 30
    discount_rate_pct: float = 5.0
    investment_tracks: tuple[InvestmentTrack, ...] = ()

    def __post_init__(self) -> None:
        """Coerce enum/tuple fields and validate structure."""
        object.__setattr__(self, "bank_type", BankLoanType(self.bank_type))
        object.__setattr__(self, "investment_tracks", tuple(
            t if isinstance(t, InvestmentTrack) else InvestmentTrack(**t)
            for t in self.investment_tracks
        ))
        if self.bank_term_months <= 0:
            raise ValueError(f"bank_term_months must be positive, got {self.bank_term_months}")
        if self.io_months < 0:
            raise ValueError(f"io_months must be non-negative, got {self.io_months}")
        if self.horizon_years < 0:
            raise ValueError(f"horizon_years must be non-negative, got {self.horizon_years}")

    @property
    def principal_bank_full(self) -> float:
        return self.price - self.down

    @property
    def principal_bank(self) -> float:
        return max(self.principal_bank_full - self.family.amount, 0.0)

    @property
    def points_cost(self) -> float:
        return self.principal_bank * (self.points_pct / 100)

    @property
    def horizon_months(self) -> int:
        return min(int(self.horizon_years * 12), MAX_PROJECTION_MONTHS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoanConfiguration:
        """
        Build a configuration from a nested mapping.

        Groups (arm, family, pmi, prepay) may be given as mappings; arm.caps
        may itself be a mapping. Unknown keys raise ValueError.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown configuration keys: {sorted(unknown)}")
        kwargs = dict(data)
        for name, group_type in _GROUP_TYPES.items():
            value = kwargs.get(name)
            if isinstance(value, Mapping):
                kwargs[name] = _group_from_dict(group_type, value)
        return cls(**kwargs)


def _group_from_dict(group_type: type, data: Mapping[str, Any]) -> Any:
    known = {f.name for f in fields(group_type)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"unknown {group_type.__name__} keys: {sorted(unknown)}")
    kwargs = dict(data)
    if group_type is ArmTerms and isinstance(kwargs.get("caps"), Mapping):
        kwargs["caps"] = RateCaps(**kwargs["caps"])
    return group_type(**kwargs)
