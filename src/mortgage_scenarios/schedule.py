# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from mortgage_scenarios.financial_formulas import (
    amortized_payment,
    clamp,
    monthly_rate_from_annual_pct,
)
from mortgage_scenarios.loan_config import (
    BankLoanType,
    FamilyLoanMode,
    LoanConfiguration,
)

logger = logging.getLogger(__name__)

PMI_LTV_THRESHOLD = 0.8


# =============================================================================
# Row and State Containers
# =============================================================================

@dataclass(frozen=True)
class MonthlyRow:
    """
    One projected month. Currency figures are rounded to cents.

    Owner view:
        total_monthly = bank_payment + family_payment + pmi + escrow
                        + hoa + maintenance + utilities

    Household view:
        household_monthly = total_monthly + household_delta

    tax and insurance are always reported; they only enter escrow (and so the
    totals) when escrow is enabled.
    """
    month: int
    year: int

    bank_payment: float
    bank_interest: float
    bank_principal: float
    bank_balance: float
    bank_rate: float  # effective annual rate %, 4 dp

    family_payment: float
    family_interest: float
    family_principal: float
    family_balance: float

    pmi: float
    pmi_active: bool
    tax: float
    insurance: float
    hoa: float
    maintenance: float
    utilities: float
    escrow: float

    total_monthly: float
    household_delta: float
    household_monthly: float

    equity: float
    total_interest: float
    total_principal: float


@dataclass(frozen=True)
class ScheduleSetup:
    """Quantities fixed for the whole run, derived once from the configuration."""
    principal_bank: float
    pmi_monthly_base: float
    tax_monthly_base: float
    insurance_monthly_base: float
    maintenance_monthly: float
    family_monthly: float
    bank_monthly_fixed: float
    index_path: list[float]
    arm_ceiling: float


@dataclass(frozen=True)
class ScheduleState:
    """State carried from one month to the next."""
    bank_balance: float
    family_balance: float
    bank_rate: float
    pmi_active: bool
    cum_family_interest: float = 0.0
    reinvest_balance: float = 0.0
    cum_reinvest_earnings: float = 0.0


def prepare_schedule(config: LoanConfiguration) -> tuple[ScheduleSetup, ScheduleState]:
    """
    Derive the run constants and the month-0 state.

    PMI applies only when enabled and the initial bank LTV exceeds 80%; its
    monthly charge is fixed from the starting principal.
    """
    principal_bank = config.principal_bank
    initial_ltv = principal_bank / config.price if config.price else 0.0
    if config.pmi.enabled and initial_ltv > PMI_LTV_THRESHOLD:
        pmi_base = principal_bank * (config.pmi.pmi_pct_annual / 100) / 12
    else:
        pmi_base = 0.0

    family = config.family
    if family.amount > 0:
        if family.mode is FamilyLoanMode.INTEREST_ONLY:
            family_monthly = family.amount * family.monthly_rate
        else:
            family_monthly = amortized_payment(family.amount, family.rate, family.term_months)
    else:
        family_monthly = 0.0

    if config.bank_type is BankLoanType.FIXED:
        bank_fixed = amortized_payment(principal_bank, config.bank_rate, config.bank_term_months)
    else:
        bank_fixed = 0.0

    setup = ScheduleSetup(
        principal_bank=principal_bank,
        pmi_monthly_base=pmi_base,
        tax_monthly_base=(config.tax_pct / 100) * config.price / 12,
        insurance_monthly_base=config.insurance_annual / 12,
        maintenance_monthly=config.price * (config.maint_pct_annual / 100) / 12,
        family_monthly=family_monthly,
        bank_monthly_fixed=bank_fixed,
        index_path=config.arm.index_path(math.ceil(config.bank_term_months / 12)),
        arm_ceiling=config.bank_rate + config.arm.caps.lifetime,
    )
    state = ScheduleState(
        bank_balance=principal_bank,
        family_balance=family.amount,
        bank_rate=config.bank_rate,
        pmi_active=pmi_base > 0,
    )
    return setup, state


# =============================================================================
# Bank Leg
# =============================================================================

def reset_arm_rate(config: LoanConfiguration, setup: ScheduleSetup, month: int, current_rate: float) -> float:
    """
    Effective ARM rate for a month.

    Resets fall on months where (month - 1) % 12 == 0 and month > 1. At reset
    index k = (month - 1) // 12 the desired rate is index_path[k] + margin,
    moved at most the first cap (k == 1) or periodic cap (k > 1) away from
    the prior rate, and never above starting rate + lifetime cap.
    """
    if month == 1:
        return config.bank_rate
    if (month - 1) % 12 != 0:
        return current_rate
    reset_idx = (month - 1) // 12
    desired = setup.index_path[reset_idx] + config.arm.margin
    cap = config.arm.caps.first if reset_idx == 1 else config.arm.caps.periodic
    rate = clamp(desired, current_rate - cap, current_rate + cap)
    return min(rate, setup.arm_ceiling)


def _bank_leg(
        config: LoanConfiguration,
        setup: ScheduleSetup,
        month: int,
        balance: float,
        rate: float
) -> tuple[float, float, float, float, float]:
    """
    Bank payment for one month.

    Returns:
        (payment, interest, principal_portion, new_balance, effective_rate)
    """
    if not (setup.principal_bank > 0 and balance > 0 and month <= config.bank_term_months):
        return 0.0, 0.0, 0.0, balance, rate

    remaining = max(config.bank_term_months - (month - 1), 1)
    in_io_window = config.bank_type is BankLoanType.INTEREST_ONLY and month <= config.io_months

    if config.bank_type is BankLoanType.FIXED:
        payment = setup.bank_monthly_fixed
    elif in_io_window:
        payment = balance * monthly_rate_from_annual_pct(config.bank_rate)
    elif config.bank_type is BankLoanType.ARM:
        rate = reset_arm_rate(config, setup, month, rate)
        payment = amortized_payment(balance, rate, remaining)
    else:
        payment = amortized_payment(balance, config.bank_rate, remaining)

    if in_io_window:
        interest = payment
    else:
        accrual_rate = rate if config.bank_type is BankLoanType.ARM else config.bank_rate
        interest = balance * monthly_rate_from_annual_pct(accrual_rate)
    principal_portion = max(payment - interest, 0.0)

    reduction = min(principal_portion + config.prepay.amount_for_month(month), balance)
    return payment, interest, principal_portion, max(balance - reduction, 0.0), rate


# =============================================================================
# Month Step
# =============================================================================

def advance_month(
        config: LoanConfiguration,
        setup: ScheduleSetup,
        state: ScheduleState,
        month: int
) -> tuple[MonthlyRow, ScheduleState]:
    """
    Project one month: bank leg, PMI, family leg, reinvestment pot, carrying
    costs, escrow and the household adjustment.

    Returns the emitted row and the state for the next month. Internal figures
    keep full precision; only the row is rounded.
    """
    year = math.ceil(month / 12)
    tax = setup.tax_monthly_base * (1 + config.tax_inflation_pct / 100) ** (year - 1)
    insurance = setup.insurance_monthly_base * (1 + config.insurance_inflation_pct / 100) ** (year - 1)

    bank_payment, bank_interest, bank_principal, bank_balance, bank_rate = _bank_leg(
        config, setup, month, state.bank_balance, state.bank_rate
    )

    # PMI never comes back once dropped
    pmi_active = state.pmi_active
    if pmi_active:
        ltv = bank_balance / config.price
        if ltv <= config.pmi.drop_ltv or bank_balance <= 0:
            pmi_active = False
    pmi = setup.pmi_monthly_base if pmi_active else 0.0

    family = config.family
    family_balance = state.family_balance
    family_payment = family_interest = family_principal = 0.0
    family_active = family_balance > 0 and (
        family.mode is FamilyLoanMode.INTEREST_ONLY or month <= family.term_months
    )
    if family_active:
        family_interest = family_balance * family.monthly_rate
        if family.mode is FamilyLoanMode.INTEREST_ONLY:
            family_payment = family_interest
        else:
            family_payment = setup.family_monthly
            family_principal = min(max(family_payment - family_interest, 0.0), family_balance)
            family_balance -= family_principal

    # earnings accrue on the pot before this month's deposit
    r_reinvest = monthly_rate_from_annual_pct(family.reinvest_annual_pct)
    reinvest_earnings = state.reinvest_balance * r_reinvest
    reinvest_balance = state.reinvest_balance * (1 + r_reinvest) + family_payment

    escrow = tax + insurance if config.escrow else 0.0

    alt_after_tax = family_balance * monthly_rate_from_annual_pct(family.alt_annual_pct) * (1 - family.alt_tax_pct / 100)
    household_delta = alt_after_tax - family_interest - reinvest_earnings

    components = [
        round(bank_payment, 2),
        round(family_payment, 2),
        round(pmi, 2),
        round(escrow, 2),
        round(config.hoa_monthly, 2),
        round(setup.maintenance_monthly, 2),
        round(config.utilities_monthly, 2),
    ]
    total_monthly = round(sum(components), 2)
    delta = round(household_delta, 2)

    row = MonthlyRow(
        month=month,
        year=year,
        bank_payment=components[0],
        bank_interest=round(bank_interest, 2),
        bank_principal=round(bank_principal, 2),
        bank_balance=round(max(bank_balance, 0.0), 2),
        bank_rate=round(bank_rate, 4),
        family_payment=components[1],
        family_interest=round(family_interest, 2),
        family_principal=round(family_principal, 2),
        family_balance=round(max(family_balance, 0.0), 2),
        pmi=components[2],
        pmi_active=pmi_active,
        tax=round(tax, 2),
        insurance=round(insurance, 2),
        hoa=components[4],
        maintenance=components[5],
        utilities=components[6],
        escrow=components[3],
        total_monthly=total_monthly,
        household_delta=delta,
        household_monthly=round(total_monthly + delta, 2),
        equity=round(config.price - bank_balance - family_balance, 2),
        total_interest=round(bank_interest + family_interest, 2),
        total_principal=round(bank_principal + family_principal, 2),
    )
    next_state = replace(
        state,
        bank_balance=bank_balance,
        family_balance=family_balance,
        bank_rate=bank_rate,
        pmi_active=pmi_active,
        cum_family_interest=state.cum_family_interest + family_interest,
        reinvest_balance=reinvest_balance,
        cum_reinvest_earnings=state.cum_reinvest_earnings + reinvest_earnings,
    )
    return row, next_state


def build_monthly_rows(config: LoanConfiguration) -> tuple[list[MonthlyRow], ScheduleState]:
    """
    Fold advance_month over months 1..horizon_months.

    Returns:
        (rows, final_state)
    """
    setup, state = prepare_schedule(config)
    rows: list[MonthlyRow] = []
    for month in range(1, config.horizon_months + 1):
        row, state = advance_month(config, setup, state, month)
        rows.append(row)
    logger.debug(
        "Projected %d months: bank principal %.2f, family principal %.2f",
        len(rows), setup.principal_bank, config.family.amount,
    )
    return rows, state
