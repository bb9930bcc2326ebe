# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from mortgage_scenarios.schedule import MonthlyRow

# Header name -> MonthlyRow attribute, in export order
SCHEDULE_COLUMNS: dict[str, str] = {
    "Month": "month",
    "BankPayment": "bank_payment",
    "BankInterest": "bank_interest",
    "BankPrincipal": "bank_principal",
    "BankBalance": "bank_balance",
    "FamilyPayment": "family_payment",
    "FamilyInterest": "family_interest",
    "FamilyPrincipal": "family_principal",
    "FamilyBalance": "family_balance",
    "PMI": "pmi",
    "Tax": "tax",
    "Insurance": "insurance",
    "HOA": "hoa",
    "Maintenance": "maintenance",
    "Utilities": "utilities",
    "Escrow": "escrow",
    "TotalMonthly": "total_monthly",
    "HouseholdMonthly": "household_monthly",
    "Equity": "equity",
}


def _write_rows(rows: Iterable[MonthlyRow], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(SCHEDULE_COLUMNS)
    for row in rows:
        writer.writerow([getattr(row, attr) for attr in SCHEDULE_COLUMNS.values()])


def schedule_to_csv(rows: Iterable[MonthlyRow], dest: str | Path | TextIO | None = None) -> str | None:
    """
    Write monthly rows as comma-delimited text with a header line.

    Args:
        rows: MonthlyRow sequence, e.g. ScheduleResult.rows
        dest: File path, open text stream, or None

    Returns:
        The CSV text when dest is None, otherwise None
    """
    if dest is None:
        buf = io.StringIO()
        _write_rows(rows, buf)
        return buf.getvalue()
    if isinstance(dest, (str, Path)):
        with open(dest, "w", encoding="utf-8", newline="") as f:
            _write_rows(rows, f)
        return None
    _write_rows(rows, dest)
    return None


def schedule_filename(scenario_name: str) -> str:
    """Export file name for a scenario: whitespace runs become underscores."""
    stem = re.sub(r"\s+", "_", scenario_name or "Scenario")
    return f"{stem}_schedule.csv"
