"""Verification validation.

``validate`` is the plain debit/credit balance check. ``check_verification``
applies the full set of bookkeeping rules to a draft before it is booked.
Neither raises; callers decide what a failed check blocks.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from huvudbok.domain.classifier import is_bas_number
from huvudbok.domain.entities import (
    BALANCE_TOLERANCE,
    ORE,
    ZERO,
    BalanceCheck,
    VerificationCheck,
    VerificationRow,
)


def to_amount(value: Any) -> Decimal:
    """Coerce an amount to Decimal; None counts as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise into Decimal
    return Decimal(str(value))


def is_whole_ore(amount: Decimal) -> bool:
    """True when an amount has no precision finer than one öre."""
    return amount.is_finite() and amount == amount.quantize(ORE)


def validate(rows: Iterable[VerificationRow]) -> BalanceCheck:
    """Compare debit and credit totals of a set of rows.

    Account validity and row count are not inspected.

    Args:
        rows: Verification rows; missing debit or credit counts as 0

    Returns:
        BalanceCheck with totals and the absolute difference
    """
    total_debit = ZERO
    total_credit = ZERO
    for row in rows:
        total_debit += to_amount(row.debit)
        total_credit += to_amount(row.credit)

    difference = abs(total_debit - total_credit)
    return BalanceCheck(
        balanced=difference < BALANCE_TOLERANCE,
        total_debit=total_debit,
        total_credit=total_credit,
        difference=difference,
    )


def check_verification(
    entry_date: Optional[date],
    description: Optional[str],
    rows: list[VerificationRow],
    known_accounts: Optional[set[str]] = None,
) -> VerificationCheck:
    """Check a verification draft against double-entry rules.

    Args:
        entry_date: Booking date
        description: Free-text narrative
        rows: Draft rows
        known_accounts: Account numbers in the chart; when given, rows on
            other accounts are errors

    Returns:
        VerificationCheck with errors, warnings and the balance check
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not rows:
        errors.append("A verification must have at least one row")

    balance = validate(rows)
    if rows and not balance.balanced:
        errors.append(
            f"Debit ({balance.total_debit:.2f}) and credit "
            f"({balance.total_credit:.2f}) do not balance, "
            f"difference {balance.difference:.2f}"
        )

    for index, row in enumerate(rows, start=1):
        debit = to_amount(row.debit)
        credit = to_amount(row.credit)
        if not is_bas_number(row.account):
            errors.append(f"Row {index}: invalid account number '{row.account}'")
        elif known_accounts is not None and row.account not in known_accounts:
            errors.append(f"Row {index}: account {row.account} is not in the chart of accounts")
        if debit < 0 or credit < 0:
            errors.append(f"Row {index}: amounts cannot be negative")
        if not (is_whole_ore(debit) and is_whole_ore(credit)):
            errors.append(f"Row {index}: amounts must be whole öre (at most two decimals)")
        if debit > 0 and credit > 0:
            errors.append(f"Row {index}: a row cannot have both debit and credit")
        if debit == 0 and credit == 0:
            warnings.append(f"Row {index}: row has neither debit nor credit")

    if entry_date is None:
        errors.append("Missing date")

    if not description or not description.strip():
        warnings.append("Missing description")

    return VerificationCheck(
        balance=balance,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
