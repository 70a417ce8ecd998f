"""Account balance aggregation.

All balances are kept in one canonical form, the raw ledger value
``sum(debit) - sum(credit)``. Assets and expenses are therefore positive on
debit, while liabilities, equity and revenue come out negative. The only
place a sign is flipped for display is ``natural_balance`` and the report
line processor.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from huvudbok.database.base import Database
from huvudbok.domain.classifier import is_debit_normal
from huvudbok.domain.entities import ZERO, AccountBalance, LedgerRow, Verification
from huvudbok.domain.validation import to_amount


def ledger_rows(verifications: Iterable[Verification]) -> list[LedgerRow]:
    """Flatten verifications into ledger rows carrying the verification date."""
    return [
        LedgerRow(
            account_number=row.account,
            date=verification.date,
            debit=to_amount(row.debit),
            credit=to_amount(row.credit),
            verification_id=verification.id,
        )
        for verification in verifications
        for row in verification.rows
    ]


def in_period(
    row_date: date, period_start: Optional[date], period_end: Optional[date]
) -> bool:
    """Return True if a date falls inside an inclusive, optionally open range."""
    if period_start is not None and row_date < period_start:
        return False
    if period_end is not None and row_date > period_end:
        return False
    return True


def aggregate(
    rows: Iterable[LedgerRow],
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> dict[str, Decimal]:
    """Sum raw balances per account over an inclusive date range.

    Args:
        rows: Ledger rows carrying their verification date
        period_start: First date to include, or None for no lower bound
        period_end: Last date to include, or None for no upper bound

    Returns:
        Map of account number to ``sum(debit) - sum(credit)``, in the order
        accounts were first seen
    """
    balances: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for row in rows:
        if not in_period(row.date, period_start, period_end):
            continue
        balances[row.account_number] += to_amount(row.debit) - to_amount(row.credit)
    return dict(balances)


def natural_balance(account_number: str, raw_balance: Decimal) -> Decimal:
    """Present a raw balance positive on the account's normal side."""
    if is_debit_normal(account_number):
        return raw_balance
    return -raw_balance


def sum_range(balances: dict[str, Decimal], low: int, high: int) -> Decimal:
    """Sum raw balances of accounts numbered ``low`` to ``high`` inclusive."""
    total = ZERO
    for account_number, balance in balances.items():
        if not account_number.isdigit():
            continue
        if low <= int(account_number) <= high:
            total += balance
    return total


class BalanceService:
    """Service for reading account balances from the ledger."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def account_balances(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_zero: bool = False,
    ) -> list[AccountBalance]:
        """Get per-account raw balances for a period.

        Args:
            start_date: Optional start date (inclusive)
            end_date: Optional end date (inclusive)
            include_zero: If True, keep accounts whose movements cancel out

        Returns:
            AccountBalance entries sorted by account number
        """
        rows = self.db.list_ledger_rows(start_date=start_date, end_date=end_date)
        balances = aggregate(rows, start_date, end_date)
        return [
            AccountBalance(
                account_number=account_number,
                balance=balance,
                start_date=start_date,
                end_date=end_date,
            )
            for account_number, balance in sorted(balances.items())
            if include_zero or balance != 0
        ]

    def account_balance(
        self,
        account_number: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Get the raw balance of a single account."""
        rows = self.db.list_ledger_rows(
            start_date=start_date, end_date=end_date, account_number=account_number
        )
        return aggregate(rows, start_date, end_date).get(account_number, ZERO)
