"""Financial statement derivation (K2 layout).

Statements are folded from raw account balances. Every income-statement line
contributes ``-raw`` to the result, so revenue (credit balances) adds and
costs subtract; totals are running subtotals of all preceding item lines.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Mapping, NamedTuple, Optional

import structlog

from huvudbok.database.base import Database
from huvudbok.domain.balances import aggregate, ledger_rows, sum_range
from huvudbok.domain.classifier import classify_type
from huvudbok.domain.entities import (
    ZERO,
    AccountType,
    BalanceSheet,
    IncomeStatement,
    ReportLine,
    Verification,
)
from huvudbok.utils.date_parser import year_range

logger = structlog.get_logger(__name__)

HEADER = "header"
ITEM = "item"
TOTAL = "total"


class _IncomeLine(NamedTuple):
    kind: str
    label: str
    low: int = 0
    high: int = 0
    # +1 shows the raw balance (costs as positive magnitudes), -1 negates it
    sign: int = 1


INCOME_STATEMENT_LAYOUT: tuple[_IncomeLine, ...] = (
    _IncomeLine(HEADER, "Rörelsens intäkter"),
    _IncomeLine(ITEM, "Nettoomsättning", 3000, 3999, -1),
    _IncomeLine(HEADER, "Rörelsens kostnader"),
    _IncomeLine(ITEM, "Råvaror och förnödenheter", 4000, 4999),
    _IncomeLine(ITEM, "Övriga externa kostnader", 5000, 6999),
    _IncomeLine(ITEM, "Personalkostnader", 7000, 7699),
    _IncomeLine(ITEM, "Av- och nedskrivningar", 7700, 7899),
    _IncomeLine(ITEM, "Övriga rörelsekostnader", 7900, 7999),
    _IncomeLine(TOTAL, "Rörelseresultat"),
    _IncomeLine(ITEM, "Finansiella poster", 8000, 8799, -1),
    _IncomeLine(TOTAL, "Resultat efter finansiella poster"),
    _IncomeLine(ITEM, "Bokslutsdispositioner", 8800, 8899, -1),
    _IncomeLine(TOTAL, "Resultat före skatt"),
    _IncomeLine(ITEM, "Skatt på årets resultat", 8900, 8989),
    _IncomeLine(TOTAL, "Årets resultat"),
)

ASSET_LINES: tuple[tuple[str, AccountType], ...] = (
    ("Anläggningstillgångar", AccountType.FIXED_ASSET),
    ("Omsättningstillgångar", AccountType.CURRENT_ASSET),
    ("Kassa och bank", AccountType.CASH_AND_PLACEMENTS),
)

LIABILITY_LINES: tuple[tuple[str, AccountType], ...] = (
    ("Långfristiga skulder", AccountType.LONG_TERM_LIABILITY),
    ("Kortfristiga skulder", AccountType.SHORT_TERM_LIABILITY),
)

BALANCE_SHEET_TYPES = frozenset(
    [account_type for _, account_type in ASSET_LINES]
    + [AccountType.EQUITY]
    + [account_type for _, account_type in LIABILITY_LINES]
)

# Result accounts: revenue, costs, financial items, appropriations, tax and
# the 8999 closing account
RESULT_RANGE = (3000, 8999)

# Account detail lines at or below this magnitude are not shown
DETAIL_THRESHOLD = Decimal("0.01")


def _in_range(account_number: str, low: int, high: int) -> bool:
    return account_number.isdigit() and low <= int(account_number) <= high


def account_label(account_number: str, account_names: Mapping[str, str]) -> str:
    """Label for an account detail line, e.g. ``1930 Företagskonto``."""
    name = account_names.get(account_number) or f"Konto {account_number}"
    return f"{account_number} {name}"


def detail_lines(
    balances: Mapping[str, Decimal],
    include: Callable[[str], bool],
    sign: int,
    account_names: Mapping[str, str],
) -> list[ReportLine]:
    """Per-account lines for the accounts ``include`` selects, by number."""
    lines = []
    for account_number in sorted(balances):
        balance = balances[account_number]
        if not include(account_number) or abs(balance) <= DETAIL_THRESHOLD:
            continue
        lines.append(
            ReportLine(
                label=account_label(account_number, account_names),
                value=sign * balance,
                level=2,
                account_number=account_number,
            )
        )
    return lines


def build_income_statement(
    balances: dict[str, Decimal],
    year: int,
    account_names: Optional[Mapping[str, str]] = None,
) -> IncomeStatement:
    """Fold raw balances into income-statement lines.

    Each item line is followed by one detail line per account in its range.
    """
    account_names = account_names or {}
    lines: list[ReportLine] = []
    result = ZERO

    for item in INCOME_STATEMENT_LAYOUT:
        if item.kind == HEADER:
            lines.append(ReportLine(label=item.label, value=ZERO, is_header=True))
        elif item.kind == TOTAL:
            lines.append(ReportLine(label=item.label, value=result, is_total=True))
        else:
            raw = sum_range(balances, item.low, item.high)
            result -= raw
            lines.append(ReportLine(label=item.label, value=item.sign * raw, level=1))
            lines.extend(
                detail_lines(
                    balances,
                    lambda number, item=item: _in_range(number, item.low, item.high),
                    item.sign,
                    account_names,
                )
            )

    return IncomeStatement(year=year, lines=tuple(lines), net_income=result)


def sum_type(balances: dict[str, Decimal], account_type: AccountType) -> Decimal:
    """Sum raw balances of all accounts of one type."""
    return sum(
        (
            balance
            for account_number, balance in balances.items()
            if classify_type(account_number) == account_type
        ),
        ZERO,
    )


def is_unassigned(account_number: str) -> bool:
    """True for accounts outside both the balance-sheet types and the result range."""
    return (
        classify_type(account_number) not in BALANCE_SHEET_TYPES
        and not _in_range(account_number, *RESULT_RANGE)
    )


def build_balance_sheet(
    balances: dict[str, Decimal],
    as_of: date,
    account_names: Optional[Mapping[str, str]] = None,
) -> BalanceSheet:
    """Fold raw cumulative balances into balance-sheet lines.

    Unclosed result accounts are carried as "Årets resultat" under equity,
    which is what makes the identity hold before closing entries are booked.
    Balances on accounts that fit neither side of the chart are carried as
    "Övriga konton" so that no booked amount drops out of the totals.
    """
    account_names = account_names or {}
    lines: list[ReportLine] = [ReportLine(label="Tillgångar", value=ZERO, is_header=True)]

    def of_type(account_type: AccountType) -> Callable[[str], bool]:
        return lambda number: classify_type(number) == account_type

    total_assets = ZERO
    for label, account_type in ASSET_LINES:
        value = sum_type(balances, account_type)
        total_assets += value
        lines.append(ReportLine(label=label, value=value, level=1))
        lines.extend(detail_lines(balances, of_type(account_type), 1, account_names))
    lines.append(ReportLine(label="Summa tillgångar", value=total_assets, is_total=True))

    lines.append(ReportLine(label="Eget kapital och skulder", value=ZERO, is_header=True))
    equity = -sum_type(balances, AccountType.EQUITY)
    unclosed_result = -sum_range(balances, *RESULT_RANGE)
    lines.append(ReportLine(label="Eget kapital", value=equity, level=1))
    lines.extend(detail_lines(balances, of_type(AccountType.EQUITY), -1, account_names))
    lines.append(ReportLine(label="Årets resultat", value=unclosed_result, level=1))

    total_equity_and_liabilities = equity + unclosed_result
    for label, account_type in LIABILITY_LINES:
        value = -sum_type(balances, account_type)
        total_equity_and_liabilities += value
        lines.append(ReportLine(label=label, value=value, level=1))
        lines.extend(detail_lines(balances, of_type(account_type), -1, account_names))

    unassigned = -sum(
        (balance for number, balance in balances.items() if is_unassigned(number)), ZERO
    )
    if unassigned:
        total_equity_and_liabilities += unassigned
        lines.append(ReportLine(label="Övriga konton", value=unassigned, level=1))
        lines.extend(detail_lines(balances, is_unassigned, -1, account_names))

    lines.append(
        ReportLine(
            label="Summa eget kapital och skulder",
            value=total_equity_and_liabilities,
            is_total=True,
        )
    )

    return BalanceSheet(
        as_of=as_of,
        lines=tuple(lines),
        total_assets=total_assets,
        total_equity_and_liabilities=total_equity_and_liabilities,
    )


def calculate_income_statement(
    verifications: Iterable[Verification],
    year: int,
    account_names: Optional[Mapping[str, str]] = None,
) -> IncomeStatement:
    """Derive the income statement for a calendar year.

    Args:
        verifications: Booked verifications; rows outside the year are ignored
        year: Calendar year
        account_names: Chart names for the account detail lines

    Returns:
        IncomeStatement with K2-ordered lines
    """
    start, end = year_range(year)
    balances = aggregate(ledger_rows(verifications), start, end)
    return build_income_statement(balances, year, account_names)


def calculate_balance_sheet(
    verifications: Iterable[Verification],
    as_of: date,
    account_names: Optional[Mapping[str, str]] = None,
) -> BalanceSheet:
    """Derive the balance sheet from all verifications up to ``as_of``.

    An unbalanced input set yields ``is_balanced == False`` with the
    mismatch in ``difference``; nothing is corrected.
    """
    balances = aggregate(ledger_rows(verifications), None, as_of)
    return build_balance_sheet(balances, as_of, account_names)


class ReportService:
    """Service for producing financial statements from the ledger."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self._logger = logger.bind(component="report_service")

    def _account_names(self) -> dict[str, str]:
        return {account.account_number: account.name for account in self.db.list_accounts()}

    def income_statement(self, year: int) -> IncomeStatement:
        """Build the income statement for a calendar year."""
        start, end = year_range(year)
        rows = self.db.list_ledger_rows(start_date=start, end_date=end)
        return build_income_statement(aggregate(rows, start, end), year, self._account_names())

    def balance_sheet(self, as_of: Optional[date] = None) -> BalanceSheet:
        """Build the balance sheet as of a date (defaults to today)."""
        as_of = as_of or date.today()
        rows = self.db.list_ledger_rows(end_date=as_of)
        sheet = build_balance_sheet(aggregate(rows, None, as_of), as_of, self._account_names())
        if not sheet.is_balanced:
            self._logger.warning(
                "balance_sheet_mismatch",
                as_of=as_of.isoformat(),
                total_assets=str(sheet.total_assets),
                total_equity_and_liabilities=str(sheet.total_equity_and_liabilities),
                difference=str(sheet.difference),
            )
        return sheet
