"""Domain model entities for huvudbok.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Rows read from the store are translated into these types
by the mapper layer, so the ledger code never handles untyped data.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

ZERO = Decimal("0")

# Tolerance for debit/credit and balance-sheet comparisons, in SEK.
BALANCE_TOLERANCE = Decimal("0.01")

# Smallest unit an amount can be booked in (one öre); the store keeps two decimals
ORE = Decimal("0.01")


class AccountClass(str, Enum):
    """Account class derived from the first digits of a BAS account number."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"
    OTHER = "other"


class AccountType(str, Enum):
    """Finer account grouping derived from the first two digits."""

    FIXED_ASSET = "fixed_asset"
    CURRENT_ASSET = "current_asset"
    CASH_AND_PLACEMENTS = "cash_and_placements"
    EQUITY = "equity"
    LONG_TERM_LIABILITY = "long_term_liability"
    SHORT_TERM_LIABILITY = "short_term_liability"
    SALES_REVENUE = "sales_revenue"
    OTHER_OPERATING_REVENUE = "other_operating_revenue"
    GOODS_AND_MATERIALS = "goods_and_materials"
    OTHER_EXTERNAL_COSTS = "other_external_costs"
    PERSONNEL_COSTS = "personnel_costs"
    DEPRECIATION = "depreciation"
    FINANCIAL_ITEMS = "financial_items"
    OTHER = "other"


class StatusVariant(str, Enum):
    """Display variant attached to a status bucket."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"
    NEUTRAL = "neutral"
    VIOLET = "violet"
    PURPLE = "purple"


class DocumentKind(str, Enum):
    """Kinds of status-bearing documents kept next to the ledger."""

    TRANSACTION = "transaction"
    CUSTOMER_INVOICE = "customer_invoice"
    SUPPLIER_INVOICE = "supplier_invoice"
    RECEIPT = "receipt"
    PAYSLIP = "payslip"
    VAT_REPORT = "vat_report"


@dataclass(frozen=True)
class AccountClassification:
    """Result of classifying an account number."""

    account_class: AccountClass
    account_type: AccountType


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry (BAS kontoplan)."""

    id: int
    account_number: str
    name: str
    vat_rate: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class VerificationRow:
    """One debit or credit line of a verification."""

    account: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: Optional[str] = None


@dataclass(frozen=True)
class Verification:
    """Persisted journal entry (verifikation)."""

    id: int
    series: str
    number: int
    date: date
    description: str
    rows: tuple[VerificationRow, ...]
    created_at: datetime
    reverses_id: Optional[int] = None

    @property
    def reference(self) -> str:
        """Series and number, e.g. 'A12'."""
        return f"{self.series}{self.number}"


@dataclass(frozen=True)
class LedgerRow:
    """A verification row flattened together with its verification date."""

    account_number: str
    date: date
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    verification_id: Optional[int] = None


@dataclass(frozen=True)
class BalanceCheck:
    """Outcome of comparing the debit and credit totals of a set of rows."""

    balanced: bool
    total_debit: Decimal
    total_credit: Decimal
    difference: Decimal


@dataclass(frozen=True)
class VerificationCheck:
    """Full validation outcome for a verification draft."""

    balance: BalanceCheck
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class AccountBalance:
    """Raw ledger balance (debit minus credit) of one account over a period."""

    account_number: str
    balance: Decimal
    start_date: Optional[date]
    end_date: Optional[date]


@dataclass(frozen=True)
class ReportLine:
    """Presentation row of a financial statement."""

    label: str
    value: Decimal
    is_total: bool = False
    is_header: bool = False
    level: int = 0
    # Set on per-account detail lines
    account_number: Optional[str] = None


@dataclass(frozen=True)
class IncomeStatement:
    """Resultaträkning for one calendar year."""

    year: int
    lines: tuple[ReportLine, ...]
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balansräkning as of a date.

    The balance-sheet identity is reported through ``is_balanced`` and
    ``difference``; the totals are never adjusted to make it hold.
    """

    as_of: date
    lines: tuple[ReportLine, ...]
    total_assets: Decimal
    total_equity_and_liabilities: Decimal

    @property
    def difference(self) -> Decimal:
        return self.total_assets - self.total_equity_and_liabilities

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) < BALANCE_TOLERANCE


@dataclass(frozen=True)
class Company:
    """Company settings used for export headers."""

    name: str
    org_number: Optional[str]
    fiscal_year_start_month: int = 1
    contact: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None

    @property
    def has_address(self) -> bool:
        return any((self.contact, self.address, self.postal_code, self.city, self.phone))


@dataclass(frozen=True)
class Document:
    """Status-bearing business document (invoice, receipt, payslip, ...)."""

    id: int
    kind: DocumentKind
    date: date
    amount: Optional[Decimal]
    description: Optional[str]
    status: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class StatusBreakdown:
    """Count of items sharing one status."""

    status: str
    count: int
    variant: StatusVariant


@dataclass(frozen=True)
class ReviewSection:
    """One non-empty source in the monthly review."""

    kind: str
    label: str
    total_count: int
    status_breakdown: tuple[StatusBreakdown, ...] = ()


@dataclass(frozen=True)
class FinancialSummary:
    """Revenue, expenses and result for a period."""

    revenue: Decimal
    expenses: Decimal
    result: Decimal


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one query in a parallel fan-out: a value or an error."""

    source: str
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MonthlyReview:
    """Month overview: financial summary plus status sections.

    ``failed_sources`` names every query that failed, so a partial review is
    never mistaken for a complete one.
    """

    year: int
    month: int
    financial: FinancialSummary
    sections: tuple[ReviewSection, ...]
    failed_sources: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_sources)
