"""Monthly review: concurrent fan-out over independent month queries."""

from concurrent.futures import ThreadPoolExecutor, wait
from datetime import date
from typing import Any, Callable, Optional

import structlog

from huvudbok.database.base import Database
from huvudbok.domain import errors
from huvudbok.domain.balances import aggregate, sum_range
from huvudbok.domain.entities import (
    ZERO,
    DocumentKind,
    FinancialSummary,
    MonthlyReview,
    QueryOutcome,
    ReviewSection,
)
from huvudbok.domain.status import STATUS_VARIANTS_BY_KIND, group_by_status
from huvudbok.utils.date_parser import month_range

logger = structlog.get_logger(__name__)

DEFAULT_MAX_WORKERS = 8

SECTION_LABELS: dict[DocumentKind, str] = {
    DocumentKind.TRANSACTION: "Transaktioner",
    DocumentKind.CUSTOMER_INVOICE: "Kundfakturor",
    DocumentKind.SUPPLIER_INVOICE: "Leverantörsfakturor",
    DocumentKind.RECEIPT: "Kvitton",
    DocumentKind.PAYSLIP: "Lönespecifikationer",
    DocumentKind.VAT_REPORT: "Momsrapporter",
}

VERIFICATIONS_SOURCE = "verifications"
VERIFICATIONS_LABEL = "Verifikationer"
BALANCES_SOURCE = "balances"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    try:
        return month_range(year, month)
    except ValueError as e:
        raise errors.ValidationError(str(e)) from e


def fan_out(
    queries: dict[str, Callable[[], Any]], max_workers: int = DEFAULT_MAX_WORKERS
) -> dict[str, QueryOutcome]:
    """Run independent queries concurrently and wait for all of them.

    A failing query does not cancel the others; its exception is kept in
    the returned outcome.

    Args:
        queries: Source name to zero-argument callable
        max_workers: Upper bound on concurrent queries

    Returns:
        Source name to QueryOutcome, in the order of ``queries``
    """
    if not queries:
        return {}

    workers = max(1, min(max_workers, len(queries)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {source: executor.submit(query) for source, query in queries.items()}
        wait(futures.values())

    outcomes: dict[str, QueryOutcome] = {}
    for source, future in futures.items():
        error = future.exception()
        if error is not None:
            outcomes[source] = QueryOutcome(source=source, error=error)
        else:
            outcomes[source] = QueryOutcome(source=source, value=future.result())
    return outcomes


class MonthlyReviewService:
    """Builds the month-end review dashboard data."""

    def __init__(self, db: Database, max_workers: int = DEFAULT_MAX_WORKERS):
        """Initialize monthly review service.

        Args:
            db: Database instance; its list/count reads must be thread-safe
            max_workers: Thread pool size for the fan-out
        """
        self.db = db
        self.max_workers = max_workers
        self._logger = logger.bind(component="monthly_review")

    def _queries(self, start: date, end: date) -> dict[str, Callable[[], Any]]:
        queries: dict[str, Callable[[], Any]] = {}
        for kind in SECTION_LABELS:
            queries[kind.value] = (
                lambda kind=kind: self.db.list_documents(kind=kind, start_date=start, end_date=end)
            )
        queries[VERIFICATIONS_SOURCE] = lambda: self.db.count_verifications(start, end)
        queries[BALANCES_SOURCE] = lambda: aggregate(self.db.list_ledger_rows(start, end))
        return queries

    def build_review(self, year: int, month: int) -> MonthlyReview:
        """Collect document statuses, verification count and result for a month.

        Sources that fail are listed in ``failed_sources`` and contribute
        nothing; the review is then partial rather than silently zero.

        Raises:
            ValidationError: If month is outside 1-12
        """
        start, end = month_bounds(year, month)
        outcomes = fan_out(self._queries(start, end), self.max_workers)

        failed: list[str] = []
        for outcome in outcomes.values():
            if not outcome.ok:
                failed.append(outcome.source)
                self._logger.error(
                    "review_source_failed",
                    source=outcome.source,
                    error=str(outcome.error),
                    year=year,
                    month=month,
                )

        sections: list[ReviewSection] = []
        for kind, label in SECTION_LABELS.items():
            outcome = outcomes[kind.value]
            if not outcome.ok or not outcome.value:
                continue
            breakdown = group_by_status(outcome.value, "status", STATUS_VARIANTS_BY_KIND[kind])
            sections.append(
                ReviewSection(
                    kind=kind.value,
                    label=label,
                    total_count=len(outcome.value),
                    status_breakdown=tuple(breakdown),
                )
            )

        verifications = outcomes[VERIFICATIONS_SOURCE]
        if verifications.ok and verifications.value:
            sections.append(
                ReviewSection(
                    kind=VERIFICATIONS_SOURCE,
                    label=VERIFICATIONS_LABEL,
                    total_count=verifications.value,
                )
            )

        balances = outcomes[BALANCES_SOURCE]
        financial = self._financial_summary(balances.value if balances.ok else None)

        review = MonthlyReview(
            year=year,
            month=month,
            financial=financial,
            sections=tuple(sections),
            failed_sources=tuple(failed),
        )
        self._logger.info(
            "monthly_review_built",
            year=year,
            month=month,
            sections=len(sections),
            failed_sources=len(failed),
        )
        return review

    @staticmethod
    def _financial_summary(balances: Optional[dict]) -> FinancialSummary:
        if not balances:
            return FinancialSummary(revenue=ZERO, expenses=ZERO, result=ZERO)
        revenue = abs(sum_range(balances, 3000, 3999))
        expenses = sum_range(balances, 4000, 8999)
        return FinancialSummary(revenue=revenue, expenses=expenses, result=revenue - expenses)
