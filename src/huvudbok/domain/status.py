"""Status catalogue and status grouping for dashboard views."""

from collections.abc import Mapping
from typing import Any, Iterable, Optional

from huvudbok.domain.entities import DocumentKind, StatusBreakdown, StatusVariant

DEFAULT_STATUS = "Okänd"

TRANSACTION_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "Att bokföra": StatusVariant.WARNING,
    "Bokförd": StatusVariant.SUCCESS,
    "Saknar underlag": StatusVariant.ERROR,
    "Ignorerad": StatusVariant.NEUTRAL,
}

INVOICE_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "Utkast": StatusVariant.NEUTRAL,
    "Skickad": StatusVariant.INFO,
    "Betald": StatusVariant.SUCCESS,
    "Förfallen": StatusVariant.ERROR,
    "Makulerad": StatusVariant.NEUTRAL,
    "Bokförd": StatusVariant.VIOLET,
    "Mottagen": StatusVariant.INFO,
}

SUPPLIER_INVOICE_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "Mottagen": StatusVariant.VIOLET,
    "Attesterad": StatusVariant.WARNING,
    "Betald": StatusVariant.SUCCESS,
    "Förfallen": StatusVariant.ERROR,
    "Tvist": StatusVariant.PURPLE,
    "Bokförd": StatusVariant.VIOLET,
}

RECEIPT_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "Väntar": StatusVariant.WARNING,
    "Bearbetar": StatusVariant.NEUTRAL,
    "Granskning krävs": StatusVariant.ERROR,
    "Verifierad": StatusVariant.SUCCESS,
    "Behandlad": StatusVariant.SUCCESS,
    "Matchad": StatusVariant.SUCCESS,
    "Avvisad": StatusVariant.ERROR,
    "Bokförd": StatusVariant.VIOLET,
}

PAYSLIP_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "draft": StatusVariant.NEUTRAL,
    "pending": StatusVariant.WARNING,
    "sent": StatusVariant.SUCCESS,
    "paid": StatusVariant.SUCCESS,
}

VAT_REPORT_STATUS_VARIANTS: dict[str, StatusVariant] = {
    "draft": StatusVariant.NEUTRAL,
    "pending": StatusVariant.WARNING,
    "submitted": StatusVariant.SUCCESS,
}

STATUS_VARIANTS_BY_KIND: dict[DocumentKind, dict[str, StatusVariant]] = {
    DocumentKind.TRANSACTION: TRANSACTION_STATUS_VARIANTS,
    DocumentKind.CUSTOMER_INVOICE: INVOICE_STATUS_VARIANTS,
    DocumentKind.SUPPLIER_INVOICE: SUPPLIER_INVOICE_STATUS_VARIANTS,
    DocumentKind.RECEIPT: RECEIPT_STATUS_VARIANTS,
    DocumentKind.PAYSLIP: PAYSLIP_STATUS_VARIANTS,
    DocumentKind.VAT_REPORT: VAT_REPORT_STATUS_VARIANTS,
}

# Status a new document starts in
INITIAL_STATUS: dict[DocumentKind, str] = {
    DocumentKind.TRANSACTION: "Att bokföra",
    DocumentKind.CUSTOMER_INVOICE: "Utkast",
    DocumentKind.SUPPLIER_INVOICE: "Mottagen",
    DocumentKind.RECEIPT: "Väntar",
    DocumentKind.PAYSLIP: "draft",
    DocumentKind.VAT_REPORT: "draft",
}

ALL_STATUS_VARIANTS: dict[str, StatusVariant] = {}
for _variants in STATUS_VARIANTS_BY_KIND.values():
    ALL_STATUS_VARIANTS.update(_variants)


def status_variant(status: str) -> StatusVariant:
    """Get the display variant for any known status, neutral otherwise."""
    return ALL_STATUS_VARIANTS.get(status, StatusVariant.NEUTRAL)


def known_statuses(kind: DocumentKind) -> tuple[str, ...]:
    """Statuses a document of the given kind may take."""
    return tuple(STATUS_VARIANTS_BY_KIND[kind])


def _read_field(item: Any, field_name: str) -> Optional[Any]:
    if isinstance(item, Mapping):
        return item.get(field_name)
    return getattr(item, field_name, None)


def group_by_status(
    items: Iterable[Any],
    status_field: str,
    variant_map: Mapping[str, StatusVariant],
    default_status: str = DEFAULT_STATUS,
) -> list[StatusBreakdown]:
    """Count items per distinct status value.

    Items may be mappings or objects exposing ``status_field`` as an
    attribute. Empty or missing statuses are counted as ``default_status``.

    Args:
        items: Items to group; not modified
        status_field: Name of the status key or attribute
        variant_map: Status to variant lookup
        default_status: Bucket for items without a status

    Returns:
        One StatusBreakdown per status, in order of first occurrence;
        statuses absent from ``variant_map`` get the neutral variant
    """
    counts: dict[str, int] = {}
    for item in items:
        status = _read_field(item, status_field) or default_status
        counts[status] = counts.get(status, 0) + 1

    return [
        StatusBreakdown(
            status=status,
            count=count,
            variant=StatusVariant(variant_map.get(status, StatusVariant.NEUTRAL)),
        )
        for status, count in counts.items()
    ]
