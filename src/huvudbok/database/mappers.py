"""Mapper functions to convert between domain models and SQLAlchemy models.

This is the typed boundary of the application: nothing above this layer
sees an ORM row.
"""

from decimal import Decimal

from huvudbok.domain import entities as domain
from huvudbok.database.models import (
    Company as ORMCompany,
    Document as ORMDocument,
    LedgerAccount as ORMLedgerAccount,
    Verification as ORMVerification,
    VerificationRow as ORMVerificationRow,
)


def _amount(value) -> Decimal:
    if value is None:
        return domain.ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        name=orm_company.name,
        org_number=orm_company.org_number,
        fiscal_year_start_month=orm_company.fiscal_year_start_month,
        contact=orm_company.contact,
        address=orm_company.address,
        postal_code=orm_company.postal_code,
        city=orm_company.city,
        phone=orm_company.phone,
    )


def account_to_domain(orm_account: ORMLedgerAccount) -> domain.Account:
    """Convert SQLAlchemy LedgerAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        account_number=orm_account.account_number,
        name=orm_account.name,
        vat_rate=orm_account.vat_rate,
        created_at=orm_account.created_at,
    )


def verification_row_to_domain(orm_row: ORMVerificationRow) -> domain.VerificationRow:
    """Convert SQLAlchemy VerificationRow model to domain VerificationRow."""
    return domain.VerificationRow(
        account=orm_row.account_number,
        debit=_amount(orm_row.debit),
        credit=_amount(orm_row.credit),
        description=orm_row.description,
    )


def verification_to_domain(orm_verification: ORMVerification) -> domain.Verification:
    """Convert SQLAlchemy Verification model (with rows) to domain entity."""
    return domain.Verification(
        id=orm_verification.id,
        series=orm_verification.series,
        number=orm_verification.number,
        date=orm_verification.date,
        description=orm_verification.description,
        rows=tuple(verification_row_to_domain(row) for row in orm_verification.rows),
        created_at=orm_verification.created_at,
        reverses_id=orm_verification.reverses_id,
    )


def ledger_row_to_domain(
    orm_row: ORMVerificationRow, orm_verification: ORMVerification
) -> domain.LedgerRow:
    """Flatten a verification row and its parent date into a LedgerRow."""
    return domain.LedgerRow(
        account_number=orm_row.account_number,
        date=orm_verification.date,
        debit=_amount(orm_row.debit),
        credit=_amount(orm_row.credit),
        verification_id=orm_verification.id,
    )


def document_to_domain(orm_document: ORMDocument) -> domain.Document:
    """Convert SQLAlchemy Document model to domain Document entity."""
    return domain.Document(
        id=orm_document.id,
        kind=domain.DocumentKind(orm_document.kind),
        date=orm_document.date,
        amount=None if orm_document.amount is None else _amount(orm_document.amount),
        description=orm_document.description,
        status=orm_document.status,
        created_at=orm_document.created_at,
    )
