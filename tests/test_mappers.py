"""Tests for ORM-to-domain mappers."""

from datetime import date, datetime
from decimal import Decimal

from huvudbok.database.mappers import (
    account_to_domain,
    document_to_domain,
    ledger_row_to_domain,
    verification_to_domain,
)
from huvudbok.database.models import (
    Document as ORMDocument,
    LedgerAccount as ORMLedgerAccount,
    Verification as ORMVerification,
    VerificationRow as ORMVerificationRow,
)
from huvudbok.domain.entities import Account, Document, DocumentKind, LedgerRow, Verification


def _orm_verification():
    verification = ORMVerification(
        id=7,
        series="A",
        number=3,
        date=date(2024, 1, 15),
        description="Försäljning",
        created_at=datetime(2024, 1, 15, 9, 0),
    )
    verification.rows = [
        ORMVerificationRow(position=0, account_number="1930", debit=Decimal("125.00"), credit=Decimal("0")),
        ORMVerificationRow(position=1, account_number="3001", debit=None, credit=125, description="Tjänst"),
    ]
    return verification


def test_account_to_domain():
    orm = ORMLedgerAccount(id=1, account_number="1930", name="Företagskonto", vat_rate=None, created_at=datetime(2024, 1, 1))

    account = account_to_domain(orm)

    assert isinstance(account, Account)
    assert account.account_number == "1930"
    assert account.name == "Företagskonto"


def test_verification_to_domain_converts_amounts():
    verification = verification_to_domain(_orm_verification())

    assert isinstance(verification, Verification)
    assert verification.reference == "A3"
    assert verification.rows[0].debit == Decimal("125.00")
    assert verification.rows[1].debit == Decimal("0")
    assert isinstance(verification.rows[1].credit, Decimal)
    assert verification.rows[1].description == "Tjänst"


def test_ledger_row_carries_verification_date():
    orm_verification = _orm_verification()

    row = ledger_row_to_domain(orm_verification.rows[1], orm_verification)

    assert row == LedgerRow(
        account_number="3001",
        date=date(2024, 1, 15),
        debit=Decimal("0"),
        credit=Decimal("125"),
        verification_id=7,
    )


def test_document_to_domain():
    orm = ORMDocument(
        id=2,
        kind="vat_report",
        date=date(2024, 3, 31),
        amount=None,
        description=None,
        status="draft",
        created_at=datetime(2024, 4, 1),
    )

    document = document_to_domain(orm)

    assert isinstance(document, Document)
    assert document.kind == DocumentKind.VAT_REPORT
    assert document.amount is None
    assert document.status == "draft"
