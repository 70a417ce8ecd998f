"""Shared pytest fixtures for huvudbok tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest
import structlog

from huvudbok.database.factories import create_sqlite_database
from huvudbok.domain.accounts import AccountService
from huvudbok.domain.company import CompanyService
from huvudbok.domain.documents import DocumentService
from huvudbok.domain.entities import VerificationRow
from huvudbok.domain.reports import ReportService
from huvudbok.domain.verification import VerificationService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def verification_service(temp_db):
    """Create a VerificationService with a temporary database."""
    return VerificationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def document_service(temp_db):
    """Create a DocumentService with a temporary database."""
    return DocumentService(temp_db)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def bas_chart(account_service):
    """Seed the common BAS accounts."""
    account_service.seed_bas_chart()
    return account_service.known_account_numbers()


@pytest.fixture
def booked_year(verification_service, bas_chart):
    """Book a small but complete year of verifications for 2024.

    Share capital 50 000, a 25% VAT sale of 12 500 (paid), a purchase of
    2 500 including VAT and a salary of 30 000 with 9 426 contributions.
    """
    entries = [
        (
            date(2024, 1, 2),
            "Insättning aktiekapital",
            [
                VerificationRow(account="1930", debit=Decimal("50000")),
                VerificationRow(account="2081", credit=Decimal("50000")),
            ],
        ),
        (
            date(2024, 1, 15),
            "Försäljning",
            [
                VerificationRow(account="1930", debit=Decimal("12500")),
                VerificationRow(account="3001", credit=Decimal("10000")),
                VerificationRow(account="2610", credit=Decimal("2500")),
            ],
        ),
        (
            date(2024, 2, 3),
            "Kontorsmaterial",
            [
                VerificationRow(account="6110", debit=Decimal("2000")),
                VerificationRow(account="2640", debit=Decimal("500")),
                VerificationRow(account="1930", credit=Decimal("2500")),
            ],
        ),
        (
            date(2024, 2, 25),
            "Lön februari",
            [
                VerificationRow(account="7210", debit=Decimal("30000")),
                VerificationRow(account="7510", debit=Decimal("9426")),
                VerificationRow(account="2710", credit=Decimal("9000")),
                VerificationRow(account="2730", credit=Decimal("9426")),
                VerificationRow(account="1930", credit=Decimal("21000")),
            ],
        ),
    ]
    return [
        verification_service.create_verification(entry_date, description, rows)
        for entry_date, description, rows in entries
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
