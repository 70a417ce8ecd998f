"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly; domain services import this module
from huvudbok.domain.entities import (
    Account,
    Company,
    Document,
    DocumentKind,
    LedgerRow,
    Verification,
    VerificationRow,
)


class Database(ABC):
    """Abstract database interface for huvudbok."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Company operations
    @abstractmethod
    def get_company(self) -> Optional[Company]:
        """Get company settings, or None if never set."""
        pass

    @abstractmethod
    def save_company(
        self,
        name: str,
        org_number: Optional[str],
        fiscal_year_start_month: int,
        contact: Optional[str] = None,
        address: Optional[str] = None,
        postal_code: Optional[str] = None,
        city: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> None:
        """Create or replace company settings."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def create_account(
        self, account_number: str, name: str, vat_rate: Optional[int] = None
    ) -> int:
        """Create a chart account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_number: str) -> Optional[Account]:
        """Get chart account by number."""
        pass

    @abstractmethod
    def list_accounts(self, prefix: Optional[str] = None) -> list[Account]:
        """List chart accounts ordered by number, optionally by number prefix."""
        pass

    @abstractmethod
    def update_account(
        self, account_number: str, name: str, vat_rate: Optional[int] = None
    ) -> None:
        """Update account name and optionally VAT rate."""
        pass

    @abstractmethod
    def delete_account(self, account_number: str) -> None:
        """Delete a chart account."""
        pass

    @abstractmethod
    def get_account_row_count(self, account_number: str) -> int:
        """Count verification rows booked on an account."""
        pass

    # Verification operations
    @abstractmethod
    def create_verification(
        self,
        series: str,
        number: int,
        date: date,
        description: str,
        rows: list[VerificationRow],
        reverses_id: Optional[int] = None,
    ) -> int:
        """Insert a verification with its rows atomically. Returns its ID.

        Implementations must re-check the debit/credit balance inside the
        same transaction as the insert.
        """
        pass

    @abstractmethod
    def get_verification(self, verification_id: int) -> Optional[Verification]:
        """Get verification by ID."""
        pass

    @abstractmethod
    def list_verifications(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        series: Optional[str] = None,
    ) -> list[Verification]:
        """List verifications ordered by date, series and number."""
        pass

    @abstractmethod
    def get_max_verification_number(self, series: str) -> int:
        """Highest number used in a series, 0 if the series is empty."""
        pass

    @abstractmethod
    def find_reversal(self, verification_id: int) -> Optional[Verification]:
        """Get the verification that reverses the given one, if any."""
        pass

    @abstractmethod
    def count_verifications(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> int:
        """Count verifications in a date range."""
        pass

    @abstractmethod
    def list_ledger_rows(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_number: Optional[str] = None,
    ) -> list[LedgerRow]:
        """List verification rows flattened with their verification date."""
        pass

    # Document operations
    @abstractmethod
    def create_document(
        self,
        kind: DocumentKind,
        date: date,
        status: Optional[str],
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a document. Returns document ID."""
        pass

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        """Get document by ID."""
        pass

    @abstractmethod
    def update_document_status(self, document_id: int, status: Optional[str]) -> None:
        """Update document status."""
        pass

    @abstractmethod
    def list_documents(
        self,
        kind: Optional[DocumentKind] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Document]:
        """List documents with optional kind and date filters."""
        pass
