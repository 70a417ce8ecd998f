"""Document domain service (invoices, receipts, payslips, VAT reports)."""

from typing import Optional
from datetime import date
from decimal import Decimal

from huvudbok.database.base import Database
from huvudbok.domain import errors
from huvudbok.domain.entities import Document as DocumentEntity, DocumentKind
from huvudbok.domain.status import INITIAL_STATUS, known_statuses


class DocumentService:
    """Service for managing status-bearing documents."""

    def __init__(self, db: Database):
        """Initialize document service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_status(self, kind: DocumentKind, status: str) -> None:
        allowed = known_statuses(kind)
        if status not in allowed:
            raise errors.ValidationError(
                f"Unknown status '{status}' for {kind.value}. "
                f"Valid statuses: {', '.join(allowed)}"
            )

    def create_document(
        self,
        kind: DocumentKind,
        doc_date: date,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        """Create a document.

        Args:
            kind: Document kind
            doc_date: Document date (invoice date, pay date, period end, ...)
            amount: Optional amount
            description: Optional description
            status: Initial status; defaults to the kind's first status

        Returns:
            Document ID

        Raises:
            ValidationError: If the status is not valid for the kind
        """
        kind = DocumentKind(kind)
        status = status or INITIAL_STATUS[kind]
        self._check_status(kind, status)
        return self.db.create_document(
            kind=kind,
            date=doc_date,
            status=status,
            amount=amount,
            description=description,
        )

    def get_document(self, document_id: int) -> Optional[DocumentEntity]:
        """Get document by ID."""
        return self.db.get_document(document_id)

    def update_status(self, document_id: int, status: str) -> None:
        """Move a document to a new status.

        Raises:
            NotFoundError: If the document does not exist
            ValidationError: If the status is not valid for the document kind
        """
        document = self.db.get_document(document_id)
        if document is None:
            raise errors.NotFoundError(errors.document_not_found(document_id))
        self._check_status(document.kind, status)
        self.db.update_document_status(document_id, status)

    def list_documents(
        self,
        kind: Optional[DocumentKind] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DocumentEntity]:
        """List documents with optional filters."""
        return self.db.list_documents(kind=kind, start_date=start_date, end_date=end_date)
