"""Verification (journal entry) domain service."""

from typing import Optional
from datetime import date

import structlog

from huvudbok.database.base import Database
from huvudbok.domain import errors
from huvudbok.domain.entities import (
    Verification as VerificationEntity,
    VerificationCheck,
    VerificationRow,
)
from huvudbok.domain.validation import check_verification

logger = structlog.get_logger(__name__)

DEFAULT_SERIES = "A"


class VerificationService:
    """Service for booking and reading verifications.

    Booked verifications are immutable. A mistake is corrected by booking a
    reversing verification, never by editing rows.
    """

    def __init__(self, db: Database):
        """Initialize verification service.

        Args:
            db: Database instance
        """
        self.db = db
        self._logger = logger.bind(component="verification_service")

    def check(
        self,
        entry_date: Optional[date],
        description: Optional[str],
        rows: list[VerificationRow],
    ) -> VerificationCheck:
        """Validate a draft against the rules and the current chart."""
        known_accounts = {acc.account_number for acc in self.db.list_accounts()}
        return check_verification(entry_date, description, rows, known_accounts)

    def next_verification_number(self, series: str = DEFAULT_SERIES) -> int:
        """Next free number in a verification series."""
        return self.db.get_max_verification_number(series) + 1

    def create_verification(
        self,
        entry_date: date,
        description: str,
        rows: list[VerificationRow],
        series: str = DEFAULT_SERIES,
        reverses_id: Optional[int] = None,
    ) -> int:
        """Book a verification.

        Args:
            entry_date: Booking date
            description: Free-text narrative
            rows: Debit/credit rows; must balance within 0.01
            series: Verification series letter
            reverses_id: ID of the verification this one reverses, if any

        Returns:
            Verification ID

        Raises:
            ValidationError: If the draft breaks a bookkeeping rule
        """
        series = (series or DEFAULT_SERIES).strip().upper()
        result = self.check(entry_date, description, rows)
        if not result.is_valid:
            self._logger.warning(
                "verification_rejected",
                errors=list(result.errors),
                difference=str(result.balance.difference),
            )
            raise errors.ValidationError(errors.verification_rejected(result.errors))

        number = self.next_verification_number(series)
        verification_id = self.db.create_verification(
            series=series,
            number=number,
            date=entry_date,
            description=(description or "").strip(),
            rows=list(rows),
            reverses_id=reverses_id,
        )
        self._logger.info(
            "verification_booked",
            verification_id=verification_id,
            reference=f"{series}{number}",
            total=str(result.balance.total_debit),
            warnings=list(result.warnings),
        )
        return verification_id

    def get_verification(self, verification_id: int) -> Optional[VerificationEntity]:
        """Get verification by ID."""
        return self.db.get_verification(verification_id)

    def list_verifications(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        series: Optional[str] = None,
    ) -> list[VerificationEntity]:
        """List verifications with optional date and series filters."""
        return self.db.list_verifications(
            start_date=start_date,
            end_date=end_date,
            series=series.upper() if series else None,
        )

    def reverse_verification(
        self, verification_id: int, entry_date: Optional[date] = None
    ) -> int:
        """Book a verification that cancels another one.

        Args:
            verification_id: Verification to reverse
            entry_date: Date of the reversal (defaults to the original date)

        Returns:
            ID of the reversing verification

        Raises:
            NotFoundError: If the verification does not exist
            ConflictError: If it already has been reversed
        """
        original = self.db.get_verification(verification_id)
        if original is None:
            raise errors.NotFoundError(errors.verification_not_found(verification_id))
        if self.db.find_reversal(verification_id) is not None:
            raise errors.ConflictError(errors.already_reversed(original.reference))

        reversed_rows = [
            VerificationRow(
                account=row.account,
                debit=row.credit,
                credit=row.debit,
                description=row.description,
            )
            for row in original.rows
        ]
        return self.create_verification(
            entry_date=entry_date or original.date,
            description=f"Rättelse av {original.reference}: {original.description}",
            rows=reversed_rows,
            series=original.series,
            reverses_id=original.id,
        )
