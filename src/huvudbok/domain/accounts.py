"""Chart-of-accounts domain service."""

from typing import Optional

import structlog

from huvudbok.database.base import Database
from huvudbok.domain import errors
from huvudbok.domain.bas import BAS_ACCOUNTS
from huvudbok.domain.classifier import is_bas_number
from huvudbok.domain.entities import Account as AccountEntity, AccountClass

logger = structlog.get_logger(__name__)

VAT_RATES = (0, 6, 12, 25)

_CLASS_PREFIXES: dict[AccountClass, tuple[str, ...]] = {
    AccountClass.ASSET: ("1",),
    AccountClass.EQUITY: ("20", "21"),
    AccountClass.LIABILITY: ("22", "23", "24", "25", "26", "27", "28", "29"),
    AccountClass.REVENUE: ("3",),
    AccountClass.EXPENSE: ("4", "5", "6", "7", "8"),
}


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db
        self._logger = logger.bind(component="account_service")

    def _validate(self, account_number: str, name: str, vat_rate: Optional[int]) -> None:
        if not is_bas_number(account_number):
            raise errors.ValidationError(errors.invalid_account_number(account_number))
        if not name or not name.strip():
            raise errors.ValidationError("Account name cannot be empty")
        if vat_rate is not None and vat_rate not in VAT_RATES:
            raise errors.ValidationError(
                f"Invalid VAT rate {vat_rate}: expected one of {', '.join(map(str, VAT_RATES))}"
            )

    def create_account(
        self, account_number: str, name: str, vat_rate: Optional[int] = None
    ) -> int:
        """Create a new chart account.

        Args:
            account_number: Four-digit BAS account number
            name: Account name
            vat_rate: Optional VAT rate in percent (0, 6, 12 or 25)

        Returns:
            Account ID

        Raises:
            ValidationError: If number, name or VAT rate is invalid
            ConflictError: If the account number already exists
        """
        self._validate(account_number, name, vat_rate)
        if self.db.get_account(account_number) is not None:
            raise errors.ConflictError(errors.duplicate_account_number(account_number))
        return self.db.create_account(account_number=account_number, name=name.strip(), vat_rate=vat_rate)

    def get_account(self, account_number: str) -> Optional[AccountEntity]:
        """Get account by number."""
        return self.db.get_account(account_number)

    def list_accounts(self, account_class: Optional[AccountClass] = None) -> list[AccountEntity]:
        """List accounts, optionally restricted to one account class."""
        if account_class is None:
            return self.db.list_accounts()
        prefixes = _CLASS_PREFIXES.get(account_class, ())
        accounts = self.db.list_accounts()
        return [acc for acc in accounts if acc.account_number.startswith(prefixes)]

    def known_account_numbers(self) -> set[str]:
        """Set of all account numbers in the chart."""
        return {acc.account_number for acc in self.db.list_accounts()}

    def rename_account(
        self, account_number: str, name: str, vat_rate: Optional[int] = None
    ) -> None:
        """Rename an account and optionally change its VAT rate.

        Raises:
            NotFoundError: If the account does not exist
        """
        self._validate(account_number, name, vat_rate)
        if self.db.get_account(account_number) is None:
            raise errors.NotFoundError(errors.account_not_found(account_number))
        self.db.update_account(account_number=account_number, name=name.strip(), vat_rate=vat_rate)

    def delete_account(self, account_number: str) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If verification rows are booked on the account
        """
        if self.db.get_account(account_number) is None:
            raise errors.NotFoundError(errors.account_not_found(account_number))

        row_count = self.db.get_account_row_count(account_number)
        if row_count > 0:
            raise errors.DependencyError(errors.account_delete_blocked(account_number, row_count))

        self.db.delete_account(account_number)

    def seed_bas_chart(self) -> int:
        """Add the common BAS accounts that are not yet in the chart.

        Returns:
            Number of accounts created
        """
        existing = self.known_account_numbers()
        created = 0
        for account_number, name, vat_rate in BAS_ACCOUNTS:
            if account_number in existing:
                continue
            self.db.create_account(account_number=account_number, name=name, vat_rate=vat_rate)
            created += 1
        self._logger.info("bas_chart_seeded", created=created, existing=len(existing))
        return created
