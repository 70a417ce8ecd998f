"""Company settings domain service."""

import re
from typing import Optional

from huvudbok.database.base import Database
from huvudbok.domain import errors
from huvudbok.domain.entities import Company

DEFAULT_COMPANY_NAME = "Mitt företag"

ORG_NUMBER_PATTERN = re.compile(r"^\d{6}-?\d{4}$")

# Free-text contact fields; an empty string clears the stored value
CONTACT_FIELDS = ("contact", "address", "postal_code", "city", "phone")


class CompanyService:
    """Service for reading and updating company settings."""

    def __init__(self, db: Database):
        """Initialize company service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_company(self) -> Company:
        """Get company settings, falling back to defaults if never set."""
        company = self.db.get_company()
        if company is None:
            return Company(name=DEFAULT_COMPANY_NAME, org_number=None)
        return company

    def update_company(
        self,
        name: Optional[str] = None,
        org_number: Optional[str] = None,
        fiscal_year_start_month: Optional[int] = None,
        **contact: Optional[str],
    ) -> Company:
        """Update selected company settings.

        Args:
            name: Company name
            org_number: Organisation number, NNNNNN-NNNN
            fiscal_year_start_month: First month of the fiscal year
            **contact: Any of contact, address, postal_code, city and phone

        Raises:
            ValidationError: If the org number or start month is malformed,
                or an unknown contact field is given
        """
        current = self.get_company()
        if org_number is not None and not ORG_NUMBER_PATTERN.match(org_number):
            raise errors.ValidationError(
                f"Invalid organisation number '{org_number}': expected NNNNNN-NNNN"
            )
        if fiscal_year_start_month is not None and not 1 <= fiscal_year_start_month <= 12:
            raise errors.ValidationError("Fiscal year start month must be between 1 and 12")
        if name is not None and not name.strip():
            raise errors.ValidationError("Company name cannot be empty")
        unknown = sorted(set(contact) - set(CONTACT_FIELDS))
        if unknown:
            raise errors.ValidationError(f"Unknown company field(s): {', '.join(unknown)}")

        contact_values = {}
        for field_name in CONTACT_FIELDS:
            value = contact.get(field_name)
            if value is None:
                contact_values[field_name] = getattr(current, field_name)
            else:
                contact_values[field_name] = value.strip() or None

        self.db.save_company(
            name=name.strip() if name is not None else current.name,
            org_number=org_number if org_number is not None else current.org_number,
            fiscal_year_start_month=(
                fiscal_year_start_month
                if fiscal_year_start_month is not None
                else current.fiscal_year_start_month
            ),
            **contact_values,
        )
        return self.get_company()
