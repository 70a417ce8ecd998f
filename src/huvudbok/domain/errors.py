"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_number: str) -> str:
    """Return message for missing chart account."""
    return f"Account {account_number} not found"


def verification_not_found(verification_id: int) -> str:
    """Return message for missing verification."""
    return f"Verification {verification_id} not found"


def document_not_found(document_id: int) -> str:
    """Return message for missing document."""
    return f"Document {document_id} not found"


def duplicate_account_number(account_number: str) -> str:
    """Return message for duplicate chart account."""
    return f"Account {account_number} already exists"


def invalid_account_number(account_number: str) -> str:
    """Return message for malformed BAS account numbers."""
    return f"Invalid account number '{account_number}': expected four digits in 1000-8999"


def account_delete_blocked(account_number: str, row_count: int) -> str:
    """Return message when an account is referenced by verification rows."""
    return (
        f"Cannot delete account {account_number}: it is used by "
        f"{row_count} verification row{'s' if row_count != 1 else ''}."
    )


def verification_rejected(errors) -> str:
    """Return message for a verification that failed validation."""
    return "Verification rejected: " + "; ".join(errors)


def already_reversed(reference: str) -> str:
    """Return message when a verification already has a reversal."""
    return f"Verification {reference} has already been reversed"
