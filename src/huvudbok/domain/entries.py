"""Builders for common verification drafts (sales, purchases, salaries).

All amounts are rounded to whole öre. VAT is split out of gross amounts so
that each draft balances exactly.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from huvudbok.domain import errors
from huvudbok.domain.entities import ORE, ZERO, VerificationRow
from huvudbok.domain.validation import to_amount

OUTPUT_VAT_ACCOUNTS: dict[int, str] = {25: "2610", 12: "2620", 6: "2630"}
INPUT_VAT_ACCOUNT = "2640"
BANK_ACCOUNT = "1930"
RECEIVABLES_ACCOUNT = "1510"
DEFAULT_REVENUE_ACCOUNT = "3001"


@dataclass(frozen=True)
class EntryDraft:
    """Unbooked verification produced by a builder."""

    date: date
    description: str
    rows: tuple[VerificationRow, ...]


def round_to_ore(amount) -> Decimal:
    """Round an amount to two decimals, halves away from zero."""
    return to_amount(amount).quantize(ORE, rounding=ROUND_HALF_UP)


def _check_rate(vat_rate: int) -> None:
    if vat_rate not in (0, 6, 12, 25):
        raise errors.ValidationError(f"Invalid VAT rate {vat_rate}: expected 0, 6, 12 or 25")


def calculate_vat(gross_amount, vat_rate: int) -> tuple[Decimal, Decimal]:
    """Split a gross amount into (net, vat)."""
    _check_rate(vat_rate)
    gross = round_to_ore(gross_amount)
    if vat_rate == 0:
        return gross, ZERO
    net = round_to_ore(gross / (1 + Decimal(vat_rate) / 100))
    return net, gross - net


def calculate_gross(net_amount, vat_rate: int) -> tuple[Decimal, Decimal]:
    """Add VAT to a net amount, returning (gross, vat)."""
    _check_rate(vat_rate)
    net = round_to_ore(net_amount)
    vat = round_to_ore(net * Decimal(vat_rate) / 100)
    return net + vat, vat


def _positive(amount, what: str) -> Decimal:
    value = round_to_ore(amount)
    if value <= 0:
        raise errors.ValidationError(f"{what} must be positive")
    return value


def sales_entry(
    entry_date: date,
    description: str,
    gross_amount,
    vat_rate: int = 25,
    revenue_account: str = DEFAULT_REVENUE_ACCOUNT,
    debit_account: str = RECEIVABLES_ACCOUNT,
) -> EntryDraft:
    """Sale with output VAT: receivable (or bank) against revenue and VAT."""
    gross = _positive(gross_amount, "Amount")
    net, vat = calculate_vat(gross, vat_rate)
    rows = [
        VerificationRow(account=debit_account, debit=gross),
        VerificationRow(account=revenue_account, credit=net),
    ]
    if vat:
        rows.append(VerificationRow(account=OUTPUT_VAT_ACCOUNTS[vat_rate], credit=vat))
    return EntryDraft(date=entry_date, description=description, rows=tuple(rows))


def purchase_entry(
    entry_date: date,
    description: str,
    gross_amount,
    expense_account: str,
    vat_rate: int = 25,
    credit_account: str = BANK_ACCOUNT,
) -> EntryDraft:
    """Purchase with deductible input VAT, paid from ``credit_account``."""
    gross = _positive(gross_amount, "Amount")
    net, vat = calculate_vat(gross, vat_rate)
    rows = [VerificationRow(account=expense_account, debit=net)]
    if vat:
        rows.append(VerificationRow(account=INPUT_VAT_ACCOUNT, debit=vat))
    rows.append(VerificationRow(account=credit_account, credit=gross))
    return EntryDraft(date=entry_date, description=description, rows=tuple(rows))


def payment_received_entry(
    entry_date: date,
    amount,
    customer_name: Optional[str] = None,
    bank_account: str = BANK_ACCOUNT,
) -> EntryDraft:
    """Customer payment settling a receivable."""
    value = _positive(amount, "Amount")
    description = "Betalning mottagen"
    if customer_name:
        description += f" från {customer_name}"
    return EntryDraft(
        date=entry_date,
        description=description,
        rows=(
            VerificationRow(account=bank_account, debit=value),
            VerificationRow(account=RECEIVABLES_ACCOUNT, credit=value, description=customer_name),
        ),
    )


def salary_entry(
    entry_date: date,
    gross_salary,
    tax_amount,
    employer_contributions,
    employee_name: Optional[str] = None,
    salary_account: str = "7210",
) -> EntryDraft:
    """Salary payment: expense and contributions against tax debts and bank.

    The net salary paid out is gross salary minus withheld tax.
    """
    gross = _positive(gross_salary, "Gross salary")
    tax = round_to_ore(tax_amount)
    contributions = round_to_ore(employer_contributions)
    if tax < 0 or contributions < 0 or tax > gross:
        raise errors.ValidationError("Tax and contributions must be between zero and the gross salary")

    description = "Löneutbetalning"
    if employee_name:
        description += f" {employee_name}"
    return EntryDraft(
        date=entry_date,
        description=description,
        rows=(
            VerificationRow(account=salary_account, debit=gross),
            VerificationRow(account="7510", debit=contributions),
            VerificationRow(account="2710", credit=tax),
            VerificationRow(account="2730", credit=contributions),
            VerificationRow(account=BANK_ACCOUNT, credit=gross - tax),
        ),
    )
