"""Verification (journal entry) commands."""

import click

from huvudbok.cli.date_filters import date_range_options, period_flags, resolve_cli_date_range
from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.cli.format import format_amount
from huvudbok.domain import entries
from huvudbok.domain.entities import ZERO, VerificationRow
from huvudbok.domain.errors import DomainError
from huvudbok.domain.verification import DEFAULT_SERIES, VerificationService
from huvudbok.utils.amount_parser import parse_amount
from huvudbok.utils.date_parser import parse_date

VAT_CHOICES = click.Choice(["0", "6", "12", "25"])


def parse_row(text: str) -> VerificationRow:
    """Parse ``ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]`` into a row.

    Empty amounts count as zero, so ``1930:500:`` is a 500 debit.

    Raises:
        ValueError: If the row is malformed
    """
    parts = text.split(":", 3)
    if len(parts) < 3:
        raise ValueError(f"Invalid row '{text}': expected ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]")
    account, debit, credit = (part.strip() for part in parts[:3])
    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None
    return VerificationRow(
        account=account,
        debit=parse_amount(debit) if debit else ZERO,
        credit=parse_amount(credit) if credit else ZERO,
        description=description,
    )


def _book(ctx, service: VerificationService, draft_date, description, rows, series=DEFAULT_SERIES):
    try:
        verification_id = service.create_verification(
            entry_date=draft_date, description=description, rows=rows, series=series
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    verification = service.get_verification(verification_id)
    click.echo(f"Booked verification {verification.reference} (ID: {verification_id})")
    return verification


def _echo_rows(verification) -> None:
    for row in verification.rows:
        debit = format_amount(row.debit) if row.debit else ""
        credit = format_amount(row.credit) if row.credit else ""
        text = row.description or ""
        click.echo(f"  {row.account}  {debit:>14s}  {credit:>14s}  {text}")


@click.group()
def verification_group():
    """Book and inspect verifications."""
    pass


@verification_group.command("add")
@click.option("--date", "entry_date", required=True, help="Booking date (YYYY-MM-DD or 'today')")
@click.option("--description", required=True, help="Verification text")
@click.option(
    "--row",
    "row_specs",
    multiple=True,
    required=True,
    help="Row as ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]; repeat for each row",
)
@click.option("--series", default=DEFAULT_SERIES, show_default=True, help="Verification series")
@click.pass_context
def add_verification(ctx, entry_date: str, description: str, row_specs: tuple[str, ...], series: str):
    """Book a balanced verification.

    Examples:
        huvudbok verification add --date 2024-01-10 --description "Nyemission" \\
            --row 1930:50000: --row 2081::50000
    """
    service = VerificationService(ctx.obj["db"])
    try:
        parsed_date = parse_date(entry_date)
        rows = [parse_row(text) for text in row_specs]
    except ValueError as e:
        handle_domain_error(ctx, e)

    result = service.check(parsed_date, description, rows)
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)
    _book(ctx, service, parsed_date, description, rows, series)


@verification_group.command("list")
@date_range_options
@click.option("--series", help="Only list one series")
@click.pass_context
def list_verifications(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    series: str | None,
):
    """List booked verifications."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    service = VerificationService(ctx.obj["db"])
    verifications = service.list_verifications(start_date=start, end_date=end, series=series)
    if not verifications:
        click.echo("No verifications found.")
        return

    click.echo(f"{'Ver':<6s} {'Datum':<10s} {'Belopp':>14s}  Text")
    click.echo("-" * 72)
    for ver in verifications:
        total = sum((row.debit for row in ver.rows), ZERO)
        click.echo(f"{ver.reference:<6s} {ver.date.isoformat():<10s} {format_amount(total):>14s}  {ver.description}")


@verification_group.command("show")
@click.argument("verification_id", type=int)
@click.pass_context
def show_verification(ctx, verification_id: int):
    """Show one verification with its rows."""
    service = VerificationService(ctx.obj["db"])
    verification = service.get_verification(verification_id)
    if verification is None:
        click.echo(f"Error: Verification {verification_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"{verification.reference}  {verification.date.isoformat()}  {verification.description}")
    if verification.reverses_id is not None:
        click.echo(f"Reverses verification ID {verification.reverses_id}")
    _echo_rows(verification)


@verification_group.command("reverse")
@click.argument("verification_id", type=int)
@click.option("--date", "entry_date", help="Date of the reversal (defaults to the original date)")
@click.pass_context
def reverse_verification(ctx, verification_id: int, entry_date: str | None):
    """Book a verification that cancels an earlier one."""
    service = VerificationService(ctx.obj["db"])
    try:
        parsed_date = parse_date(entry_date) if entry_date else None
        reversal_id = service.reverse_verification(verification_id, parsed_date)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    reversal = service.get_verification(reversal_id)
    click.echo(f"Booked reversal {reversal.reference} (ID: {reversal_id})")


@verification_group.command("sale")
@click.option("--date", "entry_date", required=True, help="Invoice date")
@click.option("--amount", required=True, help="Gross amount including VAT")
@click.option("--vat-rate", type=VAT_CHOICES, default="25", show_default=True)
@click.option("--description", required=True, help="Verification text")
@click.option("--revenue-account", default=entries.DEFAULT_REVENUE_ACCOUNT, show_default=True)
@click.option("--paid", is_flag=True, help="Paid directly to the bank account instead of a receivable")
@click.pass_context
def book_sale(ctx, entry_date: str, amount: str, vat_rate: str, description: str, revenue_account: str, paid: bool):
    """Book a sale with output VAT.

    Examples:
        huvudbok verification sale --date 2024-02-01 --amount 12500 --description "Faktura 1001"
    """
    service = VerificationService(ctx.obj["db"])
    try:
        draft = entries.sales_entry(
            entry_date=parse_date(entry_date),
            description=description,
            gross_amount=parse_amount(amount),
            vat_rate=int(vat_rate),
            revenue_account=revenue_account,
            debit_account=entries.BANK_ACCOUNT if paid else entries.RECEIVABLES_ACCOUNT,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    verification = _book(ctx, service, draft.date, draft.description, list(draft.rows))
    _echo_rows(verification)


@verification_group.command("purchase")
@click.option("--date", "entry_date", required=True, help="Purchase date")
@click.option("--amount", required=True, help="Gross amount including VAT")
@click.option("--expense-account", required=True, help="Cost account, e.g. 5410")
@click.option("--vat-rate", type=VAT_CHOICES, default="25", show_default=True)
@click.option("--description", required=True, help="Verification text")
@click.option("--credit-account", default=entries.BANK_ACCOUNT, show_default=True, help="Account paid from")
@click.pass_context
def book_purchase(
    ctx,
    entry_date: str,
    amount: str,
    expense_account: str,
    vat_rate: str,
    description: str,
    credit_account: str,
):
    """Book a purchase with deductible input VAT."""
    service = VerificationService(ctx.obj["db"])
    try:
        draft = entries.purchase_entry(
            entry_date=parse_date(entry_date),
            description=description,
            gross_amount=parse_amount(amount),
            expense_account=expense_account,
            vat_rate=int(vat_rate),
            credit_account=credit_account,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    verification = _book(ctx, service, draft.date, draft.description, list(draft.rows))
    _echo_rows(verification)


def register_commands(cli):
    """Register verification commands with main CLI."""
    cli.add_command(verification_group, name="verification")
