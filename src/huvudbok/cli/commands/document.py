"""Document commands (invoices, receipts, payslips, VAT reports)."""

import click

from huvudbok.cli.date_filters import date_range_options, period_flags, resolve_cli_date_range
from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.cli.format import format_amount
from huvudbok.domain.documents import DocumentService
from huvudbok.domain.entities import DocumentKind
from huvudbok.domain.errors import DomainError
from huvudbok.utils.amount_parser import parse_amount
from huvudbok.utils.date_parser import parse_date

KIND_CHOICES = click.Choice([kind.value for kind in DocumentKind])


@click.group()
def document_group():
    """Track document statuses."""
    pass


@document_group.command("add")
@click.argument("kind", type=KIND_CHOICES)
@click.option("--date", "doc_date", required=True, help="Document date")
@click.option("--amount", help="Amount")
@click.option("--description", help="Description")
@click.option("--status", help="Initial status (defaults to the first status of the kind)")
@click.pass_context
def add_document(ctx, kind: str, doc_date: str, amount: str | None, description: str | None, status: str | None):
    """Register a document.

    Examples:
        huvudbok document add customer_invoice --date 2024-03-01 --amount 12500
        huvudbok document add receipt --date today --status Verifierad
    """
    service = DocumentService(ctx.obj["db"])
    try:
        document_id = service.create_document(
            kind=DocumentKind(kind),
            doc_date=parse_date(doc_date),
            amount=parse_amount(amount) if amount else None,
            description=description,
            status=status,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {kind} (ID: {document_id})")


@document_group.command("list")
@click.option("--kind", type=KIND_CHOICES, help="Only list one document kind")
@date_range_options
@click.pass_context
def list_documents(
    ctx,
    kind: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """List documents."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    service = DocumentService(ctx.obj["db"])
    documents = service.list_documents(
        kind=DocumentKind(kind) if kind else None, start_date=start, end_date=end
    )
    if not documents:
        click.echo("No documents found.")
        return

    for doc in documents:
        click.echo(
            f"ID: {doc.id:3d} | {doc.date.isoformat()} | {doc.kind.value:16s} | "
            f"{doc.status or '':16s} | {format_amount(doc.amount):>14s} | {doc.description or ''}"
        )


@document_group.command("status")
@click.argument("document_id", type=int)
@click.argument("status")
@click.pass_context
def set_status(ctx, document_id: int, status: str):
    """Move a document to a new status."""
    service = DocumentService(ctx.obj["db"])
    try:
        service.update_status(document_id, status)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Document {document_id} is now '{status}'")


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(document_group, name="document")
