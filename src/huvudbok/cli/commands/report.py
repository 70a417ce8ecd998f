"""Financial report commands."""

from datetime import date

import click

from huvudbok.cli.date_filters import date_range_options, period_flags, resolve_cli_date_range
from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.cli.format import format_amount
from huvudbok.domain.accounts import AccountService
from huvudbok.domain.balances import BalanceService, natural_balance
from huvudbok.domain.entities import ReportLine
from huvudbok.domain.reports import ReportService
from huvudbok.utils.date_parser import parse_date

INDENT_SIZE = 4


def _echo_lines(lines: tuple[ReportLine, ...]) -> None:
    for line in lines:
        indent = " " * (INDENT_SIZE * line.level)
        if line.is_header:
            click.echo(f"\n{indent}{line.label}")
            continue
        label_width = 50 - len(indent)
        label = f"{indent}{line.label:<{label_width}}"
        value = format_amount(line.value)
        if line.is_total:
            click.echo("-" * 70)
        click.echo(f"{label} {value:>19s}")


@click.group()
def report_group():
    """Balances and financial statements."""
    pass


@report_group.command("balances")
@date_range_options
@click.option("--include-zero", is_flag=True, help="Also list accounts whose movements cancel out")
@click.option("--raw", is_flag=True, help="Show debit minus credit instead of the natural side")
@click.pass_context
def account_balances(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    include_zero: bool,
    raw: bool,
):
    """Show per-account balances for a period."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(this_month, this_year, last_month, last_year),
    )
    db = ctx.obj["db"]
    balances = BalanceService(db).account_balances(start, end, include_zero=include_zero)
    if not balances:
        click.echo("No balances found.")
        return

    names = {acc.account_number: acc.name for acc in AccountService(db).list_accounts()}
    for entry in balances:
        value = entry.balance if raw else natural_balance(entry.account_number, entry.balance)
        name = names.get(entry.account_number, "")
        click.echo(f"{entry.account_number} {name:45s} {format_amount(value):>19s}")


@report_group.command("income-statement")
@click.option("--year", type=int, default=lambda: date.today().year, help="Calendar year (defaults to current)")
@click.pass_context
def income_statement(ctx, year: int):
    """Show the K2 income statement (resultaträkning) for a year."""
    statement = ReportService(ctx.obj["db"]).income_statement(year)
    click.echo(f"Resultaträkning {year}")
    _echo_lines(statement.lines)


@report_group.command("balance-sheet")
@click.option("--as-of", help="Balance date (defaults to today)")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show the balance sheet (balansräkning).

    Exits with status 2 when assets and equity plus liabilities differ.
    """
    try:
        as_of_date = parse_date(as_of) if as_of else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    sheet = ReportService(ctx.obj["db"]).balance_sheet(as_of_date)
    click.echo(f"Balansräkning per {sheet.as_of.isoformat()}")
    _echo_lines(sheet.lines)

    if not sheet.is_balanced:
        click.echo(
            f"Warning: Balance sheet does not balance, difference {format_amount(sheet.difference)}",
            err=True,
        )
        ctx.exit(2)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
