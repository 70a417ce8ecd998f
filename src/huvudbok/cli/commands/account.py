"""Chart-of-accounts commands."""

import click

from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.domain.accounts import AccountService
from huvudbok.domain.classifier import account_class_label, account_type_label, classify
from huvudbok.domain.entities import AccountClass
from huvudbok.domain.errors import DomainError

CLASS_CHOICES = {
    "asset": AccountClass.ASSET,
    "equity": AccountClass.EQUITY,
    "liability": AccountClass.LIABILITY,
    "revenue": AccountClass.REVENUE,
    "expense": AccountClass.EXPENSE,
}


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("account_number", metavar="NUMBER")
@click.argument("name", metavar="NAME")
@click.option("--vat-rate", type=click.Choice(["0", "6", "12", "25"]), help="VAT rate in percent")
@click.pass_context
def create_account(ctx, account_number: str, name: str, vat_rate: str | None):
    """Create a new account.

    Examples:
        huvudbok account create 1930 "Företagskonto"
        huvudbok account create 3001 "Försäljning 25%" --vat-rate 25
    """
    service = AccountService(ctx.obj["db"])
    try:
        account_id = service.create_account(
            account_number=account_number,
            name=name,
            vat_rate=int(vat_rate) if vat_rate is not None else None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account {account_number} '{name}' (ID: {account_id})")


@account_group.command("list")
@click.option("--class", "account_class", type=click.Choice(sorted(CLASS_CHOICES)), help="Only list one account class")
@click.pass_context
def list_accounts(ctx, account_class: str | None):
    """List the chart of accounts."""
    service = AccountService(ctx.obj["db"])
    accounts = service.list_accounts(CLASS_CHOICES[account_class] if account_class else None)
    if not accounts:
        click.echo("No accounts found.")
        return

    if account_class:
        click.echo(f"\nAccounts ({account_class_label(CLASS_CHOICES[account_class])}):")
    else:
        click.echo("\nAccounts:")
    click.echo("-" * 100)
    for acc in accounts:
        label = account_type_label(classify(acc.account_number).account_type)
        vat = f"{acc.vat_rate}%" if acc.vat_rate is not None else ""
        click.echo(f"{acc.account_number} | {acc.name:45s} | {label:40s} | {vat}")


@account_group.command("rename")
@click.argument("account_number", metavar="NUMBER")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--vat-rate", type=click.Choice(["0", "6", "12", "25"]), help="New VAT rate in percent")
@click.pass_context
def rename_account(ctx, account_number: str, new_name: str, vat_rate: str | None) -> None:
    """Rename an account.

    Examples:
        huvudbok account rename 1930 "Bankkonto"
    """
    service = AccountService(ctx.obj["db"])
    try:
        service.rename_account(
            account_number=account_number,
            name=new_name,
            vat_rate=int(vat_rate) if vat_rate is not None else None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account {account_number} to '{new_name}'")


@account_group.command("delete")
@click.argument("account_number", metavar="NUMBER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account_number: str, yes: bool) -> None:
    """Delete an account.

    The account can only be deleted if no verification rows are booked on
    it. Booked rows are never removed; reverse the verification instead.
    """
    service = AccountService(ctx.obj["db"])
    account_obj = service.get_account(account_number)
    if account_obj is None:
        click.echo(f"Error: Account {account_number} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete account {account_number} '{account_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_number)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account {account_number} '{account_obj.name}'")


@account_group.command("init-bas")
@click.pass_context
def init_bas(ctx) -> None:
    """Add the common BAS accounts that are missing from the chart."""
    service = AccountService(ctx.obj["db"])
    created = service.seed_bas_chart()
    if created == 0:
        click.echo("All BAS accounts already exist.")
    else:
        click.echo(f"Created {created} BAS account{'s' if created != 1 else ''}.")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
