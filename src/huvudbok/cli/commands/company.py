"""Company settings commands."""

import click

from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.domain.company import CompanyService
from huvudbok.domain.errors import DomainError


@click.group()
def company_group():
    """Show and change company settings."""
    pass


@company_group.command("show")
@click.pass_context
def show_company(ctx):
    """Show company settings."""
    company = CompanyService(ctx.obj["db"]).get_company()
    click.echo(f"Name:              {company.name}")
    click.echo(f"Org number:        {company.org_number or '-'}")
    click.echo(f"Fiscal year start: month {company.fiscal_year_start_month}")
    if company.has_address:
        click.echo(f"Contact:           {company.contact or '-'}")
        click.echo(f"Address:           {company.address or '-'}")
        click.echo(f"Postal address:    {' '.join(filter(None, (company.postal_code, company.city))) or '-'}")
        click.echo(f"Phone:             {company.phone or '-'}")


@company_group.command("set")
@click.option("--name", help="Company name")
@click.option("--org-number", help="Organisation number, NNNNNN-NNNN")
@click.option("--fiscal-year-start", type=int, help="First month of the fiscal year (1-12)")
@click.option("--contact", help="Contact person")
@click.option("--address", help="Street address")
@click.option("--postal-code", help="Postal code")
@click.option("--city", help="City")
@click.option("--phone", help="Phone number")
@click.pass_context
def set_company(
    ctx,
    name: str | None,
    org_number: str | None,
    fiscal_year_start: int | None,
    contact: str | None,
    address: str | None,
    postal_code: str | None,
    city: str | None,
    phone: str | None,
):
    """Update company settings. An empty value clears a contact field.

    Examples:
        huvudbok company set --name "Exempel AB" --org-number 556677-8899
        huvudbok company set --address "Storgatan 1" --postal-code "111 22" --city Stockholm
    """
    contact_fields = {
        "contact": contact,
        "address": address,
        "postal_code": postal_code,
        "city": city,
        "phone": phone,
    }
    if name is None and org_number is None and fiscal_year_start is None and all(
        value is None for value in contact_fields.values()
    ):
        click.echo("Error: Nothing to update. Use --name, --org-number, --fiscal-year-start or an address option.", err=True)
        ctx.exit(1)

    try:
        company = CompanyService(ctx.obj["db"]).update_company(
            name=name, org_number=org_number, fiscal_year_start_month=fiscal_year_start, **contact_fields
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated company '{company.name}'")


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
