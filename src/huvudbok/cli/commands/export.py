"""Export commands."""

from datetime import date

import click

from huvudbok.domain.sie import SieExportService


@click.group()
def export_group():
    """Export the ledger to other systems."""
    pass


@export_group.command("sie")
@click.argument("path", required=False, type=click.Path(writable=True))
@click.option("--year", type=int, default=lambda: date.today().year, help="Fiscal year (defaults to current)")
@click.pass_context
def export_sie(ctx, path: str | None, year: int):
    """Write a SIE4 file for a fiscal year.

    PATH may be a file or a directory; it defaults to
    bokforing_<orgnr>_<year>.se in the current directory.

    Examples:
        huvudbok export sie --year 2024
        huvudbok export sie exports/ --year 2024
    """
    service = SieExportService(ctx.obj["db"])
    target = service.write(path or service.default_path(year), year)
    click.echo(f"Exported {year} to {target}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
