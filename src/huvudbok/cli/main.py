"""Main CLI entry point."""

import click

from huvudbok.config.logging import DEFAULT_LOG_LEVEL, LOG_FORMATS, LOG_LEVELS, configure_logging
from huvudbok.database.factories import create_sqlite_database

from huvudbok.cli.commands import (
    account,
    verification,
    report,
    document,
    review,
    company,
    export,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides HUVUDBOK_DB_PATH environment variable)",
    envvar="HUVUDBOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    envvar="HUVUDBOK_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default="console",
    show_default=True,
    envvar="HUVUDBOK_LOG_FORMAT",
    help="Log output format",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, log_format: str):
    """Huvudbok - double-entry bookkeeping for Swedish companies.

    Keep a BAS chart of accounts, book balanced verifications and produce
    the K2 income statement and balance sheet.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level.upper(), format=log_format)

    # Open the database only when running a command, not for --help
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


account.register_commands(cli)
verification.register_commands(cli)
report.register_commands(cli)
document.register_commands(cli)
review.register_commands(cli)
company.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
