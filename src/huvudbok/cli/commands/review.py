"""Monthly review command."""

from dataclasses import asdict
from datetime import date

import click

from huvudbok.cli.error_handling import handle_domain_error
from huvudbok.cli.format import format_amount
from huvudbok.domain.errors import DomainError
from huvudbok.domain.review import MonthlyReviewService
from huvudbok.utils.stream_protocol import DATA, ERROR, encode_frame


@click.command("review")
@click.option("--year", type=int, default=lambda: date.today().year, help="Year (defaults to current)")
@click.option("--month", type=int, default=lambda: date.today().month, help="Month 1-12 (defaults to current)")
@click.option("--stream", is_flag=True, help="Emit line-prefixed stream frames instead of text")
@click.pass_context
def review(ctx, year: int, month: int, stream: bool):
    """Month-end review: result and document statuses.

    Sources that could not be read are reported; the review is then
    partial and the command exits with status 2.
    """
    service = MonthlyReviewService(ctx.obj["db"])
    try:
        result = service.build_review(year, month)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    if stream:
        click.echo(encode_frame(DATA, {"monthlyReview": asdict(result)}), nl=False)
        for source in result.failed_sources:
            click.echo(encode_frame(ERROR, {"source": source, "message": f"Could not load {source}"}), nl=False)
    else:
        click.echo(f"Månadsavstämning {year}-{month:02d}")
        click.echo(f"  Intäkter:  {format_amount(result.financial.revenue):>16s}")
        click.echo(f"  Kostnader: {format_amount(result.financial.expenses):>16s}")
        click.echo(f"  Resultat:  {format_amount(result.financial.result):>16s}")
        for section in result.sections:
            click.echo(f"\n{section.label} ({section.total_count})")
            for breakdown in section.status_breakdown:
                click.echo(f"  {breakdown.status:20s} {breakdown.count:4d}")
        if result.is_partial:
            click.echo(f"Warning: Partial review, failed sources: {', '.join(result.failed_sources)}", err=True)

    if result.is_partial:
        ctx.exit(2)


def register_commands(cli):
    """Register review command with main CLI."""
    cli.add_command(review)
