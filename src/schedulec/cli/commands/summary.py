"""Summary commands."""

from datetime import date

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.error_handling import handle_domain_error
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import TransactionType
from schedulec.domain.entities import BusinessSummary
from schedulec.domain.errors import DomainError
from schedulec.domain.summary import SummaryRange, SummaryService, calculate_date_range
from schedulec.utils.amount_parser import format_currency
from schedulec.utils.date_parser import parse_date


def _display_summary(summary: BusinessSummary, show_categories: bool) -> None:
    click.echo(f"\n{summary.business_name} ({summary.entry_count} entries)")
    click.echo("-" * 60)
    click.echo(f"  {'Income':<40} {format_currency(summary.income):>15}")
    click.echo(f"  {'Expenses':<40} {format_currency(summary.expenses):>15}")
    click.echo(f"  {'Net':<40} {format_currency(summary.net):>15}")

    if not show_categories:
        return
    for title, totals in (
        ("Income by category", summary.income_by_category),
        ("Expenses by category", summary.expenses_by_category),
    ):
        if not totals:
            continue
        click.echo(f"\n  {title}:")
        for total in totals:
            click.echo(f"    {total.category:<38} {format_currency(total.amount):>15}")


@click.command("summary")
@click.option(
    "--range",
    "range_type",
    type=click.Choice([r.value for r in SummaryRange]),
    default=SummaryRange.YEAR_TO_DATE.value,
    show_default=True,
    help="Date range preset",
)
@click.option("--year", type=int, help="Year to summarize (defaults to the current year)")
@click.option("--quarter", type=click.IntRange(1, 4), help="Quarter for --range quarter")
@click.option("--month", type=click.IntRange(1, 12), help="Month for --range month")
@click.option("--start-date", help="Start date for --range custom")
@click.option("--end-date", help="End date for --range custom")
@click.option("--business", help="Only summarize one business (name or ID)")
@click.option("--categories", "show_categories", is_flag=True, help="Show totals per category")
@click.option("--top", type=click.IntRange(min=1), help="Show the N largest expense categories")
@click.pass_context
def summary(
    ctx,
    range_type: str,
    year: int | None,
    quarter: int | None,
    month: int | None,
    start_date: str | None,
    end_date: str | None,
    business: str | None,
    show_categories: bool,
    top: int | None,
):
    """Show income, expenses and net per business.

    Examples:
        schedulec summary
        schedulec summary --range quarter --quarter 2 --year 2024 --categories
        schedulec summary --range custom --start-date 2024-01-01 --end-date 2024-06-30
    """
    db = ctx.obj["db"]
    service = SummaryService(db)
    selected = SummaryRange(range_type)
    year = year or date.today().year

    custom_start = custom_end = None
    if selected is SummaryRange.CUSTOM:
        if not start_date or not end_date:
            click.echo("Error: --range custom requires --start-date and --end-date.", err=True)
            ctx.exit(1)
        try:
            custom_start = parse_date(start_date)
            custom_end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    period = quarter if selected is SummaryRange.QUARTER else month
    try:
        start, end = calculate_date_range(
            selected, year, period=period, custom_start=custom_start, custom_end=custom_end
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    business_id = None
    if business:
        business_id = resolve_business_or_exit(ctx, BusinessService(db), business)

    click.echo(f"Summary for {start} to {end}")
    if business_id is not None:
        _display_summary(service.business_summary(business_id, start, end), show_categories)
    else:
        summaries = service.business_summaries(start, end)
        if not summaries:
            click.echo("No entries found.")
            return
        for business_summary in summaries:
            _display_summary(business_summary, show_categories)
        if len(summaries) > 1:
            _display_summary(service.overall_summary(start, end), show_categories=False)

    if top:
        click.echo(f"\nTop {top} expense categories:")
        for total in service.top_categories(
            TransactionType.EXPENSE, business_id, start, end, limit=top
        ):
            click.echo(f"  {total.category:<40} {format_currency(total.amount):>15}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
