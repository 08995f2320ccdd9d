"""Schedule entry viewing commands."""

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.date_filters import period_option, resolve_cli_date_range
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import TransactionType
from schedulec.domain.schedule import ScheduleService
from schedulec.utils.amount_parser import format_currency


@click.command("view")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@period_option
@click.option("--business", help="Business name or ID")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Only show income or expenses",
)
@click.option("--category", help="Category name")
@click.option("--verbose", "-v", is_flag=True, help="Show all columns including notes and audit fields")
@click.pass_context
def view_entries(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    business: str | None,
    transaction_type: str | None,
    category: str | None,
    verbose: bool,
):
    """View entries with optional filters, newest first.

    Use --verbose to show notes, receipt and who created or last edited each entry.
    """
    db = ctx.obj["db"]
    service = ScheduleService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    business_id = None
    if business:
        business_id = resolve_business_or_exit(ctx, BusinessService(db), business)

    entries = service.list_entries(
        start_date=start,
        end_date=end,
        business_id=business_id,
        transaction_type=TransactionType(transaction_type) if transaction_type else None,
        category=category,
    )

    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    if verbose:
        click.echo("=" * 100)
        for entry in entries:
            click.echo(f"\nEntry ID: {entry.id}")
            click.echo(f"  Date: {entry.date}")
            click.echo(f"  Type: {entry.transaction_type.value}")
            click.echo(f"  Amount: {format_currency(entry.amount)}")
            click.echo(f"  Business: {entry.business_name}")
            click.echo(f"  Store: {entry.store}")
            click.echo(f"  Category: {entry.category}")
            if entry.notes:
                click.echo(f"  Notes: {entry.notes}")
            if entry.photo_url:
                click.echo(f"  Receipt: {entry.photo_url}")
            click.echo(f"  Created by: {entry.created_by}")
            click.echo(f"  Last modified by: {entry.modified_by}")
            click.echo("-" * 100)
        return

    click.echo("-" * 120)
    click.echo(
        f"{'ID':<36} {'Date':<12} {'Type':<8} {'Amount':>12} {'Business':<16} {'Store':<20} Category"
    )
    click.echo("-" * 120)
    for entry in entries:
        click.echo(
            f"{entry.id:<36} {str(entry.date):<12} {entry.transaction_type.value:<8} "
            f"{format_currency(entry.amount):>12} {entry.business_name[:16]:<16} "
            f"{entry.store[:20]:<20} {entry.category}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_entries)
