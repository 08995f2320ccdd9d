"""Export commands."""

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.date_filters import period_option, resolve_cli_date_range
from schedulec.cli.error_handling import handle_domain_error
from schedulec.domain.business import BusinessService
from schedulec.domain.errors import DomainError
from schedulec.domain.export import ExportService, default_archive_name


def _export_filters(func):
    """Shared selection options for the export commands."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD)"),
        click.option("--end-date", help="End date (YYYY-MM-DD)"),
        period_option,
        click.option("--business", help="Business name or ID"),
        click.option(
            "--income/--no-income", "include_income", default=True, help="Include income entries"
        ),
        click.option(
            "--expenses/--no-expenses",
            "include_expenses",
            default=True,
            help="Include expense entries",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _select(ctx, start_date, end_date, period, business, include_income, include_expenses):
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    business_id = None
    if business:
        business_id = resolve_business_or_exit(ctx, BusinessService(db), business)

    try:
        return ExportService(db).select_entries(
            start_date=start,
            end_date=end,
            business_id=business_id,
            include_income=include_income,
            include_expenses=include_expenses,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group("export")
def export_group():
    """Export entries to CSV or a zip archive."""
    pass


@export_group.command("csv")
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
@_export_filters
@click.pass_context
def export_csv(ctx, output: str | None, **filters):
    """Export entries as CSV to OUTPUT, or to stdout if omitted.

    Examples:
        schedulec export csv 2024.csv --period last-year
        schedulec export csv --business Acme --no-income
    """
    entries = _select(ctx, **filters)
    service = ExportService(ctx.obj["db"])

    if output is None:
        click.echo(service.export_csv(entries), nl=False)
        return

    count = service.write_csv(entries, output)
    click.echo(f"Exported {count} entries to {output}")


@export_group.command("zip")
@click.argument("output", type=click.Path(dir_okay=False, writable=True), required=False)
@_export_filters
@click.pass_context
def export_zip(ctx, output: str | None, **filters):
    """Export entries, receipt images and a manifest to a zip archive."""
    entries = _select(ctx, **filters)
    output = output or default_archive_name()

    try:
        stats = ExportService(ctx.obj["db"]).export_archive(entries, output)
    except OSError as e:
        click.echo(f"Error: Could not write {output}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported {stats['records']} entries and {stats['images']} images to {output}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
