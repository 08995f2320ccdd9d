"""Add schedule entry command."""

import dataclasses

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.error_handling import handle_domain_error
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import TransactionType, categories_for
from schedulec.domain.errors import DomainError
from schedulec.domain.schedule import ScheduleService
from schedulec.utils.amount_parser import format_currency, parse_amount
from schedulec.utils.date_parser import parse_date


def match_category(ctx, category: str, transaction_type: TransactionType) -> str:
    """Return the canonical spelling of a category, or exit with an error."""
    wanted = category.strip().lower()
    for candidate in categories_for(transaction_type):
        if candidate.lower() == wanted:
            return candidate
    click.echo(
        f"Error: Category '{category}' is not a valid {transaction_type.value} category. "
        "Run 'schedulec categories' to see the available categories.",
        err=True,
    )
    ctx.exit(1)


@click.command("add")
@click.option(
    "--business",
    help="Business name or ID (optional when you have a single business)",
)
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType]),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Transaction type",
)
@click.option(
    "--date",
    "entry_date",
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.option("--amount", required=True, help="Amount (e.g., 123.45)")
@click.option("--store", required=True, help="Store or payee name")
@click.option("--category", help="Schedule C category (defaults to the first of the type)")
@click.option("--notes", help="Notes")
@click.option("--photo", "photo_url", help="Receipt photo path or URL")
@click.pass_context
def add_entry(
    ctx,
    business: str | None,
    transaction_type: str,
    entry_date: str | None,
    amount: str,
    store: str,
    category: str | None,
    notes: str | None,
    photo_url: str | None,
):
    """Add an income or expense entry.

    Examples:
        schedulec add --business Acme --amount 12.50 --store "Staples" --category Supplies
        schedulec add --type income --amount 1500 --store "Client A" --date 2024-03-01
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    schedule_service = ScheduleService(db)
    business_service = BusinessService(db)

    form = schedule_service.change_transaction_type(
        schedule_service.new_input(user_id), TransactionType(transaction_type)
    )

    if business:
        form = dataclasses.replace(
            form, business_id=resolve_business_or_exit(ctx, business_service, business)
        )

    if entry_date:
        try:
            form = dataclasses.replace(form, date=parse_date(entry_date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if category:
        form = dataclasses.replace(
            form, category=match_category(ctx, category, form.transaction_type)
        )

    form = dataclasses.replace(
        form, amount=parsed_amount, store=store, notes=notes, photo_url=photo_url
    )

    try:
        schedule_id = schedule_service.add_entry(form, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    entry = schedule_service.require_entry(schedule_id)
    click.echo(f"Created entry {schedule_id}")
    click.echo(f"  Business: {entry.business_name}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Type: {entry.transaction_type.value}")
    click.echo(f"  Amount: {format_currency(entry.amount)}")
    click.echo(f"  Store: {entry.store}")
    click.echo(f"  Category: {entry.category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entry)
