"""Schedule entry commands: show, edit, delete and history."""

import dataclasses

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.commands.add import match_category
from schedulec.cli.error_handling import handle_domain_error
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import TransactionType
from schedulec.domain.errors import DomainError
from schedulec.domain.history import FIELD_LABELS
from schedulec.domain.schedule import ScheduleService
from schedulec.utils.amount_parser import format_currency, parse_amount
from schedulec.utils.date_parser import parse_date


@click.group("entry")
def entry_group():
    """Show, edit and delete entries."""
    pass


@entry_group.command("show")
@click.argument("schedule_id", metavar="ENTRY_ID")
@click.pass_context
def show_entry(ctx, schedule_id: str):
    """Show all details of an entry."""
    service = ScheduleService(ctx.obj["db"])

    try:
        entry = service.require_entry(schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Entry {entry.id}")
    click.echo(f"  Business: {entry.business_name}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Type: {entry.transaction_type.value}")
    click.echo(f"  Amount: {format_currency(entry.amount)}")
    click.echo(f"  Store: {entry.store}")
    click.echo(f"  Category: {entry.category}")
    if entry.notes:
        click.echo(f"  Notes: {entry.notes}")
    if entry.photo_url:
        click.echo(f"  Receipt: {entry.photo_url}")
    click.echo(f"  Created: {entry.created_at:%Y-%m-%d %H:%M} by {entry.created_by}")
    click.echo(f"  Modified: {entry.modified_at:%Y-%m-%d %H:%M} by {entry.modified_by}")


@entry_group.command("edit")
@click.argument("schedule_id", metavar="ENTRY_ID")
@click.option("--business", help="Move the entry to another business (name or ID)")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="New transaction type",
)
@click.option("--date", "entry_date", help="New date")
@click.option("--amount", help="New amount")
@click.option("--store", help="New store or payee name")
@click.option("--category", help="New category")
@click.option("--notes", help="New notes (use empty string to clear)")
@click.option("--photo", "photo_url", help="New receipt photo (use empty string to clear)")
@click.pass_context
def edit_entry(
    ctx,
    schedule_id: str,
    business: str | None,
    transaction_type: str | None,
    entry_date: str | None,
    amount: str | None,
    store: str | None,
    category: str | None,
    notes: str | None,
    photo_url: str | None,
):
    """Edit an entry. Every changed field is recorded in its history.

    Examples:
        schedulec entry edit <id> --amount 15.00
        schedulec entry edit <id> --type income --category "Other income"
    """
    db = ctx.obj["db"]
    service = ScheduleService(db)

    try:
        form = service.edit_input(schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if transaction_type:
        form = service.change_transaction_type(form, TransactionType(transaction_type))
    if category:
        form = dataclasses.replace(
            form, category=match_category(ctx, category, form.transaction_type)
        )
    if business:
        form = dataclasses.replace(
            form, business_id=resolve_business_or_exit(ctx, BusinessService(db), business)
        )
    if entry_date:
        try:
            form = dataclasses.replace(form, date=parse_date(entry_date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if amount:
        try:
            form = dataclasses.replace(form, amount=parse_amount(amount))
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if store is not None:
        form = dataclasses.replace(form, store=store)
    if notes is not None:
        form = dataclasses.replace(form, notes=notes or None)
    if photo_url is not None:
        form = dataclasses.replace(form, photo_url=photo_url or None)

    try:
        result = service.update_entry(schedule_id, form, ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.history:
        click.echo(f"No changes to entry {schedule_id}")
        return

    click.echo(f"Updated entry {schedule_id}")
    for change in result.history:
        label = FIELD_LABELS.get(change.field_name, change.field_name)
        click.echo(f"  {label}: {change.old_value or '(empty)'} -> {change.new_value or '(empty)'}")


@entry_group.command("delete")
@click.argument("schedule_id", metavar="ENTRY_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, schedule_id: str, yes: bool):
    """Delete an entry. Its edit history is kept."""
    service = ScheduleService(ctx.obj["db"])

    try:
        entry = service.require_entry(schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes:
        click.confirm(
            f"Delete {entry.transaction_type.value} of {format_currency(entry.amount)} "
            f"at {entry.store} on {entry.date}?",
            abort=True,
        )

    try:
        service.delete_entry(schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {schedule_id}")


@entry_group.command("history")
@click.argument("schedule_id", metavar="ENTRY_ID")
@click.pass_context
def entry_history(ctx, schedule_id: str):
    """Show the edit history of an entry, newest first."""
    service = ScheduleService(ctx.obj["db"])

    records = service.get_history_records(schedule_id)
    if not records:
        click.echo("No edits recorded.")
        return

    for record in records:
        click.echo(f"{record.timestamp:%Y-%m-%d %H:%M:%S} by {record.modified_by}")
        for change in record.changes:
            label = FIELD_LABELS.get(change.field_name, change.field_name)
            click.echo(
                f"  {label}: {change.old_value or '(empty)'} -> {change.new_value or '(empty)'}"
            )


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
