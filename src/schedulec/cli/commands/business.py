"""Business management commands."""

import click
from schedulec.cli.business_resolution import resolve_business_or_exit
from schedulec.cli.error_handling import handle_domain_error
from schedulec.domain.business import BusinessService
from schedulec.domain.categories import BUSINESS_TYPES
from schedulec.domain.errors import DomainError


@click.group()
def business_group():
    """Manage businesses."""
    pass


@business_group.command("create")
@click.argument("name", metavar="BUSINESS_NAME")
@click.option(
    "--type",
    "business_type",
    type=click.Choice(BUSINESS_TYPES, case_sensitive=False),
    default=BUSINESS_TYPES[0],
    show_default=True,
    help="Business type",
)
@click.pass_context
def create_business(ctx, name: str, business_type: str):
    """Create a new business.

    Examples:
        schedulec business create "Acme" --type Retail
        schedulec business create "Consulting"
    """
    service = BusinessService(ctx.obj["db"])

    # click.Choice returns the canonical spelling
    try:
        business_id = service.add_business(
            name=name, user_id=ctx.obj["user_id"], business_type=business_type
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created business '{name.strip()}' (ID: {business_id})")


@business_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated businesses")
@click.pass_context
def list_businesses(ctx, include_inactive: bool):
    """List businesses."""
    service = BusinessService(ctx.obj["db"])

    businesses = service.list_businesses(include_inactive=include_inactive)
    if not businesses:
        click.echo("No businesses found.")
        return

    click.echo("\nBusinesses:")
    click.echo("-" * 80)
    for business in businesses:
        status = "" if business.is_active else " (inactive)"
        click.echo(f"{business.id} | {business.name:25s} | {business.business_type}{status}")


@business_group.command("rename")
@click.argument("business", metavar="BUSINESS")
@click.argument("new_name", metavar="NEW_NAME")
@click.option(
    "--type",
    "business_type",
    type=click.Choice(BUSINESS_TYPES, case_sensitive=False),
    help="New business type (optional)",
)
@click.pass_context
def rename_business(ctx, business: str, new_name: str, business_type: str | None) -> None:
    """Rename a business.

    BUSINESS can be a business name or ID. Entries already saved keep the
    name they were recorded with.
    """
    service = BusinessService(ctx.obj["db"])
    business_id = resolve_business_or_exit(ctx, service, business)

    try:
        updated = service.update_business(business_id, name=new_name, business_type=business_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed business {business_id} to '{updated.name}'")


@business_group.command("deactivate")
@click.argument("business", metavar="BUSINESS")
@click.pass_context
def deactivate_business(ctx, business: str) -> None:
    """Deactivate a business (entries are kept)."""
    service = BusinessService(ctx.obj["db"])
    business_id = resolve_business_or_exit(ctx, service, business)

    try:
        updated = service.deactivate_business(business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated business '{updated.name}'")


@business_group.command("activate")
@click.argument("business_id", metavar="BUSINESS_ID")
@click.pass_context
def activate_business(ctx, business_id: str) -> None:
    """Reactivate a deactivated business by ID."""
    service = BusinessService(ctx.obj["db"])

    try:
        updated = service.reactivate_business(business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated business '{updated.name}'")


@business_group.command("types")
def list_business_types():
    """List the available business types."""
    for business_type in BUSINESS_TYPES:
        click.echo(business_type)


def register_commands(cli):
    """Register business commands with main CLI."""
    cli.add_command(business_group, name="business")
