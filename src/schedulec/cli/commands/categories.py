"""Category listing command."""

import click
from schedulec.domain.categories import TransactionType, categories_for


@click.command("categories")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Only list categories of one transaction type",
)
def list_categories(transaction_type: str | None):
    """List the Schedule C categories.

    Examples:
        schedulec categories
        schedulec categories --type income
    """
    types = [TransactionType(transaction_type)] if transaction_type else list(TransactionType)
    for index, kind in enumerate(types):
        if index:
            click.echo()
        click.echo(f"{kind.value.capitalize()} categories:")
        for category in categories_for(kind):
            click.echo(f"  {category}")


def register_commands(cli):
    """Register categories command with main CLI."""
    cli.add_command(list_categories)
