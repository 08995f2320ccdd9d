"""Data mode commands."""

import click
from schedulec.domain.entities import DataMode
from schedulec.domain.errors import StorageError


@click.group("mode")
def mode_group():
    """Show or change where entries are stored."""
    pass


@mode_group.command("show")
@click.pass_context
def show_mode(ctx):
    """Show the current data mode."""
    controller = ctx.obj["mode_controller"]
    config = ctx.obj["config"]

    current = controller.get_mode()
    click.echo(f"Mode: {current.value}")
    if current is DataMode.SHARED:
        click.echo(f"Store: {config.shared_database_url}")
    else:
        click.echo(f"Store: {config.local_database_path}")
    if not controller.mode_was_explicitly_set:
        click.echo("(default; run 'schedulec mode set' to choose)")


@mode_group.command("set")
@click.argument(
    "new_mode",
    type=click.Choice([DataMode.STANDALONE.value, DataMode.SHARED.value]),
)
@click.pass_context
def set_mode(ctx, new_mode: str):
    """Switch between the standalone and shared store.

    Entries are not copied between stores.

    Examples:
        schedulec mode set shared
        schedulec mode set standalone
    """
    controller = ctx.obj["mode_controller"]

    try:
        result = controller.set_mode(new_mode == DataMode.SHARED.value)
    except StorageError as e:
        click.echo(f"Error: Could not open the {new_mode} store: {e}", err=True)
        ctx.exit(1)
    ctx.obj["db"] = controller.database
    click.echo(f"Data mode set to {result.value}")


def register_commands(cli):
    """Register mode commands with main CLI."""
    cli.add_command(mode_group, name="mode")
