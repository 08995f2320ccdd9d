"""Main CLI entry point."""

import logging

import click
from schedulec.cli.error_handling import StorageErrorGroup
from schedulec.database.factories import create_database_for_mode
from schedulec.domain.mode import ModeController
from schedulec.settings import Preferences, load_config

# Import and register all commands at module level
from schedulec.cli.commands import (
    business,
    add,
    entry,
    view,
    categories,
    mode,
    summary,
    export,
)


@click.group(cls=StorageErrorGroup)
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    help="Data directory (overrides SCHEDULEC_HOME environment variable)",
    envvar="SCHEDULEC_HOME",
)
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Standalone database file (overrides SCHEDULEC_DB_PATH environment variable)",
    envvar="SCHEDULEC_DB_PATH",
)
@click.option(
    "--shared-url",
    help="SQLAlchemy URL of the shared store (overrides SCHEDULEC_SHARED_DB_URL)",
    envvar="SCHEDULEC_SHARED_DB_URL",
)
@click.option(
    "--user",
    "user_id",
    help="Acting user ID recorded on entries and history (overrides SCHEDULEC_USER)",
    envvar="SCHEDULEC_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx,
    home: str | None,
    db_path: str | None,
    shared_url: str | None,
    user_id: str | None,
    verbose: bool,
):
    """Schedulec - Business income and expense tracking.

    Log income and expense entries against your businesses, keep a history
    of every edit, and switch between a local and a shared data store.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command (not for help)
    if ctx.invoked_subcommand is not None:
        config = load_config(
            data_dir=home,
            database_path=db_path,
            shared_database_url=shared_url,
            user_id=user_id,
        )
        try:
            preferences = Preferences(config.preferences_path)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        controller = ModeController(
            preferences,
            lambda data_mode: create_database_for_mode(data_mode, config),
        )
        controller.initialize()
        ctx.call_on_close(controller.close)

        ctx.obj["config"] = config
        ctx.obj["user_id"] = config.user_id
        ctx.obj["mode_controller"] = controller
        ctx.obj["db"] = controller.database


# Register all commands
business.register_commands(cli)
add.register_commands(cli)
entry.register_commands(cli)
view.register_commands(cli)
categories.register_commands(cli)
mode.register_commands(cli)
summary.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
