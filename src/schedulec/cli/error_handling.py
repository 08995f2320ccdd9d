"""CLI error handling helpers."""

import click

from schedulec.domain.errors import DomainError, StorageError


def handle_domain_error(ctx: click.Context, error: DomainError | StorageError | ValueError) -> None:
    """Render a domain or storage error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


class StorageErrorGroup(click.Group):
    """Command group that reports store failures from any subcommand as CLI errors."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except StorageError as e:
            handle_domain_error(ctx, e)
