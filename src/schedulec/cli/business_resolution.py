"""CLI helpers for business resolution."""

from __future__ import annotations

import click
from schedulec.domain.business import BusinessService
from schedulec.utils.business_resolver import resolve_business


def resolve_business_or_exit(
    ctx: click.Context, business_service: BusinessService, business: str
) -> str:
    """Resolve business name or ID, or exit with a CLI error."""
    try:
        return resolve_business(business_service, business)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
