"""CLI error handling helpers."""

import click

from tradejournal.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error to stderr and exit with status 1."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
