"""CLI helper for turning an account name or ID into an ID."""

from __future__ import annotations

import click
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.account import AccountService
from tradejournal.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
