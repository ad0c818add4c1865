"""Account management commands."""

import click
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.account import AccountService


@click.group()
def account_group():
    """Manage trading accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--broker", default="", help="Broker name")
@click.pass_context
def create_account(ctx, name: str, broker: str):
    """Create a new account.

    Examples:
        tradejournal account create "Live"
        tradejournal account create "Demo" --broker "IC Markets"
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(name=name, broker=broker)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        broker = acc.broker or "-"
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Broker: {broker}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
