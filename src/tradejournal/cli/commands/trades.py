"""Trade listing command."""

import click
from tradejournal.cli.account_resolution import resolve_account_or_exit
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.account import AccountService
from tradejournal.domain.trade import TradeService


def _fmt(value) -> str:
    return "-" if value is None else f"{value.normalize():f}"


@click.command("trades")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--symbol", help="Only show trades for this symbol")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of trades")
@click.pass_context
def list_trades(ctx, account: str, symbol: str | None, limit: int | None):
    """List stored trades, newest first."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        trades = TradeService(db).list_trades(account_id, symbol=symbol, limit=limit)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not trades:
        click.echo("No trades found.")
        return

    click.echo(f"\nFound {len(trades)} trade(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':>5s}  {'Entry time':19s}  {'Symbol':10s}  {'Side':4s}  "
        f"{'Volume':>10s}  {'Entry':>12s}  {'Exit':>12s}  {'P/L':>10s}"
    )
    for trade in trades:
        click.echo(
            f"{trade.id:5d}  {trade.entry_time:%Y-%m-%d %H:%M:%S}  {trade.symbol:10s}  "
            f"{trade.direction.value:4s}  {_fmt(trade.volume):>10s}  "
            f"{_fmt(trade.entry_price):>12s}  {_fmt(trade.exit_price):>12s}  "
            f"{_fmt(trade.profit_loss):>10s}"
        )


def register_commands(cli):
    """Register trades command with main CLI."""
    cli.add_command(list_trades)
