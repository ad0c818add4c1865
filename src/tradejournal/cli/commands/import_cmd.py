"""Trade import command."""

import click
from tradejournal.cli.account_resolution import resolve_account_or_exit
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.account import AccountService
from tradejournal.domain.entities import ImportOptions, ImportResult
from tradejournal.domain.trade_import import TradeImportService


def parse_mapping_pairs(ctx, param, values: tuple[str, ...]) -> dict[str, str] | None:
    """Click callback turning repeated SOURCE=FIELD options into a dict."""
    if not values:
        return None

    mapping = {}
    for value in values:
        source, sep, target = value.partition("=")
        if not sep or not source.strip() or not target.strip():
            raise click.BadParameter(f"expected SOURCE=FIELD, got '{value}'")
        mapping[source.strip()] = target.strip()
    return mapping


def echo_import_result(result: ImportResult) -> None:
    """Print counts and row errors of an import."""
    click.echo("\nImport complete:")
    click.echo(f"  Rows: {result.total_rows}")
    click.echo(f"  Imported: {result.success_count} trades")
    click.echo(f"  Skipped: {result.skipped_count} duplicates")
    if result.errors:
        click.echo(f"  Errors: {result.error_count}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


@click.command("import")
@click.argument("trade_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name or ID")
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter")
@click.option("--no-header", is_flag=True, help="CSV file has no header row")
@click.option(
    "--date-format",
    default=ImportOptions.date_format,
    show_default=True,
    help="strptime pattern tried before free-form date parsing",
)
@click.option("--allow-duplicates", is_flag=True, help="Import rows that already exist")
@click.option("--ignore-errors", is_flag=True, help="Keep going past --max-errors")
@click.option(
    "--max-errors",
    type=click.IntRange(min=0),
    default=ImportOptions.max_errors,
    show_default=True,
    help="Stop classifying rows after this many errors",
)
@click.option("--tag", help="Tag added to every imported trade")
@click.option(
    "--map",
    "column_mapping",
    multiple=True,
    callback=parse_mapping_pairs,
    metavar="SOURCE=FIELD",
    help="Map a source column to a trade field (repeatable); replaces the default mapping",
)
@click.pass_context
def import_trades(
    ctx,
    trade_file: str,
    account: str,
    delimiter: str,
    no_header: bool,
    date_format: str,
    allow_duplicates: bool,
    ignore_errors: bool,
    max_errors: int,
    tag: str | None,
    column_mapping: dict[str, str] | None,
):
    """Import trades from a CSV or JSON file.

    Examples:
        tradejournal import history.csv --account Live
        tradejournal import export.csv --account 1 --delimiter ";" --tag mt5
        tradejournal import trades.json --account Live --map Ticker=Symbol --map Qty=Volume
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    options = ImportOptions(
        has_header=not no_header,
        csv_delimiter=delimiter,
        date_format=date_format,
        skip_duplicates=not allow_duplicates,
        ignore_errors=ignore_errors,
        max_errors=max_errors,
        auto_tag=tag,
        column_mapping=column_mapping,
    )

    service = TradeImportService(db)
    try:
        result = service.import_file(trade_file, account_id, options)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    echo_import_result(result)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_trades)
