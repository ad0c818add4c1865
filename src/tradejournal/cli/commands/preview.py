"""Import preview command."""

import click
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.entities import ImportOptions
from tradejournal.domain.trade_import import TradeImportService


@click.command("preview")
@click.argument("trade_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter")
@click.option("--no-header", is_flag=True, help="CSV file has no header row")
@click.pass_context
def preview_file(ctx, trade_file: str, delimiter: str, no_header: bool):
    """Show what importing a file would see, without importing it."""
    service = TradeImportService(ctx.obj["db"])
    options = ImportOptions(has_header=not no_header, csv_delimiter=delimiter)

    try:
        preview = service.preview(trade_file, options)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nRows: {preview.total_rows}")
    click.echo(f"Columns: {', '.join(preview.detected_columns)}")

    click.echo("\nSuggested mapping:")
    if preview.suggested_mapping:
        for source, target in preview.suggested_mapping.items():
            click.echo(f"  {source:20s} -> {target}")
    else:
        click.echo("  (none)")

    if preview.sample_data:
        click.echo(f"\nFirst {len(preview.sample_data)} row(s):")
        for row in preview.sample_data:
            click.echo("  " + " | ".join(f"{k}={v}" for k, v in row.items()))

    for warning in preview.warnings:
        click.echo(f"Warning: {warning}", err=True)


def register_commands(cli):
    """Register preview command with main CLI."""
    cli.add_command(preview_file)
