"""Folder watch command."""

import time

import click
from tradejournal.cli.account_resolution import resolve_account_or_exit
from tradejournal.cli.error_handling import handle_domain_error
from tradejournal.domain.account import AccountService
from tradejournal.domain.entities import ImportOptions, WatcherOptions
from tradejournal.domain.events import (
    EventBus,
    FileDetectedEvent,
    FileErrorEvent,
    FileProcessedEvent,
)
from tradejournal.domain.folder_watcher import FolderWatcherService
from tradejournal.domain.trade_import import TradeImportService


def _subscribe_echo(event_bus: EventBus) -> None:
    event_bus.subscribe(
        FileDetectedEvent,
        lambda e: click.echo(f"Found {e.file_path} ({e.file_size} bytes)"),
    )
    event_bus.subscribe(
        FileProcessedEvent,
        lambda e: click.echo(
            f"Imported {e.file_path}: {e.imported_count} trades, "
            f"{e.skipped_count} duplicates skipped"
        ),
    )
    event_bus.subscribe(
        FileErrorEvent,
        lambda e: click.echo(f"Failed {e.file_path}: {e.error_message}", err=True),
    )


@click.command("watch")
@click.argument("folder", type=click.Path(exists=True, file_okay=False))
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=WatcherOptions.interval_seconds,
    show_default=True,
    help="Seconds between scans",
)
@click.option("--pattern", default="*", show_default=True, help="File name glob to pick up")
@click.option("--recursive", is_flag=True, help="Also scan subfolders")
@click.option("--delete-after", is_flag=True, help="Delete files after a successful import")
@click.option("--no-move", is_flag=True, help="Leave files in place instead of moving them")
@click.option("--tag", help="Tag added to every imported trade")
@click.option("--once", is_flag=True, help="Run a single scan and exit")
@click.pass_context
def watch_folder(
    ctx,
    folder: str,
    account: str,
    interval: float,
    pattern: str,
    recursive: bool,
    delete_after: bool,
    no_move: bool,
    tag: str | None,
    once: bool,
):
    """Import trade files dropped into FOLDER.

    Imported files are moved to FOLDER/Processed and failed files to
    FOLDER/Errors unless --no-move or --delete-after is given.

    Examples:
        tradejournal watch ~/Downloads/trades --account Live
        tradejournal watch exports --account 1 --pattern "*.csv" --once
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    event_bus = EventBus()
    _subscribe_echo(event_bus)

    options = WatcherOptions(
        interval_seconds=interval,
        file_filter=pattern,
        include_subfolders=recursive,
        delete_after_process=delete_after,
        move_after_process=not no_move,
        import_options=ImportOptions(auto_tag=tag),
    )

    watcher = FolderWatcherService(TradeImportService(db, event_bus=event_bus))
    with watcher:
        try:
            scan = watcher.start(folder, account_id, options)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

        if not scan.success:
            handle_domain_error(ctx, scan.error)
            return

        if once:
            click.echo(f"Scan complete: {scan.processed_count} file(s) imported")
            return

        click.echo(f"Watching {folder} every {interval:g}s (Ctrl+C to stop)")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            click.echo("\nStopping...")

        state = watcher.state
        click.echo(f"Processed {state.processed_count} file(s), {state.error_count} failed")


def register_commands(cli):
    """Register watch command with main CLI."""
    cli.add_command(watch_folder)
