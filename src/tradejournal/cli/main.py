"""Main CLI entry point."""

import logging

import click
from tradejournal.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from tradejournal.cli.commands import (
    account,
    import_cmd,
    preview,
    trades,
    watch,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Tradejournal - Trading journal.

    Import trade history from broker CSV and JSON exports, either one file at
    a time or by watching a folder for new files.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
preview.register_commands(cli)
trades.register_commands(cli)
watch.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
