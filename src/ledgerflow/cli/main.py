"""Main CLI entry point."""

import click
from ledgerflow.database.factories import create_sqlite_database
from ledgerflow.logging_config import configure_logging

# Import and register all commands at module level
from ledgerflow.cli.commands import (
    client,
    import_cmd,
    line,
    statement,
    check,
    model,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERFLOW_DB_PATH environment variable)",
    envvar="LEDGERFLOW_DB_PATH",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Log progress to stderr",
    envvar="LEDGERFLOW_VERBOSE",
)
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Ledgerflow - Trial balance classification and statement builder.

    Import trial balances from spreadsheets or documents, classify their
    lines into statement sections and categories, and review the resulting
    balance sheet and income statement.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
client.register_commands(cli)
import_cmd.register_commands(cli)
line.register_commands(cli)
statement.register_commands(cli)
check.register_commands(cli)
model.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
