"""Main CLI entry point."""

import click
from stockledger.database.factories import create_sqlite_database
from stockledger.logging_setup import configure_logging, get_logger

# Import and register all commands at module level
from stockledger.cli.commands import (
    balance,
    bank,
    customer,
    history,
    insights,
    payment,
    stock,
    transaction,
)

logger = get_logger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides STOCKLEDGER_DB_PATH environment variable)",
    envvar="STOCKLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity (overrides STOCKLEDGER_LOG_LEVEL environment variable)",
    envvar="STOCKLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Stockledger - Customer stock and payment ledger.

    Record stock deliveries and payments per customer and track the running
    balance, payment status of every delivery and purchase insights.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
        logger.debug("Using database %s", db.database_url)


# Register all commands
customer.register_commands(cli)
bank.register_commands(cli)
stock.register_commands(cli)
payment.register_commands(cli)
balance.register_commands(cli)
history.register_commands(cli)
insights.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
