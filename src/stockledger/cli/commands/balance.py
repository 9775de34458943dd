"""Balance command."""

import click
from stockledger.cli.balance_display import format_balance
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.customer import CustomerService
from stockledger.domain.ledger_service import LedgerService


@click.command("balance")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def show_balance(ctx, customer: str):
    """Show a customer's pending, paid and net balance.

    CUSTOMER can be a customer name or ID.
    """
    db = ctx.obj["db"]
    customer_service = CustomerService(db)
    customer_id = resolve_customer_or_exit(ctx, customer_service, customer)

    try:
        details = customer_service.require_customer(customer_id)
        summary = LedgerService(db).get_balance(customer_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBalance for {details.name} (ID: {details.id})")
    click.echo("-" * 40)
    click.echo(f"{'Total pending:':16s}{summary.total_pending.format(symbol=True):>20s}")
    click.echo(f"{'Total paid:':16s}{summary.total_paid.format(symbol=True):>20s}")
    click.echo(f"{'Net balance:':16s}{format_balance(summary.net_balance):>20s}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
