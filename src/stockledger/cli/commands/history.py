"""Transaction history command."""

import click
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.cli.commands.transaction import describe_transaction
from stockledger.domain.customer import CustomerService
from stockledger.domain.ledger_service import LedgerService
from stockledger.utils.date_parser import parse_date


@click.command("history")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--verbose", "-v", is_flag=True, help="Show notes under each transaction")
@click.pass_context
def show_history(ctx, customer: str, start_date: str | None, end_date: str | None, verbose: bool):
    """Show a customer's transactions with running balance and payment status.

    CUSTOMER can be a customer name or ID. Running balances always include
    transactions before --start-date.

    Examples:
        stockledger history "Ravi Traders"
        stockledger history 1 --start-date "this month"
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    try:
        entries = LedgerService(db).history(customer_id, start_date=start, end_date=end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No transactions found.")
        return

    header = (
        f"{'ID':>5s}  {'Date':16s}  {'Kind':7s}  {'Details':24s}  "
        f"{'Amount':>14s}  {'Balance':>14s}  Status"
    )
    click.echo(header)
    click.echo("-" * len(header))
    for entry in entries:
        txn = entry.transaction
        line = entry.line
        status = line.payment_status.value if line.payment_status else ""
        if line.outstanding.is_positive():
            status = f"{status} ({line.outstanding.format(symbol=True)} due)"
        elif line.excess.is_positive():
            status = f"{status} (+{line.excess.format(symbol=True)})"
        click.echo(
            f"{txn.id:5d}  {txn.occurred_at:%Y-%m-%d %H:%M}  {txn.kind.value:7s}  "
            f"{describe_transaction(txn)[:24]:24s}  {line.contribution.format():>14s}  "
            f"{line.running_balance.format():>14s}  {status}"
        )
        if verbose and txn.notes:
            click.echo(f"{'':7s}Notes: {txn.notes}")


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(show_history)
