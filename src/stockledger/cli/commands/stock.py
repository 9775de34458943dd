"""Stock delivery command."""

import click
from stockledger.cli.balance_display import echo_balance_change
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.customer import CustomerService
from stockledger.domain.entities import StockItem
from stockledger.domain.ledger_service import LedgerService
from stockledger.domain.money import Money
from stockledger.domain.transaction import TransactionService
from stockledger.utils.date_parser import parse_datetime
from stockledger.utils.item_parser import parse_stock_item


@click.command("stock")
@click.argument("customer", metavar="CUSTOMER")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Delivered item as CATEGORY:QUANTITY:RATE (e.g. 'Type 1:10:5.50'); repeatable",
)
@click.option(
    "--date",
    "occurred",
    default="now",
    show_default=True,
    help="Delivery date and time (YYYY-MM-DD [HH:MM] or relative like 'today', 'yesterday')",
)
@click.option("--notes", help="Notes")
@click.pass_context
def record_stock(ctx, customer: str, items: tuple[str, ...], occurred: str, notes: str | None):
    """Record a stock delivery for a customer.

    CUSTOMER can be a customer name or ID. Each --item becomes one stock
    transaction; all items are recorded together or not at all.

    Examples:
        stockledger stock "Ravi Traders" --item "Type 1:10:5"
        stockledger stock 1 --item "Type 1:10:5" --item "Type 2:2:25" --date 2024-01-15
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    transaction_service = TransactionService(db)
    ledger_service = LedgerService(db, transaction_service)

    try:
        stock_items: list[StockItem] = [parse_stock_item(text) for text in items]
    except ValueError as e:
        click.echo(f"Error: Invalid item: {e}", err=True)
        ctx.exit(1)

    try:
        occurred_at = parse_datetime(occurred)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        before = ledger_service.get_balance(customer_id)
        transaction_ids = transaction_service.record_stock(
            customer_id=customer_id,
            items=stock_items,
            occurred_at=occurred_at,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    for txn_id, item in zip(transaction_ids, stock_items):
        amount = Money(item.unit_rate) * item.quantity
        click.echo(
            f"Recorded stock {txn_id}: {item.quality_category.value} "
            f"{item.quantity} x {Money(item.unit_rate).format(symbol=True)} "
            f"= {amount.format(symbol=True)}"
        )

    contribution = Money.total(Money(item.unit_rate) * item.quantity for item in stock_items)
    echo_balance_change(before, contribution)


def register_commands(cli):
    """Register stock command with main CLI."""
    cli.add_command(record_stock)
