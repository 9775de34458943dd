"""Transaction lookup commands."""

import click
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.customer import CustomerService
from stockledger.domain.entities import Transaction
from stockledger.domain.transaction import TransactionService


def describe_transaction(txn: Transaction) -> str:
    """One-line description: category, quantity and rate, or method and reference."""
    if txn.is_stock:
        return f"{txn.quality_category.value} {txn.quantity} x {txn.unit_rate}"
    detail = txn.method.value.upper()
    if txn.external_reference:
        detail = f"{detail} {txn.external_reference}"
    return detail


@click.group()
def transaction_group():
    """Look up recorded transactions."""
    pass


@transaction_group.command("search")
@click.argument("query")
@click.pass_context
def search_transactions(ctx, query: str):
    """Search transactions by notes, reference or quality category.

    Examples:
        stockledger transaction search NEFT0001
        stockledger transaction search "type 2"
    """
    db = ctx.obj["db"]
    transactions = TransactionService(db).search_transactions(query)
    if not transactions:
        click.echo(f"No transactions matching '{query}'.")
        return

    names = {c.id: c.name for c in CustomerService(db).list_customers()}
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 90)
    for txn in transactions:
        customer = names.get(txn.customer_id, str(txn.customer_id))
        click.echo(
            f"ID: {txn.id:4d} | {txn.occurred_at:%Y-%m-%d %H:%M} | {customer[:20]:20s} | "
            f"{txn.kind.value:7s} | {describe_transaction(txn)[:24]:24s} | {txn.amount.format(symbol=True):>14s}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show one transaction in full."""
    db = ctx.obj["db"]

    try:
        txn = TransactionService(db).require_transaction(transaction_id)
        customer = CustomerService(db).require_customer(txn.customer_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nTransaction {txn.id} ({txn.kind.value})")
    click.echo("-" * 40)
    fields = [
        ("Customer", f"{customer.name} (ID: {customer.id})"),
        ("Date", f"{txn.occurred_at:%Y-%m-%d %H:%M}"),
        ("Details", describe_transaction(txn)),
        ("Amount", txn.amount.format(symbol=True)),
        ("Bank acct", txn.bank_account_id),
        ("Notes", txn.notes),
    ]
    for label, value in fields:
        if value:
            click.echo(f"{label + ':':11s}{value}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
