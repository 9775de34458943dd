"""Payment command."""

import click
from stockledger.cli.balance_display import echo_balance_change
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.bank_account import BankAccountService
from stockledger.domain.customer import CustomerService
from stockledger.domain.entities import PaymentMethod
from stockledger.domain.ledger_service import LedgerService
from stockledger.domain.money import Money
from stockledger.domain.transaction import TransactionService
from stockledger.utils.amount_parser import parse_amount
from stockledger.utils.date_parser import parse_datetime


@click.command("payment")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--amount", required=True, help="Amount received (e.g., 1500 or ₹1,500.00)")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method",
)
@click.option("--reference", help="Transaction reference (required for bank and UPI)")
@click.option(
    "--bank-account",
    "bank_account_id",
    type=int,
    help="Customer bank account ID for bank transfers (defaults to the default account)",
)
@click.option(
    "--date",
    "occurred",
    default="now",
    show_default=True,
    help="Payment date and time (YYYY-MM-DD [HH:MM] or relative like 'today', 'yesterday')",
)
@click.option("--notes", help="Notes")
@click.pass_context
def record_payment(
    ctx,
    customer: str,
    amount: str,
    method: str,
    reference: str | None,
    bank_account_id: int | None,
    occurred: str,
    notes: str | None,
):
    """Record a payment received from a customer.

    CUSTOMER can be a customer name or ID. Payments settle the oldest
    outstanding deliveries first.

    Examples:
        stockledger payment "Ravi Traders" --amount 500
        stockledger payment 1 --amount 1200 --method upi --reference 4123987
        stockledger payment 1 --amount 5000 --method bank --reference NEFT001
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    transaction_service = TransactionService(db)
    ledger_service = LedgerService(db, transaction_service)
    payment_method = PaymentMethod(method.lower())

    try:
        payment_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        occurred_at = parse_datetime(occurred)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    if payment_method.requires_bank_account and bank_account_id is None:
        default_account = BankAccountService(db).get_default_bank_account(customer_id)
        if default_account is not None:
            bank_account_id = default_account.id

    try:
        before = ledger_service.get_balance(customer_id)
        txn_id = transaction_service.record_payment(
            customer_id=customer_id,
            method=payment_method,
            amount=payment_amount,
            occurred_at=occurred_at,
            external_reference=reference,
            bank_account_id=bank_account_id,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded {payment_method.value} payment {txn_id}: "
        f"{Money(payment_amount).format(symbol=True)}"
    )
    echo_balance_change(before, -Money(payment_amount))


def register_commands(cli):
    """Register payment command with main CLI."""
    cli.add_command(record_payment)
