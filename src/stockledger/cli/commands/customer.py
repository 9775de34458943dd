"""Customer management commands."""

import click
from stockledger.cli.balance_display import format_balance
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.bank_account import BankAccountService
from stockledger.domain.customer import CustomerService
from stockledger.domain.ledger_service import LedgerService


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--phone", required=True, help="Contact phone number")
@click.option("--email", help="Email address")
@click.option("--address", help="Postal address")
@click.option("--company", help="Company name")
@click.option("--pan", help="PAN (must be unique)")
@click.option("--gst", help="GST number (must be unique)")
@click.option("--aadhaar", help="Aadhaar number")
@click.pass_context
def create_customer(
    ctx,
    name: str,
    phone: str,
    email: str | None,
    address: str | None,
    company: str | None,
    pan: str | None,
    gst: str | None,
    aadhaar: str | None,
):
    """Create a new customer.

    Examples:
        stockledger customer create "Ravi Traders" --phone 9876543210
        stockledger customer create "Asha" --phone 9000000000 --gst 29ABCDE1234F1Z5
    """
    db = ctx.obj["db"]
    service = CustomerService(db)

    try:
        customer_id = service.create_customer(
            name=name,
            phone_number=phone,
            email=email,
            address=address,
            company_name=company,
            pan_number=pan,
            gst_number=gst,
            aadhaar_number=aadhaar,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created customer '{name.strip()}' (ID: {customer_id})")


def _echo_customers(customers) -> None:
    click.echo("\nCustomers:")
    click.echo("-" * 70)
    for c in customers:
        company = f" | {c.company_name}" if c.company_name else ""
        click.echo(f"ID: {c.id:3d} | {c.name:25s} | {c.phone_number}{company}")


@customer_group.command("list")
@click.pass_context
def list_customers(ctx):
    """List all customers."""
    db = ctx.obj["db"]
    service = CustomerService(db)

    customers = service.list_customers()
    if not customers:
        click.echo("No customers found.")
        return
    _echo_customers(customers)


@customer_group.command("search")
@click.argument("query")
@click.pass_context
def search_customers(ctx, query: str):
    """Search customers by name, phone, company, PAN or GST number.

    Examples:
        stockledger customer search ravi
        stockledger customer search 98765
    """
    db = ctx.obj["db"]
    service = CustomerService(db)

    customers = service.search_customers(query)
    if not customers:
        click.echo(f"No customers matching '{query}'.")
        return
    _echo_customers(customers)


@customer_group.command("show")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def show_customer(ctx, customer: str):
    """Show customer details, bank accounts and balance.

    CUSTOMER can be a customer name or ID.
    """
    db = ctx.obj["db"]
    service = CustomerService(db)
    customer_id = resolve_customer_or_exit(ctx, service, customer)

    try:
        details = service.require_customer(customer_id)
        accounts = BankAccountService(db).list_bank_accounts(customer_id)
        balance = LedgerService(db).get_balance(customer_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{details.name} (ID: {details.id})")
    click.echo("-" * 60)
    fields = [
        ("Phone", details.phone_number),
        ("Email", details.email),
        ("Address", details.address),
        ("Company", details.company_name),
        ("PAN", details.pan_number),
        ("GST", details.gst_number),
        ("Aadhaar", details.aadhaar_number),
    ]
    for label, value in fields:
        if value:
            click.echo(f"{label + ':':10s}{value}")

    click.echo("\nBank accounts:")
    if not accounts:
        click.echo("  (none)")
    for account in accounts:
        marker = " (default)" if account.is_default else ""
        click.echo(
            f"  ID: {account.id:3d} | {account.bank_name} {account.account_number} "
            f"| {account.account_holder_name}{marker}"
        )

    click.echo(f"\nBalance: {format_balance(balance.net_balance)}")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
