"""Bank account commands."""

import click
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.bank_account import BankAccountService
from stockledger.domain.customer import CustomerService


@click.group()
def bank_group():
    """Manage customer bank accounts."""
    pass


@bank_group.command("add")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--holder", required=True, help="Account holder name")
@click.option("--bank", "bank_name", required=True, help="Bank name")
@click.option("--account-number", required=True, help="Account number")
@click.option("--ifsc", help="IFSC code")
@click.option("--default", "make_default", is_flag=True, help="Make this the default account")
@click.pass_context
def add_bank_account(
    ctx,
    customer: str,
    holder: str,
    bank_name: str,
    account_number: str,
    ifsc: str | None,
    make_default: bool,
):
    """Add a bank account to a customer.

    CUSTOMER can be a customer name or ID. The first account added for a
    customer becomes its default.

    Examples:
        stockledger bank add "Ravi Traders" --holder "Ravi Kumar" --bank SBI --account-number 1234567890
    """
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    service = BankAccountService(db)

    try:
        account_id = service.add_bank_account(
            customer_id=customer_id,
            account_holder_name=holder,
            bank_name=bank_name,
            account_number=account_number,
            ifsc_code=ifsc,
            make_default=make_default,
        )
        account = service.get_bank_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added bank account {account.bank_name} {account.account_number} (ID: {account_id})")
    if account.is_default:
        click.echo("Set as default account")


@bank_group.command("list")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def list_bank_accounts(ctx, customer: str):
    """List a customer's bank accounts."""
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    service = BankAccountService(db)

    accounts = service.list_bank_accounts(customer_id)
    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 70)
    for account in accounts:
        marker = " *" if account.is_default else ""
        ifsc = account.ifsc_code or "-"
        click.echo(
            f"ID: {account.id:3d} | {account.bank_name:15s} | {account.account_number:18s} "
            f"| {ifsc:11s} | {account.account_holder_name}{marker}"
        )


@bank_group.command("set-default")
@click.argument("customer", metavar="CUSTOMER")
@click.argument("account_id", type=int)
@click.pass_context
def set_default_bank_account(ctx, customer: str, account_id: int):
    """Make ACCOUNT_ID the customer's default bank account."""
    db = ctx.obj["db"]
    customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)
    service = BankAccountService(db)

    try:
        service.set_default(customer_id, account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Bank account {account_id} is now the default")


def register_commands(cli):
    """Register bank account commands with main CLI."""
    cli.add_command(bank_group, name="bank")
