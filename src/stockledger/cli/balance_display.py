"""CLI helpers for rendering balances."""

import click
from stockledger.domain.balance import BalanceSummary
from stockledger.domain.money import Money


def format_balance(amount: Money) -> str:
    """Render a net balance as an unsigned amount with its Due/Advance label."""
    label = BalanceSummary(Money.zero(), Money.zero(), amount).label
    return f"{abs(amount).format(symbol=True)} {label}"


def echo_balance_change(before: BalanceSummary, contribution: Money) -> None:
    """Show existing balance, the change and the final balance."""
    click.echo(f"Existing balance: {format_balance(before.net_balance)}")
    click.echo(f"This transaction: {contribution.format(symbol=True)}")
    click.echo(f"Final balance:    {format_balance(before.project(contribution))}")
