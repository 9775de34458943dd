"""Purchase insights command."""

import click
from stockledger.cli.customer_resolution import resolve_customer_or_exit
from stockledger.cli.error_handling import handle_domain_error
from stockledger.domain.customer import CustomerService
from stockledger.domain.insights import InsightsService, TimeWindow
from stockledger.utils.item_parser import parse_quality_category


@click.command("insights")
@click.option(
    "--window",
    type=click.Choice([w.value for w in TimeWindow], case_sensitive=False),
    default=TimeWindow.ALL.value,
    show_default=True,
    help="Time window: today, week (since Monday), month (since the 1st) or all",
)
@click.option(
    "--category",
    "categories",
    multiple=True,
    help="Quality category to include (e.g. 'Type 1'); repeatable, defaults to all",
)
@click.option("--customer", help="Limit to one customer (name or ID)")
@click.option("--daily", is_flag=True, help="Also show totals per day and category")
@click.pass_context
def show_insights(ctx, window: str, categories: tuple[str, ...], customer: str | None, daily: bool):
    """Show stock purchase totals by quality category.

    Examples:
        stockledger insights --window month
        stockledger insights --window week --category "Type 1" --category "Type 2"
        stockledger insights --customer "Ravi Traders" --daily
    """
    db = ctx.obj["db"]

    customer_id = None
    if customer is not None:
        customer_id = resolve_customer_or_exit(ctx, CustomerService(db), customer)

    try:
        quality_categories = [parse_quality_category(c) for c in categories]
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        report = InsightsService(db).get_insights(
            window=TimeWindow(window.lower()),
            quality_categories=quality_categories,
            customer_id=customer_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if report.start_date is not None:
        click.echo(f"\nInsights {report.start_date} to {report.end_date}")
    else:
        click.echo("\nInsights (all time)")

    if not report.per_category:
        click.echo("No stock deliveries found.")
        return

    click.echo("-" * 62)
    click.echo(f"{'Category':10s} {'Deliveries':>10s} {'Quantity':>18s} {'Amount':>20s}")
    for item in report.per_category:
        click.echo(
            f"{item.quality_category.value:10s} {item.count:10d} "
            f"{item.total_quantity:>18,} {item.total_amount.format(symbol=True):>20s}"
        )
    click.echo("-" * 62)
    summary = report.summary
    click.echo(
        f"{'Total':10s} {summary.total_purchases:10d} "
        f"{summary.total_quantity:>18,} {summary.total_amount.format(symbol=True):>20s}"
    )

    if daily:
        click.echo("\nBy day:")
        for row in report.daily:
            click.echo(
                f"{row.day}  {row.quality_category.value:10s} "
                f"{row.total_quantity:>14,} {row.total_amount.format(symbol=True):>18s}"
            )


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(show_insights)
