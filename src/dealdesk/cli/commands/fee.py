"""Fee calculator commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.entities import SubscriptionTier
from dealdesk.domain.fees import calculate_assignment_fee, calculate_platform_fee
from dealdesk.utils.amount_parser import parse_amount


@click.group()
def fee_group():
    """Calculate platform and assignment fees."""
    pass


@fee_group.command("platform")
@click.argument("sale_price")
@click.option(
    "--tier",
    type=click.Choice([t.value for t in SubscriptionTier]),
    default="free",
    show_default=True,
    help="Seller subscription tier",
)
@click.pass_context
def platform_fee(ctx, sale_price: str, tier: str) -> None:
    """Show the platform fee on a sale.

    Examples:
        dealdesk fee platform 100000 --tier premium
    """
    try:
        price = parse_amount(sale_price)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    if price < 0:
        click.echo("Error: Sale price cannot be negative", err=True)
        ctx.exit(1)
        return

    result = calculate_platform_fee(price, tier)
    click.echo(f"Sale price:        ${price:,.2f}")
    click.echo(f"Platform fee:      ${result.fee:,.2f} ({result.fee_percent}%)")
    click.echo(f"Net to wholesaler: ${result.net_to_wholesaler:,.2f}")


@fee_group.command("assignment")
@click.argument("sale_price")
@click.argument("purchase_price")
@click.pass_context
def assignment_fee(ctx, sale_price: str, purchase_price: str) -> None:
    """Show the spread between contract and resale price.

    Examples:
        dealdesk fee assignment 185k 160k
    """
    try:
        sale = parse_amount(sale_price)
        purchase = parse_amount(purchase_price)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    result = calculate_assignment_fee(sale, purchase)
    click.echo(f"Assignment fee: ${result.fee:,.2f} ({result.percentage}% of purchase price)")


def register_commands(cli):
    """Register fee commands with main CLI."""
    cli.add_command(fee_group, name="fee")
