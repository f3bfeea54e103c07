"""Deal listing commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.deal import DealService
from dealdesk.domain.entities import DealStatus, PropertyType
from dealdesk.domain.user import UserService
from dealdesk.utils.amount_parser import parse_amount
from dealdesk.utils.user_resolver import resolve_user


def _optional_amount(value: str | None):
    return parse_amount(value) if value is not None else None


@click.group()
def deal_group():
    """Manage deals."""
    pass


@deal_group.command("create")
@click.option("--wholesaler", required=True, help="Wholesaler name or ID")
@click.option("--address", required=True, help="Street address")
@click.option("--city", required=True, help="City")
@click.option("--state", required=True, help="Two-letter state code")
@click.option(
    "--type", "property_type", required=True,
    type=click.Choice([t.value for t in PropertyType]), help="Property type",
)
@click.option("--price", required=True, help="Asking price (e.g. 185000 or 185k)")
@click.option("--arv", help="After-repair value estimate")
@click.option("--rehab", help="Rehab cost estimate")
@click.option("--assignment-fee", help="Assignment fee included in the asking price")
@click.option("--description", help="Listing description")
@click.pass_context
def create_deal(
    ctx,
    wholesaler: str,
    address: str,
    city: str,
    state: str,
    property_type: str,
    price: str,
    arv: str | None,
    rehab: str | None,
    assignment_fee: str | None,
    description: str | None,
):
    """List a new deal.

    Complete listings go live right away; listings with quality warnings
    wait for approval.

    Examples:
        dealdesk deal create --wholesaler "Acme Wholesale" --address "12 Oak St" \\
            --city Houston --state TX --type SFH --price 185k --arv 260k --rehab 40k
    """
    db = ctx.obj["db"]
    service = DealService(db)
    try:
        wholesaler_id = resolve_user(UserService(db), wholesaler)
        deal_id = service.create_deal(
            wholesaler_id=wholesaler_id,
            address=address,
            city=city,
            state=state,
            property_type=property_type,
            asking_price=parse_amount(price),
            arv_estimate=_optional_amount(arv),
            rehab_estimate=_optional_amount(rehab),
            assignment_fee=_optional_amount(assignment_fee),
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    deal = service.get_deal(deal_id)
    click.echo(f"Created deal {deal_id} ({deal.status.value})")


@deal_group.command("list")
@click.option("--wholesaler", help="Only list this wholesaler's deals (name or ID)")
@click.option("--status", type=click.Choice([s.value for s in DealStatus]), help="Filter by status")
@click.pass_context
def list_deals(ctx, wholesaler: str | None, status: str | None):
    """List deals, newest first."""
    db = ctx.obj["db"]
    service = DealService(db)
    wholesaler_id = None
    if wholesaler is not None:
        try:
            wholesaler_id = resolve_user(UserService(db), wholesaler)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

    deals = service.list_deals(wholesaler_id=wholesaler_id, status=status)
    if not deals:
        click.echo("No deals found.")
        return

    click.echo("\nDeals:")
    click.echo("-" * 88)
    for d in deals:
        location = f"{d.city}, {d.state}"
        click.echo(
            f"ID: {d.id:3d} | {d.address:24s} | {location:18s} | {d.property_type:12s} | "
            f"${d.asking_price:>12,.2f} | {d.status.value}"
        )


@deal_group.command("approve")
@click.argument("deal_id", type=int)
@click.pass_context
def approve_deal(ctx, deal_id: int):
    """Publish a deal that is pending review."""
    service = DealService(ctx.obj["db"])
    try:
        service.approve_deal(deal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deal {deal_id} is now active")


def register_commands(cli):
    """Register deal commands with main CLI."""
    cli.add_command(deal_group, name="deal")
