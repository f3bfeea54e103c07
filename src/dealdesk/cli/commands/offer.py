"""Offer commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.entities import OfferStatus
from dealdesk.domain.offer import OfferService
from dealdesk.domain.user import UserService
from dealdesk.utils.amount_parser import parse_amount
from dealdesk.utils.user_resolver import resolve_user


@click.group()
def offer_group():
    """Place and answer offers on deals."""
    pass


@offer_group.command("make")
@click.argument("deal_id", type=int)
@click.option("--investor", required=True, help="Bidding investor (name or ID)")
@click.option("--amount", required=True, help="Offered price")
@click.option("--message", default="", help="Note to the wholesaler")
@click.pass_context
def make_offer(ctx, deal_id: int, investor: str, amount: str, message: str):
    """Offer a price on an active deal.

    Examples:
        dealdesk offer make 3 --investor "Jane Buyer" --amount 180k
    """
    db = ctx.obj["db"]
    service = OfferService(db)
    try:
        investor_id = resolve_user(UserService(db), investor)
        offer_id = service.make_offer(
            deal_id=deal_id, investor_id=investor_id, amount=parse_amount(amount), message=message
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    offer = service.get_offer(offer_id)
    click.echo(f"Created offer {offer_id} on deal {deal_id} for ${offer.amount:,.2f}")


@offer_group.command("list")
@click.option("--deal", "deal_id", type=int, help="Only offers on this deal")
@click.option("--investor", help="Only this investor's offers (name or ID)")
@click.option("--status", type=click.Choice([s.value for s in OfferStatus]), help="Filter by status")
@click.pass_context
def list_offers(ctx, deal_id: int | None, investor: str | None, status: str | None):
    """List offers, newest first."""
    db = ctx.obj["db"]
    service = OfferService(db)
    investor_id = None
    if investor is not None:
        try:
            investor_id = resolve_user(UserService(db), investor)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

    offers = service.list_offers(deal_id=deal_id, investor_id=investor_id, status=status)
    if not offers:
        click.echo("No offers found.")
        return

    click.echo("\nOffers:")
    click.echo("-" * 64)
    for o in offers:
        click.echo(
            f"ID: {o.id:3d} | Deal {o.deal_id:3d} | Investor {o.investor_id:3d} | "
            f"${o.amount:>12,.2f} | {o.status.value}"
        )


def _respond(ctx, offer_id: int, decision: OfferStatus, wholesaler: str | None):
    db = ctx.obj["db"]
    try:
        wholesaler_id = resolve_user(UserService(db), wholesaler) if wholesaler else None
        offer = OfferService(db).respond_to_offer(offer_id, decision.value, wholesaler_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Offer {offer_id} {offer.status.value}")
    if offer.status is OfferStatus.ACCEPTED:
        click.echo(f"Deal {offer.deal_id} is now under contract")


@offer_group.command("accept")
@click.argument("offer_id", type=int)
@click.option("--wholesaler", help="Deal owner answering the offer (name or ID)")
@click.pass_context
def accept_offer(ctx, offer_id: int, wholesaler: str | None):
    """Accept an offer and put its deal under contract."""
    _respond(ctx, offer_id, OfferStatus.ACCEPTED, wholesaler)


@offer_group.command("reject")
@click.argument("offer_id", type=int)
@click.option("--wholesaler", help="Deal owner answering the offer (name or ID)")
@click.pass_context
def reject_offer(ctx, offer_id: int, wholesaler: str | None):
    """Reject an offer."""
    _respond(ctx, offer_id, OfferStatus.REJECTED, wholesaler)


def register_commands(cli):
    """Register offer commands with main CLI."""
    cli.add_command(offer_group, name="offer")
