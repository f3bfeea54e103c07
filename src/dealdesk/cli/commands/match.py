"""Matching commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.matchmaking import MatchmakingService
from dealdesk.domain.user import UserService
from dealdesk.utils.user_resolver import resolve_user


@click.group()
def match_group():
    """Match deals and investors."""
    pass


@match_group.command("deals")
@click.argument("investor", metavar="INVESTOR")
@click.pass_context
def matched_deals(ctx, investor: str):
    """Show active deals ranked for an investor.

    INVESTOR can be a user name or ID.

    Examples:
        dealdesk match deals "Jane Buyer"
        dealdesk --min-match 50 match deals 2
    """
    db = ctx.obj["db"]
    service = MatchmakingService(db, ctx.obj["matching_policy"])
    try:
        investor_id = resolve_user(UserService(db), investor)
        matches = service.matched_deals_for_investor(investor_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not matches:
        click.echo("No matching deals. Check the investor's preferences.")
        return

    click.echo("\nMatched deals:")
    click.echo("-" * 88)
    for m in matches:
        d = m.deal
        click.echo(
            f"{m.match.percentage:3d}% | Deal {d.id:3d} | {d.city}, {d.state} | "
            f"{d.property_type} | ${d.asking_price:,.2f}"
        )
        click.echo(f"       {', '.join(m.match.reasons)}")


@match_group.command("investors")
@click.argument("deal_id", type=int)
@click.option("--wholesaler", help="Require the deal to belong to this wholesaler (name or ID)")
@click.pass_context
def matching_investors(ctx, deal_id: int, wholesaler: str | None):
    """Show investors ranked for a deal.

    Examples:
        dealdesk match investors 3
        dealdesk match investors 3 --wholesaler "Acme Wholesale"
    """
    db = ctx.obj["db"]
    service = MatchmakingService(db, ctx.obj["matching_policy"])
    try:
        wholesaler_id = resolve_user(UserService(db), wholesaler) if wholesaler is not None else None
        matches = service.matching_investors_for_deal(deal_id, wholesaler_id=wholesaler_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not matches:
        click.echo("No matching investors.")
        return

    click.echo("\nMatched investors:")
    click.echo("-" * 72)
    for m in matches:
        inv = m.investor
        company = f" ({inv.company})" if inv.company else ""
        click.echo(
            f"{m.match.percentage:3d}% | {inv.name}{company} | "
            f"Reputation: {inv.reputation_score:.2f}"
        )
        click.echo(f"       {', '.join(m.match.reasons)}")


def register_commands(cli):
    """Register matching commands with main CLI."""
    cli.add_command(match_group, name="match")
