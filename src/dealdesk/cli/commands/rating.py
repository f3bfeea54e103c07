"""Rating and reputation commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.entities import RatingCategories
from dealdesk.domain.rating import RatingService
from dealdesk.domain.user import UserService
from dealdesk.utils.user_resolver import resolve_user

SCORE = click.IntRange(1, 5)


@click.group()
def rating_group():
    """Rate counterparties and view reputations."""
    pass


@rating_group.command("submit")
@click.argument("transaction_id", type=int)
@click.option("--reviewer", required=True, help="Party leaving the rating (name or ID)")
@click.option("--score", type=SCORE, required=True, help="Overall score (1-5)")
@click.option("--communication", type=SCORE, help="Communication score (1-5)")
@click.option("--deal-quality", type=SCORE, help="Deal quality score (1-5)")
@click.option("--professionalism", type=SCORE, help="Professionalism score (1-5)")
@click.option("--timeliness", type=SCORE, help="Timeliness score (1-5)")
@click.option("--comment", default="", help="Review text")
@click.pass_context
def submit_rating(
    ctx,
    transaction_id: int,
    reviewer: str,
    score: int,
    communication: int | None,
    deal_quality: int | None,
    professionalism: int | None,
    timeliness: int | None,
    comment: str,
) -> None:
    """Rate the other party of a completed transaction.

    Category scores that are left out count as the overall score.

    Examples:
        dealdesk rating submit 1 --reviewer "Jane Buyer" --score 5
        dealdesk rating submit 1 --reviewer 1 --score 4 --timeliness 3 --comment "Slow to close"
    """
    db = ctx.obj["db"]
    service = RatingService(db)
    categories = RatingCategories(
        communication=communication,
        deal_quality=deal_quality,
        professionalism=professionalism,
        timeliness=timeliness,
    )
    try:
        reviewer_id = resolve_user(UserService(db), reviewer)
        rating_id = service.submit_rating(
            transaction_id=transaction_id,
            reviewer_id=reviewer_id,
            score=score,
            categories=categories,
            comment=comment,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded rating {rating_id}")


@rating_group.command("show")
@click.argument("user", metavar="USER")
@click.pass_context
def show_reputation(ctx, user: str) -> None:
    """Show a user's reputation breakdown and reviews.

    USER can be a user name or ID.
    """
    db = ctx.obj["db"]
    service = RatingService(db)
    try:
        user_id = resolve_user(UserService(db), user)
        breakdown = service.get_breakdown(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if breakdown.total_reviews == 0:
        click.echo("No ratings yet.")
        return

    click.echo(f"\nReputation: {breakdown.overall:.2f} ({breakdown.total_reviews} reviews)")
    click.echo("-" * 40)
    for category, value in breakdown.categories.items():
        label = category.replace("_", " ").capitalize()
        click.echo(f"  {label:16s} {value:.1f}")

    click.echo("\nReviews:")
    for r in service.list_ratings(user_id):
        suffix = f" - {r.comment}" if r.comment else ""
        click.echo(f"  {r.score}/5 from user {r.reviewer_id} (transaction {r.transaction_id}){suffix}")


def register_commands(cli):
    """Register rating commands with main CLI."""
    cli.add_command(rating_group, name="rating")
