"""User management commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.entities import PropertyType, SubscriptionTier, UserRole
from dealdesk.domain.errors import DomainError
from dealdesk.domain.user import UserService
from dealdesk.utils.amount_parser import parse_amount
from dealdesk.utils.user_resolver import resolve_user

ROLE_CHOICES = click.Choice([role.value for role in UserRole])
TIER_CHOICES = click.Choice([tier.value for tier in SubscriptionTier])
PROPERTY_TYPE_CHOICES = click.Choice([t.value for t in PropertyType])


@click.group()
def user_group():
    """Manage users and investor preferences."""
    pass


@user_group.command("create")
@click.argument("name")
@click.option("--role", type=ROLE_CHOICES, required=True, help="User role")
@click.option("--company", help="Company name")
@click.option("--tier", type=TIER_CHOICES, default="free", show_default=True, help="Subscription tier")
@click.pass_context
def create_user(ctx, name: str, role: str, company: str | None, tier: str):
    """Create a new user.

    Examples:
        dealdesk user create "Acme Wholesale" --role wholesaler --tier pro
        dealdesk user create "Jane Buyer" --role investor
    """
    service = UserService(ctx.obj["db"])
    try:
        user_id = service.create_user(name=name, role=role, company=company, subscription_tier=tier)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created {role} '{name}' (ID: {user_id})")


@user_group.command("list")
@click.option("--role", type=ROLE_CHOICES, help="Only list users with this role")
@click.pass_context
def list_users(ctx, role: str | None):
    """List users."""
    service = UserService(ctx.obj["db"])
    users = service.list_users(role=role)
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 72)
    for u in users:
        click.echo(
            f"ID: {u.id:3d} | {u.name:20s} | {u.role.value:10s} | "
            f"{u.subscription_tier.value:7s} | Reputation: {u.reputation_score:.2f}"
        )


@user_group.command("preferences")
@click.argument("user", metavar="USER")
@click.option("--state", "states", multiple=True, help="State code to match (repeatable)")
@click.option("--city", "cities", multiple=True, help="City to match within the states (repeatable)")
@click.option(
    "--type", "property_types", multiple=True, type=PROPERTY_TYPE_CHOICES,
    help="Property type to match (repeatable; none means any)",
)
@click.option("--min-price", help="Minimum asking price (e.g. 50k)")
@click.option("--max-price", help="Maximum asking price (e.g. $250,000)")
@click.option("--min-reputation", type=click.FloatRange(0, 5), help="Minimum wholesaler reputation (0-5)")
@click.option("--clear", is_flag=True, help="Remove all preferences")
@click.pass_context
def set_preferences(
    ctx,
    user: str,
    states: tuple[str, ...],
    cities: tuple[str, ...],
    property_types: tuple[str, ...],
    min_price: str | None,
    max_price: str | None,
    min_reputation: float | None,
    clear: bool,
) -> None:
    """Set an investor's matching preferences.

    USER can be a user name or ID. The new preferences replace the old ones.

    Examples:
        dealdesk user preferences "Jane Buyer" --state TX --city Houston --max-price 250k
        dealdesk user preferences 2 --type SFH --type Multi-Family --min-reputation 4
        dealdesk user preferences 2 --clear
    """
    service = UserService(ctx.obj["db"])
    try:
        user_id = resolve_user(service, user)
        if clear:
            service.clear_preferences(user_id)
            click.echo("Cleared preferences")
            return
        preferences = service.set_preferences(
            user_id,
            states=states,
            cities=cities,
            property_types=property_types,
            min_price=parse_amount(min_price) if min_price is not None else None,
            max_price=parse_amount(max_price) if max_price is not None else None,
            min_reputation=min_reputation,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("Updated preferences:")
    click.echo(f"  States: {', '.join(preferences.states) or 'any'}")
    click.echo(f"  Cities: {', '.join(preferences.cities) or 'any'}")
    click.echo(f"  Property types: {', '.join(preferences.property_types) or 'any'}")
    low = f"${preferences.min_price:,.2f}" if preferences.min_price is not None else "no minimum"
    high = f"${preferences.max_price:,.2f}" if preferences.max_price is not None else "no maximum"
    click.echo(f"  Budget: {low} - {high}")
    if preferences.min_reputation is not None:
        click.echo(f"  Minimum reputation: {preferences.min_reputation}")


@user_group.command("tier")
@click.argument("user", metavar="USER")
@click.argument("tier", type=TIER_CHOICES)
@click.pass_context
def set_tier(ctx, user: str, tier: str) -> None:
    """Change a user's subscription tier.

    Examples:
        dealdesk user tier "Acme Wholesale" premium
    """
    service = UserService(ctx.obj["db"])
    try:
        user_id = resolve_user(service, user)
        service.set_subscription_tier(user_id, tier)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Subscription tier set to '{tier}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
