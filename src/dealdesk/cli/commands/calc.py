"""Investment calculator commands."""

import click
from dealdesk.cli.error_handling import handle_domain_error
from dealdesk.domain.calculators import (
    DEFAULT_MAO_DISCOUNT_PERCENT,
    analyze_rental,
    calculate_roi,
    cap_rate,
    cash_on_cash_return,
    estimate_arv,
    estimate_rehab,
    max_allowable_offer,
)
from dealdesk.utils.amount_parser import parse_amount


def _split_pair(value: str, separator: str, what: str) -> tuple[str, str]:
    left, sep, right = value.rpartition(separator)
    if not sep or not left.strip() or not right.strip():
        raise ValueError(f"Invalid {what} '{value}'")
    return left.strip(), right.strip()


@click.group()
def calc_group():
    """Run investment calculators."""
    pass


@calc_group.command("arv")
@click.argument("subject_sqft")
@click.option(
    "--comp", "comps", multiple=True, required=True, help="Comparable sale as PRICE:SQFT (repeatable)"
)
@click.pass_context
def arv(ctx, subject_sqft: str, comps: tuple[str, ...]):
    """Estimate after-repair value from comparable sales.

    Examples:
        dealdesk calc arv 1500 --comp 200k:1400 --comp 230k:1600
    """
    try:
        pairs = []
        for comp in comps:
            price, sqft = _split_pair(comp, ":", "comp")
            pairs.append((parse_amount(price), parse_amount(sqft)))
        result = estimate_arv(pairs, parse_amount(subject_sqft))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Avg price/sqft: ${result.avg_price_per_sqft:,.2f}")
    click.echo(f"ARV:            ${result.arv:,.2f}")


@calc_group.command("roi")
@click.option("--purchase", required=True, help="Purchase price")
@click.option("--rehab", default="0", show_default=True, help="Rehab cost")
@click.option("--holding", default="0", show_default=True, help="Holding costs")
@click.option("--sale", required=True, help="Sale price")
@click.pass_context
def roi(ctx, purchase: str, rehab: str, holding: str, sale: str):
    """Return on investment for a flip.

    Examples:
        dealdesk calc roi --purchase 150k --rehab 30k --holding 5k --sale 240k
    """
    try:
        result = calculate_roi(
            parse_amount(purchase), parse_amount(rehab), parse_amount(sale), parse_amount(holding)
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Total investment: ${result.total_investment:,.2f}")
    click.echo(f"Profit:           ${result.profit:,.2f}")
    click.echo(f"ROI:              {result.roi}%")


@calc_group.command("cash-on-cash")
@click.argument("annual_cash_flow")
@click.argument("cash_invested")
@click.pass_context
def cash_on_cash(ctx, annual_cash_flow: str, cash_invested: str):
    """Annual cash flow as a percent of cash invested."""
    try:
        result = cash_on_cash_return(parse_amount(annual_cash_flow), parse_amount(cash_invested))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Cash-on-cash return: {result}%")


@calc_group.command("cap-rate")
@click.argument("noi")
@click.argument("property_value")
@click.pass_context
def cap_rate_command(ctx, noi: str, property_value: str):
    """Net operating income as a percent of property value."""
    try:
        result = cap_rate(parse_amount(noi), parse_amount(property_value))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Cap rate: {result}%")


@calc_group.command("rehab")
@click.option(
    "--item", "items", multiple=True, required=True, help="Line item as CATEGORY=COST (repeatable)"
)
@click.pass_context
def rehab(ctx, items: tuple[str, ...]):
    """Total repair costs by category.

    Examples:
        dealdesk calc rehab --item roof=12k --item kitchen=18k --item roof=1500
    """
    try:
        lines = []
        for item in items:
            category, cost = _split_pair(item, "=", "rehab item")
            lines.append((category, parse_amount(cost)))
        result = estimate_rehab(lines)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    for category, cost in result.breakdown.items():
        click.echo(f"{category:20s} ${cost:>12,.2f}")
    click.echo(f"{'Total':20s} ${result.total_cost:>12,.2f}")


@calc_group.command("mao")
@click.argument("arv")
@click.option("--rehab", default="0", show_default=True, help="Rehab cost")
@click.option("--fee", default="0", show_default=True, help="Assignment fee")
@click.option(
    "--discount",
    default=DEFAULT_MAO_DISCOUNT_PERCENT,
    type=float,
    show_default=True,
    help="Share of ARV a buyer will pay, in percent",
)
@click.pass_context
def mao(ctx, arv: str, rehab: str, fee: str, discount: float):
    """Maximum allowable offer for a buyer.

    Examples:
        dealdesk calc mao 300k --rehab 40k --fee 10k
    """
    try:
        result = max_allowable_offer(
            parse_amount(arv), parse_amount(rehab), parse_amount(fee), str(discount)
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Maximum allowable offer: ${result:,.2f}")


@calc_group.command("rental")
@click.option("--price", required=True, help="Purchase price")
@click.option("--rent", required=True, help="Monthly rent")
@click.option("--vacancy", default=0.0, type=float, show_default=True, help="Vacancy in percent")
@click.option("--tax", default="0", show_default=True, help="Monthly property tax")
@click.option("--insurance", default="0", show_default=True, help="Monthly insurance")
@click.option("--maintenance", default="0", show_default=True, help="Monthly maintenance")
@click.option("--mortgage", default="0", show_default=True, help="Monthly mortgage payment")
@click.pass_context
def rental(ctx, price, rent, vacancy, tax, insurance, maintenance, mortgage):
    """Cash flow and returns of a buy-and-hold rental.

    Examples:
        dealdesk calc rental --price 200k --rent 2000 --vacancy 5 --tax 250 --mortgage 900
    """
    try:
        result = analyze_rental(
            purchase_price=parse_amount(price),
            monthly_rent=parse_amount(rent),
            vacancy_percent=str(vacancy),
            property_tax=parse_amount(tax),
            insurance=parse_amount(insurance),
            maintenance=parse_amount(maintenance),
            mortgage_payment=parse_amount(mortgage),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Monthly cash flow: ${result.monthly_cash_flow:,.2f}")
    click.echo(f"Annual cash flow:  ${result.annual_cash_flow:,.2f}")
    click.echo(f"Cash-on-cash:      {result.cash_on_cash}%")
    click.echo(f"Cap rate:          {result.cap_rate}%")


def register_commands(cli):
    """Register calculator commands with main CLI."""
    cli.add_command(calc_group, name="calc")
