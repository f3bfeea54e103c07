"""Investment calculators for evaluating a deal.

All money goes through Decimal and is rounded half-up. Percentages are
returned in percent (12.5 means 12.5 %), rounded to 0.01. Invalid inputs
raise ValidationError.
"""

from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP

from dealdesk.domain.entities import ArvEstimate, RehabEstimate, RentalAnalysis, RoiResult
from dealdesk.domain.errors import ValidationError
from dealdesk.domain.fees import CENT, Number, to_decimal

# Investor rule of thumb: pay at most 70 % of ARV less repairs
DEFAULT_MAO_DISCOUNT_PERCENT = 70


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    return (numerator / denominator * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def _non_negative(value: Number, name: str) -> Decimal:
    amount = to_decimal(value)
    if amount < 0:
        raise ValidationError(f"{name} must not be negative")
    return amount


def _positive(value: Number, name: str) -> Decimal:
    amount = to_decimal(value)
    if amount <= 0:
        raise ValidationError(f"{name} must be positive")
    return amount


def estimate_arv(comps: Iterable[tuple[Number, Number]], subject_sqft: Number) -> ArvEstimate:
    """Estimate after-repair value from comparable sales.

    Args:
        comps: (sale_price, sqft) pairs of recently sold comparables
        subject_sqft: Square footage of the subject property

    Returns:
        ArvEstimate with the average price per square foot rounded to cents
        and the ARV (that average times the subject size) in whole currency
    """
    sqft = _positive(subject_sqft, "Subject square footage")
    rates = []
    for index, (sale_price, comp_sqft) in enumerate(comps, start=1):
        price = to_decimal(sale_price)
        size = to_decimal(comp_sqft)
        if price <= 0 or size <= 0:
            raise ValidationError(f"Comp {index} must have a positive sale price and square footage")
        rates.append(price / size)
    if not rates:
        raise ValidationError("At least one comp is required")

    average = (sum(rates) / len(rates)).quantize(CENT, rounding=ROUND_HALF_UP)
    arv = (average * sqft).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return ArvEstimate(arv=arv, avg_price_per_sqft=average)


def calculate_roi(
    purchase_price: Number, rehab_cost: Number, sale_price: Number, holding_costs: Number = 0
) -> RoiResult:
    """Return on a flip: profit over everything put into the property."""
    total = (
        _non_negative(purchase_price, "Purchase price")
        + _non_negative(rehab_cost, "Rehab cost")
        + _non_negative(holding_costs, "Holding costs")
    )
    profit = _positive(sale_price, "Sale price") - total
    roi = _percent(profit, total) if total > 0 else Decimal("0.00")
    return RoiResult(roi=roi, profit=profit, total_investment=total)


def cash_on_cash_return(annual_cash_flow: Number, total_cash_invested: Number) -> Decimal:
    """Annual pre-tax cash flow as a percent of the cash put in."""
    invested = _positive(total_cash_invested, "Total cash invested")
    return _percent(to_decimal(annual_cash_flow), invested)


def cap_rate(net_operating_income: Number, property_value: Number) -> Decimal:
    """Net operating income as a percent of the property value."""
    value = _positive(property_value, "Property value")
    return _percent(to_decimal(net_operating_income), value)


def estimate_rehab(items: Iterable[tuple[str, Number]]) -> RehabEstimate:
    """Total a list of (category, cost) repair line items.

    Items sharing a category are summed into one breakdown entry, in the
    order the categories first appear.
    """
    breakdown: dict[str, Decimal] = {}
    for index, (category, cost) in enumerate(items, start=1):
        category = (category or "").strip()
        if not category:
            raise ValidationError(f"Item {index} needs a category")
        amount = _non_negative(cost, f"Item {index} cost")
        breakdown[category] = breakdown.get(category, Decimal(0)) + amount
    if not breakdown:
        raise ValidationError("At least one rehab item is required")

    total = sum(breakdown.values(), Decimal(0)).quantize(CENT, rounding=ROUND_HALF_UP)
    return RehabEstimate(total_cost=total, breakdown=breakdown)


def max_allowable_offer(
    arv: Number,
    rehab_cost: Number,
    assignment_fee: Number = 0,
    discount_percent: Number = DEFAULT_MAO_DISCOUNT_PERCENT,
) -> Decimal:
    """Highest price that still leaves the buyer's margin, rounded to cents.

    ARV times the discount, less repairs and the wholesaler's fee. A negative
    result means the deal cannot work at any price and is returned as is.
    """
    value = _positive(arv, "ARV")
    discount = to_decimal(discount_percent)
    if discount <= 0 or discount > 100:
        raise ValidationError("Discount must be between 0 and 100 percent")
    mao = (
        value * discount / 100
        - _non_negative(rehab_cost, "Rehab cost")
        - _non_negative(assignment_fee, "Assignment fee")
    )
    return mao.quantize(CENT, rounding=ROUND_HALF_UP)


def analyze_rental(
    purchase_price: Number,
    monthly_rent: Number,
    vacancy_percent: Number = 0,
    property_tax: Number = 0,
    insurance: Number = 0,
    maintenance: Number = 0,
    mortgage_payment: Number = 0,
) -> RentalAnalysis:
    """Cash flow, cash-on-cash return and cap rate of a buy-and-hold rental.

    Expenses are monthly. Cash-on-cash treats the purchase price as the cash
    invested; the cap rate uses operating income before the mortgage.
    """
    price = _positive(purchase_price, "Purchase price")
    rent = _positive(monthly_rent, "Monthly rent")
    vacancy = to_decimal(vacancy_percent)
    if vacancy < 0 or vacancy > 100:
        raise ValidationError("Vacancy must be between 0 and 100 percent")
    operating = (
        _non_negative(property_tax, "Property tax")
        + _non_negative(insurance, "Insurance")
        + _non_negative(maintenance, "Maintenance")
    )
    mortgage = _non_negative(mortgage_payment, "Mortgage payment")

    effective_rent = rent * (1 - vacancy / 100)
    monthly = (effective_rent - operating - mortgage).quantize(CENT, rounding=ROUND_HALF_UP)
    annual = (monthly * 12).quantize(CENT, rounding=ROUND_HALF_UP)
    noi = (effective_rent - operating) * 12
    return RentalAnalysis(
        monthly_cash_flow=monthly,
        annual_cash_flow=annual,
        cash_on_cash=_percent(annual, price),
        cap_rate=_percent(noi, price),
    )
