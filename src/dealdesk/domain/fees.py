"""Platform and assignment fee calculations."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from dealdesk.domain.entities import AssignmentFee, PlatformFee, SubscriptionTier

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")

# Flat rate per seller tier, in percent of the sale price
PLATFORM_FEE_PERCENT = {
    SubscriptionTier.FREE: 5,
    SubscriptionTier.PRO: 4,
    SubscriptionTier.PREMIUM: 3,
}


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def resolve_tier(tier) -> SubscriptionTier:
    """Map a tier label to a SubscriptionTier, treating anything unknown as free."""
    try:
        return SubscriptionTier(tier)
    except ValueError:
        return SubscriptionTier.FREE


def calculate_platform_fee(
    sale_price: Number, tier: Union[SubscriptionTier, str, None] = SubscriptionTier.FREE
) -> PlatformFee:
    """Calculate the marketplace's cut of a sale.

    Args:
        sale_price: Sale price of the deal
        tier: Seller subscription tier; unknown tiers pay the free rate

    Returns:
        PlatformFee with the fee rounded to cents and the seller's net proceeds
    """
    price = to_decimal(sale_price)
    fee_percent = PLATFORM_FEE_PERCENT[resolve_tier(tier)]
    fee = (price * fee_percent / 100).quantize(CENT, rounding=ROUND_HALF_UP)
    return PlatformFee(fee=fee, fee_percent=fee_percent, net_to_wholesaler=price - fee)


def calculate_assignment_fee(sale_price: Number, purchase_price: Number) -> AssignmentFee:
    """Calculate the wholesaler's spread between contract and resale price.

    A negative fee is a loss, not an error. The percentage is relative to the
    purchase price and is 0 when there is no positive purchase price.
    """
    sale = to_decimal(sale_price)
    purchase = to_decimal(purchase_price)
    fee = sale - purchase
    if purchase > 0:
        percentage = (fee / purchase * 100).quantize(CENT, rounding=ROUND_HALF_UP)
    else:
        percentage = Decimal("0")
    return AssignmentFee(fee=fee, percentage=percentage)
