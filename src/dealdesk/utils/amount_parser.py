"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# Shorthand multipliers common in deal listings ("150k", "1.2m")
SUFFIX_MULTIPLIERS = {
    "k": Decimal("1000"),
    "m": Decimal("1000000"),
}


def parse_amount(amount_str: str) -> Decimal:
    """Parse a price string into a Decimal.

    Handles various formats:
    - "150000"
    - "$150,000.00"
    - "150k" / "1.2M"
    - "-2500" or "(2500)" (negative)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = re.sub(r"[$,\s]", "", text)

    multiplier = Decimal(1)
    if text and text[-1].lower() in SUFFIX_MULTIPLIERS:
        multiplier = SUFFIX_MULTIPLIERS[text[-1].lower()]
        text = text[:-1]

    try:
        amount = Decimal(text) * multiplier
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
