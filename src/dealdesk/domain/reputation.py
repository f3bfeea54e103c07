"""Reputation scoring from multi-category ratings."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from dealdesk.domain.entities import Rating, ReputationBreakdown

# Weights sum to 1.0
CATEGORY_WEIGHTS: dict[str, Decimal] = {
    "communication": Decimal("0.25"),
    "deal_quality": Decimal("0.35"),
    "professionalism": Decimal("0.25"),
    "timeliness": Decimal("0.15"),
}

# Reputation is reported in steps of 1/REPUTATION_STEPS (0.05)
REPUTATION_STEPS = 20


def _category_score(rating: Rating, category: str) -> Decimal:
    """Sub-score for a category, falling back to the overall score when absent."""
    value = getattr(rating.categories, category, None)
    if not value:
        value = rating.score
    return Decimal(str(value))


def weighted_rating_score(rating: Rating) -> Decimal:
    """Collapse a single rating into one weighted score."""
    return sum(
        (_category_score(rating, category) * weight for category, weight in CATEGORY_WEIGHTS.items()),
        Decimal(0),
    )


def calculate_reputation(ratings: Sequence[Rating]) -> float:
    """Calculate a 0-5 reputation score from a person's full rating history.

    The mean of the per-rating weighted scores is quantized to the nearest 0.05.
    An empty history scores 0.
    """
    if len(ratings) == 0:
        return 0.0

    total = sum((weighted_rating_score(rating) for rating in ratings), Decimal(0))
    mean = total / len(ratings)
    steps = (mean * REPUTATION_STEPS).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(steps / REPUTATION_STEPS)


def get_reputation_breakdown(ratings: Sequence[Rating]) -> ReputationBreakdown:
    """Per-category averages for display alongside the weighted reputation.

    Category averages are unweighted and rounded to one decimal.
    """
    if len(ratings) == 0:
        return ReputationBreakdown(overall=0.0, categories={}, total_reviews=0)

    categories = {}
    for category in CATEGORY_WEIGHTS:
        total = sum((_category_score(rating, category) for rating in ratings), Decimal(0))
        mean = (total / len(ratings)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        categories[category] = float(mean)

    return ReputationBreakdown(
        overall=calculate_reputation(ratings),
        categories=categories,
        total_reviews=len(ratings),
    )
