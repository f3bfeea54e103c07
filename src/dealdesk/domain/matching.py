"""Deal-investor matching engine.

Scores how well a deal fits an investor's stated preferences. Criteria are
independent and additive; each satisfied criterion adds its weight to the score
and a label to the reasons. The engine does no lookups: callers attach the
wholesaler's reputation to each deal snapshot first.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from dealdesk.domain.entities import (
    Deal,
    DealMatch,
    InvestorMatch,
    InvestorPreferences,
    MatchResult,
    User,
)
from dealdesk.domain.fees import to_decimal

LOCATION_MATCH = "Location match"
CITY_MATCH = "City match"
PROPERTY_TYPE_MATCH = "Property type match"
WITHIN_BUDGET = "Within budget"
MEETS_REPUTATION = "Meets reputation threshold"


@dataclass(frozen=True)
class MatchingPolicy:
    """Weights and thresholds used when scoring matches.

    The four criterion weights sum to 1.0. The city bonus comes on top of the
    location weight, so the raw score can reach 1.05 before clamping.
    """

    location_weight: float = 0.35
    city_bonus: float = 0.05
    property_type_weight: float = 0.20
    budget_weight: float = 0.30
    reputation_weight: float = 0.15
    # Results at or below this percentage are left out of ranked lists
    min_match_percentage: int = 20


DEFAULT_MATCHING_POLICY = MatchingPolicy()

NO_MATCH = MatchResult(score=0.0, percentage=0, reasons=())


def _to_percentage(score: float) -> int:
    return int(math.floor(score * 100 + 0.5))


def _within_budget(asking_price: Decimal, preferences: InvestorPreferences) -> bool:
    # Unset or zero bounds mean no bound
    min_price = to_decimal(preferences.min_price) if preferences.min_price else Decimal(0)
    price = to_decimal(asking_price)
    if price < min_price:
        return False
    if preferences.max_price:
        return price <= to_decimal(preferences.max_price)
    return True


def score_match(
    deal: Deal,
    preferences: Optional[InvestorPreferences],
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> MatchResult:
    """Score a deal against an investor's preferences.

    Args:
        deal: Deal snapshot with ``wholesaler_reputation`` attached
        preferences: Investor preferences; None or empty preferences match nothing
        policy: Weights and thresholds

    Returns:
        MatchResult with a score clamped to 1.0, the rounded percentage and the
        reasons in criterion order
    """
    if preferences is None or preferences.is_empty:
        return NO_MATCH

    score = 0.0
    reasons = []

    if deal.state in preferences.states:
        score += policy.location_weight
        reasons.append(LOCATION_MATCH)
        if deal.city in preferences.cities:
            score += policy.city_bonus
            reasons.append(CITY_MATCH)

    if not preferences.property_types or deal.property_type in preferences.property_types:
        score += policy.property_type_weight
        reasons.append(PROPERTY_TYPE_MATCH)

    if _within_budget(deal.asking_price, preferences):
        score += policy.budget_weight
        reasons.append(WITHIN_BUDGET)

    min_reputation = preferences.min_reputation or 0
    if (deal.wholesaler_reputation or 0) >= min_reputation:
        score += policy.reputation_weight
        reasons.append(MEETS_REPUTATION)

    score = min(score, 1.0)
    return MatchResult(score=score, percentage=_to_percentage(score), reasons=tuple(reasons))


def _newest_first(created_at: Optional[datetime]) -> float:
    # Undated deals sort after dated ones
    if created_at is None:
        return math.inf
    return -created_at.timestamp()


def find_matches_for_investor(
    deals: Iterable[Deal],
    preferences: Optional[InvestorPreferences],
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> list[DealMatch]:
    """Rank deals for an investor.

    Deals scoring at or below ``policy.min_match_percentage`` are dropped. The
    rest are sorted by percentage, highest first; equal percentages put the
    newest deal first and otherwise keep input order.
    """
    matches = [DealMatch(deal=deal, match=score_match(deal, preferences, policy)) for deal in deals]
    matches = [m for m in matches if m.match.percentage > policy.min_match_percentage]
    return sorted(
        matches,
        key=lambda m: (-m.match.percentage, _newest_first(m.deal.created_at)),
    )


def find_matching_investors_for_deal(
    deal: Deal,
    investors: Iterable[User],
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> list[InvestorMatch]:
    """Rank investors for a deal.

    Only investors who have stated some preference are considered. Same floor
    as ``find_matches_for_investor``; equal percentages put the better-reputed
    investor first and otherwise keep input order.
    """
    matches = [
        InvestorMatch(investor=investor, match=score_match(deal, investor.preferences, policy))
        for investor in investors
        if investor.preferences is not None and not investor.preferences.is_empty
    ]
    matches = [m for m in matches if m.match.percentage > policy.min_match_percentage]
    return sorted(
        matches,
        key=lambda m: (-m.match.percentage, -(m.investor.reputation_score or 0)),
    )
