"""Matchmaking domain service.

Loads deals and investors, attaches each wholesaler's stored reputation to the
deal snapshots, and hands them to the matching engine.
"""

import logging
from dataclasses import replace
from typing import Optional

from dealdesk.database.base import Database
from dealdesk.domain.entities import Deal, DealMatch, DealStatus, InvestorMatch, UserRole
from dealdesk.domain.errors import (
    NotFoundError,
    ValidationError,
    deal_not_found,
    user_not_found,
    wrong_role,
)
from dealdesk.domain.matching import (
    DEFAULT_MATCHING_POLICY,
    MatchingPolicy,
    find_matches_for_investor,
    find_matching_investors_for_deal,
)

logger = logging.getLogger(__name__)


class MatchmakingService:
    """Service for matching deals and investors."""

    def __init__(self, db: Database, policy: MatchingPolicy = DEFAULT_MATCHING_POLICY):
        """Initialize matchmaking service.

        Args:
            db: Database instance
            policy: Weights and thresholds for the matching engine
        """
        self.db = db
        self.policy = policy

    def attach_reputation(self, deals: list[Deal]) -> list[Deal]:
        """Return deal snapshots carrying their wholesaler's current reputation."""
        reputations: dict[Optional[int], float] = {}
        snapshots = []
        for deal in deals:
            if deal.wholesaler_id not in reputations:
                wholesaler = (
                    self.db.get_user(deal.wholesaler_id) if deal.wholesaler_id is not None else None
                )
                reputations[deal.wholesaler_id] = wholesaler.reputation_score if wholesaler else 0.0
            snapshots.append(replace(deal, wholesaler_reputation=reputations[deal.wholesaler_id]))
        return snapshots

    def matched_deals_for_investor(self, investor_id: int) -> list[DealMatch]:
        """Rank active deals for an investor.

        An investor without preferences gets no matches.

        Raises:
            NotFoundError: If the investor doesn't exist
            ValidationError: If the user is not an investor
        """
        investor = self.db.get_user(investor_id)
        if investor is None:
            raise NotFoundError(user_not_found(investor_id))
        if investor.role != UserRole.INVESTOR:
            raise ValidationError(wrong_role(investor_id, UserRole.INVESTOR.value))
        if investor.preferences is None or investor.preferences.is_empty:
            logger.debug("Investor %s has no preferences; skipping matching", investor_id)
            return []

        deals = self.attach_reputation(self.db.list_deals(status=DealStatus.ACTIVE))
        matches = find_matches_for_investor(deals, investor.preferences, self.policy)
        logger.info(
            "Matched %d of %d active deals for investor %s", len(matches), len(deals), investor_id
        )
        return matches

    def matching_investors_for_deal(
        self, deal_id: int, wholesaler_id: Optional[int] = None
    ) -> list[InvestorMatch]:
        """Rank investors for a deal.

        Args:
            deal_id: Deal to match
            wholesaler_id: When given, the deal must belong to this wholesaler

        Raises:
            NotFoundError: If the deal doesn't exist
            ValidationError: If the deal belongs to someone else
        """
        deal = self.db.get_deal(deal_id)
        if deal is None:
            raise NotFoundError(deal_not_found(deal_id))
        if wholesaler_id is not None and deal.wholesaler_id != wholesaler_id:
            raise ValidationError(f"Deal {deal_id} does not belong to user {wholesaler_id}")

        (snapshot,) = self.attach_reputation([deal])
        investors = self.db.list_users(role=UserRole.INVESTOR)
        matches = find_matching_investors_for_deal(snapshot, investors, self.policy)
        logger.info("Matched %d of %d investors for deal %s", len(matches), len(investors), deal_id)
        return matches
