"""Rating domain service."""

import logging
from typing import Optional

from dealdesk.database.base import Database
from dealdesk.domain.entities import (
    Rating,
    RatingCategories,
    ReputationBreakdown,
    TransactionStatus,
)
from dealdesk.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_rating,
    rating_out_of_range,
    transaction_not_found,
    user_not_found,
)
from dealdesk.domain.reputation import calculate_reputation, get_reputation_breakdown

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5


def _check_score(field: str, value: Optional[int]) -> None:
    if value is not None and not MIN_SCORE <= value <= MAX_SCORE:
        raise ValidationError(rating_out_of_range(field))


class RatingService:
    """Service for rating counterparties and keeping reputations current."""

    def __init__(self, db: Database):
        """Initialize rating service.

        Args:
            db: Database instance
        """
        self.db = db

    def submit_rating(
        self,
        transaction_id: int,
        reviewer_id: int,
        score: int,
        categories: Optional[RatingCategories] = None,
        comment: str = "",
    ) -> int:
        """Rate the other party of a completed transaction.

        The reviewee's reputation is recomputed from their full rating history
        and stored.

        Args:
            transaction_id: Completed transaction being rated
            reviewer_id: Party leaving the rating
            score: Overall score, 1-5
            categories: Optional 1-5 sub-scores
            comment: Free text

        Returns:
            Rating ID

        Raises:
            ValidationError: If a score is out of range, the transaction is not
                completed, or the reviewer is not a party to it
            NotFoundError: If the transaction doesn't exist
            ConflictError: If the reviewer already rated this transaction
        """
        if score is None:
            raise ValidationError(rating_out_of_range("score"))
        _check_score("score", score)
        categories = categories or RatingCategories()
        for field in ("communication", "deal_quality", "professionalism", "timeliness"):
            _check_score(field, getattr(categories, field))

        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if transaction.status != TransactionStatus.COMPLETED:
            raise ValidationError("Ratings can only be submitted for completed transactions")

        if reviewer_id == transaction.wholesaler_id:
            reviewee_id = transaction.investor_id
        elif reviewer_id == transaction.investor_id:
            reviewee_id = transaction.wholesaler_id
        else:
            raise ValidationError(
                f"User {reviewer_id} is not a party to transaction {transaction_id}"
            )

        if self.db.get_rating_by_transaction(transaction_id, reviewer_id) is not None:
            raise ConflictError(duplicate_rating(transaction_id, reviewer_id))

        rating_id = self.db.create_rating(
            transaction_id=transaction_id,
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            score=score,
            categories=categories,
            comment=comment or "",
        )

        reputation = calculate_reputation(self.db.list_ratings_for_user(reviewee_id))
        self.db.update_user_reputation(reviewee_id, reputation)
        logger.info(
            "User %s rated user %s %s/5; reputation now %.2f",
            reviewer_id,
            reviewee_id,
            score,
            reputation,
        )
        return rating_id

    def list_ratings(self, user_id: int) -> list[Rating]:
        """List the ratings a user has received."""
        return self.db.list_ratings_for_user(user_id)

    def get_breakdown(self, user_id: int) -> ReputationBreakdown:
        """Per-category reputation breakdown for a user.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        return get_reputation_breakdown(self.db.list_ratings_for_user(user_id))
