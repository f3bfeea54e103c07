"""Offer domain service."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from dealdesk.database.base import Database
from dealdesk.domain.entities import DealStatus, Offer, OfferStatus, UserRole
from dealdesk.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    deal_not_active,
    deal_not_found,
    offer_already_answered,
    offer_not_found,
    user_not_found,
    wrong_role,
)
from dealdesk.domain.fees import to_decimal

logger = logging.getLogger(__name__)


class OfferService:
    """Service for placing offers on deals and answering them."""

    def __init__(self, db: Database):
        """Initialize offer service.

        Args:
            db: Database instance
        """
        self.db = db

    def make_offer(
        self, deal_id: int, investor_id: int, amount: Decimal, message: str = ""
    ) -> int:
        """Place an offer on an active deal.

        Returns:
            Offer ID

        Raises:
            NotFoundError: If the deal or investor doesn't exist
            ValidationError: If the bidder is not an investor, the deal is not
                active or the amount is not positive
        """
        price = to_decimal(amount)
        if price <= 0:
            raise ValidationError("Offer amount must be positive")

        investor = self.db.get_user(investor_id)
        if investor is None:
            raise NotFoundError(user_not_found(investor_id))
        if investor.role != UserRole.INVESTOR:
            raise ValidationError(wrong_role(investor_id, UserRole.INVESTOR.value))

        deal = self.db.get_deal(deal_id)
        if deal is None:
            raise NotFoundError(deal_not_found(deal_id))
        if deal.status != DealStatus.ACTIVE:
            raise ValidationError(deal_not_active(deal_id))

        offer_id = self.db.create_offer(
            deal_id=deal_id, investor_id=investor_id, amount=price, message=message or ""
        )
        logger.info("Investor %s offered %s on deal %s", investor_id, price, deal_id)
        return offer_id

    def get_offer(self, offer_id: int) -> Optional[Offer]:
        """Get offer by ID."""
        return self.db.get_offer(offer_id)

    def list_offers(
        self,
        deal_id: Optional[int] = None,
        investor_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Offer]:
        """List offers, newest first."""
        offer_status = OfferStatus(status) if status is not None else None
        return self.db.list_offers(deal_id=deal_id, investor_id=investor_id, status=offer_status)

    def respond_to_offer(
        self,
        offer_id: int,
        decision: str,
        wholesaler_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Offer:
        """Accept or reject a pending offer.

        Accepting puts the deal under contract in the same commit, so a deal
        can only ever have one accepted offer at a time.

        Args:
            offer_id: Offer to answer
            decision: "accepted" or "rejected"
            wholesaler_id: When given, must own the offer's deal
            now: Timestamp of the response (defaults to the current UTC time)

        Returns:
            The stored offer after the response

        Raises:
            NotFoundError: If the offer or its deal doesn't exist
            ValidationError: If the decision is unknown or the caller does not own the deal
            ConflictError: If the offer was already answered or the deal is no longer active
        """
        try:
            new_status = OfferStatus(decision)
        except ValueError:
            raise ValidationError(f"Unknown decision '{decision}'")
        if new_status is OfferStatus.PENDING:
            raise ValidationError("Decision must be accepted or rejected")

        offer = self._require_offer(offer_id)
        if offer.status is not OfferStatus.PENDING:
            raise ConflictError(offer_already_answered(offer_id))

        deal = self.db.get_deal(offer.deal_id)
        if deal is None:
            raise NotFoundError(deal_not_found(offer.deal_id))
        if wholesaler_id is not None and deal.wholesaler_id != wholesaler_id:
            raise ValidationError(f"Deal {deal.id} does not belong to user {wholesaler_id}")

        self.db.respond_to_offer(
            offer_id,
            new_status,
            responded_at=now or datetime.now(UTC),
            deal_status=DealStatus.UNDER_CONTRACT if new_status is OfferStatus.ACCEPTED else None,
        )
        logger.info("Offer %s on deal %s %s", offer_id, deal.id, new_status.value)
        return self._require_offer(offer_id)

    def accept_offer(self, offer_id: int, wholesaler_id: Optional[int] = None) -> Offer:
        return self.respond_to_offer(offer_id, OfferStatus.ACCEPTED.value, wholesaler_id)

    def reject_offer(self, offer_id: int, wholesaler_id: Optional[int] = None) -> Offer:
        return self.respond_to_offer(offer_id, OfferStatus.REJECTED.value, wholesaler_id)

    def _require_offer(self, offer_id: int) -> Offer:
        offer = self.db.get_offer(offer_id)
        if offer is None:
            raise NotFoundError(offer_not_found(offer_id))
        return offer
