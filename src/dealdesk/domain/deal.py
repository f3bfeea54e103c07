"""Deal domain service."""

import logging
from decimal import Decimal
from typing import Optional

from dealdesk.database.base import Database
from dealdesk.domain.deal_quality import evaluate_deal_quality
from dealdesk.domain.entities import Deal, DealStatus, PropertyType, UserRole
from dealdesk.domain.errors import (
    NotFoundError,
    ValidationError,
    deal_not_found,
    user_not_found,
    wrong_role,
)

logger = logging.getLogger(__name__)

US_STATES = frozenset(
    "AL AK AZ AR CA CO CT DE FL GA HI ID IL IN IA KS KY LA ME MD MA MI MN MS MO "
    "MT NE NV NH NJ NM NY NC ND OH OK OR PA RI SC SD TN TX UT VT VA WA WV WI WY".split()
)


class DealService:
    """Service for listing and moderating deals."""

    def __init__(self, db: Database):
        """Initialize deal service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_deal(
        self,
        wholesaler_id: int,
        address: str,
        city: str,
        state: str,
        property_type: str,
        asking_price: Decimal,
        arv_estimate: Optional[Decimal] = None,
        rehab_estimate: Optional[Decimal] = None,
        assignment_fee: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """List a new deal.

        Deals with no quality warnings go live immediately; the rest wait in
        pending_review for a moderator.

        Returns:
            Deal ID

        Raises:
            NotFoundError: If the wholesaler doesn't exist
            ValidationError: If the user is not a wholesaler, the state or
                property type is unknown, or the listing has blocking issues
        """
        wholesaler = self.db.get_user(wholesaler_id)
        if wholesaler is None:
            raise NotFoundError(user_not_found(wholesaler_id))
        if wholesaler.role != UserRole.WHOLESALER:
            raise ValidationError(wrong_role(wholesaler_id, UserRole.WHOLESALER.value))

        state = (state or "").strip().upper()
        if state and state not in US_STATES:
            raise ValidationError(f"Unknown state '{state}'")
        if property_type:
            try:
                property_type = PropertyType(property_type).value
            except ValueError:
                raise ValidationError(f"Unknown property type '{property_type}'")

        draft = Deal(
            state=state,
            city=(city or "").strip(),
            property_type=property_type,
            asking_price=asking_price,
            address=address,
            arv_estimate=arv_estimate,
            rehab_estimate=rehab_estimate,
            assignment_fee=assignment_fee,
            description=description,
            status=DealStatus.DRAFT,
        )
        report = evaluate_deal_quality(draft)
        if not report.approved:
            raise ValidationError(f"Deal rejected: {'; '.join(report.issues)}")

        status = DealStatus.ACTIVE if report.auto_approvable else DealStatus.PENDING_REVIEW
        deal_id = self.db.create_deal(
            wholesaler_id=wholesaler_id,
            address=address,
            city=draft.city,
            state=draft.state,
            property_type=draft.property_type,
            asking_price=asking_price,
            arv_estimate=arv_estimate,
            rehab_estimate=rehab_estimate,
            assignment_fee=assignment_fee,
            description=description,
            status=status,
        )
        logger.info(
            "Created deal %s for wholesaler %s as %s (quality score %s)",
            deal_id,
            wholesaler_id,
            status.value,
            report.score,
        )
        return deal_id

    def get_deal(self, deal_id: int) -> Optional[Deal]:
        """Get deal by ID."""
        return self.db.get_deal(deal_id)

    def list_deals(
        self, wholesaler_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[Deal]:
        """List deals, newest first."""
        deal_status = DealStatus(status) if status is not None else None
        return self.db.list_deals(wholesaler_id=wholesaler_id, status=deal_status)

    def approve_deal(self, deal_id: int) -> None:
        """Publish a deal that is waiting for review.

        Raises:
            NotFoundError: If the deal doesn't exist
            ValidationError: If the deal is not pending review
        """
        deal = self.db.get_deal(deal_id)
        if deal is None:
            raise NotFoundError(deal_not_found(deal_id))
        if deal.status != DealStatus.PENDING_REVIEW:
            raise ValidationError(f"Deal {deal_id} is {deal.status.value}, not pending review")
        self.db.update_deal_status(deal_id, DealStatus.ACTIVE)
        logger.info("Approved deal %s", deal_id)
