"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the rule engines only ever see
domain entities, whatever storage is wired in.
"""

from decimal import Decimal
from typing import Any, Optional

from dealdesk.domain import entities as domain
from dealdesk.database.models import (
    User as ORMUser,
    Deal as ORMDeal,
    Offer as ORMOffer,
    Transaction as ORMTransaction,
    TransactionStatusChange as ORMStatusChange,
    Rating as ORMRating,
)


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def preferences_to_domain(data: Optional[dict[str, Any]]) -> Optional[domain.InvestorPreferences]:
    """Convert a stored preferences document to an InvestorPreferences entity."""
    if data is None:
        return None
    min_reputation = data.get("min_reputation")
    return domain.InvestorPreferences(
        states=tuple(data.get("states") or ()),
        cities=tuple(data.get("cities") or ()),
        property_types=tuple(data.get("property_types") or ()),
        min_price=_decimal_or_none(data.get("min_price")),
        max_price=_decimal_or_none(data.get("max_price")),
        min_reputation=float(min_reputation) if min_reputation is not None else None,
    )


def preferences_to_document(preferences: domain.InvestorPreferences) -> dict[str, Any]:
    """Convert an InvestorPreferences entity to a JSON-serializable document."""
    return {
        "states": list(preferences.states),
        "cities": list(preferences.cities),
        "property_types": [str(getattr(t, "value", t)) for t in preferences.property_types],
        "min_price": str(preferences.min_price) if preferences.min_price is not None else None,
        "max_price": str(preferences.max_price) if preferences.max_price is not None else None,
        "min_reputation": preferences.min_reputation,
    }


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        role=domain.UserRole(orm_user.role),
        company=orm_user.company,
        subscription_tier=domain.SubscriptionTier(orm_user.subscription_tier),
        reputation_score=orm_user.reputation_score,
        preferences=preferences_to_domain(orm_user.preferences),
        created_at=orm_user.created_at,
    )


def deal_to_domain(orm_deal: ORMDeal) -> domain.Deal:
    """Convert SQLAlchemy Deal model to domain Deal entity.

    The snapshot carries no wholesaler reputation; callers attach it.
    """
    return domain.Deal(
        id=orm_deal.id,
        wholesaler_id=orm_deal.wholesaler_id,
        address=orm_deal.address,
        city=orm_deal.city,
        state=orm_deal.state,
        property_type=orm_deal.property_type,
        asking_price=orm_deal.asking_price,
        arv_estimate=orm_deal.arv_estimate,
        rehab_estimate=orm_deal.rehab_estimate,
        assignment_fee=orm_deal.assignment_fee,
        description=orm_deal.description,
        status=domain.DealStatus(orm_deal.status),
        created_at=orm_deal.created_at,
    )


def offer_to_domain(orm_offer: ORMOffer) -> domain.Offer:
    """Convert SQLAlchemy Offer model to domain Offer entity."""
    return domain.Offer(
        id=orm_offer.id,
        deal_id=orm_offer.deal_id,
        investor_id=orm_offer.investor_id,
        amount=orm_offer.amount,
        status=domain.OfferStatus(orm_offer.status),
        created_at=orm_offer.created_at,
        message=orm_offer.message or "",
        responded_at=orm_offer.responded_at,
    )


def status_change_to_domain(orm_change: ORMStatusChange) -> domain.StatusChange:
    """Convert SQLAlchemy TransactionStatusChange model to domain StatusChange entity."""
    return domain.StatusChange(
        status=domain.TransactionStatus(orm_change.status),
        timestamp=orm_change.timestamp,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        deal_id=orm_transaction.deal_id,
        wholesaler_id=orm_transaction.wholesaler_id,
        investor_id=orm_transaction.investor_id,
        status=domain.TransactionStatus(orm_transaction.status),
        sale_price=orm_transaction.sale_price,
        platform_fee=orm_transaction.platform_fee,
        platform_fee_percent=orm_transaction.platform_fee_percent,
        escrow_amount=orm_transaction.escrow_amount,
        status_history=tuple(
            status_change_to_domain(change) for change in orm_transaction.status_history
        ),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        completed_at=orm_transaction.completed_at,
        offer_id=orm_transaction.offer_id,
    )


def rating_to_domain(orm_rating: ORMRating) -> domain.Rating:
    """Convert SQLAlchemy Rating model to domain Rating entity."""
    return domain.Rating(
        id=orm_rating.id,
        transaction_id=orm_rating.transaction_id,
        reviewer_id=orm_rating.reviewer_id,
        reviewee_id=orm_rating.reviewee_id,
        score=orm_rating.score,
        categories=domain.RatingCategories(
            communication=orm_rating.communication,
            deal_quality=orm_rating.deal_quality,
            professionalism=orm_rating.professionalism,
            timeliness=orm_rating.timeliness,
        ),
        comment=orm_rating.comment,
        created_at=orm_rating.created_at,
    )
