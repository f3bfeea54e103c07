"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from dealdesk.database.factories import create_memory_database
from dealdesk.domain import entities
from dealdesk.domain.errors import ConflictError, NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db):
        """Test that get_user returns a domain User entity."""
        user_id = temp_db.create_user(
            name="Test Wholesale",
            role=entities.UserRole.WHOLESALER,
            company="Test LLC",
            subscription_tier=entities.SubscriptionTier.PREMIUM,
        )

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.id == user_id
        assert user.role == entities.UserRole.WHOLESALER
        assert user.subscription_tier == entities.SubscriptionTier.PREMIUM
        assert user.company == "Test LLC"
        assert user.reputation_score == 0.0
        assert user.preferences is None
        assert isinstance(user.created_at, datetime)

    def test_get_missing_user_returns_none(self, temp_db):
        """Test that lookups of unknown IDs return None."""
        assert temp_db.get_user(999) is None
        assert temp_db.get_deal(999) is None
        assert temp_db.get_transaction(999) is None

    def test_duplicate_user_name(self, temp_db):
        """Test that user names are unique."""
        temp_db.create_user(name="Same Name", role=entities.UserRole.INVESTOR)
        with pytest.raises(ConflictError):
            temp_db.create_user(name="Same Name", role=entities.UserRole.WHOLESALER)

    def test_list_users_by_role(self, temp_db):
        """Test that list_users filters by role and keeps creation order."""
        first = temp_db.create_user(name="Investor 1", role=entities.UserRole.INVESTOR)
        temp_db.create_user(name="Wholesaler", role=entities.UserRole.WHOLESALER)
        second = temp_db.create_user(name="Investor 2", role=entities.UserRole.INVESTOR)

        investors = temp_db.list_users(role=entities.UserRole.INVESTOR)

        assert [u.id for u in investors] == [first, second]
        assert all(isinstance(u, entities.User) for u in investors)
        assert len(temp_db.list_users()) == 3

    def test_preferences_round_trip(self, temp_db):
        """Test that preferences survive storage with exact prices."""
        user_id = temp_db.create_user(name="Investor", role=entities.UserRole.INVESTOR)
        preferences = entities.InvestorPreferences(
            states=("TX", "FL"),
            cities=("Houston",),
            property_types=("SFH", "Land"),
            min_price=Decimal("50000.50"),
            max_price=Decimal("250000"),
            min_reputation=3.5,
        )

        temp_db.update_user_preferences(user_id, preferences)
        assert temp_db.get_user(user_id).preferences == preferences

        temp_db.update_user_preferences(user_id, None)
        assert temp_db.get_user(user_id).preferences is None

    def test_update_missing_user(self, temp_db):
        """Test that updates to unknown users raise NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.update_user_reputation(999, 4.0)

    def test_get_deal_returns_domain_model(self, temp_db):
        """Test that get_deal returns a domain Deal entity."""
        user_id = temp_db.create_user(name="Wholesaler", role=entities.UserRole.WHOLESALER)
        deal_id = temp_db.create_deal(
            wholesaler_id=user_id,
            address="1 Main St",
            city="Austin",
            state="TX",
            property_type="Land",
            asking_price=Decimal("42000.00"),
            status=entities.DealStatus.PENDING_REVIEW,
        )

        deal = temp_db.get_deal(deal_id)

        assert isinstance(deal, entities.Deal)
        assert deal.wholesaler_id == user_id
        assert deal.asking_price == Decimal("42000.00")
        assert isinstance(deal.asking_price, Decimal)
        assert deal.status == entities.DealStatus.PENDING_REVIEW
        # reputation is attached by callers, never stored on the deal
        assert deal.wholesaler_reputation == 0.0

    def test_list_deals_newest_first(self, temp_db):
        """Test deal listing order and filters."""
        user_id = temp_db.create_user(name="Wholesaler", role=entities.UserRole.WHOLESALER)
        ids = [
            temp_db.create_deal(
                wholesaler_id=user_id,
                address=f"{n} Main St",
                city="Austin",
                state="TX",
                property_type="SFH",
                asking_price=Decimal("100000"),
            )
            for n in range(3)
        ]
        temp_db.update_deal_status(ids[0], entities.DealStatus.SOLD)

        assert [d.id for d in temp_db.list_deals()] == list(reversed(ids))
        assert [d.id for d in temp_db.list_deals(status=entities.DealStatus.SOLD)] == [ids[0]]
        assert temp_db.list_deals(wholesaler_id=999) == []

    def test_transaction_history(self, temp_db):
        """Test that transactions carry their status history."""
        wholesaler = temp_db.create_user(name="Wholesaler", role=entities.UserRole.WHOLESALER)
        investor = temp_db.create_user(name="Investor", role=entities.UserRole.INVESTOR)
        deal_id = temp_db.create_deal(
            wholesaler_id=wholesaler,
            address="1 Main St",
            city="Austin",
            state="TX",
            property_type="SFH",
            asking_price=Decimal("100000"),
        )
        txn_id = temp_db.create_transaction(
            deal_id=deal_id,
            wholesaler_id=wholesaler,
            investor_id=investor,
            sale_price=Decimal("100000"),
            platform_fee=Decimal("5000.00"),
            platform_fee_percent=5,
        )
        changed_at = datetime(2024, 3, 1, 12, 0)
        temp_db.update_transaction_status(
            transaction_id=txn_id,
            expected_status=entities.TransactionStatus.ESCROW_FUNDED,
            new_status=entities.TransactionStatus.UNDER_REVIEW,
            changed_at=changed_at,
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.status == entities.TransactionStatus.UNDER_REVIEW
        assert txn.updated_at == changed_at
        assert all(isinstance(c, entities.StatusChange) for c in txn.status_history)
        assert [c.status for c in txn.status_history] == [
            entities.TransactionStatus.ESCROW_FUNDED,
            entities.TransactionStatus.UNDER_REVIEW,
        ]
        assert [t.id for t in temp_db.list_transactions(user_id=investor)] == [txn_id]

    def test_offer_acceptance_reserves_deal(self, temp_db):
        """Test that accepting an offer moves its deal in the same commit."""
        wholesaler = temp_db.create_user(name="Wholesaler", role=entities.UserRole.WHOLESALER)
        investor = temp_db.create_user(name="Investor", role=entities.UserRole.INVESTOR)
        deal_id = temp_db.create_deal(
            wholesaler_id=wholesaler,
            address="1 Main St",
            city="Austin",
            state="TX",
            property_type="SFH",
            asking_price=Decimal("100000"),
        )
        offer_id = temp_db.create_offer(deal_id, investor, Decimal("98000"), message="Quick close")

        offer = temp_db.get_offer(offer_id)
        assert isinstance(offer, entities.Offer)
        assert offer.status == entities.OfferStatus.PENDING
        assert offer.amount == Decimal("98000")

        responded_at = datetime(2024, 3, 2, 10, 0)
        temp_db.respond_to_offer(
            offer_id,
            entities.OfferStatus.ACCEPTED,
            responded_at=responded_at,
            deal_status=entities.DealStatus.UNDER_CONTRACT,
        )
        assert temp_db.get_offer(offer_id).responded_at == responded_at
        assert temp_db.get_deal(deal_id).status == entities.DealStatus.UNDER_CONTRACT
        assert [o.id for o in temp_db.list_offers(status=entities.OfferStatus.ACCEPTED)] == [
            offer_id
        ]

    def test_respond_to_missing_offer(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.respond_to_offer(
                999, entities.OfferStatus.REJECTED, responded_at=datetime(2024, 1, 1)
            )

    def test_status_update_missing_transaction(self, temp_db):
        """Test that the status update reports unknown transactions."""
        with pytest.raises(NotFoundError):
            temp_db.update_transaction_status(
                transaction_id=999,
                expected_status=entities.TransactionStatus.ESCROW_FUNDED,
                new_status=entities.TransactionStatus.UNDER_REVIEW,
                changed_at=datetime.now(UTC),
            )


def test_memory_database():
    """Test that the in-memory store works without a file."""
    db = create_memory_database()
    db.connect()
    db.initialize_schema()
    try:
        user_id = db.create_user(name="Ephemeral", role=entities.UserRole.ADMIN)
        assert db.get_user(user_id).role == entities.UserRole.ADMIN
    finally:
        db.disconnect()
