"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from dealdesk.domain.entities import (
    Deal,
    DealStatus,
    InvestorPreferences,
    Offer,
    OfferStatus,
    Rating,
    RatingCategories,
    SubscriptionTier,
    Transaction,
    TransactionStatus,
    User,
    UserRole,
)


class Database(ABC):
    """Abstract database interface for dealdesk.

    Implementations return domain entities only. Status changes on a
    transaction must be atomic per record (see ``update_transaction_status``).
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        name: str,
        role: UserRole,
        company: Optional[str] = None,
        subscription_tier: SubscriptionTier = SubscriptionTier.FREE,
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def list_users(self, role: Optional[UserRole] = None) -> list[User]:
        """List users, optionally filtered by role."""
        pass

    @abstractmethod
    def update_user_preferences(
        self, user_id: int, preferences: Optional[InvestorPreferences]
    ) -> None:
        """Replace a user's investor preferences (None clears them)."""
        pass

    @abstractmethod
    def update_user_reputation(self, user_id: int, reputation_score: float) -> None:
        """Store a recomputed reputation score."""
        pass

    @abstractmethod
    def update_user_subscription(self, user_id: int, tier: SubscriptionTier) -> None:
        """Change a user's subscription tier."""
        pass

    # Deal operations
    @abstractmethod
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
        status: DealStatus = DealStatus.ACTIVE,
    ) -> int:
        """Create a deal. Returns deal ID."""
        pass

    @abstractmethod
    def get_deal(self, deal_id: int) -> Optional[Deal]:
        """Get deal by ID."""
        pass

    @abstractmethod
    def list_deals(
        self,
        wholesaler_id: Optional[int] = None,
        status: Optional[DealStatus] = None,
    ) -> list[Deal]:
        """List deals, newest first, with optional filters."""
        pass

    @abstractmethod
    def update_deal_status(self, deal_id: int, status: DealStatus) -> None:
        """Change a deal's listing status."""
        pass

    # Offer operations
    @abstractmethod
    def create_offer(
        self, deal_id: int, investor_id: int, amount: Decimal, message: str = ""
    ) -> int:
        """Create a pending offer. Returns offer ID."""
        pass

    @abstractmethod
    def get_offer(self, offer_id: int) -> Optional[Offer]:
        """Get offer by ID."""
        pass

    @abstractmethod
    def list_offers(
        self,
        deal_id: Optional[int] = None,
        investor_id: Optional[int] = None,
        status: Optional[OfferStatus] = None,
    ) -> list[Offer]:
        """List offers, newest first, with optional filters."""
        pass

    @abstractmethod
    def respond_to_offer(
        self,
        offer_id: int,
        new_status: OfferStatus,
        responded_at: datetime,
        deal_status: Optional[DealStatus] = None,
    ) -> None:
        """Atomically move a pending offer to ``new_status``.

        When ``deal_status`` is given, the offer's deal is moved from active to
        that status in the same commit. Raises ConflictError if the offer is no
        longer pending or the deal is no longer active, and NotFoundError if
        the offer does not exist.
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        deal_id: int,
        wholesaler_id: int,
        investor_id: int,
        sale_price: Decimal,
        platform_fee: Decimal,
        platform_fee_percent: int,
        escrow_amount: Optional[Decimal] = None,
        status: TransactionStatus = TransactionStatus.ESCROW_FUNDED,
        offer_id: Optional[int] = None,
    ) -> int:
        """Create a transaction with its initial status history entry. Returns transaction ID.

        Raises ConflictError if a transaction already exists for ``offer_id``.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, including its status history."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: Optional[int] = None,
        status: Optional[TransactionStatus] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            user_id: Optional filter on either party (wholesaler or investor)
            status: Optional status filter
        """
        pass

    @abstractmethod
    def update_transaction_status(
        self,
        transaction_id: int,
        expected_status: TransactionStatus,
        new_status: TransactionStatus,
        changed_at: datetime,
        completed_at: Optional[datetime] = None,
        deal_status: Optional[DealStatus] = None,
    ) -> None:
        """Atomically move a transaction from ``expected_status`` to ``new_status``.

        Appends exactly one status history entry. When ``deal_status`` is given,
        the transaction's deal moves to it in the same commit. Raises
        ConflictError if the stored status is no longer ``expected_status`` at
        commit time, and NotFoundError if the transaction does not exist.
        """
        pass

    # Rating operations
    @abstractmethod
    def create_rating(
        self,
        transaction_id: int,
        reviewer_id: int,
        reviewee_id: int,
        score: int,
        categories: RatingCategories,
        comment: str = "",
    ) -> int:
        """Create a rating. Returns rating ID."""
        pass

    @abstractmethod
    def list_ratings_for_user(self, reviewee_id: int) -> list[Rating]:
        """List every rating a user has received, oldest first."""
        pass

    @abstractmethod
    def get_rating_by_transaction(self, transaction_id: int, reviewer_id: int) -> Optional[Rating]:
        """Get the rating a reviewer left for a transaction, if any."""
        pass
