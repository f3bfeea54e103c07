"""Domain model entities for dealdesk.

These are pure data classes representing marketplace concepts, independent of
the storage schema. The rule engines consume and return only these types, so
they stay unaware of which repository implementation is wired in.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class PropertyType(str, Enum):
    """Kinds of property a deal can list."""

    SFH = "SFH"
    MULTI_FAMILY = "Multi-Family"
    COMMERCIAL = "Commercial"
    LAND = "Land"


class SubscriptionTier(str, Enum):
    """Seller subscription tiers; the tier sets the platform fee."""

    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"


class UserRole(str, Enum):
    WHOLESALER = "wholesaler"
    INVESTOR = "investor"
    ADMIN = "admin"


class DealStatus(str, Enum):
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    ACTIVE = "active"
    UNDER_CONTRACT = "under_contract"
    SOLD = "sold"
    DELISTED = "delisted"


class OfferStatus(str, Enum):
    """An investor offer waits for the deal owner to accept or reject it."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class TransactionStatus(str, Enum):
    """Escrow lifecycle states. See dealdesk.domain.escrow for the legal edges."""

    ESCROW_FUNDED = "escrow_funded"
    UNDER_REVIEW = "under_review"
    CLOSING = "closing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DISPUTED = "disputed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InvestorPreferences:
    """What an investor is looking for.

    Empty collections and unset bounds mean "no constraint". An empty
    ``property_types`` matches any type; ``cities`` only refines ``states``.
    """

    states: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()
    property_types: tuple[str, ...] = ()
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_reputation: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        """True when no preference at all has been stated."""
        return (
            not self.states
            and not self.cities
            and not self.property_types
            and self.min_price is None
            and self.max_price is None
            and self.min_reputation is None
        )


@dataclass(frozen=True)
class User:
    """Marketplace participant."""

    id: int
    name: str
    role: UserRole
    company: Optional[str]
    subscription_tier: SubscriptionTier
    reputation_score: float
    preferences: Optional[InvestorPreferences]
    created_at: datetime


@dataclass(frozen=True)
class Deal:
    """Snapshot of a property listing.

    ``wholesaler_reputation`` is attached by the caller before matching; the
    matching engine never looks it up itself.
    """

    state: str
    city: str
    property_type: str
    asking_price: Decimal
    wholesaler_reputation: float = 0.0
    id: Optional[int] = None
    wholesaler_id: Optional[int] = None
    address: Optional[str] = None
    arv_estimate: Optional[Decimal] = None
    rehab_estimate: Optional[Decimal] = None
    assignment_fee: Optional[Decimal] = None
    description: Optional[str] = None
    status: DealStatus = DealStatus.ACTIVE
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class MatchResult:
    score: float
    percentage: int
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class DealMatch:
    deal: Deal
    match: MatchResult


@dataclass(frozen=True)
class InvestorMatch:
    investor: User
    match: MatchResult


@dataclass(frozen=True)
class Offer:
    """Investor bid on a deal. An accepted offer is what escrow opens from."""

    id: int
    deal_id: int
    investor_id: int
    amount: Decimal
    status: OfferStatus
    created_at: datetime
    message: str = ""
    responded_at: Optional[datetime] = None


@dataclass(frozen=True)
class StatusChange:
    """One entry of a transaction's append-only status history."""

    status: TransactionStatus
    timestamp: datetime


@dataclass(frozen=True)
class Transaction:
    """Escrow transaction for a sold deal."""

    id: int
    deal_id: int
    wholesaler_id: int
    investor_id: int
    status: TransactionStatus
    sale_price: Decimal
    platform_fee: Decimal
    platform_fee_percent: int
    escrow_amount: Optional[Decimal]
    status_history: tuple[StatusChange, ...]
    created_at: datetime
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    offer_id: Optional[int] = None


@dataclass(frozen=True)
class RatingCategories:
    """Optional 1-5 sub-scores; a missing one falls back to the overall score."""

    communication: Optional[int] = None
    deal_quality: Optional[int] = None
    professionalism: Optional[int] = None
    timeliness: Optional[int] = None


@dataclass(frozen=True)
class Rating:
    score: int
    categories: RatingCategories = field(default_factory=RatingCategories)
    id: Optional[int] = None
    transaction_id: Optional[int] = None
    reviewer_id: Optional[int] = None
    reviewee_id: Optional[int] = None
    comment: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReputationBreakdown:
    overall: float
    categories: dict[str, float]
    total_reviews: int


@dataclass(frozen=True)
class PlatformFee:
    fee: Decimal
    fee_percent: int
    net_to_wholesaler: Decimal


@dataclass(frozen=True)
class AssignmentFee:
    fee: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class DealQualityReport:
    approved: bool
    auto_approvable: bool
    issues: tuple[str, ...]
    warnings: tuple[str, ...]
    score: int


@dataclass(frozen=True)
class ArvEstimate:
    arv: Decimal
    avg_price_per_sqft: Decimal


@dataclass(frozen=True)
class RoiResult:
    roi: Decimal
    profit: Decimal
    total_investment: Decimal


@dataclass(frozen=True)
class RehabEstimate:
    total_cost: Decimal
    breakdown: dict[str, Decimal]


@dataclass(frozen=True)
class RentalAnalysis:
    """Cash flow and return figures for a buy-and-hold rental.

    Percentages are in percent, not fractions.
    """

    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    cash_on_cash: Decimal
    cap_rate: Decimal
