"""SQLAlchemy models for the dealdesk database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Float,
    Numeric,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Marketplace user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    role = Column(String, nullable=False)
    company = Column(String, nullable=True)
    subscription_tier = Column(String, default="free", nullable=False)
    reputation_score = Column(Float, default=0.0, nullable=False)
    # Investor preferences as a JSON document; NULL when none were set
    preferences = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    deals = relationship("Deal", back_populates="wholesaler")


class Deal(Base):
    """Property listing model."""

    __tablename__ = "deals"

    id = Column(Integer, primary_key=True)
    wholesaler_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String(2), nullable=False)
    property_type = Column(String, nullable=False)
    asking_price = Column(Numeric(12, 2), nullable=False)
    arv_estimate = Column(Numeric(12, 2), nullable=True)
    rehab_estimate = Column(Numeric(12, 2), nullable=True)
    assignment_fee = Column(Numeric(12, 2), nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String, default="active", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    wholesaler = relationship("User", back_populates="deals")
    transactions = relationship("Transaction", back_populates="deal")
    offers = relationship("Offer", back_populates="deal")


class Offer(Base):
    """Investor offer on a deal."""

    __tablename__ = "offers"

    id = Column(Integer, primary_key=True)
    deal_id = Column(Integer, ForeignKey("deals.id"), nullable=False)
    investor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    message = Column(Text, default="", nullable=False)
    status = Column(String, default="pending", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    responded_at = Column(DateTime, nullable=True)

    deal = relationship("Deal", back_populates="offers")


class Transaction(Base):
    """Escrow transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    deal_id = Column(Integer, ForeignKey("deals.id"), nullable=False)
    # At most one escrow per accepted offer
    offer_id = Column(Integer, ForeignKey("offers.id"), unique=True, nullable=True)
    wholesaler_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    investor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(String, default="escrow_funded", nullable=False)
    sale_price = Column(Numeric(12, 2), nullable=False)
    platform_fee = Column(Numeric(12, 2), nullable=False)
    platform_fee_percent = Column(Integer, nullable=False)
    escrow_amount = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    deal = relationship("Deal", back_populates="transactions")
    status_history = relationship(
        "TransactionStatusChange",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionStatusChange.id",
    )


class TransactionStatusChange(Base):
    """Append-only status history entry."""

    __tablename__ = "transaction_status_changes"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    status = Column(String, nullable=False)
    timestamp = Column(DateTime, default=_utcnow, nullable=False)

    transaction = relationship("Transaction", back_populates="status_history")


class Rating(Base):
    """Rating left by one party of a completed transaction for the other."""

    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    reviewer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    reviewee_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    score = Column(Integer, nullable=False)
    communication = Column(Integer, nullable=True)
    deal_quality = Column(Integer, nullable=True)
    professionalism = Column(Integer, nullable=True)
    timeliness = Column(Integer, nullable=True)
    comment = Column(Text, default="", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # One rating per reviewer per transaction
    __table_args__ = (
        UniqueConstraint("transaction_id", "reviewer_id", name="uq_rating_transaction_reviewer"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
