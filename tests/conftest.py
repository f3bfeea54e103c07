"""Shared pytest fixtures for dealdesk tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from dealdesk.database.factories import create_sqlite_database
from dealdesk.domain.deal import DealService
from dealdesk.domain.matchmaking import MatchmakingService
from dealdesk.domain.offer import OfferService
from dealdesk.domain.rating import RatingService
from dealdesk.domain.transaction import TransactionService
from dealdesk.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def deal_service(temp_db):
    return DealService(temp_db)


@pytest.fixture
def offer_service(temp_db):
    return OfferService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def rating_service(temp_db):
    return RatingService(temp_db)


@pytest.fixture
def matchmaking_service(temp_db):
    return MatchmakingService(temp_db)


@pytest.fixture
def wholesaler(user_service):
    """A pro-tier wholesaler."""
    user_id = user_service.create_user(
        name="Acme Wholesale", role="wholesaler", company="Acme LLC", subscription_tier="pro"
    )
    return user_service.get_user(user_id)


@pytest.fixture
def investor(user_service):
    """An investor looking for Houston single-family homes under 250k."""
    user_id = user_service.create_user(name="Jane Buyer", role="investor")
    user_service.set_preferences(
        user_id,
        states=["TX"],
        cities=["Houston"],
        property_types=["SFH"],
        max_price=Decimal("250000"),
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_deal(deal_service, wholesaler):
    """An active, complete Houston SFH listing."""
    deal_id = deal_service.create_deal(
        wholesaler_id=wholesaler.id,
        address="12 Oak St",
        city="Houston",
        state="TX",
        property_type="SFH",
        asking_price=Decimal("185000"),
        arv_estimate=Decimal("260000"),
        rehab_estimate=Decimal("40000"),
        assignment_fee=Decimal("15000"),
        description="Three bed brick ranch, needs roof and kitchen.",
    )
    return deal_service.get_deal(deal_id)


@pytest.fixture
def accepted_offer(offer_service, sample_deal, investor):
    """An accepted 180k offer on the sample deal, which puts the deal under contract."""
    offer_id = offer_service.make_offer(
        deal_id=sample_deal.id, investor_id=investor.id, amount=Decimal("180000")
    )
    return offer_service.accept_offer(offer_id)


@pytest.fixture
def sample_transaction(transaction_service, accepted_offer):
    """A freshly opened transaction on the sample deal."""
    transaction_id = transaction_service.create_transaction(accepted_offer.id)
    return transaction_service.get_transaction(transaction_id)


@pytest.fixture
def completed_transaction(transaction_service, sample_transaction):
    """The sample transaction walked through to completion."""
    for status in ("under_review", "closing", "completed"):
        transaction_service.advance_status(sample_transaction.id, status)
    return transaction_service.get_transaction(sample_transaction.id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
