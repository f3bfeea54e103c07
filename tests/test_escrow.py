"""Tests for the escrow transaction lifecycle."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from dealdesk.domain.entities import StatusChange, Transaction, TransactionStatus
from dealdesk.domain.errors import DomainError, InvalidTransitionError
from dealdesk.domain.escrow import (
    TERMINAL_STATUSES,
    VALID_TRANSITIONS,
    can_transition,
    get_available_transitions,
    is_terminal,
    transition_escrow,
)

ALL_STATUSES = list(TransactionStatus)


def make_transaction(status=TransactionStatus.ESCROW_FUNDED) -> Transaction:
    created = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    return Transaction(
        id=1,
        deal_id=10,
        wholesaler_id=100,
        investor_id=200,
        status=status,
        sale_price=Decimal("180000"),
        platform_fee=Decimal("7200"),
        platform_fee_percent=4,
        escrow_amount=Decimal("1800"),
        status_history=(StatusChange(status=status, timestamp=created),),
        created_at=created,
    )


class TestTransitionTable:
    """Tests for can_transition and get_available_transitions."""

    @pytest.mark.parametrize(
        "current, target",
        [
            ("escrow_funded", "under_review"),
            ("under_review", "closing"),
            ("under_review", "cancelled"),
            ("under_review", "disputed"),
            ("closing", "completed"),
            ("closing", "cancelled"),
            ("closing", "disputed"),
            ("disputed", "closing"),
            ("disputed", "cancelled"),
        ],
    )
    def test_legal_edges(self, current, target):
        """Test every edge of the lifecycle."""
        assert can_transition(current, target) is True

    def test_edge_count(self):
        """Test that no edge exists beyond the nine listed."""
        legal = [
            (c, t) for c in ALL_STATUSES for t in ALL_STATUSES if can_transition(c, t)
        ]
        assert len(legal) == 9

    @pytest.mark.parametrize("current", ALL_STATUSES)
    @pytest.mark.parametrize("target", ALL_STATUSES)
    def test_query_forms_agree(self, current, target):
        """Test that can_transition matches get_available_transitions."""
        assert can_transition(current, target) == (target in get_available_transitions(current))

    @pytest.mark.parametrize("target", ALL_STATUSES)
    def test_terminal_states_never_move(self, target):
        """Test that completed and cancelled have no way out."""
        assert can_transition("completed", target) is False
        assert can_transition("cancelled", target) is False

    def test_terminal_statuses(self):
        """Test which states are final."""
        assert TERMINAL_STATUSES == {TransactionStatus.COMPLETED, TransactionStatus.CANCELLED}
        assert is_terminal("completed")
        assert not is_terminal("disputed")

    def test_no_direct_jump_to_closing(self):
        """Test that escrow_funded must pass through review first."""
        assert can_transition("escrow_funded", "closing") is False

    def test_no_self_transition(self):
        """Test that staying in place is not a transition."""
        for status in ALL_STATUSES:
            assert can_transition(status, status) is False

    def test_unknown_statuses(self):
        """Test that unknown labels are rejected rather than raising."""
        assert can_transition("escrow_funded", "teleported") is False
        assert can_transition("bogus", "under_review") is False
        assert get_available_transitions("bogus") == []

    def test_available_transitions_order(self):
        """Test that targets come back in table order."""
        assert get_available_transitions("under_review") == [
            TransactionStatus.CLOSING,
            TransactionStatus.CANCELLED,
            TransactionStatus.DISPUTED,
        ]

    def test_available_transitions_returns_copy(self):
        """Test that callers cannot mutate the table through the result."""
        get_available_transitions("closing").clear()
        assert len(VALID_TRANSITIONS[TransactionStatus.CLOSING]) == 3


class TestTransitionEscrow:
    """Tests for transition_escrow."""

    def test_advances_status(self):
        """Test a legal move returns an updated copy."""
        txn = make_transaction()
        now = datetime(2024, 3, 2, 9, 30, tzinfo=UTC)
        updated = transition_escrow(txn, "under_review", now=now)

        assert updated.status == TransactionStatus.UNDER_REVIEW
        assert updated.updated_at == now
        assert updated.completed_at is None
        # Original is untouched
        assert txn.status == TransactionStatus.ESCROW_FUNDED

    def test_history_left_to_store(self):
        """Test that the history is not appended by the state machine."""
        txn = make_transaction()
        updated = transition_escrow(txn, "under_review")
        assert updated.status_history == txn.status_history

    def test_completion_sets_completed_at(self):
        """Test that reaching completed stamps the completion time."""
        txn = make_transaction(TransactionStatus.CLOSING)
        now = datetime(2024, 4, 1, tzinfo=UTC)
        updated = transition_escrow(txn, TransactionStatus.COMPLETED, now=now)
        assert updated.completed_at == now
        assert updated.updated_at == now

    def test_other_moves_keep_completed_at_unset(self):
        """Test that only completion sets completed_at."""
        txn = make_transaction(TransactionStatus.CLOSING)
        assert transition_escrow(txn, "cancelled").completed_at is None

    def test_default_timestamp(self):
        """Test that the change is stamped with the current time by default."""
        before = datetime.now(UTC)
        updated = transition_escrow(make_transaction(), "under_review")
        assert updated.updated_at >= before

    def test_illegal_move_rejected(self):
        """Test that escrow_funded cannot jump to closing."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition_escrow(make_transaction(), "closing")

        error = exc_info.value
        assert error.current == "escrow_funded"
        assert error.target == "closing"
        assert error.available == ["under_review"]
        assert "under_review" in str(error)
        assert isinstance(error, DomainError)

    def test_terminal_move_rejected(self):
        """Test that a completed transaction cannot move again."""
        txn = make_transaction(TransactionStatus.COMPLETED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            transition_escrow(txn, "disputed")
        assert exc_info.value.available == []
        assert "final" in str(exc_info.value)
