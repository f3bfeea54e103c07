"""Escrow transaction lifecycle.

The edge table below is the only authority on which status changes are legal.
Every code path that changes a transaction's status goes through
``can_transition`` or ``transition_escrow``.
"""

from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional, Union

from dealdesk.domain.entities import Transaction, TransactionStatus
from dealdesk.domain.errors import InvalidTransitionError

VALID_TRANSITIONS: dict[TransactionStatus, tuple[TransactionStatus, ...]] = {
    TransactionStatus.ESCROW_FUNDED: (TransactionStatus.UNDER_REVIEW,),
    TransactionStatus.UNDER_REVIEW: (
        TransactionStatus.CLOSING,
        TransactionStatus.CANCELLED,
        TransactionStatus.DISPUTED,
    ),
    TransactionStatus.CLOSING: (
        TransactionStatus.COMPLETED,
        TransactionStatus.CANCELLED,
        TransactionStatus.DISPUTED,
    ),
    TransactionStatus.DISPUTED: (
        TransactionStatus.CLOSING,
        TransactionStatus.CANCELLED,
    ),
    TransactionStatus.COMPLETED: (),
    TransactionStatus.CANCELLED: (),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)

StatusLike = Union[TransactionStatus, str]


def _as_status(value: StatusLike) -> Optional[TransactionStatus]:
    try:
        return TransactionStatus(value)
    except ValueError:
        return None


def get_available_transitions(current: StatusLike) -> list[TransactionStatus]:
    """Return the statuses reachable in one step from ``current``."""
    status = _as_status(current)
    if status is None:
        return []
    return list(VALID_TRANSITIONS[status])


def can_transition(current: StatusLike, target: StatusLike) -> bool:
    """Check whether ``current -> target`` is an edge of the lifecycle."""
    target_status = _as_status(target)
    if target_status is None:
        return False
    return target_status in get_available_transitions(current)


def is_terminal(status: StatusLike) -> bool:
    return _as_status(status) in TERMINAL_STATUSES


def transition_escrow(
    transaction: Transaction,
    new_status: StatusLike,
    now: Optional[datetime] = None,
) -> Transaction:
    """Return a copy of ``transaction`` moved to ``new_status``.

    The status history is left untouched; the store appends the history entry
    when it commits the change.

    Args:
        transaction: Transaction to advance
        new_status: Target status
        now: Timestamp for the change (defaults to the current UTC time)

    Returns:
        Updated Transaction copy

    Raises:
        InvalidTransitionError: If the change is not a legal edge
    """
    if not can_transition(transaction.status, new_status):
        raise InvalidTransitionError(
            transaction.status,
            new_status,
            get_available_transitions(transaction.status),
        )

    target = TransactionStatus(new_status)
    timestamp = now if now is not None else datetime.now(UTC)
    completed_at = timestamp if target is TransactionStatus.COMPLETED else transaction.completed_at
    return replace(
        transaction,
        status=target,
        updated_at=timestamp,
        completed_at=completed_at,
    )
