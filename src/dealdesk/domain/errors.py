"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicates or a concurrent status change."""


class InvalidTransitionError(DomainError):
    """Requested transaction status change is not an edge of the escrow lifecycle."""

    def __init__(self, current: str, target: str, available: Iterable[str]):
        self.current = str(current)
        self.target = str(target)
        self.available = [str(status) for status in available]
        super().__init__(invalid_transition(self.current, self.target, self.available))


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def deal_not_found(deal_id: int) -> str:
    """Return message for missing deal."""
    return f"Deal {deal_id} not found"


def offer_not_found(offer_id: int) -> str:
    """Return message for missing offer."""
    return f"Offer {offer_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def wrong_role(user_id: int, expected: str) -> str:
    """Return message when a user does not hold the role an operation needs."""
    article = "an" if expected[:1] in "aeiou" else "a"
    return f"User {user_id} is not {article} {expected}"


def invalid_transition(current: str, target: str, available: list[str]) -> str:
    """Return message for a rejected status change, listing the legal targets."""
    if available:
        options = ", ".join(available)
    else:
        options = f"none, '{current}' is final"
    return (
        f"Cannot move transaction from '{current}' to '{target}'. "
        f"Available transitions: {options}"
    )


def offer_already_answered(offer_id: int) -> str:
    """Return message for a response to an offer that is no longer pending."""
    return f"Offer {offer_id} has already been responded to"


def deal_not_active(deal_id: int) -> str:
    """Return message when a deal is not open for offers."""
    return f"Deal {deal_id} is not active"


def status_changed_concurrently(transaction_id: int, expected: str) -> str:
    """Return message when a compare-and-swap on transaction status loses a race."""
    return (
        f"Transaction {transaction_id} is no longer '{expected}'; "
        "it was changed by another request"
    )


def duplicate_rating(transaction_id: int, reviewer_id: int) -> str:
    """Return message for a second rating of the same transaction by one reviewer."""
    return f"User {reviewer_id} has already rated transaction {transaction_id}"


def rating_out_of_range(field: str) -> str:
    return f"'{field}' must be between 1 and 5"
