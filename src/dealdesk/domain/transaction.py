"""Transaction domain service."""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from dealdesk.database.base import Database
from dealdesk.domain.entities import (
    DealStatus,
    OfferStatus,
    StatusChange,
    Transaction,
    TransactionStatus,
    UserRole,
)
from dealdesk.domain.errors import (
    NotFoundError,
    ValidationError,
    deal_not_found,
    offer_not_found,
    transaction_not_found,
    user_not_found,
    wrong_role,
)
from dealdesk.domain.escrow import get_available_transitions, transition_escrow
from dealdesk.domain.fees import calculate_platform_fee, to_decimal

logger = logging.getLogger(__name__)

# Earnest deposit held in escrow, as a share of the sale price
ESCROW_DEPOSIT_RATE = Decimal("0.01")

# Where the deal goes when its escrow ends
DEAL_STATUS_ON_CLOSE = {
    TransactionStatus.COMPLETED: DealStatus.SOLD,
    TransactionStatus.CANCELLED: DealStatus.ACTIVE,
}


class TransactionService:
    """Service for creating transactions and moving them through escrow."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(self, offer_id: int, wholesaler_id: Optional[int] = None) -> int:
        """Open an escrow transaction from an accepted offer.

        The sale price is the offer amount and the platform fee is taken at the
        deal wholesaler's subscription tier. The deal must be under contract,
        which accepting the offer already did.

        Args:
            offer_id: Accepted offer to open escrow for
            wholesaler_id: When given, must own the offer's deal

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the offer, deal, investor or wholesaler doesn't exist
            ValidationError: If the offer is not accepted, the deal is not under
                contract or the caller does not own the deal
            ConflictError: If the offer already has a transaction
        """
        offer = self.db.get_offer(offer_id)
        if offer is None:
            raise NotFoundError(offer_not_found(offer_id))
        if offer.status is not OfferStatus.ACCEPTED:
            raise ValidationError("Only accepted offers can become transactions")

        deal = self.db.get_deal(offer.deal_id)
        if deal is None:
            raise NotFoundError(deal_not_found(offer.deal_id))
        if wholesaler_id is not None and deal.wholesaler_id != wholesaler_id:
            raise ValidationError(f"Deal {deal.id} does not belong to user {wholesaler_id}")
        if deal.status is not DealStatus.UNDER_CONTRACT:
            raise ValidationError(f"Deal {deal.id} is {deal.status.value}, not under contract")

        investor = self.db.get_user(offer.investor_id)
        if investor is None:
            raise NotFoundError(user_not_found(offer.investor_id))
        if investor.role != UserRole.INVESTOR:
            raise ValidationError(wrong_role(offer.investor_id, UserRole.INVESTOR.value))

        wholesaler = self.db.get_user(deal.wholesaler_id)
        if wholesaler is None:
            raise NotFoundError(user_not_found(deal.wholesaler_id))

        price = to_decimal(offer.amount)
        platform_fee = calculate_platform_fee(price, wholesaler.subscription_tier)
        escrow_amount = (price * ESCROW_DEPOSIT_RATE).quantize(Decimal(1), rounding=ROUND_HALF_UP)

        transaction_id = self.db.create_transaction(
            deal_id=deal.id,
            wholesaler_id=deal.wholesaler_id,
            investor_id=offer.investor_id,
            sale_price=price,
            platform_fee=platform_fee.fee,
            platform_fee_percent=platform_fee.fee_percent,
            escrow_amount=escrow_amount,
            status=TransactionStatus.ESCROW_FUNDED,
            offer_id=offer.id,
        )
        logger.info(
            "Opened transaction %s for deal %s from offer %s at %s (fee %s%%)",
            transaction_id,
            deal.id,
            offer.id,
            price,
            platform_fee.fee_percent,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def _require_transaction(self, transaction_id: int) -> Transaction:
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[Transaction]:
        """List transactions, newest first, optionally for one party or status."""
        txn_status = TransactionStatus(status) if status is not None else None
        return self.db.list_transactions(user_id=user_id, status=txn_status)

    def available_transitions(self, transaction_id: int) -> list[TransactionStatus]:
        """Statuses the transaction can move to next."""
        return get_available_transitions(self._require_transaction(transaction_id).status)

    def advance_status(
        self, transaction_id: int, new_status: str, now: Optional[datetime] = None
    ) -> Transaction:
        """Move a transaction to a new status.

        The change is committed with a compare-and-swap on the status that was
        read, so a concurrent change made in between makes this call fail
        instead of writing a second, conflicting history entry. Completing the
        escrow marks the deal sold; cancelling it relists the deal as active.

        Args:
            transaction_id: Transaction to advance
            new_status: Target status
            now: Timestamp of the change (defaults to the current UTC time)

        Returns:
            The stored transaction after the change

        Raises:
            NotFoundError: If the transaction doesn't exist
            InvalidTransitionError: If the lifecycle does not allow the change
            ConflictError: If the status changed concurrently
        """
        transaction = self._require_transaction(transaction_id)
        updated = transition_escrow(transaction, new_status, now=now)

        self.db.update_transaction_status(
            transaction_id=transaction_id,
            expected_status=transaction.status,
            new_status=updated.status,
            changed_at=updated.updated_at,
            completed_at=updated.completed_at if updated.status is TransactionStatus.COMPLETED else None,
            deal_status=DEAL_STATUS_ON_CLOSE.get(updated.status),
        )
        logger.info(
            "Transaction %s moved %s -> %s",
            transaction_id,
            transaction.status.value,
            updated.status.value,
        )
        return self._require_transaction(transaction_id)

    def get_timeline(self, transaction_id: int) -> tuple[StatusChange, ...]:
        """Return the transaction's status history, oldest first."""
        return self._require_transaction(transaction_id).status_history
