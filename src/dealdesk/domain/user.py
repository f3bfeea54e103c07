"""User domain service."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from dealdesk.database.base import Database
from dealdesk.domain.entities import (
    InvestorPreferences,
    PropertyType,
    SubscriptionTier,
    User,
    UserRole,
)
from dealdesk.domain.errors import NotFoundError, ValidationError, user_not_found, wrong_role

logger = logging.getLogger(__name__)

MAX_REPUTATION = 5


class UserService:
    """Service for managing marketplace users and their preferences."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self,
        name: str,
        role: str,
        company: Optional[str] = None,
        subscription_tier: str = SubscriptionTier.FREE.value,
    ) -> int:
        """Create a user.

        Args:
            name: Unique display name
            role: wholesaler, investor or admin
            company: Optional company name
            subscription_tier: free, pro or premium

        Returns:
            User ID

        Raises:
            ValidationError: If role or tier is unknown
            ConflictError: If the name is taken
        """
        if not name or not name.strip():
            raise ValidationError("User name cannot be empty")
        try:
            user_role = UserRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role '{role}'")
        try:
            tier = SubscriptionTier(subscription_tier)
        except ValueError:
            raise ValidationError(f"Unknown subscription tier '{subscription_tier}'")

        user_id = self.db.create_user(
            name=name.strip(), role=user_role, company=company, subscription_tier=tier
        )
        logger.info("Created %s user %s (%s)", user_role.value, user_id, name)
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def require_user(self, user_id: int, role: Optional[UserRole] = None) -> User:
        """Get a user or raise, optionally checking their role.

        Raises:
            NotFoundError: If the user doesn't exist
            ValidationError: If the user has a different role
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        if role is not None and user.role != role:
            raise ValidationError(wrong_role(user_id, role.value))
        return user

    def list_users(self, role: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by role."""
        user_role = UserRole(role) if role is not None else None
        return self.db.list_users(role=user_role)

    def set_preferences(
        self,
        user_id: int,
        states: Iterable[str] = (),
        cities: Iterable[str] = (),
        property_types: Iterable[str] = (),
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        min_reputation: Optional[float] = None,
    ) -> InvestorPreferences:
        """Replace an investor's matching preferences.

        Raises:
            NotFoundError: If the user doesn't exist
            ValidationError: If the user is not an investor or a value is out of range
        """
        self.require_user(user_id, role=UserRole.INVESTOR)

        types = []
        for property_type in property_types:
            try:
                types.append(PropertyType(property_type).value)
            except ValueError:
                raise ValidationError(f"Unknown property type '{property_type}'")

        if min_price is not None and min_price < 0:
            raise ValidationError("Minimum price cannot be negative")
        if max_price is not None and max_price < 0:
            raise ValidationError("Maximum price cannot be negative")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise ValidationError("Minimum price cannot exceed maximum price")
        if min_reputation is not None and not 0 <= min_reputation <= MAX_REPUTATION:
            raise ValidationError(f"Minimum reputation must be between 0 and {MAX_REPUTATION}")

        preferences = InvestorPreferences(
            states=tuple(state.strip().upper() for state in states),
            cities=tuple(city.strip() for city in cities),
            property_types=tuple(types),
            min_price=min_price,
            max_price=max_price,
            min_reputation=min_reputation,
        )
        self.db.update_user_preferences(user_id, preferences)
        return preferences

    def clear_preferences(self, user_id: int) -> None:
        self.require_user(user_id, role=UserRole.INVESTOR)
        self.db.update_user_preferences(user_id, None)

    def set_subscription_tier(self, user_id: int, tier: str) -> None:
        """Change a user's subscription tier.

        Raises:
            NotFoundError: If the user doesn't exist
            ValidationError: If the tier is unknown
        """
        self.require_user(user_id)
        try:
            subscription_tier = SubscriptionTier(tier)
        except ValueError:
            raise ValidationError(f"Unknown subscription tier '{tier}'")
        self.db.update_user_subscription(user_id, subscription_tier)
