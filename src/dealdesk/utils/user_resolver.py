"""Utility for resolving user names to IDs."""

from dealdesk.domain.user import UserService


def resolve_user(user_service: UserService, user: str | int) -> int:
    """Resolve a user name or ID to a user ID.

    Args:
        user_service: UserService instance
        user: User name (str) or ID (int or string representation of int)

    Returns:
        User ID

    Raises:
        ValueError: If the user is not found
    """
    if isinstance(user, int):
        if user_service.get_user(user) is None:
            raise ValueError(f"User ID {user} not found")
        return user

    try:
        user_id = int(user)
    except (ValueError, TypeError):
        user_id = None

    if user_id is not None:
        if user_service.get_user(user_id) is None:
            raise ValueError(f"User ID {user_id} not found")
        return user_id

    for candidate in user_service.list_users():
        if candidate.name == user:
            return candidate.id

    raise ValueError(f"User '{user}' not found")
