"""Utility functions for dealdesk."""

from dealdesk.utils.amount_parser import parse_amount
from dealdesk.utils.user_resolver import resolve_user

__all__ = ["parse_amount", "resolve_user"]
