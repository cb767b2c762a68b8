"""Utility helpers."""
from .identity import (
    normalize_email,
    get_current_user_id,
    is_admin_user,
    ensure_admin,
    PermissionError,
)
from .intervals import format_interval
from . import constants

__all__ = [
    "normalize_email",
    "get_current_user_id",
    "is_admin_user",
    "ensure_admin",
    "PermissionError",
    "format_interval",
    "constants",
]
