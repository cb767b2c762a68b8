"""Identity & permission helpers for the admin blueprints."""
from __future__ import annotations

from typing import Any, Optional

from flask import session

from siteadmin.utils import constants

SESSION_USER_KEY = "user_id"
SESSION_ADMIN_KEY = "is_admin"


def normalize_email(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip().lower()
    return cleaned or None


def get_current_user_id() -> Optional[int]:
    uid = session.get(SESSION_USER_KEY)
    if uid is None:
        return None
    try:
        return int(uid)
    except (TypeError, ValueError):
        return None


def is_admin_user() -> bool:
    if session.get(SESSION_ADMIN_KEY):
        return True
    uid = get_current_user_id()
    if not uid or uid == constants.ANONYMOUS_UID:
        return False
    from siteadmin.db.repositories import users_repo  # local import, avoids db init at import time

    return constants.ADMINISTRATOR_RID in users_repo.role_ids_for(uid)


class PermissionError(Exception):
    pass


def ensure_admin() -> None:
    if not is_admin_user():
        raise PermissionError("Admin privileges required")


__all__ = [
    "SESSION_USER_KEY",
    "SESSION_ADMIN_KEY",
    "normalize_email",
    "get_current_user_id",
    "is_admin_user",
    "ensure_admin",
    "PermissionError",
]
