"""Repository helpers for user accounts."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from siteadmin.db import app_session
from siteadmin.db.models import Role, User
from siteadmin.utils import constants
from siteadmin.utils.identity import normalize_email
from siteadmin.utils.logging import get_logger

LOG = get_logger("users_repo")


class UserAlreadyExistsError(RuntimeError):
    """Raised when a user name is already taken."""


class UnknownRoleError(ValueError):
    """Raised when assigning a role id that is not registered."""


def _resolve_roles(session, role_ids: Iterable[str]) -> List[Role]:
    wanted = [rid for rid in dict.fromkeys(role_ids) if rid != constants.AUTHENTICATED_RID]
    if not wanted:
        return []
    found = {role.id: role for role in session.query(Role).filter(Role.id.in_(wanted)).all()}
    missing = [rid for rid in wanted if rid not in found]
    if missing:
        raise UnknownRoleError(f"unknown_role:{','.join(missing)}")
    return [found[rid] for rid in wanted]


def create_user(
    name: str,
    *,
    email: Optional[str] = None,
    password: Optional[str] = None,
    status: bool = True,
    roles: Sequence[str] = (),
    created: Optional[datetime] = None,
    access: Optional[datetime] = None,
    user_id: Optional[int] = None,
) -> User:
    """Create an account; ``authenticated`` is implicit and never stored."""
    cleaned = (name or "").strip()
    if not cleaned and user_id != constants.ANONYMOUS_UID:
        raise ValueError("name_required")
    try:
        with app_session() as session:
            user = User(
                name=cleaned,
                email=normalize_email(email),
                password_hash=generate_password_hash(password) if password else None,
                status=bool(status),
                created=created or datetime.utcnow(),
                access=access,
            )
            if user_id is not None:
                user.id = user_id
            user.roles = _resolve_roles(session, roles)
            session.add(user)
    except IntegrityError as exc:
        LOG.warning("User create rejected name=%s: %s", cleaned, exc.orig)
        raise UserAlreadyExistsError("user_exists") from exc
    return user


def ensure_anonymous_user() -> bool:
    """Insert the id 0 sentinel row when missing. Returns True when created."""
    with app_session() as session:
        if session.get(User, constants.ANONYMOUS_UID) is not None:
            return False
        session.add(User(id=constants.ANONYMOUS_UID, name="", status=False))
    return True


def get_user(user_id: int) -> Optional[User]:
    with app_session() as session:
        return session.get(User, user_id)


def load_multiple(ids: Sequence[int]) -> List[User]:
    """Load users keeping the order of ``ids``; unknown ids are skipped."""
    if not ids:
        return []
    with app_session() as session:
        rows = session.query(User).filter(User.id.in_(list(ids))).all()
    by_id: Dict[int, User] = {row.id: row for row in rows}
    return [by_id[uid] for uid in ids if uid in by_id]


def role_ids_for(user_id: int) -> List[str]:
    user = get_user(user_id)
    if user is None:
        return []
    return user.role_ids()


def count_accounts() -> int:
    with app_session() as session:
        return session.query(func.count(User.id)).filter(User.id != constants.ANONYMOUS_UID).scalar() or 0


__all__ = [
    "UserAlreadyExistsError",
    "UnknownRoleError",
    "create_user",
    "ensure_anonymous_user",
    "get_user",
    "load_multiple",
    "role_ids_for",
    "count_accounts",
]
