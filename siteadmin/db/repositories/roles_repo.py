"""Repository helpers for user roles."""
from __future__ import annotations

from typing import Dict, List

from siteadmin.db import app_session
from siteadmin.db.models import Role
from siteadmin.utils import constants


def list_roles() -> List[Role]:
    with app_session() as session:
        return session.query(Role).order_by(Role.weight, Role.label).all()


def role_names(members_only: bool = False) -> Dict[str, str]:
    """Return ``{role id: label}`` ordered by weight.

    ``members_only`` drops the anonymous role, leaving roles an account can hold.
    """
    return {
        role.id: role.label
        for role in list_roles()
        if not (members_only and role.id == constants.ANONYMOUS_RID)
    }


def upsert_role(role_id: str, label: str, weight: int = 0) -> Role:
    with app_session() as session:
        record = session.get(Role, role_id)
        if record:
            record.label = label
            record.weight = weight
            return record
        record = Role(id=role_id, label=label, weight=weight)
        session.add(record)
        return record


__all__ = ["list_roles", "role_names", "upsert_role"]
