"""Idempotent default rows (roles, content types, anonymous account)."""
from __future__ import annotations

from typing import Dict

from siteadmin.db.repositories import content_types_repo, roles_repo, users_repo
from siteadmin.utils import constants
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.seed")

DEFAULT_ROLES = (
    (constants.ANONYMOUS_RID, "Anonymous user", 0),
    (constants.AUTHENTICATED_RID, "Authenticated user", 1),
    (constants.ADMINISTRATOR_RID, "Administrator", 2),
)

DEFAULT_CONTENT_TYPES = (
    ("book", "Book page", "Books have a built-in hierarchical navigation. Use for handbooks or tutorials."),
    ("page", "Basic page", "Use basic pages for your static content."),
    ("article", "Article", "Use articles for time-sensitive content like news."),
)


def seed_defaults() -> Dict[str, int]:
    """Insert missing defaults without touching rows an admin has edited."""
    summary = {"roles": 0, "content_types": 0, "anonymous": 0}
    existing_roles = roles_repo.role_names()
    for role_id, label, weight in DEFAULT_ROLES:
        if role_id not in existing_roles:
            roles_repo.upsert_role(role_id, label, weight)
            summary["roles"] += 1
    for type_id, name, description in DEFAULT_CONTENT_TYPES:
        if content_types_repo.get_type(type_id) is None:
            content_types_repo.upsert_type(type_id, name, description)
            summary["content_types"] += 1
    if users_repo.ensure_anonymous_user():
        summary["anonymous"] = 1
    LOG.info(
        "Seeded defaults roles=%s content_types=%s anonymous=%s",
        summary["roles"],
        summary["content_types"],
        summary["anonymous"],
    )
    return summary


__all__ = ["DEFAULT_ROLES", "DEFAULT_CONTENT_TYPES", "seed_defaults"]
