"""Repository helpers for the content type registry."""
from __future__ import annotations

from typing import Dict, List, Optional

from siteadmin.db import app_session
from siteadmin.db.models import ContentType


def list_types() -> List[ContentType]:
    with app_session() as session:
        return session.query(ContentType).order_by(ContentType.name, ContentType.type).all()


def list_names() -> Dict[str, str]:
    """Return ``{type: display name}`` ordered by display name."""
    return {record.type: record.name for record in list_types()}


def get_type(type_id: str) -> Optional[ContentType]:
    with app_session() as session:
        return session.get(ContentType, type_id)


def upsert_type(type_id: str, name: str, description: str = "") -> ContentType:
    with app_session() as session:
        record = session.get(ContentType, type_id)
        if record:
            record.name = name
            record.description = description
            return record
        record = ContentType(type=type_id, name=name, description=description)
        session.add(record)
        return record


__all__ = ["list_types", "list_names", "get_type", "upsert_type"]
