"""ORM models for the site database (config, content types, people)."""
from __future__ import annotations

import datetime
import json

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ConfigRecord(Base):
    """One named configuration object (e.g. ``book.settings``).

    The payload is stored as JSON text; readers go through
    :class:`siteadmin.db.repositories.config_repo.ConfigObject`.
    """

    __tablename__ = "config"

    name = Column(String(255), primary_key=True)
    data = Column(Text, nullable=False, default="{}")
    updated_at = Column(
        DateTime,
        default=datetime.datetime.utcnow,
        onupdate=datetime.datetime.utcnow,
        nullable=False,
    )

    def payload(self) -> dict:
        if not self.data:
            return {}
        try:
            loaded = json.loads(self.data)
        except ValueError:
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ConfigRecord name={self.name}>"


class ContentType(Base):
    """Registry row for a content type (``page``, ``article`` ...)."""

    __tablename__ = "content_types"

    type = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")

    def as_dict(self) -> dict:
        return {"type": self.type, "name": self.name, "description": self.description or ""}


users_roles = Table(
    "users_roles",
    Base.metadata,
    Column("uid", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("rid", String(64), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(64), primary_key=True)
    label = Column(String(255), nullable=False)
    weight = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Role id={self.id} label={self.label}>"


class User(Base):
    """User account. Row id 0 is the anonymous visitor sentinel."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(60), nullable=False, unique=True)
    email = Column(String(255), nullable=True, index=True)
    password_hash = Column(String(255), nullable=True)
    status = Column(Boolean, nullable=False, default=False)
    created = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    access = Column(DateTime, nullable=True)

    roles = relationship(Role, secondary=users_roles, lazy="selectin")

    __table_args__ = (
        Index("ix_users_created", "created"),
        Index("ix_users_access", "access"),
    )

    def role_ids(self) -> list:
        return [role.id for role in self.roles]

    def is_active(self) -> bool:
        return bool(self.status)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "status": bool(self.status),
            "roles": self.role_ids(),
            "created": self.created.isoformat() if self.created else None,
            "access": self.access.isoformat() if self.access else None,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return "<User id={0} name={1} status={2}>".format(self.id, self.name, self.status)


__all__ = ["Base", "ConfigRecord", "ContentType", "Role", "User", "users_roles"]
