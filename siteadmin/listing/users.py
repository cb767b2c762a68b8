"""People listing: user accounts as a sortable, paged admin table."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence

from flask_babel import gettext

from siteadmin.db.query import QueryFactory
from siteadmin.db.repositories import roles_repo, users_repo
from siteadmin.listing import tablesort
from siteadmin.listing.columns import ColumnSpec, Header
from siteadmin.listing.entity_list import EntityListBuilder, OperationSpec
from siteadmin.listing.pager import Pager
from siteadmin.listing.request import ListRequest
from siteadmin.utils import constants
from siteadmin.utils.intervals import elapsed_since
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.people")

USERNAME_MAX_LENGTH = 20
USERNAME_TRUNCATED_LENGTH = 15


@dataclass(frozen=True)
class UserRecord:
    """Read-only projection of an account for one listing request."""

    id: int
    display_name: str
    is_active: bool
    roles: FrozenSet[str]
    created_at: datetime
    last_accessed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: Any) -> "UserRecord":
        roles = set(user.role_ids())
        if user.id != constants.ANONYMOUS_UID:
            roles.add(constants.AUTHENTICATED_RID)
        return cls(
            id=user.id,
            display_name=user.name or "",
            is_active=bool(user.status),
            roles=frozenset(roles),
            created_at=user.created,
            last_accessed_at=user.access,
        )


def render_username(record: UserRecord) -> Dict[str, Any]:
    """Display name linked to the profile; long names are shortened."""
    name = record.display_name or gettext("Anonymous")
    shortened = name
    if len(name) > USERNAME_MAX_LENGTH:
        shortened = name[:USERNAME_TRUNCATED_LENGTH] + "..."
    return {
        "name": shortened,
        "title": name if shortened != name else None,
        "url": f"/user/{record.id}",
    }


def default_list_builder(access: Optional[Callable[[Any, str], bool]] = None) -> EntityListBuilder:
    return EntityListBuilder("user", gettext("user"), "/user", delete_path="cancel", access=access)


class UserListBuilder:
    def __init__(
        self,
        base: EntityListBuilder,
        query_factory: QueryFactory,
        *,
        storage: Any = users_repo,
        role_names: Callable[[bool], Dict[str, str]] = roles_repo.role_names,
        username_renderer: Callable[[UserRecord], Dict[str, Any]] = render_username,
        page_size: int = constants.PEOPLE_PAGE_SIZE,
        hidden_roles: Sequence[str] = (constants.AUTHENTICATED_RID,),
    ) -> None:
        self.base = base
        self.query_factory = query_factory
        self.storage = storage
        self._role_names = role_names
        self._render_username = username_renderer
        self.page_size = page_size
        self.hidden_roles = frozenset(hidden_roles)
        self._role_labels: Optional[Dict[str, str]] = None
        self.pager: Optional[Pager] = None
        self.sort_state: Optional[tablesort.SortState] = None

    def build_header(self) -> Header:
        low = (constants.RESPONSIVE_PRIORITY_LOW,)
        header: Header = {
            "username": ColumnSpec(gettext("Username"), field="name"),
            "status": ColumnSpec(gettext("Status"), field="status", classes=low),
            "roles": ColumnSpec(gettext("Roles"), classes=low),
            "member_for": ColumnSpec(gettext("Member for"), field="created", default_sort=tablesort.DESC, classes=low),
            "access": ColumnSpec(gettext("Last access"), field="access", classes=low),
        }
        for key, column in self.base.build_header().items():
            header.setdefault(key, column)
        return header

    def load(self, header: Header, request: ListRequest) -> List[UserRecord]:
        query = self.query_factory.get("user")
        query.condition("uid", constants.ANONYMOUS_UID, "<>")
        query.pager(self.page_size, page=request.page)
        query.table_sort(header, request)
        ids = query.execute()
        self.pager = query.pager_state
        self.sort_state = query.sort_state
        return [UserRecord.from_entity(user) for user in self.storage.load_multiple(ids)]

    def role_labels(self, roles: Iterable[str]) -> List[str]:
        if self._role_labels is None:
            self._role_labels = self._role_names(True)
        labels = [
            self._role_labels[rid]
            for rid in roles
            if rid in self._role_labels and rid not in self.hidden_roles
        ]
        return sorted(labels)

    def build_row(self, record: UserRecord, request: ListRequest) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "username": {"data": self._render_username(record)},
            "status": gettext("active") if record.is_active else gettext("blocked"),
            "roles": {"items": self.role_labels(record.roles)},
            "member_for": elapsed_since(record.created_at, request.request_time),
        }
        if record.last_accessed_at is None:
            row["access"] = gettext("never")
        else:
            row["access"] = gettext(
                "%(time)s ago", time=elapsed_since(record.last_accessed_at, request.request_time)
            )
        for key, value in self.base.build_row(record, self.get_operations(record, request)).items():
            row.setdefault(key, value)
        return row

    def get_operations(self, record: UserRecord, request: ListRequest) -> Dict[str, OperationSpec]:
        operations = self.base.get_operations(record, request)
        if "edit" in operations:
            operations["edit"] = operations["edit"].with_query(destination=request.destination())
        return operations

    def render(self, request: ListRequest) -> Dict[str, Any]:
        header = self.build_header()
        records = self.load(header, request)
        rows = [{"id": record.id, "cells": self.build_row(record, request)} for record in records]
        sort_state = self.sort_state or tablesort.resolve(header, request)
        table = self.base.build_table(
            tablesort.header_cells(header, sort_state, request),
            rows,
            title=gettext("People"),
        )
        table["empty"] = gettext("No people available.")
        pager = self.pager or Pager.create(0, self.page_size, len(records))
        LOG.debug("Rendered people page=%s rows=%s", pager.page, len(rows))
        return {"accounts": table, "pager": pager.as_dict(request)}


__all__ = [
    "UserRecord",
    "UserListBuilder",
    "render_username",
    "default_list_builder",
]
