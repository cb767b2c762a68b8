"""Entity query engine over SQLAlchemy.

Queries address entity fields by public name (``uid``, ``name`` ...) and
return entity ids only; callers load the entities through their repository.

    query = QueryFactory.default().get("user")
    ids = query.condition("uid", 0, "<>").pager(50, page=1).execute()
"""
from __future__ import annotations

import operator as _op
from typing import Any, Callable, ContextManager, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from siteadmin.db import app_session
from siteadmin.db.models import User
from siteadmin.listing import tablesort
from siteadmin.listing.columns import Header
from siteadmin.listing.pager import Pager
from siteadmin.listing.request import ListRequest
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.query")


class UnknownEntityTypeError(KeyError):
    """Raised when no query definition is registered for an entity type."""


class UnsupportedOperatorError(ValueError):
    """Raised for condition operators the engine does not understand."""


class UnknownFieldError(KeyError):
    """Raised when a condition or sort names a field the entity lacks."""


_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": _op.eq,
    "<>": _op.ne,
    "!=": _op.ne,
    ">": _op.gt,
    ">=": _op.ge,
    "<": _op.lt,
    "<=": _op.le,
    "IN": lambda column, value: column.in_(list(value)),
    "NOT IN": lambda column, value: column.not_in(list(value)),
    "STARTS_WITH": lambda column, value: column.startswith(value),
    "CONTAINS": lambda column, value: column.contains(value),
}


class EntityQuery:
    def __init__(
        self,
        entity_type: str,
        fields: Mapping[str, Any],
        id_field: str,
        session_factory: Callable[[], ContextManager[Session]] = app_session,
    ) -> None:
        self.entity_type = entity_type
        self._fields = dict(fields)
        self._id_column = self._column(id_field)
        self._session_factory = session_factory
        self._conditions: List[Any] = []
        self._sorts: List[Tuple[Any, str]] = []
        self._limit: Optional[int] = None
        self._page = 0
        self.sort_state: Optional[tablesort.SortState] = None
        self.pager_state: Optional[Pager] = None

    def _column(self, field: str) -> Any:
        try:
            return self._fields[field]
        except KeyError as exc:
            raise UnknownFieldError(f"{self.entity_type}.{field}") from exc

    def condition(self, field: str, value: Any, operator: str = "=") -> "EntityQuery":
        op_name = (operator or "=").upper()
        try:
            build = _OPERATORS[op_name]
        except KeyError as exc:
            raise UnsupportedOperatorError(operator) from exc
        self._conditions.append(build(self._column(field), value))
        return self

    def sort(self, field: str, direction: str = tablesort.ASC) -> "EntityQuery":
        normalized = tablesort.DESC if (direction or "").lower() == tablesort.DESC else tablesort.ASC
        self._sorts.append((self._column(field), normalized))
        return self

    def pager(self, limit: int = 10, page: int = 0) -> "EntityQuery":
        self._limit = limit
        self._page = max(page, 0)
        return self

    def table_sort(self, header: Header, request: ListRequest) -> "EntityQuery":
        """Sort by the header column the request (or the header default) selects."""
        state = tablesort.resolve(header, request)
        self.sort_state = state
        if state.field is not None:
            self.sort(state.field, state.direction)
        return self

    def _where(self, stmt):
        for clause in self._conditions:
            stmt = stmt.where(clause)
        return stmt

    def count(self) -> int:
        stmt = self._where(select(func.count(self._id_column)))
        with self._session_factory() as session:
            return int(session.execute(stmt).scalar() or 0)

    def execute(self) -> List[Any]:
        stmt = self._where(select(self._id_column))
        for column, direction in self._sorts:
            stmt = stmt.order_by(column.desc() if direction == tablesort.DESC else column.asc())
        # Keep pages stable when the sort column has duplicates.
        last_direction = self._sorts[-1][1] if self._sorts else tablesort.ASC
        stmt = stmt.order_by(self._id_column.desc() if last_direction == tablesort.DESC else self._id_column.asc())
        if self._limit is not None:
            self.pager_state = Pager.create(self._page, self._limit, self.count())
            stmt = stmt.limit(self._limit).offset(self.pager_state.offset)
        with self._session_factory() as session:
            ids = list(session.execute(stmt).scalars().all())
        LOG.debug("%s query returned %s ids", self.entity_type, len(ids))
        return ids


class QueryFactory:
    """Builds :class:`EntityQuery` objects for registered entity types."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] = app_session) -> None:
        self._definitions: Dict[str, Tuple[Mapping[str, Any], str]] = {}
        self._session_factory = session_factory

    def register(self, entity_type: str, fields: Mapping[str, Any], id_field: str) -> "QueryFactory":
        self._definitions[entity_type] = (dict(fields), id_field)
        return self

    def get(self, entity_type: str) -> EntityQuery:
        try:
            fields, id_field = self._definitions[entity_type]
        except KeyError as exc:
            raise UnknownEntityTypeError(entity_type) from exc
        return EntityQuery(entity_type, fields, id_field, session_factory=self._session_factory)

    @classmethod
    def default(cls) -> "QueryFactory":
        return cls().register(
            "user",
            {
                "uid": User.id,
                "name": User.name,
                "mail": User.email,
                "status": User.status,
                "created": User.created,
                "access": User.access,
            },
            id_field="uid",
        )


__all__ = [
    "EntityQuery",
    "QueryFactory",
    "UnknownEntityTypeError",
    "UnknownFieldError",
    "UnsupportedOperatorError",
]
