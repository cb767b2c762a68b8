"""Generic entity list capability.

Supplies what every admin entity table shares: the trailing
``operations`` column, default edit/delete operations and the table
structure handed to the template. Specific listings wrap an instance of
:class:`EntityListBuilder` and add their own columns in front.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from flask_babel import gettext

from siteadmin.listing.columns import ColumnSpec, Header
from siteadmin.listing.request import ListRequest
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.listing")

AccessCallback = Callable[[Any, str], bool]


@dataclass(frozen=True)
class OperationSpec:
    title: str
    href: str
    weight: int = 0
    query: Mapping[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        if not self.query:
            return self.href
        return f"{self.href}?{urlencode(dict(self.query))}"

    def with_query(self, **params: str) -> "OperationSpec":
        merged = dict(self.query)
        merged.update(params)
        return replace(self, query=merged)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "href": self.href,
            "query": dict(self.query),
            "url": self.url,
            "weight": self.weight,
        }


def _allow_all(_entity: Any, _operation: str) -> bool:
    return True


class EntityListBuilder:
    def __init__(
        self,
        entity_type: str,
        label: str,
        uri_prefix: str,
        *,
        delete_path: str = "delete",
        access: Optional[AccessCallback] = None,
    ) -> None:
        self.entity_type = entity_type
        self.label = label
        self.uri_prefix = uri_prefix.rstrip("/")
        self.delete_path = delete_path
        self._access = access or _allow_all

    def entity_uri(self, entity: Any) -> str:
        return f"{self.uri_prefix}/{entity.id}"

    def build_header(self) -> Header:
        return {"operations": ColumnSpec(gettext("Operations"))}

    def get_operations(self, entity: Any, request: Optional[ListRequest] = None) -> Dict[str, OperationSpec]:
        uri = self.entity_uri(entity)
        operations: Dict[str, OperationSpec] = {}
        if self._access(entity, "update"):
            operations["edit"] = OperationSpec(title=gettext("Edit"), href=f"{uri}/edit", weight=10)
        if self._access(entity, "delete"):
            operations["delete"] = OperationSpec(
                title=gettext("Delete"), href=f"{uri}/{self.delete_path}", weight=100
            )
        return operations

    def build_operations(self, operations: Dict[str, OperationSpec]) -> List[Dict[str, Any]]:
        """Operation links ordered by weight."""
        ordered = sorted(operations.items(), key=lambda item: item[1].weight)
        return [dict(op.as_dict(), name=name) for name, op in ordered]

    def build_row(self, entity: Any, operations: Dict[str, OperationSpec]) -> Dict[str, Any]:
        return {"operations": {"links": self.build_operations(operations)}}

    def empty_message(self) -> str:
        return gettext("There is no %(label)s yet.", label=self.label)

    def build_table(
        self,
        header_cells: List[Dict[str, Any]],
        rows: List[Dict[str, Any]],
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "type": "table",
            "title": title,
            "header": header_cells,
            "rows": rows,
            "empty": self.empty_message(),
        }


__all__ = ["OperationSpec", "EntityListBuilder", "AccessCallback"]
