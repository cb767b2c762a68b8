"""Click-sortable table headers.

The active column is picked from the ``order`` request parameter (column key
or label), falling back to the column that declares a default sort and then
to the first sortable column.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from siteadmin.listing.columns import Header
from siteadmin.listing.request import ListRequest

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortState:
    key: Optional[str]
    field: Optional[str]
    direction: str = ASC


def get_order(header: Header, request: ListRequest) -> Optional[str]:
    requested = request.order
    if requested:
        for key, column in header.items():
            if column.sortable and requested in (key, column.label):
                return key
    for key, column in header.items():
        if column.sortable and column.default_sort:
            return key
    for key, column in header.items():
        if column.sortable:
            return key
    return None


def get_sort(header: Header, key: Optional[str], request: ListRequest) -> str:
    requested = request.sort
    if requested:
        return DESC if requested.lower() == DESC else ASC
    if key is not None and header[key].default_sort:
        return DESC if header[key].default_sort.lower() == DESC else ASC
    return ASC


def resolve(header: Header, request: ListRequest) -> SortState:
    key = get_order(header, request)
    field = header[key].field if key is not None else None
    return SortState(key=key, field=field, direction=get_sort(header, key, request))


def header_cells(header: Header, state: SortState, request: ListRequest) -> List[Dict[str, Any]]:
    """Render-ready header cells with sort links.

    Clicking the active column flips its direction; any other column starts
    ascending. Sort links always return to the first page.
    """
    cells: List[Dict[str, Any]] = []
    for key, column in header.items():
        cell: Dict[str, Any] = {
            "key": key,
            "label": column.label,
            "classes": list(column.classes),
            "sortable": column.sortable,
            "active": False,
            "direction": None,
            "url": None,
        }
        if column.sortable:
            if key == state.key:
                cell["active"] = True
                cell["direction"] = state.direction
                next_sort = DESC if state.direction == ASC else ASC
            else:
                next_sort = ASC
            cell["url"] = request.url(drop=("page",), order=key, sort=next_sort)
        cells.append(cell)
    return cells


__all__ = ["ASC", "DESC", "SortState", "get_order", "get_sort", "resolve", "header_cells"]
