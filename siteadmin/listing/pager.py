"""Offset pagination state for list pages."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from siteadmin.listing.request import ListRequest


@dataclass(frozen=True)
class Pager:
    page: int
    page_size: int
    total_items: int

    @classmethod
    def create(cls, requested_page: int, page_size: int, total_items: int) -> "Pager":
        """Clamp ``requested_page`` into the range the item count allows."""
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        total_pages = math.ceil(total_items / page_size)
        page = max(0, min(requested_page, total_pages - 1))
        return cls(page=page, page_size=page_size, total_items=total_items)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    def links(self, request: ListRequest) -> Dict[str, Optional[str]]:
        def _page_url(page: int) -> str:
            # Page 0 is the bare listing URL.
            if page == 0:
                return request.url(drop=("page",))
            return request.url(page=page)

        return {
            "first": _page_url(0) if self.has_previous else None,
            "previous": _page_url(self.page - 1) if self.has_previous else None,
            "next": _page_url(self.page + 1) if self.has_next else None,
            "last": _page_url(self.total_pages - 1) if self.has_next else None,
        }

    def as_dict(self, request: ListRequest) -> Dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "links": self.links(request),
        }


__all__ = ["Pager"]
