"""Explicit per-request state for list pages.

List builders never read the Flask request or the wall clock themselves; the
route builds a :class:`ListRequest` once and passes it down.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple
from urllib.parse import urlencode

from siteadmin.utils.intervals import utcnow


@dataclass(frozen=True)
class ListRequest:
    path: str = "/"
    query: Tuple[Tuple[str, str], ...] = ()
    request_time: datetime = field(default_factory=utcnow)

    @classmethod
    def from_flask(cls, req: Any, request_time: Optional[datetime] = None) -> "ListRequest":
        pairs = tuple((key, value) for key, value in req.args.items(multi=True))
        return cls(path=req.path or "/", query=pairs, request_time=request_time or utcnow())

    def param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = default
        for key, candidate in self.query:
            if key == name:
                value = candidate
        return value

    @property
    def page(self) -> int:
        raw = self.param("page")
        try:
            return max(int(raw), 0) if raw is not None else 0
        except (TypeError, ValueError):
            return 0

    @property
    def order(self) -> Optional[str]:
        return self.param("order") or None

    @property
    def sort(self) -> Optional[str]:
        return self.param("sort") or None

    def current_path(self) -> str:
        """Path plus query string, the way a redirect target is written."""
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"

    def destination(self) -> str:
        return self.param("destination") or self.current_path()

    def url(self, drop: Tuple[str, ...] = (), **overrides: Any) -> str:
        """Current path with ``overrides`` replacing (and ``drop`` removing) params."""
        skipped = set(drop) | set(overrides)
        pairs = [(key, value) for key, value in self.query if key not in skipped]
        pairs.extend((key, str(value)) for key, value in overrides.items() if value is not None)
        if not pairs:
            return self.path
        return f"{self.path}?{urlencode(pairs)}"


__all__ = ["ListRequest"]
