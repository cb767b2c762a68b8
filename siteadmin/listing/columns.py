"""Table header column descriptions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ColumnSpec:
    label: str
    field: Optional[str] = None
    default_sort: Optional[str] = None
    classes: Tuple[str, ...] = ()

    @property
    def sortable(self) -> bool:
        return self.field is not None

    def as_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "field": self.field,
            "sortable": self.sortable,
            "default_sort": self.default_sort,
            "classes": list(self.classes),
        }


Header = Dict[str, ColumnSpec]

__all__ = ["ColumnSpec", "Header"]
