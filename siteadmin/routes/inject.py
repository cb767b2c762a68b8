"""Route registration.

Called from startup to register every blueprint exactly once.
"""
from __future__ import annotations

from typing import Any

from .admin_book import register_book_blueprint
from .admin_people import register_people_blueprint
from .health import register_health


def register_all(app: Any) -> None:
    register_book_blueprint(app)
    register_people_blueprint(app)
    register_health(app)


__all__ = ["register_all"]
