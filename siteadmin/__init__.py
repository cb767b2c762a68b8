"""Application package root.

This layer houses the site administration screens (book outline settings and
the people listing) on top of Flask, SQLAlchemy and Flask-Babel. Framework
services are reached through adapters under ``siteadmin.db`` and
``siteadmin.listing`` so the screens themselves stay small.
"""
from __future__ import annotations

from typing import Any


def create_app(*args: Any, **kwargs: Any):
    """Factory returning a fully wired Flask application."""

    from .startup.wiring import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "create_app",
]
