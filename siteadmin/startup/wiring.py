"""Application initialization / wiring.

Orchestrates: DB init, default seeding, extensions (Babel, CSRF), route
registration, translation directories.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask

from siteadmin import config as app_config
from siteadmin.db import init_engine_once
from siteadmin.db.engine import get_scoped_session
from siteadmin.db.seed import seed_defaults
from siteadmin.i18n import configure_translations, select_locale
from siteadmin.routes.inject import register_all as register_routes
from siteadmin.startup.extensions import babel, csrf
from siteadmin.utils.logging import get_logger

LOG = get_logger("siteadmin.startup")


def _remove_session(_exc: Optional[BaseException] = None) -> None:
    get_scoped_session().remove()


def init_app(app: Any) -> None:
    LOG.debug("init_app starting")
    init_engine_once()
    LOG.debug("DB engine initialized")
    if app_config.seed_defaults_enabled():
        seed_defaults()
    babel.init_app(app, locale_selector=select_locale)
    csrf.init_app(app)
    register_routes(app)
    configure_translations(app)
    app.teardown_appcontext(_remove_session)
    LOG.info("App startup wiring complete config=%s", app_config.summarize_runtime_config())


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask("siteadmin")
    app.config.update(
        SECRET_KEY=app_config.secret_key(),
        WTF_CSRF_ENABLED=app_config.csrf_enabled(),
        BABEL_DEFAULT_LOCALE="en",
    )
    if overrides:
        app.config.update(overrides)
    init_app(app)
    return app


__all__ = ["init_app", "create_app"]
