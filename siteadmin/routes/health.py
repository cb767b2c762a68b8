"""Lightweight health probe endpoint.

Exposes /healthz for container / LB health checks: 200 when the site
database answers, 500 (``degraded``) otherwise.
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from siteadmin import config as app_config
from siteadmin.db import get_engine
from siteadmin.utils.logging import get_logger

LOG = get_logger("health")

bp = Blueprint("health", __name__)


def _probe_database() -> bool:
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        LOG.warning("Health DB probe failed: %s", exc)
        return False
    return True


@bp.route("/healthz", methods=["GET"])
def healthz():
    db_ok = _probe_database()
    payload = {"status": "ok" if db_ok else "degraded", "db": db_ok, "version": app_config.APP_VERSION}
    return jsonify(payload), 200 if db_ok else 500


def register_health(app: Any) -> None:
    if getattr(app, "_health_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_health_bp", bp)
    LOG.debug("health blueprint registered")


__all__ = ["register_health"]
