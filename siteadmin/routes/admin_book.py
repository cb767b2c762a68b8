"""Book outline settings admin blueprint.

Routes:
    /admin/structure/book/settings       -> HTML form (GET) and submit (POST)
    /admin/structure/book/settings/api   -> JSON form description (GET) and submit (POST)

All routes enforce admin access via ensure_admin.
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, flash, jsonify, redirect, request, url_for
from flask_babel import gettext as _

from siteadmin.routes.guards import ensure_admin, json_error, render_admin_page
from siteadmin.services import book_settings_service
from siteadmin.services.book_settings_service import BookSettings, SettingsValidationError
from siteadmin.startup.extensions import csrf
from siteadmin.utils.logging import get_logger

bp = Blueprint("book_admin", __name__, url_prefix="/admin/structure/book")
LOG = get_logger("siteadmin.book_admin")


@bp.route("/settings", methods=["GET"])
def settings_page():
    auth = ensure_admin(prefer_redirect=True)
    if auth is not True:
        return auth
    form = book_settings_service.build_form()
    return render_admin_page("book_settings.html", form=form, title=_("Book settings"))


@bp.route("/settings", methods=["POST"])
def settings_submit():
    auth = ensure_admin(prefer_redirect=True)
    if auth is not True:
        return auth
    submission = book_settings_service.parse_submission(request.form)
    try:
        book_settings_service.submit(submission)
    except SettingsValidationError as exc:
        LOG.info("Book settings rejected field=%s code=%s", exc.field, exc.code)
        pending = BookSettings(allowed_types=submission.checked_types, child_type=submission.child_type)
        form = book_settings_service.build_form(pending, errors={exc.field: exc.code})
        return render_admin_page("book_settings.html", form=form, title=_("Book settings")), 400
    flash(_("The configuration options have been saved."), "status")
    return redirect(url_for("book_admin.settings_page"))


@bp.route("/settings/api", methods=["GET"])
def api_settings():
    auth = ensure_admin()
    if auth is not True:
        return auth
    settings = book_settings_service.load_settings()
    return jsonify({
        "settings": settings.as_dict(),
        "form": book_settings_service.build_form(settings),
    })


@bp.route("/settings/api", methods=["POST"])
@csrf.exempt
def api_settings_save():
    auth = ensure_admin()
    if auth is not True:
        return auth
    payload: Any = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return json_error("invalid_payload", 400, message=_("Request body must be a JSON object."))
    submission = book_settings_service.parse_submission(payload)
    try:
        saved = book_settings_service.submit(submission)
    except SettingsValidationError as exc:
        return json_error(
            exc.code,
            400,
            message=book_settings_service.error_message(exc.code),
            field=exc.field,
        )
    return jsonify({"status": "saved", "settings": saved.as_dict()})


def register_book_blueprint(app) -> None:
    if not getattr(app, "_book_admin_bp", None):
        app.register_blueprint(bp)
        setattr(app, "_book_admin_bp", bp)


__all__ = ["register_book_blueprint", "bp"]
