"""People (user accounts) admin blueprint.

Routes:
    /admin/people/            -> HTML table of accounts
    /admin/people/api/list    -> the same page as JSON

Query parameters ``page``, ``order`` and ``sort`` select the page and the
sorted column.
"""
from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_babel import gettext as _

from siteadmin.db.query import QueryFactory
from siteadmin.listing.request import ListRequest
from siteadmin.listing.users import UserListBuilder, default_list_builder
from siteadmin.routes.guards import ensure_admin, render_admin_page
from siteadmin.utils.logging import get_logger

bp = Blueprint("people_admin", __name__, url_prefix="/admin/people")
LOG = get_logger("siteadmin.people_admin")


def build_people_listing() -> UserListBuilder:
    return UserListBuilder(default_list_builder(), QueryFactory.default())


@bp.route("/", methods=["GET"])
def people_page():
    auth = ensure_admin(prefer_redirect=True)
    if auth is not True:
        return auth
    page = build_people_listing().render(ListRequest.from_flask(request))
    return render_admin_page("people.html", page=page, title=_("People"))


@bp.route("/api/list", methods=["GET"])
def api_people_list():
    auth = ensure_admin()
    if auth is not True:
        return auth
    page = build_people_listing().render(ListRequest.from_flask(request))
    return jsonify(page)


def register_people_blueprint(app) -> None:
    if not getattr(app, "_people_admin_bp", None):
        app.register_blueprint(bp)
        setattr(app, "_people_admin_bp", bp)


__all__ = ["register_people_blueprint", "build_people_listing", "bp"]
