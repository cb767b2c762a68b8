"""Admin access guards and response helpers shared by admin blueprints."""
from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from flask import jsonify, redirect, render_template, request, url_for
from werkzeug.routing import BuildError

from siteadmin.config import site_name
from siteadmin.utils import identity


def _login_redirect():
    try:
        login_url = url_for("login")
    except BuildError:
        login_url = "/login"
    target = request.full_path or request.path or "/"
    if target.endswith("?"):
        target = target[:-1]
    payload = urlencode({"next": target})
    separator = "&" if "?" in login_url else "?"
    return redirect(f"{login_url}{separator}{payload}")


def ensure_admin(prefer_redirect: bool = False):
    """Return True for admins, otherwise a redirect (HTML) or a 403 payload (JSON)."""
    try:
        identity.ensure_admin()
    except identity.PermissionError as exc:
        if prefer_redirect:
            return _login_redirect()
        return jsonify({"error": "forbidden", "message": str(exc)}), 403
    return True


def json_error(
    code: str,
    status: int = 400,
    *,
    message: Optional[str] = None,
    **extra: Any,
):
    payload: Dict[str, Any] = {"error": code}
    if message:
        payload["message"] = message
    payload.update(extra)
    return jsonify(payload), status


def render_admin_page(template_name: str, **context):
    context.setdefault("site_name", site_name())
    return render_template(template_name, **context)


__all__ = ["ensure_admin", "json_error", "render_admin_page"]
