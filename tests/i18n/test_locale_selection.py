"""Locale selection behavior tests."""
from __future__ import annotations

import pytest
from flask import Flask, jsonify

from siteadmin.i18n import SESSION_LOCALE_KEY, normalize_language_choice, select_locale


@pytest.fixture(autouse=True)
def two_languages(monkeypatch):
    monkeypatch.setenv("SITEADMIN_LANGUAGES", "en, lv")


@pytest.fixture
def flask_app():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "locale-test-secret"

    @app.route("/locale")
    def show_locale():
        return jsonify({"locale": select_locale()})

    return app


@pytest.mark.parametrize(
    "raw,expected",
    [("lv", "lv"), ("LV_lv", "lv"), ("en-GB", "en"), ("ru", None), ("", None), (None, None)],
)
def test_normalize_language_choice(raw, expected):
    assert normalize_language_choice(raw) == expected


def test_session_locale_respected(flask_app):
    client = flask_app.test_client()
    with client.session_transaction() as sess:
        sess[SESSION_LOCALE_KEY] = "lv"

    resp = client.get("/locale", headers={"Accept-Language": "en"})

    assert resp.get_json()["locale"] == "lv"


def test_accept_language_used_without_session_choice(flask_app):
    client = flask_app.test_client()

    resp = client.get("/locale", headers={"Accept-Language": "lv,en;q=0.5"})

    assert resp.get_json()["locale"] == "lv"


def test_no_locale_outside_request():
    assert select_locale() is None
