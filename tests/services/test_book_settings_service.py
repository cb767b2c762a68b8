"""Tests for the book outline settings service."""
from __future__ import annotations

import pytest
from werkzeug.datastructures import MultiDict

from siteadmin.db.engine import init_engine_once, reset_for_tests
from siteadmin.db.repositories import config_repo
from siteadmin.db.seed import seed_defaults
from siteadmin.services import book_settings_service
from siteadmin.services.book_settings_service import (
    BookSettings,
    BookSettingsSubmission,
    InvalidChildTypeError,
    SettingsValidationError,
)


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("SITEADMIN_DB_PATH", ":memory:")
    init_engine_once()
    seed_defaults()
    yield
    reset_for_tests(drop=True)


def _submission(checked, child, unchecked=()):
    allowed = {type_id: True for type_id in checked}
    allowed.update({type_id: False for type_id in unchecked})
    return BookSettingsSubmission(allowed_types=allowed, child_type=child)


def test_validate_accepts_child_type_among_checked_types():
    submission = _submission(["page", "article"], "page")

    assert book_settings_service.validate(submission) is submission


def test_validate_rejects_child_type_that_is_not_checked():
    submission = _submission(["page"], "article", unchecked=["article"])

    with pytest.raises(InvalidChildTypeError) as excinfo:
        book_settings_service.validate(submission)

    assert excinfo.value.field == book_settings_service.FIELD_CHILD_TYPE
    assert str(excinfo.value) == "invalid_child_type"


def test_validate_requires_both_fields():
    with pytest.raises(SettingsValidationError) as no_types:
        book_settings_service.validate(_submission([], "page", unchecked=["page"]))
    assert no_types.value.field == book_settings_service.FIELD_ALLOWED_TYPES
    assert no_types.value.code == "required"

    with pytest.raises(SettingsValidationError) as no_child:
        book_settings_service.validate(_submission(["page"], ""))
    assert no_child.value.field == book_settings_service.FIELD_CHILD_TYPE
    assert no_child.value.code == "required"


def test_validate_rejects_unknown_content_types():
    with pytest.raises(SettingsValidationError) as excinfo:
        book_settings_service.validate(_submission(["page", "forum"], "page"))

    assert excinfo.value.code == "illegal_choice"
    assert not isinstance(excinfo.value, InvalidChildTypeError)


def test_submit_drops_unchecked_types_and_persists_sorted():
    saved = book_settings_service.submit(_submission(["page", "book"], "page", unchecked=["article"]))

    assert saved == BookSettings(allowed_types=["book", "page"], child_type="page")
    config = config_repo.get_config("book.settings")
    assert config.get("allowed_types") == ["book", "page"]
    assert config.get("child_type") == "page"
    assert book_settings_service.load_settings() == saved


def test_submit_never_persists_invalid_child_type():
    book_settings_service.submit(_submission(["book"], "book"))

    with pytest.raises(InvalidChildTypeError):
        book_settings_service.submit(_submission(["page"], "article", unchecked=["article"]))

    settings = book_settings_service.load_settings()
    assert settings.child_type in settings.allowed_types
    assert settings == BookSettings(allowed_types=["book"], child_type="book")


def test_parse_submission_from_multidict_form():
    form = MultiDict([
        ("book_allowed_types", "page"),
        ("book_allowed_types", "article"),
        ("book_child_type", "article"),
    ])

    submission = book_settings_service.parse_submission(form)

    assert submission.allowed_types == {"article": True, "book": False, "page": True}
    assert submission.checked_types == ["article", "page"]
    assert submission.child_type == "article"


def test_parse_submission_from_json_mapping():
    payload = {"book_allowed_types": {"page": "page", "book": 0, "article": False}, "book_child_type": "page"}

    submission = book_settings_service.parse_submission(payload)

    assert submission.checked_types == ["page"]
    assert submission.child_type == "page"


def test_build_form_reflects_current_settings_and_registry():
    form = book_settings_service.build_form()

    assert form["form_id"] == "book_admin_settings"
    allowed = form["fields"]["book_allowed_types"]
    child = form["fields"]["book_child_type"]
    assert allowed["type"] == "checkboxes"
    assert child["type"] == "radios"
    assert allowed["required"] is True and child["required"] is True
    assert list(allowed["options"]) == ["article", "page", "book"]
    assert allowed["options"]["book"] == "Book page"
    assert allowed["default_value"] == ["book"]
    assert child["default_value"] == "book"
    assert "Administer book outlines" in allowed["description"]


def test_build_form_attaches_error_to_child_type_field():
    form = book_settings_service.build_form(
        BookSettings(allowed_types=["page"], child_type="article"),
        errors={"book_child_type": "invalid_child_type"},
    )

    child = form["fields"]["book_child_type"]
    assert "Add child page" in child["error"]
    assert "error" not in form["fields"]["book_allowed_types"]
