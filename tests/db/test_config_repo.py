"""Tests for config_repo named configuration objects."""
from __future__ import annotations

import pytest

from siteadmin.db.engine import init_engine_once, reset_for_tests
from siteadmin.db.repositories import config_repo


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("SITEADMIN_DB_PATH", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def test_unsaved_record_returns_defaults():
    config = config_repo.get_config("book.settings")

    assert config.is_new is True
    assert config.get("allowed_types") == ["book"]
    assert config.get("child_type") == "book"


def test_unknown_record_is_empty():
    config = config_repo.get_config("nothing.here")

    assert config.get() == {}
    assert config.get("missing", "fallback") == "fallback"


def test_set_is_chainable_and_save_persists():
    config = config_repo.get_config("book.settings")
    returned = config.set("allowed_types", ["page"]).set("child_type", "page").save()

    assert returned is config
    assert config.is_new is False

    reloaded = config_repo.get_config("book.settings")
    assert reloaded.is_new is False
    assert reloaded.get("allowed_types") == ["page"]
    assert reloaded.get("child_type") == "page"


def test_save_keeps_untouched_keys_and_returned_values_are_copies():
    config_repo.get_config("book.settings").set("block_mode", "all pages").save()

    config = config_repo.get_config("book.settings")
    allowed = config.get("allowed_types")
    allowed.append("mutated")
    config.set("child_type", "book").save()

    reloaded = config_repo.get_config("book.settings")
    assert reloaded.get("block_mode") == "all pages"
    assert reloaded.get("allowed_types") == ["book"]


def test_delete_config_reverts_to_defaults():
    config_repo.get_config("book.settings").set("child_type", "page").save()

    assert config_repo.delete_config("book.settings") is True
    assert config_repo.delete_config("book.settings") is False
    assert config_repo.get_config("book.settings").get("child_type") == "book"
