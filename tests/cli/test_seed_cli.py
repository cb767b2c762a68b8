"""Tests for the seeding command line."""
from __future__ import annotations

import pytest

from entrypoint import seed as seed_cli
from siteadmin.db.engine import reset_for_tests
from siteadmin.db.repositories import content_types_repo, roles_repo, users_repo


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("SITEADMIN_DB_PATH", ":memory:")
    yield
    reset_for_tests(drop=True)


def test_defaults_are_seeded_once(capsys):
    assert seed_cli.main([]) == 0
    assert seed_cli.main([]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[SEED] defaults ok roles=3 content_types=3 anonymous=1"
    assert out[1] == "[SEED] defaults ok roles=0 content_types=0 anonymous=0"
    assert set(roles_repo.role_names()) == {"anonymous", "authenticated", "administrator"}
    assert content_types_repo.list_names() == {"article": "Article", "page": "Basic page", "book": "Book page"}
    assert users_repo.get_user(0) is not None


def test_demo_users_skip_existing_names(capsys):
    assert seed_cli.main(["--demo-users", "4", "--demo-prefix", "qa"]) == 0
    assert seed_cli.main(["--demo-users", "6", "--demo-prefix", "qa"]) == 0

    out = capsys.readouterr().out
    assert "[SEED] demo_users ok created=4 requested=4" in out
    assert "[SEED] demo_users ok created=2 requested=6" in out
    assert users_repo.count_accounts() == 6
    assert users_repo.get_user(1).name == "qa001"


def test_failing_defaults_exit_code(monkeypatch, capsys):
    def _boom():
        raise RuntimeError("db locked")

    monkeypatch.setattr(seed_cli, "seed_defaults", _boom)

    assert seed_cli.main(["--demo-users", "2"]) == 3
    assert "[SEED] defaults ERROR db locked" in capsys.readouterr().err
