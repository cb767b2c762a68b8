"""Tests for the entity query engine."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from siteadmin.db.engine import init_engine_once, reset_for_tests
from siteadmin.db.query import (
    QueryFactory,
    UnknownEntityTypeError,
    UnknownFieldError,
    UnsupportedOperatorError,
)
from siteadmin.db.repositories import users_repo
from siteadmin.db.seed import seed_defaults
from siteadmin.listing.columns import ColumnSpec
from siteadmin.listing.request import ListRequest

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("SITEADMIN_DB_PATH", ":memory:")
    init_engine_once()
    seed_defaults()
    yield
    reset_for_tests(drop=True)


def _make_users(names):
    created = []
    for offset, name in enumerate(names):
        created.append(
            users_repo.create_user(name, created=BASE_TIME + timedelta(minutes=offset), status=offset % 2 == 0)
        )
    return created


def test_condition_excludes_anonymous_sentinel():
    _make_users(["alice", "bob"])

    ids = QueryFactory.default().get("user").condition("uid", 0, "<>").execute()

    assert 0 not in ids
    assert len(ids) == 2


def test_sort_and_conditions_combine():
    users = _make_users(["carol", "alice", "bob"])

    query = QueryFactory.default().get("user")
    ids = query.condition("uid", 0, "<>").condition("status", True).sort("name", "ASC").execute()

    by_id = {u.id: u.name for u in users}
    assert [by_id[i] for i in ids] == ["bob", "carol"]


def test_in_operator_and_count():
    users = _make_users(["a1", "a2", "a3"])
    wanted = [users[0].id, users[2].id]

    query = QueryFactory.default().get("user").condition("uid", wanted, "IN")

    assert query.count() == 2
    assert sorted(query.execute()) == sorted(wanted)


def test_pager_limits_and_clamps_page():
    _make_users([f"user{i:02d}" for i in range(12)])

    query = QueryFactory.default().get("user").condition("uid", 0, "<>").sort("name").pager(5, page=9)
    ids = query.execute()

    assert query.pager_state is not None
    assert query.pager_state.page == 2
    assert query.pager_state.total_pages == 3
    assert len(ids) == 2


def test_table_sort_uses_header_default_and_request_override():
    users = _make_users(["zed", "amy", "kim"])
    header = {
        "username": ColumnSpec("Username", field="name"),
        "member_for": ColumnSpec("Member for", field="created", default_sort="desc"),
    }
    by_id = {u.id: u.name for u in users}

    default_query = QueryFactory.default().get("user").condition("uid", 0, "<>")
    default_ids = default_query.table_sort(header, ListRequest(path="/p")).execute()
    assert [by_id[i] for i in default_ids] == ["kim", "amy", "zed"]
    assert default_query.sort_state.key == "member_for"

    request = ListRequest(path="/p", query=(("order", "Username"), ("sort", "asc")))
    named_ids = QueryFactory.default().get("user").condition("uid", 0, "<>").table_sort(header, request).execute()
    assert [by_id[i] for i in named_ids] == ["amy", "kim", "zed"]


def test_errors_for_unknown_type_field_and_operator():
    factory = QueryFactory.default()
    with pytest.raises(UnknownEntityTypeError):
        factory.get("node")
    with pytest.raises(UnknownFieldError):
        factory.get("user").condition("nickname", "x")
    with pytest.raises(UnsupportedOperatorError):
        factory.get("user").condition("uid", 1, "BETWEEN")


@pytest.mark.parametrize(
    "field,value,operator,expected",
    [
        ("name", "bob", "=", ["bob"]),
        ("name", "bob", "!=", ["alice", "carol"]),
        ("name", ["bob"], "NOT IN", ["alice", "carol"]),
        ("name", ["alice"], "not in", ["bob", "carol"]),
        ("name", "ca", "STARTS_WITH", ["carol"]),
        ("name", "li", "CONTAINS", ["alice"]),
        ("created", BASE_TIME + timedelta(minutes=1), ">", ["carol"]),
        ("created", BASE_TIME + timedelta(minutes=1), ">=", ["bob", "carol"]),
        ("created", BASE_TIME + timedelta(minutes=1), "<", ["alice"]),
        ("created", BASE_TIME + timedelta(minutes=1), "<=", ["alice", "bob"]),
    ],
)
def test_condition_operators(field, value, operator, expected):
    users = _make_users(["alice", "bob", "carol"])
    by_id = {u.id: u.name for u in users}

    query = QueryFactory.default().get("user").condition("uid", 0, "<>").condition(field, value, operator)
    ids = query.sort("name").execute()

    assert [by_id[i] for i in ids] == expected
    assert query.count() == len(expected)
