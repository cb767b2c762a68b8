"""Tests for format_interval elapsed-time formatting."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from siteadmin.utils.intervals import elapsed_since, format_interval


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0 sec"),
        (1, "1 sec"),
        (59, "59 sec"),
        (60, "1 min"),
        (3600, "1 hour"),
        (3661, "1 hour 1 min"),
        (7230, "2 hours"),
        (86400 + 3600 + 5, "1 day 1 hour"),
        (2 * 604800 + 3 * 86400, "2 weeks 3 days"),
        (31536000 + 60, "1 year"),
        (2 * 31536000 + 2592000, "2 years 1 month"),
    ],
)
def test_format_interval_uses_two_adjacent_units(seconds, expected):
    assert format_interval(seconds) == expected


def test_format_interval_respects_granularity():
    assert format_interval(3661, granularity=1) == "1 hour"
    assert format_interval(86400 + 3600 + 60, granularity=3) == "1 day 1 hour 1 min"


def test_format_interval_accepts_timedelta_and_clamps_negative():
    assert format_interval(timedelta(hours=3)) == "3 hours"
    assert format_interval(-30) == "0 sec"


def test_elapsed_since_subtracts_from_request_time():
    now = datetime(2024, 5, 1, 12, 0, 0)
    assert elapsed_since(now - timedelta(minutes=5), now) == "5 min"
