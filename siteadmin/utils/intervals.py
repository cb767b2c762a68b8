"""Human-readable elapsed time formatting."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Tuple, Union

from flask_babel import gettext, ngettext

# (seconds per unit, singular form, plural form); largest unit first.
_UNITS: List[Tuple[int, str, str]] = [
    (31536000, "1 year", "%(num)s years"),
    (2592000, "1 month", "%(num)s months"),
    (604800, "1 week", "%(num)s weeks"),
    (86400, "1 day", "%(num)s days"),
    (3600, "1 hour", "%(num)s hours"),
    (60, "1 min", "%(num)s min"),
    (1, "1 sec", "%(num)s sec"),
]


def format_interval(interval: Union[int, float, timedelta], granularity: int = 2) -> str:
    """Format a span of seconds as e.g. ``"1 hour"`` or ``"2 years 3 months"``.

    At most ``granularity`` units are emitted, largest first. Output stops at
    the first empty unit once something has been written, so a span never
    reads like "1 year 1 sec". Negative spans are treated as zero.
    """
    if isinstance(interval, timedelta):
        interval = interval.total_seconds()
    remaining = max(int(interval), 0)
    parts: List[str] = []
    for seconds, singular, plural in _UNITS:
        if remaining >= seconds:
            parts.append(ngettext(singular, plural, remaining // seconds))
            remaining %= seconds
            granularity -= 1
        elif parts:
            break
        if granularity <= 0:
            break
    if not parts:
        return gettext("0 sec")
    return " ".join(parts)


def elapsed_since(moment: datetime, now: datetime) -> str:
    return format_interval(now - moment)


def utcnow() -> datetime:
    return datetime.utcnow()


__all__ = ["format_interval", "elapsed_since", "utcnow"]
