"""Application configuration accessors.

Centralizes environment variable parsing & defaults so the rest of the
package never reads ``os.environ`` directly.
"""
from __future__ import annotations

import os
from functools import lru_cache

APP_NAME = "siteadmin"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Book outline settings and people administration"

DEFAULT_DB_PATH = "siteadmin.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SECRET_KEY = "siteadmin-dev-secret"
MEMORY_DB = ":memory:"
_TRUE = {"1", "true", "yes", "on"}


def _raw_env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def env_bool(name: str, default: bool = False) -> bool:
    raw = _raw_env(name, str(default).lower())
    if raw is None:
        return default
    return raw.lower() in _TRUE


def get_db_path() -> str:
    raw = _raw_env("SITEADMIN_DB_PATH", DEFAULT_DB_PATH)
    if raw == MEMORY_DB:
        return raw
    if raw and not os.path.isabs(raw):
        data_dir = os.getenv("SITEADMIN_DATA_DIR")
        if data_dir:
            return os.path.join(data_dir, raw)
    return raw  # type: ignore[return-value]


def log_level_name() -> str:
    return _raw_env("SITEADMIN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()  # type: ignore[union-attr]


def secret_key() -> str:
    value = (os.getenv("SITEADMIN_SECRET_KEY") or "").strip()
    return value or DEFAULT_SECRET_KEY


def site_name() -> str | None:
    """Optional override for the page title prefix."""
    value = os.getenv("SITEADMIN_SITE_NAME")
    if value is None:
        return None
    value = value.strip()
    return value or None


def seed_defaults_enabled() -> bool:
    """Whether startup seeds default roles, content types and the anonymous row.

    Environment Variable: SITEADMIN_SEED_DEFAULTS (default on)
    """
    return env_bool("SITEADMIN_SEED_DEFAULTS", default=True)


def csrf_enabled() -> bool:
    return env_bool("SITEADMIN_CSRF_ENABLED", default=True)


def supported_languages() -> list:
    """UI languages offered to the locale selector (SITEADMIN_LANGUAGES, comma separated)."""
    raw = _raw_env("SITEADMIN_LANGUAGES", "en") or "en"
    languages = [item.strip().lower() for item in raw.split(",") if item.strip()]
    return languages or ["en"]


@lru_cache(maxsize=1)
def metadata() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
    }


def summarize_runtime_config() -> dict:
    return {
        "db_path": get_db_path(),
        "log_level": log_level_name(),
        "seed_defaults": seed_defaults_enabled(),
        "csrf_enabled": csrf_enabled(),
    }


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "MEMORY_DB",
    "env_bool",
    "get_db_path",
    "log_level_name",
    "secret_key",
    "site_name",
    "seed_defaults_enabled",
    "csrf_enabled",
    "supported_languages",
    "metadata",
    "summarize_runtime_config",
]
