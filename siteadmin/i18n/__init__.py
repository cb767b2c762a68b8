"""Helpers for Flask-Babel locale selection and translation directories."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from flask import has_request_context, request, session
from flask_babel import get_babel

from siteadmin import config as app_config
from siteadmin.utils.logging import get_logger

LOG = get_logger("i18n")

SESSION_LOCALE_KEY = "preferred_locale"

_PACKAGE_ROOT = Path(__file__).resolve().parents[1]
_REPO_ROOT = _PACKAGE_ROOT.parent
_DEFAULT_TRANSLATION_ROOTS: Sequence[Path] = (
    _PACKAGE_ROOT / "translations",
    _REPO_ROOT / "translations",
)


def normalize_language_choice(raw: Optional[str]) -> Optional[str]:
    """Map ``"lv-LV"``/``"lv_lv"`` style codes to a supported language."""
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip().lower().replace("_", "-")
    if not cleaned:
        return None
    primary = cleaned.split("-")[0]
    return primary if primary in app_config.supported_languages() else None


def select_locale() -> Optional[str]:
    if not has_request_context():
        return None
    preferred = normalize_language_choice(session.get(SESSION_LOCALE_KEY))
    if preferred:
        return preferred
    return request.accept_languages.best_match(app_config.supported_languages())


def _normalize_paths(paths: Iterable[Path | str]) -> List[str]:
    seen: List[str] = []
    for candidate in paths:
        path = Path(candidate).resolve()
        if not path.is_dir():
            LOG.debug("Translation directory missing; skipping: %s", path)
            continue
        as_str = str(path)
        if as_str not in seen:
            seen.append(as_str)
    return seen


def configure_translations(app, extra_roots: Iterable[Path | str] | None = None) -> None:
    """Put first-party translation directories first in Babel's search path.

    Flask-Babel resolves catalogs in directory order, so our roots must come
    before any directory registered earlier.
    """
    babel_cfg = get_babel(app)

    candidates: List[Path | str] = list(_DEFAULT_TRANSLATION_ROOTS)
    if extra_roots:
        candidates.extend(extra_roots)

    desired = _normalize_paths(candidates)
    existing = list(getattr(babel_cfg, "translation_directories", []))

    merged: List[str] = []
    for directory in desired + existing:
        if directory not in merged:
            merged.append(directory)

    if merged == existing:
        return

    babel_cfg.translation_directories = merged
    app.config["BABEL_TRANSLATION_DIRECTORIES"] = ";".join(merged)
    LOG.info("Registered %s custom translation directories", len(desired))


__all__ = [
    "SESSION_LOCALE_KEY",
    "normalize_language_choice",
    "select_locale",
    "configure_translations",
]
