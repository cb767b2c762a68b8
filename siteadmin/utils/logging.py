"""Application logging helpers.

Every module logger lives under the ``siteadmin`` namespace and hands its
records to the one ``StreamHandler`` installed on that primary logger, which
does not propagate to the root logger. Level comes from
`siteadmin.config.log_level_name()`.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from siteadmin import config as app_config

ROOT_NAME = app_config.APP_NAME
LOG_FORMAT = "[siteadmin] %(asctime)s %(levelname)s %(name)s %(message)s"

_LOCK = threading.Lock()
_PRIMARY: Optional[logging.Logger] = None


def _primary() -> logging.Logger:
    global _PRIMARY
    if _PRIMARY is not None:
        return _PRIMARY
    with _LOCK:
        if _PRIMARY is None:
            logger = logging.getLogger(ROOT_NAME)
            logger.setLevel(getattr(logging, app_config.log_level_name(), logging.INFO))
            if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
                logger.addHandler(handler)
            logger.propagate = False
            _PRIMARY = logger
    return _PRIMARY


def get_logger(name: str = ROOT_NAME) -> logging.Logger:
    """Return ``name`` as a child of the primary logger (``health`` -> ``siteadmin.health``)."""
    primary = _primary()
    if name == ROOT_NAME:
        return primary
    if not name.startswith(ROOT_NAME + "."):
        name = f"{ROOT_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["get_logger", "LOG_FORMAT"]
