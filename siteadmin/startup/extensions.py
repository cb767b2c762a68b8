"""Flask extension singletons, bound to the app in ``wiring.init_app``."""
from __future__ import annotations

from flask_babel import Babel
from flask_wtf.csrf import CSRFProtect

babel = Babel()
csrf = CSRFProtect()

__all__ = ["babel", "csrf"]
