"""Service exports."""

from .book_settings_service import (
    BookSettings,
    BookSettingsSubmission,
    InvalidChildTypeError,
    SettingsValidationError,
)
from . import book_settings_service

__all__ = [
    "BookSettings",
    "BookSettingsSubmission",
    "InvalidChildTypeError",
    "SettingsValidationError",
    "book_settings_service",
]
