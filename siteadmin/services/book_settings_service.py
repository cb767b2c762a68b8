"""Book outline settings: form description, validation and persistence.

Two values live in the ``book.settings`` config record:

* ``allowed_types``: content types that may be added to book outlines
* ``child_type``: content type offered by the "Add child page" link

``child_type`` must always be one of ``allowed_types``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from flask_babel import gettext

from siteadmin.db.repositories import config_repo, content_types_repo
from siteadmin.utils import constants
from siteadmin.utils.logging import get_logger

LOG = get_logger("book_settings_service")

FORM_ID = "book_admin_settings"
FIELD_ALLOWED_TYPES = "book_allowed_types"
FIELD_CHILD_TYPE = "book_child_type"


class SettingsValidationError(ValueError):
    """Raised when a settings submission fails validation.

    ``str(exc)`` is the error code; ``field`` names the offending form field.
    """

    def __init__(self, field: str, code: str) -> None:
        super().__init__(code)
        self.field = field
        self.code = code


class InvalidChildTypeError(SettingsValidationError):
    """Raised when the child type is not one of the checked allowed types."""

    def __init__(self) -> None:
        super().__init__(FIELD_CHILD_TYPE, "invalid_child_type")


@dataclass(frozen=True)
class BookSettings:
    allowed_types: List[str]
    child_type: str

    def as_dict(self) -> Dict[str, Any]:
        return {"allowed_types": list(self.allowed_types), "child_type": self.child_type}


@dataclass(frozen=True)
class BookSettingsSubmission:
    """Typed form submission; unchecked boxes are present with ``False``."""

    allowed_types: Mapping[str, bool] = field(default_factory=dict)
    child_type: str = ""

    @property
    def checked_types(self) -> List[str]:
        return sorted(type_id for type_id, checked in self.allowed_types.items() if checked)


def _is_checked(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0", "false", "False")
    return bool(value)


def parse_submission(payload: Any, options: Optional[Mapping[str, str]] = None) -> BookSettingsSubmission:
    """Build a submission from form data or a decoded JSON body.

    ``book_allowed_types`` may be a list of checked ids, a ``{id: value}``
    mapping (``0``/``False``/``""`` meaning unchecked) or, for HTML forms, a
    multi-valued field. Known options missing from the payload count as
    unchecked.
    """
    if options is None:
        options = content_types_repo.list_names()
    raw_allowed: Any
    if hasattr(payload, "getlist"):
        raw_allowed = payload.getlist(FIELD_ALLOWED_TYPES)
    else:
        raw_allowed = (payload or {}).get(FIELD_ALLOWED_TYPES)
    allowed: Dict[str, bool] = {type_id: False for type_id in options}
    if isinstance(raw_allowed, Mapping):
        for type_id, value in raw_allowed.items():
            allowed[str(type_id)] = _is_checked(value)
    elif isinstance(raw_allowed, (list, tuple, set)):
        for type_id in raw_allowed:
            if type_id not in (None, ""):
                allowed[str(type_id)] = True
    elif isinstance(raw_allowed, str) and raw_allowed:
        allowed[raw_allowed] = True
    raw_child = (payload or {}).get(FIELD_CHILD_TYPE)
    child_type = str(raw_child).strip() if raw_child is not None else ""
    return BookSettingsSubmission(allowed_types=allowed, child_type=child_type)


def load_settings() -> BookSettings:
    config = config_repo.get_config(constants.BOOK_SETTINGS)
    return BookSettings(
        allowed_types=list(config.get("allowed_types") or []),
        child_type=config.get("child_type") or "",
    )


def error_message(code: str) -> str:
    if code == "invalid_child_type":
        return gettext(
            "The content type for the %(add_child)s link must be one of those selected as an allowed book outline type.",
            add_child=gettext("Add child page"),
        )
    if code == "required":
        return gettext("This field is required.")
    if code == "illegal_choice":
        return gettext("An illegal choice has been detected. Please contact the site administrator.")
    return gettext("The settings could not be saved.")


def build_form(
    settings: Optional[BookSettings] = None,
    errors: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Describe the settings form; ``errors`` maps field name to error code."""
    if settings is None:
        settings = load_settings()
    if options is None:
        options = content_types_repo.list_names()
    errors = errors or {}
    fields: Dict[str, Dict[str, Any]] = {
        FIELD_ALLOWED_TYPES: {
            "type": "checkboxes",
            "title": gettext("Content types allowed in book outlines"),
            "options": dict(options),
            "default_value": list(settings.allowed_types),
            "description": gettext(
                "Users with the %(outline_perm)s permission can add all content types.",
                outline_perm=gettext("Administer book outlines"),
            ),
            "required": True,
        },
        FIELD_CHILD_TYPE: {
            "type": "radios",
            "title": gettext("Content type for child pages"),
            "options": dict(options),
            "default_value": settings.child_type,
            "required": True,
        },
    }
    for field_name, code in errors.items():
        if field_name in fields:
            fields[field_name]["error"] = error_message(code)
    return {
        "form_id": FORM_ID,
        "fields": fields,
        "actions": {"submit": {"type": "submit", "value": gettext("Save configuration")}},
    }


def validate(submission: BookSettingsSubmission, options: Optional[Mapping[str, str]] = None) -> BookSettingsSubmission:
    if options is None:
        options = content_types_repo.list_names()
    checked = submission.checked_types
    if not checked:
        raise SettingsValidationError(FIELD_ALLOWED_TYPES, "required")
    if not submission.child_type:
        raise SettingsValidationError(FIELD_CHILD_TYPE, "required")
    if any(type_id not in options for type_id in checked):
        raise SettingsValidationError(FIELD_ALLOWED_TYPES, "illegal_choice")
    if submission.child_type not in options:
        raise SettingsValidationError(FIELD_CHILD_TYPE, "illegal_choice")
    if submission.child_type not in checked:
        raise InvalidChildTypeError()
    return submission


def submit(submission: BookSettingsSubmission, options: Optional[Mapping[str, str]] = None) -> BookSettings:
    """Validate and persist; unchecked types are dropped, not stored."""
    validate(submission, options)
    allowed = submission.checked_types
    config = config_repo.get_config(constants.BOOK_SETTINGS)
    config.set("allowed_types", allowed).set("child_type", submission.child_type).save()
    LOG.info("Book settings saved allowed_types=%s child_type=%s", allowed, submission.child_type)
    return BookSettings(allowed_types=allowed, child_type=submission.child_type)


__all__ = [
    "FORM_ID",
    "FIELD_ALLOWED_TYPES",
    "FIELD_CHILD_TYPE",
    "SettingsValidationError",
    "InvalidChildTypeError",
    "BookSettings",
    "BookSettingsSubmission",
    "parse_submission",
    "load_settings",
    "error_message",
    "build_form",
    "validate",
    "submit",
]
