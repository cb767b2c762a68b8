"""Named configuration objects persisted as JSON rows.

A :class:`ConfigObject` is read once, mutated in memory with ``set`` and
written back with ``save``. Saving replaces the stored payload of that one
record inside a single transaction.
"""
from __future__ import annotations

import copy
import json
from typing import Any, Dict, Optional

from siteadmin.db import app_session
from siteadmin.db.models import ConfigRecord
from siteadmin.utils import constants
from siteadmin.utils.logging import get_logger

LOG = get_logger("config_repo")

# Values used until a record has been saved for the first time.
CONFIG_DEFAULTS: Dict[str, Dict[str, Any]] = {
    constants.BOOK_SETTINGS: {
        "allowed_types": ["book"],
        "child_type": "book",
    },
}


class ConfigObject:
    def __init__(self, name: str, data: Dict[str, Any], *, is_new: bool) -> None:
        self.name = name
        self._data = data
        self.is_new = is_new

    def get(self, key: Optional[str] = None, default: Any = None) -> Any:
        if key is None:
            return copy.deepcopy(self._data)
        return copy.deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> "ConfigObject":
        self._data[key] = copy.deepcopy(value)
        return self

    def save(self) -> "ConfigObject":
        payload = json.dumps(self._data, sort_keys=True)
        with app_session() as session:
            record = session.get(ConfigRecord, self.name)
            if record is None:
                session.add(ConfigRecord(name=self.name, data=payload))
            else:
                record.data = payload
        self.is_new = False
        LOG.debug("Saved config %s", self.name)
        return self

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ConfigObject name={self.name} new={self.is_new}>"


def get_config(name: str) -> ConfigObject:
    with app_session() as session:
        record = session.get(ConfigRecord, name)
        if record is not None:
            return ConfigObject(name, record.payload(), is_new=False)
    defaults = copy.deepcopy(CONFIG_DEFAULTS.get(name, {}))
    return ConfigObject(name, defaults, is_new=True)


def delete_config(name: str) -> bool:
    with app_session() as session:
        record = session.get(ConfigRecord, name)
        if record is None:
            return False
        session.delete(record)
        return True


__all__ = ["CONFIG_DEFAULTS", "ConfigObject", "get_config", "delete_config"]
