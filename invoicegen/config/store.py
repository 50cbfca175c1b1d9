"""Layered business configuration merged over compiled-in defaults."""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from invoicegen.config.defaults import DEFAULT_CONFIG
from invoicegen.core.errors import InvalidConfigError, MissingConfigKeyError
from invoicegen.core.utils import ensure_output_dir, read_file

logger = logging.getLogger(__name__)


def dump_yaml(data: Mapping[str, Any]) -> str:
    return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)


def backfill(data: Dict[str, Any], defaults: Mapping[str, Any]) -> bool:
    """Insert every default key missing from ``data``, recursing into tables.

    Returns ``True`` when anything was added. Keys present in ``data`` are never
    overwritten, so applying the defaults twice is a no-op.
    """

    changed = False
    for key, default in defaults.items():
        if key not in data:
            data[key] = copy.deepcopy(default)
            changed = True
        elif isinstance(default, Mapping) and isinstance(data[key], dict):
            changed = backfill(data[key], default) or changed
    return changed


def load_with_defaults(path: Path, defaults: Mapping[str, Any], source: str) -> Dict[str, Any]:
    """Read a YAML file, seeding it on first run and backfilling missing keys."""

    if not path.exists():
        logger.info("No %s found at %s, writing defaults", source, path)
        ensure_output_dir(path)
        path.write_text(dump_yaml(defaults), encoding="utf-8")
        return copy.deepcopy(dict(defaults))

    if not path.is_file():
        raise InvalidConfigError(source, f"{path} is not a file")

    try:
        data = yaml.safe_load(read_file(path))
    except yaml.YAMLError as exc:
        raise InvalidConfigError(source, f"unable to parse {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError(source, f"{path} must contain a mapping at the top level")

    if backfill(data, defaults):
        logger.info("Backfilled missing %s keys into %s", source, path)
        path.write_text(dump_yaml(data), encoding="utf-8")
    return data


class ConfigStore:
    """Read-only access to the merged business configuration.

    Values are looked up as ``section.key``. A key missing from both the file
    and the defaults raises :class:`MissingConfigKeyError`; optional fields
    such as ``company.logo`` default to an empty string instead of being absent.
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    @classmethod
    def load(cls, path: Path) -> "ConfigStore":
        return cls(load_with_defaults(path, DEFAULT_CONFIG, "configuration"))

    @classmethod
    def defaults(cls) -> "ConfigStore":
        return cls(copy.deepcopy(DEFAULT_CONFIG))

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def section(self, section: str) -> Dict[str, Any]:
        table = self._data.get(section)
        if not isinstance(table, dict):
            raise MissingConfigKeyError(section)
        return table

    def get(self, section: str, key: str) -> Any:
        table = self.section(section)
        if key not in table:
            raise MissingConfigKeyError(section, key)
        return table[key]

    def get_str(self, section: str, key: str) -> str:
        value = self.get(section, key)
        if value is None:
            return ""
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            raise InvalidConfigError("configuration", f"{section}.{key} must be a string")
        return str(value)

    def get_bool(self, section: str, key: str) -> bool:
        value = self.get(section, key)
        if not isinstance(value, bool):
            raise InvalidConfigError("configuration", f"{section}.{key} must be true or false")
        return value

    def get_float(self, section: str, key: str) -> float:
        value = self.get(section, key)
        if isinstance(value, bool):
            raise InvalidConfigError("configuration", f"{section}.{key} must be a number")
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigError("configuration", f"{section}.{key} must be a number") from exc

    def tax_rate(self, doctype: str) -> float:
        """Return the tax rate applying to ``doctype`` right now."""

        if not self.get_bool(doctype, "tax_enabled"):
            return 0.0
        return self.get_float("invoice", "tax_rate")

