"""Translation table used for document labels and operator prompts."""
from __future__ import annotations

import copy
from datetime import date
from pathlib import Path
from typing import Any, Dict

from invoicegen.config.defaults import DEFAULT_WORDS
from invoicegen.config.store import load_with_defaults
from invoicegen.core.errors import InvalidConfigError, MissingConfigKeyError


class WordDictionary:
    """Opaque ``table.word -> text`` lookup plus month names for dates."""

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    @classmethod
    def load(cls, path: Path) -> "WordDictionary":
        return cls(load_with_defaults(path, DEFAULT_WORDS, "word dictionary"))

    @classmethod
    def defaults(cls) -> "WordDictionary":
        return cls(copy.deepcopy(DEFAULT_WORDS))

    def word(self, table: str, word: str) -> str:
        section = self._data.get(table)
        if not isinstance(section, dict):
            raise MissingConfigKeyError(table)
        if word not in section:
            raise MissingConfigKeyError(table, word)
        return str(section[word])

    def format_date(self, value: date) -> str:
        """Render ``value`` as ``<day> <month name> <year>``."""

        months = self._data.get("months")
        if not isinstance(months, list) or len(months) != 12:
            raise InvalidConfigError("word dictionary", "months must list 12 names")
        return f"{value.day} {months[value.month - 1]} {value.year}"
