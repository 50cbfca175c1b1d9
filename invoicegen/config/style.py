"""Style cascade: shared style values overridden per document type.

The style file is a tree of named values. Scalars at any level become
template bindings; a sub-table is only descended into when it is the shared
table (``general``) or the table named after the document being generated, so
one document type's overrides never leak into another.
"""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

from invoicegen.config.defaults import DEFAULT_STYLE, SHARED_STYLE_KEY
from invoicegen.config.store import load_with_defaults
from invoicegen.core.errors import InvalidConfigError

RAW_SUFFIXES = ("pt", "%", "fr")
RAW_PREFIXES = ("rgb", "cmyk(", "luma(")


def to_literal(value: Any) -> str:
    """Render a style value as a markup expression."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        if value.endswith(RAW_SUFFIXES) or value.startswith(RAW_PREFIXES):
            return value
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        return "(" + "".join(f"{to_literal(item)}, " for item in value) + ")"
    raise InvalidConfigError("style", f"unsupported value {value!r}")


def render_bindings(bindings: Mapping[str, str]) -> str:
    return "".join(f"#let {name} = {literal}\n" for name, literal in bindings.items())


class StyleCascade:
    def __init__(self, tree: Dict[str, Any]):
        self._tree = tree

    @classmethod
    def load(cls, path: Path) -> "StyleCascade":
        return cls(load_with_defaults(path, DEFAULT_STYLE, "style sheet"))

    @classmethod
    def defaults(cls) -> "StyleCascade":
        return cls(copy.deepcopy(DEFAULT_STYLE))

    def flatten(self, doctype: str) -> Dict[str, str]:
        """Return ``name -> literal`` bindings for ``doctype``."""

        bindings: Dict[str, str] = {}
        self._collect(self._tree, doctype, bindings)
        return bindings

    def _collect(self, table: Mapping[str, Any], doctype: str, bindings: Dict[str, str]) -> None:
        subtables: List[Mapping[str, Any]] = []
        for key, value in table.items():
            if isinstance(value, Mapping):
                continue
            bindings[str(key)] = to_literal(value)

        # The shared table is applied first so the document table wins.
        shared = table.get(SHARED_STYLE_KEY)
        if isinstance(shared, Mapping):
            subtables.append(shared)
        specific = table.get(doctype)
        if doctype != SHARED_STYLE_KEY and isinstance(specific, Mapping):
            subtables.append(specific)

        for subtable in subtables:
            self._collect(subtable, doctype, bindings)

    def prelude(self, doctype: str) -> str:
        """Render the bindings as markup definitions placed before the document."""

        return render_bindings(self.flatten(doctype))

    def values(self, doctype: str, name: str) -> List[Any]:
        """Raw values bound to ``name`` in the cascade, shared first."""

        found: List[Any] = []

        def _walk(table: Mapping[str, Any]) -> None:
            if name in table and not isinstance(table[name], Mapping):
                found.append(table[name])
            for key in dict.fromkeys((SHARED_STYLE_KEY, doctype)):
                sub = table.get(key)
                if isinstance(sub, Mapping):
                    _walk(sub)

        _walk(self._tree)
        return found
