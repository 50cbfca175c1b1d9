"""Resource resolution for one compilation run.

The typesetting engine only ever sees the generated document through the
queries below: the main source, files by id, fonts by index and today's date.
Each answer is computed from values fixed at construction time, so asking the
same question twice always gives the same answer.
"""
from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Protocol

from invoicegen.config.style import render_bindings
from invoicegen.core.errors import ResourceNotFoundError, SourceNotFoundError
from invoicegen.rendering.vault import Font, ResourceVault

logger = logging.getLogger(__name__)

MAIN_SOURCE_ID = "main.typ"

ASSET_REFERENCE = re.compile(r"\b(?:image|read|json|csv|yaml|toml|xml)\(\s*\"([^\"]+)\"")


def _normalize_id(file_id: str) -> str:
    return file_id.lstrip("/")


class Engine(Protocol):
    suffix: str

    def compile(self, context: "CompilationContext") -> bytes:
        """Turn the context's main source into output bytes."""


class CompilationContext:
    def __init__(
        self,
        vault: ResourceVault,
        bindings: Mapping[str, str],
        markup: str,
        today: Optional[date] = None,
    ):
        self.vault = vault
        self.bindings: Dict[str, str] = dict(bindings)
        self.markup = markup
        self._today = today or date.today()
        self._source = render_bindings(self.bindings) + markup

    def main(self) -> str:
        """The generated document with the style bindings prepended."""

        return self._source

    def source(self, source_id: str) -> str:
        if _normalize_id(source_id) != MAIN_SOURCE_ID:
            raise SourceNotFoundError(source_id)
        return self._source

    def file(self, file_id: str) -> bytes:
        path = _normalize_id(file_id)
        try:
            return self.vault.assets[path]
        except KeyError:
            raise ResourceNotFoundError(path) from None

    def file_ids(self) -> List[str]:
        return list(self.vault.assets)

    def font(self, index: int) -> Optional[Font]:
        """Font at ``index``, or ``None`` past the end of the pool."""

        if 0 <= index < len(self.vault.fonts):
            return self.vault.fonts[index]
        return None

    def book(self) -> List[str]:
        return [font.name for font in self.vault.fonts]

    def today(self, offset: Optional[int] = None) -> date:
        """The run's date, shifted by ``offset`` whole days when given."""

        return self._today + timedelta(days=offset or 0)

    def referenced_files(self) -> List[str]:
        """Asset paths the markup loads through ``image("...")`` and friends."""

        seen: Dict[str, None] = {}
        for match in ASSET_REFERENCE.finditer(self.markup):
            seen.setdefault(_normalize_id(match.group(1)), None)
        return list(seen)

    def check_resources(self) -> None:
        """Resolve every referenced asset up front so a typo names its path."""

        for path in self.referenced_files():
            self.file(path)

    def compile(self, engine: Engine) -> bytes:
        self.check_resources()
        logger.info(
            "Compiling %d characters of markup with %d fonts and %d assets",
            len(self._source),
            len(self.vault.fonts),
            len(self.vault.assets),
        )
        return engine.compile(self)
