"""Engines turning a compilation context into output bytes."""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Dict, Set

from invoicegen.core.errors import CompilationError
from invoicegen.rendering.context import MAIN_SOURCE_ID, CompilationContext

logger = logging.getLogger(__name__)


class SourceEngine:
    """Return the assembled markup itself, for inspection or external builds."""

    suffix = ".typ"

    def compile(self, context: CompilationContext) -> bytes:
        return context.main().encode("utf-8")


class TypstEngine:
    """Compile with the ``typst`` Python bindings.

    The bindings read from disk, so the context is written into a scratch
    directory using only its public queries, then compiled from there.
    """

    def __init__(self, output_format: str = "pdf"):
        self.output_format = output_format
        self.suffix = f".{output_format}"

    def materialize(self, context: CompilationContext, root: Path) -> Path:
        """Write the main source, every asset and every font file below ``root``."""

        main_path = root / MAIN_SOURCE_ID
        main_path.write_text(context.source(MAIN_SOURCE_ID), encoding="utf-8")

        for file_id in context.file_ids():
            target = root / file_id
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(context.file(file_id))

        fonts_dir = root / ".fonts"
        fonts_dir.mkdir()
        written: Set[str] = set()
        index = 0
        font = context.font(index)
        while font is not None:
            if font.path not in written:
                target = fonts_dir / font.path
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(font.data)
                written.add(font.path)
            index += 1
            font = context.font(index)
        logger.debug("Materialized %d font files for %d faces", len(written), index)
        return main_path

    def inputs(self, context: CompilationContext) -> Dict[str, str]:
        """Values exposed to the markup as ``sys.inputs``.

        Typst's own ``datetime.today()`` reads the system clock; markup that needs
        the run's date reads ``sys.inputs.today`` instead.
        """

        return {"today": context.today().isoformat()}

    def compile(self, context: CompilationContext) -> bytes:
        try:
            import typst
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImportError("typst is required to compile documents") from exc

        with tempfile.TemporaryDirectory(prefix="invoicegen-") as tmp:
            root = Path(tmp)
            main_path = self.materialize(context, root)
            try:
                return typst.compile(
                    str(main_path),
                    root=str(root),
                    font_paths=[str(root / ".fonts")],
                    format=self.output_format,
                    sys_inputs=self.inputs(context),
                )
            except RuntimeError as exc:
                raise CompilationError(f"typst rejected the generated document: {exc}") from exc
