"""Orchestration of one document generation run."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from invoicegen.config.store import ConfigStore
from invoicegen.config.style import StyleCascade
from invoicegen.config.words import WordDictionary
from invoicegen.core.utils import ensure_output_dir, load_env_file
from invoicegen.documents import DOCUMENT_TYPES, resolve_doctype
from invoicegen.rendering.context import CompilationContext, Engine
from invoicegen.rendering.engine import TypstEngine
from invoicegen.rendering.vault import ResourceVault, missing_style_fonts
from invoicegen.reporting.sinks import export_rows
from invoicegen.reporting.templates import history_to_rows
from invoicegen.storage.datastore import Datastore
from invoicegen.ui.prompts import ConsolePrompter, Prompter

DATA_DIR_ENV = "INVOICEGEN_DATA_DIR"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunPaths:
    """Where a run reads its configuration and resources from."""

    data_dir: Path
    config: Path
    style: Path
    lang: Path
    fonts_dir: Path
    assets_dir: Path

    @classmethod
    def from_data_dir(
        cls,
        data_dir: Path,
        config: Optional[Path] = None,
        style: Optional[Path] = None,
        lang: Optional[Path] = None,
        fonts_dir: Optional[Path] = None,
        assets_dir: Optional[Path] = None,
    ) -> "RunPaths":
        return cls(
            data_dir=data_dir,
            config=config or data_dir / "config.yaml",
            style=style or data_dir / "style.yaml",
            lang=lang or data_dir / "lang.yaml",
            fonts_dir=fonts_dir or data_dir / "fonts",
            assets_dir=assets_dir or data_dir / "assets",
        )


def run_pipeline(
    doctype: str,
    paths: RunPaths,
    output_dir: Path,
    prompter: Optional[Prompter] = None,
    engine: Optional[Engine] = None,
    today: Optional[date] = None,
) -> Path:
    """Generate one document, write it under ``output_dir`` and save the datastore.

    The document type is validated before anything is read or written. The
    datastore is exported before compiling: a document file never exists for
    an id that was not persisted. A failed compilation leaves a gap in the ids
    rather than a reused one.
    """

    doctype = resolve_doctype(doctype)
    prompter = prompter or ConsolePrompter()
    engine = engine or TypstEngine()
    today = today or date.today()

    logger.info("Generating a %s from data dir %s", doctype, paths.data_dir)
    paths.data_dir.mkdir(parents=True, exist_ok=True)
    load_env_file(paths.data_dir / ".env")

    config = ConfigStore.load(paths.config)
    words = WordDictionary.load(paths.lang)
    style = StyleCascade.load(paths.style)
    vault = ResourceVault.from_directories(paths.fonts_dir, paths.assets_dir)
    for font_name in missing_style_fonts(style, doctype, vault):
        logger.warning("Font %r is not installed in %s", font_name, paths.fonts_dir)

    datastore = Datastore.import_dir(paths.data_dir, prompter)
    builder = DOCUMENT_TYPES[doctype](config, words, datastore, prompter, today=today)
    document = builder.generate()
    logger.info("Generated %s markup for %s", doctype, document.filename)
    datastore.export(paths.data_dir)

    context = CompilationContext(vault, style.flatten(doctype), document.markup, today=today)
    output = context.compile(engine)

    output_path = output_dir / Path(document.filename).with_suffix(engine.suffix)
    ensure_output_dir(output_path)
    output_path.write_bytes(output)
    logger.info("Wrote %d bytes to %s", len(output), output_path)
    return output_path


def export_history(data_dir: Path, output_path: Path) -> Path:
    """Write the invoice history as CSV or Excel, depending on the extension."""

    datastore = Datastore.import_dir(data_dir)
    rows = history_to_rows(datastore)
    export_rows(rows, output_path)
    logger.info("Exported %d invoices to %s", len(rows), output_path)
    return output_path
