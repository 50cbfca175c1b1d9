"""Shared utility functions for the invoicegen package."""
from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
]


def slugify(value: str) -> str:
    """Normalize a recipient identifier: trimmed, lowercase, spaces to underscores."""

    return value.strip().lower().replace(" ", "_")


def read_file(path: Path) -> str:
    """Read file content as UTF-8 text."""
    return path.read_text(encoding="utf-8")


def parse_date(raw: str) -> Optional[date]:
    """Parse an operator supplied date in one of the accepted formats."""

    text = raw.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists."""
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)


def ensure_output_dir(output_path: Path) -> None:
    """Create the parent directory for the output file when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def write_files_atomically(contents: Dict[Path, str]) -> None:
    """Write several text files so that either all or none are replaced.

    Every file is first written to a sibling ``.tmp`` file; the originals are
    only swapped once all temporary files exist.
    """

    staged = []
    try:
        for path, text in contents.items():
            ensure_output_dir(path)
            tmp_path = path.with_name(path.name + ".tmp")
            tmp_path.write_text(text, encoding="utf-8")
            staged.append((tmp_path, path))
    except OSError:
        for tmp_path, _ in staged:
            tmp_path.unlink(missing_ok=True)
        raise

    for tmp_path, path in staged:
        os.replace(tmp_path, path)
