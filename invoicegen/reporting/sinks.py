"""Helper sinks for exporting invoice history rows."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, Iterable, List

from invoicegen.core.errors import InvoicegenError
from invoicegen.core.utils import ensure_output_dir
from invoicegen.reporting.templates import TEMPLATE_HEADERS


def write_csv(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write history rows to a CSV file with consistent headers."""

    rows = list(rows)
    ensure_output_dir(output_path)

    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=TEMPLATE_HEADERS)
        writer.writeheader()
        writer.writerows(rows)


def write_excel(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write rows to an Excel workbook using openpyxl."""

    rows = list(rows)

    try:
        from openpyxl import Workbook
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("openpyxl is required for Excel sinks") from exc

    ensure_output_dir(output_path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "invoices"
    headers: List[str] = list(TEMPLATE_HEADERS)
    sheet.append(headers)
    for row in rows:
        sheet.append([row.get(header, "") for header in headers])
    workbook.save(output_path)


SINKS = {".csv": write_csv, ".xlsx": write_excel}


def export_rows(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Pick the sink from the output file extension."""

    try:
        sink = SINKS[output_path.suffix.lower()]
    except KeyError:
        raise InvoicegenError(
            f"Unsupported history export format {output_path.suffix!r}; use .csv or .xlsx"
        ) from None
    sink(rows, output_path)
