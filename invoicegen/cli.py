"""Command line entry point generating one invoice or quotation per run."""
import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from invoicegen.core.errors import InvoicegenError
from invoicegen.core.logging import configure_logging
from invoicegen.documents import DOCUMENT_TYPES, resolve_doctype
from invoicegen.pipeline import DATA_DIR_ENV, RunPaths, export_history, run_pipeline
from invoicegen.rendering.engine import SourceEngine, TypstEngine


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Generate invoices and quotations")
    parser.add_argument(
        "doctype",
        nargs="?",
        help=f"Document type to generate ({', '.join(DOCUMENT_TYPES)})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory the generated document is written to",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=os.getenv(DATA_DIR_ENV),
        help=f"Directory holding contacts, history and configuration (or ${DATA_DIR_ENV})",
    )
    parser.add_argument("--config", type=Path, help="Business configuration file")
    parser.add_argument("--style", type=Path, help="Style sheet file")
    parser.add_argument("--lang", type=Path, help="Word dictionary file")
    parser.add_argument("--fonts-dir", type=Path, help="Directory scanned for fonts")
    parser.add_argument("--assets-dir", type=Path, help="Directory scanned for assets")
    parser.add_argument(
        "--markup-only",
        action="store_true",
        help="Write the assembled Typst source instead of compiling it",
    )
    parser.add_argument(
        "--export-history",
        type=Path,
        help="Write the invoice history to a .csv or .xlsx file and exit",
    )
    parser.add_argument("--log-level", help="Logging level (defaults to $LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint for generating a document from the command line."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.data_dir:
        parser.error(f"--data-dir or ${DATA_DIR_ENV} is required")
    data_dir = Path(args.data_dir)

    try:
        if args.export_history:
            output_path = export_history(data_dir, args.export_history)
        else:
            if not args.doctype:
                parser.error("a document type is required")
            doctype = resolve_doctype(args.doctype)
            paths = RunPaths.from_data_dir(
                data_dir,
                config=args.config,
                style=args.style,
                lang=args.lang,
                fonts_dir=args.fonts_dir,
                assets_dir=args.assets_dir,
            )
            engine = SourceEngine() if args.markup_only else TypstEngine()
            output_path = run_pipeline(doctype, paths, args.output_dir, engine=engine)
    except (InvoicegenError, OSError, ImportError, EOFError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
