"""Invoice and quotation generation on top of an external typesetting engine."""
from invoicegen.config import ConfigStore, StyleCascade, WordDictionary
from invoicegen.core import (
    Contact,
    InvoiceInput,
    InvoicegenError,
    QuotationInput,
    Transaction,
    configure_logging,
)
from invoicegen.documents import DOCUMENT_TYPES, GeneratedDocument, builder_for
from invoicegen.pipeline import RunPaths, export_history, run_pipeline
from invoicegen.rendering import CompilationContext, ResourceVault, SourceEngine, TypstEngine
from invoicegen.storage import Datastore

__all__ = [
    "CompilationContext",
    "ConfigStore",
    "Contact",
    "DOCUMENT_TYPES",
    "Datastore",
    "GeneratedDocument",
    "InvoiceInput",
    "InvoicegenError",
    "QuotationInput",
    "ResourceVault",
    "RunPaths",
    "SourceEngine",
    "StyleCascade",
    "Transaction",
    "TypstEngine",
    "WordDictionary",
    "builder_for",
    "configure_logging",
    "export_history",
    "run_pipeline",
]
