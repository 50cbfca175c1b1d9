"""Document types and the table mapping each tag to its builder.

Adding a document type means writing one builder and one entry in
``DOCUMENT_TYPES``; configuration, style and resources need no change beyond
their own per-type tables.
"""
from typing import Dict, Type

from invoicegen.core.errors import UnsupportedDocumentTypeError
from invoicegen.documents.base import DocumentBuilder, GeneratedDocument
from invoicegen.documents.invoice import InvoiceBuilder
from invoicegen.documents.quotation import QuotationBuilder

DOCUMENT_TYPES: Dict[str, Type[DocumentBuilder]] = {
    InvoiceBuilder.doctype: InvoiceBuilder,
    QuotationBuilder.doctype: QuotationBuilder,
}


def resolve_doctype(tag: str) -> str:
    """Normalize a document type tag, rejecting unknown ones."""

    doctype = tag.strip().lower()
    if doctype not in DOCUMENT_TYPES:
        raise UnsupportedDocumentTypeError(tag)
    return doctype


def builder_for(tag: str) -> Type[DocumentBuilder]:
    return DOCUMENT_TYPES[resolve_doctype(tag)]


__all__ = [
    "DOCUMENT_TYPES",
    "DocumentBuilder",
    "GeneratedDocument",
    "InvoiceBuilder",
    "QuotationBuilder",
    "builder_for",
    "resolve_doctype",
]
