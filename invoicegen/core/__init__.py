"""Core building blocks for the invoicegen package."""
from invoicegen.core.errors import (
    CompilationError,
    ContactNotFoundError,
    HistoryElementNotFoundError,
    InvalidConfigError,
    InvoicegenError,
    MalformedRecordError,
    MissingConfigKeyError,
    QuotationAlreadyClaimedError,
    ResourceNotFoundError,
    SourceNotFoundError,
    UnsupportedDocumentTypeError,
)
from invoicegen.core.logging import configure_logging
from invoicegen.core.models import (
    Contact,
    InvoiceInput,
    QuotationEntry,
    QuotationInput,
    Transaction,
    transactions_total,
)

__all__ = [
    "CompilationError",
    "ContactNotFoundError",
    "HistoryElementNotFoundError",
    "InvalidConfigError",
    "InvoicegenError",
    "MalformedRecordError",
    "MissingConfigKeyError",
    "QuotationAlreadyClaimedError",
    "ResourceNotFoundError",
    "SourceNotFoundError",
    "UnsupportedDocumentTypeError",
    "configure_logging",
    "Contact",
    "InvoiceInput",
    "QuotationEntry",
    "QuotationInput",
    "Transaction",
    "transactions_total",
]
