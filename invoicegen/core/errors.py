"""Exceptions raised while assembling and compiling business documents."""
from __future__ import annotations


class InvoicegenError(Exception):
    """Base exception for every recoverable or reportable failure."""


class UnsupportedDocumentTypeError(InvoicegenError):
    """Raised when a document type tag has no registered builder."""

    def __init__(self, doctype: str):
        self.doctype = doctype
        super().__init__(f"Unsupported document type {doctype!r}")


class MissingConfigKeyError(InvoicegenError, KeyError):
    """Raised when a key is neither in the loaded file nor in the defaults.

    This always points at a caller or schema bug, never at user data.
    """

    def __init__(self, section: str, key: str | None = None):
        self.section = section
        self.key = key
        path = section if key is None else f"{section}.{key}"
        super().__init__(f"Configuration key {path!r} is not defined")

    def __str__(self) -> str:
        return self.args[0]


class InvalidConfigError(InvoicegenError):
    """Raised when a configuration value has the wrong type or is unparsable."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Invalid {source}: {message}")


class MalformedRecordError(InvoicegenError):
    """Raised when a persisted record cannot be reconstructed safely."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Malformed record in {path}: {message}")


class ContactNotFoundError(InvoicegenError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Contact {slug!r} not found")


class HistoryElementNotFoundError(InvoicegenError):
    def __init__(self, slug: str, index: int):
        self.slug = slug
        self.index = index
        super().__init__(f"No quotation #{index} recorded for {slug!r}")


class QuotationAlreadyClaimedError(InvoicegenError):
    """Raised when a quotation would be converted into a second invoice."""

    def __init__(self, slug: str, index: int, claimed_by: int):
        self.slug = slug
        self.index = index
        self.claimed_by = claimed_by
        super().__init__(
            f"Quotation #{index} for {slug!r} is already claimed by invoice {claimed_by}"
        )


class SourceNotFoundError(InvoicegenError):
    """Raised when the engine asks for a source other than the generated one."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Unknown source {source_id!r}: only the generated document exists")


class ResourceNotFoundError(InvoicegenError):
    """Raised when the markup references an asset that is not in the vault."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Resource not found: {path}")


class CompilationError(InvoicegenError):
    """Raised when the typesetting engine rejects the generated markup."""
