"""Persisted contacts, invoices and quotations."""
from invoicegen.storage.contacts import ContactBook
from invoicegen.storage.datastore import Datastore
from invoicegen.storage.history import InvoiceHistory, QuotationHistory

__all__ = ["ContactBook", "Datastore", "InvoiceHistory", "QuotationHistory"]
