"""Mapping utilities turning invoice history into spreadsheet rows."""
from typing import Any, Dict, Iterable, List

from invoicegen.core.models import InvoiceInput
from invoicegen.storage.datastore import Datastore


TEMPLATE_HEADERS = [
    "Invoice_Number",
    "Date",
    "Client",
    "Client_Name",
    "Amount",
    "Tax_Rate",
    "Tax",
    "Total_Amount",
    "Quotation",
]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def _format_amount(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"


def invoice_to_template_row(invoice: InvoiceInput, client_name: str = "") -> Dict[str, Any]:
    """Convert one invoice into the spreadsheet template dictionary."""

    return {
        "Invoice_Number": f"{invoice.id:05d}",
        "Date": invoice.sale_date,
        "Client": invoice.recipient,
        "Client_Name": _clean_text(client_name),
        "Amount": _format_amount(invoice.pretax_total),
        "Tax_Rate": f"{invoice.tax_rate * 100:g}%",
        "Tax": _format_amount(invoice.tax_amount),
        "Total_Amount": _format_amount(invoice.total_with_tax),
        "Quotation": "" if invoice.quotation_index is None else str(invoice.quotation_index + 1),
    }


def invoices_to_template_rows(datastore: Datastore, invoices: Iterable[InvoiceInput]) -> List[Dict[str, Any]]:
    rows = []
    for invoice in invoices:
        name = datastore.contacts.get(invoice.recipient).name if invoice.recipient in datastore.contacts else ""
        rows.append(invoice_to_template_row(invoice, name))
    return rows


def history_to_rows(datastore: Datastore) -> List[Dict[str, Any]]:
    """All invoices of the datastore, in issue order."""

    return invoices_to_template_rows(datastore, datastore.invoices.history)
