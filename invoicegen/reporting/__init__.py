"""Exports of the invoice history."""
from invoicegen.reporting.sinks import export_rows, write_csv, write_excel
from invoicegen.reporting.templates import TEMPLATE_HEADERS, history_to_rows, invoice_to_template_row

__all__ = [
    "TEMPLATE_HEADERS",
    "export_rows",
    "history_to_rows",
    "invoice_to_template_row",
    "write_csv",
    "write_excel",
]
