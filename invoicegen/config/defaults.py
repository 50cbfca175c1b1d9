"""Compiled-in defaults seeding the configuration, style and word files."""
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "company": {
        "name": "My Company",
        "address": "1 Main Street, 75000 Paris",
        "phone": "",
        "email": "",
        "registration": "",
        "logo": "",
    },
    "invoice": {
        "tax_enabled": True,
        "tax_rate": 0.2,
        "add_iban": True,
        "currency": "EUR",
        "payment_conditions": "Payment due within 30 days of the invoice date.",
        "footer": "",
    },
    "quotation": {
        "tax_enabled": True,
        "add_iban": False,
        "validity_days": 30,
        "currency": "EUR",
        "payment_conditions": "A 30% deposit is required upon acceptance.",
        "footer": "",
    },
    "bank": {
        "name": "",
        "holder": "",
        "iban": "",
        "bic": "",
    },
}

SHARED_STYLE_KEY = "general"

DEFAULT_STYLE: Dict[str, Any] = {
    SHARED_STYLE_KEY: {
        "paper_type": "a4",
        "font_name": "Roboto",
        "font_size": "11pt",
        "margin_top": "8%",
        "margin_x": "4%",
        "margin_bottom": "2%",
        "footer_font_size": "8pt",
        "sep_par": "20pt",
        "company_name_font_size": "20pt",
        "logo_width": "120pt",
        "table_color": "rgb(110, 140, 180, 205)",
        "tx_descr_width": "3fr",
    },
    "invoice": {
        "company_name_font_size": "23pt",
        "logo_width": "150pt",
    },
    "quotation": {
        "table_color": "rgb(140, 180, 110, 205)",
    },
}

DEFAULT_WORDS: Dict[str, Any] = {
    "months": [
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ],
    "general": {
        "creation_date": "Date:",
        "recipient_slug": "Recipient identifier",
        "recipient_name": "Name",
        "recipient_address": "Address",
        "tx_description": "Description",
        "tx_units": "Units",
        "tx_price_per_unit": "Unit price",
        "tx_total": "Total",
        "total_pretax": "Total (excl. tax)",
        "tax": "Tax",
        "total_with_tax": "Total (incl. tax)",
        "bank_details": "Bank details",
        "bank_name": "Bank",
        "bank_holder": "Account holder",
        "iban": "IBAN",
        "bic": "BIC",
        "phone": "Phone",
        "email": "Email",
        "registration": "Registration",
    },
    "invoice": {
        "title": "Invoice",
        "recipient_intro": "Billed to",
        "invoice_nb": "Invoice",
        "sale_date": "Sale date",
        "sale_date_prompt": "Sale date (empty for today)",
        "use_quotation": "Create the invoice from a previous quotation?",
        "payment_conditions": "Payment conditions",
    },
    "quotation": {
        "title": "Quotation",
        "recipient_intro": "Prepared for",
        "quotation_nb": "Quotation",
        "validity": "Valid for (days)",
        "payment_conditions": "Payment conditions",
    },
}
