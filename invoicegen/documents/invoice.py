"""Invoice builder, optionally converting an unclaimed quotation."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from invoicegen.core.models import Contact, InvoiceInput, QuotationEntry, Transaction
from invoicegen.core.utils import parse_date
from invoicegen.documents import codegen
from invoicegen.documents.base import DocumentBuilder, GeneratedDocument
from invoicegen.ui.prompts import ask_date, confirm, select_from_list

logger = logging.getLogger(__name__)


class InvoiceBuilder(DocumentBuilder):
    doctype = "invoice"

    def generate(self) -> GeneratedDocument:
        contact = self.ask_recipient()
        quotation_index, transactions = self.ask_lines(contact.slug)
        sale_date = ask_date(self.prompter, f"{self.word('sale_date_prompt')}: ", self.today)

        invoice = self.datastore.issue_invoice(
            recipient=contact.slug,
            transactions=transactions,
            tax_rate=self.config.tax_rate(self.doctype),
            sale_date=sale_date.isoformat(),
            quotation_index=quotation_index,
            created=datetime.combine(self.today, datetime.now().time()),
        )
        return GeneratedDocument(
            doctype=self.doctype,
            filename=self.filename(contact.slug, invoice.id),
            markup=self.render(invoice, contact),
        )

    def ask_lines(self, slug: str) -> Tuple[Optional[int], List[Transaction]]:
        """Reuse an unclaimed quotation's lines, or collect new ones."""

        candidates: List[Tuple[int, QuotationEntry]] = self.datastore.convertible_quotations(slug)
        if candidates and confirm(self.prompter, self.word("use_quotation")):
            choice = select_from_list(
                self.prompter,
                candidates,
                lambda candidate: candidate[1].quotation.single_line_display(),
            )
            index, entry = candidates[choice]
            logger.info("Converting quotation #%d of %s into an invoice", index, slug)
            return index, list(entry.quotation.transactions)
        return None, self.ask_transactions()

    def render(self, invoice: InvoiceInput, contact: Contact) -> str:
        currency = self.config.get_str(self.doctype, "currency")
        totals = codegen.compute_totals(invoice.transactions, invoice.tax_rate)

        created = datetime.fromisoformat(invoice.created).date()
        sale_date = parse_date(invoice.sale_date)
        sale_date_text = self.words.format_date(sale_date) if sale_date else invoice.sale_date
        date_lines = [
            f"{codegen.sanitize(self.words.word('general', 'creation_date'))} "
            f"*{codegen.sanitize(self.words.format_date(created))}*",
            f"{codegen.sanitize(self.word('sale_date'))}: *{codegen.sanitize(sale_date_text)}*",
        ]

        parts = [
            codegen.page_settings(self.config.get_str(self.doctype, "footer")),
            codegen.company_header(self.config, self.words),
            codegen.SEPARATOR,
            f"= {codegen.sanitize(self.word('title'))}\n",
            codegen.metadata_block(
                contact,
                self.word("recipient_intro"),
                self.word("invoice_nb"),
                invoice.id,
                date_lines,
            ),
            codegen.SEPARATOR,
            codegen.transaction_table(invoice.transactions, self.words, currency),
            codegen.SEPARATOR,
            codegen.summary_table(totals, self.words, currency, with_tax=invoice.tax_rate > 0),
            codegen.SEPARATOR,
            codegen.section(
                self.word("payment_conditions"),
                self.config.get_str(self.doctype, "payment_conditions"),
            ),
        ]
        if self.config.get_bool(self.doctype, "add_iban"):
            parts.append(codegen.bank_block(self.config, self.words))
        return "".join(parts)
