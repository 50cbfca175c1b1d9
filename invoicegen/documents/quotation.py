"""Quotation builder. Quotations are stored unclaimed until invoiced."""
from __future__ import annotations

from datetime import date

from invoicegen.core.models import Contact, QuotationInput
from invoicegen.documents import codegen
from invoicegen.documents.base import DocumentBuilder, GeneratedDocument


class QuotationBuilder(DocumentBuilder):
    doctype = "quotation"

    def generate(self) -> GeneratedDocument:
        contact = self.ask_recipient()
        quotation = QuotationInput(
            recipient=contact.slug,
            created=self.today.isoformat(),
            transactions=self.ask_transactions(),
        )
        index = self.datastore.add_quotation(quotation)
        return GeneratedDocument(
            doctype=self.doctype,
            filename=self.filename(contact.slug, index + 1),
            markup=self.render(quotation, contact, index + 1),
        )

    def render(self, quotation: QuotationInput, contact: Contact, number: int) -> str:
        currency = self.config.get_str(self.doctype, "currency")
        tax_rate = self.config.tax_rate(self.doctype)
        totals = codegen.compute_totals(quotation.transactions, tax_rate)

        created = date.fromisoformat(quotation.created)
        date_lines = [
            f"{codegen.sanitize(self.words.word('general', 'creation_date'))} "
            f"*{codegen.sanitize(self.words.format_date(created))}*",
            f"{codegen.sanitize(self.word('validity'))}: "
            f"*{codegen.sanitize(self.config.get_str(self.doctype, 'validity_days'))}*",
        ]

        parts = [
            codegen.page_settings(self.config.get_str(self.doctype, "footer")),
            codegen.company_header(self.config, self.words),
            codegen.SEPARATOR,
            f"= {codegen.sanitize(self.word('title'))}\n",
            codegen.metadata_block(
                contact,
                self.word("recipient_intro"),
                self.word("quotation_nb"),
                number,
                date_lines,
            ),
            codegen.SEPARATOR,
            codegen.transaction_table(quotation.transactions, self.words, currency),
            codegen.SEPARATOR,
            codegen.summary_table(totals, self.words, currency, with_tax=tax_rate > 0),
            codegen.SEPARATOR,
            codegen.section(
                self.word("payment_conditions"),
                self.config.get_str(self.doctype, "payment_conditions"),
            ),
        ]
        if self.config.get_bool(self.doctype, "add_iban"):
            parts.append(codegen.bank_block(self.config, self.words))
        return "".join(parts)
