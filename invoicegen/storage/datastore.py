"""Aggregate root for everything persisted between runs."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from invoicegen.core.errors import (
    ContactNotFoundError,
    HistoryElementNotFoundError,
    MalformedRecordError,
)
from invoicegen.core.models import InvoiceInput, QuotationEntry, QuotationInput, Transaction
from invoicegen.core.utils import write_files_atomically
from invoicegen.storage.contacts import ContactBook
from invoicegen.storage.history import (
    INVOICES_FILE,
    QUOTATIONS_FILE,
    InvoiceHistory,
    QuotationHistory,
)
from invoicegen.ui.prompts import Prompter

logger = logging.getLogger(__name__)


class Datastore:
    """Contacts, invoice history and quotation history, loaded and saved together.

    The store is read once at the start of a run and written once, right after
    the document was generated and before it is compiled, so an issued id is
    always persisted before any output carrying it exists.
    """

    def __init__(
        self,
        contacts: Optional[ContactBook] = None,
        invoices: Optional[InvoiceHistory] = None,
        quotations: Optional[QuotationHistory] = None,
    ):
        self.contacts = contacts or ContactBook()
        self.invoices = invoices or InvoiceHistory()
        self.quotations = quotations or QuotationHistory()

    @classmethod
    def import_dir(cls, root: Path, prompter: Optional[Prompter] = None) -> "Datastore":
        root.mkdir(parents=True, exist_ok=True)
        logger.info("Importing datastore from %s", root)
        datastore = cls(
            contacts=ContactBook.import_file(ContactBook.path(root), prompter),
            invoices=InvoiceHistory.import_file(root / INVOICES_FILE, prompter),
            quotations=QuotationHistory.import_file(root / QUOTATIONS_FILE),
        )
        datastore.reconcile_claims(root)
        return datastore

    def reconcile_claims(self, root: Path) -> None:
        """Check that invoices and quotation claims point at each other.

        An invoice converting a quotation still recorded as unclaimed is the
        state left by an export interrupted between the invoice and quotation
        files; the claim is restored with a warning. Any other disagreement
        raises :class:`MalformedRecordError`.
        """

        claims: Dict[Tuple[str, int], int] = {}
        for invoice in self.invoices.history:
            if invoice.quotation_index is None:
                continue
            key = (invoice.recipient, invoice.quotation_index)
            try:
                entry = self.quotations.get(*key)
            except HistoryElementNotFoundError:
                raise MalformedRecordError(
                    str(root / INVOICES_FILE),
                    f"invoice {invoice.id} converts unknown quotation #{invoice.quotation_index} "
                    f"of {invoice.recipient!r}",
                ) from None
            if key in claims:
                raise MalformedRecordError(
                    str(root / INVOICES_FILE),
                    f"invoices {claims[key]} and {invoice.id} convert the same quotation "
                    f"#{invoice.quotation_index} of {invoice.recipient!r}",
                )
            claims[key] = invoice.id
            if entry.claimed_by is None:
                logger.warning(
                    "Quotation #%d of %s was not marked as claimed by invoice %d, restoring the claim",
                    invoice.quotation_index,
                    invoice.recipient,
                    invoice.id,
                )
                entry.claimed_by = invoice.id

        for slug, items in self.quotations.entries.items():
            for index, entry in enumerate(items):
                if entry.claimed_by is not None and claims.get((slug, index)) != entry.claimed_by:
                    raise MalformedRecordError(
                        str(root / QUOTATIONS_FILE),
                        f"quotation #{index} of {slug!r} is claimed by invoice {entry.claimed_by}, "
                        "which does not convert it",
                    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contacts": self.contacts.to_dict(),
            "invoices": self.invoices.to_dict(),
            "quotations": self.quotations.to_dict(),
        }

    def export(self, root: Path) -> None:
        snapshot = self.to_dict()
        write_files_atomically(
            {
                ContactBook.path(root): json.dumps(snapshot["contacts"], indent=2, ensure_ascii=False),
                root / INVOICES_FILE: json.dumps(snapshot["invoices"], indent=2, ensure_ascii=False),
                root / QUOTATIONS_FILE: json.dumps(snapshot["quotations"], indent=2, ensure_ascii=False),
            }
        )
        logger.info(
            "Exported %d contacts, %d invoices and %d quotations to %s",
            len(self.contacts),
            len(self.invoices),
            len(self.quotations),
            root,
        )

    def convertible_quotations(self, slug: str) -> List[Tuple[int, QuotationEntry]]:
        return self.quotations.unclaimed(slug)

    def add_quotation(self, quotation: QuotationInput) -> int:
        if quotation.recipient not in self.contacts:
            raise ContactNotFoundError(quotation.recipient)
        index = self.quotations.add(quotation)
        logger.info("Recorded quotation #%d for %s", index, quotation.recipient)
        return index

    def issue_invoice(
        self,
        recipient: str,
        transactions: List[Transaction],
        tax_rate: float,
        sale_date: str,
        quotation_index: Optional[int] = None,
        created: Optional[datetime] = None,
    ) -> InvoiceInput:
        """Create an invoice and apply every side effect it implies.

        The claimed quotation must belong to ``recipient`` and still be
        unclaimed; both are checked before an id is consumed.
        """

        self.contacts.get(recipient)
        if quotation_index is not None:
            self.quotations.ensure_unclaimed(recipient, quotation_index)

        invoice = self.invoices.issue(
            recipient=recipient,
            transactions=transactions,
            tax_rate=tax_rate,
            sale_date=sale_date,
            created=(created or datetime.now()).isoformat(timespec="seconds"),
            quotation_index=quotation_index,
        )
        self.contacts.record_invoice(recipient, invoice.id)
        if quotation_index is not None:
            self.quotations.claim(recipient, quotation_index, invoice.id)
        logger.info("Issued invoice %d for %s", invoice.id, recipient)
        return invoice
