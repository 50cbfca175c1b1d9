"""Invoice and quotation histories and their persisted JSON layout."""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from invoicegen.core.errors import (
    HistoryElementNotFoundError,
    MalformedRecordError,
    QuotationAlreadyClaimedError,
)
from invoicegen.core.models import InvoiceInput, QuotationEntry, QuotationInput, Transaction
from invoicegen.core.utils import read_file
from invoicegen.ui.prompts import Prompter, ask_nonempty

logger = logging.getLogger(__name__)

INVOICES_FILE = "invoice.json"
QUOTATIONS_FILE = "quotation.json"
FIRST_INVOICE_ID = 1


def _load_json(path: Path) -> Any:
    try:
        return json.loads(read_file(path))
    except json.JSONDecodeError as exc:
        raise MalformedRecordError(str(path), f"invalid JSON ({exc})") from exc


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_transactions(path: Path, raw: Any, owner: str) -> List[Transaction]:
    if not isinstance(raw, list):
        raise MalformedRecordError(str(path), f"{owner} has no transaction list")
    try:
        return [Transaction.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedRecordError(str(path), f"{owner} has a malformed transaction ({exc})") from exc


class InvoiceHistory:
    """Append-only invoice history with a persisted id counter."""

    def __init__(self, history: Optional[List[InvoiceInput]] = None, id_counter: int = FIRST_INVOICE_ID):
        self.history: List[InvoiceInput] = list(history or [])
        self.id_counter = id_counter

    def __len__(self) -> int:
        return len(self.history)

    def issue(
        self,
        recipient: str,
        transactions: List[Transaction],
        tax_rate: float,
        sale_date: str,
        created: str,
        quotation_index: Optional[int] = None,
    ) -> InvoiceInput:
        """Append a new invoice under the next id and advance the counter."""

        invoice = InvoiceInput(
            id=self.id_counter,
            recipient=recipient,
            sale_date=sale_date,
            transactions=list(transactions),
            tax_rate=tax_rate,
            created=created,
            quotation_index=quotation_index,
        )
        self.history.append(invoice)
        self.id_counter += 1
        return invoice

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id_counter": self.id_counter,
            "history": [invoice.to_dict() for invoice in self.history],
        }

    @classmethod
    def import_file(cls, path: Path, prompter: Optional[Prompter] = None) -> "InvoiceHistory":
        if not path.is_file():
            return cls()
        raw = _load_json(path)
        if not isinstance(raw, dict) or not isinstance(raw.get("history", []), list):
            raise MalformedRecordError(str(path), "expected {id_counter, history}")

        history = [_invoice_from_record(path, record, prompter) for record in raw.get("history", [])]
        ids = [invoice.id for invoice in history]
        if len(set(ids)) != len(ids):
            raise MalformedRecordError(str(path), "two invoices share the same id")

        floor = max(ids) + 1 if ids else FIRST_INVOICE_ID
        counter = raw.get("id_counter")
        if counter is None:
            logger.warning("Invoice id counter missing from %s, restoring it to %d", path, floor)
            counter = floor
        elif not _is_int(counter):
            raise MalformedRecordError(str(path), f"id_counter {counter!r} is not an integer")
        elif counter < floor:
            logger.warning("Invoice id counter %d would reuse ids, raising it to %d", counter, floor)
            counter = floor

        logger.info("Loaded %d invoices from %s (next id %d)", len(history), path, counter)
        return cls(history, counter)


def _invoice_from_record(path: Path, record: Any, prompter: Optional[Prompter]) -> InvoiceInput:
    if not isinstance(record, dict):
        raise MalformedRecordError(str(path), f"invoice entry {record!r} is not an object")

    invoice_id = record.get("id")
    if not _is_int(invoice_id):
        raise MalformedRecordError(str(path), f"invoice id {invoice_id!r} is not an integer")
    owner = f"invoice {invoice_id}"

    recipient = record.get("recipient")
    if not isinstance(recipient, str) or not recipient:
        raise MalformedRecordError(str(path), f"{owner} has no recipient")

    transactions = _parse_transactions(path, record.get("transactions"), owner)

    tax_rate = record.get("tax_rate")
    if not isinstance(tax_rate, (int, float)) or isinstance(tax_rate, bool) or not math.isfinite(tax_rate):
        raise MalformedRecordError(str(path), f"{owner} has a malformed tax rate")

    quotation_index = record.get("quotation_index")
    if quotation_index is not None and not _is_int(quotation_index):
        raise MalformedRecordError(str(path), f"{owner} has a malformed quotation index")

    def _text_field(name: str) -> str:
        value = record.get(name)
        if isinstance(value, str) and value:
            return value
        if prompter is None:
            raise MalformedRecordError(str(path), f"{owner} has no valid {name}")
        logger.warning("%s is missing %s, asking for it", owner, name)
        return ask_nonempty(prompter, f"{name.replace('_', ' ').capitalize()} of {owner}: ")

    return InvoiceInput(
        id=invoice_id,
        recipient=recipient,
        sale_date=_text_field("sale_date"),
        transactions=transactions,
        tax_rate=float(tax_rate),
        created=_text_field("created"),
        quotation_index=quotation_index,
    )


class QuotationHistory:
    """Quotations per recipient, each with an optional claiming invoice id."""

    def __init__(self, entries: Optional[Dict[str, List[QuotationEntry]]] = None):
        self.entries: Dict[str, List[QuotationEntry]] = {
            slug: list(items) for slug, items in (entries or {}).items()
        }

    def __len__(self) -> int:
        return sum(len(items) for items in self.entries.values())

    def add(self, quotation: QuotationInput) -> int:
        """Store an unclaimed quotation and return its index for the recipient."""

        items = self.entries.setdefault(quotation.recipient, [])
        items.append(QuotationEntry(quotation))
        return len(items) - 1

    def get(self, slug: str, index: int) -> QuotationEntry:
        items = self.entries.get(slug, [])
        if not 0 <= index < len(items):
            raise HistoryElementNotFoundError(slug, index)
        return items[index]

    def unclaimed(self, slug: str) -> List[Tuple[int, QuotationEntry]]:
        """Quotations of ``slug`` that can still be converted, with their index."""

        return [
            (index, entry)
            for index, entry in enumerate(self.entries.get(slug, []))
            if not entry.is_claimed
        ]

    def ensure_unclaimed(self, slug: str, index: int) -> QuotationEntry:
        entry = self.get(slug, index)
        if entry.claimed_by is not None:
            raise QuotationAlreadyClaimedError(slug, index, entry.claimed_by)
        return entry

    def claim(self, slug: str, index: int, invoice_id: int) -> None:
        entry = self.ensure_unclaimed(slug, index)
        entry.claimed_by = invoice_id
        logger.info("Quotation #%d of %s claimed by invoice %d", index, slug, invoice_id)

    def to_dict(self) -> Dict[str, Any]:
        return {slug: [entry.to_dict() for entry in items] for slug, items in self.entries.items()}

    @classmethod
    def import_file(cls, path: Path) -> "QuotationHistory":
        if not path.is_file():
            return cls()
        raw = _load_json(path)
        if not isinstance(raw, dict):
            raise MalformedRecordError(str(path), "expected an object keyed by recipient")

        entries: Dict[str, List[QuotationEntry]] = {}
        for slug, items in raw.items():
            if not isinstance(items, list):
                raise MalformedRecordError(str(path), f"quotations of {slug!r} are not a list")
            entries[slug] = [_entry_from_record(path, slug, item) for item in items]

        history = cls(entries)
        logger.info("Loaded %d quotations from %s", len(history), path)
        return history


def _entry_from_record(path: Path, slug: str, record: Any) -> QuotationEntry:
    owner = f"quotation of {slug!r}"
    if not isinstance(record, dict) or not isinstance(record.get("quotation"), dict):
        raise MalformedRecordError(str(path), f"{owner} is not an object")

    data = record["quotation"]
    if data.get("recipient") != slug:
        raise MalformedRecordError(str(path), f"{owner} names recipient {data.get('recipient')!r}")
    if not isinstance(data.get("created"), str):
        raise MalformedRecordError(str(path), f"{owner} has no creation date")

    quotation = QuotationInput(
        recipient=slug,
        created=data["created"],
        transactions=_parse_transactions(path, data.get("transactions"), owner),
    )
    claimed_by = record.get("claimed_by")
    if claimed_by is not None and not _is_int(claimed_by):
        raise MalformedRecordError(str(path), f"{owner} has a malformed claim")
    return QuotationEntry(quotation, claimed_by)