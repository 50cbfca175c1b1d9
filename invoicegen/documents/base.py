"""Shared machinery for interactive document builders."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from invoicegen.config.store import ConfigStore
from invoicegen.config.words import WordDictionary
from invoicegen.core.errors import InvoicegenError
from invoicegen.core.models import Contact, Transaction
from invoicegen.core.utils import slugify
from invoicegen.storage.datastore import Datastore
from invoicegen.ui.prompts import Prompter, ask_nonempty, collect_transactions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedDocument:
    """Markup produced by a builder and the file name suggested for its output."""

    doctype: str
    filename: str
    markup: str


class DocumentBuilder:
    """Collect facts from the operator and turn them into document markup.

    Subclasses set ``doctype`` and implement :meth:`generate`, which records the
    new document in the datastore as a side effect.
    """

    doctype: str = ""

    def __init__(
        self,
        config: ConfigStore,
        words: WordDictionary,
        datastore: Datastore,
        prompter: Prompter,
        today: Optional[date] = None,
    ):
        self.config = config
        self.words = words
        self.datastore = datastore
        self.prompter = prompter
        self.today = today or date.today()

    def word(self, key: str) -> str:
        return self.words.word(self.doctype, key)

    def generate(self) -> GeneratedDocument:
        raise NotImplementedError

    def ask_recipient(self) -> Contact:
        """Ask for a recipient slug, creating the contact on first use."""

        raw = ask_nonempty(self.prompter, f"{self.words.word('general', 'recipient_slug')}: ")
        return self.datastore.contacts.get_or_add(slugify(raw), self.prompter, self.words)

    def ask_transactions(self) -> List[Transaction]:
        transactions = collect_transactions(self.prompter, self.words)
        if not transactions:
            raise InvoicegenError(f"A {self.doctype} needs at least one line item")
        return transactions

    def filename(self, slug: str, number: int) -> str:
        return f"{self.doctype}_{slug}_{number:05d}_{self.today:%d%m%y}.pdf"
