"""Contact book keyed by normalized recipient slug."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from invoicegen.config.words import WordDictionary
from invoicegen.core.errors import ContactNotFoundError, MalformedRecordError
from invoicegen.core.models import Contact
from invoicegen.core.utils import read_file
from invoicegen.ui.prompts import Prompter, ask_nonempty

logger = logging.getLogger(__name__)

CONTACTS_FILE = "contacts.json"


class ContactBook:
    """Single owner of every contact; other records refer to contacts by slug."""

    def __init__(self, contacts: Optional[Dict[str, Contact]] = None):
        self._contacts: Dict[str, Contact] = dict(contacts or {})

    def __contains__(self, slug: object) -> bool:
        return slug in self._contacts

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self) -> Iterator[Contact]:
        return iter(self._contacts.values())

    def get(self, slug: str) -> Contact:
        try:
            return self._contacts[slug]
        except KeyError:
            raise ContactNotFoundError(slug) from None

    def add(self, contact: Contact) -> Contact:
        if contact.slug in self._contacts:
            raise ValueError(f"Contact {contact.slug!r} already exists")
        self._contacts[contact.slug] = contact
        logger.info("Added contact %s", contact.slug)
        return contact

    def get_or_add(self, slug: str, prompter: Prompter, words: WordDictionary) -> Contact:
        """Return the contact for ``slug``, asking for its details when unknown.

        ``slug`` must already be normalized.
        """

        if slug in self._contacts:
            return self._contacts[slug]
        prompter.say(f"New recipient {slug!r}, enter their details")
        name = ask_nonempty(prompter, f"{words.word('general', 'recipient_name')}: ")
        address = ask_nonempty(prompter, f"{words.word('general', 'recipient_address')}: ")
        return self.add(Contact(slug=slug, name=name, address=address))

    def record_invoice(self, slug: str, invoice_id: int) -> None:
        self.get(slug).invoices.append(invoice_id)

    def to_dict(self) -> Dict[str, Any]:
        return {slug: contact.to_dict() for slug, contact in self._contacts.items()}

    @staticmethod
    def path(root: Path) -> Path:
        return root / CONTACTS_FILE

    @classmethod
    def import_file(cls, path: Path, prompter: Optional[Prompter] = None) -> "ContactBook":
        if not path.is_file():
            return cls()
        try:
            raw = json.loads(read_file(path))
        except json.JSONDecodeError as exc:
            raise MalformedRecordError(str(path), f"invalid JSON ({exc})") from exc
        if not isinstance(raw, dict):
            raise MalformedRecordError(str(path), "expected an object keyed by slug")

        book = cls()
        for slug, record in raw.items():
            book._contacts[slug] = _contact_from_record(path, slug, record, prompter)
        logger.info("Loaded %d contacts from %s", len(book), path)
        return book


def _contact_from_record(
    path: Path, slug: str, record: Any, prompter: Optional[Prompter]
) -> Contact:
    """Rebuild a contact, asking only for the fields that could not be read."""

    if not isinstance(record, dict):
        record = {}

    if record.get("slug") not in (None, slug):
        logger.warning("Contact key %s disagrees with stored slug %s", slug, record["slug"])

    fields: Dict[str, str] = {}
    for field_name in ("name", "address"):
        value = record.get(field_name)
        if isinstance(value, str) and value.strip():
            fields[field_name] = value
            continue
        if prompter is None:
            raise MalformedRecordError(str(path), f"contact {slug!r} has no valid {field_name}")
        logger.warning("Contact %s is missing %s, asking for it", slug, field_name)
        fields[field_name] = ask_nonempty(prompter, f"{field_name.capitalize()} for {slug}: ")

    invoices = record.get("invoices", [])
    if not isinstance(invoices, list) or not all(
        isinstance(item, int) and not isinstance(item, bool) for item in invoices
    ):
        raise MalformedRecordError(str(path), f"contact {slug!r} has malformed invoice ids")

    return Contact(slug=slug, name=fields["name"], address=fields["address"], invoices=list(invoices))
