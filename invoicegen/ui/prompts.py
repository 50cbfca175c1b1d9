"""Transport independent operator prompts.

Builders only talk to a :class:`Prompter`: anything that can show a message
and return one line of text. The console transport reads ``stdin``; the
scripted transport replays prepared answers (tests, piped input).
"""
from __future__ import annotations

import logging
import math
from datetime import date
from typing import Callable, Iterable, List, Protocol, Sequence, TypeVar

from invoicegen.config.words import WordDictionary
from invoicegen.core.errors import InvoicegenError
from invoicegen.core.models import Transaction
from invoicegen.core.utils import parse_date

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Prompter(Protocol):
    def ask(self, question: str) -> str:
        """Return the operator's answer, stripped of surrounding whitespace."""

    def say(self, message: str) -> None:
        """Show an informational message."""


class ConsolePrompter:
    """Blocking line based prompts on the terminal."""

    def ask(self, question: str) -> str:
        return input(question).strip()

    def say(self, message: str) -> None:
        print(message)


class ScriptedPrompter:
    """Replay a fixed list of answers, recording every question asked."""

    def __init__(self, answers: Iterable[str]):
        self._answers: List[str] = list(answers)
        self.questions: List[str] = []
        self.messages: List[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self._answers:
            raise InvoicegenError(f"No answer left for prompt {question!r}")
        return self._answers.pop(0).strip()

    def say(self, message: str) -> None:
        self.messages.append(message)

    @property
    def remaining(self) -> int:
        return len(self._answers)


def ask_nonempty(prompter: Prompter, question: str) -> str:
    while True:
        answer = prompter.ask(question)
        if answer:
            return answer
        prompter.say("Answer is empty")


def ask_float(prompter: Prompter, question: str) -> float:
    while True:
        answer = prompter.ask(question)
        try:
            value = float(answer.replace(",", "."))
        except ValueError:
            value = None
        if value is not None and math.isfinite(value):
            return value
        prompter.say(f"Unable to parse {answer!r} as a number")


def ask_date(prompter: Prompter, question: str, default: date) -> date:
    """Ask for a date; an empty answer selects ``default``."""

    while True:
        answer = prompter.ask(question)
        if not answer:
            return default
        parsed = parse_date(answer)
        if parsed is not None:
            return parsed
        prompter.say(f"Unable to parse {answer!r} as a date")


def confirm(prompter: Prompter, question: str, default: bool = False) -> bool:
    suffix = " [Y/n] " if default else " [y/N] "
    answer = prompter.ask(question + suffix).lower()
    if not answer:
        return default
    return answer in {"y", "yes"}


def select_from_list(
    prompter: Prompter,
    items: Sequence[T],
    display: Callable[[T], str],
    question: str = "Select an entry: ",
) -> int:
    """Show ``items`` as a numbered list and return the index chosen."""

    if not items:
        raise InvoicegenError("Nothing to select from")
    for number, item in enumerate(items, start=1):
        prompter.say(f"{number:>3}. {display(item)}")
    while True:
        answer = prompter.ask(question)
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return int(answer) - 1
        prompter.say(f"Enter a number between 1 and {len(items)}")


def collect_transactions(
    prompter: Prompter,
    words: WordDictionary,
) -> List[Transaction]:
    """Request line items until the operator gives an empty description.

    The empty description is the only way to finish; invalid numbers are asked
    again rather than ending the list.
    """

    description_label = words.word("general", "tx_description")
    units_label = words.word("general", "tx_units")
    price_label = words.word("general", "tx_price_per_unit")

    transactions: List[Transaction] = []
    while True:
        prompter.say(f"\nLine item {len(transactions) + 1} (empty description to finish)")
        description = prompter.ask(f"{description_label}: ")
        if not description:
            break
        units = ask_float(prompter, f"{units_label}: ")
        price = ask_float(prompter, f"{price_label}: ")
        transactions.append(Transaction(description, units, price))

    logger.debug("Collected %d line items", len(transactions))
    return transactions
