"""Typst markup fragments shared by every document type.

Style values (margins, colors, widths) are referenced by name; their
definitions are prepended by the compilation context.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from invoicegen.config.store import ConfigStore
from invoicegen.config.words import WordDictionary
from invoicegen.core.models import Contact, Transaction, transactions_total

_MARKUP_SPECIALS = re.compile(r"([\\#@$*_\[\]<>`~/=+-])")


def sanitize(text: str) -> str:
    """Escape characters with a meaning in Typst content mode."""

    escaped = _MARKUP_SPECIALS.sub(r"\\\1", text)
    return escaped.replace("\n", " \\\n")


def string_literal(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_units(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class Totals:
    """Full precision totals; rounding happens only when formatting."""

    pretax: float
    tax_rate: float

    @property
    def tax(self) -> float:
        return self.pretax * self.tax_rate

    @property
    def with_tax(self) -> float:
        return self.pretax + self.tax


def compute_totals(transactions: List[Transaction], tax_rate: float) -> Totals:
    return Totals(pretax=transactions_total(transactions), tax_rate=tax_rate)


def page_settings(footer: str) -> str:
    footer_block = f"text(footer_font_size)[{sanitize(footer)}]" if footer else "none"
    return (
        "#set page(\n"
        "  paper: paper_type,\n"
        "  margin: (top: margin_top, bottom: margin_bottom, x: margin_x),\n"
        f"  footer: align(center, {footer_block}),\n"
        ")\n"
        "#set text(font: font_name, size: font_size)\n"
    )


def company_header(config: ConfigStore, words: WordDictionary) -> str:
    """Company identity block, with the logo when one is configured."""

    lines = [sanitize(config.get_str("company", "address"))]
    for key in ("phone", "email", "registration"):
        value = config.get_str("company", key)
        if value:
            lines.append(f"{sanitize(words.word('general', key))} {sanitize(value)}")

    identity = (
        f"text(company_name_font_size, weight: \"bold\")[{sanitize(config.get_str('company', 'name'))}] \\\n"
        + " \\\n".join(lines)
    )
    logo = config.get_str("company", "logo")
    if not logo:
        return f"#align(left)[#{identity}]\n"
    return (
        "#grid(\n"
        "  columns: (1fr, auto),\n"
        f"  align(left)[#{identity}],\n"
        f"  align(right, image({string_literal(logo)}, width: logo_width)),\n"
        ")\n"
    )


def metadata_block(
    contact: Contact,
    intro: str,
    number_label: str,
    number: int,
    date_lines: List[str],
) -> str:
    """Recipient on the left, document number and dates on the right."""

    right = " \\\n    ".join([f"{sanitize(number_label)} \\#*{number:05d}*", *date_lines])
    return (
        "#grid(\n"
        "  columns: (1fr, 1fr),\n"
        "  column-gutter: 10%,\n"
        "  align(left)[\n"
        f"    #text(17pt)[{sanitize(intro)}] \\\n"
        f"    {sanitize(contact.name)} \\\n"
        f"    {sanitize(contact.address)}\n"
        "  ],\n"
        "  align(right)[\n"
        f"    {right}\n"
        "  ],\n"
        ")\n"
    )


def transaction_table(transactions: List[Transaction], words: WordDictionary, currency: str) -> str:
    headers = [
        words.word("general", key)
        for key in ("tx_description", "tx_units", "tx_price_per_unit", "tx_total")
    ]
    cells = [f"[*{sanitize(header)}*]" for header in headers]
    for tx in transactions:
        cells.extend(
            [
                f"[{sanitize(tx.description)}]",
                f"[{format_units(tx.units)}]",
                f"[{format_amount(tx.price_per_unit)} {sanitize(currency)}]",
                f"[{format_amount(tx.total)} {sanitize(currency)}]",
            ]
        )
    rows = "".join(f"  {cell},\n" for cell in cells)
    return (
        "#table(\n"
        "  columns: (tx_descr_width, 1fr, 1fr, 1fr),\n"
        "  fill: (_, row) => if row == 0 { table_color } else { none },\n"
        f"{rows}"
        ")\n"
    )


def summary_table(totals: Totals, words: WordDictionary, currency: str, with_tax: bool) -> str:
    """Totals block; tax lines only appear when tax applies to the document."""

    rows = [(words.word("general", "total_pretax"), totals.pretax)]
    if with_tax:
        rate = f"{totals.tax_rate * 100:g}%"
        rows.append((f"{words.word('general', 'tax')} ({rate})", totals.tax))
        rows.append((words.word("general", "total_with_tax"), totals.with_tax))
    cells = "".join(
        f"  [{sanitize(label)}], [*{format_amount(amount)} {sanitize(currency)}*],\n"
        for label, amount in rows
    )
    return (
        "#align(right, table(\n"
        "  columns: (auto, auto),\n"
        "  stroke: none,\n"
        f"{cells}"
        "))\n"
    )


def bank_block(config: ConfigStore, words: WordDictionary) -> str:
    lines = []
    for key, label in (
        ("name", "bank_name"),
        ("holder", "bank_holder"),
        ("iban", "iban"),
        ("bic", "bic"),
    ):
        value = config.get_str("bank", key)
        if value:
            lines.append(f"{sanitize(words.word('general', label))}: {sanitize(value)}")
    body = " \\\n".join(lines)
    return f"=== {sanitize(words.word('general', 'bank_details'))}\n{body}\n"


def section(title: str, body: str) -> str:
    return f"=== {sanitize(title)}\n{sanitize(body)}\n"


SEPARATOR = "#v(sep_par)\n"
