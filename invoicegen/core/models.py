"""Data models for contacts, line items, quotations and invoices."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _amount(data: Dict[str, Any], key: str) -> float:
    """Read a finite number; booleans, NaN and infinities are rejected."""

    raw = data[key]
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a number, not {raw!r}")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{key} must be finite, not {raw!r}")
    return value


@dataclass(frozen=True)
class Transaction:
    """A single line item embedded in a quotation or an invoice."""

    description: str
    units: float
    price_per_unit: float

    @property
    def total(self) -> float:
        return self.units * self.price_per_unit

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            description=str(data["description"]),
            units=_amount(data, "units"),
            price_per_unit=_amount(data, "price_per_unit"),
        )


def transactions_total(transactions: List[Transaction]) -> float:
    """Full precision pre-tax sum of line totals."""

    return sum(tx.total for tx in transactions)


@dataclass
class Contact:
    """A document recipient, keyed by its normalized slug."""

    slug: str
    name: str
    address: str
    invoices: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary representation for JSON serialization."""

        return asdict(self)


@dataclass(frozen=True)
class QuotationInput:
    recipient: str
    created: str
    transactions: List[Transaction]

    @property
    def total(self) -> float:
        return transactions_total(self.transactions)

    def single_line_display(self, width: int = 80) -> str:
        """Summarize the quotation on one line for selection lists."""

        descriptions = ", ".join(tx.description for tx in self.transactions)
        line = f"{self.recipient} {self.created} {self.total:.2f} : {descriptions}"
        if len(line) > width:
            return line[:width] + "..."
        return line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipient": self.recipient,
            "created": self.created,
            "transactions": [tx.to_dict() for tx in self.transactions],
        }


@dataclass
class QuotationEntry:
    """A stored quotation and the id of the invoice that claimed it, if any."""

    quotation: QuotationInput
    claimed_by: Optional[int] = None

    @property
    def is_claimed(self) -> bool:
        return self.claimed_by is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"quotation": self.quotation.to_dict(), "claimed_by": self.claimed_by}


@dataclass(frozen=True)
class InvoiceInput:
    """An issued invoice. The tax rate is a snapshot taken at creation."""

    id: int
    recipient: str
    sale_date: str
    transactions: List[Transaction]
    tax_rate: float
    created: str
    quotation_index: Optional[int] = None

    @property
    def pretax_total(self) -> float:
        return transactions_total(self.transactions)

    @property
    def tax_amount(self) -> float:
        return self.pretax_total * self.tax_rate

    @property
    def total_with_tax(self) -> float:
        return self.pretax_total + self.tax_amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "recipient": self.recipient,
            "quotation_index": self.quotation_index,
            "sale_date": self.sale_date,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "tax_rate": self.tax_rate,
            "created": self.created,
        }
