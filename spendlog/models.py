"""Data models for the spendlog domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping

__all__ = ["Record", "RecordDraft", "Summary", "format_decimal"]


def format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation, never in exponent form."""
    return f"{value:f}"


@dataclass(frozen=True)
class Record:
    id: str
    description: str
    amount: Decimal
    category: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to JSON-friendly natives."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": format_decimal(self.amount),
            "category": self.category,
        }

    def form_fields(self) -> Dict[str, str]:
        """Field values used to pre-fill an edit form."""
        return {
            "description": self.description,
            "amount": f"{self.amount:.2f}",
            "category": self.category,
        }


@dataclass(frozen=True)
class RecordDraft:
    """Unvalidated user input for creating or editing a record."""

    description: object = None
    amount: object = None
    category: object = None

    @classmethod
    def coerce(cls, candidate: object) -> "RecordDraft":
        if isinstance(candidate, RecordDraft):
            return candidate
        if isinstance(candidate, Record):
            return cls(candidate.description, candidate.amount, candidate.category)
        if isinstance(candidate, Mapping):
            return cls(
                description=candidate.get("description"),
                amount=candidate.get("amount"),
                category=candidate.get("category"),
            )
        raise TypeError(f"Unsupported record candidate: {type(candidate).__name__}")


@dataclass(frozen=True)
class Summary:
    total: Decimal
    count: int
    is_empty: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": f"{self.total:.2f}",
            "count": self.count,
            "is_empty": self.is_empty,
        }
