"""Derived views over a record collection: filtering, sorting and totals.

Nothing in here touches persistence; every function returns a new sequence
and leaves its input alone.
"""

from __future__ import annotations

import locale
import unicodedata
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Record, Summary
from .validators import validate_sort_key

__all__ = [
    "SummaryAggregator",
    "ViewQuery",
    "filter_records",
    "fold_category",
    "format_amount",
    "sort_records",
]

DEFAULT_CURRENCY_SYMBOL = "₹"


def fold_category(value: str) -> str:
    """Accent- and case-insensitive form of a category used as the primary sort key."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(
        ch for ch in decomposed
        if not unicodedata.combining(ch) and unicodedata.category(ch) != "Cc"
    ).casefold()


def _category_key(record: Record) -> Tuple[str, str, str]:
    # Folded value collated by the active LC_COLLATE, raw value as tiebreak.
    folded = fold_category(record.category)
    return (locale.strxfrm(folded), folded, record.category)


def _amount_key(record: Record) -> Decimal:
    return record.amount


SORT_KEY_FUNCS: Dict[str, Callable[[Record], object]] = {
    "amount": _amount_key,
    "category": _category_key,
}


def sort_records(records: Iterable[Record], key: str) -> List[Record]:
    """Stable ascending sort by ``amount`` or ``category``."""
    canonical = validate_sort_key(key)
    return sorted(records, key=SORT_KEY_FUNCS[canonical])  # type: ignore[arg-type]


def filter_records(records: Iterable[Record], text: Optional[str]) -> List[Record]:
    """Records whose category contains ``text``, case-insensitively, in order."""
    query = (text or "").strip().casefold()
    if not query:
        return list(records)
    return [record for record in records if query in record.category.casefold()]


def format_amount(value: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    return f"{symbol}{value:.2f}"


class ViewQuery:
    """Current filter text and last applied sort key."""

    def __init__(self, filter_text: str = "", sort_key: Optional[str] = None) -> None:
        self.filter_text = filter_text
        self.sort_key = sort_key

    def set_filter(self, text: Optional[str]) -> None:
        self.filter_text = (text or "").strip()

    def set_sort(self, key: str) -> str:
        self.sort_key = validate_sort_key(key)
        return self.sort_key

    def apply(self, records: Sequence[Record]) -> Tuple[Record, ...]:
        # The store already holds records in the canonical (last sorted) order.
        return tuple(filter_records(records, self.filter_text))

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"filter": self.filter_text, "sort": self.sort_key}


class SummaryAggregator:
    """Reduces a record collection to its total."""

    @staticmethod
    def total(records: Iterable[Record]) -> Decimal:
        return sum((record.amount for record in records), start=Decimal("0.00"))

    def summarize(self, view: Sequence[Record], store_size: int) -> Summary:
        """Totals for the visible records, flagged empty when the store has none."""
        return Summary(total=self.total(view), count=len(view), is_empty=store_size == 0)
