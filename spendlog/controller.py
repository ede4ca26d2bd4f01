"""Glue between user actions and the record store, edit session and views."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional, Tuple

from .config import Settings
from .events import Signal
from .models import Record, Summary
from .services import RecordStore
from .session import EditSession
from .storage import BlobStore, JSONFileBlobStore
from .views import DEFAULT_CURRENCY_SYMBOL, SummaryAggregator, ViewQuery, format_amount

logger = logging.getLogger(__name__)


class Controller:
    """Serves the calls a presentation layer makes and tells it what changed.

    ``collection_changed`` fires with the current visible records after any
    mutation or sort. ``session_changed`` fires with the edit target (or None)
    after the edit session moves between states.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ) -> None:
        self.store = store
        self.session = EditSession(store)
        self.view = ViewQuery()
        self.aggregator = SummaryAggregator()
        self.currency_symbol = currency_symbol
        self.collection_changed = Signal("collection_changed")
        self.session_changed = self.session.changed

    @classmethod
    def from_blob_store(cls, blob_store: BlobStore, settings: Optional[Settings] = None) -> "Controller":
        settings = settings or Settings()
        store = RecordStore(blob_store, settings.storage_key)
        return cls(store, currency_symbol=settings.currency_symbol)

    @classmethod
    def from_directory(cls, data_dir: Path, settings: Optional[Settings] = None) -> "Controller":
        return cls.from_blob_store(JSONFileBlobStore(data_dir), settings)

    # Inbound calls --------------------------------------------------------
    def add_or_edit(self, fields: object) -> Record:
        editing = self.session.target
        record = self.session.confirm(fields)
        logger.info("%s record %s", "Updated" if editing else "Added", record.id)
        self._collection_changed()
        return record

    def begin_edit(self, record_id: str) -> Dict[str, str]:
        return self.session.begin(record_id)

    def cancel_edit(self) -> None:
        self.session.cancel()

    def delete(self, record_id: str) -> Optional[Record]:
        removed = self.store.remove_at(record_id)
        if removed is None:
            return None
        logger.info("Deleted record %s", record_id)
        self.session.forget(record_id)
        self._collection_changed()
        return removed

    def clear_all(self) -> None:
        self.store.clear()
        logger.info("Cleared all records")
        self.session.forget()
        self._collection_changed()

    def set_filter(self, text: Optional[str]) -> Tuple[Record, ...]:
        self.view.set_filter(text)
        return self.visible()

    def sort_by(self, key: str) -> Tuple[Record, ...]:
        self.store.sort_by(key)
        self.view.set_sort(key)
        self._collection_changed()
        return self.visible()

    def visible(self) -> Tuple[Record, ...]:
        return self.view.apply(self.store.all())

    def current_total(self) -> Decimal:
        return self.aggregator.total(self.visible())

    def is_empty(self) -> bool:
        return len(self.store) == 0

    def summary(self) -> Summary:
        return self.aggregator.summarize(self.visible(), len(self.store))

    def summary_text(self) -> str:
        """Text for the summary banner; blank when there is nothing to show."""
        summary = self.summary()
        if summary.is_empty:
            return ""
        return f"Total Spent: {format_amount(summary.total, self.currency_symbol)}"

    # Internal helpers -----------------------------------------------------
    def _collection_changed(self) -> None:
        self.collection_changed.emit(self.visible())
