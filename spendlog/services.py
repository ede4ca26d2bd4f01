"""Framework-agnostic record store with write-through persistence."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Tuple
from uuid import uuid4

from .exceptions import PersistenceError, RecordNotFoundError
from .models import Record
from .storage import BlobStore, RecordCodec
from .validators import build_record, validate_draft
from .views import sort_records

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "et-expenses"


def _new_id() -> str:
    return uuid4().hex


class RecordStore:
    """Owns the ordered record collection and its persisted mirror.

    Every mutating method validates first, then mutates, then writes the whole
    collection back to the blob store before returning.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        key: str = DEFAULT_STORAGE_KEY,
        *,
        codec: Optional[RecordCodec] = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._blob_store = blob_store
        self._key = key
        self._codec = codec or RecordCodec()
        self._id_factory = id_factory
        self._records: List[Record] = []
        self.reload()  # Hydrate in-memory collection from persistence on construction.

    # Public API -----------------------------------------------------------
    def add(self, candidate: object) -> Record:
        record = build_record(self._fresh_id(), candidate)
        self._commit(self._records + [record])
        logger.debug("Added record %s", record.id)
        return record

    def update_at(self, record_id: str, candidate: object) -> Record:
        index = self._index_or_raise(record_id)
        fields = validate_draft(candidate)
        updated = Record(id=self._records[index].id, **fields)  # type: ignore[arg-type]
        records = list(self._records)
        records[index] = updated
        self._commit(records)
        logger.debug("Updated record %s", record_id)
        return updated

    def remove_at(self, record_id: str) -> Optional[Record]:
        index = self._index_of(record_id)
        if index is None:
            return None
        removed = self._records[index]
        self._commit(self._records[:index] + self._records[index + 1:])
        logger.debug("Removed record %s", record_id)
        return removed

    def clear(self) -> None:
        self._commit([])
        logger.debug("Cleared all records")

    def sort_by(self, key: str) -> Tuple[Record, ...]:
        self._commit(sort_records(self._records, key))
        return self.all()

    def all(self) -> Tuple[Record, ...]:
        return tuple(self._records)

    def get(self, record_id: str) -> Record:
        return self._records[self._index_or_raise(record_id)]

    def reload(self) -> None:
        """Load the collection from persistence, starting empty if it is unusable."""
        self._records = self._hydrate()

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.all())

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self._index_of(record_id) is not None

    # Internal helpers -----------------------------------------------------
    def _hydrate(self) -> List[Record]:
        try:
            raw = self._blob_store.get(self._key)
        except PersistenceError:
            logger.warning("Could not read %r, starting with no records", self._key, exc_info=True)
            return []
        if raw is None:
            return []
        try:
            return self._codec.decode(raw)
        except PersistenceError as exc:
            logger.warning("Ignoring stored records under %r: %s", self._key, exc)
            return []

    def _commit(self, records: List[Record]) -> None:
        previous = self._records
        self._records = records
        try:
            self._persist()
        except Exception:
            self._records = previous
            raise

    def _persist(self) -> None:
        try:
            self._blob_store.set(self._key, self._codec.encode(self._records))
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Unexpected error while saving records to {self._key!r}") from exc

    def _fresh_id(self) -> str:
        record_id = self._id_factory()
        while record_id in self:
            record_id = self._id_factory()
        return record_id

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _index_or_raise(self, record_id: str) -> int:
        index = self._index_of(record_id)
        if index is None:
            raise RecordNotFoundError(record_id)
        return index
