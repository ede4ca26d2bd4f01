"""Persistence utilities for the spendlog core.

The record store only ever talks to a ``BlobStore``: an opaque key/value
medium holding strings. ``RecordCodec`` owns the wire format of the record
collection kept in one of its slots.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from .exceptions import PersistenceError, ValidationError
from .models import Record
from .validators import build_record

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,100}$")


class BlobStore(Protocol):
    """Minimal string key/value contract the record store depends on."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryBlobStore:
    """Dict-backed blob store, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value


class JSONFileBlobStore:
    """File-per-key blob store with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"{path} is not valid UTF-8 text") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
            # Path.replace is an atomic rename on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Unable to write to {path}") from exc

    def _path_for(self, key: str) -> Path:
        if not KEY_PATTERN.fullmatch(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base_path / f"{key}.json"


class RecordCodec:
    """Serialises the ordered record collection to and from JSON text."""

    def encode(self, records: Iterable[Record]) -> str:
        payload = {
            "version": SCHEMA_VERSION,
            "records": [record.to_dict() for record in records],
        }
        return json.dumps(payload, ensure_ascii=False)

    def decode(self, text: str) -> List[Record]:
        """Parse stored text into Records.

        Raises ``PersistenceError`` when the payload as a whole is unusable.
        Individual entries that fail validation, or repeat an id already seen,
        are skipped and logged.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError("Stored records are not valid JSON") from exc

        if isinstance(payload, list):
            # Unversioned layout: a bare list of records.
            entries = payload
        elif isinstance(payload, dict):
            version = payload.get("version")
            if version != SCHEMA_VERSION:
                raise PersistenceError(f"Unsupported records schema version: {version!r}")
            entries = payload.get("records")
            if not isinstance(entries, list):
                raise PersistenceError("Stored records payload has no 'records' list")
        else:
            raise PersistenceError("Expected a list or an object of stored records")

        records: List[Record] = []
        seen = set()
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning("Skipping stored record %d: not an object", index)
                continue
            try:
                record = build_record(entry.get("id"), entry)
            except ValidationError as exc:
                logger.warning("Skipping stored record %d: %s", index, exc)
                continue
            if record.id in seen:
                logger.warning("Skipping stored record %d: duplicate id %s", index, record.id)
                continue
            seen.add(record.id)
            records.append(record)
        return records
