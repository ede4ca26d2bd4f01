"""Single-slot edit session sitting between the edit form and the store."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .events import Signal
from .exceptions import RecordNotFoundError
from .models import Record
from .services import RecordStore

logger = logging.getLogger(__name__)


class EditSession:
    """Tracks which record, if any, is checked out for editing.

    States are ``Idle`` (``target is None``) and ``Editing(id)``. Beginning a
    new edit replaces the current one. The store is only touched on
    ``confirm``; ``changed`` fires with the new target after every transition.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._target: Optional[str] = None
        self.changed = Signal("session_changed")

    @property
    def target(self) -> Optional[str]:
        return self._target

    @property
    def is_editing(self) -> bool:
        return self._target is not None

    def begin(self, record_id: str) -> Dict[str, str]:
        """Check out ``record_id`` and return its fields for pre-filling a form."""
        record = self._store.get(record_id)
        self._set_target(record.id)
        return record.form_fields()

    def confirm(self, candidate: object) -> Record:
        """Add a new record when idle, otherwise update the record being edited.

        A ``ValidationError`` leaves the session exactly as it was.
        """
        if self._target is None:
            return self._store.add(candidate)
        try:
            record = self._store.update_at(self._target, candidate)
        except RecordNotFoundError:
            logger.info("Edit target %s no longer exists, leaving edit mode", self._target)
            self._set_target(None)
            raise
        self._set_target(None)
        return record

    def cancel(self) -> None:
        if self._target is not None:
            self._set_target(None)

    def forget(self, record_id: Optional[str] = None) -> None:
        """Leave edit mode if ``record_id`` (or any record, when None) was the target."""
        if self._target is not None and record_id in (None, self._target):
            self._set_target(None)

    def _set_target(self, record_id: Optional[str]) -> None:
        self._target = record_id
        self.changed.emit(record_id)
