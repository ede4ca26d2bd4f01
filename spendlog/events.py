"""Tiny observer hook used to notify presentation layers of state changes."""

from __future__ import annotations

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class Signal:
    """A named list of listeners called synchronously, in connection order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: List[Listener] = []

    def connect(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that disconnects it."""
        self._listeners.append(listener)

        def disconnect() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return disconnect

    def emit(self, *args: Any) -> None:
        logger.debug("Emitting %s to %d listener(s)", self.name, len(self._listeners))
        for listener in list(self._listeners):
            listener(*args)

    def __len__(self) -> int:
        return len(self._listeners)
