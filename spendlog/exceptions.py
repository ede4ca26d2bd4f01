"""Domain-specific exceptions for the spendlog core."""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class RecordNotFoundError(LookupError):
    """Raised when a record id does not match any stored record."""

    def __init__(self, record_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Record {record_id} not found")
        self.record_id = record_id


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""
