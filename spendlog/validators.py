"""Validation helpers shared by the record store and the storage codec."""

from __future__ import annotations

import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Dict

from .exceptions import ValidationError
from .models import Record, RecordDraft

DESCRIPTION_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50

SORT_KEYS = ("amount", "category")

_CENTS = Decimal("0.01")


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a finite, positive Decimal with at least two fraction digits."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(field, "must be a numeric value")
    try:
        amount = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(field, "must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(field, "must be a finite number")
    if amount <= 0:
        raise ValidationError(field, "must be greater than zero")

    # Pad to cents without dropping any precision the caller supplied.
    if amount.as_tuple().exponent > -2:
        try:
            amount = amount.quantize(_CENTS)
        except InvalidOperation as exc:
            raise ValidationError(field, "is out of range") from exc
    return amount


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(field, "cannot be empty")
    if any(unicodedata.category(ch) == "Cc" for ch in trimmed):
        raise ValidationError(field, "cannot contain control characters")
    if len(trimmed) > max_length:
        raise ValidationError(field, f"must be at most {max_length} characters")
    return trimmed


def validate_draft(candidate: object) -> Dict[str, object]:
    """Validate every field of a candidate before anything is mutated."""
    try:
        draft = RecordDraft.coerce(candidate)
    except TypeError as exc:
        raise ValidationError("record", str(exc)) from exc
    return {
        "description": validate_required_str(
            draft.description, "description", DESCRIPTION_MAX_LENGTH
        ),
        "amount": parse_amount(draft.amount),
        "category": validate_required_str(draft.category, "category", CATEGORY_MAX_LENGTH),
    }


def normalize_id(raw: object) -> str:
    """Return the canonical string form of a record id."""
    if isinstance(raw, bool):
        raise ValidationError("id", "must be a string or an integer")
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    raise ValidationError("id", "must be a non-empty string or an integer")


def build_record(record_id: object, candidate: object) -> Record:
    """Single entry point for turning input into a Record."""
    fields = validate_draft(candidate)
    return Record(id=normalize_id(record_id), **fields)


def validate_sort_key(key: object) -> str:
    if not isinstance(key, str):
        raise ValidationError("sort_key", f"must be one of: {', '.join(SORT_KEYS)}")
    canonical = key.strip().lower()
    if canonical not in SORT_KEYS:
        raise ValidationError("sort_key", f"must be one of: {', '.join(SORT_KEYS)}")
    return canonical
