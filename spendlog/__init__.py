"""Core record-keeping package: records, store, edit session and views."""

from .controller import Controller
from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .models import Record, RecordDraft, Summary
from .services import RecordStore
from .session import EditSession
from .storage import BlobStore, JSONFileBlobStore, MemoryBlobStore, RecordCodec
from .views import SummaryAggregator, ViewQuery, filter_records, sort_records

__all__ = [
    "BlobStore",
    "Controller",
    "EditSession",
    "JSONFileBlobStore",
    "MemoryBlobStore",
    "PersistenceError",
    "Record",
    "RecordCodec",
    "RecordDraft",
    "RecordNotFoundError",
    "RecordStore",
    "Summary",
    "SummaryAggregator",
    "ValidationError",
    "ViewQuery",
    "filter_records",
    "sort_records",
]
