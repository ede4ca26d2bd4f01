"""Shared fixtures for the spendlog test suite."""

from __future__ import annotations

import itertools
from typing import Callable

import pytest

from spendlog.controller import Controller
from spendlog.services import RecordStore
from spendlog.storage import MemoryBlobStore


def counter_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"r{next(counter)}"


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    return counter_ids()


@pytest.fixture
def store(blob_store: MemoryBlobStore, id_factory: Callable[[], str]) -> RecordStore:
    return RecordStore(blob_store, id_factory=id_factory)


@pytest.fixture
def controller(store: RecordStore) -> Controller:
    return Controller(store)


@pytest.fixture
def coffee() -> dict:
    return {"description": "Coffee", "amount": "4.50", "category": "Food"}


@pytest.fixture
def bus() -> dict:
    return {"description": "Bus", "amount": "2.00", "category": "Transport"}
