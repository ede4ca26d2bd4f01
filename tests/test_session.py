"""Tests for the EditSession state machine."""

from decimal import Decimal

import pytest

from spendlog.exceptions import RecordNotFoundError, ValidationError
from spendlog.session import EditSession


@pytest.fixture
def session(store):
    return EditSession(store)


def test_starts_idle(session):
    assert session.target is None
    assert not session.is_editing


def test_confirm_while_idle_adds(session, store, coffee):
    record = session.confirm(coffee)
    assert store.all() == (record,)
    assert session.target is None


def test_begin_returns_form_fields_without_touching_store(session, store, coffee):
    record = store.add(coffee)
    fields = session.begin(record.id)
    assert fields == {"description": "Coffee", "amount": "4.50", "category": "Food"}
    assert session.target == record.id
    assert store.all() == (record,)


def test_begin_unknown_id_keeps_state(session, store, coffee):
    record = store.add(coffee)
    session.begin(record.id)
    with pytest.raises(RecordNotFoundError):
        session.begin("missing")
    assert session.target == record.id


def test_confirm_updates_target_and_returns_to_idle(session, store, coffee, bus):
    record = store.add(coffee)
    other = store.add(bus)
    session.begin(record.id)
    updated = session.confirm({"description": "Coffee", "amount": "5.00", "category": "Food"})
    assert updated.id == record.id
    assert updated.amount == Decimal("5.00")
    assert store.all() == (updated, other)
    assert session.target is None


def test_invalid_confirm_stays_in_edit_mode(session, store, coffee):
    record = store.add(coffee)
    session.begin(record.id)
    with pytest.raises(ValidationError):
        session.confirm({"description": "Coffee", "amount": "0", "category": "Food"})
    assert session.target == record.id
    assert store.get(record.id) == record
    corrected = session.confirm({"description": "Coffee", "amount": "6", "category": "Food"})
    assert corrected.amount == Decimal("6.00")
    assert session.target is None


def test_begin_on_another_record_replaces_target(session, store, coffee, bus):
    first = store.add(coffee)
    second = store.add(bus)
    session.begin(first.id)
    session.begin(second.id)
    assert session.target == second.id
    session.confirm({"description": "Bus", "amount": "3", "category": "Transport"})
    assert store.get(first.id) == first


def test_cancel_returns_to_idle_without_mutation(session, store, coffee):
    record = store.add(coffee)
    session.begin(record.id)
    session.cancel()
    assert session.target is None
    assert store.all() == (record,)


def test_confirm_after_target_deleted_resets(session, store, coffee):
    record = store.add(coffee)
    session.begin(record.id)
    store.remove_at(record.id)
    with pytest.raises(RecordNotFoundError):
        session.confirm(coffee)
    assert session.target is None
    assert store.all() == ()


def test_forget_only_matching_target(session, store, coffee):
    record = store.add(coffee)
    session.begin(record.id)
    session.forget("someone-else")
    assert session.target == record.id
    session.forget(record.id)
    assert session.target is None


def test_changed_signal_reports_transitions(session, store, coffee):
    record = store.add(coffee)
    seen = []
    session.changed.connect(seen.append)
    session.begin(record.id)
    session.cancel()
    session.cancel()
    session.begin(record.id)
    session.confirm(coffee)
    assert seen == [record.id, None, record.id, None]
