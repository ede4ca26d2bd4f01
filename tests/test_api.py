"""Tests for the Flask REST API."""

import pytest

from api.app import create_app
from spendlog.storage import MemoryBlobStore


@pytest.fixture
def client():
    app = create_app(blob_store=MemoryBlobStore())
    app.config.update(TESTING=True)
    return app.test_client()


def _add(client, description, amount, category):
    response = client.post(
        "/records", json={"description": description, "amount": amount, "category": category}
    )
    assert response.status_code == 201
    return response.get_json()


def test_add_and_list(client):
    coffee = _add(client, "Coffee", "4.50", "Food")
    _add(client, "Bus", 2, "Transport")
    body = client.get("/records").get_json()
    assert [item["description"] for item in body["items"]] == ["Coffee", "Bus"]
    assert body["items"][0] == coffee
    assert body["total"] == "6.50"
    assert body["is_empty"] is False
    assert body["summary"] == {"total": "6.50", "count": 2, "is_empty": False}


def test_validation_error_names_field(client):
    response = client.post("/records", json={"description": "Tea", "amount": 0, "category": "Food"})
    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "Validation error"
    assert body["field"] == "amount"
    assert client.get("/records").get_json()["items"] == []


def test_non_json_body_is_rejected(client):
    response = client.post("/records", data="description=Tea")
    assert response.status_code == 400
    assert response.get_json()["field"] == "body"


def test_edit_flow(client):
    coffee = _add(client, "Coffee", "4.50", "Food")
    _add(client, "Bus", "2.00", "Transport")

    response = client.post(f"/records/{coffee['id']}/edit")
    assert response.status_code == 200
    assert response.get_json()["fields"] == {
        "description": "Coffee",
        "amount": "4.50",
        "category": "Food",
    }
    assert client.get("/session").get_json() == {"editing": coffee["id"]}

    response = client.post("/records", json={"description": "Coffee", "amount": "5", "category": "Food"})
    assert response.status_code == 200
    assert response.get_json()["id"] == coffee["id"]
    assert client.get("/session").get_json() == {"editing": None}

    body = client.get("/records").get_json()
    assert body["items"][0]["amount"] == "5.00"
    assert body["total"] == "7.00"


def test_begin_edit_unknown_record(client):
    response = client.post("/records/ghost/edit")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Record not found"


def test_cancel_edit(client):
    coffee = _add(client, "Coffee", "4.50", "Food")
    client.post(f"/records/{coffee['id']}/edit")
    assert client.delete(f"/records/{coffee['id']}/edit").status_code == 204
    assert client.get("/session").get_json() == {"editing": None}


def test_delete_is_idempotent(client):
    coffee = _add(client, "Coffee", "4.50", "Food")
    assert client.delete(f"/records/{coffee['id']}").status_code == 204
    assert client.delete(f"/records/{coffee['id']}").status_code == 204
    assert client.get("/records").get_json()["is_empty"] is True


def test_filter_and_sort(client):
    _add(client, "Dinner", "20", "Food")
    _add(client, "Train", "9", "Transport")
    _add(client, "Snack", "3", "food court")

    body = client.get("/records?filter=FOOD").get_json()
    assert [item["description"] for item in body["items"]] == ["Dinner", "Snack"]
    assert body["total"] == "23.00"

    body = client.post("/records/sort", json={"key": "amount"}).get_json()
    assert [item["description"] for item in body["items"]] == ["Snack", "Dinner"]
    assert body["query"] == {"filter": "FOOD", "sort": "amount"}

    body = client.get("/records?filter=").get_json()
    assert [item["description"] for item in body["items"]] == ["Snack", "Train", "Dinner"]


def test_sort_with_unknown_key(client):
    response = client.post("/records/sort", json={"key": "date"})
    assert response.status_code == 400
    assert response.get_json()["field"] == "sort_key"


def test_summary_and_clear(client):
    assert client.get("/summary").get_json() == {
        "total": "0.00",
        "count": 0,
        "is_empty": True,
        "text": "",
    }
    _add(client, "Coffee", "4.50", "Food")
    summary = client.get("/summary").get_json()
    assert summary["text"] == "Total Spent: ₹4.50"
    assert summary["is_empty"] is False

    assert client.delete("/records").status_code == 204
    assert client.get("/summary").get_json()["is_empty"] is True


def test_file_backed_app_persists(tmp_path):
    app = create_app(data_dir=tmp_path)
    app.test_client().post("/records", json={"description": "Tea", "amount": "1.20", "category": "Food"})
    reopened = create_app(data_dir=tmp_path).test_client()
    assert [item["description"] for item in reopened.get("/records").get_json()["items"]] == ["Tea"]
