"""Flask REST API exposing the spendlog controller."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from spendlog.config import Settings, configure_collation
from spendlog.controller import Controller
from spendlog.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from spendlog.models import Record
from spendlog.storage import BlobStore, JSONFileBlobStore


def create_app(
    data_dir: Optional[Path] = None,
    blob_store: Optional[BlobStore] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    configure_collation()
    settings = settings or Settings.from_env()
    if blob_store is None:
        blob_store = JSONFileBlobStore(Path(data_dir or settings.data_dir))
    controller = Controller.from_blob_store(blob_store, settings)
    app.extensions["spendlog"] = controller

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str, **extra: Any):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc), **extra}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error", field=exc.field)

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("body", "Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("body", "Malformed JSON body")
        return data

    def _view_payload(records: Iterable[Record]) -> Dict[str, Any]:
        summary = controller.summary()
        return {
            "items": [record.to_dict() for record in records],
            "total": f"{summary.total:.2f}",
            "is_empty": summary.is_empty,
            "summary": summary.to_dict(),
            "query": controller.view.to_dict(),
        }

    @app.get("/records")
    def list_records():
        text = request.args.get("filter")
        records = controller.set_filter(text) if text is not None else controller.visible()
        return _success(_view_payload(records))

    @app.post("/records")
    def submit_record():
        payload = _json_body()
        editing = controller.session.is_editing
        record = controller.add_or_edit(payload)
        return _success(record.to_dict(), 200 if editing else 201)

    @app.delete("/records")
    def clear_records():
        controller.clear_all()
        return _success({}, 204)

    @app.post("/records/sort")
    def sort_records():
        payload = _json_body()
        records = controller.sort_by(payload.get("key"))
        return _success(_view_payload(records))

    @app.delete("/records/<record_id>")
    def delete_record(record_id: str):
        controller.delete(record_id)
        return _success({}, 204)

    @app.post("/records/<record_id>/edit")
    def begin_edit(record_id: str):
        fields = controller.begin_edit(record_id)
        return _success({"id": record_id, "fields": fields})

    @app.delete("/records/<record_id>/edit")
    def cancel_edit(record_id: str):
        if controller.session.target == record_id:
            controller.cancel_edit()
        return _success({}, 204)

    @app.get("/session")
    def session_state():
        return _success({"editing": controller.session.target})

    @app.get("/summary")
    def summary():
        payload = controller.summary().to_dict()
        payload["text"] = controller.summary_text()
        return _success(payload)

    return app
