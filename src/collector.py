"""Flask ingestion endpoint that accepts one JSON log record per POST."""

import collections
import logging
import threading

from flask import Flask, jsonify, request

logger = logging.getLogger(__name__)

PAYLOAD_KEYS = ("application_id", "log_level", "timestamp", "log_message")


class RecordStore:
    """Thread-safe in-memory store of received payloads, bounded by a deque.

    Once *max_size* payloads are held the oldest are dropped.
    """

    def __init__(self, max_size: int = 10000):
        self._records = collections.deque(maxlen=max_size)
        self._lock = threading.Lock()
        self._total_count = 0

    def add(self, payload: dict):
        with self._lock:
            self._records.append(payload)
            self._total_count += 1

    @property
    def total_count(self) -> int:
        """Number of payloads ever received, including dropped ones."""
        return self._total_count

    def get_all(self, application_id: str | None = None) -> list[dict]:
        """Return received payloads in arrival order, optionally filtered."""
        with self._lock:
            records = list(self._records)
        if application_id is not None:
            records = [r for r in records if r["application_id"] == application_id]
        return records

    def __len__(self):
        with self._lock:
            return len(self._records)


def validate_payload(payload) -> str | None:
    """Return the reason a payload is rejected, or None if it is acceptable."""
    if not isinstance(payload, dict):
        return "payload must be a JSON object"
    for key in PAYLOAD_KEYS:
        if key not in payload:
            return f"missing field: {key}"
        if not isinstance(payload[key], str):
            return f"field {key} must be a string"
    return None


def create_app(path: str = "/upload", store: RecordStore | None = None) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    if store is None:
        store = RecordStore()
    app.config["store"] = store

    @app.route(path, methods=["POST"])
    def upload():
        payload = request.get_json(force=True, silent=True)
        if payload is None:
            return "invalid JSON body", 400, {"Content-Type": "text/plain"}

        reason = validate_payload(payload)
        if reason is not None:
            logger.warning("Rejected record: %s", reason)
            return reason, 400, {"Content-Type": "text/plain"}

        store.add({key: payload[key] for key in PAYLOAD_KEYS})
        logger.debug("Accepted record from %s", payload["application_id"])
        return jsonify({"status": "ok"}), 200

    @app.route("/health")
    def health():
        return jsonify({
            "status": "healthy",
            "received": store.total_count,
            "stored": len(store),
        })

    @app.route("/records")
    def records():
        return jsonify(store.get_all(request.args.get("application_id")))

    return app
