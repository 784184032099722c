"""HTTP uploader: one JSON POST per log record, no retry."""

import json
import logging

import requests

from src.models import LogRecord

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class SerializationError(Exception):
    """Raised when a record cannot be encoded as JSON."""


class UploadError(Exception):
    """Raised when the collector rejects a record or cannot be reached.

    ``status_code`` and ``body`` are set for non-200 responses; ``cause``
    holds the transport exception otherwise.
    """

    def __init__(self, message: str, status_code: int | None = None,
                 body: str = "", cause: Exception | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.cause = cause


def serialize_record(record: LogRecord) -> bytes:
    """Encode a record as compact UTF-8 JSON in wire-key order."""
    try:
        return json.dumps(
            record.to_payload(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal log data: {e}") from e


class Uploader:
    """Posts records to a single collector URL over its own HTTP session."""

    def __init__(self, upload_url: str, session: requests.Session | None = None):
        self._url = upload_url
        self._session = session or requests.Session()

    def upload(self, record: LogRecord):
        """POST one record and block until the response is read.

        Raises:
            SerializationError: if the record cannot be encoded.
            UploadError: on transport failure or any status other than 200.
        """
        body = serialize_record(record)
        try:
            resp = self._session.post(self._url, data=body, headers=JSON_HEADERS)
        except requests.RequestException as e:
            raise UploadError(f"failed to upload log: {e}", cause=e) from e

        text = resp.content.decode("utf-8", errors="replace")
        if resp.status_code != 200:
            raise UploadError(
                f"failed to upload log: {text}",
                status_code=resp.status_code,
                body=text,
            )
        logger.debug("Collector accepted record (%d bytes)", len(body))

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
