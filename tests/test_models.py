"""Tests for the record and result models."""

import json

import pytest

from src.models import FileResult, LogRecord, RunSummary
from src.uploader import serialize_record


class TestLogRecord:
    def test_payload_keys(self):
        record = LogRecord("seata", "INFO", "2024-01-01T10:00:00Z", "server started")
        assert record.to_payload() == {
            "application_id": "seata",
            "log_level": "INFO",
            "timestamp": "2024-01-01T10:00:00Z",
            "log_message": "server started",
        }

    def test_payload_roundtrip_through_json(self):
        record = LogRecord("app", "ERROR", "ts", 'quote " and ünïcode: ok')
        decoded = json.loads(serialize_record(record))
        assert LogRecord.from_payload(decoded) == record

    def test_frozen(self):
        record = LogRecord("app", "INFO", "ts", "msg")
        with pytest.raises(AttributeError):
            record.level = "ERROR"


class TestRunSummary:
    def test_empty(self):
        summary = RunSummary()
        assert summary.files == 0
        assert summary.uploaded == 0
        assert summary.file_errors == 0

    def test_aggregates_results(self):
        summary = RunSummary()
        summary.add(FileResult("a.log", uploaded=3, failed=1, malformed=2))
        summary.add(FileResult("b.log", uploaded=1))
        summary.add(FileResult("c.log", error="permission denied"))
        assert summary.files == 3
        assert summary.uploaded == 4
        assert summary.failed == 1
        assert summary.malformed == 2
        assert summary.file_errors == 1
