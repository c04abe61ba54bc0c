"""Unit tests for structured logging and request correlation"""

import json
import logging

from observability.logging_config import JSONFormatter, RequestIDFilter
from observability.request_id import (
    get_request_id,
    set_request_id,
    reset_request_id,
    resolve_request_id,
)


def make_record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("matching.orchestrator", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSON log line layout"""

    def test_core_fields(self):
        record = make_record("Match resolved via exact-match: NTG EF 63-50 (1.0)")
        RequestIDFilter().filter(record)

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["message"] == "Match resolved via exact-match: NTG EF 63-50 (1.0)"
        assert data["request_id"] == "no-request-id"
        assert data["timestamp"].endswith("Z")

    def test_known_extras_included(self):
        record = make_record("resolved", strategy="lexical", candidates=2, secret="x")

        data = json.loads(JSONFormatter().format(record))

        assert data["strategy"] == "lexical"
        assert data["candidates"] == 2
        assert "secret" not in data

    def test_turkish_text_kept_readable(self):
        line = JSONFormatter().format(make_record("Ürün bulunamadı"))
        assert "Ürün bulunamadı" in line


class TestRequestID:
    """Test request ID context handling"""

    def test_set_and_reset(self):
        token = set_request_id("req-123")
        try:
            assert get_request_id() == "req-123"
        finally:
            reset_request_id(token)
        assert get_request_id() == "no-request-id"

    def test_client_id_accepted(self):
        assert resolve_request_id("teklif-ui.4f2a") == "teklif-ui.4f2a"

    def test_malformed_client_id_replaced(self):
        resolved = resolve_request_id("bad id\nInjected: header")
        assert resolved != "bad id\nInjected: header"
        assert len(resolved) == 36

    def test_missing_client_id_generated(self):
        assert len(resolve_request_id(None)) == 36
