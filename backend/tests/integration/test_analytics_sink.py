"""Integration tests for match analytics sinks"""

import logging
from uuid import uuid4

from matching.analytics import BackgroundAnalyticsSink, SqlAnalyticsSink
from models.match_analytics import MatchAnalytics


class FailingSink(SqlAnalyticsSink):
    def record(self, *args, **kwargs):
        raise RuntimeError("match_analytics table missing")


class TestSqlAnalyticsSink:
    """Test row persistence"""

    def test_writes_row(self, session_factory):
        product_id = uuid4()

        SqlAnalyticsSink(session_factory).record(
            raw_text="63-50 servis te",
            product_id=product_id,
            strategy="lexical",
            confidence=1.0,
            elapsed_ms=42,
            method="fulltext-search",
        )

        with session_factory() as session:
            row = session.query(MatchAnalytics).one()
            assert row.customer_request == "63-50 servis te"
            assert row.matched_product_id == product_id
            assert row.strategy == "lexical"
            assert row.method == "fulltext-search"
            assert row.execution_time_ms == 42
            assert row.tokens_used is None

    def test_no_match_row(self, session_factory):
        SqlAnalyticsSink(session_factory).record("büyük boy te", None, "none", 0.0, 7)

        with session_factory() as session:
            assert session.query(MatchAnalytics).one().matched_product_id is None


class TestBackgroundAnalyticsSink:
    """Test fire-and-forget wrapper"""

    def test_write_completes_on_shutdown(self, session_factory):
        sink = BackgroundAnalyticsSink(SqlAnalyticsSink(session_factory), max_workers=1)

        sink.record("75-40", uuid4(), "exact", 0.95, 3, None, "exact-match")
        sink.shutdown(wait=True)

        with session_factory() as session:
            assert session.query(MatchAnalytics).count() == 1

    def test_failure_logged_not_raised(self, session_factory, caplog):
        sink = BackgroundAnalyticsSink(FailingSink(session_factory), max_workers=1)

        with caplog.at_level(logging.ERROR, logger="matching.analytics"):
            sink.record("75-40", None, "none", 0.0, 3)
            sink.shutdown(wait=True)

        assert "match_analytics table missing" in caplog.text

    def test_record_after_shutdown_dropped(self, session_factory, caplog):
        sink = BackgroundAnalyticsSink(SqlAnalyticsSink(session_factory), max_workers=1)
        sink.shutdown(wait=True)

        with caplog.at_level(logging.ERROR, logger="matching.analytics"):
            sink.record("75-40", None, "none", 0.0, 3)

        assert "Analytics record dropped" in caplog.text
