"""
Match Analytics - Records matching decisions for offline review.

Writes never block the response path and never fail a request: the
background sink hands each record to a worker thread and only logs errors.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import sessionmaker

from models.match_analytics import MatchAnalytics

logger = logging.getLogger(__name__)


class AnalyticsSinkPort(ABC):
    """Port interface for recording matching decisions."""

    @abstractmethod
    def record(
        self,
        raw_text: str,
        product_id: Optional[UUID],
        strategy: str,
        confidence: float,
        elapsed_ms: int,
        tokens_used: Optional[int] = None,
        method: Optional[str] = None
    ) -> None:
        """
        Record one matching decision.

        Args:
            raw_text: Customer request text
            product_id: Top candidate's product (None for no match)
            strategy: Winning strategy (exact, lexical, generative, none)
            confidence: Top candidate's confidence (0.0 for no match)
            elapsed_ms: End-to-end matching time
            tokens_used: Oracle tokens spent, if the oracle was called
            method: Terminal state (exact-match, fulltext-search, ...)
        """
        pass


class NullAnalyticsSink(AnalyticsSinkPort):
    """Sink used when analytics is disabled."""

    def record(self, raw_text, product_id, strategy, confidence, elapsed_ms, tokens_used=None, method=None) -> None:
        return None


class SqlAnalyticsSink(AnalyticsSinkPort):
    """Persist decisions to the match_analytics table.

    Each record uses its own short-lived session.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def record(
        self,
        raw_text: str,
        product_id: Optional[UUID],
        strategy: str,
        confidence: float,
        elapsed_ms: int,
        tokens_used: Optional[int] = None,
        method: Optional[str] = None
    ) -> None:
        with self.session_factory() as session:
            session.add(MatchAnalytics(
                customer_request=raw_text,
                matched_product_id=product_id,
                strategy=strategy,
                method=method,
                confidence=confidence,
                execution_time_ms=elapsed_ms,
                tokens_used=tokens_used,
            ))
            session.commit()


class BackgroundAnalyticsSink(AnalyticsSinkPort):
    """Fire-and-forget wrapper: submits writes to a thread pool.

    Failures of the wrapped sink are logged and dropped.
    """

    def __init__(self, sink: AnalyticsSinkPort, max_workers: int = 2):
        self.sink = sink
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="match-analytics")

    def record(
        self,
        raw_text: str,
        product_id: Optional[UUID],
        strategy: str,
        confidence: float,
        elapsed_ms: int,
        tokens_used: Optional[int] = None,
        method: Optional[str] = None
    ) -> None:
        try:
            future = self.executor.submit(
                self.sink.record,
                raw_text,
                product_id,
                strategy,
                confidence,
                elapsed_ms,
                tokens_used,
                method,
            )
        except RuntimeError as e:
            # Executor already shut down
            logger.error(f"Analytics record dropped: {str(e)}")
            return
        future.add_done_callback(_log_failure)

    def shutdown(self, wait: bool = True) -> None:
        """Flush pending writes and stop the worker threads."""
        self.executor.shutdown(wait=wait)


def _log_failure(future: Future) -> None:
    error = future.exception()
    if error is not None:
        logger.error(
            f"Analytics logging error: {str(error)}",
            exc_info=(type(error), error, error.__traceback__),
        )
