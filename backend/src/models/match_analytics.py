"""
MatchAnalytics model - Append-only log of product matching decisions.

One row per call to the matching pipeline, used for offline review of which
strategy resolved a request, with what confidence and how fast.
"""

import uuid

from sqlalchemy import Column, Text, Integer, Float, Uuid, DateTime, Index, func

from .base import Base


class MatchAnalytics(Base):
    """
    Match Analytics - Immutable record of a matching decision.

    Used for:
    - Strategy distribution (how often exact/lexical/generative resolve)
    - Latency monitoring
    - Oracle token usage review
    """
    __tablename__ = "match_analytics"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_request = Column(Text, nullable=False)
    matched_product_id = Column(Uuid(as_uuid=True), nullable=True)  # No FK: analytics outlive products
    strategy = Column(Text, nullable=False)  # exact | lexical | generative | none
    method = Column(Text, nullable=True)  # exact-match, fulltext-search, ...
    confidence = Column(Float, nullable=False, default=0.0)
    execution_time_ms = Column(Integer, nullable=False, default=0)
    tokens_used = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_match_analytics_created", "created_at"),
        Index("ix_match_analytics_strategy", "strategy"),
    )

    def __repr__(self):
        return (
            f"<MatchAnalytics(id={self.id}, strategy={self.strategy}, "
            f"product={self.matched_product_id}, confidence={self.confidence})>"
        )
