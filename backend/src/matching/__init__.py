"""Matching module for the quotation catalog.

This module matches free-text customer requests to catalog products with a
tiered strategy:
- Exact match (product code, unique measurement pattern)
- Lexical match (pattern + keyword scoring, full-text search)
- Generative fallback (LLM picks among a bounded candidate set)
"""

from .ports import (
    MatcherPort,
    ParsedRequest,
    MatchCandidate,
    MatchDecision,
    MatchStrategy,
    MatchMethod,
    MatcherError,
    InvalidMatchRequestError,
)
from .config import MatchingConfig
from .normalizer import normalize
from .exact_matcher import ExactMatcher
from .lexical_matcher import LexicalMatcher, find_similar
from .generative_matcher import GenerativeMatcher
from .orchestrator import MatchOrchestrator
from .analytics import AnalyticsSinkPort, SqlAnalyticsSink, BackgroundAnalyticsSink, NullAnalyticsSink

__all__ = [
    "MatcherPort",
    "ParsedRequest",
    "MatchCandidate",
    "MatchDecision",
    "MatchStrategy",
    "MatchMethod",
    "MatcherError",
    "InvalidMatchRequestError",
    "MatchingConfig",
    "normalize",
    "ExactMatcher",
    "LexicalMatcher",
    "find_similar",
    "GenerativeMatcher",
    "MatchOrchestrator",
    "AnalyticsSinkPort",
    "SqlAnalyticsSink",
    "BackgroundAnalyticsSink",
    "NullAnalyticsSink",
]
