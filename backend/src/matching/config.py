"""Tunable thresholds and caps of the matching pipeline."""

from dataclasses import dataclass

from config import Settings


@dataclass(frozen=True)
class MatchingConfig:
    """Matching levers, built once from Settings and shared read-only.

    Attributes:
        exact_threshold: Exact candidate at or above this is terminal
        lexical_threshold: Lexical top candidate at or above this is terminal
        similarity_gap: Candidates closer than this to the top are near-ties
        search_limit: Row cap for every catalog search
        oracle_candidate_limit: Candidates sent to the oracle
        oracle_sample_size: Catalog sample size when lexical search is empty
        oracle_timeout_seconds: Hard timeout of the oracle call
        text_search_language: Full-text search configuration
    """
    exact_threshold: float = 0.9
    lexical_threshold: float = 0.7
    similarity_gap: float = 0.1
    search_limit: int = 10
    oracle_candidate_limit: int = 10
    oracle_sample_size: int = 100
    oracle_timeout_seconds: float = 8.0
    text_search_language: str = "turkish"

    @classmethod
    def from_settings(cls, settings: Settings) -> "MatchingConfig":
        return cls(
            exact_threshold=settings.MATCH_EXACT_THRESHOLD,
            lexical_threshold=settings.MATCH_LEXICAL_THRESHOLD,
            similarity_gap=settings.MATCH_SIMILARITY_GAP,
            search_limit=settings.MATCH_SEARCH_LIMIT,
            oracle_candidate_limit=settings.MATCH_ORACLE_CANDIDATE_LIMIT,
            oracle_sample_size=settings.MATCH_ORACLE_SAMPLE_SIZE,
            oracle_timeout_seconds=settings.ORACLE_TIMEOUT_SECONDS,
            text_search_language=settings.CATALOG_TEXT_SEARCH_CONFIG,
        )
