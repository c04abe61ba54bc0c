"""Matching ports and interfaces for hexagonal architecture.

Data types flowing through the request-matching pipeline:
ParsedRequest -> MatchCandidate(s) -> MatchDecision.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, List, Tuple
from uuid import UUID

from catalog.ports import CatalogProduct


class MatchStrategy(str, Enum):
    """Matcher that produced a candidate (or resolved a decision)."""
    EXACT = "exact"
    LEXICAL = "lexical"
    GENERATIVE = "generative"
    NONE = "none"


class MatchMethod(str, Enum):
    """Terminal state of the orchestrator for one request."""
    EXACT_MATCH = "exact-match"
    FULLTEXT_SEARCH = "fulltext-search"
    FULLTEXT_FALLBACK = "fulltext-fallback"
    AI_FALLBACK = "ai-fallback"
    NO_MATCH = "no-match"


@dataclass(frozen=True)
class ParsedRequest:
    """Structured signals extracted from one raw customer request.

    Attributes:
        raw_text: Original request string
        extracted_code: Code-like substring (e.g. "NTG EF 63-50"), if any
        numbers: Digit runs in order of appearance (duplicates kept)
        keywords: Unique normalized tokens in order of first appearance
    """
    raw_text: str
    extracted_code: Optional[str] = None
    numbers: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()

    @property
    def measurement_pattern(self) -> Optional[str]:
        """Paired dimension built from the first two numbers ("63-50")."""
        if len(self.numbers) < 2:
            return None
        return f"{self.numbers[0]}-{self.numbers[1]}"


@dataclass(frozen=True)
class MatchCandidate:
    """Single catalog product scored against one request.

    Attributes:
        product: Catalog product snapshot
        confidence: Match confidence (0.0-1.0)
        strategy: Matcher that produced the candidate
        reasoning: Human-readable justification
        elapsed_ms: Time spent by the producing matcher
        tokens_used: Oracle tokens spent (generative candidates only)
        features: Debug features of the score (pattern hit, keyword counts, ...)
    """
    product: CatalogProduct
    confidence: float
    strategy: MatchStrategy
    reasoning: str
    elapsed_ms: int = 0
    tokens_used: Optional[int] = None
    features: Dict[str, Any] = field(default_factory=dict)

    @property
    def product_id(self) -> UUID:
        return self.product.id


@dataclass
class MatchDecision:
    """Result of the matching pipeline for one request.

    Attributes:
        candidates: Ranked candidates (empty, one, or several near-tied)
        multi_match: True if a human has to pick among the candidates
        multi_match_message: Disambiguation prompt for the multi-match case
        strategy: Winning strategy (NONE if nothing matched)
        method: Terminal state reached by the orchestrator
        elapsed_ms: End-to-end time
        parsed: Signals extracted from the request
        message: Short user-facing note (no match, oracle unavailable, ...)
        diagnostics: Stage-by-stage trace for debugging
    """
    candidates: List[MatchCandidate]
    multi_match: bool
    strategy: MatchStrategy
    method: MatchMethod
    elapsed_ms: int
    parsed: ParsedRequest
    multi_match_message: Optional[str] = None
    message: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def top(self) -> Optional[MatchCandidate]:
        return self.candidates[0] if self.candidates else None


class MatcherPort(ABC):
    """Port interface for the caller-facing matching entry point.

    Implementations:
    - MatchOrchestrator: exact -> lexical -> generative tiered pipeline
    """

    @abstractmethod
    def match(self, raw_text: str, context: Optional[dict] = None) -> MatchDecision:
        """Match a free-text customer request to catalog products.

        Args:
            raw_text: Customer request line (e.g. "63-50 servis te")
            context: Optional caller context (company_id, source, ...)

        Returns:
            MatchDecision with ranked candidates

        Raises:
            InvalidMatchRequestError: If the request text is empty
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass

    @abstractmethod
    def match_batch(
        self,
        raw_texts: List[str],
        context: Optional[dict] = None
    ) -> List[MatchDecision]:
        """Match multiple request lines (same order as inputs).

        Raises:
            InvalidMatchRequestError: If any request text is empty
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass


class MatcherError(Exception):
    """Exception raised for matching errors."""
    pass


class InvalidMatchRequestError(MatcherError):
    """Request text is missing or blank."""
    pass
