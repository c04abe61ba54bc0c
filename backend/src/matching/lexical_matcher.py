"""Lexical matcher: pattern and full-text catalog search with scoring."""

import logging
import time
from typing import Any, Callable, Dict, List

from catalog.ports import CatalogReadPort, CatalogProduct
from .config import MatchingConfig
from .ports import ParsedRequest, MatchCandidate, MatchStrategy
from .scorer import MatchScorer
from .timing import elapsed_ms

logger = logging.getLogger(__name__)


class LexicalMatcher:
    """Search and rank catalog products lexically.

    Tiers, tried in order; the first non-empty result set wins:
    1. Pattern only: measurement pattern and no keywords, flat 0.9
    2. Pattern + keywords: pattern rows ranked by keyword overlap
    3. Keyword full text: conjunctive full-text query over the keywords,
       ranked by number, pattern and keyword overlap

    Results are sorted by confidence DESC; ties keep catalog order.
    """

    def __init__(self, catalog: CatalogReadPort, config: MatchingConfig):
        self.catalog = catalog
        self.config = config

    def search(self, parsed: ParsedRequest) -> List[MatchCandidate]:
        """Return ranked lexical candidates (possibly empty).

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        start_time = time.perf_counter()
        scorer = MatchScorer(parsed)
        pattern = parsed.measurement_pattern
        total_keywords = len(parsed.keywords)

        if pattern and not parsed.keywords:
            hits = self.catalog.search_by_pattern(pattern, limit=self.config.search_limit)
            logger.debug(f"Lexical: pattern-only search for {pattern} found {len(hits)} products")
            if hits:
                return self._rank(
                    hits,
                    scorer.score_pattern_only,
                    lambda features: f"Pattern eşleşme: {pattern}",
                    start_time,
                )

        if pattern and parsed.keywords:
            hits = self.catalog.search_by_pattern(pattern, limit=self.config.search_limit)
            logger.debug(
                f"Lexical: pattern + keywords search for {pattern} {list(parsed.keywords)} "
                f"found {len(hits)} products"
            )
            if hits:
                return self._rank(
                    hits,
                    scorer.score_pattern_keywords,
                    lambda features: (
                        f"Pattern + {features['matched_keywords']}/{total_keywords} kelime eşleşmesi"
                    ),
                    start_time,
                )

        if not parsed.keywords:
            logger.debug("Lexical: no keywords, nothing to search")
            return []

        hits = self.catalog.search_full_text(
            parsed.keywords,
            language=self.config.text_search_language,
            limit=self.config.search_limit,
        )
        logger.debug(f"Lexical: full-text search {list(parsed.keywords)} found {len(hits)} products")
        return self._rank(
            hits,
            scorer.score_full_text,
            lambda features: (
                f"Full-text: {features['matched_keywords']} kelime, "
                f"{features['matched_numbers']}/{features['total_numbers']} sayı eşleşti"
            ),
            start_time,
        )

    def _rank(
        self,
        hits: List[CatalogProduct],
        score: Callable[[CatalogProduct], Dict[str, Any]],
        explain: Callable[[Dict[str, Any]], str],
        start_time: float,
    ) -> List[MatchCandidate]:
        scored = []
        for product in hits:
            result = score(product)
            scored.append((product, result))

        took_ms = elapsed_ms(start_time)
        candidates = [
            MatchCandidate(
                product=product,
                confidence=result["confidence"],
                strategy=MatchStrategy.LEXICAL,
                reasoning=explain(result["features"]),
                elapsed_ms=took_ms,
                features=result["features"],
            )
            for product, result in scored
        ]

        # sorted() is stable: equal scores keep catalog order
        return sorted(candidates, key=lambda c: c.confidence, reverse=True)


def find_similar(candidates: List[MatchCandidate], gap: float = 0.1) -> List[MatchCandidate]:
    """Candidates whose confidence is within ``gap`` of the top candidate.

    Args:
        candidates: Candidates sorted by confidence DESC
        gap: Inclusive confidence distance from the top

    Returns:
        The near-tied prefix of ``candidates`` (empty if no candidates)
    """
    if not candidates:
        return []
    top_confidence = candidates[0].confidence
    return [c for c in candidates if round(top_confidence - c.confidence, 4) <= gap]


def is_multi_match(similar: List[MatchCandidate]) -> bool:
    """Two or more near-tied candidates require human disambiguation."""
    return len(similar) >= 2
