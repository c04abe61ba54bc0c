"""Exact matcher: deterministic lookups by product code or measurement pattern."""

import logging
import time
from typing import Optional

from catalog.ports import CatalogReadPort
from .config import MatchingConfig
from .ports import ParsedRequest, MatchCandidate, MatchStrategy
from .timing import elapsed_ms

logger = logging.getLogger(__name__)

CODE_MATCH_CONFIDENCE = 1.0
PATTERN_MATCH_CONFIDENCE = 0.95


class ExactMatcher:
    """Resolve a request only when a single catalog row is certain.

    1. Extracted product code -> first product whose code or search text
       contains it (confidence 1.0).
    2. Measurement pattern -> the product if exactly one row contains the
       pattern (confidence 0.95). Several rows are left to the lexical
       matcher, which owns multi-candidate disambiguation.
    """

    def __init__(self, catalog: CatalogReadPort, config: MatchingConfig):
        self.catalog = catalog
        self.config = config

    def try_exact(self, parsed: ParsedRequest) -> Optional[MatchCandidate]:
        """Return a confident candidate or None.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pattern = parsed.measurement_pattern
        if not parsed.extracted_code and not pattern:
            return None

        start_time = time.perf_counter()

        if parsed.extracted_code:
            hits = self.catalog.search_by_code(parsed.extracted_code, limit=1)
            if hits:
                logger.info(f"Exact match on product code {parsed.extracted_code}")
                return MatchCandidate(
                    product=hits[0],
                    confidence=CODE_MATCH_CONFIDENCE,
                    strategy=MatchStrategy.EXACT,
                    reasoning=f"Ürün kodu tam eşleşme: {parsed.extracted_code}",
                    elapsed_ms=elapsed_ms(start_time),
                )

        if pattern:
            hits = self.catalog.search_by_pattern(pattern, limit=self.config.search_limit)
            logger.debug(f"Exact match: pattern {pattern} found {len(hits)} products")
            if len(hits) == 1:
                return MatchCandidate(
                    product=hits[0],
                    confidence=PATTERN_MATCH_CONFIDENCE,
                    strategy=MatchStrategy.EXACT,
                    reasoning=f"Ölçü pattern eşleşme: {pattern}",
                    elapsed_ms=elapsed_ms(start_time),
                )

        return None
