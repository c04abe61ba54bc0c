"""Match orchestrator: tiered exact -> lexical -> generative pipeline."""

import logging
import time
from typing import List, Optional

from catalog.ports import CatalogReadPort, CatalogProduct
from domain.ai.ports import OracleProviderPort
from observability.metrics import (
    match_decisions_total,
    match_duration_ms,
    match_confidence,
    multi_match_total,
)
from .analytics import AnalyticsSinkPort, NullAnalyticsSink
from .config import MatchingConfig
from .exact_matcher import ExactMatcher
from .generative_matcher import GenerativeMatcher
from .lexical_matcher import LexicalMatcher, find_similar, is_multi_match
from .normalizer import normalize
from .ports import (
    MatcherPort,
    MatchCandidate,
    MatchDecision,
    MatchMethod,
    MatchStrategy,
    ParsedRequest,
    InvalidMatchRequestError,
)
from .timing import elapsed_ms

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "Ürün bulunamadı"
ORACLE_UNAVAILABLE_MESSAGE = "OpenAI not available, using full-text results"
ORACLE_FAILED_MESSAGE = "AI eşleştirme sonuç vermedi, full-text sonuçları gösteriliyor"


def build_multi_match_message(count: int) -> str:
    return f"{count} benzer ürün bulundu. Lütfen uygun olanı seçin:"


class MatchOrchestrator(MatcherPort):
    """Match free-text requests to catalog products, cheapest strategy first.

    Pipeline:
    1. Normalize the request (code, numbers, pattern, keywords)
    2. Exact match: terminal if confidence >= exact_threshold
    3. Lexical search: terminal if top confidence >= lexical_threshold;
       near-tied top candidates are returned as a multi-match
    4. Generative fallback over the lexical candidates (or a catalog sample):
       skipped when no oracle is configured
    5. No match

    Every terminal state is recorded to the analytics sink.
    """

    def __init__(
        self,
        catalog: CatalogReadPort,
        config: MatchingConfig,
        oracle: Optional[OracleProviderPort] = None,
        analytics: Optional[AnalyticsSinkPort] = None
    ):
        """Initialize orchestrator.

        Args:
            catalog: Catalog read port shared by all matchers
            config: Thresholds and caps
            oracle: Generative scoring oracle (None = unavailable)
            analytics: Decision sink (defaults to a no-op sink)
        """
        self.catalog = catalog
        self.config = config
        self.exact = ExactMatcher(catalog, config)
        self.lexical = LexicalMatcher(catalog, config)
        self.generative = GenerativeMatcher(oracle, config) if oracle else None
        self.analytics = analytics or NullAnalyticsSink()

    def match(self, raw_text: str, context: Optional[dict] = None) -> MatchDecision:
        """Match one customer request line.

        Raises:
            InvalidMatchRequestError: If the request text is empty
            CatalogUnavailableError: If the catalog cannot be queried
        """
        if raw_text is None or not raw_text.strip():
            raise InvalidMatchRequestError("Customer request text is required")

        start_time = time.perf_counter()
        parsed = normalize(raw_text)
        diagnostics = [
            f"parsed: code={parsed.extracted_code} pattern={parsed.measurement_pattern} "
            f"keywords={list(parsed.keywords)}"
        ]
        if context:
            diagnostics.append(f"context: {sorted(context)}")

        # Step 1: Exact match
        exact = self.exact.try_exact(parsed)
        if exact is not None:
            diagnostics.append(f"exact: {exact.confidence} in {exact.elapsed_ms}ms")
            if exact.confidence >= self.config.exact_threshold:
                return self._resolve(
                    parsed, [exact], MatchStrategy.EXACT, MatchMethod.EXACT_MATCH,
                    start_time, diagnostics,
                )
        else:
            diagnostics.append("exact: inconclusive")

        # Step 2: Lexical search
        lexical = self.lexical.search(parsed)
        top_confidence = lexical[0].confidence if lexical else 0.0
        diagnostics.append(f"lexical: {len(lexical)} candidates, top={top_confidence}")

        if lexical and top_confidence >= self.config.lexical_threshold:
            similar = find_similar(lexical, self.config.similarity_gap)
            if is_multi_match(similar):
                return self._resolve(
                    parsed, similar, MatchStrategy.LEXICAL, MatchMethod.FULLTEXT_SEARCH,
                    start_time, diagnostics,
                    multi_match=True,
                    multi_match_message=build_multi_match_message(len(similar)),
                )
            return self._resolve(
                parsed, lexical, MatchStrategy.LEXICAL, MatchMethod.FULLTEXT_SEARCH,
                start_time, diagnostics,
            )

        # Step 3: Generative fallback
        if self.generative is None:
            diagnostics.append("generative: oracle not configured")
            return self._lexical_fallback(parsed, lexical, ORACLE_UNAVAILABLE_MESSAGE, start_time, diagnostics)

        pool = self._candidate_pool(lexical)
        generated = self.generative.ai_match(parsed.raw_text, pool)
        if generated is not None:
            diagnostics.append(f"generative: {generated.confidence} in {generated.elapsed_ms}ms")
            return self._resolve(
                parsed, [generated], MatchStrategy.GENERATIVE, MatchMethod.AI_FALLBACK,
                start_time, diagnostics,
            )

        diagnostics.append(f"generative: no usable pick from {len(pool)} candidates")
        return self._lexical_fallback(parsed, lexical, ORACLE_FAILED_MESSAGE, start_time, diagnostics)

    def match_batch(self, raw_texts: List[str], context: Optional[dict] = None) -> List[MatchDecision]:
        """Match multiple request lines, one independent decision per line.

        Raises:
            InvalidMatchRequestError: If any request text is empty
            CatalogUnavailableError: If the catalog cannot be queried
        """
        if any(text is None or not text.strip() for text in raw_texts):
            raise InvalidMatchRequestError("Every request line must be non-empty")
        return [self.match(text, context) for text in raw_texts]

    def _candidate_pool(self, lexical: List[MatchCandidate]) -> List[CatalogProduct]:
        """Lexical candidates, or an unranked catalog sample if there are none."""
        if lexical:
            return [c.product for c in lexical[:self.config.oracle_candidate_limit]]
        logger.info("No lexical candidates, sampling catalog for the oracle")
        return self.catalog.sample(limit=self.config.oracle_sample_size)

    def _lexical_fallback(
        self,
        parsed: ParsedRequest,
        lexical: List[MatchCandidate],
        note: str,
        start_time: float,
        diagnostics: List[str]
    ) -> MatchDecision:
        """Low-confidence lexical results (or no match) after the oracle stage."""
        if not lexical:
            return self._resolve(
                parsed, [], MatchStrategy.NONE, MatchMethod.NO_MATCH,
                start_time, diagnostics, message=f"{NO_MATCH_MESSAGE} ({note})",
            )
        return self._resolve(
            parsed, lexical, MatchStrategy.LEXICAL, MatchMethod.FULLTEXT_FALLBACK,
            start_time, diagnostics, message=note,
        )

    def _resolve(
        self,
        parsed: ParsedRequest,
        candidates: List[MatchCandidate],
        strategy: MatchStrategy,
        method: MatchMethod,
        start_time: float,
        diagnostics: List[str],
        multi_match: bool = False,
        multi_match_message: Optional[str] = None,
        message: Optional[str] = None
    ) -> MatchDecision:
        """Build the terminal decision and record it to analytics."""
        decision = MatchDecision(
            candidates=candidates,
            multi_match=multi_match,
            strategy=strategy,
            method=method,
            elapsed_ms=elapsed_ms(start_time),
            parsed=parsed,
            multi_match_message=multi_match_message,
            message=message,
            diagnostics=diagnostics,
        )

        top = decision.top
        logger.info(
            f"Match resolved via {method.value}: "
            f"{top.product.product_code if top else 'none'} ({top.confidence if top else 0.0})",
            extra={"strategy": strategy.value, "method": method.value, "candidates": len(candidates)},
        )

        match_decisions_total.labels(strategy=strategy.value, method=method.value).inc()
        match_duration_ms.labels(strategy=strategy.value).observe(decision.elapsed_ms)
        if top:
            match_confidence.observe(top.confidence)
        if multi_match:
            multi_match_total.inc()

        try:
            self.analytics.record(
                raw_text=parsed.raw_text,
                product_id=top.product_id if top else None,
                strategy=strategy.value,
                confidence=top.confidence if top else 0.0,
                elapsed_ms=decision.elapsed_ms,
                tokens_used=top.tokens_used if top else None,
                method=method.value,
            )
        except Exception as e:
            logger.error(f"Analytics record failed: {str(e)}", exc_info=True)
        return decision
