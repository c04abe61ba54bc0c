"""Generative fallback matcher: lets an LLM pick one candidate.

Best effort only. Transport errors, timeouts, malformed JSON and ids outside
the offered candidate set all yield None; nothing here raises to the caller.
"""

import logging
import time
from typing import List, Optional

from pydantic import ValidationError

from catalog.ports import CatalogProduct
from domain.ai.ports import (
    OracleProviderPort,
    LLMMessage,
    LLMCompletionResult,
    OracleError,
    OracleResponseError,
)
from infrastructure.ai.cost_calculator import format_cost_usd
from observability.metrics import (
    oracle_calls_total,
    oracle_latency_ms,
    oracle_tokens_total,
    oracle_cost_micros_total,
)
from .config import MatchingConfig
from .ports import MatchCandidate, MatchStrategy
from .prompts import build_product_match_prompt
from .schemas import OracleSelection
from .timing import elapsed_ms

logger = logging.getLogger(__name__)


def parse_selection(raw_output: str) -> OracleSelection:
    """Validate the oracle's raw JSON answer.

    Raises:
        OracleResponseError: If the output is not JSON or has the wrong shape
    """
    try:
        return OracleSelection.model_validate_json(raw_output)
    except ValidationError as e:
        raise OracleResponseError(f"Malformed oracle response: {e.error_count()} validation errors") from e


class GenerativeMatcher:
    """Ask the scoring oracle to choose among a bounded candidate set.

    The oracle's confidence is reported as-is; only its shape and the chosen
    id are verified.
    """

    def __init__(self, oracle: OracleProviderPort, config: MatchingConfig):
        self.oracle = oracle
        self.config = config

    def ai_match(self, raw_text: str, candidates: List[CatalogProduct]) -> Optional[MatchCandidate]:
        """Pick one of ``candidates`` for ``raw_text`` or return None."""
        if not candidates:
            return None

        start_time = time.perf_counter()
        pool = candidates[:self.config.oracle_candidate_limit]
        system_prompt, user_prompt = build_product_match_prompt(raw_text, pool)
        messages = [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ]

        provider = self.oracle.provider_name
        try:
            result = self.oracle.complete_json(messages, timeout_seconds=self.config.oracle_timeout_seconds)
        except OracleError as e:
            oracle_calls_total.labels(provider=provider, status="error").inc()
            logger.warning(
                f"Generative match failed: {str(e)}",
                extra={"provider": provider, "error_type": type(e).__name__},
            )
            return None
        except Exception as e:
            # Ports other than the OpenAI adapter may leak transport errors
            oracle_calls_total.labels(provider=provider, status="error").inc()
            logger.warning(
                f"Generative match failed with unexpected error: {str(e)}",
                extra={"provider": provider, "error_type": type(e).__name__},
            )
            return None

        _record_usage(result)

        try:
            selection = parse_selection(result.raw_output)
        except OracleResponseError as e:
            oracle_calls_total.labels(provider=provider, status="rejected").inc()
            logger.warning(f"Generative match rejected: {str(e)}", extra={"provider": provider})
            return None

        product = next((p for p in pool if p.id == selection.product_id), None)
        if product is None:
            oracle_calls_total.labels(provider=provider, status="rejected").inc()
            logger.warning(f"Oracle picked unknown product id {selection.product_id}", extra={"provider": provider})
            return None

        oracle_calls_total.labels(provider=provider, status="success").inc()

        tokens_used = result.total_tokens
        cost = format_cost_usd(result.cost_micros)
        logger.info(
            f"Generative match: {product.product_code} ({selection.confidence})",
            extra={"provider": provider, "model": result.model, "tokens": tokens_used},
        )

        return MatchCandidate(
            product=product,
            confidence=selection.confidence,
            strategy=MatchStrategy.GENERATIVE,
            reasoning=f"AI: {selection.reasoning} ({tokens_used} tokens, {cost})",
            elapsed_ms=elapsed_ms(start_time),
            tokens_used=tokens_used,
            features={"model": result.model, "cost_micros": result.cost_micros},
        )


def _record_usage(result: LLMCompletionResult) -> None:
    oracle_latency_ms.labels(provider=result.provider).observe(result.latency_ms)
    oracle_tokens_total.labels(provider=result.provider, direction="input").inc(result.tokens_in or 0)
    oracle_tokens_total.labels(provider=result.provider, direction="output").inc(result.tokens_out or 0)
    oracle_cost_micros_total.labels(provider=result.provider).inc(result.cost_micros)
