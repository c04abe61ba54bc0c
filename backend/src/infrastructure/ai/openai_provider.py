"""
OpenAI Provider - Concrete implementation of OracleProviderPort for OpenAI.

Runs JSON-mode chat completions (gpt-4o-mini by default) for the generative
fallback matcher. One attempt per call: the SDK's own retries are disabled.
"""

import time
from typing import Optional

from openai import OpenAI, APIError, RateLimitError, APIConnectionError, APITimeoutError, AuthenticationError

from domain.ai.ports import (
    OracleProviderPort,
    LLMMessage,
    LLMCompletionResult,
    OracleTimeoutError,
    OracleRateLimitError,
    OracleAuthError,
    OracleServiceError,
)
from .cost_calculator import calculate_cost_micros


class OpenAIOracleProvider(OracleProviderPort):
    """
    OpenAI implementation of OracleProviderPort.

    Uses OpenAI Python SDK (v1.x+) with structured output (JSON mode).
    Handles authentication, request formatting, error mapping and cost tracking.
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        client: Optional[OpenAI] = None
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Chat model used for every call
            temperature: Sampling temperature
            client: Preconfigured client (tests)

        Raises:
            ValueError: If API key is not provided
        """
        if not api_key:
            raise ValueError("OpenAI API key not provided. Set OPENAI_API_KEY environment variable.")

        self.client = client or OpenAI(api_key=api_key, max_retries=0)
        self.model = model
        self.temperature = temperature

    def complete_json(
        self,
        messages: list[LLMMessage],
        timeout_seconds: float
    ) -> LLMCompletionResult:
        """
        Run one JSON-mode completion.

        Args:
            messages: Conversation (system + user prompt)
            timeout_seconds: Hard timeout for the call

        Returns:
            LLMCompletionResult with raw output and usage metadata

        Raises:
            OracleTimeoutError, OracleRateLimitError, OracleAuthError, OracleServiceError
        """
        start_time = time.perf_counter()
        warnings = []

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
                response_format={"type": "json_object"},
                temperature=self.temperature,
                timeout=timeout_seconds
            )

            latency_ms = int((time.perf_counter() - start_time) * 1000)

            raw_output = response.choices[0].message.content or ""

            usage = response.usage
            prompt_tokens = usage.prompt_tokens if usage else None
            completion_tokens = usage.completion_tokens if usage else None

            cost_micros = 0
            if prompt_tokens and completion_tokens:
                try:
                    cost_micros = calculate_cost_micros(
                        model=self.model,
                        prompt_tokens=prompt_tokens,
                        completion_tokens=completion_tokens
                    )
                except ValueError as e:
                    warnings.append(f"Failed to calculate cost: {str(e)}")

            return LLMCompletionResult(
                raw_output=raw_output,
                provider=self.provider_name,
                model=self.model,
                tokens_in=prompt_tokens,
                tokens_out=completion_tokens,
                latency_ms=latency_ms,
                cost_micros=cost_micros,
                warnings=warnings
            )

        except APITimeoutError as e:
            raise OracleTimeoutError(f"OpenAI API timeout: {str(e)}") from e

        except RateLimitError as e:
            raise OracleRateLimitError(f"OpenAI rate limit exceeded: {str(e)}") from e

        except AuthenticationError as e:
            raise OracleAuthError(f"OpenAI authentication failed: {str(e)}") from e

        except (APIConnectionError, APIError) as e:
            raise OracleServiceError(f"OpenAI service error: {str(e)}") from e

        except Exception as e:
            raise OracleServiceError(f"Unexpected error calling OpenAI: {str(e)}") from e
