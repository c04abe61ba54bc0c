"""
Oracle Provider Port - Abstract interface for generative scoring providers.

Hexagonal Architecture: This is a domain port that infrastructure adapters implement.
The generative fallback matcher depends on this port, not on a concrete SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LLMMessage:
    """
    Message format for LLM conversations.

    Attributes:
        role: Message role ('system', 'user', 'assistant')
        content: Text content
    """
    role: str
    content: str


@dataclass
class LLMCompletionResult:
    """
    Result from a single JSON-mode completion call.

    Contains the raw output plus metadata for cost auditing.

    Attributes:
        raw_output: Raw string response from the model
        provider: Provider name (e.g., 'openai')
        model: Model name (e.g., 'gpt-4o-mini')
        tokens_in: Input tokens used (None if provider doesn't report)
        tokens_out: Output tokens used (None if provider doesn't report)
        latency_ms: Latency in milliseconds
        cost_micros: Cost in micro-USD (1 micro = 1/1,000,000 USD)
        warnings: List of non-critical warnings
    """
    raw_output: str
    provider: str
    model: str
    tokens_in: Optional[int]
    tokens_out: Optional[int]
    latency_ms: int
    cost_micros: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def total_tokens(self) -> int:
        return (self.tokens_in or 0) + (self.tokens_out or 0)


class OracleProviderPort(ABC):
    """
    Abstract interface for the generative scoring oracle.

    Implementations must handle:
    - API authentication
    - Request formatting for the provider (JSON output mode)
    - Timeouts (a single attempt, no retries)
    - Token/cost tracking
    """

    provider_name: str = "unknown"

    @abstractmethod
    def complete_json(
        self,
        messages: list[LLMMessage],
        timeout_seconds: float
    ) -> LLMCompletionResult:
        """
        Run one chat completion that must answer with a JSON object.

        Args:
            messages: Conversation (system + user prompt)
            timeout_seconds: Hard timeout for the call

        Returns:
            LLMCompletionResult with the raw (unparsed) output and metadata

        Raises:
            OracleTimeoutError: Request timed out
            OracleRateLimitError: Rate limit exceeded
            OracleAuthError: Authentication failed
            OracleServiceError: Provider service unavailable
        """
        pass


class OracleError(Exception):
    """Base exception for oracle provider errors."""
    pass


class OracleTimeoutError(OracleError):
    """Oracle request timed out."""
    pass


class OracleRateLimitError(OracleError):
    """Oracle rate limit exceeded."""
    pass


class OracleAuthError(OracleError):
    """Oracle authentication failed (invalid API key)."""
    pass


class OracleServiceError(OracleError):
    """Oracle service unavailable or unexpected provider error."""
    pass


class OracleResponseError(OracleError):
    """Oracle answered, but not with a valid selection."""
    pass
