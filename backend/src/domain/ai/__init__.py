"""AI domain layer - Ports for the generative scoring oracle"""

from .ports import (
    LLMMessage,
    LLMCompletionResult,
    OracleProviderPort,
    OracleError,
    OracleTimeoutError,
    OracleRateLimitError,
    OracleAuthError,
    OracleServiceError,
    OracleResponseError,
)

__all__ = [
    "LLMMessage",
    "LLMCompletionResult",
    "OracleProviderPort",
    "OracleError",
    "OracleTimeoutError",
    "OracleRateLimitError",
    "OracleAuthError",
    "OracleServiceError",
    "OracleResponseError",
]
