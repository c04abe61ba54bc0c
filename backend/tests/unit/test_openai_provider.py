"""Unit tests for the OpenAI oracle provider

Tests cover:
- JSON-mode request parameters (model, temperature, timeout)
- Usage and cost metadata
- Mapping of SDK errors onto the oracle error hierarchy
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from domain.ai.ports import (
    LLMMessage,
    OracleTimeoutError,
    OracleRateLimitError,
    OracleAuthError,
    OracleServiceError,
)
from infrastructure.ai.openai_provider import OpenAIOracleProvider

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
MESSAGES = [LLMMessage(role="system", content="JSON"), LLMMessage(role="user", content="63-50 servis te")]


def completion(content, prompt_tokens=420, completion_tokens=35):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def provider(client):
    return OpenAIOracleProvider(api_key="sk-test", model="gpt-4o-mini", temperature=0.3, client=client)


class TestCompleteJson:
    """Test successful completions"""

    def test_request_parameters(self, provider, client):
        client.chat.completions.create.return_value = completion('{"product_id": "x"}')

        provider.complete_json(MESSAGES, timeout_seconds=8.0)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.3
        assert kwargs["timeout"] == 8.0
        assert kwargs["messages"][1] == {"role": "user", "content": "63-50 servis te"}

    def test_usage_and_cost(self, provider, client):
        client.chat.completions.create.return_value = completion('{"product_id": "x"}')

        result = provider.complete_json(MESSAGES, timeout_seconds=8.0)

        assert result.raw_output == '{"product_id": "x"}'
        assert result.provider == "openai"
        assert result.tokens_in == 420
        assert result.tokens_out == 35
        assert result.total_tokens == 455
        assert result.cost_micros == 84

    def test_unknown_model_cost_is_a_warning(self, client):
        provider = OpenAIOracleProvider(api_key="sk-test", model="gpt-future", client=client)
        client.chat.completions.create.return_value = completion("{}")

        result = provider.complete_json(MESSAGES, timeout_seconds=8.0)

        assert result.cost_micros == 0
        assert len(result.warnings) == 1

    def test_missing_api_key(self):
        with pytest.raises(ValueError):
            OpenAIOracleProvider(api_key="")


class TestErrorMapping:
    """Test SDK exceptions become oracle errors"""

    @pytest.mark.parametrize("sdk_error,expected", [
        (openai.APITimeoutError(request=REQUEST), OracleTimeoutError),
        (
            openai.RateLimitError("slow down", response=httpx.Response(429, request=REQUEST), body=None),
            OracleRateLimitError,
        ),
        (
            openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQUEST), body=None),
            OracleAuthError,
        ),
        (openai.APIConnectionError(request=REQUEST), OracleServiceError),
        (
            openai.InternalServerError("boom", response=httpx.Response(500, request=REQUEST), body=None),
            OracleServiceError,
        ),
    ])
    def test_mapping(self, provider, client, sdk_error, expected):
        client.chat.completions.create.side_effect = sdk_error

        with pytest.raises(expected) as exc_info:
            provider.complete_json(MESSAGES, timeout_seconds=8.0)
        assert exc_info.value.__cause__ is sdk_error
