"""Tests for the guarded completion call and the model-chain client."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from circuitbreaker import CircuitBreakerError, CircuitBreakerMonitor
from litellm.exceptions import RateLimitError as LitellmRateLimitError
from tenacity import wait_none

from aigc_check.config import Settings
from aigc_check.semantic._llm_call import _breaker_registry, guarded_llm_call
from aigc_check.semantic.cache import ResponseCache
from aigc_check.semantic.client import SemanticClient
from tests.conftest import mock_llm_response

_ACOMPLETION = "aigc_check.semantic._llm_call._acompletion"
_MESSAGES = [{"role": "user", "content": "hi"}]


@pytest.fixture(autouse=True)
def _reset_breakers() -> None:
    """Reset circuit breakers between tests."""
    _breaker_registry.clear()
    for cb in CircuitBreakerMonitor.get_circuits():
        cb.reset()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def _disable_retry_wait() -> Any:
    """Disable tenacity wait time for fast tests."""
    original_wait = guarded_llm_call.retry.wait  # type: ignore[union-attr]
    guarded_llm_call.retry.wait = wait_none()  # type: ignore[union-attr]
    yield
    guarded_llm_call.retry.wait = original_wait  # type: ignore[union-attr]


def _rate_limit() -> LitellmRateLimitError:
    return LitellmRateLimitError(
        message="Rate limit exceeded",
        model="test",
        llm_provider="gemini",
    )


def _settings(*models: str) -> Settings:
    return Settings(
        gemini_api_key="for-demo-purposes-only",
        litellm_model_chain=list(models) or ["gemini/gemini-pro"],
    )


class TestGuardedLLMCall:
    async def test_returns_content_and_usage(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            return_value=mock_llm_response('{"ok": true}'),
        ) as mock:
            result = await guarded_llm_call(
                "gemini/gemini-pro",
                _MESSAGES,
                10,
                temperature=0.3,
                max_tokens=500,
                api_key="secret",
            )
        assert result.content == '{"ok": true}'
        assert result.model == "gemini/gemini-pro"
        assert result.input_tokens == 100
        assert result.output_tokens == 50
        kwargs = mock.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["api_key"] == "secret"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 500

    async def test_plain_text_mode_omits_response_format(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            return_value=mock_llm_response("one\ntwo"),
        ) as mock:
            await guarded_llm_call(
                "m",
                _MESSAGES,
                10,
                temperature=0.3,
                max_tokens=500,
                json_mode=False,
            )
        kwargs = mock.call_args.kwargs
        assert "response_format" not in kwargs
        assert "api_key" not in kwargs

    async def test_rate_limit_is_retried(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=[_rate_limit(), mock_llm_response("{}")],
        ) as mock:
            result = await guarded_llm_call(
                "m", _MESSAGES, 10, temperature=0.3, max_tokens=500
            )
        assert result.content == "{}"
        assert mock.call_count == 2

    async def test_rate_limit_exhausts_attempts(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=_rate_limit(),
        ) as mock:
            with pytest.raises(LitellmRateLimitError):
                await guarded_llm_call(
                    "m", _MESSAGES, 10, temperature=0.3, max_tokens=500
                )
        assert mock.call_count == 3

    async def test_circuit_opens_after_threshold(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=ConnectionError("API down"),
        ):
            for _ in range(5):
                with pytest.raises(ConnectionError):
                    await guarded_llm_call(
                        "m", _MESSAGES, 10, temperature=0.3, max_tokens=500
                    )
            with pytest.raises(CircuitBreakerError):
                await guarded_llm_call(
                    "m", _MESSAGES, 10, temperature=0.3, max_tokens=500
                )

    async def test_rate_limits_do_not_trip_breaker(self) -> None:
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=_rate_limit(),
        ):
            for _ in range(6):
                with pytest.raises(LitellmRateLimitError):
                    await guarded_llm_call(
                        "m", _MESSAGES, 10, temperature=0.3, max_tokens=500
                    )


class TestSemanticClient:
    async def test_first_model_answers(self) -> None:
        client = SemanticClient(_settings("a", "b"))
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            return_value=mock_llm_response("{}"),
        ) as mock:
            completion = await client.complete("sys", "user")
        assert completion.model == "a"
        assert not completion.from_cache
        assert mock.call_count == 1
        messages = mock.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "sys"}
        assert messages[1] == {"role": "user", "content": "user"}

    async def test_falls_back_to_next_model(self) -> None:
        client = SemanticClient(_settings("a", "b"))
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=[ConnectionError("down"), mock_llm_response("{}")],
        ):
            completion = await client.complete("sys", "user")
        assert completion.model == "b"

    async def test_gemini_key_only_sent_to_gemini_models(self) -> None:
        settings = Settings(
            gemini_api_key="gem-key",
            litellm_model_chain=["gemini/gemini-pro", "openai/gpt-4o-mini"],
        )
        client = SemanticClient(settings)
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=[ConnectionError("down"), mock_llm_response("{}")],
        ) as mock:
            completion = await client.complete("sys", "user")
        assert completion.model == "openai/gpt-4o-mini"
        sent = [
            (c.kwargs["model"], c.kwargs.get("api_key"))
            for c in mock.call_args_list
        ]
        assert sent == [
            ("gemini/gemini-pro", "gem-key"),
            ("openai/gpt-4o-mini", None),
        ]

    async def test_all_models_fail_raises_last_error(self) -> None:
        client = SemanticClient(_settings("a", "b"))
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=[ConnectionError("a down"), ValueError("b bad")],
        ):
            with pytest.raises(ValueError, match="b bad"):
                await client.complete("sys", "user")

    async def test_open_circuit_skips_model(self) -> None:
        client = SemanticClient(_settings("a", "b"))
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=ConnectionError("API down"),
        ):
            for _ in range(5):
                with pytest.raises(ConnectionError):
                    await guarded_llm_call(
                        "a", _MESSAGES, 10, temperature=0.3, max_tokens=500
                    )
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            return_value=mock_llm_response("{}"),
        ) as mock:
            completion = await client.complete("sys", "user")
        assert completion.model == "b"
        assert mock.call_count == 1

    async def test_cache_hit_skips_call(self) -> None:
        cache = ResponseCache()
        client = SemanticClient(_settings("a"), cache)
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            return_value=mock_llm_response('{"x": 1}'),
        ) as mock:
            first = await client.complete("sys", "user")
            second = await client.complete("sys", "user")
        assert mock.call_count == 1
        assert not first.from_cache
        assert second.from_cache
        assert second.content == '{"x": 1}'

    async def test_failures_are_not_cached(self) -> None:
        cache = ResponseCache()
        client = SemanticClient(_settings("a"), cache)
        with patch(
            _ACOMPLETION,
            new_callable=AsyncMock,
            side_effect=ConnectionError("down"),
        ):
            with pytest.raises(ConnectionError):
                await client.complete("sys", "user")
        assert cache.size() == 0
