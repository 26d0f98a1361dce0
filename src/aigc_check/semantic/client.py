"""Model-chain client with a prompt cache in front of it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from circuitbreaker import CircuitBreakerError

from aigc_check.config import Settings
from aigc_check.semantic._llm_call import guarded_llm_call
from aigc_check.semantic.cache import ResponseCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completion:
    content: str
    model: str
    from_cache: bool = False


class SemanticClient:
    """Sends one system/user exchange down the model chain.

    The first model that answers wins; an open circuit or a failure
    moves on to the next model. When every model fails the last error
    propagates so the caller can degrade the layer.
    """

    def __init__(
        self,
        settings: Settings,
        cache: ResponseCache | None = None,
    ) -> None:
        self._settings = settings
        self.cache = cache

    @property
    def models(self) -> list[str]:
        return list(self._settings.litellm_model_chain)

    def _api_key_for(self, model: str) -> str | None:
        # Other providers read their own key from the environment.
        if model.startswith("gemini/"):
            return self._settings.gemini_api_key or None
        return None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_mode: bool = True,
    ) -> Completion:
        cache_key = f"{system_prompt}\x00{user_prompt}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("event=semantic_cache_hit")
                return Completion(content=cached, model="", from_cache=True)

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        last_error: Exception | None = None
        for model in self._settings.litellm_model_chain:
            try:
                result = await guarded_llm_call(
                    model,
                    messages,
                    self._settings.llm_timeout_seconds,
                    temperature=self._settings.llm_temperature,
                    max_tokens=self._settings.llm_max_tokens,
                    json_mode=json_mode,
                    api_key=self._api_key_for(model),
                )
            except CircuitBreakerError as exc:
                logger.warning("event=circuit_open model=%s", model)
                last_error = exc
                continue
            except Exception as exc:
                logger.warning(
                    "event=llm_call_failed model=%s",
                    model,
                    exc_info=True,
                )
                last_error = exc
                continue

            if self.cache is not None:
                self.cache.set(cache_key, result.content)
            return Completion(content=result.content, model=result.model)

        raise last_error or RuntimeError("litellm_model_chain is empty")
