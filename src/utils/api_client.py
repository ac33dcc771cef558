"""Singleton chat-completion wrapper for the OpenAI-compatible Mistral endpoint."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """Raised when the completion endpoint gives no usable reply."""


class LLMClient:
    """Singleton chat-completion wrapper.

    * ``chat()`` → plain text of the first choice
    * Retries up to ``LLM_MAX_ATTEMPTS`` with exponential back-off
    * Any SDK failure (network, timeout, rate limit) surfaces as ``CompletionError``
    """

    _instance: Optional["LLMClient"] = None

    def __new__(cls) -> "LLMClient":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialised = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialised:
            return
        from config import settings

        self._settings = settings
        self._client: Any = None
        self._initialised = True

    # ── lazy OpenAI client ────────────────────────────────
    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                from openai import OpenAI
                self._client = OpenAI(
                    api_key=self._settings.MISTRAL_API_KEY or None,
                    base_url=self._settings.LLM_BASE_URL,
                    timeout=self._settings.LLM_TIMEOUT,
                    max_retries=0,
                )
            except Exception as exc:
                logger.error("Failed to create completion client: %s", exc)
                raise
        return self._client

    # ── public API ────────────────────────────────────────
    def chat(
        self,
        messages: List[Dict[str, str]],
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
    ) -> str:
        """Send a chat completion request and return the assistant message text."""
        kwargs: Dict[str, Any] = {
            "model": self._settings.LLM_MODEL,
            "messages": messages,
            "temperature": temperature if temperature is not None else self._settings.LLM_TEMPERATURE,
            "max_tokens": max_tokens or self._settings.LLM_MAX_TOKENS,
            "top_p": top_p if top_p is not None else self._settings.LLM_TOP_P,
        }

        attempts = max(1, self._settings.LLM_MAX_ATTEMPTS)
        last_exc: Optional[Exception] = None
        for attempt in range(1, attempts + 1):
            try:
                response = self.client.chat.completions.create(**kwargs)
                usage = response.usage
                if usage:
                    logger.debug(
                        "Completion usage: prompt=%s completion=%s",
                        usage.prompt_tokens,
                        usage.completion_tokens,
                    )
                return response.choices[0].message.content or ""
            except Exception as exc:
                last_exc = exc
                if attempt == attempts:
                    logger.warning("Completion attempt %d/%d failed (%s).", attempt, attempts, exc)
                    break
                wait = 2 ** attempt
                logger.warning("Completion attempt %d/%d failed (%s). Retrying in %ds…", attempt, attempts, exc, wait)
                time.sleep(wait)

        raise CompletionError(f"Completion failed after {attempts} attempt(s): {last_exc}")


# Convenience module-level singleton
llm_client = LLMClient()
