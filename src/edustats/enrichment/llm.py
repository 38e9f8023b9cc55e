"""Thin wrapper around the OpenAI chat-completions API."""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from ..config import OpenAISettings
from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class MissingCredentials(RuntimeError):
    """No API key is configured for the language model."""


class LanguageModelError(RuntimeError):
    """The language-model call failed upstream."""


class LanguageModel:
    """Sends one prompt, returns the raw text of the first choice."""

    def __init__(self, settings: OpenAISettings, *, client: Optional[Any] = None) -> None:
        self.settings = settings
        self._client = client

    @cached_property
    def client(self) -> Any:
        if self._client is not None:
            return self._client
        if not self.settings.api_key:
            raise MissingCredentials("OPENAI_API_KEY missing on the server")
        return OpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
        )

    def ensure_ready(self) -> None:
        """Raise ``MissingCredentials`` when no client can be built."""

        self.client  # noqa: B018

    def complete(self, prompt: str) -> str:
        try:
            completion = self.client.chat.completions.create(
                model=self.settings.model,
                temperature=self.settings.temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as exc:
            logger.error("Language-model call failed: %s", exc)
            raise LanguageModelError("Language-model call failed") from exc
        content = completion.choices[0].message.content if completion.choices else None
        return content or ""


__all__ = ["LanguageModel", "LanguageModelError", "MissingCredentials"]
