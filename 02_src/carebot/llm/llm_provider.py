"""LLM Provider implementation using Anthropic Claude API."""

import os
from typing import Protocol

import anthropic

from ..config import DEFAULT_LLM_MODEL


class ILLMProvider(Protocol):
    """Abstraction for LLM access used by ai_generated states."""

    async def complete(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int = 512,
    ) -> str:
        """Generate completion."""
        ...


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model or os.getenv("LLM_MODEL") or DEFAULT_LLM_MODEL
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 512,
    ) -> str:
        """Generate completion using Claude API."""
        kwargs = {}
        if system:
            kwargs["system"] = system

        try:
            response = await self._client.messages.create(
                model=self._model,
                messages=messages,
                max_tokens=max_tokens,
                **kwargs,
            )
        except anthropic.AnthropicError as e:
            raise RuntimeError(f"LLM API error: {e}") from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        if not text.strip():
            raise RuntimeError("LLM API error: empty completion")
        return text.strip()
