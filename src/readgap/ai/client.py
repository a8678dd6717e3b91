"""
Unified AI Client with Provider Fallback

Attempts providers in order: OpenAI → Anthropic → None (triggers rule-based)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class AIClient:
    """Unified AI client that tries multiple providers in order."""

    def __init__(
        self,
        *,
        openai_api_key: str | None = None,
        anthropic_api_key: str | None = None,
        openai_model: str = "gpt-4o",
        anthropic_model: str = "claude-3-5-haiku-latest",
        timeout: float = 15.0,
        max_retries: int = 2,
    ):
        """Initialize AI client with available API keys.

        Args:
            openai_api_key: OpenAI API key (priority 1)
            anthropic_api_key: Anthropic API key (priority 2)
            openai_model: Chat model used with OpenAI
            anthropic_model: Model used with Anthropic
            timeout: Per-request timeout in seconds
            max_retries: Retries per provider before moving on
        """
        self.openai_api_key = openai_api_key
        self.anthropic_api_key = anthropic_api_key
        self.openai_model = openai_model
        self.anthropic_model = anthropic_model
        self.timeout = timeout
        self.max_retries = max_retries

    @property
    def has_provider(self) -> bool:
        return bool(self.openai_api_key or self.anthropic_api_key)

    def generate_completion(
        self,
        *,
        system: str,
        messages: Sequence[dict[str, str]],
        max_tokens: int = 300,
        temperature: float = 0.1,
    ) -> str | None:
        """Generate completion using available AI provider.

        Tries providers in order:
        1. OpenAI Chat Completions (if key available)
        2. Anthropic Messages API (if key available)
        3. Returns None (triggers rule-based fallback)

        Returns:
            Generated text response, or None if all providers failed
        """
        if self.openai_api_key:
            result = self._try_openai(
                system=system, messages=messages, max_tokens=max_tokens, temperature=temperature
            )
            if result is not None:
                logger.info("AI completion successful via OpenAI")
                return result

        if self.anthropic_api_key:
            result = self._try_anthropic(
                system=system, messages=messages, max_tokens=max_tokens, temperature=temperature
            )
            if result is not None:
                logger.info("AI completion successful via Anthropic (fallback)")
                return result

        logger.warning("All AI providers failed or unavailable, falling back to rule-based")
        return None

    def _try_openai(
        self,
        *,
        system: str,
        messages: Sequence[dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Try OpenAI Chat Completions.

        Returns:
            Generated text or None on error
        """
        try:
            from openai import OpenAI

            client = OpenAI(
                api_key=self.openai_api_key, timeout=self.timeout, max_retries=self.max_retries
            )

            # OpenAI takes the system prompt as the first message
            openai_messages: list[dict[str, Any]] = [{"role": "system", "content": system}]
            openai_messages.extend(messages)

            response = client.chat.completions.create(
                model=self.openai_model,
                messages=openai_messages,  # type: ignore[arg-type]
                max_tokens=max_tokens,
                temperature=temperature,
            )

            if response.choices and response.choices[0].message.content:
                return response.choices[0].message.content

            logger.warning("OpenAI response had no content")
            return None

        except Exception as e:
            logger.warning(f"OpenAI API error: {e}")
            return None

    def _try_anthropic(
        self,
        *,
        system: str,
        messages: Sequence[dict[str, str]],
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Try Anthropic Messages API.

        Returns:
            Generated text or None on error
        """
        try:
            from anthropic import Anthropic

            client = Anthropic(
                api_key=self.anthropic_api_key, timeout=self.timeout, max_retries=self.max_retries
            )

            response = client.messages.create(
                model=self.anthropic_model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=list(messages),  # type: ignore[arg-type]
            )

            if response.content and len(response.content) > 0:
                content_block = response.content[0]
                if hasattr(content_block, "text"):
                    return content_block.text

            logger.warning("Anthropic response had no text content")
            return None

        except Exception as e:
            logger.warning(f"Anthropic API error: {e}")
            return None


def get_ai_client() -> AIClient:
    """Get configured AI client instance.

    Returns:
        AIClient with available API keys from settings
    """
    from readgap.config import settings

    return AIClient(
        openai_api_key=settings.OPENAI_API_KEY or None,
        anthropic_api_key=settings.ANTHROPIC_API_KEY or None,
        openai_model=settings.OPENAI_MODEL,
        anthropic_model=settings.ANTHROPIC_MODEL,
        timeout=settings.AI_REQUEST_TIMEOUT_SECONDS,
        max_retries=settings.AI_MAX_RETRIES,
    )
