"""
Anthropic Provider - Claude client.

Claude is used instead of Gemini when ANTHROPIC_API_KEY is configured.
It is a single-key provider: its KeyRotator holds one key, so an
authentication failure is simply propagated.

Claude's Messages API takes text (and images/documents) but not audio,
so a payload with inline audio is rejected up front instead of being
silently reduced to its text part.

API Documentation: https://docs.anthropic.com/en/api
"""

import logging
from typing import Dict

import anthropic
from anthropic import AsyncAnthropic

from milo.ai.providers.base import (
    AIProvider,
    AIResponse,
    Prompt,
    PromptPayload,
    ProviderAuthError,
    ProviderError,
    ProviderTransientError,
    ProviderType,
    ProviderUnsupportedInputError,
    TokenUsage,
    prompt_text,
)

logger = logging.getLogger("milo.ai.anthropic")


class AnthropicProvider(AIProvider):
    """
    Anthropic Claude provider implementation.

    Usage:
        provider = AnthropicProvider(rotator=KeyRotator([key]), model="claude-sonnet-4-5")
        text = await provider.generate_content("Classify this message...")
    """

    provider_type = ProviderType.CLAUDE

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._clients: Dict[str, AsyncAnthropic] = {}
        logger.info(f"Anthropic provider initialized with model: {self.model}")

    def _client_for(self, api_key: str) -> AsyncAnthropic:
        client = self._clients.get(api_key)
        if client is None:
            client = AsyncAnthropic(api_key=api_key)
            self._clients[api_key] = client
        return client

    async def _call(self, payload: Prompt, api_key: str) -> AIResponse:
        if isinstance(payload, PromptPayload) and payload.inline_data is not None:
            raise ProviderUnsupportedInputError(
                f"Claude does not accept inline {payload.inline_data.mime_type} data",
                self.provider_type,
            )

        text = prompt_text(payload)
        response = await self._client_for(api_key).messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": text}],
        )

        # Claude returns a list of content blocks
        content = ""
        if response.content:
            for block in response.content:
                if hasattr(block, "text"):
                    content += block.text

        usage = TokenUsage(
            prompt_tokens=response.usage.input_tokens if response.usage else 0,
            completion_tokens=response.usage.output_tokens if response.usage else 0,
        )

        return AIResponse(
            content=content,
            provider=self.provider_type,
            model=self.model,
            usage=usage,
        )

    def _classify_error(self, exc: Exception) -> ProviderError:
        if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
            return ProviderAuthError(str(exc), self.provider_type)
        return ProviderTransientError(str(exc), self.provider_type)
