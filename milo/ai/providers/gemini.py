"""
Gemini Provider - Google's GenAI SDK with API key rotation.

Uses the async surface of the SDK (`client.aio`) so a slow model call
never blocks the event loop. One `genai.Client` is created lazily per key
and reused.

Authentication failures (invalid/unauthorized key) rotate to the next
key through the shared KeyRotator; quota, network and server errors do not.
"""

import logging
from typing import Dict

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from milo.ai.providers.base import (
    AIProvider,
    AIResponse,
    Prompt,
    ProviderAuthError,
    ProviderError,
    ProviderTransientError,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("milo.ai.gemini")

# Status names the API uses for rejected credentials
_AUTH_STATUSES = {"UNAUTHENTICATED", "PERMISSION_DENIED"}


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._clients: Dict[str, genai.Client] = {}
        logger.info(
            f"Gemini provider initialized with model: {self.model} "
            f"({len(self.rotator)} API keys)"
        )

    def _client_for(self, api_key: str) -> genai.Client:
        client = self._clients.get(api_key)
        if client is None:
            client = genai.Client(api_key=api_key)
            self._clients[api_key] = client
        return client

    async def _call(self, payload: Prompt, api_key: str) -> AIResponse:
        config = types.GenerateContentConfig(max_output_tokens=self.max_tokens)

        response = await self._client_for(api_key).aio.models.generate_content(
            model=self.model,
            contents=self._build_contents(payload),
            config=config,
        )

        return AIResponse(
            content=response.text or "",
            provider=self.provider_type,
            model=self.model,
            usage=self._extract_usage(response),
        )

    def _build_contents(self, payload: Prompt):
        if isinstance(payload, str):
            return payload
        if payload.inline_data is None:
            return payload.text
        # Audio first, instructions after it
        return [
            types.Part.from_bytes(
                data=payload.inline_data.to_bytes(),
                mime_type=payload.inline_data.mime_type,
            ),
            payload.text,
        ]

    def _classify_error(self, exc: Exception) -> ProviderError:
        message = str(exc)
        if isinstance(exc, genai_errors.APIError):
            if (
                exc.code in (401, 403)
                or exc.status in _AUTH_STATUSES
                or "API_KEY_INVALID" in message
            ):
                return ProviderAuthError(message, self.provider_type)
            return ProviderTransientError(message, self.provider_type)

        if "API_KEY_INVALID" in message:
            return ProviderAuthError(message, self.provider_type)
        return ProviderTransientError(message, self.provider_type)

    def _extract_usage(self, response) -> TokenUsage:
        # The SDK returns None when no usage is reported
        metadata = response.usage_metadata
        if not metadata:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=metadata.prompt_token_count or 0,
            completion_tokens=metadata.candidates_token_count or 0,
        )
