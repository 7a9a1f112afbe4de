"""
Base AI Provider - Abstract interface for all LLM providers.

This module defines the contract that all AI providers must follow.
It ensures consistent behavior regardless of which provider is used.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each provider implements it.
Handlers depend only on `generate_content()` and never on a provider's
native response shape, so Gemini and Claude are interchangeable.

Key Rotation:
=============
Rotation lives here, once, for every provider. A concrete provider only
implements `_call()` (one request with one credential) and
`_classify_error()` (map an SDK exception to our error taxonomy):

    auth failure      -> advance the shared KeyRotator, retry with next key
    anything else     -> fail immediately, cursor untouched
    all keys rejected -> AllCredentialsFailedError (last cause chained)

Example:
    provider = GeminiProvider(rotator=KeyRotator(["k1", "k2"]), model="gemini-2.5-flash")
    text = await provider.generate_content("Hello, world!")
"""

import asyncio
import base64
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from milo.ai.providers.rotation import KeyRotator

logger = logging.getLogger("milo.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    GEMINI = "gemini"
    CLAUDE = "claude"


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------

class ProviderError(Exception):
    """Base class for every failure of a provider call."""

    def __init__(self, message: str, provider: Optional[ProviderType] = None):
        super().__init__(message)
        self.provider = provider


class ProviderAuthError(ProviderError):
    """The credential was rejected (invalid, unauthorized). Triggers rotation."""


class AllCredentialsFailedError(ProviderAuthError):
    """Every configured credential was tried and rejected within one call."""

    def __init__(self, message: str, provider: Optional[ProviderType] = None, attempts: int = 0):
        super().__init__(message, provider)
        self.attempts = attempts


class ProviderTransientError(ProviderError):
    """Rate limit, network failure, provider outage or malformed request. Never rotates."""


class ProviderTimeoutError(ProviderTransientError):
    """The provider did not answer within AI_REQUEST_TIMEOUT."""


class ProviderUnsupportedInputError(ProviderError):
    """The provider cannot accept this payload (e.g. audio for Claude)."""


class ProviderConfigurationError(ProviderError):
    """No usable provider could be built from the environment."""


# ---------------------------------------------------------------------------
# PAYLOADS AND RESPONSES
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InlineData:
    """Binary data (audio) sent inline with a prompt, base64-encoded."""
    mime_type: str
    data: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class PromptPayload:
    """
    A prompt with optional inline binary data.

    Plain text prompts can be passed as `str`; this wrapper is only needed
    when audio travels with the instructions (transcription).
    """
    text: str
    inline_data: Optional[InlineData] = None


Prompt = Union[str, PromptPayload]


def prompt_text(payload: Prompt) -> str:
    """Return the text part of any prompt payload."""
    return payload if isinstance(payload, str) else payload.text


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.

    Used for cost tracking in the response logs.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized response from any AI provider.

    Attributes:
        content: The generated text response
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the successful attempt took
        key_index: Index of the credential that succeeded
        attempts: Number of attempts made (1 + rotations)
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    key_index: int = 0
    attempts: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# PROVIDER INTERFACE
# ---------------------------------------------------------------------------

class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Responsibilities:
    - Turn a prompt payload into text (`generate_content`)
    - Rotate credentials on authentication failures
    - Bound every call by a timeout
    - Report token usage and latency

    Subclasses implement:
        async def _call(self, payload, api_key) -> AIResponse
        def _classify_error(self, exc) -> ProviderError
    """

    provider_type: ProviderType

    def __init__(
        self,
        rotator: KeyRotator,
        model: str,
        timeout: Optional[float] = None,
        max_tokens: int = 1000,
    ):
        self.rotator = rotator
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens

    async def generate_content(self, payload: Prompt) -> str:
        """
        Generate text for a prompt payload.

        This is the only method handlers call.

        Raises:
            ProviderAuthError: Single key rejected
            AllCredentialsFailedError: Every key rejected
            ProviderTransientError: Any non-authentication failure
        """
        response = await self.generate(payload)
        return response.content

    async def generate(self, payload: Prompt) -> AIResponse:
        """
        Generate a response, rotating credentials on authentication failure.

        At most len(keys) attempts are made; no credential is tried twice
        within one call (absent concurrent rotations by other requests).
        """
        total_keys = len(self.rotator)
        last_cause: Optional[Exception] = None

        for attempt in range(1, total_keys + 1):
            index, api_key = self.rotator.current()
            start_time = time.time()
            try:
                response = await self._call_with_timeout(payload, api_key)
            except ProviderError:
                raise
            except asyncio.TimeoutError as e:
                raise ProviderTimeoutError(
                    f"{self.provider_type.value} did not respond within {self.timeout}s",
                    self.provider_type,
                ) from e
            except Exception as e:
                error = self._classify_error(e)
                logger.error(
                    f"{self.provider_type.value} key {index + 1}/{total_keys} failed: {e}"
                )
                if not isinstance(error, ProviderAuthError):
                    raise error from e
                if total_keys == 1:
                    raise error from e
                last_cause = e
                self.rotator.advance(from_index=index)
                continue

            response.latency_ms = self._measure_latency(start_time)
            response.key_index = index
            response.attempts = attempt
            return response

        raise AllCredentialsFailedError(
            f"All {total_keys} {self.provider_type.value} API keys failed",
            self.provider_type,
            attempts=total_keys,
        ) from last_cause

    async def _call_with_timeout(self, payload: Prompt, api_key: str) -> AIResponse:
        if self.timeout:
            return await asyncio.wait_for(self._call(payload, api_key), timeout=self.timeout)
        return await self._call(payload, api_key)

    @abstractmethod
    async def _call(self, payload: Prompt, api_key: str) -> AIResponse:
        """
        Perform one request with one credential.

        Should let SDK exceptions propagate; `generate()` classifies them.
        """

    @abstractmethod
    def _classify_error(self, exc: Exception) -> ProviderError:
        """Map an SDK exception to ProviderAuthError or ProviderTransientError."""

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000
