"""
Tests for AI Providers - Rotation, timeouts and the two adapters.

This module tests:
- TokenUsage / AIResponse dataclasses
- Key rotation in AIProvider.generate()
- Per-call timeout
- Gemini and Claude error classification
- Claude's rejection of audio payloads

We mock LLM calls to ensure tests are:
- Fast (no network calls)
- Reliable (no API flakiness)
- Free (no token costs)
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest
from google.genai import errors as genai_errors

from milo.ai.providers.anthropic_provider import AnthropicProvider
from milo.ai.providers.base import (
    AIResponse,
    AllCredentialsFailedError,
    InlineData,
    PromptPayload,
    ProviderAuthError,
    ProviderTimeoutError,
    ProviderTransientError,
    ProviderType,
    ProviderUnsupportedInputError,
    TokenUsage,
    prompt_text,
)
from milo.ai.providers.gemini import GeminiProvider
from milo.ai.providers.rotation import KeyRotator

from fakes import FakeAuthFailure, FakeRateLimit, ScriptedProvider


class TestTokenUsage:
    """Tests for TokenUsage dataclass."""

    def test_auto_calculate_total(self):
        """Total is derived when not provided."""
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50)

        assert usage.total_tokens == 150

    def test_explicit_total_is_kept(self):
        usage = TokenUsage(prompt_tokens=100, completion_tokens=50, total_tokens=200)

        assert usage.total_tokens == 200


class TestAIResponse:
    """Tests for AIResponse dataclass."""

    def test_defaults(self):
        response = AIResponse(content="hi", provider=ProviderType.GEMINI, model="m")

        assert response.attempts == 1
        assert response.key_index == 0
        assert response.usage.total_tokens == 0


class TestPromptPayload:
    """Tests for prompt payload helpers."""

    def test_prompt_text_of_string(self):
        assert prompt_text("hello") == "hello"

    def test_prompt_text_of_payload(self):
        payload = PromptPayload(text="Transcribe", inline_data=InlineData("audio/webm", "aGk="))

        assert prompt_text(payload) == "Transcribe"
        assert payload.inline_data.to_bytes() == b"hi"


# ---------------------------------------------------------------------------
# KEY ROTATION
# ---------------------------------------------------------------------------

class TestKeyRotation:
    """Tests for credential rotation inside AIProvider.generate()."""

    @pytest.mark.asyncio
    async def test_one_bad_key_then_success(self, scripted_provider):
        """A rejected first key rotates to the second, which succeeds."""
        provider = scripted_provider(["hello"], keys=["bad", "good"], bad_keys=["bad"])

        response = await provider.generate("prompt")

        assert response.content == "hello"
        assert response.attempts == 2
        assert response.key_index == 1
        assert [key for _, key in provider.calls] == ["bad", "good"]
        assert provider.rotator.current_index == 1

    @pytest.mark.asyncio
    async def test_all_keys_rejected(self, scripted_provider):
        """With n keys all rejected, exactly n attempts are made, each key once."""
        provider = scripted_provider(keys=["k1", "k2", "k3"], bad_keys=["k1", "k2", "k3"])

        with pytest.raises(AllCredentialsFailedError) as exc_info:
            await provider.generate("prompt")

        assert exc_info.value.attempts == 3
        assert [key for _, key in provider.calls] == ["k1", "k2", "k3"]
        assert isinstance(exc_info.value.__cause__, FakeAuthFailure)

    @pytest.mark.asyncio
    async def test_non_auth_error_does_not_rotate(self, scripted_provider):
        """Quota errors fail immediately and leave the cursor alone."""
        provider = scripted_provider([FakeRateLimit("429 RESOURCE_EXHAUSTED")], keys=["k1", "k2"])

        with pytest.raises(ProviderTransientError):
            await provider.generate("prompt")

        assert len(provider.calls) == 1
        assert provider.rotator.current_index == 0

    @pytest.mark.asyncio
    async def test_single_key_propagates_auth_error(self, scripted_provider):
        provider = scripted_provider(keys=["only"], bad_keys=["only"])

        with pytest.raises(ProviderAuthError) as exc_info:
            await provider.generate("prompt")

        assert not isinstance(exc_info.value, AllCredentialsFailedError)
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_rotation_persists_across_calls(self, scripted_provider):
        """Once rotated, later calls start from the good key."""
        provider = scripted_provider(["one", "two"], keys=["bad", "good"], bad_keys=["bad"])

        await provider.generate("first")
        second = await provider.generate("second")

        assert second.attempts == 1
        assert [key for _, key in provider.calls] == ["bad", "good", "good"]

    @pytest.mark.asyncio
    async def test_shared_rotator_across_purposes(self):
        """A key rejected for one purpose is skipped for the others."""
        rotator = KeyRotator(["bad", "good"], name="gemini")
        router = ScriptedProvider(["a"], rotator=rotator, bad_keys=["bad"])
        command = ScriptedProvider(["b"], rotator=rotator, bad_keys=["bad"])

        await router.generate("x")
        await command.generate("y")

        assert [key for _, key in command.calls] == ["good"]

    @pytest.mark.asyncio
    async def test_generate_content_returns_text(self, scripted_provider):
        provider = scripted_provider(["plain text"])

        assert await provider.generate_content("prompt") == "plain text"


class YieldingProvider(ScriptedProvider):
    async def _call(self, payload, api_key):
        await asyncio.sleep(0)
        return await super()._call(payload, api_key)


class TestConcurrentRotation:
    """Tests for rotation when several requests fail on the same key."""

    @pytest.mark.asyncio
    async def test_concurrent_failures_rotate_once(self):
        """Two requests rejected on the same key both recover and rotate the cursor once."""
        rotator = KeyRotator(["bad", "good"], name="gemini")
        provider = YieldingProvider(["one", "two"], rotator=rotator, bad_keys=["bad"])

        first, second = await asyncio.gather(
            provider.generate("first"),
            provider.generate("second"),
        )

        assert {first.content, second.content} == {"one", "two"}
        assert first.key_index == second.key_index == 1
        assert first.attempts <= len(rotator)
        assert second.attempts <= len(rotator)
        assert rotator.current_index == 1
        assert len(provider.calls) == 4


class SlowProvider(ScriptedProvider):
    async def _call(self, payload, api_key):
        await asyncio.sleep(1)
        return await super()._call(payload, api_key)


class TestTimeout:
    """Tests for the per-call timeout."""

    @pytest.mark.asyncio
    async def test_slow_call_times_out(self):
        provider = SlowProvider(["late"], timeout=0.01)

        with pytest.raises(ProviderTimeoutError):
            await provider.generate("prompt")

    @pytest.mark.asyncio
    async def test_timeout_does_not_rotate(self):
        provider = SlowProvider(["late"], rotator=KeyRotator(["k1", "k2"]), timeout=0.01)

        with pytest.raises(ProviderTimeoutError):
            await provider.generate("prompt")

        assert provider.rotator.current_index == 0


# ---------------------------------------------------------------------------
# GEMINI
# ---------------------------------------------------------------------------

def _gemini_error(code: int, status: str, message: str = "error") -> genai_errors.APIError:
    return genai_errors.APIError(
        code,
        {"error": {"code": code, "message": message, "status": status}},
    )


class TestGeminiProvider:
    """Tests for Gemini error classification and content building."""

    @pytest.fixture
    def provider(self):
        return GeminiProvider(rotator=KeyRotator(["k1"]), model="gemini-2.5-flash")

    def test_unauthenticated_is_auth(self, provider):
        error = provider._classify_error(_gemini_error(401, "UNAUTHENTICATED"))

        assert isinstance(error, ProviderAuthError)

    def test_invalid_key_message_is_auth(self, provider):
        error = provider._classify_error(
            _gemini_error(400, "INVALID_ARGUMENT", "API key not valid. API_KEY_INVALID")
        )

        assert isinstance(error, ProviderAuthError)

    def test_quota_is_transient(self, provider):
        error = provider._classify_error(_gemini_error(429, "RESOURCE_EXHAUSTED"))

        assert isinstance(error, ProviderTransientError)

    def test_network_error_is_transient(self, provider):
        error = provider._classify_error(ConnectionError("connection reset"))

        assert isinstance(error, ProviderTransientError)

    def test_text_contents(self, provider):
        assert provider._build_contents("hello") == "hello"

    def test_audio_contents(self, provider):
        payload = PromptPayload(text="Transcribe", inline_data=InlineData("audio/webm", "aGk="))

        contents = provider._build_contents(payload)

        assert len(contents) == 2
        assert contents[1] == "Transcribe"
        assert contents[0].inline_data.mime_type == "audio/webm"
        assert contents[0].inline_data.data == b"hi"


# ---------------------------------------------------------------------------
# CLAUDE
# ---------------------------------------------------------------------------

def _anthropic_response(status_code: int) -> httpx.Response:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return httpx.Response(status_code, request=request)


class TestAnthropicProvider:
    """Tests for the Claude adapter."""

    @pytest.fixture
    def provider(self):
        return AnthropicProvider(rotator=KeyRotator(["sk-ant"]), model="claude-sonnet-4-5")

    def test_authentication_error_is_auth(self, provider):
        exc = anthropic.AuthenticationError(
            "invalid x-api-key", response=_anthropic_response(401), body=None
        )

        assert isinstance(provider._classify_error(exc), ProviderAuthError)

    def test_rate_limit_is_transient(self, provider):
        exc = anthropic.RateLimitError(
            "rate limited", response=_anthropic_response(429), body=None
        )

        assert isinstance(provider._classify_error(exc), ProviderTransientError)

    @pytest.mark.asyncio
    async def test_audio_payload_is_rejected(self, provider):
        """Audio is refused before any client is created."""
        payload = PromptPayload(text="Transcribe", inline_data=InlineData("audio/webm", "aGk="))

        with pytest.raises(ProviderUnsupportedInputError):
            await provider.generate(payload)

        assert provider._clients == {}

    @pytest.mark.asyncio
    async def test_payload_text_is_sent(self, provider):
        """A text-only PromptPayload is sent as its text; content blocks are joined."""
        client = MagicMock()
        client.messages.create = AsyncMock(return_value=SimpleNamespace(
            content=[SimpleNamespace(text="Hello "), SimpleNamespace(text="there")],
            usage=SimpleNamespace(input_tokens=12, output_tokens=3),
        ))
        provider._clients["sk-ant"] = client

        response = await provider.generate(PromptPayload(text="Say hello"))

        assert response.content == "Hello there"
        assert response.usage.total_tokens == 15
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "Say hello"}]
        assert kwargs["model"] == "claude-sonnet-4-5"
