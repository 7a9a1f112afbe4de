"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Scripted providers (no network, no SDK, no token costs)
- A fake clock and a cache driven by it
- Test client (FastAPI TestClient) with service dependencies overridden
"""

from typing import Generator, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from milo.ai.providers.rotation import KeyRotator
from milo.deps import get_provider_name, get_response_service, get_transcription_service
from milo.main import app
from milo.services.intent_cache import IntentCache

from fakes import FakeClock, Reply, ScriptedProvider


# ---------------------------------------------------------------------------
# PROVIDER FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_provider():
    """Factory: scripted_provider(replies, keys=..., bad_keys=...)."""
    def _make(
        replies: Optional[Iterable[Reply]] = None,
        keys: Iterable[str] = ("test-key",),
        bad_keys: Iterable[str] = (),
        timeout: Optional[float] = None,
    ) -> ScriptedProvider:
        return ScriptedProvider(
            replies=replies,
            rotator=KeyRotator(list(keys), name="gemini"),
            bad_keys=bad_keys,
            timeout=timeout,
        )
    return _make


# ---------------------------------------------------------------------------
# CLOCK AND CACHE
# ---------------------------------------------------------------------------

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> IntentCache:
    """A fresh 300s TTL cache driven by the fake clock."""
    return IntentCache(ttl_seconds=300, max_entries=100, clock=clock)


# ---------------------------------------------------------------------------
# API FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def response_service() -> MagicMock:
    """ResponseService stand-in; tests set respond/route return values."""
    service = MagicMock()
    service.respond = AsyncMock(return_value={"action": "query_balance", "reply": "ok"})
    service.route = AsyncMock(return_value={"intent": "command"})
    return service


@pytest.fixture
def transcription_service() -> MagicMock:
    service = MagicMock()
    service.transcribe = AsyncMock(return_value="send 5 SUI to Alex")
    return service


@pytest.fixture
def client(response_service, transcription_service) -> Generator[TestClient, None, None]:
    """
    Create a test client with the AI services overridden.

    No provider is ever built, so no API keys are needed.
    """
    app.dependency_overrides[get_response_service] = lambda: response_service
    app.dependency_overrides[get_transcription_service] = lambda: transcription_service
    app.dependency_overrides[get_provider_name] = lambda: "gemini"

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
