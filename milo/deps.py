"""
Dependencies module - reusable FastAPI dependencies for route handlers.

Services are built on first use, not at import time, so the app can be
imported (and tested with app.dependency_overrides) without API keys.
"""

from functools import lru_cache
from typing import Optional

from milo.core.config import settings
from milo.ai.providers import ProviderConfigurationError, ProviderSet, get_providers
from milo.ai.router import IntentRouter
from milo.services.handlers import CommandHandler, ConversationHandler
from milo.services.intent_cache import intent_cache
from milo.services.response_service import ResponseService
from milo.services.transcription_service import TranscriptionService


def get_provider_set() -> ProviderSet:
    """The per-purpose providers (raises ProviderConfigurationError without keys)."""
    return get_providers()


@lru_cache(maxsize=1)
def get_response_service() -> ResponseService:
    providers = get_provider_set()
    return ResponseService(
        router=IntentRouter(provider=providers.router, cache=intent_cache),
        handlers=[
            CommandHandler(
                provider=providers.command,
                strict_validation=settings.COMMAND_STRICT_VALIDATION,
            ),
            ConversationHandler(provider=providers.conversation, cache=intent_cache),
        ],
    )


@lru_cache(maxsize=1)
def get_transcription_service() -> TranscriptionService:
    return TranscriptionService(provider=get_provider_set().transcribe)


def get_provider_name() -> Optional[str]:
    """Name of the configured provider, or None when no keys are set."""
    try:
        return get_provider_set().provider_type.value
    except ProviderConfigurationError:
        return None
