"""
AI Providers Module - Unified clients for the supported LLM providers.

This module provides one interface over two providers:
- Google Gemini (multi-key, rotates on rejected keys)
- Anthropic Claude (single key)

Each provider has the same interface, making them interchangeable:
    text = await provider.generate_content(prompt)
"""

from milo.ai.providers.base import (
    AIProvider,
    AIResponse,
    AllCredentialsFailedError,
    InlineData,
    Prompt,
    PromptPayload,
    ProviderAuthError,
    ProviderConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    ProviderTransientError,
    ProviderType,
    ProviderUnsupportedInputError,
    TokenUsage,
)
from milo.ai.providers.rotation import KeyRotator
from milo.ai.providers.factory import (
    ProviderConfig,
    ProviderSet,
    build_providers,
    get_providers,
)

__all__ = [
    "AIProvider",
    "AIResponse",
    "AllCredentialsFailedError",
    "InlineData",
    "KeyRotator",
    "Prompt",
    "PromptPayload",
    "ProviderAuthError",
    "ProviderConfig",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderSet",
    "ProviderTimeoutError",
    "ProviderTransientError",
    "ProviderType",
    "ProviderUnsupportedInputError",
    "TokenUsage",
    "build_providers",
    "get_providers",
]
