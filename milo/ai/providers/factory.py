"""
Provider Factory - Builds the per-purpose providers from configuration.

The application uses four "purposes", each with its own model:
- router:        intent classification
- command:       structured action extraction
- transcribe:    audio transcription + terminology correction
- conversation:  answers to questions and greetings

All four share one KeyRotator, so rotation state is per provider, not per
purpose.

Provider selection:
===================
1. AI_PROVIDER, if set ("gemini" or "claude")
2. Claude when ANTHROPIC_API_KEY is set
3. Gemini when GEMINI_API_KEYS / GEMINI_API_KEY is set
4. Otherwise ProviderConfigurationError
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from milo.core.config import Settings, settings as default_settings
from milo.ai.providers.base import (
    AIProvider,
    ProviderConfigurationError,
    ProviderType,
)
from milo.ai.providers.rotation import KeyRotator

logger = logging.getLogger("milo.ai.providers")

PURPOSES = ("router", "command", "transcribe", "conversation")


@dataclass(frozen=True)
class ProviderConfig:
    """
    Immutable provider configuration, built once at startup.

    Attributes:
        provider_type: Which provider backs every purpose
        api_keys: Ordered credentials (rotation order)
        models: purpose -> model identifier
        timeout: Per-call timeout in seconds
        max_tokens: Completion limit per call
    """
    provider_type: ProviderType
    api_keys: Tuple[str, ...]
    models: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    max_tokens: int = 1000

    def __post_init__(self):
        if not self.api_keys:
            raise ProviderConfigurationError(
                f"No API keys configured for {self.provider_type.value}",
                self.provider_type,
            )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ProviderConfig":
        config = config or default_settings
        provider_type = cls._select_provider(config)

        if provider_type == ProviderType.CLAUDE:
            keys = [config.ANTHROPIC_API_KEY.strip()] if config.ANTHROPIC_API_KEY.strip() else []
            default_model = config.ANTHROPIC_MODEL
        else:
            keys = config.gemini_api_keys
            default_model = config.GEMINI_MODEL

        return cls(
            provider_type=provider_type,
            api_keys=tuple(keys),
            models={purpose: config.model_for(purpose, default_model) for purpose in PURPOSES},
            timeout=config.AI_REQUEST_TIMEOUT or None,
            max_tokens=config.AI_MAX_TOKENS,
        )

    @staticmethod
    def _select_provider(config: Settings) -> ProviderType:
        explicit = config.AI_PROVIDER.strip().lower()
        if explicit:
            try:
                return ProviderType(explicit)
            except ValueError:
                raise ProviderConfigurationError(
                    f"Unknown AI_PROVIDER '{config.AI_PROVIDER}' (expected 'gemini' or 'claude')"
                )

        if config.ANTHROPIC_API_KEY.strip():
            return ProviderType.CLAUDE
        if config.gemini_api_keys:
            return ProviderType.GEMINI

        raise ProviderConfigurationError(
            "Either GEMINI_API_KEYS or ANTHROPIC_API_KEY environment variable must be set."
        )


@dataclass
class ProviderSet:
    """The four purpose-specific providers plus their shared rotation state."""
    provider_type: ProviderType
    rotator: KeyRotator
    router: AIProvider
    command: AIProvider
    transcribe: AIProvider
    conversation: AIProvider


def build_providers(config: ProviderConfig) -> ProviderSet:
    """Create one provider per purpose, all sharing one KeyRotator."""
    # Imported here so a Claude-only deployment does not need to touch Gemini
    if config.provider_type == ProviderType.CLAUDE:
        from milo.ai.providers.anthropic_provider import AnthropicProvider as provider_cls
    else:
        from milo.ai.providers.gemini import GeminiProvider as provider_cls

    rotator = KeyRotator(config.api_keys, name=config.provider_type.value)
    providers = {
        purpose: provider_cls(
            rotator=rotator,
            model=config.models[purpose],
            timeout=config.timeout,
            max_tokens=config.max_tokens,
        )
        for purpose in PURPOSES
    }

    logger.info(
        f"AI Provider initialized: {config.provider_type.value} "
        f"with {len(rotator)} API key(s)"
    )
    return ProviderSet(provider_type=config.provider_type, rotator=rotator, **providers)


# ---------------------------------------------------------------------------
# PROCESS-WIDE INSTANCE
# ---------------------------------------------------------------------------
_providers: Optional[ProviderSet] = None


def get_providers() -> ProviderSet:
    """Build the providers from settings on first use and reuse them afterwards."""
    global _providers
    if _providers is None:
        _providers = build_providers(ProviderConfig.from_settings())
    return _providers
