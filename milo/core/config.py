"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export GEMINI_API_KEYS=key-one,key-two,key-three
        export AI_REQUEST_TIMEOUT=20
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Milo AI Backend"

    # DEBUG: Include error details in 500 responses
    # Set to False in production so provider errors never reach clients
    DEBUG: bool = False

    # PORT: Listen port when started with `python -m milo`
    PORT: int = 3000

    # CORS_ORIGINS: Comma-separated list of allowed origins ("*" = any)
    CORS_ORIGINS: str = "*"

    # ---------------------------------------------------------------------------
    # AI/LLM PROVIDER SETTINGS
    # ---------------------------------------------------------------------------
    # AI_PROVIDER: "gemini" or "claude". Empty = pick from the keys present
    # (Claude when ANTHROPIC_API_KEY is set, Gemini otherwise)
    AI_PROVIDER: str = ""

    # GEMINI_API_KEYS: Comma-separated list of Gemini keys used for rotation
    # - When a key is rejected, the next one is tried
    GEMINI_API_KEYS: str = ""

    # GEMINI_API_KEY: Single Gemini key, used when GEMINI_API_KEYS is empty
    GEMINI_API_KEY: str = ""

    # ANTHROPIC_API_KEY: Anthropic's Claude API (single key)
    ANTHROPIC_API_KEY: str = ""

    # ---------------------------------------------------------------------------
    # AI MODEL CONFIGURATION
    # ---------------------------------------------------------------------------
    # Default models for each provider
    GEMINI_MODEL: str = "gemini-2.5-flash"
    ANTHROPIC_MODEL: str = "claude-sonnet-4-5"

    # Per-purpose overrides (empty = provider default above)
    ROUTER_MODEL: str = ""
    COMMAND_MODEL: str = ""
    TRANSCRIBE_MODEL: str = ""
    CONVERSATION_MODEL: str = ""

    # Maximum tokens in a single completion
    AI_MAX_TOKENS: int = 1000

    # AI Request timeout in seconds (per provider call)
    AI_REQUEST_TIMEOUT: float = 30.0

    # ---------------------------------------------------------------------------
    # INTENT CACHE
    # ---------------------------------------------------------------------------
    # CACHE_ENABLED: Turn the intent/answer cache off entirely
    CACHE_ENABLED: bool = True

    # CACHE_TTL_SECONDS: Lifetime of a cached intent or answer
    CACHE_TTL_SECONDS: int = 300

    # CACHE_MAX_ENTRIES: Upper bound on cached entries (oldest expiry evicted first)
    CACHE_MAX_ENTRIES: int = 1000

    # ---------------------------------------------------------------------------
    # COMMAND EXTRACTION
    # ---------------------------------------------------------------------------
    # COMMAND_STRICT_VALIDATION: Re-check the model's action locally
    # (asset whitelist, numeric amount) instead of trusting it as-is
    COMMAND_STRICT_VALIDATION: bool = True

    # ---------------------------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------------------------
    @property
    def gemini_api_keys(self) -> List[str]:
        """All configured Gemini keys, in rotation order."""
        raw = self.GEMINI_API_KEYS or self.GEMINI_API_KEY
        return [key.strip() for key in raw.split(",") if key.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def model_for(self, purpose: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get the configured model override for a purpose.

        Args:
            purpose: "router", "command", "transcribe" or "conversation"
            default: Returned when no override is set
        """
        override = getattr(self, f"{purpose.upper()}_MODEL", "")
        return override or default


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from milo.core.config import settings
settings = Settings()
