"""
Intent Cache - Remembers classified intents and generated answers.

Identical prompts within the TTL window skip the model call entirely:
- intents are stored under sha256(prompt)
- conversational answers under sha256(prompt) + ":answer"

Design follows pending_event_service.py:
- In-memory storage with TTL
- Lazy expiry on read, plus cleanup on write
- Singleton instance

The cache is purely a latency/cost optimization. Losing every entry never
changes a response, so misses are silent and nothing here raises.

Thread-safety note: get/set are synchronous and run on the event loop,
so each operation is atomic. Concurrent writers to the same key race and
the last write wins, which is fine because the values are equivalent.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from milo.core.config import settings
from milo.ai.intent import IntentLabel

logger = logging.getLogger("milo.services.intent_cache")

ANSWER_SUFFIX = ":answer"


@dataclass
class CacheEntry:
    """A cached value and the moment it stops being valid."""
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class IntentCache:
    """
    TTL cache for intents and answers, keyed by prompt digest.

    Usage:
        intent_cache.set_intent(prompt, IntentLabel.COMMAND)
        intent_cache.get_intent(prompt)  # IntentLabel.COMMAND (for 300s)

    Args:
        ttl_seconds: Default lifetime of an entry
        max_entries: Capacity; the entry closest to expiry is evicted first
        enabled: When False every get misses and every set is ignored
        clock: Time source in seconds (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        max_entries: int = 1000,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.enabled = enabled
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    # -------------------------------------------------------------------------
    # KEYS
    # -------------------------------------------------------------------------

    @staticmethod
    def make_key(prompt: str, namespace: str = "") -> str:
        """Stable digest of the verbatim prompt, plus an optional namespace suffix."""
        digest = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
        return f"{digest}{namespace}"

    # -------------------------------------------------------------------------
    # CORE OPERATIONS
    # -------------------------------------------------------------------------

    def get(self, key: str) -> Optional[Any]:
        """Return the value for `key`, or None if absent or expired."""
        if not self.enabled:
            return None

        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """Store `value` for `ttl_seconds` (default: the cache TTL)."""
        if not self.enabled:
            return

        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return

        now = self._clock()
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self.cleanup_expired()
            if len(self._entries) >= self.max_entries:
                self._evict_oldest()

        self._entries[key] = CacheEntry(value=value, expires_at=now + ttl)

    def cleanup_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Removed {len(expired)} expired cache entries")
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_oldest(self) -> None:
        key = min(self._entries, key=lambda k: self._entries[k].expires_at)
        del self._entries[key]
        logger.debug(f"Evicted cache entry {key[:8]}")

    # -------------------------------------------------------------------------
    # INTENTS AND ANSWERS
    # -------------------------------------------------------------------------

    def get_intent(self, prompt: str) -> Optional[IntentLabel]:
        value = self.get(self.make_key(prompt))
        return IntentLabel.parse(value) if value is not None else None

    def set_intent(self, prompt: str, intent: IntentLabel, ttl_seconds: Optional[int] = None) -> None:
        self.set(self.make_key(prompt), intent.value, ttl_seconds)

    def get_answer(self, prompt: str) -> Optional[str]:
        return self.get(self.make_key(prompt, ANSWER_SUFFIX))

    def set_answer(self, prompt: str, message: str, ttl_seconds: Optional[int] = None) -> None:
        self.set(self.make_key(prompt, ANSWER_SUFFIX), message, ttl_seconds)


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
intent_cache = IntentCache(
    ttl_seconds=settings.CACHE_TTL_SECONDS,
    max_entries=settings.CACHE_MAX_ENTRIES,
    enabled=settings.CACHE_ENABLED,
)
