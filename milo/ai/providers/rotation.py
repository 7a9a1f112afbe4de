"""
Key Rotator - Shared rotation state for a provider's API keys.

One KeyRotator owns the ordered credential list and a cursor into it.
Every adapter built for the same provider (router, command, transcribe,
conversation) holds a reference to the same rotator, so a key that was
rejected for one purpose is skipped for all of them.

Concurrency:
============
Requests run concurrently on one event loop. Two requests can fail on
the same bad key before either advances the cursor. `advance()` is a
compare-and-advance: it only moves the cursor if it still points at the
key the caller actually used, so the second request does not skip the
next (possibly good) key.
"""

import logging
import threading
from typing import List, Sequence, Tuple

logger = logging.getLogger("milo.ai.rotation")


class KeyRotator:
    """
    Rotation state over an ordered, non-empty list of API keys.

    Invariant: 0 <= current_index < len(keys)

    Usage:
        rotator = KeyRotator(["key-a", "key-b"], name="gemini")
        index, key = rotator.current()
        ...  # key rejected
        rotator.advance(from_index=index)
    """

    def __init__(self, keys: Sequence[str], name: str = "provider"):
        cleaned = [key.strip() for key in keys if key and key.strip()]
        if not cleaned:
            raise ValueError(f"{name}: at least one API key is required")
        self._keys: Tuple[str, ...] = tuple(cleaned)
        self._index = 0
        self._lock = threading.Lock()
        self.name = name

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    @property
    def current_index(self) -> int:
        return self._index

    def current(self) -> Tuple[int, str]:
        """Return (index, key) of the credential to use next."""
        with self._lock:
            return self._index, self._keys[self._index]

    def advance(self, from_index: int) -> bool:
        """
        Move to the next key if the cursor is still at `from_index`.

        Returns:
            True if this call moved the cursor, False if another request
            already rotated past `from_index` or there is only one key.
        """
        if len(self._keys) < 2:
            return False

        with self._lock:
            if self._index != from_index:
                logger.debug(
                    f"{self.name}: key {from_index + 1} already rotated "
                    f"(now {self._index + 1}/{len(self._keys)})"
                )
                return False
            self._index = (self._index + 1) % len(self._keys)
            new_index = self._index

        logger.warning(f"Rotating to {self.name} API key {new_index + 1}/{len(self._keys)}")
        return True
