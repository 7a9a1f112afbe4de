"""
Intent Schemas - The fixed set of intent labels.

Every user message is one of:
- command:  perform a wallet action (send, swap, check balance)
- question: asks how/what about the blockchain
- greeting: hello, thanks, small talk

No other value is valid. A model reply outside this set is an error,
never a new kind of intent.
"""

from enum import Enum
from typing import Optional


class IntentLabel(str, Enum):
    """Classified purpose of a user message."""
    COMMAND = "command"
    QUESTION = "question"
    GREETING = "greeting"

    @classmethod
    def parse(cls, value: object) -> Optional["IntentLabel"]:
        """Return the label for `value`, or None if it is not a known label."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
