"""
AI Router Module - Intent classification.

Classifies every incoming message before it is handed to the command or
conversation handler.
"""

from milo.ai.router.classifier import IntentRouter, UnknownIntentError

__all__ = [
    "IntentRouter",
    "UnknownIntentError",
]
