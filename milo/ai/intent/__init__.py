"""Intent module - intent labels shared by the router and the handlers."""

from milo.ai.intent.schemas import IntentLabel

__all__ = ["IntentLabel"]
