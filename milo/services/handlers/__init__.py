"""
Intent Handlers Package - Strategy pattern for intent processing.

Each handler serves a fixed set of intent labels:
- CommandHandler: "command" -> structured wallet action
- ConversationHandler: "question" / "greeting" -> conversational reply

Usage:
    from milo.services.handlers import IntentHandler, HandlerContext

    class MyHandler(IntentHandler):
        @property
        def handler_name(self) -> str:
            return "my_handler"

        @property
        def supported_intents(self):
            return (IntentLabel.QUESTION,)

        async def handle(self, prompt, intent, context):
            ...

ResponseService acts as the context that delegates to the first handler
accepting the classified intent.
"""

from milo.services.handlers.base import (
    HandlerContext,
    IntentHandler,
)
from milo.services.handlers.command_handler import CommandHandler
from milo.services.handlers.conversation_handler import (
    ConversationHandler,
    conversational_envelope,
)

__all__ = [
    "CommandHandler",
    "ConversationHandler",
    "HandlerContext",
    "IntentHandler",
    "conversational_envelope",
]
