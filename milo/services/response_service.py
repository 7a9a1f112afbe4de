"""
Response Service - Classify a message, then hand it to the right handler.

Architecture:
=============
```
  prompt (+ contacts)
        │
        ▼
  ┌───────────────┐
  │ IntentRouter  │  command / question / greeting
  └───────┬───────┘
          │
    ┌─────┴──────────────┐
    │                    │
    ▼                    ▼
┌──────────────┐  ┌───────────────────┐
│CommandHandler│  │ConversationHandler│
└──────────────┘  └───────────────────┘
```

A router reply that is not JSON degrades to the canned error payloads
(FALLBACK_ACTION on /response, FALLBACK_INTENT on /router). Every other
failure propagates to the HTTP layer.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from milo.ai.intent import IntentLabel
from milo.ai.monitoring import ai_logger
from milo.ai.router import IntentRouter
from milo.ai.schemas.normalizer import (
    FALLBACK_ACTION,
    FALLBACK_INTENT,
    NormalizationError,
    fallback_copy,
)
from milo.services.handlers.base import HandlerContext, IntentHandler

logger = logging.getLogger("milo.services.response")


class ResponseService:
    """
    Orchestrates routing and handling of chat messages.

    Args:
        router: The intent classifier
        handlers: Strategies, consulted in order; the first one whose
            can_handle() accepts the intent wins
    """

    def __init__(self, router: IntentRouter, handlers: List[IntentHandler]):
        self.router = router
        self.handlers = list(handlers)

    def _handler_for(self, intent: IntentLabel) -> IntentHandler:
        for handler in self.handlers:
            if handler.can_handle(intent):
                return handler
        raise LookupError(f"No handler registered for intent '{intent.value}'")

    async def respond(
        self,
        prompt: str,
        contacts: Optional[Sequence[Any]] = None,
    ) -> Dict[str, Any]:
        """
        Produce the /response body for a message.

        Returns:
            A structured action (command) or a conversational envelope
            (question / greeting)
        """
        context = HandlerContext(request_id=str(uuid.uuid4()), contacts=list(contacts or []))

        try:
            intent = await self.router.classify(prompt, context.request_id)
        except NormalizationError as e:
            ai_logger.log_error(context.request_id, str(e), stage="routing")
            return fallback_copy(FALLBACK_ACTION)

        handler = self._handler_for(intent)
        return await handler.handle(prompt, intent, context)

    async def route(self, prompt: str) -> Dict[str, Any]:
        """Produce the /router body: {"intent": label}."""
        request_id = str(uuid.uuid4())

        try:
            intent = await self.router.classify(prompt, request_id)
        except NormalizationError as e:
            ai_logger.log_error(request_id, str(e), stage="routing")
            return fallback_copy(FALLBACK_INTENT)

        logger.info(f"[{request_id}] Routed to intent={intent.value}")
        return {"intent": intent.value}
