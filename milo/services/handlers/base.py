"""
Base Intent Handler - Abstract interface for intent handlers.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each handler implements it.
ResponseService picks the first handler whose `can_handle()` accepts the
classified intent, so adding a handler needs no change to the service.

Example:
    handler = ConversationHandler(provider=providers.conversation, cache=intent_cache)
    if handler.can_handle(IntentLabel.QUESTION):
        result = await handler.handle(prompt, IntentLabel.QUESTION, context)

Reference:
    This follows the same ABC pattern as milo/ai/providers/base.py
"""

import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from milo.ai.intent import IntentLabel

logger = logging.getLogger("milo.services.handlers")


@dataclass
class HandlerContext:
    """
    Per-request context shared with handlers.

    Attributes:
        request_id: Unique identifier for this request (for logging/tracing)
        contacts: The caller's contact list (name/address pairs)
        start_time: Request start time for latency tracking
    """
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    contacts: List[Any] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_ms(self) -> float:
        return (time.time() - self.start_time) * 1000


class IntentHandler(ABC):
    """
    Abstract base class for intent handlers.

    Responsibilities:
    - Declare which intents it serves (supported_intents)
    - Turn a prompt into a response body (handle)

    NOT Responsible For:
    - Classifying intents (IntentRouter's job)
    - HTTP request/response handling (router's job)
    """

    @property
    @abstractmethod
    def handler_name(self) -> str:
        """Short name used in logs."""

    @property
    @abstractmethod
    def supported_intents(self) -> Tuple[IntentLabel, ...]:
        """Intents this handler processes."""

    def can_handle(self, intent: IntentLabel) -> bool:
        return intent in self.supported_intents

    @abstractmethod
    async def handle(
        self,
        prompt: str,
        intent: IntentLabel,
        context: HandlerContext,
    ) -> Dict[str, Any]:
        """
        Process the prompt and return the JSON body for the client.

        Provider errors propagate; the HTTP layer maps them to 500.
        """

    def _log_entry(self, intent: IntentLabel, context: HandlerContext) -> None:
        logger.info(f"[{context.request_id}] {self.handler_name} handling intent={intent.value}")

    def _log_exit(self, context: HandlerContext) -> None:
        logger.info(
            f"[{context.request_id}] {self.handler_name} completed in {context.elapsed_ms:.0f}ms"
        )
