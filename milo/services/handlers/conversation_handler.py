"""
Conversation Handler - Answers questions and greetings.

The model's text is the message: it is trimmed and wrapped in the
conversational envelope, never parsed as JSON.

    {"type": "conversational", "intent": "question", "message": "..."}

Answers are cached per prompt, so a repeated identical question inside
the cache TTL is answered without a model call.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from milo.ai.intent import IntentLabel
from milo.ai.monitoring import ai_logger
from milo.ai.prompts.conversation_prompts import build_conversation_prompt
from milo.ai.providers.base import AIProvider
from milo.services.handlers.base import HandlerContext, IntentHandler
from milo.services.intent_cache import IntentCache

logger = logging.getLogger("milo.services.handlers.conversation")


def conversational_envelope(intent: IntentLabel, message: str) -> Dict[str, Any]:
    return {
        "type": "conversational",
        "intent": intent.value,
        "message": message,
    }


class ConversationHandler(IntentHandler):
    """
    Handler for the "question" and "greeting" intents.

    The tone of the prompt depends on the intent:
    - greeting: warm, 1-2 sentences, invites a Sui question
    - question: clear and short explanation
    """

    def __init__(self, provider: AIProvider, cache: IntentCache):
        self.provider = provider
        self.cache = cache

    @property
    def handler_name(self) -> str:
        return "conversation"

    @property
    def supported_intents(self) -> Tuple[IntentLabel, ...]:
        return (IntentLabel.QUESTION, IntentLabel.GREETING)

    async def handle(
        self,
        prompt: str,
        intent: IntentLabel,
        context: HandlerContext,
    ) -> Dict[str, Any]:
        self._log_entry(intent, context)
        result = await self.converse(prompt, intent, context.request_id)
        self._log_exit(context)
        return result

    async def converse(
        self,
        prompt: str,
        intent: IntentLabel,
        request_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Generate a conversational reply.

        Args:
            prompt: The user's message, verbatim
            intent: QUESTION or GREETING
            request_id: Tracing identifier

        Returns:
            {"type": "conversational", "intent": ..., "message": ...}
        """
        request_id = request_id or HandlerContext().request_id

        cached = self.cache.get_answer(prompt)
        if cached is not None:
            logger.info(f"[{request_id}] Answer served from cache")
            return conversational_envelope(intent, cached)

        ai_logger.log_request(
            request_id=request_id,
            purpose="conversation",
            prompt=prompt,
            provider=self.provider.provider_type.value,
            model=self.provider.model,
            metadata={"intent": intent.value},
        )
        response = await self.provider.generate(build_conversation_prompt(prompt, intent))
        ai_logger.log_response(request_id, "conversation", response)

        message = response.content.strip()
        if message:
            self.cache.set_answer(prompt, message)
        return conversational_envelope(intent, message)
