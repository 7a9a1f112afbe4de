"""
Intent Router - Decides whether a message is a command, question or greeting.

Routing Logic:
=============

    prompt
      │
      ▼
    Intent Cache ── hit ──────────────────────────────▶ IntentLabel
      │ miss
      ▼
    router model (INTENT_CLASSIFICATION_PROMPT)
      │
      ▼
    normalize() ── not JSON ──▶ NormalizationError
      │
      ▼
    "intent" in {command, question, greeting}?
      │ no ──▶ UnknownIntentError
      ▼ yes
    cache + return IntentLabel

Only valid labels are ever cached.
"""

import logging
import time
import uuid
from typing import Optional

from milo.ai.intent import IntentLabel
from milo.ai.monitoring import ai_logger
from milo.ai.prompts.router_prompts import build_intent_prompt
from milo.ai.providers.base import AIProvider
from milo.ai.schemas.normalizer import normalize
from milo.services.intent_cache import IntentCache

logger = logging.getLogger("milo.ai.router")


class UnknownIntentError(Exception):
    """The router model answered with a label outside the known set."""

    def __init__(self, intent: object):
        super().__init__(f"Unknown intent: {intent}")
        self.intent = intent


class IntentRouter:
    """
    Classifies user messages with the router model.

    Usage:
        router = IntentRouter(provider=providers.router, cache=intent_cache)
        intent = await router.classify("send 5 SUI to Alex")
        # IntentLabel.COMMAND
    """

    def __init__(self, provider: AIProvider, cache: IntentCache):
        self.provider = provider
        self.cache = cache
        logger.info("Intent Router initialized")

    async def classify(self, prompt: str, request_id: Optional[str] = None) -> IntentLabel:
        """
        Classify a prompt.

        Args:
            prompt: The user's message, verbatim
            request_id: Tracing identifier (generated if omitted)

        Returns:
            The IntentLabel

        Raises:
            NormalizationError: The model reply was not JSON
            UnknownIntentError: The reply had no valid "intent"
            ProviderError: The provider call failed
        """
        request_id = request_id or str(uuid.uuid4())
        start_time = time.time()

        cached = self.cache.get_intent(prompt)
        if cached is not None:
            ai_logger.log_intent(request_id, cached.value, cached=True)
            return cached

        ai_logger.log_request(
            request_id=request_id,
            purpose="router",
            prompt=prompt,
            provider=self.provider.provider_type.value,
            model=self.provider.model,
        )
        response = await self.provider.generate(build_intent_prompt(prompt))
        ai_logger.log_response(request_id, "router", response)

        data = normalize(response.content)
        raw_intent = data.get("intent") if isinstance(data, dict) else None
        intent = IntentLabel.parse(raw_intent)
        if intent is None:
            raise UnknownIntentError(raw_intent)

        self.cache.set_intent(prompt, intent)
        ai_logger.log_intent(
            request_id,
            intent.value,
            cached=False,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        return intent
