"""
AI Logger - Structured logging for AI operations.

This module provides structured logging specifically for AI operations.
It captures:
- Request details (purpose, model, provider, prompt size)
- Response details (tokens, latency, key used)
- Intent classifications (and whether they came from cache)
- Errors and failures

Privacy:
========
Raw user prompts are never logged. Requests carry the prompt length and
a short digest prefix so repeated prompts can still be correlated.

Log Format:
==========
Each log entry is one JSON object with:
- event name
- request ID (for tracing)
- timestamp
"""

import hashlib
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from milo.ai.providers.base import AIResponse

# Configure the AI logger
logger = logging.getLogger("milo.ai")
logger.setLevel(logging.INFO)

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def prompt_fingerprint(prompt: str) -> str:
    """Short, non-reversible identifier for a prompt (first 12 hex chars of SHA-256)."""
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:12]


class AILogger:
    """
    Structured logger for AI operations.

    Usage:
        ai_logger.log_request(
            request_id="abc123",
            purpose="router",
            prompt=user_prompt,
            provider="gemini",
            model="gemini-2.5-flash",
        )
        ai_logger.log_response(request_id="abc123", purpose="router", response=ai_response)
    """

    def __init__(self):
        """Initialize the AI logger."""
        self._logger = logger

    def _timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def log_request(
        self,
        request_id: str,
        purpose: str,
        prompt: str,
        provider: str,
        model: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an AI request.

        Args:
            request_id: Unique request identifier
            purpose: router, command, transcribe or conversation
            prompt: The user's prompt (only its length and fingerprint are logged)
            provider: AI provider name
            model: Model name
            metadata: Additional metadata
        """
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "purpose": purpose,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_fingerprint": prompt_fingerprint(prompt),
            "timestamp": self._timestamp(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"AI Request: {json.dumps(log_data)}")

    def log_response(
        self,
        request_id: str,
        purpose: str,
        response: AIResponse,
    ) -> None:
        """
        Log a successful AI response.

        Args:
            request_id: Request identifier (for correlation)
            purpose: Which purpose the call served
            response: The AIResponse object
        """
        log_data = {
            "event": "ai_response",
            "request_id": request_id,
            "purpose": purpose,
            "provider": response.provider.value,
            "model": response.model,
            "latency_ms": round(response.latency_ms, 2),
            "tokens": {
                "prompt": response.usage.prompt_tokens,
                "completion": response.usage.completion_tokens,
                "total": response.usage.total_tokens,
            },
            "key_index": response.key_index,
            "attempts": response.attempts,
            "response_length": len(response.content),
            "timestamp": self._timestamp(),
        }

        level = logging.INFO if response.attempts == 1 else logging.WARNING
        self._logger.log(level, f"AI Response: {json.dumps(log_data)}")

    def log_intent(
        self,
        request_id: str,
        intent: str,
        cached: bool,
        processing_time_ms: float = 0.0,
    ) -> None:
        """
        Log a classified intent.

        Args:
            request_id: Request identifier
            intent: The intent label
            cached: True when served from the intent cache
            processing_time_ms: Classification time
        """
        log_data = {
            "event": "intent_classified",
            "request_id": request_id,
            "intent": intent,
            "cached": cached,
            "processing_time_ms": round(processing_time_ms, 2),
            "timestamp": self._timestamp(),
        }

        self._logger.info(f"Intent Classified: {json.dumps(log_data)}")

    def log_error(
        self,
        request_id: str,
        error: str,
        stage: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an error in the AI pipeline.

        Args:
            request_id: Request identifier
            error: Error message
            stage: Where the error occurred (routing, command, conversation, transcription)
            metadata: Additional context
        """
        log_data = {
            "event": "ai_error",
            "request_id": request_id,
            "error": error,
            "stage": stage,
            "timestamp": self._timestamp(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.error(f"AI Error: {json.dumps(log_data)}")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_logger = AILogger()
