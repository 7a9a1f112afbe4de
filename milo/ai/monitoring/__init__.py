"""
Monitoring Module - Structured logging for AI operations.

Usage:
======
    from milo.ai.monitoring import ai_logger

    ai_logger.log_request(request_id, "router", prompt, "gemini", "gemini-2.5-flash")
    ai_logger.log_response(request_id, "router", response)
"""

from milo.ai.monitoring.logger import AILogger, ai_logger, prompt_fingerprint

__all__ = [
    "AILogger",
    "ai_logger",
    "prompt_fingerprint",
]
