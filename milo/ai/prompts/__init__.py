"""
Prompts Module - Centralized prompt templates for AI interactions.

This module contains all prompt templates used by the AI system.
Keeping prompts centralized makes them:
- Easy to update and iterate
- Consistent across the application
- Testable and version-controlled
"""

from milo.ai.prompts.router_prompts import (
    INTENT_CLASSIFICATION_PROMPT,
    build_intent_prompt,
)
from milo.ai.prompts.command_prompts import (
    COMMAND_EXTRACTION_PROMPT,
    build_command_prompt,
    render_contacts,
)
from milo.ai.prompts.conversation_prompts import (
    GREETING_PROMPT,
    QUESTION_PROMPT,
    build_conversation_prompt,
)
from milo.ai.prompts.transcription_prompts import (
    CORRECTION_LABEL,
    CORRECTION_PROMPT,
    build_correction_prompt,
    build_transcribe_instruction,
)

__all__ = [
    "INTENT_CLASSIFICATION_PROMPT",
    "build_intent_prompt",
    "COMMAND_EXTRACTION_PROMPT",
    "build_command_prompt",
    "render_contacts",
    "GREETING_PROMPT",
    "QUESTION_PROMPT",
    "build_conversation_prompt",
    "CORRECTION_LABEL",
    "CORRECTION_PROMPT",
    "build_correction_prompt",
    "build_transcribe_instruction",
]
