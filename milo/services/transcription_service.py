"""
Transcription Service - Two-pass speech to text for wallet commands.

Flow:
=====
1. Validate the payload (audio present, mime type present, audio is base64)
2. Pass 1: send the audio inline with the transcription instruction
3. Pass 2: ask the model to fix misheard crypto terms ("sweet" -> "SUI")
4. Strip the "Corrected transcription:" label the model tends to echo

Invalid input raises TranscriptionInputError before any provider call.
Provider failures propagate unchanged.
"""

import base64
import binascii
import logging
import re
import uuid
from typing import Optional

from milo.ai.monitoring import ai_logger
from milo.ai.prompts.transcription_prompts import (
    CORRECTION_LABEL,
    build_correction_prompt,
    build_transcribe_instruction,
)
from milo.ai.providers.base import AIProvider, InlineData, PromptPayload

logger = logging.getLogger("milo.services.transcription")

_LABEL_RE = re.compile(rf"^{re.escape(CORRECTION_LABEL)}\s*", re.IGNORECASE)


class TranscriptionInputError(ValueError):
    """The request cannot be transcribed (missing or undecodable audio)."""


def strip_correction_label(text: str) -> str:
    return _LABEL_RE.sub("", text.strip()).strip()


class TranscriptionService:
    """
    Transcribes base64 audio with the transcribe-purpose provider.

    Usage:
        service = TranscriptionService(provider=providers.transcribe)
        text = await service.transcribe(audio_b64, "audio/webm", language="en")
    """

    def __init__(self, provider: AIProvider):
        self.provider = provider

    @staticmethod
    def validate_audio(audio_base64: Optional[str], mime_type: Optional[str]) -> None:
        """
        Check the payload before spending a provider call on it.

        Raises:
            TranscriptionInputError: Missing audio/mime type or invalid base64
        """
        if not audio_base64 or not mime_type:
            raise TranscriptionInputError("Missing audio or mimeType")

        try:
            base64.b64decode(audio_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise TranscriptionInputError("Invalid base64 audio data") from e

    async def transcribe(
        self,
        audio_base64: Optional[str],
        mime_type: Optional[str],
        language: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> str:
        """
        Transcribe audio and correct its crypto terminology.

        Args:
            audio_base64: Base64-encoded audio
            mime_type: Audio MIME type, e.g. "audio/webm"
            language: Optional language hint for pass 1
            request_id: Tracing identifier

        Returns:
            The corrected transcription

        Raises:
            TranscriptionInputError: Invalid payload (provider not called)
            ProviderError: Either provider call failed
        """
        self.validate_audio(audio_base64, mime_type)
        request_id = request_id or str(uuid.uuid4())

        instruction = build_transcribe_instruction(language)
        ai_logger.log_request(
            request_id=request_id,
            purpose="transcribe",
            prompt=instruction,
            provider=self.provider.provider_type.value,
            model=self.provider.model,
            metadata={"mime_type": mime_type, "audio_length": len(audio_base64)},
        )
        first_pass = await self.provider.generate(
            PromptPayload(
                text=instruction,
                inline_data=InlineData(mime_type=mime_type, data=audio_base64),
            )
        )
        ai_logger.log_response(request_id, "transcribe", first_pass)
        transcription = first_pass.content.strip()

        correction_prompt = build_correction_prompt(transcription)
        ai_logger.log_request(
            request_id=request_id,
            purpose="transcribe",
            prompt=correction_prompt,
            provider=self.provider.provider_type.value,
            model=self.provider.model,
            metadata={"pass": "correction"},
        )
        second_pass = await self.provider.generate(correction_prompt)
        ai_logger.log_response(request_id, "transcribe", second_pass)

        corrected = strip_correction_label(second_pass.content)
        logger.info(f"[{request_id}] Transcription completed ({len(corrected)} chars)")
        return corrected
