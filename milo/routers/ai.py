"""
AI Router - HTTP endpoints for the wallet assistant.

This router handles HTTP only. All business logic lives in
ResponseService and TranscriptionService.

Architecture:
=============
```
┌─────────────────┐
│ "send 5 SUI to  │
│  Alex"          │
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│   AI Router     │  ← HTTP handling only (this file)
│   (FastAPI)     │
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│ResponseService /│  ← All business logic
│Transcription    │
└─────────────────┘
```

Error bodies:
- /response, /router: 500 {"action": "error", "message": ...}
  (+ "details" when DEBUG)
- /transcribe: 400 {"error": ...} for bad input, 500 {"error": ...} otherwise
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from milo.core.config import settings
from milo.deps import get_response_service, get_transcription_service
from milo.schemas.ai import ResponseRequest, RouterRequest, TranscribeRequest
from milo.services.response_service import ResponseService
from milo.services.transcription_service import (
    TranscriptionInputError,
    TranscriptionService,
)


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api/v1/ai", tags=["ai"])

RESPONSE_ERROR_MESSAGE = "An internal server error occurred. Please try again later."
ROUTER_ERROR_MESSAGE = "An internal server error occurred in the router. Please try again later."
TRANSCRIBE_ERROR_MESSAGE = "Failed to transcribe audio"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------

def _action_error(message: str, error: Exception) -> JSONResponse:
    body: Dict[str, Any] = {"action": "error", "message": message}
    if settings.DEBUG:
        body["details"] = str(error)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("/response")
async def respond(
    request: ResponseRequest,
    service: ResponseService = Depends(get_response_service),
):
    """
    Answer a chat message.

    Commands come back as structured actions:
    - {"action": "transfer", "asset", "amount", "recipient", "reply"}
    - {"action": "swap", "fromAsset", "toAsset", "amount", "reply"}
    - {"action": "query_balance", "reply"}
    - {"action": "error", "message"}

    Questions and greetings come back as
    {"type": "conversational", "intent", "message"}.
    """
    try:
        return await service.respond(request.prompt, request.contacts)
    except Exception as e:
        logger.error(f"Failed to process AI response: {e}", exc_info=True)
        return _action_error(RESPONSE_ERROR_MESSAGE, e)


@router.post("/router")
async def route(
    request: RouterRequest,
    service: ResponseService = Depends(get_response_service),
):
    """Classify a message: {"intent": "command" | "question" | "greeting"}."""
    try:
        return await service.route(request.prompt)
    except Exception as e:
        logger.error(f"Failed to route prompt: {e}", exc_info=True)
        return _action_error(ROUTER_ERROR_MESSAGE, e)


@router.post("/transcribe")
async def transcribe(
    request: TranscribeRequest,
    service: TranscriptionService = Depends(get_transcription_service),
):
    """Transcribe base64 audio, correcting misheard crypto terms."""
    try:
        transcription = await service.transcribe(
            request.audio,
            request.mime_type,
            language=request.language,
        )
    except TranscriptionInputError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Transcription error: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": TRANSCRIBE_ERROR_MESSAGE},
        )
    return {"transcription": transcription}
