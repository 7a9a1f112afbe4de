"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn milo.main:app --reload  (or: python -m milo)
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from milo.core.config import settings
from milo.ai.providers import ProviderConfigurationError
from milo.deps import get_provider_name
from milo.routers import ai

logger = logging.getLogger("milo")

# Error types that mean "the field is absent or not a usable string"
_NOT_A_STRING = {"missing", "string_type", "string_too_short"}

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The wallet frontend runs on another origin. CORS_ORIGINS="*" accepts any.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# EXCEPTION HANDLERS
# ---------------------------------------------------------------------------
def describe_request_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a one-line client message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."

    first = errors[0]
    fields = [str(part) for part in first.get("loc", ()) if part != "body"]
    if not fields:
        return "Invalid request: body must be a JSON object."

    field = ".".join(fields)
    if first.get("type") in _NOT_A_STRING and len(fields) == 1:
        return f"Invalid request: '{field}' must be a string."
    return f"Invalid request: '{field}' {first.get('msg', 'is invalid')}."


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": describe_request_error(exc)},
    )


@app.exception_handler(ProviderConfigurationError)
async def provider_configuration_handler(request: Request, exc: ProviderConfigurationError):
    logger.error(f"AI provider is not configured: {exc}")
    content: Dict[str, Any] = {"error": "AI provider is not configured"}
    if settings.DEBUG:
        content["details"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# ai.router: /api/v1/ai/response, /api/v1/ai/router, /api/v1/ai/transcribe
app.include_router(ai.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check(provider: Optional[str] = Depends(get_provider_name)):
    """
    Simple health check endpoint.

    Reports which provider backs the AI endpoints. Does NOT call the
    provider; a missing configuration shows up as provider=null.

    Returns:
        {"status": "ok", "provider": "gemini" | "claude" | null}
    """
    return {"status": "ok", "provider": provider}
