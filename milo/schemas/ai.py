"""
Pydantic schemas for the AI endpoints.

These schemas define the REST contract used by milo/routers/ai.py.
Responses are plain dicts (actions and envelopes are already validated
by milo.ai.schemas), so only requests are modelled here.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    """An address-book entry the command model may resolve names against."""
    name: str
    address: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Alex", "address": "0xabc123"}}
    )


class ResponseRequest(BaseModel):
    """
    Request schema for POST /response.

    Example:
    {
        "prompt": "send 5 SUI to Alex",
        "contacts": [{"name": "Alex", "address": "0xabc123"}]
    }
    """
    prompt: str = Field(..., min_length=1, description="User message, verbatim")
    contacts: List[Contact] = Field(default_factory=list, description="Caller's contact list")


class RouterRequest(BaseModel):
    """Request schema for POST /router."""
    prompt: str = Field(..., min_length=1, description="User message, verbatim")


class TranscribeRequest(BaseModel):
    """
    Request schema for POST /transcribe.

    audio and mimeType are optional at the schema level so that a missing
    value yields the same 400 body as undecodable audio.
    """
    audio: Optional[str] = Field(default=None, description="Base64-encoded audio")
    mime_type: Optional[str] = Field(default=None, alias="mimeType", description="e.g. audio/webm")
    language: Optional[str] = Field(default=None, description="Optional language hint")

    model_config = ConfigDict(populate_by_name=True)
