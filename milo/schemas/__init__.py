"""
Schemas module - pydantic request models for the HTTP API.
"""

from milo.schemas.ai import (
    Contact,
    ResponseRequest,
    RouterRequest,
    TranscribeRequest,
)

__all__ = [
    "Contact",
    "ResponseRequest",
    "RouterRequest",
    "TranscribeRequest",
]
