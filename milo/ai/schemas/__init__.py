"""AI Schemas package - Structured action schemas and reply normalization."""

from milo.ai.schemas.action_response import (
    SUPPORTED_ASSETS,
    ErrorAction,
    QueryBalanceAction,
    StructuredAction,
    SwapAction,
    TransferAction,
    parse_action,
    validate_action,
)
from milo.ai.schemas.normalizer import (
    FALLBACK_ACTION,
    FALLBACK_INTENT,
    NormalizationError,
    fallback_copy,
    normalize,
    normalize_or_fallback,
    strip_code_fences,
)

__all__ = [
    "SUPPORTED_ASSETS",
    "ErrorAction",
    "QueryBalanceAction",
    "StructuredAction",
    "SwapAction",
    "TransferAction",
    "parse_action",
    "validate_action",
    "FALLBACK_ACTION",
    "FALLBACK_INTENT",
    "NormalizationError",
    "fallback_copy",
    "normalize",
    "normalize_or_fallback",
    "strip_code_fences",
]
