"""
Action Response Schemas - Structured wallet actions.

The command model must return exactly one of these JSON shapes:

1. transfer       {"action": "transfer", "asset", "amount", "recipient", "reply"}
2. swap           {"action": "swap", "fromAsset", "toAsset", "amount", "reply"}
3. query_balance  {"action": "query_balance"}
4. error          {"action": "error", "message"}

Design:
=======
- Type-safe Pydantic models, discriminated on "action"
- Wire names kept as the frontend expects them (fromAsset/toAsset)
- Local post-validation: the prompt asks the model to enforce the asset
  whitelist and numeric amounts, and these models check it again so a
  model that ignores its instructions cannot produce an unsupported action

Usage:
======
```python
from milo.ai.schemas.action_response import validate_action

action = validate_action({"action": "transfer", "asset": "sui", "amount": 5, ...})
# {"action": "transfer", "asset": "SUI", "amount": "5", ...}
```
"""

import logging
import re
from typing import Annotated, Any, Dict, Iterable, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)


logger = logging.getLogger("milo.ai.action_response")


# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------

# Only these tickers can be transferred or swapped
SUPPORTED_ASSETS = ("SUI", "USDC", "USDT", "CETUS", "WETH")

_AMOUNT_RE = re.compile(r"^\d+(\.\d+)?$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]+$")

DEFAULT_ERROR_MESSAGE = "Sorry, I couldn't understand that command."


# ---------------------------------------------------------------------------
# FIELD VALIDATION HELPERS
# ---------------------------------------------------------------------------

def _check_asset(value: Any) -> str:
    asset = str(value).strip().upper()
    if asset not in SUPPORTED_ASSETS:
        raise ValueError(
            f"Unsupported asset '{value}'. Supported assets: {', '.join(SUPPORTED_ASSETS)}."
        )
    return asset


def _check_amount(value: Any) -> str:
    # Models sometimes emit 5 instead of "5"
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount '{value}'.")
    if isinstance(value, (int, float)):
        value = format(value, "f").rstrip("0").rstrip(".") if isinstance(value, float) else str(value)
    amount = str(value).strip()
    if not _AMOUNT_RE.match(amount) or float(amount) <= 0:
        raise ValueError(f"Invalid amount '{value}'. The amount must be a positive number.")
    return amount


# ---------------------------------------------------------------------------
# ACTION MODELS
# ---------------------------------------------------------------------------

class _Action(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        """Serialize with wire field names, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TransferAction(_Action):
    """
    Send tokens to an address.

    Example:
    ```json
    {"action": "transfer", "asset": "SUI", "amount": "5",
     "recipient": "0xabc", "reply": "Sending 5 SUI to Alex. Sign transaction to continue."}
    ```
    """
    action: Literal["transfer"] = "transfer"
    asset: str
    amount: str
    recipient: str
    reply: Optional[str] = None

    @field_validator("asset", mode="before")
    @classmethod
    def validate_asset(cls, value: Any) -> str:
        return _check_asset(value)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> str:
        return _check_amount(value)

    @field_validator("recipient", mode="before")
    @classmethod
    def validate_recipient(cls, value: Any, info: ValidationInfo) -> str:
        recipient = str(value).strip()
        # Addresses copied from the caller's contact list are trusted as-is
        known = (info.context or {}).get("addresses", ())
        if recipient not in known and not _ADDRESS_RE.match(recipient):
            raise ValueError(f"Recipient '{value}' is not a valid address or known contact.")
        return recipient


class SwapAction(_Action):
    """Exchange one supported token for another."""
    action: Literal["swap"] = "swap"
    from_asset: str = Field(alias="fromAsset")
    to_asset: str = Field(alias="toAsset")
    amount: str
    reply: Optional[str] = None

    @field_validator("from_asset", "to_asset", mode="before")
    @classmethod
    def validate_assets(cls, value: Any) -> str:
        return _check_asset(value)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> str:
        return _check_amount(value)


class QueryBalanceAction(_Action):
    """Show the user's portfolio."""
    action: Literal["query_balance"] = "query_balance"
    reply: Optional[str] = None


class ErrorAction(_Action):
    """The command was unknown, ambiguous or invalid."""
    action: Literal["error"] = "error"
    message: str = DEFAULT_ERROR_MESSAGE


StructuredAction = Annotated[
    Union[TransferAction, SwapAction, QueryBalanceAction, ErrorAction],
    Field(discriminator="action"),
]

_ACTION_ADAPTER = TypeAdapter(StructuredAction)


# ---------------------------------------------------------------------------
# VALIDATION
# ---------------------------------------------------------------------------

def parse_action(
    data: Any,
    addresses: Optional[Iterable[str]] = None,
) -> Union[TransferAction, SwapAction, QueryBalanceAction, ErrorAction]:
    """
    Validate a parsed model reply into a typed action.

    A transfer recipient must be a 0x hex address or one of `addresses`
    (the caller's contact addresses, matched verbatim).

    Never raises: anything that is not a valid action becomes an ErrorAction
    whose message explains the first problem found.
    """
    if not isinstance(data, dict):
        logger.warning(f"Action response is not an object: {type(data).__name__}")
        return ErrorAction()

    try:
        return _ACTION_ADAPTER.validate_python(
            data, context={"addresses": frozenset(addresses or ())}
        )
    except ValidationError as e:
        message = _describe_validation_error(e)
        logger.warning(f"Rejected action '{data.get('action')}': {message}")
        return ErrorAction(message=message)


def validate_action(data: Any, addresses: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Validate a parsed model reply and return the wire-format dict."""
    return parse_action(data, addresses).to_response()


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    if first["type"] in ("union_tag_invalid", "union_tag_not_found"):
        return DEFAULT_ERROR_MESSAGE

    message = first["msg"]
    # pydantic prefixes messages raised from validators
    if message.startswith("Value error, "):
        return message[len("Value error, "):]

    field = ".".join(str(part) for part in first["loc"][1:]) or "command"
    return f"Invalid {field}: {message}"
