"""
Command Handler - Extracts structured wallet actions.

Turns "send five SUI to Alex" plus the caller's contact list into:

    {"action": "transfer", "asset": "SUI", "amount": "5",
     "recipient": "0xabc", "reply": "Sending 5 SUI to Alex. ..."}

The command model is instructed to resolve contacts, convert number words
and reject unsupported assets. Its reply then goes through:
1. normalize_or_fallback() - malformed JSON becomes FALLBACK_ACTION
2. validate_action()       - local re-check of the whitelist, amount and
                             recipient (0x hex or a supplied contact address)
                             (skipped when strict validation is off)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from milo.ai.intent import IntentLabel
from milo.ai.monitoring import ai_logger
from milo.ai.prompts.command_prompts import build_command_prompt
from milo.ai.providers.base import AIProvider
from milo.ai.schemas.action_response import validate_action
from milo.ai.schemas.normalizer import FALLBACK_ACTION, normalize_or_fallback
from milo.services.handlers.base import HandlerContext, IntentHandler

logger = logging.getLogger("milo.services.handlers.command")


class CommandHandler(IntentHandler):
    """
    Handler for the "command" intent.

    Args:
        provider: The command-purpose provider
        strict_validation: Re-validate the model's action locally
    """

    def __init__(self, provider: AIProvider, strict_validation: bool = True):
        self.provider = provider
        self.strict_validation = strict_validation

    @property
    def handler_name(self) -> str:
        return "command"

    @property
    def supported_intents(self) -> Tuple[IntentLabel, ...]:
        return (IntentLabel.COMMAND,)

    async def handle(
        self,
        prompt: str,
        intent: IntentLabel,
        context: HandlerContext,
    ) -> Dict[str, Any]:
        self._log_entry(intent, context)
        result = await self.extract_command(prompt, context.contacts, context.request_id)
        self._log_exit(context)
        return result

    async def extract_command(
        self,
        prompt: str,
        contacts: Optional[Sequence[Any]] = None,
        request_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Extract a structured action from a command.

        Args:
            prompt: The user's command, verbatim
            contacts: Name/address pairs the model may resolve names against
            request_id: Tracing identifier

        Returns:
            A transfer / swap / query_balance / error action dict
        """
        request_id = request_id or HandlerContext().request_id

        ai_logger.log_request(
            request_id=request_id,
            purpose="command",
            prompt=prompt,
            provider=self.provider.provider_type.value,
            model=self.provider.model,
            metadata={"contacts": len(contacts or [])},
        )
        response = await self.provider.generate(build_command_prompt(prompt, contacts))
        ai_logger.log_response(request_id, "command", response)

        data = normalize_or_fallback(response.content, FALLBACK_ACTION)
        if not self.strict_validation:
            return data

        action = validate_action(data, _contact_addresses(contacts))
        model_action = data.get("action") if isinstance(data, dict) else None
        if action["action"] == "error" and model_action != "error":
            ai_logger.log_error(
                request_id,
                action["message"],
                stage="command_validation",
                metadata={"model_action": model_action},
            )
        return action


def _contact_addresses(contacts: Optional[Sequence[Any]]) -> List[str]:
    addresses = []
    for contact in contacts or []:
        if hasattr(contact, "model_dump"):
            contact = contact.model_dump()
        address = contact.get("address")
        if address:
            addresses.append(str(address).strip())
    return addresses
