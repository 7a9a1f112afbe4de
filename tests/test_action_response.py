"""
Tests for the structured action schemas.

These tests verify:
- Each action shape validates and serializes with wire names
- Asset whitelist and amount checks
- Anything invalid degrades to an error action (never raises)
"""

import pytest

from milo.ai.schemas.action_response import (
    DEFAULT_ERROR_MESSAGE,
    SUPPORTED_ASSETS,
    ErrorAction,
    SwapAction,
    TransferAction,
    parse_action,
    validate_action,
)


class TestTransferAction:
    """Tests for the transfer shape."""

    def test_valid_transfer(self):
        data = {
            "action": "transfer",
            "asset": "SUI",
            "amount": "5",
            "recipient": "0xabc",
            "reply": "Sending 5 SUI to Alex. Sign transaction to continue.",
        }

        assert validate_action(data) == data

    def test_asset_is_upper_cased(self):
        action = parse_action(
            {"action": "transfer", "asset": "usdc", "amount": "1", "recipient": "0x1"}
        )

        assert isinstance(action, TransferAction)
        assert action.asset == "USDC"

    def test_numeric_amount_becomes_string(self):
        result = validate_action(
            {"action": "transfer", "asset": "SUI", "amount": 5, "recipient": "0xabc"}
        )

        assert result["amount"] == "5"

    def test_reply_is_optional(self):
        result = validate_action(
            {"action": "transfer", "asset": "SUI", "amount": "2.5", "recipient": "0xabc"}
        )

        assert "reply" not in result

    @pytest.mark.parametrize("asset", ["DOGE", "banana", ""])
    def test_unsupported_asset_is_error(self, asset):
        result = validate_action(
            {"action": "transfer", "asset": asset, "amount": "5", "recipient": "0xabc"}
        )

        assert result["action"] == "error"
        assert "Unsupported asset" in result["message"]

    @pytest.mark.parametrize("amount", ["five", "-1", "0", True])
    def test_invalid_amount_is_error(self, amount):
        result = validate_action(
            {"action": "transfer", "asset": "SUI", "amount": amount, "recipient": "0xabc"}
        )

        assert result["action"] == "error"
        assert "Invalid amount" in result["message"]

    def test_unresolved_contact_is_error(self):
        result = validate_action(
            {"action": "transfer", "asset": "SUI", "amount": "5", "recipient": "Alex"}
        )

        assert result["action"] == "error"
        assert "Alex" in result["message"]

    def test_contact_address_is_accepted_verbatim(self):
        """A non-hex address taken from the supplied contacts is kept as-is."""
        data = {"action": "transfer", "asset": "SUI", "amount": "5", "recipient": "alex.sui"}

        result = validate_action(data, addresses=["alex.sui"])

        assert result["action"] == "transfer"
        assert result["recipient"] == "alex.sui"

    def test_unknown_non_hex_recipient_is_still_error(self):
        data = {"action": "transfer", "asset": "SUI", "amount": "5", "recipient": "bob.sui"}

        result = validate_action(data, addresses=["alex.sui"])

        assert result["action"] == "error"
        assert "bob.sui" in result["message"]

    def test_missing_field_is_error(self):
        result = validate_action({"action": "transfer", "asset": "SUI", "amount": "5"})

        assert result["action"] == "error"
        assert "recipient" in result["message"]


class TestSwapAction:
    """Tests for the swap shape."""

    def test_valid_swap_keeps_wire_names(self):
        data = {
            "action": "swap",
            "fromAsset": "SUI",
            "toAsset": "USDC",
            "amount": "5",
            "reply": "Swapping SUI to USDC. Sign transaction to continue.",
        }

        assert validate_action(data) == data

    def test_populate_by_field_name(self):
        action = SwapAction(from_asset="sui", to_asset="weth", amount="1")

        assert action.to_response() == {
            "action": "swap",
            "fromAsset": "SUI",
            "toAsset": "WETH",
            "amount": "1",
        }

    def test_unsupported_target_is_error(self):
        result = validate_action(
            {"action": "swap", "fromAsset": "SUI", "toAsset": "DOGE", "amount": "5"}
        )

        assert result["action"] == "error"


class TestOtherActions:
    """Tests for query_balance, error and unknown shapes."""

    def test_query_balance(self):
        assert validate_action({"action": "query_balance"}) == {"action": "query_balance"}

    def test_error_message_is_kept(self):
        data = {"action": "error", "message": "Je ne connais pas ce contact."}

        assert validate_action(data) == data

    def test_error_without_message_gets_default(self):
        assert validate_action({"action": "error"})["message"] == DEFAULT_ERROR_MESSAGE

    def test_unknown_action_is_error(self):
        result = validate_action({"action": "stake", "amount": "5"})

        assert result == {"action": "error", "message": DEFAULT_ERROR_MESSAGE}

    def test_non_object_is_error(self):
        assert isinstance(parse_action(["transfer"]), ErrorAction)

    def test_whitelist(self):
        assert SUPPORTED_ASSETS == ("SUI", "USDC", "USDT", "CETUS", "WETH")
