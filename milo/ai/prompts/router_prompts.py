"""
Router Prompts - Template for intent classification.

The router model only decides WHAT KIND of message this is; it never
answers it. The message is embedded verbatim.
"""

# ---------------------------------------------------------------------------
# INTENT CLASSIFICATION PROMPT
# ---------------------------------------------------------------------------
# Format with: prompt

INTENT_CLASSIFICATION_PROMPT = """
Classify the user's intent.
- "command": They want to PERFORM A BLOCKCHAIN ACTION (send, transfer, swap, check balance)
- "question": They are asking HOW or WHAT about blockchain (even if it contains action words)
- "greeting": Simple hello, hi, how are you, thanks

Analyze the message regardless of its language. Ignore grammar and spelling errors.

Respond with ONLY JSON: {{"intent":"command"|"question"|"greeting"}}

Message: "{prompt}"
"""


def build_intent_prompt(prompt: str) -> str:
    """Render the classification prompt for one user message."""
    return INTENT_CLASSIFICATION_PROMPT.format(prompt=prompt)
