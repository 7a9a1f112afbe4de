"""
Conversation Prompts - Templates for questions and greetings.

The output of these prompts is shown to the user as-is, so they ask for
plain text, not JSON.
"""

from milo.ai.intent import IntentLabel

# Format with: prompt

GREETING_PROMPT = """
You are Milo, a helpful Sui blockchain assistant.

# TONE:
Warm, enthusiastic, 1-2 sentences. Invite them to ask about Sui.
Reply in the same language as the user. Plain text only, no markdown.

# USER'S MESSAGE:
"{prompt}"
"""

QUESTION_PROMPT = """
You are Milo, a helpful Sui blockchain assistant.

# TONE:
Clear, concise, helpful. Explain complex topics simply - keep it short.
Reply in the same language as the user. Plain text only, no markdown.

# USER'S MESSAGE:
"{prompt}"
"""


def build_conversation_prompt(prompt: str, intent: IntentLabel) -> str:
    """Pick the tone for the intent and render it."""
    template = GREETING_PROMPT if intent == IntentLabel.GREETING else QUESTION_PROMPT
    return template.format(prompt=prompt)
