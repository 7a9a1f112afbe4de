"""
Transcription Prompts - Two-pass speech to text.

Pass 1 transcribes the audio. Pass 2 fixes crypto terms that speech
recognition commonly mishears ("sweet" -> "SUI") without translating.
"""

from typing import Optional

TRANSCRIBE_INSTRUCTION = "Transcribe this audio accurately."

# Format with: transcription

CORRECTION_PROMPT = """
You are a blockchain assistant helping correct voice transcriptions.
The user is likely talking about cryptocurrency transactions.

Original transcription: "{transcription}"

Please correct any misheard cryptocurrency terms and apply blockchain context:

CRYPTO CORRECTIONS:
- "sweet", "swit", "suite" → "SUI"
- "you ess dee see" → "USDC"
- "you ess dee tee" → "USDT"
- "seetus", "cetus" → "CETUS"
- "bit coin" → "Bitcoin"
- "etherium" → "Ethereum"

TRANSACTION CONTEXT:
- If it sounds like a transaction command, ensure numbers and crypto names are correct
- "send five sweet" → "send 5 SUI"
- "swap ten suite" → "swap 10 SUI"

Keep the original language and intent, but fix cryptocurrency terminology.

Corrected transcription:
"""

# Label the model tends to echo back from the end of CORRECTION_PROMPT
CORRECTION_LABEL = "Corrected transcription:"


def build_transcribe_instruction(language: Optional[str] = None) -> str:
    """Instruction sent alongside the audio, biased by an optional language hint."""
    if language and language.strip():
        return f"{TRANSCRIBE_INSTRUCTION} in this language {language.strip()}"
    return TRANSCRIBE_INSTRUCTION


def build_correction_prompt(transcription: str) -> str:
    return CORRECTION_PROMPT.format(transcription=transcription)
