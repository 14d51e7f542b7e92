"""
LLM Provider — paradox analysis contract

Full-mode analysis asks an external model for its own reading of a
message. A provider only has to implement `complete()`, one JSON
completion; `analyze_paradoxes()` builds the prompt, decodes the reply
and carries the number of upstream calls that failed on the way.

Select the provider with QUANTUMMIND_LLM_PROVIDER.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional


PARADOX_PROMPT = """Analyze this message for communication paradoxes and hidden meanings:
"{text}"

Context: {context}

Detect these patterns:
- Passive-aggressive language (e.g., "I'm not angry, but...")
- Ambiguous priorities (e.g., "if you have time...")
- Sarcastic tones (e.g., "Great, another change...")
- Contradictory statements (e.g., "No offense, but...")
- Hidden expectations and unspoken meanings

Return ONLY valid JSON with:
- "detectedParadoxes": array from ["passiveAggressive", "ambiguity", "sarcasm", "contradiction"]
- "confidence": float 0.0 to 1.0
- "riskLevel": "low" | "medium" | "high"
- "hiddenMeanings": array of short strings describing inferred intents
- "grammarIssues": integer count of grammar problems found"""


@dataclass(frozen=True)
class Completion:
    """Raw model output plus the calls that failed before it arrived."""
    text: str
    model: str = ""
    failed_attempts: int = 0


@dataclass(frozen=True)
class ParadoxReply:
    """Decoded paradox analysis from a provider."""
    payload: dict
    model: str = ""
    failed_attempts: int = 0


def parse_json_reply(text: str) -> dict:
    """
    Decode a model's JSON object, tolerating a ```json fence.

    Raises ValueError for anything that is not a JSON object.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[-1].rsplit("```", 1)[0].strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Model reply is not JSON: {e}. Reply: {text[:300]}") from e
    if not isinstance(payload, dict):
        raise ValueError(f"Model reply is not a JSON object: {type(payload).__name__}")
    return payload


class LLMProvider(ABC):
    """A model that can be asked for a paradox analysis."""

    @abstractmethod
    async def complete(self, prompt: str, temperature: float = 0.2) -> Completion:
        """One JSON-mode completion. Raises when no model produced an answer."""
        ...

    async def analyze_paradoxes(
        self, text: str, context: Optional[Mapping[str, str]] = None,
    ) -> ParadoxReply:
        prompt = PARADOX_PROMPT.format(
            text=text,
            context=json.dumps(dict(context or {}), sort_keys=True),
        )
        completion = await self.complete(prompt)
        return ParadoxReply(
            payload=parse_json_reply(completion.text),
            model=completion.model,
            failed_attempts=completion.failed_attempts,
        )
