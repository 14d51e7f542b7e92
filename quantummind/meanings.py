"""
Meaning Extractor — possible hidden meanings behind a message.

Each meaning kind has a fixed cue set and a fixed probability.
Kinds are checked in a fixed order and included independently.
When nothing matches, the single "clear" meaning is returned, so
the result is never empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MeaningKind(str, Enum):
    UNCERTAINTY = "uncertainty"
    HIDDEN_EMOTION = "hiddenEmotion"
    SARCASM = "sarcasm"
    MASKED_URGENCY = "maskedUrgency"
    CLEAR = "clear"


@dataclass(frozen=True)
class HiddenMeaning:
    kind: MeaningKind
    probability: float
    description: str
    impact: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "probability": self.probability,
            "description": self.description,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class _MeaningRule:
    meaning: HiddenMeaning
    cues: tuple[re.Pattern, ...]

    def matches(self, text: str) -> bool:
        return any(cue.search(text) for cue in self.cues)


def _cues(*sources: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(s, re.IGNORECASE) for s in sources)


# Order matters: results follow this sequence
_RULES: tuple[_MeaningRule, ...] = (
    _MeaningRule(
        meaning=HiddenMeaning(
            kind=MeaningKind.UNCERTAINTY,
            probability=0.7,
            description="Expresses uncertainty or hesitation",
            impact="Recipient may not know whether a decision was made",
        ),
        cues=_cues(r"maybe", r"perhaps"),
    ),
    _MeaningRule(
        meaning=HiddenMeaning(
            kind=MeaningKind.HIDDEN_EMOTION,
            probability=0.8,
            description="Hides true emotional state",
            impact="Unspoken frustration tends to surface later as conflict",
        ),
        cues=_cues(
            r"not\s+angry\s*,?\s+but",
            r"no\s+offen[cs]e\s*,?\s+but",
        ),
    ),
    _MeaningRule(
        meaning=HiddenMeaning(
            kind=MeaningKind.SARCASM,
            probability=0.9,
            description="Uses sarcasm to express frustration",
            impact="Recipient may feel mocked instead of informed",
        ),
        cues=_cues(r"great\s*,?\s+another", r"perfect\s+timing"),
    ),
    _MeaningRule(
        meaning=HiddenMeaning(
            kind=MeaningKind.MASKED_URGENCY,
            probability=0.6,
            description="Downplays a request that is actually time-sensitive",
            impact="Request is likely to be deprioritized and miss its real deadline",
        ),
        cues=_cues(
            r"if\s+you\s+have\s+time",
            r"when\s+you\s+get\s+a\s+chance",
            r"whenever\s+you\s+can",
            r"no\s+rush",
            r"no\s+pressure",
        ),
    ),
)

CLEAR_MEANING = HiddenMeaning(
    kind=MeaningKind.CLEAR,
    probability=0.9,
    description="Direct and unambiguous communication",
)


class MeaningExtractor:
    """Derives possible hidden meanings from lexical cues."""

    def __init__(self, rules: tuple[_MeaningRule, ...] = _RULES):
        self._rules = rules

    def extract(self, text: Optional[str]) -> tuple[HiddenMeaning, ...]:
        if not text:
            return (CLEAR_MEANING,)
        found = tuple(r.meaning for r in self._rules if r.matches(text))
        return found or (CLEAR_MEANING,)


meaning_extractor = MeaningExtractor()
