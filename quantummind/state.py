"""
State Analyzer — the "quantum" report.

Combines detector and extractor output with a handful of lexical
heuristics into one composite report:

  - surface / hidden / intent states
  - entanglement (how much the message leans on outside context)
  - emotional spin (net sentiment direction from lexicon counts)
  - coherence (ambiguity, contradiction and length blended)

The quantum vocabulary is presentational. Every number here is a
fixed rule over the literal text; nothing is learned or sampled.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from quantummind.detector import ParadoxAnalysis
from quantummind.meanings import HiddenMeaning

logger = logging.getLogger(__name__)

OBSERVABLE_LENGTH = 100


# ============================================================
# LEXICAL CUES
# ============================================================

def _words(*words: str) -> re.Pattern:
    return re.compile(r"\b(?:" + "|".join(words) + r")\b", re.IGNORECASE)


CONTRAST = _words("but", "however", "although")
CONDITIONAL = _words("if", "when", "unless")
DEMONSTRATIVE = _words("this", "that", "these", "those")
NEGATION = re.compile(
    r"\b(?:not|no|never|nothing|none|nobody|\w+n['’]t|cannot)\b", re.IGNORECASE,
)
BACK_REFERENCE = re.compile(
    r"(?:as\s+(?:we\s+)?(?:mentioned|discussed)|previously)", re.IGNORECASE,
)
_POLITE = re.compile(r"please", re.IGNORECASE)
_TOKEN = re.compile(r"[a-z]+(?:['’][a-z]+)?", re.IGNORECASE)

POSITIVE_WORDS = frozenset({
    "great", "good", "excellent", "happy", "thanks", "thank", "please",
    "welcome", "appreciate", "glad", "love", "wonderful", "nice",
})
NEGATIVE_WORDS = frozenset({
    "urgent", "problem", "issue", "sorry", "bad", "wrong", "failed",
    "angry", "annoyed", "disappointed", "frustrated", "worse", "broken",
})

# Ordered (cue, intent) rules for the intent behind the wording
_ACTUAL_INTENT_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"not\s+angry\s*,?\s+but", re.IGNORECASE),
     "Expressing frustration indirectly"),
    (re.compile(r"no\s+offen[cs]e\s*,?\s+but", re.IGNORECASE),
     "Delivering criticism behind a disclaimer"),
    (re.compile(r"great\s*,?\s+another|perfect\s+timing", re.IGNORECASE),
     "Expressing frustration sarcastically"),
    (re.compile(r"maybe|perhaps", re.IGNORECASE),
     "Uncertain request with hidden urgency"),
)


# ============================================================
# DATA STRUCTURES
# ============================================================

class SpinDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class CoherenceState(str, Enum):
    COHERENT = "coherent"
    PARTIALLY_COHERENT = "partiallyCoherent"
    DECOHERENT = "decoherent"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SurfaceState:
    amplitude: float
    observable: str

    def to_dict(self) -> dict:
        return {"amplitude": self.amplitude, "observable": self.observable}


@dataclass(frozen=True)
class HiddenState:
    amplitude: float
    observables: tuple[HiddenMeaning, ...]
    pattern_count: int = 0

    def to_dict(self) -> dict:
        return {
            "amplitude": self.amplitude,
            "observables": [o.to_dict() for o in self.observables],
            "patternCount": self.pattern_count,
        }


@dataclass(frozen=True)
class IntentState:
    entanglement: float
    expressed_intent: str
    actual_intent: str
    alignment: float

    def to_dict(self) -> dict:
        return {
            "entanglement": self.entanglement,
            "expressedIntent": self.expressed_intent,
            "actualIntent": self.actual_intent,
            "alignment": self.alignment,
        }


@dataclass(frozen=True)
class EmotionalSpin:
    direction: SpinDirection
    magnitude: float
    positive_share: float
    negative_share: float
    neutral_share: float

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "magnitude": self.magnitude,
            "positiveShare": self.positive_share,
            "negativeShare": self.negative_share,
            "neutralShare": self.neutral_share,
        }


@dataclass(frozen=True)
class Coherence:
    value: float
    decoherence_risk: float
    state: CoherenceState

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "decoherenceRisk": self.decoherence_risk,
            "state": self.state.value,
        }


@dataclass(frozen=True)
class ContextLink:
    type: str       # "contrast", "condition", "context_dependency"
    strength: float

    def to_dict(self) -> dict:
        return {"type": self.type, "strength": self.strength}


@dataclass(frozen=True)
class ContextEntanglement:
    strength: float
    connections: tuple[ContextLink, ...]
    context_dependency: float

    def to_dict(self) -> dict:
        return {
            "strength": self.strength,
            "connections": [c.to_dict() for c in self.connections],
            "contextDependency": self.context_dependency,
        }


@dataclass(frozen=True)
class QuantumReport:
    surface_state: SurfaceState
    hidden_state: HiddenState
    intent_state: IntentState
    emotional_spin: EmotionalSpin
    coherence: Coherence
    context_entanglement: ContextEntanglement

    def to_dict(self) -> dict:
        return {
            "surfaceState": self.surface_state.to_dict(),
            "hiddenState": self.hidden_state.to_dict(),
            "intentState": self.intent_state.to_dict(),
            "emotionalSpin": self.emotional_spin.to_dict(),
            "coherence": self.coherence.to_dict(),
            "contextEntanglement": self.context_entanglement.to_dict(),
        }


# ============================================================
# THE ANALYZER
# ============================================================

class StateAnalyzer:
    """
    Derives the composite report from text, detection and meanings.

    Holds no state. All reals are rounded to three decimals so that
    repeated runs produce identical documents.
    """

    def analyze(
        self,
        text: str,
        paradox_analysis: ParadoxAnalysis,
        meanings: tuple[HiddenMeaning, ...],
        context: Optional[Mapping[str, str]] = None,
    ) -> QuantumReport:
        text = text or ""
        meanings = tuple(meanings)

        expressed = self.expressed_intent(text)
        actual = self.actual_intent(text, expressed)

        report = QuantumReport(
            surface_state=SurfaceState(
                amplitude=1.0,
                observable=text[:OBSERVABLE_LENGTH],
            ),
            hidden_state=HiddenState(
                amplitude=0.8 if len(meanings) > 1 else 0.2,
                observables=meanings,
                pattern_count=paradox_analysis.total_patterns,
            ),
            intent_state=IntentState(
                entanglement=self.entanglement(text),
                expressed_intent=expressed,
                actual_intent=actual,
                alignment=0.9 if expressed == actual else 0.4,
            ),
            emotional_spin=self.emotional_spin(text),
            coherence=self.coherence(text, meanings),
            context_entanglement=self.context_entanglement(text, context),
        )
        logger.debug(
            "State analysis complete",
            extra={"coherence": report.coherence.value},
        )
        return report

    # --- Intent ---

    @staticmethod
    def entanglement(text: str) -> float:
        score = 0.0
        if CONTRAST.search(text):
            score += 0.3
        if CONDITIONAL.search(text):
            score += 0.2
        if DEMONSTRATIVE.search(text):
            score += 0.2
        return round(min(score, 1.0), 3)

    @staticmethod
    def expressed_intent(text: str) -> str:
        if "?" in text:
            return "Seeking information"
        if "!" in text:
            return "Expressing strong emotion"
        if _POLITE.search(text):
            return "Making a polite request"
        return "Making a statement"

    @staticmethod
    def actual_intent(text: str, expressed: str) -> str:
        for cue, intent in _ACTUAL_INTENT_RULES:
            if cue.search(text):
                return intent
        return expressed

    # --- Emotional spin ---

    @staticmethod
    def emotional_spin(text: str) -> EmotionalSpin:
        positive = negative = neutral = 0
        for token in _TOKEN.findall(text):
            word = token.lower()
            if word in POSITIVE_WORDS:
                positive += 1
            elif word in NEGATIVE_WORDS:
                negative += 1
            else:
                neutral += 1

        total = positive + negative + neutral
        if positive > negative:
            direction = SpinDirection.UP
        elif negative > positive:
            direction = SpinDirection.DOWN
        else:
            direction = SpinDirection.NEUTRAL

        if not total:
            return EmotionalSpin(direction, 0.0, 0.0, 0.0, 0.0)

        # Shares in thousandths; neutral takes the rounding remainder so
        # the three always sum to 1.
        positive_m = round(1000 * positive / total)
        negative_m = min(round(1000 * negative / total), 1000 - positive_m)
        neutral_m = 1000 - positive_m - negative_m

        return EmotionalSpin(
            direction=direction,
            magnitude=round(abs(positive - negative) / total, 3),
            positive_share=positive_m / 1000,
            negative_share=negative_m / 1000,
            neutral_share=neutral_m / 1000,
        )

    # --- Coherence ---

    @staticmethod
    def coherence(text: str, meanings: tuple[HiddenMeaning, ...]) -> Coherence:
        ambiguity = 0.7 if len(meanings) > 1 else 0.2
        contradiction = (
            0.6 if CONTRAST.search(text) and NEGATION.search(text) else 0.2
        )
        clarity = 0.4 if len(text) > 50 else 0.8

        value = 0.4 * (1 - ambiguity) + 0.4 * (1 - contradiction) + 0.2 * clarity
        value = round(max(0.1, min(1.0, value)), 3)

        if value > 0.7:
            state = CoherenceState.COHERENT
        elif value > 0.4:
            state = CoherenceState.PARTIALLY_COHERENT
        else:
            state = CoherenceState.DECOHERENT

        return Coherence(
            value=value,
            decoherence_risk=round(1 - value, 3),
            state=state,
        )

    # --- Context ---

    @staticmethod
    def context_entanglement(
        text: str, context: Optional[Mapping[str, str]] = None,
    ) -> ContextEntanglement:
        strength = 0.0
        if DEMONSTRATIVE.search(text):
            strength += 0.3
        if BACK_REFERENCE.search(text):
            strength += 0.4

        connections: list[ContextLink] = []
        if CONTRAST.search(text):
            connections.append(ContextLink("contrast", 0.8))
        if CONDITIONAL.search(text):
            connections.append(ContextLink("condition", 0.6))
        if BACK_REFERENCE.search(text):
            connections.append(ContextLink("context_dependency", 0.7))

        return ContextEntanglement(
            strength=round(min(strength, 1.0), 3),
            connections=tuple(connections),
            context_dependency=0.7 if context else 0.3,
        )


state_analyzer = StateAnalyzer()
