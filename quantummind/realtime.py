"""
Realtime Insights — quick text heuristics for a compose box.

Cheap signals a client can refresh on every keystroke:

  - sentiment:       share of positive cue hits among all cue hits
  - complexity:      sentence length and long-word density, clamped to 1
  - clarityScore:    1 - complexity
  - urgency:         any urgency keyword present
  - riskFactors:     urgency, apology, length and question-count flags
  - improvementTips: short, actionable rewrites
  - wordCount:       whitespace-separated tokens

Cues are counted as case-insensitive substrings, so "thanksgiving"
counts as "thanks". Independent of the paradox table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

POSITIVE_CUES = ("great", "good", "excellent", "happy", "thanks", "please", "welcome")
NEGATIVE_CUES = ("urgent", "problem", "issue", "sorry", "bad", "wrong", "failed")
URGENCY_CUES = ("asap", "urgent", "immediately", "emergency", "important")
APOLOGY_CUES = ("sorry", "apologize")

NEUTRAL_SENTIMENT = 0.5
EMPTY_COMPLEXITY = 0.3
LONG_WORD = 6               # Characters; longer words count as long
SENTENCE_NORM = 20          # Words per sentence that alone means full complexity

LONG_MESSAGE = 500
SPLIT_MESSAGE = 300
QUESTION_PROMPT_LENGTH = 50
MAX_QUESTIONS = 3

_SENTENCE_END = re.compile(r"[.!?]+")
_FIRST_PERSON = re.compile(r"\bI\b")


class RiskFactor:
    URGENCY = "High urgency detected"
    APOLOGY = "Apologetic tone may indicate issues"
    LENGTH = "Long message may reduce clarity"
    QUESTIONS = "Multiple questions may overwhelm recipient"


class Tip:
    SPLIT = "Consider breaking this into shorter messages for better comprehension"
    ASK = "Adding a clear question can improve response rates"
    BALANCE = 'Balance "I" statements with "you" perspectives for better connection'


@dataclass(frozen=True)
class RealtimeInsights:
    sentiment: float
    complexity: float
    clarity_score: float
    urgency: bool
    risk_factors: tuple[str, ...]
    improvement_tips: tuple[str, ...]
    word_count: int

    def to_dict(self) -> dict:
        return {
            "sentiment": self.sentiment,
            "complexity": self.complexity,
            "clarityScore": self.clarity_score,
            "urgency": self.urgency,
            "riskFactors": list(self.risk_factors),
            "improvementTips": list(self.improvement_tips),
            "wordCount": self.word_count,
        }


def _count(haystack: str, cues: tuple[str, ...]) -> int:
    return sum(haystack.count(cue) for cue in cues)


class RealtimeAnalyzer:
    """Stateless; every method is a fixed rule over the literal text."""

    def analyze(self, text: Optional[str]) -> RealtimeInsights:
        text = text or ""
        complexity = self.complexity(text)
        return RealtimeInsights(
            sentiment=self.sentiment(text),
            complexity=complexity,
            clarity_score=round(1 - complexity, 3),
            urgency=self.urgency(text),
            risk_factors=self.risk_factors(text),
            improvement_tips=self.tips(text),
            word_count=len(text.split()),
        )

    @staticmethod
    def sentiment(text: str) -> float:
        lowered = text.lower()
        positive = _count(lowered, POSITIVE_CUES)
        negative = _count(lowered, NEGATIVE_CUES)
        if not positive + negative:
            return NEUTRAL_SENTIMENT
        return round(positive / (positive + negative), 3)

    @staticmethod
    def complexity(text: str) -> float:
        sentences = [s for s in _SENTENCE_END.split(text) if s.strip()]
        words = text.split()
        if not sentences or not words:
            return EMPTY_COMPLEXITY

        avg_sentence = len(words) / len(sentences)
        long_words = sum(1 for w in words if len(w) > LONG_WORD)
        value = avg_sentence / SENTENCE_NORM + long_words / len(words)
        return round(min(value, 1.0), 3)

    @staticmethod
    def urgency(text: str) -> bool:
        lowered = text.lower()
        return any(cue in lowered for cue in URGENCY_CUES)

    @staticmethod
    def risk_factors(text: str) -> tuple[str, ...]:
        lowered = text.lower()
        risks = []
        if "urgent" in lowered or "asap" in lowered:
            risks.append(RiskFactor.URGENCY)
        if any(cue in lowered for cue in APOLOGY_CUES):
            risks.append(RiskFactor.APOLOGY)
        if len(text) > LONG_MESSAGE:
            risks.append(RiskFactor.LENGTH)
        if text.count("?") > MAX_QUESTIONS:
            risks.append(RiskFactor.QUESTIONS)
        return tuple(risks)

    @staticmethod
    def tips(text: str) -> tuple[str, ...]:
        tips = []
        if len(text) > SPLIT_MESSAGE:
            tips.append(Tip.SPLIT)
        if "?" not in text and len(text) > QUESTION_PROMPT_LENGTH:
            tips.append(Tip.ASK)
        # Standalone "I", not the capital in "It"
        if _FIRST_PERSON.search(text) and "you" not in text.lower():
            tips.append(Tip.BALANCE)
        return tuple(tips)


realtime_analyzer = RealtimeAnalyzer()

EMPTY_INSIGHTS = realtime_analyzer.analyze("")
