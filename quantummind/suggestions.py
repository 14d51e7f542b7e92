"""
Suggestion Generator — remediation per paradox category.

One template per PatternId. Templates are emitted once per distinct
category present in the detection result, even though the detector
keeps one entry per matcher hit. With no matches, a single low-priority
"clarity_maintenance" suggestion is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from quantummind.detector import ParadoxMatch
from quantummind.library import PatternId


class SuggestionKind(str, Enum):
    DIRECT_COMMUNICATION = "direct_communication"
    CLARITY = "clarity"
    CONSTRUCTIVE_FEEDBACK = "constructive_feedback"
    ALIGNMENT = "alignment"
    CLARITY_MAINTENANCE = "clarity_maintenance"
    NO_CONTENT = "no_content"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Suggestion:
    kind: SuggestionKind
    priority: Priority
    message: str
    example: str
    impact: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "priority": self.priority.value,
            "message": self.message,
            "example": self.example,
            "impact": self.impact,
        }


# ============================================================
# TEMPLATE TABLE
# ============================================================

SUGGESTION_TEMPLATES: dict[PatternId, Suggestion] = {
    PatternId.PASSIVE_AGGRESSIVE: Suggestion(
        kind=SuggestionKind.DIRECT_COMMUNICATION,
        priority=Priority.HIGH,
        message="Express concerns directly while maintaining professionalism",
        example=(
            'Instead of passive-aggressive phrasing, try: "I have concerns '
            'about this approach. Let\'s discuss how to improve it."'
        ),
        impact="Reduces misunderstanding and keeps the conversation constructive",
    ),
    PatternId.AMBIGUITY: Suggestion(
        kind=SuggestionKind.CLARITY,
        priority=Priority.MEDIUM,
        message="Provide clear timelines and priorities",
        example=(
            'Instead of ambiguous timing, try: "Please review this by 3 PM '
            'today as it\'s needed for the next phase."'
        ),
        impact="Recipient knows exactly what is needed and by when",
    ),
    PatternId.SARCASM: Suggestion(
        kind=SuggestionKind.CONSTRUCTIVE_FEEDBACK,
        priority=Priority.HIGH,
        message="Address issues directly without sarcasm",
        example=(
            'Instead of sarcasm, try: "This change impacts our timeline. '
            'Let\'s discuss how to accommodate it effectively."'
        ),
        impact="Turns frustration into an actionable discussion",
    ),
    PatternId.CONTRADICTION: Suggestion(
        kind=SuggestionKind.ALIGNMENT,
        priority=Priority.MEDIUM,
        message="Make the framing match the message instead of disclaiming it",
        example=(
            'Instead of "No offense, but...", try: "I see a problem in this '
            'section. Here is what I would change."'
        ),
        impact="Feedback lands as intended without a mixed signal",
    ),
}

_missing = set(PatternId) - set(SUGGESTION_TEMPLATES)
if _missing:
    raise RuntimeError(
        f"No suggestion template for categories: {sorted(p.value for p in _missing)}"
    )

CLARITY_MAINTENANCE = Suggestion(
    kind=SuggestionKind.CLARITY_MAINTENANCE,
    priority=Priority.LOW,
    message="Communication is clear and direct",
    example="Keep using specific requests with clear timelines.",
    impact="Maintains trust and fast turnaround",
)

NO_CONTENT = Suggestion(
    kind=SuggestionKind.NO_CONTENT,
    priority=Priority.LOW,
    message="Not enough text to analyze",
    example="Write at least one full sentence to get an assessment.",
    impact="No assessment available",
)


class SuggestionGenerator:
    """Maps detected categories to remediation suggestions."""

    def __init__(self, templates: dict[PatternId, Suggestion] = SUGGESTION_TEMPLATES):
        self._templates = templates

    def generate(self, matches: Iterable[ParadoxMatch]) -> tuple[Suggestion, ...]:
        suggestions: list[Suggestion] = []
        seen: set[PatternId] = set()
        for match in matches:
            if match.category in seen:
                continue
            seen.add(match.category)
            suggestions.append(self._templates[match.category])

        if not suggestions:
            return (CLARITY_MAINTENANCE,)
        return tuple(suggestions)


suggestion_generator = SuggestionGenerator()
