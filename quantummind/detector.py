"""
Paradox Detector — Pattern Scan

Scans text against the pattern library and returns every matcher
hit with its tier, excerpts and an aggregate risk score.

Deterministic, regex-based, zero API cost. Absence of matches is a
normal outcome; no input string makes the detector raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from quantummind.library import (
    PatternId,
    PatternLibrary,
    RiskTier,
    pattern_library,
)

logger = logging.getLogger(__name__)

MAX_EXCERPTS = 3
MAX_EXCERPT_LENGTH = 100
MAX_RISK_SCORE = 100

CLARITY_CLEAR = 0.9
CLARITY_PARADOX = 0.3


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class ParadoxMatch:
    """A single matcher hit."""
    category: PatternId
    risk_tier: RiskTier
    description: str
    matcher: str                        # Regex source that fired
    matched_excerpts: tuple[str, ...]   # At most 3, order of first occurrence

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "riskTier": self.risk_tier.value,
            "description": self.description,
            "matcher": self.matcher,
            "matchedExcerpts": list(self.matched_excerpts),
        }


@dataclass(frozen=True)
class ParadoxAnalysis:
    """Result of a detection pass."""
    matches: tuple[ParadoxMatch, ...]
    risk_score: int     # 0 to 100
    clarity: float      # 0.9 when clean, 0.3 otherwise

    @property
    def total_patterns(self) -> int:
        return len(self.matches)

    @property
    def categories(self) -> tuple[PatternId, ...]:
        """Distinct categories in order of first appearance."""
        seen: list[PatternId] = []
        for m in self.matches:
            if m.category not in seen:
                seen.append(m.category)
        return tuple(seen)

    def to_dict(self) -> dict:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "riskScore": self.risk_score,
            "clarity": self.clarity,
            "totalPatterns": self.total_patterns,
        }


EMPTY_PARADOX_ANALYSIS = ParadoxAnalysis(
    matches=(), risk_score=0, clarity=CLARITY_CLEAR,
)


# ============================================================
# THE DETECTOR
# ============================================================

class ParadoxDetector:
    """
    Runs every matcher of every category against the text.

    Each matcher that fires is recorded as its own ParadoxMatch, so a
    category can appear several times. Scoring sums the tier weight of
    every match and caps at 100.
    """

    def __init__(self, library: Optional[PatternLibrary] = None):
        self._library = library or pattern_library

    @property
    def library(self) -> PatternLibrary:
        return self._library

    def detect(self, text: Optional[str]) -> ParadoxAnalysis:
        """
        Detect paradox patterns in text.

        Args:
            text: The text to scan. None is treated as empty.

        Returns:
            ParadoxAnalysis with matches, risk score and clarity.
        """
        if not text:
            return EMPTY_PARADOX_ANALYSIS

        matches: list[ParadoxMatch] = []
        for category in self._library:
            for source, regex in zip(category.matchers, category.compiled):
                excerpts = self._excerpts(text, regex)
                if not excerpts:
                    continue
                matches.append(ParadoxMatch(
                    category=category.id,
                    risk_tier=category.risk_tier,
                    description=category.description,
                    matcher=source,
                    matched_excerpts=excerpts,
                ))

        risk_score = self._score(matches)
        clarity = CLARITY_CLEAR if not matches else CLARITY_PARADOX

        logger.debug(
            "Paradox scan complete",
            extra={"matches_count": len(matches), "risk_score": risk_score},
        )
        return ParadoxAnalysis(
            matches=tuple(matches),
            risk_score=risk_score,
            clarity=clarity,
        )

    @staticmethod
    def _excerpts(text: str, regex) -> tuple[str, ...]:
        """First three matched fragments, truncated for storage."""
        found = []
        for m in regex.finditer(text):
            found.append(m.group(0)[:MAX_EXCERPT_LENGTH])
            if len(found) >= MAX_EXCERPTS:
                break
        return tuple(found)

    def _score(self, matches: list[ParadoxMatch]) -> int:
        total = 0
        for m in matches:
            category = self._library.get(m.category)
            total += category.weight if category else 0
        return min(total, MAX_RISK_SCORE)


# ============================================================
# SINGLETON
# ============================================================

paradox_detector = ParadoxDetector()
