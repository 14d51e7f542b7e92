"""
Pattern Library — The Paradox Table

Defines what counts as a communication paradox:
  1. The closed set of pattern categories (PatternId)
  2. The risk tier attached to each category
  3. The regex matchers that detect each category

The table is built once at import and never mutated. Detector and
suggestion generator both receive it by reference, so there is a
single source of truth for category ids, tiers and descriptions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


# ============================================================
# CLOSED VARIANTS
# ============================================================

class PatternId(str, Enum):
    """Paradox category identifiers."""
    PASSIVE_AGGRESSIVE = "passiveAggressive"
    AMBIGUITY = "ambiguity"
    SARCASM = "sarcasm"
    CONTRADICTION = "contradiction"


class RiskTier(str, Enum):
    """Severity tier of a category. Drives score weighting."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Score contribution of a single match, by tier
TIER_WEIGHTS: dict[RiskTier, int] = {
    RiskTier.HIGH: 25,
    RiskTier.MEDIUM: 15,
    RiskTier.LOW: 0,
}

# Apostrophe: straight or typographic
_APOS = "['’]"


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class PatternCategory:
    """
    A named paradox category.

    Each matcher is a regex source, searched case-insensitively anywhere
    in the text (no word anchors: "sometimes" fires `sometime`).
    Matchers are kept in order; the detector reports hits in that order.
    """
    id: PatternId
    risk_tier: RiskTier
    description: str
    matchers: tuple[str, ...]
    _compiled: tuple[re.Pattern, ...] = field(
        init=False, repr=False, compare=False,
    )

    def __post_init__(self):
        object.__setattr__(
            self,
            "_compiled",
            tuple(re.compile(m, re.IGNORECASE) for m in self.matchers),
        )

    @property
    def compiled(self) -> tuple[re.Pattern, ...]:
        return self._compiled

    @property
    def weight(self) -> int:
        return TIER_WEIGHTS[self.risk_tier]


# ============================================================
# DEFAULT CATEGORIES
# ============================================================

DEFAULT_CATEGORIES: tuple[PatternCategory, ...] = (
    PatternCategory(
        id=PatternId.PASSIVE_AGGRESSIVE,
        risk_tier=RiskTier.HIGH,
        description="Hidden disagreement masked as agreement",
        matchers=(
            r"not\s+angry\s*,?\s+but",
            r"as\s+you\s+wish",
            r"whatever\s+you\s+think",
            r"no\s+problem",
        ),
    ),
    PatternCategory(
        id=PatternId.AMBIGUITY,
        risk_tier=RiskTier.MEDIUM,
        description="Unclear priorities creating confusion",
        matchers=(
            r"maybe",
            r"perhaps",
            r"if\s+you\s+have\s+time",
            r"sometime",
            r"when\s+you\s+get\s+a\s+chance",
        ),
    ),
    PatternCategory(
        id=PatternId.SARCASM,
        risk_tier=RiskTier.HIGH,
        description="Sarcastic tone masking frustration",
        matchers=(
            r"great\s*,?\s+another",
            r"perfect\s+timing",
            r"love\s+that",
            r"wonderful",
        ),
    ),
    PatternCategory(
        id=PatternId.CONTRADICTION,
        risk_tier=RiskTier.MEDIUM,
        description="Contradictory messaging creating tension",
        matchers=(
            r"no\s+offen[cs]e\s*,?\s+but",
            rf"don{_APOS}?t\s+take\s+this\s+(?:the\s+)?wrong(?:\s+way)?",
            r"with\s+all\s+due\s+respect",
        ),
    ),
)


# ============================================================
# THE LIBRARY
# ============================================================

class PatternLibrary:
    """
    Immutable lookup over a set of pattern categories.

    Instantiated once as a module-level singleton. Holds no
    mutable state; categories are frozen dataclasses in a tuple.
    """

    def __init__(self, categories: Iterable[PatternCategory] = DEFAULT_CATEGORIES):
        self._categories = tuple(categories)
        self._by_id = {c.id: c for c in self._categories}

    @property
    def categories(self) -> tuple[PatternCategory, ...]:
        return self._categories

    def get(self, pattern_id: PatternId) -> Optional[PatternCategory]:
        try:
            key = PatternId(pattern_id)
        except ValueError:
            return None
        return self._by_id.get(key)

    def __iter__(self):
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def get_patterns(self) -> list[dict]:
        """
        Return the category table as plain dicts.

        Used by the GET /patterns endpoint to expose the detection surface.
        """
        return [
            {
                "id": c.id.value,
                "riskTier": c.risk_tier.value,
                "description": c.description,
                "weight": c.weight,
                "matchers": list(c.matchers),
            }
            for c in self._categories
        ]


# ============================================================
# SINGLETON
# ============================================================

pattern_library = PatternLibrary()
