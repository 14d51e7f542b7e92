"""
AI Signal — optional upstream enrichment.

An external model may report its own paradox analysis. This module
defines the normalized value (AISignal) and the boundary function
that fetches it through an LLMProvider.

The boundary never propagates a failure: provider errors, open circuit
breakers and malformed JSON all become "no signal" (None). The core
analysis is complete without it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from quantummind.library import PatternId, RiskTier
from quantummind.llm import LLMProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AISignal:
    """Normalized analysis reported by an external model."""
    detected_paradoxes: tuple[PatternId, ...] = ()
    confidence: float = 0.0
    risk_level: RiskTier = RiskTier.LOW
    hidden_meanings: tuple[str, ...] = ()
    api_errors: int = 0
    grammar_issues: int = 0
    source: str = "external"

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        api_errors: int = 0,
        source: str = "external",
    ) -> AISignal:
        """
        Build a signal from a raw model response.

        Unknown categories are dropped, out-of-range numbers are clamped
        and an unrecognized risk level falls back to "low".
        """
        if not isinstance(payload, Mapping):
            payload = {}

        paradoxes = []
        raw = payload.get("detectedParadoxes", [])
        if isinstance(raw, (list, tuple)):
            for item in raw:
                try:
                    pid = PatternId(str(item))
                except ValueError:
                    continue
                if pid not in paradoxes:
                    paradoxes.append(pid)

        try:
            confidence = float(payload.get("confidence", 0.0))
        except (TypeError, ValueError):
            confidence = 0.0
        confidence = max(0.0, min(1.0, confidence))

        try:
            risk_level = RiskTier(str(payload.get("riskLevel", "low")).lower())
        except ValueError:
            risk_level = RiskTier.LOW

        meanings = payload.get("hiddenMeanings", [])
        if not isinstance(meanings, (list, tuple)):
            meanings = []

        try:
            grammar_issues = max(0, int(payload.get("grammarIssues", 0)))
        except (TypeError, ValueError):
            grammar_issues = 0

        return cls(
            detected_paradoxes=tuple(paradoxes),
            confidence=confidence,
            risk_level=risk_level,
            hidden_meanings=tuple(str(m) for m in meanings if m),
            api_errors=max(0, int(api_errors)),
            grammar_issues=grammar_issues,
            source=source,
        )

    def to_dict(self) -> dict:
        return {
            "detectedParadoxes": [p.value for p in self.detected_paradoxes],
            "confidence": self.confidence,
            "riskLevel": self.risk_level.value,
            "hiddenMeanings": list(self.hidden_meanings),
            "apiErrors": self.api_errors,
            "grammarIssues": self.grammar_issues,
            "source": self.source,
        }


async def fetch_ai_signal(
    text: str,
    llm: Optional[LLMProvider],
    context: Optional[Mapping[str, str]] = None,
) -> Optional[AISignal]:
    """
    Ask an external model for a paradox analysis.

    Returns None when no provider is configured or the call fails. Calls
    that failed before the provider answered become `api_errors`.
    """
    if llm is None or not text:
        return None

    try:
        reply = await llm.analyze_paradoxes(text, context)
    except Exception as e:
        logger.warning(
            "AI signal unavailable: %s", e,
            extra={"error": str(e), "error_type": type(e).__name__},
        )
        return None

    return AISignal.from_payload(
        reply.payload,
        api_errors=reply.failed_attempts,
        source=type(llm).__name__,
    )
