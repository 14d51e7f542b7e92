"""
Analyzer — Analysis Orchestrator

The façade over the engine. Runs, in data-dependency order:
  1. ParadoxDetector     (matches, local risk score, clarity)
  2. MeaningExtractor    (possible hidden meanings)
  3. StateAnalyzer       (the composite "quantum" report)
  4. SuggestionGenerator (remediation per category)
  5. Risk scorer         (final score, optionally blended with an AI signal)
  6. RealtimeAnalyzer    (tone, complexity, urgency, tips)

and assembles one immutable AnalysisResult.

Total over its inputs: absent or too-short text yields the canonical
empty analysis, malformed context becomes an empty mapping, and no
string makes it raise. No I/O, no shared mutable state.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from quantummind.detector import (
    EMPTY_PARADOX_ANALYSIS,
    ParadoxAnalysis,
    ParadoxDetector,
    paradox_detector,
)
from quantummind.meanings import MeaningExtractor, meaning_extractor
from quantummind.realtime import (
    EMPTY_INSIGHTS,
    RealtimeAnalyzer,
    RealtimeInsights,
    realtime_analyzer,
)
from quantummind.scorer import calculate_risk_score
from quantummind.signals import AISignal
from quantummind.state import (
    Coherence,
    CoherenceState,
    ContextEntanglement,
    EmotionalSpin,
    HiddenState,
    IntentState,
    QuantumReport,
    SpinDirection,
    StateAnalyzer,
    SurfaceState,
    state_analyzer,
)
from quantummind.suggestions import (
    NO_CONTENT,
    Suggestion,
    SuggestionGenerator,
    suggestion_generator,
)

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 10
SAMPLE_LENGTH = 200
ELLIPSIS = "..."


# ============================================================
# RESULT
# ============================================================

@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis of one text sample."""
    text_sample: str
    paradox_analysis: ParadoxAnalysis
    quantum_analysis: QuantumReport
    suggestions: tuple[Suggestion, ...]
    risk_score: int
    score_breakdown: Mapping[str, Any] = field(compare=False)
    platform_hint: Optional[str] = None
    signal_source: str = "local"
    realtime: RealtimeInsights = EMPTY_INSIGHTS
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False,
    )

    def __post_init__(self):
        # Read-only private copy
        object.__setattr__(
            self,
            "score_breakdown",
            MappingProxyType(copy.deepcopy(dict(self.score_breakdown))),
        )

    def to_dict(self) -> dict:
        """JSON-compatible document with camelCase field names."""
        return {
            "textSample": self.text_sample,
            "paradoxAnalysis": self.paradox_analysis.to_dict(),
            "quantumAnalysis": self.quantum_analysis.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
            "platformHint": self.platform_hint,
            "riskScore": self.risk_score,
            "scoreBreakdown": copy.deepcopy(dict(self.score_breakdown)),
            "signalSource": self.signal_source,
            "realtime": self.realtime.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


def _empty_report(text: str) -> QuantumReport:
    """Report for text too short to analyze. Coherence is unknown."""
    return QuantumReport(
        surface_state=SurfaceState(amplitude=0.0, observable=text[:100]),
        hidden_state=HiddenState(amplitude=0.0, observables=()),
        intent_state=IntentState(
            entanglement=0.0,
            expressed_intent="No content",
            actual_intent="No content",
            alignment=0.0,
        ),
        emotional_spin=EmotionalSpin(
            direction=SpinDirection.NEUTRAL,
            magnitude=0.0,
            positive_share=0.0,
            negative_share=0.0,
            neutral_share=0.0,
        ),
        coherence=Coherence(
            value=0.0, decoherence_risk=1.0, state=CoherenceState.UNKNOWN,
        ),
        context_entanglement=ContextEntanglement(
            strength=0.0, connections=(), context_dependency=0.0,
        ),
    )


# ============================================================
# THE ORCHESTRATOR
# ============================================================

class AnalysisOrchestrator:
    """
    Runs the engine components in sequence.

    Components are injected so alternative pattern tables can be
    tested; the defaults are the module-level singletons.
    """

    def __init__(
        self,
        detector: Optional[ParadoxDetector] = None,
        extractor: Optional[MeaningExtractor] = None,
        state: Optional[StateAnalyzer] = None,
        generator: Optional[SuggestionGenerator] = None,
        realtime: Optional[RealtimeAnalyzer] = None,
    ):
        self.detector = detector or paradox_detector
        self.extractor = extractor or meaning_extractor
        self.state = state or state_analyzer
        self.generator = generator or suggestion_generator
        self.realtime = realtime or realtime_analyzer

    def analyze(
        self,
        text: Any,
        context: Any = None,
        ai_signal: Optional[AISignal] = None,
    ) -> AnalysisResult:
        """
        Analyze a text sample.

        Args:
            text: The message to analyze. None or non-strings are coerced.
            context: Optional mapping of caller hints, e.g. {"platform": "gmail"}.
            ai_signal: Optional external AI analysis to blend into the score.

        Returns:
            AnalysisResult. Never raises for any input.
        """
        text = self._normalize_text(text)
        context = self._normalize_context(context)
        platform = context.get("platform") or None

        if len(text.strip()) < MIN_TEXT_LENGTH:
            return self.empty_analysis(text, platform_hint=platform)

        paradoxes = self.detector.detect(text)
        meanings = self.extractor.extract(text)
        report = self.state.analyze(text, paradoxes, meanings, context)
        suggestions = self.generator.generate(paradoxes.matches)
        risk_score, breakdown = calculate_risk_score(paradoxes, ai_signal)

        logger.debug(
            "Analysis complete",
            extra={
                "risk_score": risk_score,
                "matches_count": paradoxes.total_patterns,
                "platform": platform,
            },
        )
        return AnalysisResult(
            text_sample=self._sample(text),
            paradox_analysis=paradoxes,
            quantum_analysis=report,
            suggestions=suggestions,
            risk_score=risk_score,
            score_breakdown=breakdown,
            platform_hint=platform,
            signal_source="ai+local" if ai_signal is not None else "local",
            realtime=self.realtime.analyze(text),
        )

    def empty_analysis(
        self, text: str = "", platform_hint: Optional[str] = None,
    ) -> AnalysisResult:
        """The canonical result for absent or too-short text."""
        risk_score, breakdown = calculate_risk_score(EMPTY_PARADOX_ANALYSIS)
        return AnalysisResult(
            text_sample=self._sample(text),
            paradox_analysis=EMPTY_PARADOX_ANALYSIS,
            quantum_analysis=_empty_report(text),
            suggestions=(NO_CONTENT,),
            risk_score=risk_score,
            score_breakdown=breakdown,
            platform_hint=platform_hint,
        )

    @staticmethod
    def _normalize_text(text: Any) -> str:
        if text is None:
            return ""
        if isinstance(text, bytes):
            return text.decode("utf-8", errors="replace")
        return text if isinstance(text, str) else str(text)

    @staticmethod
    def _normalize_context(context: Any) -> dict[str, str]:
        if not isinstance(context, Mapping):
            return {}
        return {
            str(k): str(v) for k, v in context.items() if v is not None
        }

    @staticmethod
    def _sample(text: str) -> str:
        if len(text) <= SAMPLE_LENGTH:
            return text
        return text[:SAMPLE_LENGTH] + ELLIPSIS


# ============================================================
# SINGLETON + CONVENIENCE
# ============================================================

analyzer = AnalysisOrchestrator()


def analyze_text(
    text: Any,
    context: Any = None,
    ai_signal: Optional[AISignal] = None,
) -> AnalysisResult:
    """Analyze text with the default engine."""
    return analyzer.analyze(text, context=context, ai_signal=ai_signal)
