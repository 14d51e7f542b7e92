"""
QuantumMind — Paradox and Clarity Analysis for Short Messages

Rule-based, deterministic heuristics. The "quantum" vocabulary is
presentational; nothing here is a learned or probabilistic model.

Public API:
  - analyze_text:       Full analysis of one message (the façade)
  - analyzer:           Default AnalysisOrchestrator instance
  - paradox_detector:   Pattern scan with risk score and clarity
  - meaning_extractor:  Possible hidden meanings from lexical cues
  - state_analyzer:     Surface/hidden/intent states, spin, coherence
  - suggestion_generator: Remediation per detected category
  - realtime_analyzer:  Tone, complexity, urgency and tips for a compose box
  - calculate_risk_score: Final score, optionally blended with an AI signal
  - AISignal, fetch_ai_signal: Optional upstream AI enrichment

Usage:
    from quantummind import analyze_text
    result = analyze_text("Maybe if you have time, could you look at this?")
    result.to_dict()
"""

__version__ = "0.3.0"

from quantummind.library import (
    PatternCategory,
    PatternId,
    PatternLibrary,
    RiskTier,
    pattern_library,
)
from quantummind.detector import (
    ParadoxAnalysis,
    ParadoxDetector,
    ParadoxMatch,
    paradox_detector,
)
from quantummind.meanings import (
    HiddenMeaning,
    MeaningExtractor,
    MeaningKind,
    meaning_extractor,
)
from quantummind.state import (
    CoherenceState,
    QuantumReport,
    SpinDirection,
    StateAnalyzer,
    state_analyzer,
)
from quantummind.suggestions import (
    Priority,
    Suggestion,
    SuggestionGenerator,
    SuggestionKind,
    suggestion_generator,
)
from quantummind.realtime import RealtimeAnalyzer, RealtimeInsights, realtime_analyzer
from quantummind.signals import AISignal, fetch_ai_signal
from quantummind.scorer import calculate_risk_score
from quantummind.analyzer import (
    AnalysisOrchestrator,
    AnalysisResult,
    analyze_text,
    analyzer,
)
from quantummind.llm import LLMProvider
from quantummind.llm.factory import get_provider

__all__ = [
    "PatternCategory",
    "PatternId",
    "PatternLibrary",
    "RiskTier",
    "pattern_library",
    "ParadoxAnalysis",
    "ParadoxDetector",
    "ParadoxMatch",
    "paradox_detector",
    "HiddenMeaning",
    "MeaningExtractor",
    "MeaningKind",
    "meaning_extractor",
    "CoherenceState",
    "QuantumReport",
    "SpinDirection",
    "StateAnalyzer",
    "state_analyzer",
    "Priority",
    "Suggestion",
    "SuggestionGenerator",
    "SuggestionKind",
    "suggestion_generator",
    "RealtimeAnalyzer",
    "RealtimeInsights",
    "realtime_analyzer",
    "AISignal",
    "fetch_ai_signal",
    "calculate_risk_score",
    "AnalysisOrchestrator",
    "AnalysisResult",
    "analyze_text",
    "analyzer",
    "LLMProvider",
    "get_provider",
]
