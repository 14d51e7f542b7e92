"""
API Schemas — Request and Response Models

Pydantic models for the QuantumMind API. Response field names are
camelCase on the wire, matching AnalysisResult.to_dict().
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ANALYZE
# ============================================================

class AISignalPayload(_CamelModel):
    """Analysis computed upstream by the client (e.g. an in-browser model)."""
    detected_paradoxes: list[str] = Field(default_factory=list)
    confidence: float = 0.0
    risk_level: str = "low"
    hidden_meanings: list[str] = Field(default_factory=list)
    api_errors: int = 0
    grammar_issues: int = 0


class AnalyzeRequest(_CamelModel):
    """POST /analyze request body."""
    text: str = Field("", max_length=50_000,
                      description="The message to analyze (0-50,000 characters).")
    context: dict[str, str] = Field(default_factory=dict,
                                    description="Caller hints, e.g. {\"platform\": \"gmail\"}.")
    mode: str = Field("local", pattern="^(local|full)$",
                      description="local (rules only) or full (rules + AI signal).")
    ai_signal: Optional[AISignalPayload] = Field(
        None, description="Optional upstream AI analysis to blend into the score.",
    )

    model_config = {"json_schema_extra": {"examples": [
        {"text": "I'm not angry, but this could have been done better",
         "context": {"platform": "slack"}, "mode": "local"},
    ]}}


class AnalyzeBatchRequest(_CamelModel):
    """POST /analyze/batch request body."""
    items: list[AnalyzeRequest] = Field(..., min_length=1, max_length=100)


class ParadoxMatchResponse(_CamelModel):
    category: str
    risk_tier: str
    description: str
    matcher: str
    matched_excerpts: list[str]


class ParadoxAnalysisResponse(_CamelModel):
    matches: list[ParadoxMatchResponse]
    risk_score: int
    clarity: float
    total_patterns: int


class HiddenMeaningResponse(_CamelModel):
    kind: str
    probability: float
    description: str
    impact: Optional[str] = None


class SurfaceStateResponse(_CamelModel):
    amplitude: float
    observable: str


class HiddenStateResponse(_CamelModel):
    amplitude: float
    observables: list[HiddenMeaningResponse]
    pattern_count: int = 0


class IntentStateResponse(_CamelModel):
    entanglement: float
    expressed_intent: str
    actual_intent: str
    alignment: float


class EmotionalSpinResponse(_CamelModel):
    direction: str
    magnitude: float
    positive_share: float
    negative_share: float
    neutral_share: float


class CoherenceResponse(_CamelModel):
    value: float
    decoherence_risk: float
    state: str


class ContextLinkResponse(_CamelModel):
    type: str
    strength: float


class ContextEntanglementResponse(_CamelModel):
    strength: float
    connections: list[ContextLinkResponse]
    context_dependency: float


class QuantumReportResponse(_CamelModel):
    surface_state: SurfaceStateResponse
    hidden_state: HiddenStateResponse
    intent_state: IntentStateResponse
    emotional_spin: EmotionalSpinResponse
    coherence: CoherenceResponse
    context_entanglement: ContextEntanglementResponse


class SuggestionResponse(_CamelModel):
    kind: str
    priority: str
    message: str
    example: str
    impact: str


class RealtimeInsightsResponse(_CamelModel):
    sentiment: float
    complexity: float
    clarity_score: float
    urgency: bool
    risk_factors: list[str]
    improvement_tips: list[str]
    word_count: int


class AnalyzeResponse(_CamelModel):
    """POST /analyze response body."""
    text_sample: str
    paradox_analysis: ParadoxAnalysisResponse
    quantum_analysis: QuantumReportResponse
    suggestions: list[SuggestionResponse]
    platform_hint: Optional[str] = None
    risk_score: int
    score_breakdown: dict
    signal_source: str
    realtime: RealtimeInsightsResponse
    timestamp: str
    cached: bool = False


class AnalyzeBatchResponse(_CamelModel):
    """POST /analyze/batch response body."""
    results: list[AnalyzeResponse]
    total: int
    analyzed: int


# ============================================================
# PATTERNS / HEALTH
# ============================================================

class PatternResponse(_CamelModel):
    id: str
    risk_tier: str
    description: str
    weight: int
    matchers: list[str]


class PatternsResponse(_CamelModel):
    version: str
    total_patterns: int
    patterns: list[PatternResponse]


class HealthResponse(_CamelModel):
    status: str
    version: str
    llm_provider: str
    cache: dict
