"""
Tests for the suggestion generator and the analysis orchestrator.

The orchestrator is total: every input produces a result. These
tests pin the canonical empty analysis, the short-text boundary
and the end-to-end scenarios.
"""

import json

import pytest

from quantummind.analyzer import (
    ELLIPSIS,
    SAMPLE_LENGTH,
    AnalysisOrchestrator,
    analyze_text,
)
from quantummind.detector import ParadoxDetector, paradox_detector
from quantummind.library import PatternCategory, PatternId, PatternLibrary, RiskTier
from quantummind.signals import AISignal
from quantummind.state import CoherenceState
from quantummind.suggestions import (
    CLARITY_MAINTENANCE,
    NO_CONTENT,
    SUGGESTION_TEMPLATES,
    Priority,
    SuggestionKind,
    suggestion_generator,
)


# ============================================================
# SUGGESTIONS
# ============================================================

class TestSuggestionGenerator:

    def test_no_matches_yields_clarity_maintenance(self):
        assert suggestion_generator.generate(()) == (CLARITY_MAINTENANCE,)
        assert CLARITY_MAINTENANCE.priority == Priority.LOW

    def test_templates_cover_every_category(self):
        assert set(SUGGESTION_TEMPLATES) == set(PatternId)

    def test_template_kinds(self):
        assert SUGGESTION_TEMPLATES[PatternId.PASSIVE_AGGRESSIVE].kind == SuggestionKind.DIRECT_COMMUNICATION
        assert SUGGESTION_TEMPLATES[PatternId.AMBIGUITY].kind == SuggestionKind.CLARITY
        assert SUGGESTION_TEMPLATES[PatternId.SARCASM].kind == SuggestionKind.CONSTRUCTIVE_FEEDBACK
        assert SUGGESTION_TEMPLATES[PatternId.CONTRADICTION].kind == SuggestionKind.ALIGNMENT

    def test_one_per_category(self):
        matches = paradox_detector.detect(
            "Maybe if you have time, could you look at this sometime?"
        ).matches
        assert len(matches) == 3
        suggestions = suggestion_generator.generate(matches)
        assert [s.kind for s in suggestions] == [SuggestionKind.CLARITY]

    def test_order_of_first_appearance(self):
        matches = paradox_detector.detect(
            "Maybe if you have time, look at this. I'm not angry, but it's late."
        ).matches
        kinds = [s.kind for s in suggestion_generator.generate(matches)]
        assert kinds == [SuggestionKind.DIRECT_COMMUNICATION, SuggestionKind.CLARITY]


# ============================================================
# SCENARIOS
# ============================================================

class TestScenarios:

    def test_passive_aggressive(self):
        result = analyze_text("I'm not angry, but this could have been done better")
        assert result.paradox_analysis.total_patterns == 1
        assert result.risk_score >= 25
        assert len(result.suggestions) == 1
        assert result.suggestions[0].kind == SuggestionKind.DIRECT_COMMUNICATION
        assert result.suggestions[0].priority == Priority.HIGH

    def test_ambiguity(self):
        result = analyze_text("Maybe if you have time, could you look at this sometime?")
        assert PatternId.AMBIGUITY in result.paradox_analysis.categories
        assert all(
            m.risk_tier == RiskTier.MEDIUM for m in result.paradox_analysis.matches
        )
        assert result.risk_score >= 15

    def test_clear_request(self):
        result = analyze_text("Please review this document by 3 PM today")
        assert result.paradox_analysis.matches == ()
        assert result.risk_score == 0
        assert result.paradox_analysis.clarity == 0.9
        assert result.suggestions == (CLARITY_MAINTENANCE,)

    def test_empty(self):
        result = analyze_text("")
        assert result.quantum_analysis.coherence.state == CoherenceState.UNKNOWN
        assert result.quantum_analysis.coherence.value == 0.0
        assert result.quantum_analysis.coherence.decoherence_risk == 1.0
        assert result.paradox_analysis.matches == ()
        assert result.paradox_analysis.clarity == 0.9
        assert result.risk_score == 0
        assert result.suggestions == (NO_CONTENT,)


# ============================================================
# INPUT HANDLING
# ============================================================

class TestInputHandling:

    def test_nine_chars_is_empty(self):
        result = analyze_text("123456789")
        assert result.quantum_analysis.coherence.state == CoherenceState.UNKNOWN

    def test_ten_chars_is_analyzed(self):
        result = analyze_text("1234567890")
        assert result.quantum_analysis.coherence.state != CoherenceState.UNKNOWN

    def test_whitespace_is_stripped_for_length(self):
        result = analyze_text("     short     ")
        assert result.suggestions == (NO_CONTENT,)

    def test_none(self):
        assert analyze_text(None).suggestions == (NO_CONTENT,)

    def test_bytes(self):
        result = analyze_text(b"Maybe we can talk about this later")
        assert PatternId.AMBIGUITY in result.paradox_analysis.categories

    def test_non_string(self):
        result = analyze_text(12345678901)
        assert result.text_sample == "12345678901"

    def test_long_text_sample_truncated(self):
        result = analyze_text("A" * 10_000)
        assert len(result.text_sample) == SAMPLE_LENGTH + len(ELLIPSIS)
        assert result.text_sample.endswith(ELLIPSIS)
        assert result.paradox_analysis.matches == ()

    def test_short_sample_not_truncated(self):
        text = "Please send the report today"
        assert analyze_text(text).text_sample == text


class TestContext:

    def test_platform_hint(self):
        result = analyze_text("Please send the report today", {"platform": "gmail"})
        assert result.platform_hint == "gmail"

    def test_non_mapping_context(self):
        result = analyze_text("Please send the report today", "gmail")
        assert result.platform_hint is None
        assert result.quantum_analysis.context_entanglement.context_dependency == 0.3

    def test_values_coerced_to_str(self):
        result = analyze_text("Please send the report today", {"platform": 42})
        assert result.platform_hint == "42"

    def test_context_dependency(self):
        result = analyze_text("Please send the report today", {"platform": "slack"})
        assert result.quantum_analysis.context_entanglement.context_dependency == 0.7


# ============================================================
# RESULT
# ============================================================

class TestResult:

    @pytest.mark.parametrize("text", [
        "",
        "Please review this document by 3 PM today",
        "I'm not angry, but great, another change. Maybe if you have time?",
    ])
    def test_idempotent(self, text):
        assert analyze_text(text) == analyze_text(text)

    def test_to_dict_is_json(self):
        data = analyze_text("No offense, but this is wrong", {"platform": "slack"}).to_dict()
        encoded = json.dumps(data)
        assert json.loads(encoded)["platformHint"] == "slack"
        assert set(data) == {
            "textSample", "paradoxAnalysis", "quantumAnalysis", "suggestions",
            "platformHint", "riskScore", "scoreBreakdown", "signalSource",
            "realtime", "timestamp",
        }

    def test_timestamp_is_utc(self):
        assert analyze_text("Please send it today").timestamp.utcoffset().total_seconds() == 0

    def test_breakdown_is_read_only(self):
        result = analyze_text("I'm not angry, but this could have been done better")
        with pytest.raises(TypeError):
            result.score_breakdown["final_score"] = 0

        data = result.to_dict()
        data["scoreBreakdown"]["local_contributions"].clear()
        assert result.score_breakdown["local_contributions"]
        assert result.to_dict()["scoreBreakdown"]["final_score"] == 25

    def test_realtime_insights_attached(self):
        result = analyze_text("Sorry for the delay, I will send the report immediately.")
        assert result.realtime.urgency is True
        assert result.realtime.word_count == 10
        assert "Apologetic tone may indicate issues" in result.realtime.risk_factors

    def test_empty_analysis_has_neutral_insights(self):
        realtime = analyze_text("").realtime
        assert realtime.sentiment == 0.5
        assert realtime.clarity_score == 0.7
        assert realtime.word_count == 0
        assert realtime.risk_factors == ()


class TestAISignal:

    def test_signal_blends_into_score(self):
        signal = AISignal(risk_level=RiskTier.HIGH)
        result = analyze_text(
            "I'm not angry, but this could have been done better", ai_signal=signal,
        )
        assert result.paradox_analysis.risk_score == 25
        assert result.risk_score == 85
        assert result.signal_source == "ai+local"

    def test_no_signal_is_local(self):
        result = analyze_text("I'm not angry, but this could have been done better")
        assert result.risk_score == result.paradox_analysis.risk_score
        assert result.signal_source == "local"

    def test_signal_ignored_for_short_text(self):
        result = analyze_text("hi", ai_signal=AISignal(risk_level=RiskTier.HIGH))
        assert result.risk_score == 0
        assert result.signal_source == "local"


class TestInjection:

    def test_custom_detector(self):
        library = PatternLibrary([
            PatternCategory(
                id=PatternId.SARCASM,
                risk_tier=RiskTier.HIGH,
                description="Test only",
                matchers=(r"\bsure\s+thing\b",),
            ),
        ])
        orchestrator = AnalysisOrchestrator(detector=ParadoxDetector(library))
        result = orchestrator.analyze("Sure thing, boss. Whatever you say.")
        assert result.paradox_analysis.categories == (PatternId.SARCASM,)
        assert result.suggestions[0].kind == SuggestionKind.CONSTRUCTIVE_FEEDBACK
