"""
API Integration Tests — Endpoint Verification

Tests every public API endpoint using FastAPI's TestClient.
No real LLM calls: "full" mode runs against a mocked provider.

These tests catch:
  - Schema mismatches (response model vs actual data)
  - Route registration issues
  - Middleware bugs
  - Response format regressions
"""

from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from quantummind.llm import Completion, LLMProvider

HIGH_RISK_REPLY = '{"detectedParadoxes": ["sarcasm"], "confidence": 0.9, "riskLevel": "high"}'


class FailingLLM(LLMProvider):
    async def complete(self, prompt, temperature=0.2):
        raise RuntimeError("connection refused")


class HighRiskLLM(LLMProvider):
    """Answers high risk; counts calls and can report failed attempts."""

    def __init__(self, failed_attempts: int = 0):
        self.failed_attempts = failed_attempts
        self.calls = 0

    async def complete(self, prompt, temperature=0.2):
        self.calls += 1
        return Completion(HIGH_RISK_REPLY, failed_attempts=self.failed_attempts)


# --- Fixtures ---

@pytest.fixture(scope="module")
def client():
    """Create a test client for the QuantumMind API."""
    from api.main import app
    with TestClient(app) as c:
        yield c


def _unique(text: str) -> str:
    """Suffix text so the shared result cache never short-circuits a test."""
    return f"{text} [{uuid.uuid4().hex[:8]}]"


# ============================================================
# HEALTH & META
# ============================================================

class TestHealth:

    def test_health_returns_200(self, client):
        r = client.get("/health")
        assert r.status_code == 200

    def test_health_fields(self, client):
        data = client.get("/health").json()
        assert data["status"] == "operational"
        assert data["version"]
        assert "llmProvider" in data
        assert "entries" in data["cache"]

    def test_version_header(self, client):
        r = client.get("/health")
        assert r.headers["X-QuantumMind-Version"] == r.json()["version"]
        assert r.headers["X-Content-Type-Options"] == "nosniff"


class TestPatterns:

    def test_patterns_listing(self, client):
        data = client.get("/patterns").json()
        assert data["totalPatterns"] == 4
        ids = [p["id"] for p in data["patterns"]]
        assert ids == ["passiveAggressive", "ambiguity", "sarcasm", "contradiction"]
        assert data["patterns"][0]["riskTier"] == "high"
        assert data["patterns"][0]["weight"] == 25


# ============================================================
# ANALYZE — LOCAL MODE
# ============================================================

class TestAnalyzeLocal:

    def test_passive_aggressive(self, client):
        r = client.post("/analyze", json={
            "text": _unique("I'm not angry, but this could have been done better"),
            "context": {"platform": "slack"},
        })
        assert r.status_code == 200
        data = r.json()
        assert data["riskScore"] == 25
        assert data["paradoxAnalysis"]["totalPatterns"] == 1
        assert data["paradoxAnalysis"]["matches"][0]["category"] == "passiveAggressive"
        assert data["suggestions"][0]["kind"] == "direct_communication"
        assert data["platformHint"] == "slack"
        assert data["signalSource"] == "local"
        assert data["cached"] is False

    def test_clear_text(self, client):
        data = client.post("/analyze", json={
            "text": _unique("Please review this document by 3 PM today"),
        }).json()
        assert data["riskScore"] == 0
        assert data["paradoxAnalysis"]["clarity"] == 0.9
        assert data["suggestions"][0]["kind"] == "clarity_maintenance"

    def test_empty_text(self, client):
        data = client.post("/analyze", json={"text": ""}).json()
        assert data["quantumAnalysis"]["coherence"]["state"] == "unknown"
        assert data["suggestions"][0]["kind"] == "no_content"

    def test_quantum_report_shape(self, client):
        data = client.post("/analyze", json={
            "text": _unique("Maybe if you have time, could you look at this?"),
        }).json()
        quantum = data["quantumAnalysis"]
        assert quantum["surfaceState"]["amplitude"] == 1.0
        assert quantum["hiddenState"]["amplitude"] == 0.8
        assert quantum["intentState"]["actualIntent"] == "Uncertain request with hidden urgency"
        assert quantum["emotionalSpin"]["direction"] in ("up", "down", "neutral")
        assert "contextDependency" in quantum["contextEntanglement"]

    def test_realtime_block(self, client):
        data = client.post("/analyze", json={
            "text": _unique("Sorry, this is urgent. Can you fix it ASAP?"),
        }).json()
        realtime = data["realtime"]
        assert realtime["urgency"] is True
        assert realtime["riskFactors"] == [
            "High urgency detected", "Apologetic tone may indicate issues",
        ]
        assert realtime["wordCount"] == 10
        assert realtime["clarityScore"] == pytest.approx(1 - realtime["complexity"])

    def test_repeat_is_cached(self, client):
        body = {"text": _unique("No offense, but this is completely wrong")}
        first = client.post("/analyze", json=body).json()
        second = client.post("/analyze", json=body).json()
        assert first["cached"] is False
        assert second["cached"] is True
        assert second["riskScore"] == first["riskScore"]

    def test_client_signal_blends(self, client):
        data = client.post("/analyze", json={
            "text": _unique("I'm not angry, but this could have been done better"),
            "aiSignal": {"riskLevel": "high", "apiErrors": 1},
        }).json()
        assert data["riskScore"] == 95
        assert data["signalSource"] == "ai+local"
        assert data["scoreBreakdown"]["ai_risk_contribution"] == 60
        assert data["scoreBreakdown"]["api_error_penalty"] == 10


# ============================================================
# ANALYZE — FULL MODE
# ============================================================

class TestAnalyzeFull:

    def test_provider_failure_falls_back_to_local(self, client, monkeypatch):
        import api.main as main
        monkeypatch.setattr(main, "_llm", FailingLLM())
        data = client.post("/analyze", json={
            "text": _unique("Great, another last-minute change"),
            "mode": "full",
        }).json()
        assert data["signalSource"] == "local"
        assert data["riskScore"] == 25

    def test_provider_signal_blends(self, client, monkeypatch):
        import api.main as main
        monkeypatch.setattr(main, "_llm", HighRiskLLM())
        data = client.post("/analyze", json={
            "text": _unique("Great, another last-minute change"),
            "mode": "full",
        }).json()
        assert data["signalSource"] == "ai+local"
        assert data["riskScore"] == 85

    def test_repeat_costs_one_provider_call(self, client, monkeypatch):
        import api.main as main
        llm = HighRiskLLM()
        monkeypatch.setattr(main, "_llm", llm)
        body = {"text": _unique("Great, another last-minute change"), "mode": "full"}

        first = client.post("/analyze", json=body).json()
        second = client.post("/analyze", json=body).json()
        assert llm.calls == 1
        assert first["cached"] is False
        assert second["cached"] is True
        assert second["riskScore"] == first["riskScore"] == 85

    def test_failed_provider_result_not_cached(self, client, monkeypatch):
        import api.main as main
        body = {"text": _unique("Great, another last-minute change"), "mode": "full"}
        monkeypatch.setattr(main, "_llm", FailingLLM())
        assert client.post("/analyze", json=body).json()["riskScore"] == 25

        llm = HighRiskLLM()
        monkeypatch.setattr(main, "_llm", llm)
        data = client.post("/analyze", json=body).json()
        assert llm.calls == 1
        assert data["cached"] is False
        assert data["riskScore"] == 85

    def test_provider_failed_attempts_add_penalty(self, client, monkeypatch):
        import api.main as main
        monkeypatch.setattr(main, "_llm", HighRiskLLM(failed_attempts=1))
        data = client.post("/analyze", json={
            "text": _unique("Great, another last-minute change"),
            "mode": "full",
        }).json()
        assert data["scoreBreakdown"]["api_error_penalty"] == 10
        assert data["riskScore"] == 95

    def test_local_mode_skips_provider(self, client, monkeypatch):
        import api.main as main
        llm = HighRiskLLM()
        monkeypatch.setattr(main, "_llm", llm)
        client.post("/analyze", json={"text": _unique("Great, another last-minute change")})
        assert llm.calls == 0


# ============================================================
# VALIDATION
# ============================================================

class TestValidation:

    def test_invalid_mode(self, client):
        r = client.post("/analyze", json={"text": "hello there", "mode": "deep"})
        assert r.status_code == 422

    def test_text_too_long(self, client):
        r = client.post("/analyze", json={"text": "a" * 50_001})
        assert r.status_code == 422

    def test_body_too_large(self, client):
        r = client.post(
            "/analyze",
            content=b"x" * 1_100_000,
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 413

    def test_empty_batch(self, client):
        r = client.post("/analyze/batch", json={"items": []})
        assert r.status_code == 422


# ============================================================
# BATCH
# ============================================================

class TestBatch:

    def test_batch(self, client):
        r = client.post("/analyze/batch", json={"items": [
            {"text": _unique("Maybe if you have time, could you look at this sometime?")},
            {"text": _unique("Please review this document by 3 PM today")},
            {"text": ""},
        ]})
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 3
        assert data["analyzed"] == 3
        assert len(data["results"]) == 3
        assert data["results"][0]["paradoxAnalysis"]["matches"][0]["category"] == "ambiguity"
        assert data["results"][1]["riskScore"] == 0
