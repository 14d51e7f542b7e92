"""
Risk Score Calculator

Computes the final 0-100 risk score from the local paradox scan plus
an optional external AI signal. Separated from analyzer.py for
single-responsibility.

Score = local risk score plus additive signal contributions:
  - Local scan:        high match +25, medium match +15, low +0 (capped at 100)
  - AI risk level:     high +60, medium +30, low +0
  - AI api errors:     +10 if any upstream call failed
  - Grammar issues:    +20 if more than 3 were reported
  Capped at 100.
"""

from __future__ import annotations

from typing import Optional

from quantummind.detector import MAX_RISK_SCORE, ParadoxAnalysis
from quantummind.library import RiskTier
from quantummind.signals import AISignal

AI_RISK_CONTRIBUTION = {RiskTier.HIGH: 60, RiskTier.MEDIUM: 30, RiskTier.LOW: 0}
API_ERROR_PENALTY = 10
GRAMMAR_PENALTY = 20
GRAMMAR_ISSUE_THRESHOLD = 3


def calculate_risk_score(
    paradox_analysis: ParadoxAnalysis,
    ai_signal: Optional[AISignal] = None,
) -> tuple[int, dict]:
    """
    Calculate the final risk score.

    Returns:
        (score, breakdown) where breakdown lists every contribution.
        Without a signal the score equals the local risk score.
    """
    score = paradox_analysis.risk_score
    breakdown: dict = {
        "local_risk_score": paradox_analysis.risk_score,
        "local_contributions": [
            {
                "category": m.category.value,
                "risk_tier": m.risk_tier.value,
                "matcher": m.matcher,
            }
            for m in paradox_analysis.matches
        ],
        "ai_risk_contribution": 0,
        "api_error_penalty": 0,
        "grammar_penalty": 0,
    }

    if ai_signal is not None:
        contribution = AI_RISK_CONTRIBUTION.get(ai_signal.risk_level, 0)
        score += contribution
        breakdown["ai_risk_contribution"] = contribution

        if ai_signal.api_errors > 0:
            score += API_ERROR_PENALTY
            breakdown["api_error_penalty"] = API_ERROR_PENALTY

        if ai_signal.grammar_issues > GRAMMAR_ISSUE_THRESHOLD:
            score += GRAMMAR_PENALTY
            breakdown["grammar_penalty"] = GRAMMAR_PENALTY

    final = max(0, min(MAX_RISK_SCORE, score))
    breakdown["final_score"] = final
    return final, breakdown
