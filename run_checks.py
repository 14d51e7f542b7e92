#!/usr/bin/env python3
"""
run_checks.py — Smoke checks for the analysis engine.

Usage:
    python run_checks.py              # All checks
    python run_checks.py --quick      # Paradox detection checks only
    python run_checks.py --paradox    # Paradox detection checks
    python run_checks.py --quantum    # Quantum report checks
    python run_checks.py --perf       # Performance checks

Exits 0 when every selected check passes, 1 otherwise.
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from quantummind.analyzer import analyze_text
from quantummind.detector import paradox_detector
from quantummind.library import PatternId
from quantummind.meanings import meaning_extractor
from quantummind.state import state_analyzer
from quantummind.suggestions import suggestion_generator


class CheckFailure(AssertionError):
    """A check did not hold."""


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise CheckFailure(message)


@dataclass
class CheckReport:
    passed: int = 0
    failed: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed


# ============================================================
# CHECKS
# ============================================================

PARADOX_CASES = [
    ("Passive-aggressive", "I'm not angry, but this could have been done better",
     PatternId.PASSIVE_AGGRESSIVE),
    ("Ambiguity", "Maybe if you have time, could you look at this sometime?",
     PatternId.AMBIGUITY),
    ("Sarcasm", "Great, another last-minute change", PatternId.SARCASM),
    ("Contradiction", "No offense, but this is completely wrong",
     PatternId.CONTRADICTION),
    ("Clear communication", "Please review this document by 3 PM today", None),
]


def _paradox_check(text: str, expected: PatternId | None) -> Callable[[], str]:
    def check() -> str:
        result = paradox_detector.detect(text)
        if expected is None:
            _expect(not result.matches, f"expected no paradox, got {result.categories}")
            _expect(result.clarity == 0.9, f"expected clarity 0.9, got {result.clarity}")
        else:
            _expect(bool(result.matches), f"expected {expected.value}, none detected")
            first = result.matches[0].category
            _expect(first == expected, f"expected {expected.value}, got {first.value}")
        return f"risk={result.risk_score} matches={result.total_patterns}"
    return check


def paradox_checks() -> list[tuple[str, Callable[[], str]]]:
    return [
        (f"Paradox: {name}", _paradox_check(text, expected))
        for name, text, expected in PARADOX_CASES
    ]


def quantum_checks() -> list[tuple[str, Callable[[], str]]]:
    def superposition() -> str:
        text = "Maybe we could possibly consider this approach"
        paradoxes = paradox_detector.detect(text)
        report = state_analyzer.analyze(
            text, paradoxes, meaning_extractor.extract(text),
        )
        _expect(report.surface_state.amplitude == 1.0, "surface amplitude must be 1.0")
        _expect(bool(report.hidden_state.observables), "hidden state has no observables")
        _expect(
            report.intent_state.actual_intent == "Uncertain request with hidden urgency",
            f"unexpected actual intent: {report.intent_state.actual_intent}",
        )
        return f"coherence={report.coherence.value} ({report.coherence.state.value})"

    def entanglement() -> str:
        text = "As we discussed, but now I'm thinking differently"
        report = state_analyzer.analyze(
            text, paradox_detector.detect(text), meaning_extractor.extract(text),
        )
        types = {c.type for c in report.context_entanglement.connections}
        _expect({"contrast", "context_dependency"} <= types,
                f"missing connections, got {sorted(types)}")
        return f"entanglement={report.intent_state.entanglement}"

    return [
        ("Quantum: Superposition", superposition),
        ("Quantum: Entanglement", entanglement),
    ]


def integration_checks() -> list[tuple[str, Callable[[], str]]]:
    def pipeline() -> str:
        text = ("Maybe if you have time, could you look at this? "
                "I'm not angry, but it could be better.")
        result = analyze_text(text)
        categories = result.paradox_analysis.categories
        _expect(len(result.suggestions) == len(categories),
                "one suggestion per detected category expected")
        return f"categories={len(categories)} suggestions={len(result.suggestions)}"

    def degenerate_input() -> str:
        _expect(paradox_detector.detect("").risk_score == 0,
                "empty string must score 0")
        analyze_text("A" * 10_000)
        empty = analyze_text("")
        _expect(empty.quantum_analysis.coherence.state.value == "unknown",
                "empty input must have unknown coherence")
        _expect(
            suggestion_generator.generate(())[0].kind.value == "clarity_maintenance",
            "no matches must yield clarity_maintenance",
        )
        return "handled"

    return [
        ("Integration: Full pipeline", pipeline),
        ("Integration: Degenerate input", degenerate_input),
    ]


def performance_checks() -> list[tuple[str, Callable[[], str]]]:
    def throughput() -> str:
        text = ("This is a performance test with multiple paradox patterns "
                "to analyze properly and thoroughly.")
        start = time.perf_counter()
        for _ in range(1000):
            analyze_text(text)
        elapsed_ms = (time.perf_counter() - start) * 1000
        _expect(elapsed_ms < 5000, f"slow: {elapsed_ms:.0f}ms for 1000 analyses")
        return f"{elapsed_ms:.0f}ms for 1000 analyses"

    return [("Performance: Throughput", throughput)]


# ============================================================
# RUNNER
# ============================================================

def run(checks: list[tuple[str, Callable[[], str]]], report: CheckReport) -> None:
    for name, check in checks:
        start = time.perf_counter()
        try:
            detail = check()
        except Exception as e:
            report.failed += 1
            report.failures.append(name)
            print(f"FAIL: {name}")
            print(f"   Error: {e}")
            continue
        report.passed += 1
        duration = (time.perf_counter() - start) * 1000
        print(f"PASS: {name} ({duration:.1f}ms)  {detail}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="QuantumMind check runner")
    parser.add_argument("--quick", "-q", action="store_true",
                        help="Run paradox detection checks only")
    parser.add_argument("--paradox", "-p", action="store_true",
                        help="Run paradox detection checks")
    parser.add_argument("--quantum", action="store_true",
                        help="Run quantum report checks")
    parser.add_argument("--perf", action="store_true",
                        help="Run performance checks")
    args = parser.parse_args(argv)

    if args.quick or args.paradox:
        checks = paradox_checks()
    elif args.quantum:
        checks = quantum_checks()
    elif args.perf:
        checks = performance_checks()
    else:
        checks = (paradox_checks() + quantum_checks()
                  + performance_checks() + integration_checks())

    report = CheckReport()
    run(checks, report)

    print()
    print(f"Total: {report.total}  Passed: {report.passed}  Failed: {report.failed}")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
