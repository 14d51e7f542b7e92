"""
Gemini provider for the optional AI signal.

Uses the google.genai SDK. The client is built on first use, so the
service starts without an API key; only a "full" analysis needs one.

A call runs through an attempt plan: the configured model with one
retry on transient errors, then the fallback model once. A breaker
counts calls whose whole plan failed and short-circuits further calls
while open.
"""

from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from google import genai
from google.genai import types

from quantummind.config import settings
from quantummind.llm import Completion, LLMProvider

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "gemini-2.5-flash"
PRIMARY_ATTEMPTS = 2
FALLBACK_ATTEMPTS = 1

_TRANSIENT_MARKERS = (
    "429", "500", "503", "rate", "quota", "timeout",
    "connection", "unavailable", "overloaded",
)


def is_transient(error: Exception) -> bool:
    """Whether an SDK error is worth retrying against the same model."""
    message = str(error).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)


class CircuitOpenError(Exception):
    """The breaker is open; the provider is not being called."""


class BreakerState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


class CircuitBreaker:
    """
    Opens after `failure_threshold` consecutive failed calls.

    Once `recovery_timeout` seconds have passed it reports half-open and
    lets the next call through; a success closes it again, a failure
    reopens it.
    """

    def __init__(self, failure_threshold: int = 3, recovery_timeout: float = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.consecutive_failures = 0
        self._opened_at: Optional[float] = None

    @property
    def state(self) -> BreakerState:
        if self._opened_at is None:
            return BreakerState.CLOSED
        if time.monotonic() - self._opened_at >= self.recovery_timeout:
            return BreakerState.HALF_OPEN
        return BreakerState.OPEN

    @property
    def is_open(self) -> bool:
        return self.state is BreakerState.OPEN

    def record_success(self) -> None:
        self.consecutive_failures = 0
        self._opened_at = None

    def record_failure(self) -> None:
        self.consecutive_failures += 1
        if self.consecutive_failures < self.failure_threshold:
            return
        self._opened_at = time.monotonic()
        logger.warning(
            "AI signal breaker open after %d failures, retry in %ss",
            self.consecutive_failures, self.recovery_timeout,
        )


class GeminiProvider(LLMProvider):
    """Google Gemini with a fallback model and a circuit breaker."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key or settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.circuit_breaker = CircuitBreaker()
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise RuntimeError("GEMINI_API_KEY not set; AI signal unavailable")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def _attempt_plan(self) -> list[tuple[str, int]]:
        plan = [(self.model, PRIMARY_ATTEMPTS)]
        if self.model != FALLBACK_MODEL:
            plan.append((FALLBACK_MODEL, FALLBACK_ATTEMPTS))
        return plan

    async def complete(self, prompt: str, temperature: float = 0.2) -> Completion:
        """
        Walk the attempt plan until a model answers.

        Every failed SDK call is counted and returned with the answer, so
        the caller can weigh a reply that needed the fallback model.
        """
        if self.circuit_breaker.is_open:
            raise CircuitOpenError("AI signal breaker is open")

        client = self._get_client()
        config = types.GenerateContentConfig(
            temperature=temperature,
            response_mime_type="application/json",
        )

        failures = 0
        last_error: Optional[Exception] = None
        for model, attempts in self._attempt_plan():
            for attempt in range(attempts):
                if attempt:
                    await asyncio.sleep(2 ** (attempt - 1))
                try:
                    response = await client.aio.models.generate_content(
                        model=model, contents=prompt, config=config,
                    )
                except Exception as e:
                    failures += 1
                    last_error = e
                    logger.warning(
                        "Gemini model %s failed: %s", model, e,
                        extra={"error": str(e), "error_type": type(e).__name__},
                    )
                    if not is_transient(e):
                        break
                    continue
                self.circuit_breaker.record_success()
                return Completion(
                    text=response.text or "", model=model, failed_attempts=failures,
                )

        self.circuit_breaker.record_failure()
        raise last_error
