"""
QuantumMind API

POST /analyze        — Analyze one message (local, or full with AI signal)
POST /analyze/batch  — Analyze up to 100 messages concurrently
GET  /patterns       — The paradox pattern table
GET  /health         — Liveness, version and cache statistics
"""

from __future__ import annotations

import asyncio
import json
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from quantummind.analyzer import MIN_TEXT_LENGTH, analyze_text
from quantummind.cache import CACHED_MARKER, analysis_cache
from quantummind.config import settings
from quantummind.library import pattern_library
from quantummind.llm import LLMProvider
from quantummind.llm.factory import get_provider
from quantummind.logging import get_logger, setup_logging
from quantummind.signals import AISignal, fetch_ai_signal
from quantummind.schemas.analysis import (
    AnalyzeBatchRequest,
    AnalyzeBatchResponse,
    AnalyzeRequest,
    AnalyzeResponse,
    HealthResponse,
    PatternsResponse,
)

logger = get_logger("api")

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}
_UNLOGGED_PATHS = frozenset({"/health"})


# ============================================================
# APP
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("QuantumMind API up", extra={"version": settings.VERSION})
    yield
    logger.info("QuantumMind API down", extra={"version": settings.VERSION})


app = FastAPI(
    title="QuantumMind API",
    description="Rule-based paradox and clarity analysis for short messages",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    """Structured 500. The exception is logged, never returned."""
    logger.error(
        "Request failed",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "method": request.method,
            "path": request.url.path,
        },
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"detail": "Analysis failed."})


# ============================================================
# AI SIGNAL
# ============================================================

_llm: Optional[LLMProvider] = None


def _get_llm() -> Optional[LLMProvider]:
    """Provider for full mode, built on first use. None if unavailable."""
    global _llm
    if _llm is not None:
        return _llm
    try:
        _llm = get_provider(settings.LLM_PROVIDER)
    except Exception as e:
        logger.warning(
            "No LLM provider, full mode degrades to local",
            extra={"error": str(e), "error_type": type(e).__name__},
        )
    return _llm


def _client_signal(request: AnalyzeRequest) -> Optional[AISignal]:
    if request.ai_signal is None:
        return None
    return AISignal.from_payload(
        request.ai_signal.model_dump(by_alias=True),
        api_errors=request.ai_signal.api_errors,
        source="client",
    )


# ============================================================
# ANALYSIS
# ============================================================

def _cache_discriminator(request: AnalyzeRequest) -> str:
    """Mode and client signal: everything besides text and context that shapes the result."""
    client_signal = request.ai_signal.model_dump(by_alias=True) if request.ai_signal else None
    return json.dumps([request.mode, client_signal], sort_keys=True)


async def _analyze_one(request: AnalyzeRequest) -> dict:
    """
    Cached analysis of one request.

    The cache is consulted before the provider, so a repeated full-mode
    request costs no LLM call. A full-mode result whose provider call
    failed is not stored; the next identical request tries again.
    """
    discriminator = _cache_discriminator(request)
    hit = await analysis_cache.get(request.text, request.context, discriminator)
    if hit is not None:
        hit.pop(CACHED_MARKER)
        return {**hit, "cached": True}

    fetched = None
    if request.mode == "full" and len(request.text.strip()) >= MIN_TEXT_LENGTH:
        fetched = await fetch_ai_signal(request.text, _get_llm(), request.context)
    signal = fetched or _client_signal(request)

    result = analyze_text(request.text, request.context, ai_signal=signal).to_dict()
    if request.mode == "local" or fetched is not None:
        await analysis_cache.put(request.text, request.context, result, discriminator)
    return result


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest):
    """Paradoxes, hidden meanings, quantum report and suggestions for one message."""
    started = time.perf_counter()
    result = await _analyze_one(request)

    logger.info(
        "Analyzed message",
        extra={
            "risk_score": result["riskScore"],
            "mode": request.mode,
            "platform": result["platformHint"],
            "matches_count": result["paradoxAnalysis"]["totalPatterns"],
            "coherence": result["quantumAnalysis"]["coherence"]["value"],
            "signal_source": result["signalSource"],
            "cached": result.get("cached", False),
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return result


@app.post("/analyze/batch", response_model=AnalyzeBatchResponse)
async def analyze_batch(request: AnalyzeBatchRequest):
    """
    Analyze every item concurrently. A failed item is replaced by the
    empty analysis for its context, so results stay index-aligned.
    """
    outcomes = await asyncio.gather(
        *(_analyze_one(item) for item in request.items),
        return_exceptions=True,
    )

    results = []
    analyzed = 0
    for item, outcome in zip(request.items, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning(
                "Batch item failed",
                extra={"error": str(outcome), "error_type": type(outcome).__name__},
            )
            outcome = analyze_text("", item.context).to_dict()
        else:
            analyzed += 1
        results.append(outcome)

    logger.info(
        f"Analyzed batch: {analyzed}/{len(results)}",
        extra={"matches_count": sum(r["paradoxAnalysis"]["totalPatterns"] for r in results)},
    )
    return {"results": results, "total": len(results), "analyzed": analyzed}


# ============================================================
# META
# ============================================================

@app.get("/patterns", response_model=PatternsResponse)
async def patterns():
    table = pattern_library.get_patterns()
    return {"version": settings.VERSION, "totalPatterns": len(table), "patterns": table}


@app.get("/health", response_model=HealthResponse)
async def health():
    return {
        "status": "operational",
        "version": settings.VERSION,
        "llmProvider": settings.LLM_PROVIDER,
        "cache": analysis_cache.stats,
    }


# ============================================================
# MIDDLEWARE
# ============================================================

def _too_large() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"detail": f"Request body exceeds {settings.MAX_BODY_BYTES} bytes."},
    )


@app.middleware("http")
async def stamp_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-QuantumMind-Version"] = settings.VERSION
    for name, value in _SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """413 when the declared or actual body is over the limit."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > settings.MAX_BODY_BYTES:
        return _too_large()
    if request.method == "POST" and len(await request.body()) > settings.MAX_BODY_BYTES:
        return _too_large()
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    if request.url.path in _UNLOGGED_PATHS:
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "Request served",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
        },
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
