"""
Analysis Result Cache

In-memory LRU cache with a TTL for serialized analysis results.
Key = SHA-256 over text, context (sorted JSON) and an extra
discriminator such as the mode and serialized AI signal.

Entries are purely derived: evicting one only means the next
identical request recomputes it. Access is serialized with an
asyncio lock, so one instance is shared across requests.

Usage:
    from quantummind.cache import analysis_cache
    hit = await analysis_cache.get(text, context, extra)
    if hit is None:
        result = analyze_text(text, context).to_dict()
        await analysis_cache.put(text, context, result, extra)
"""

from __future__ import annotations

import asyncio
import copy
import hashlib
import json
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Mapping, Optional

from quantummind.config import settings

CACHED_MARKER = "_cached"


@dataclass(frozen=True)
class _Entry:
    stored_at: float
    result: dict


def cache_key(
    text: str, context: Optional[Mapping[str, str]] = None, extra: str = "",
) -> str:
    """Stable digest of one analysis request."""
    payload = json.dumps(
        [text, dict(context or {}), extra], sort_keys=True, default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class AnalysisCache:
    """LRU cache of result dicts. Expired entries are dropped on read."""

    def __init__(
        self,
        ttl_seconds: int = settings.CACHE_TTL_SECONDS,
        max_entries: int = settings.CACHE_MAX_ENTRIES,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _expired(self, entry: _Entry) -> bool:
        return time.monotonic() - entry.stored_at > self.ttl_seconds

    async def get(
        self,
        text: str,
        context: Optional[Mapping[str, str]] = None,
        extra: str = "",
    ) -> Optional[dict]:
        """Return a deep copy of the stored result marked as cached, or None."""
        key = cache_key(text, context, extra)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._expired(entry):
                del self._entries[key]
                entry = None
            if entry is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return {**copy.deepcopy(entry.result), CACHED_MARKER: True}

    async def put(
        self,
        text: str,
        context: Optional[Mapping[str, str]],
        result: dict,
        extra: str = "",
    ) -> None:
        key = cache_key(text, context, extra)
        async with self._lock:
            self._entries[key] = _Entry(time.monotonic(), copy.deepcopy(result))
            self._entries.move_to_end(key)
            while len(self._entries) > max(self.max_entries, 0):
                self._entries.popitem(last=False)
                self._evictions += 1

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._evictions = 0

    @property
    def stats(self) -> dict:
        lookups = self._hits + self._misses
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
        }


analysis_cache = AnalysisCache()
