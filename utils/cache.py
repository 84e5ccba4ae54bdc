"""In-process response cache with TTL staleness and substring invalidation."""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from fastapi import Request

logger = logging.getLogger("ResponseCache")


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    stored_at: float


class ResponseCache:
    """
    Maps a request identity (path + query) to a previously computed payload.

    Entries older than ``ttl_seconds`` read as absent but stay stored until they
    are overwritten or invalidated.
    """

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"Cache miss: {key}")
            return default
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            logger.debug(f"Cache stale: {key}")
            return default
        logger.debug(f"Cache hit: {key}")
        return entry.payload

    def put(self, key: str, payload: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, payload=payload, stored_at=self._clock())

    def invalidate_by_substring(self, fragment: str) -> int:
        """Drop every entry whose key contains ``fragment``; returns the number removed."""
        with self._lock:
            stale_keys = [key for key in self._entries if fragment in key]
            for key in stale_keys:
                del self._entries[key]
        if stale_keys:
            logger.info(f"Invalidated {len(stale_keys)} cached response(s) matching '{fragment}'")
        return len(stale_keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _escape_query_part(part: str) -> str:
    # Only separators are escaped; "+" and digits stay literal for phone matching
    return part.replace("%", "%25").replace("&", "%26").replace("=", "%3D")


def cache_key(request: Request) -> str:
    """Canonical cache key: path plus the decoded query parameters the handler sees."""
    params = request.query_params.multi_items()
    if not params:
        return request.url.path
    query = "&".join(f"{_escape_query_part(name)}={_escape_query_part(value)}" for name, value in params)
    return f"{request.url.path}?{query}"


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache
