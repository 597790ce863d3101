"""TTL cache for resolve results, keyed by repo URL and identity filter."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from cachetools import LRUCache
from loguru import logger

from auths_resolver.core.constants import DEFAULT_CACHE_MAXSIZE, DEFAULT_CACHE_TTL_SECONDS
from auths_resolver.models import ResolveResult


class ResolveCache:
    """Memoizes ResolveResult values, failures included, for ``ttl`` seconds.

    Failed results are cached like successes so a repository known to lack
    identity data is not re-queried on every page render. An entry is served
    up to and including its expiry instant; ``maxsize`` bounds the store with
    LRU eviction.
    """

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        maxsize: int = DEFAULT_CACHE_MAXSIZE,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._timer = timer
        self._cache: LRUCache[str, tuple[ResolveResult, float]] = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    @staticmethod
    def make_key(repo_url: str, identity_filter: str | None = None) -> str:
        return f"{repo_url}|{identity_filter or ''}"

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> ResolveResult | None:
        """Return the cached result, or None if absent or expired (expired entries are evicted)."""
        result = None
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                if self._timer() <= entry[1]:
                    result = entry[0]
                else:
                    del self._cache[key]
        logger.debug("Resolve cache {} for {}", "hit" if result is not None else "miss", key)
        return result

    def set(self, key: str, result: ResolveResult) -> None:
        """Store result with a fresh expiry, replacing any previous entry."""
        with self._lock:
            self._cache[key] = (result, self._timer() + self._ttl)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _expire(self) -> None:
        now = self._timer()
        for key in [k for k, (_, expires_at) in self._cache.items() if now > expires_at]:
            del self._cache[key]

    def __len__(self) -> int:
        with self._lock:
            self._expire()
            return len(self._cache)
