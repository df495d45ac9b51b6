"""Cache-aside response cache shared by the catalog-facing services.

:class:`ResponseCache` layers an in-process dictionary under the optional
Redis tier exposed by :class:`~pokedex.cache.CacheClient`. Values are the
JSON-serialisable payloads produced by the ``compute`` callables, so both tiers
hold the same representation.

Concurrent misses on one key share a single in-flight computation. Failures
(raised exceptions) and ``None`` results are handed back to every waiter but
never stored, so the next call recomputes unconditionally.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pokedex.cache import CacheClient

logger = logging.getLogger(__name__)

Compute = Callable[[], Awaitable[Any]]
Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    expires_at: float


class ResponseCache:
    """TTL-keyed two-tier cache with per-key single-flight computation.

    One instance is created per application and shared by reference; the
    in-process tier and the in-flight registry belong to that instance.
    """

    def __init__(
        self,
        client: CacheClient | None = None,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        self._client = client
        self._clock = clock
        self._local: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Task[Any]] = {}

    async def get(self, key: str) -> Any | None:
        """Return the live cached value for ``key`` from either tier."""

        if self._client is not None:
            cached = await self._client.get_json(key)
            if cached is not None:
                return cached
        return self._local_get(key)

    async def get_or_compute(self, key: str, ttl_seconds: int, compute: Compute) -> Any:
        """Return the cached value for ``key`` or compute, store and return it.

        ``compute`` runs at most once per miss, however many callers are
        waiting on ``key``. A caller that is cancelled while waiting does not
        cancel the shared computation.
        """

        cached = await self.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        task = self._in_flight.get(key)
        if task is None:
            logger.debug("Cache miss for %s; computing", key)
            task = asyncio.create_task(self._compute_and_store(key, ttl_seconds, compute))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug("Joining in-flight computation for %s", key)

        return await asyncio.shield(task)

    def clear_local(self) -> None:
        """Drop every in-process entry (Redis entries expire on their own)."""

        self._local.clear()

    async def _compute_and_store(self, key: str, ttl_seconds: int, compute: Compute) -> Any:
        value = await compute()
        if value is None:
            return None

        now = self._clock()
        self._evict_expired(now)
        self._local[key] = CacheEntry(value=value, expires_at=now + ttl_seconds)
        if self._client is not None:
            try:
                await self._client.set_json(key, value, ttl=ttl_seconds)
            except Exception as exc:  # pragma: no cover - cache backend issues
                logger.warning("Failed to persist cache entry for key %s: %s", key, exc)
        return value

    def _local_get(self, key: str) -> Any | None:
        entry = self._local.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._local.pop(key, None)
            return None
        return entry.value

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, entry in self._local.items() if entry.expires_at <= now]
        for key in expired:
            del self._local[key]

    def _forget(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Retrieve the outcome so an unobserved failure is not reported as lost.
        if not task.cancelled():
            task.exception()


__all__ = ["CacheEntry", "ResponseCache"]
