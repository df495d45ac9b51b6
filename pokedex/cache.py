from __future__ import annotations

import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

logger = logging.getLogger(__name__)

_DEFAULT_TTL_SECONDS = 3600
_LIST_PREFIX = "pokemon:list"
_DETAIL_PREFIX = "pokemon:detail"


def list_key(page: int, limit: int) -> str:
    """Key for one catalog page; ``page`` and ``limit`` fully determine the result."""

    return f"{_LIST_PREFIX}:{int(page)}:{int(limit)}"


def detail_key(identifier: str | int) -> str:
    """Key for one catalog record, verbatim on the identifier the caller used."""

    return f"{_DETAIL_PREFIX}:{identifier}"


def _is_redis_connection_error(exc: BaseException) -> bool:
    """Return ``True`` when ``exc`` means the Redis server cannot be reached."""

    return isinstance(exc, (RedisConnectionError, RedisTimeoutError))


async def connect_redis(url: str) -> Redis | None:
    """Open a Redis client for ``url`` or return ``None`` when it is unreachable.

    The caller owns the returned client and must pass it to :func:`close_redis`
    on shutdown.
    """

    client: Redis = Redis.from_url(url, decode_responses=True, encoding="utf-8")
    try:
        await client.ping()
    except Exception as exc:  # type: ignore[broad-except]
        if _is_redis_connection_error(exc):
            logger.warning(
                "Redis connection failed: %s. Falling back to in-process caching.", exc
            )
            await client.aclose()
            return None
        raise
    logger.info("Redis connection established successfully")
    return client


async def close_redis(client: Redis | None) -> None:
    """Close ``client`` gracefully when one was opened."""

    if client is not None:
        await client.aclose()


class CacheClient:
    """JSON facade over an optional Redis connection.

    Connection failures are logged and treated as cache misses so the service
    keeps answering from the upstream catalog; any other Redis error propagates.
    """

    def __init__(self, redis: Redis | None) -> None:
        self._redis = redis

    async def get_json(self, key: str) -> Any:
        if self._redis is None:
            return None
        try:
            payload = await self._redis.get(key)
            if payload is None:
                return None
            try:
                return json.loads(payload)
            except json.JSONDecodeError:
                logger.warning("Discarding undecodable cache payload for key %s", key)
                return None
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                logger.debug("Redis get failed for key %s: %s", key, exc)
                return None
            raise

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        try:
            encoded = json.dumps(value, default=str)
            if ttl is None:
                ttl = _DEFAULT_TTL_SECONDS
            await self._redis.set(key, encoded, ex=ttl)
        except Exception as exc:  # type: ignore[broad-except]
            if _is_redis_connection_error(exc):
                logger.debug("Redis set failed for key %s: %s", key, exc)
                return
            raise


__all__ = [
    "CacheClient",
    "close_redis",
    "connect_redis",
    "detail_key",
    "list_key",
]
