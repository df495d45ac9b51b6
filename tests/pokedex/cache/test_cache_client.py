from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

import pokedex.cache as cache
from pokedex.cache import CacheClient, detail_key, list_key


class InMemoryRedis:
    """Lightweight async Redis double used for cache client tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._ttl: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        self._store[key] = value
        self._ttl[key] = ex


@pytest.mark.asyncio
async def test_cache_client_round_trip() -> None:
    """CacheClient should round-trip JSON payloads and honour TTL settings."""

    fake_redis = InMemoryRedis()
    client = CacheClient(fake_redis)  # type: ignore[arg-type]

    await client.set_json("demo", {"value": 42}, ttl=120)

    assert json.loads(fake_redis._store["demo"]) == {"value": 42}
    assert fake_redis._ttl["demo"] == 120
    assert await client.get_json("demo") == {"value": 42}
    assert await client.get_json("missing") is None


@pytest.mark.asyncio
async def test_cache_client_without_redis_is_a_no_op() -> None:
    client = CacheClient(redis=None)

    await client.set_json("demo", {"value": 1})

    assert await client.get_json("demo") is None


@pytest.mark.asyncio
async def test_undecodable_payload_is_treated_as_miss() -> None:
    fake_redis = InMemoryRedis()
    fake_redis._store["broken"] = "{not json"
    client = CacheClient(fake_redis)  # type: ignore[arg-type]

    assert await client.get_json("broken") is None


@pytest.mark.asyncio
async def test_cache_handles_redis_connection_error() -> None:
    """Connection failures degrade to a cache miss instead of failing the request."""

    mock_redis = MagicMock()
    mock_redis.get = AsyncMock(side_effect=RedisConnectionError("Connection failed"))
    mock_redis.set = AsyncMock(side_effect=RedisConnectionError("Connection failed"))
    client = CacheClient(mock_redis)

    assert await client.get_json("test_key") is None
    await client.set_json("test_key", {"value": 1})


@pytest.mark.asyncio
async def test_cache_only_catches_redis_errors() -> None:
    """Non-Redis exceptions must not be suppressed."""

    mock_redis = MagicMock()
    mock_redis.get = AsyncMock(side_effect=ValueError("Not a Redis error"))
    client = CacheClient(mock_redis)

    with pytest.raises(ValueError):
        await client.get_json("test_key")


@pytest.mark.asyncio
async def test_connect_redis_returns_none_when_unreachable(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    fake_client = MagicMock()
    fake_client.ping = AsyncMock(side_effect=RedisConnectionError("refused"))
    fake_client.aclose = AsyncMock()
    monkeypatch.setattr(cache.Redis, "from_url", MagicMock(return_value=fake_client))

    assert await cache.connect_redis("redis://unreachable:6379/0") is None
    fake_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_connect_redis_returns_client_after_successful_ping(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    fake_client = MagicMock()
    fake_client.ping = AsyncMock(return_value=True)
    monkeypatch.setattr(cache.Redis, "from_url", MagicMock(return_value=fake_client))

    assert await cache.connect_redis("redis://localhost:6379/0") is fake_client


def test_key_builders_are_deterministic_and_namespaced() -> None:
    assert list_key(2, 20) == "pokemon:list:2:20"
    assert list_key(2, 20) == list_key(2, 20)
    assert list_key(1, 20) != list_key(2, 20)
    assert list_key(2, 10) != list_key(2, 20)
    assert detail_key("pikachu") == "pokemon:detail:pikachu"
    assert detail_key(25) == "pokemon:detail:25"


def test_list_and_detail_keys_never_collide() -> None:
    list_keys = {list_key(page, limit) for page in range(1, 5) for limit in (1, 20, 100)}
    detail_keys = {detail_key(identifier) for identifier in ("1", "list", "list:1:20", "25")}

    assert list_keys.isdisjoint(detail_keys)
    assert all(key.startswith("pokemon:detail:") for key in detail_keys)
