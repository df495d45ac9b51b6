"""Shared fixtures: in-memory database sessions and catalog payload builders."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pokedex.db.models import Base
from pokedex.schemas.pokemon import PokemonAbility, PokemonDetail, PokemonStat
from pokedex.services.errors import CatalogHTTPStatusError


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session with freshly created tables."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", future=True, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest.fixture
def make_detail() -> Callable[..., PokemonDetail]:
    """Build canonical records with just the fields a test cares about."""

    def _build(
        pokeapi_id: int,
        name: str,
        abilities: list[str] | None = None,
        types: list[str] | None = None,
    ) -> PokemonDetail:
        ability_names = abilities if abilities is not None else ["static"]
        return PokemonDetail(
            id=pokeapi_id,
            name=name,
            types=types or ["normal"],
            abilities=[
                PokemonAbility(name=ability, is_hidden=index > 0)
                for index, ability in enumerate(ability_names)
            ],
            stats=[PokemonStat(name="hp", value=45), PokemonStat(name="speed", value=90)],
            sprite=f"https://img.example.test/{pokeapi_id}.png",
            height=4,
            weight=60,
        )

    return _build


def build_raw_detail(
    pokeapi_id: int = 1,
    name: str = "bulbasaur",
    **overrides: Any,
) -> dict[str, Any]:
    """Return a nested payload shaped like ``GET /pokemon/{id}`` on PokeAPI."""

    payload: dict[str, Any] = {
        "id": pokeapi_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "base_experience": 64,
        "types": [
            {"slot": 1, "type": {"name": "grass", "url": "https://pokeapi.co/api/v2/type/12/"}},
            {"slot": 2, "type": {"name": "poison", "url": "https://pokeapi.co/api/v2/type/4/"}},
        ],
        "abilities": [
            {
                "ability": {"name": "overgrow", "url": "https://pokeapi.co/api/v2/ability/65/"},
                "is_hidden": False,
                "slot": 1,
            },
            {
                "ability": {"name": "chlorophyll", "url": "https://pokeapi.co/api/v2/ability/34/"},
                "is_hidden": True,
                "slot": 3,
            },
        ],
        "stats": [
            {"base_stat": 45, "effort": 0, "stat": {"name": "hp", "url": "https://pokeapi.co/api/v2/stat/1/"}},
            {"base_stat": 49, "effort": 0, "stat": {"name": "attack", "url": "https://pokeapi.co/api/v2/stat/2/"}},
            {"base_stat": 45, "effort": 0, "stat": {"name": "speed", "url": "https://pokeapi.co/api/v2/stat/6/"}},
        ],
        "sprites": {
            "front_default": f"https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{pokeapi_id}.png",
            "back_default": None,
        },
    }
    payload.update(overrides)
    return payload


def build_raw_list(names: list[str], count: int = 1302) -> dict[str, Any]:
    return {
        "count": count,
        "next": None,
        "previous": None,
        "results": [
            {"name": name, "url": f"https://pokeapi.co/api/v2/pokemon/{index + 1}/"}
            for index, name in enumerate(names)
        ],
    }


@pytest.fixture
def raw_detail() -> Callable[..., dict[str, Any]]:
    return build_raw_detail


@pytest.fixture
def raw_list() -> Callable[..., dict[str, Any]]:
    return build_raw_list


class StubCatalogClient:
    """Catalog client double that counts calls and can be told to fail."""

    def __init__(self) -> None:
        self.details: dict[str, dict[str, Any]] = {}
        self.list_payload: dict[str, Any] = build_raw_list(["bulbasaur", "ivysaur"])
        self.list_calls: list[tuple[int, int]] = []
        self.detail_calls: list[str] = []
        self.error: Exception | None = None

    def add(self, payload: dict[str, Any]) -> None:
        self.details[str(payload["id"])] = payload
        self.details[payload["name"]] = payload

    async def fetch_list(self, *, offset: int, limit: int) -> dict[str, Any]:
        self.list_calls.append((offset, limit))
        if self.error is not None:
            raise self.error
        return self.list_payload

    async def fetch_detail(self, identifier: str | int) -> dict[str, Any]:
        self.detail_calls.append(str(identifier))
        if self.error is not None:
            raise self.error
        try:
            return self.details[str(identifier)]
        except KeyError:
            raise CatalogHTTPStatusError(404, f"/pokemon/{identifier}") from None


@pytest.fixture
def stub_catalog() -> StubCatalogClient:
    return StubCatalogClient()
