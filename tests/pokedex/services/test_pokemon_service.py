from __future__ import annotations

import pytest

from pokedex.services.caching import ResponseCache
from pokedex.services.errors import CatalogNetworkError, CatalogTimeoutError
from pokedex.services.pokemon_service import PokemonService


@pytest.fixture
def service(stub_catalog) -> PokemonService:
    return PokemonService(stub_catalog, ResponseCache(), ttl_seconds=3600)


@pytest.mark.asyncio
async def test_list_page_translates_page_to_offset(service, stub_catalog) -> None:
    page = await service.get_pokemons(3, 20)

    assert page is not None
    assert page.count == 1302
    assert [entry.name for entry in page.results] == ["bulbasaur", "ivysaur"]
    assert stub_catalog.list_calls == [(40, 20)]


@pytest.mark.asyncio
async def test_repeated_list_requests_hit_upstream_once(service, stub_catalog) -> None:
    first = await service.get_pokemons(1, 20)
    second = await service.get_pokemons(1, 20)

    assert first == second
    assert stub_catalog.list_calls == [(0, 20)]


@pytest.mark.asyncio
async def test_distinct_pages_are_cached_separately(service, stub_catalog) -> None:
    await service.get_pokemons(1, 20)
    await service.get_pokemons(2, 20)
    await service.get_pokemons(1, 10)

    assert stub_catalog.list_calls == [(0, 20), (20, 20), (0, 10)]


@pytest.mark.asyncio
async def test_unavailable_list_returns_none_and_is_retried(service, stub_catalog) -> None:
    stub_catalog.error = CatalogTimeoutError("timed out")

    assert await service.get_pokemons(1, 20) is None

    stub_catalog.error = None
    page = await service.get_pokemons(1, 20)

    assert page is not None
    assert len(stub_catalog.list_calls) == 2


@pytest.mark.asyncio
async def test_detail_is_normalized_and_cached(service, stub_catalog, raw_detail) -> None:
    stub_catalog.add(raw_detail(1, "bulbasaur"))

    first = await service.get_pokemon_detail("bulbasaur")
    second = await service.get_pokemon_detail("bulbasaur")

    assert first is not None
    assert first == second
    assert first.types == ["grass", "poison"]
    assert [ability.name for ability in first.abilities] == ["overgrow", "chlorophyll"]
    assert stub_catalog.detail_calls == ["bulbasaur"]


@pytest.mark.asyncio
async def test_detail_cache_keys_follow_the_identifier(service, stub_catalog, raw_detail) -> None:
    stub_catalog.add(raw_detail(1, "bulbasaur"))

    by_name = await service.get_pokemon_detail("bulbasaur")
    by_id = await service.get_pokemon_detail(1)

    assert by_name == by_id
    assert stub_catalog.detail_calls == ["bulbasaur", "1"]


@pytest.mark.asyncio
async def test_unknown_detail_returns_none(service, stub_catalog) -> None:
    assert await service.get_pokemon_detail("missingno") is None
    assert await service.get_pokemon_detail("missingno") is None
    assert stub_catalog.detail_calls == ["missingno", "missingno"]


@pytest.mark.asyncio
async def test_malformed_detail_returns_none(service, stub_catalog, raw_detail) -> None:
    payload = raw_detail(7, "squirtle")
    payload.pop("height")
    stub_catalog.add(payload)

    assert await service.get_pokemon_detail("squirtle") is None


@pytest.mark.asyncio
async def test_network_failure_leaves_no_cache_entry(stub_catalog, raw_detail) -> None:
    cache = ResponseCache()
    service = PokemonService(stub_catalog, cache)
    stub_catalog.error = CatalogNetworkError("connection reset")

    assert await service.get_pokemon_detail(25) is None
    assert await cache.get("pokemon:detail:25") is None
