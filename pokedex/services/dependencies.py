"""FastAPI dependency wiring for backend services.

The application lifespan builds one catalog client, one response cache and
one lock registry and stores them on ``app.state``. The factories below only
hand those shared instances to the per-request services, so tests can swap
any of them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from pokedex.services.caching import ResponseCache
from pokedex.services.catalog_client import PokeApiClient
from pokedex.services.favorites import KeyedLocks
from pokedex.services.pokemon_service import PokemonService
from pokedex.settings import AppSettings, get_settings


def get_catalog_client(request: Request) -> PokeApiClient:
    return request.app.state.catalog_client


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_favorite_locks(request: Request) -> KeyedLocks:
    return request.app.state.favorite_locks


def get_pokemon_service(
    client: PokeApiClient = Depends(get_catalog_client),
    cache: ResponseCache = Depends(get_response_cache),
    config: AppSettings = Depends(get_settings),
) -> PokemonService:
    """Provide a :class:`PokemonService` bound to the shared client and cache."""

    return PokemonService(client, cache, ttl_seconds=config.catalog_cache_ttl_seconds)


__all__ = [
    "get_catalog_client",
    "get_favorite_locks",
    "get_pokemon_service",
    "get_response_cache",
]
