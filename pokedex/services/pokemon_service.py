"""Catalog lookups exposed to the API layer.

Both operations resolve through :class:`ResponseCache` with a compute step of
"fetch from PokeAPI, then normalize". Upstream trouble never raises out of
this module: callers receive ``None`` and pick the HTTP status themselves.
"""

from __future__ import annotations

import logging
from typing import Protocol

from pokedex.cache import detail_key, list_key
from pokedex.schemas.pokemon import PokemonDetail, PokemonListPage
from pokedex.services.caching import ResponseCache
from pokedex.services.errors import CatalogError
from pokedex.services.normalizer import normalize_detail, normalize_list
from pokedex.settings import DEFAULT_CATALOG_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class CatalogClientProtocol(Protocol):
    async def fetch_list(self, *, offset: int, limit: int) -> dict: ...

    async def fetch_detail(self, identifier: str | int) -> dict: ...


class PokemonService:
    def __init__(
        self,
        client: CatalogClientProtocol,
        cache: ResponseCache,
        *,
        ttl_seconds: int = DEFAULT_CATALOG_CACHE_TTL_SECONDS,
    ) -> None:
        self._client = client
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def get_pokemons(self, page: int, limit: int) -> PokemonListPage | None:
        """Return one catalog page (1-based ``page``) or ``None`` when unavailable."""

        offset = (page - 1) * limit

        async def compute() -> dict:
            payload = await self._client.fetch_list(offset=offset, limit=limit)
            return normalize_list(payload).model_dump(mode="json")

        try:
            cached = await self._cache.get_or_compute(
                list_key(page, limit), self._ttl_seconds, compute
            )
        except CatalogError as exc:
            logger.error(
                "PokeAPI list unavailable: page=%s limit=%s error=%s", page, limit, exc
            )
            return None
        return PokemonListPage.model_validate(cached)

    async def get_pokemon_detail(self, identifier: str | int) -> PokemonDetail | None:
        """Return the canonical record for an id or name, or ``None`` when unavailable."""

        async def compute() -> dict:
            payload = await self._client.fetch_detail(identifier)
            return normalize_detail(payload).model_dump(mode="json")

        try:
            cached = await self._cache.get_or_compute(
                detail_key(identifier), self._ttl_seconds, compute
            )
        except CatalogError as exc:
            logger.error(
                "PokeAPI detail unavailable: identifier=%s error=%s", identifier, exc
            )
            return None
        return PokemonDetail.model_validate(cached)


__all__ = ["CatalogClientProtocol", "PokemonService"]
