"""Business logic powering the favorites API endpoints.

Persistence-oriented operations are delegated to :class:`FavoritesPersistence`
and the derived views (ability filter, distinct-ability index, schema
conversion) to :class:`FavoritesViews`.

Favorite state per upstream id is a two-state machine (not favorited /
favorited) driven only by :meth:`FavoritesService.toggle`. The check-then-act
sequence inside a toggle runs under a per-id lock shared by the whole process
and is committed before the lock is released; the unique constraint on
``pokeapi_id`` guards against writers in other processes.
"""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.db.connection import get_db
from pokedex.schemas.favorites import FavoritePokemon, ToggleFavoriteResult
from pokedex.schemas.pokemon import PokemonDetail
from pokedex.services.dependencies import get_favorite_locks, get_pokemon_service
from pokedex.services.favorites import FavoritesPersistence, FavoritesViews, KeyedLocks
from pokedex.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)


class FavoritesService:
    """Orchestrates persistence, derived views and toggle serialisation."""

    def __init__(
        self,
        *,
        persistence: FavoritesPersistence,
        views: FavoritesViews,
        locks: KeyedLocks,
        catalog: PokemonService | None = None,
    ) -> None:
        self._persistence = persistence
        self._views = views
        self._locks = locks
        self._catalog = catalog

    async def toggle(self, detail: PokemonDetail) -> ToggleFavoriteResult:
        """Remove the favorite for ``detail.id`` if present, otherwise add it.

        ``detail`` should come from a fresh catalog lookup. An existing favorite
        is removed as-is; its stored snapshot is never refreshed.
        """

        async with self._locks.hold(detail.id):
            removed = await self._persistence.delete_by_pokeapi_id(detail.id)
            if removed:
                await self._persistence.commit()
                logger.info("Removed pokemon %s (%s) from favorites", detail.id, detail.name)
                return ToggleFavoriteResult(added=False)

            favorite = await self._persistence.insert(detail)
            await self._persistence.commit()
            logger.info("Added pokemon %s (%s) to favorites", detail.id, detail.name)
            return ToggleFavoriteResult(added=True, favorite=self._views.to_schema(favorite))

    async def toggle_by_identifier(self, identifier: str | int) -> ToggleFavoriteResult | None:
        """Resolve ``identifier`` through the catalog, then toggle it.

        Returns ``None`` without touching the store when the catalog cannot
        provide the record.
        """

        if self._catalog is None:
            raise RuntimeError("FavoritesService was built without a catalog service")

        detail = await self._catalog.get_pokemon_detail(identifier)
        if detail is None:
            return None
        return await self.toggle(detail)

    async def is_favorite(self, pokeapi_id: int) -> bool:
        return await self._persistence.exists(pokeapi_id)

    async def list_all(self) -> list[FavoritePokemon]:
        """Return every favorite; callers must not rely on the order."""

        return self._views.to_schemas(await self._persistence.list_all())

    async def search_by_name(self, query: str) -> list[FavoritePokemon]:
        """Case-insensitive substring search; an empty ``query`` returns everything."""

        if query == "":
            return await self.list_all()
        return self._views.to_schemas(await self._persistence.search_by_name(query))

    async def filter_by_ability(self, ability_name: str) -> list[FavoritePokemon]:
        favorites = await self._persistence.list_all()
        return self._views.to_schemas(self._views.filter_by_ability(favorites, ability_name))

    async def distinct_abilities(self) -> list[str]:
        return self._views.distinct_abilities(await self._persistence.list_all())


async def get_favorites_service(
    session: AsyncSession = Depends(get_db),
    locks: KeyedLocks = Depends(get_favorite_locks),
    catalog: PokemonService = Depends(get_pokemon_service),
) -> FavoritesService:
    """FastAPI dependency that wires the orchestrator together."""

    return FavoritesService(
        persistence=FavoritesPersistence(session),
        views=FavoritesViews(),
        locks=locks,
        catalog=catalog,
    )


__all__ = ["FavoritesService", "get_favorites_service"]
