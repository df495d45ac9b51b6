"""Database-oriented helpers for the favorites store."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pokedex.db.models import FavoritePokemon
from pokedex.schemas.pokemon import PokemonDetail


class FavoritesPersistence:
    """Encapsulates SQLAlchemy operations required by the favorites domain."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, pokeapi_id: int) -> bool:
        query = select(FavoritePokemon.id).where(FavoritePokemon.pokeapi_id == pokeapi_id)
        result = await self._session.execute(query)
        return result.first() is not None

    async def list_all(self) -> Sequence[FavoritePokemon]:
        result = await self._session.execute(
            select(FavoritePokemon).order_by(FavoritePokemon.id)
        )
        return result.scalars().all()

    async def search_by_name(self, query: str) -> Sequence[FavoritePokemon]:
        """Case-insensitive substring match; LIKE wildcards in ``query`` are literal."""

        statement = (
            select(FavoritePokemon)
            .where(FavoritePokemon.name.icontains(query, autoescape=True))
            .order_by(FavoritePokemon.id)
        )
        result = await self._session.execute(statement)
        return result.scalars().all()

    async def insert(self, detail: PokemonDetail) -> FavoritePokemon:
        """Persist a new favorite built from ``detail``."""

        favorite = FavoritePokemon(
            pokeapi_id=detail.id,
            name=detail.name,
            types=list(detail.types),
            abilities=[ability.model_dump() for ability in detail.abilities],
            stats=[stat.model_dump() for stat in detail.stats],
            sprite=detail.sprite,
            height=detail.height,
            weight=detail.weight,
            is_favorite=True,
        )
        self._session.add(favorite)
        await self._session.flush()
        return favorite

    async def delete_by_pokeapi_id(self, pokeapi_id: int) -> bool:
        """Delete the favorite for ``pokeapi_id``; ``True`` when a row was removed."""

        result = await self._session.execute(
            delete(FavoritePokemon).where(FavoritePokemon.pokeapi_id == pokeapi_id)
        )
        return (result.rowcount or 0) > 0

    async def commit(self) -> None:
        await self._session.commit()
