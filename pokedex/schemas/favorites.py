"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pokedex.schemas.pokemon import PokemonAbility, PokemonStat


class FavoritePokemon(BaseModel):
    """Read model for a persisted favorite.

    The fields are a snapshot of the catalog record taken when the favorite was
    added; later upstream changes are not reflected.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Surrogate primary key of the favorite row")
    pokeapi_id: int = Field(..., description="Upstream identifier, unique per favorite")
    name: str
    types: list[str] = Field(default_factory=list)
    abilities: list[PokemonAbility] = Field(default_factory=list)
    stats: list[PokemonStat] = Field(default_factory=list)
    sprite: str | None = None
    height: int
    weight: int
    is_favorite: bool = True
    created_at: datetime | None = None


class ToggleFavoriteResult(BaseModel):
    """Outcome of a toggle: ``added`` is ``False`` when the favorite was removed."""

    added: bool
    favorite: FavoritePokemon | None = None


class ToggleFavoriteResponse(BaseModel):
    message: str
    is_favorite: bool
    data: FavoritePokemon | None = None


class FavoriteListResponse(BaseModel):
    data: list[FavoritePokemon]
    count: int


class FavoriteSearchResponse(FavoriteListResponse):
    search_query: str


class FavoritesByAbilityResponse(FavoriteListResponse):
    ability: str


class FavoriteAbilitiesResponse(BaseModel):
    data: list[str]
    count: int


__all__ = [
    "FavoriteAbilitiesResponse",
    "FavoriteListResponse",
    "FavoritePokemon",
    "FavoriteSearchResponse",
    "FavoritesByAbilityResponse",
    "ToggleFavoriteResponse",
    "ToggleFavoriteResult",
]
