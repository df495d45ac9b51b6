from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PokemonListing(BaseModel):
    """One entry of a catalog page; details are fetched only on request."""

    name: str
    url: str


class PokemonListPage(BaseModel):
    count: int
    results: list[PokemonListing] = Field(default_factory=list)


class PokemonAbility(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_hidden: bool = False


class PokemonStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: int


class PokemonDetail(BaseModel):
    """Canonical flat record produced from the nested upstream payload.

    ``types``, ``abilities`` and ``stats`` keep upstream order; the first
    ability is the primary one and hidden abilities follow it.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Stable upstream identifier")
    name: str
    types: list[str] = Field(default_factory=list)
    abilities: list[PokemonAbility] = Field(default_factory=list)
    stats: list[PokemonStat] = Field(default_factory=list)
    sprite: str | None = None
    height: int
    weight: int


class PokemonDetailWithFavorite(PokemonDetail):
    is_favorite: bool = False


class Pagination(BaseModel):
    current_page: int
    total: int
    per_page: int
    last_page: int


class PokemonListResponse(BaseModel):
    data: list[PokemonListing]
    pagination: Pagination


class PokemonDetailResponse(BaseModel):
    data: PokemonDetailWithFavorite


__all__ = [
    "Pagination",
    "PokemonAbility",
    "PokemonDetail",
    "PokemonDetailResponse",
    "PokemonDetailWithFavorite",
    "PokemonListPage",
    "PokemonListResponse",
    "PokemonListing",
    "PokemonStat",
]
