"""Pydantic schemas for upstream payloads, canonical records and API responses."""

from pokedex.schemas.favorites import (  # noqa: F401
    FavoriteAbilitiesResponse,
    FavoriteListResponse,
    FavoritePokemon,
    FavoriteSearchResponse,
    FavoritesByAbilityResponse,
    ToggleFavoriteResponse,
    ToggleFavoriteResult,
)
from pokedex.schemas.pokemon import (  # noqa: F401
    Pagination,
    PokemonAbility,
    PokemonDetail,
    PokemonDetailResponse,
    PokemonDetailWithFavorite,
    PokemonListPage,
    PokemonListResponse,
    PokemonListing,
    PokemonStat,
)
