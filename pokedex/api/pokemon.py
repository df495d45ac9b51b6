"""FastAPI router exposing the cached catalog and the favorite toggle."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.exceptions import RequestValidationError

from pokedex.schemas.favorites import ToggleFavoriteResponse
from pokedex.schemas.pokemon import (
    Pagination,
    PokemonDetailResponse,
    PokemonDetailWithFavorite,
    PokemonListResponse,
)
from pokedex.services.dependencies import get_pokemon_service
from pokedex.services.favorites_service import FavoritesService, get_favorites_service
from pokedex.services.pokemon_service import PokemonService
from pokedex.settings import AppSettings, get_settings

router = APIRouter()


def resolve_page_size(
    limit: int | None = Query(None, ge=1, description="Entries per page"),
    config: AppSettings = Depends(get_settings),
) -> int:
    """Apply the configured default and upper bound to ``limit``."""

    if limit is None:
        return config.default_page_size
    if limit > config.max_page_size:
        raise RequestValidationError(
            [
                {
                    "type": "less_than_equal",
                    "loc": ("query", "limit"),
                    "msg": f"Input should be less than or equal to {config.max_page_size}",
                    "input": limit,
                    "ctx": {"le": config.max_page_size},
                }
            ]
        )
    return limit


@router.get("", response_model=PokemonListResponse)
async def list_pokemon(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Depends(resolve_page_size),
    service: PokemonService = Depends(get_pokemon_service),
) -> PokemonListResponse:
    """Return one page of ``{name, url}`` listings from the catalog."""

    listing = await service.get_pokemons(page, limit)
    if listing is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to fetch pokemons from PokeAPI",
        )

    return PokemonListResponse(
        data=listing.results,
        pagination=Pagination(
            current_page=page,
            total=listing.count,
            per_page=limit,
            last_page=math.ceil(listing.count / limit),
        ),
    )


@router.get("/{identifier}", response_model=PokemonDetailResponse)
async def get_pokemon(
    identifier: str = Path(
        ..., min_length=1, max_length=100, description="Upstream id or name"
    ),
    service: PokemonService = Depends(get_pokemon_service),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> PokemonDetailResponse:
    detail = await service.get_pokemon_detail(identifier)
    if detail is None:
        raise HTTPException(status_code=404, detail="Pokemon not found")

    is_favorite = await favorites.is_favorite(detail.id)
    return PokemonDetailResponse(
        data=PokemonDetailWithFavorite(**detail.model_dump(), is_favorite=is_favorite)
    )


@router.post("/{identifier}/favorite", response_model=ToggleFavoriteResponse)
async def toggle_favorite(
    identifier: str = Path(
        ..., min_length=1, max_length=100, description="Upstream id or name"
    ),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> ToggleFavoriteResponse:
    """Add the pokemon to favorites, or remove it when it is already there."""

    outcome = await favorites.toggle_by_identifier(identifier)
    if outcome is None:
        raise HTTPException(status_code=404, detail="Pokemon not found")

    if outcome.added:
        return ToggleFavoriteResponse(
            message="Pokemon added to favorites",
            is_favorite=True,
            data=outcome.favorite,
        )
    return ToggleFavoriteResponse(message="Pokemon removed from favorites", is_favorite=False)
