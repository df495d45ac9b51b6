"""FastAPI router exposing the favorites views."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query

from pokedex.schemas.favorites import (
    FavoriteAbilitiesResponse,
    FavoriteListResponse,
    FavoriteSearchResponse,
    FavoritesByAbilityResponse,
)
from pokedex.services.favorites_service import FavoritesService, get_favorites_service

router = APIRouter()


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteListResponse:
    favorites = await service.list_all()
    return FavoriteListResponse(data=favorites, count=len(favorites))


@router.get("/search", response_model=FavoriteSearchResponse)
async def search_favorites(
    q: str = Query("", max_length=100, description="Case-insensitive name fragment"),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteSearchResponse:
    """An empty ``q`` returns every favorite."""

    favorites = await service.search_by_name(q)
    return FavoriteSearchResponse(data=favorites, count=len(favorites), search_query=q)


@router.get("/abilities", response_model=FavoriteAbilitiesResponse)
async def favorite_abilities(
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoriteAbilitiesResponse:
    abilities = await service.distinct_abilities()
    return FavoriteAbilitiesResponse(data=abilities, count=len(abilities))


@router.get("/ability/{ability}", response_model=FavoritesByAbilityResponse)
async def favorites_by_ability(
    ability: str = Path(..., min_length=1, max_length=100),
    service: FavoritesService = Depends(get_favorites_service),
) -> FavoritesByAbilityResponse:
    """Favorites having an ability named exactly ``ability``."""

    favorites = await service.filter_by_ability(ability)
    return FavoritesByAbilityResponse(data=favorites, ability=ability, count=len(favorites))
