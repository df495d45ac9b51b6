"""Pure mapping from raw PokeAPI payloads to canonical records.

The projections keep upstream order everywhere. Ability order in particular
is meaningful (primary ability first, hidden ability last) and is never
re-sorted.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from pokedex.schemas.pokeapi import RawPokemonDetail, RawPokemonList
from pokedex.schemas.pokemon import (
    PokemonAbility,
    PokemonDetail,
    PokemonListing,
    PokemonListPage,
    PokemonStat,
)
from pokedex.services.errors import CatalogNormalizationError


def normalize_list(payload: Any) -> PokemonListPage:
    """Keep only ``name`` and ``url`` per entry, plus the total ``count``."""

    try:
        raw = RawPokemonList.model_validate(payload)
    except ValidationError as exc:
        raise CatalogNormalizationError(f"Malformed list payload: {exc}") from exc

    return PokemonListPage(
        count=raw.count,
        results=[
            PokemonListing(name=entry.name, url=entry.url) for entry in raw.results
        ],
    )


def normalize_detail(payload: Any) -> PokemonDetail:
    try:
        raw = RawPokemonDetail.model_validate(payload)
    except ValidationError as exc:
        raise CatalogNormalizationError(f"Malformed detail payload: {exc}") from exc

    return PokemonDetail(
        id=raw.id,
        name=raw.name,
        types=[slot.type.name for slot in raw.types],
        abilities=[
            PokemonAbility(name=slot.ability.name, is_hidden=slot.is_hidden)
            for slot in raw.abilities
        ],
        stats=[PokemonStat(name=entry.stat.name, value=entry.base_stat) for entry in raw.stats],
        sprite=raw.sprites.front_default if raw.sprites is not None else None,
        height=raw.height,
        weight=raw.weight,
    )


__all__ = ["normalize_detail", "normalize_list"]
