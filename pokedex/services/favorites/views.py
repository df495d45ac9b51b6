"""Derived, read-only views over persisted favorites.

Nothing here is materialised: each view is computed from the rows handed in,
which keeps the helpers pure and trivially testable without a database.
"""

from __future__ import annotations

from collections.abc import Iterable

from pokedex.db.models import FavoritePokemon as FavoritePokemonModel
from pokedex.schemas.favorites import FavoritePokemon as FavoritePokemonSchema


def _ability_names(favorite: FavoritePokemonModel) -> list[str]:
    names: list[str] = []
    for ability in favorite.abilities or []:
        if isinstance(ability, dict) and isinstance(ability.get("name"), str):
            names.append(ability["name"])
    return names


class FavoritesViews:
    """Filtering, indexing and schema conversion for favorites."""

    def filter_by_ability(
        self, favorites: Iterable[FavoritePokemonModel], ability_name: str
    ) -> list[FavoritePokemonModel]:
        """Keep favorites having an ability named exactly ``ability_name``."""

        return [
            favorite
            for favorite in favorites
            if ability_name in _ability_names(favorite)
        ]

    def distinct_abilities(self, favorites: Iterable[FavoritePokemonModel]) -> list[str]:
        """Return every ability name across ``favorites``, deduplicated and sorted."""

        names: set[str] = set()
        for favorite in favorites:
            names.update(_ability_names(favorite))
        return sorted(names)

    def to_schema(self, favorite: FavoritePokemonModel) -> FavoritePokemonSchema:
        return FavoritePokemonSchema.model_validate(favorite)

    def to_schemas(
        self, favorites: Iterable[FavoritePokemonModel]
    ) -> list[FavoritePokemonSchema]:
        return [self.to_schema(favorite) for favorite in favorites]
