"""Strict models for the upstream PokeAPI payloads.

Only the fields the normalizer projects are declared; everything else the
catalog sends is ignored. Optional upstream fields are explicit here instead of
being probed with ad hoc key lookups.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class NamedResource(_UpstreamModel):
    """The ``{name, url}`` pair PokeAPI uses for every reference."""

    name: str
    url: str | None = None


class RawListEntry(_UpstreamModel):
    name: str
    url: str


class RawPokemonList(_UpstreamModel):
    count: int = Field(..., ge=0)
    results: list[RawListEntry]


class RawTypeSlot(_UpstreamModel):
    slot: int | None = None
    type: NamedResource


class RawAbilitySlot(_UpstreamModel):
    slot: int | None = None
    is_hidden: bool = False
    ability: NamedResource


class RawStat(_UpstreamModel):
    base_stat: int
    effort: int | None = None
    stat: NamedResource


class RawSprites(_UpstreamModel):
    front_default: str | None = None


class RawPokemonDetail(_UpstreamModel):
    id: int
    name: str
    height: int
    weight: int
    types: list[RawTypeSlot] = Field(default_factory=list)
    abilities: list[RawAbilitySlot] = Field(default_factory=list)
    stats: list[RawStat] = Field(default_factory=list)
    sprites: RawSprites | None = None


__all__ = [
    "NamedResource",
    "RawAbilitySlot",
    "RawListEntry",
    "RawPokemonDetail",
    "RawPokemonList",
    "RawSprites",
    "RawStat",
    "RawTypeSlot",
]
