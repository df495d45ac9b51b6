"""SQLAlchemy ORM models for persisted favorites.

A favorite is a snapshot of the canonical catalog record taken at the moment
it was added. Rows are created by a toggle-add and deleted by a toggle-remove;
they are never updated in place.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class FavoritePokemon(Base):
    __tablename__ = "favorite_pokemon"
    __table_args__ = (
        UniqueConstraint("pokeapi_id", name="uq_favorite_pokemon_pokeapi_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pokeapi_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        doc="Upstream identifier; at most one favorite row exists per value.",
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    types: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    abilities: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Ordered ``{name, is_hidden}`` objects, primary ability first.",
    )
    stats: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Ordered ``{name, value}`` objects in upstream order.",
    )
    sprite: Mapped[str | None] = mapped_column(String(512), nullable=True)
    height: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"FavoritePokemon(pokeapi_id={self.pokeapi_id!r}, name={self.name!r})"


__all__ = ["Base", "FavoritePokemon", "utcnow"]
