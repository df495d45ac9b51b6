"""Favorites domain components split by responsibility.

Persistence talks to the database, views derive read-only projections, and
locks serialise toggles for one upstream id.
"""

from .locks import KeyedLocks
from .persistence import FavoritesPersistence
from .views import FavoritesViews

__all__ = [
    "FavoritesPersistence",
    "FavoritesViews",
    "KeyedLocks",
]
