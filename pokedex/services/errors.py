"""Failure taxonomy for everything between the API layer and the upstream catalog.

Callers treat every :class:`CatalogError` the same way ("source unavailable");
the subclasses only exist so logs and tests can tell the causes apart.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for upstream catalog failures."""


class CatalogFetchError(CatalogError):
    """The upstream call did not produce a usable response."""


class CatalogTimeoutError(CatalogFetchError):
    """The upstream call exceeded its time budget."""


class CatalogHTTPStatusError(CatalogFetchError):
    """The upstream catalog answered with a non-success status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Upstream returned HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class CatalogNetworkError(CatalogFetchError):
    """Connection, DNS or protocol failure while talking to the catalog."""


class CatalogNormalizationError(CatalogError):
    """The upstream payload did not match the expected shape."""


__all__ = [
    "CatalogError",
    "CatalogFetchError",
    "CatalogHTTPStatusError",
    "CatalogNetworkError",
    "CatalogNormalizationError",
    "CatalogTimeoutError",
]
