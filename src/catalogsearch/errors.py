"""
Error types raised by the catalog pipeline.

Missing HTML elements are never an error: the extractor degrades them to
absent or empty fields.
"""
from __future__ import annotations

from typing import Optional


class CatalogSearchError(Exception):
    """Base class for all pipeline errors."""


class FetchError(CatalogSearchError):
    """The catalog page could not be retrieved (network, timeout, HTTP status)."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class IndexCreationError(CatalogSearchError):
    """The index namespace could not be checked or created. Fatal to a load."""

    def __init__(self, message: str, *, index: Optional[str] = None) -> None:
        super().__init__(message)
        self.index = index


class WriteError(CatalogSearchError):
    """A single document write failed. Counted, never fatal to a load."""

    def __init__(self, message: str, *, index: Optional[str] = None) -> None:
        super().__init__(message)
        self.index = index


class SearchError(CatalogSearchError):
    """The store query failed. Fatal to the query phase."""

    def __init__(self, message: str, *, query: Optional[str] = None) -> None:
        super().__init__(message)
        self.query = query


__all__ = [
    "CatalogSearchError",
    "FetchError",
    "IndexCreationError",
    "WriteError",
    "SearchError",
]
