"""
Document store port.

The pipeline only needs four operations from its search backend: check that
an index exists, create it, write one document, and run a weighted fuzzy
multi-field query sorted by score.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(slots=True)
class StoredHit:
    """One matching document as returned by the store."""
    source: Dict[str, Any]
    score: Optional[float] = None


@dataclass(slots=True)
class StoreHits:
    """
    Raw query response.

    Attributes:
        hits: Matching documents, best first (bounded by the requested size)
        total: Total number of matches in the index
    """
    hits: List[StoredHit] = field(default_factory=list)
    total: int = 0


class DocumentStore(ABC):
    """Narrow interface over a full-text document store."""

    @abstractmethod
    def index_exists(self, index: str) -> bool:
        """Return True if ``index`` exists. Raises IndexCreationError if the store can't tell."""

    @abstractmethod
    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None:
        """Create ``index`` with ``mappings``. Raises IndexCreationError."""

    @abstractmethod
    def upsert(self, index: str, document: Mapping[str, Any]) -> None:
        """Write one document. Raises WriteError."""

    @abstractmethod
    def search(
        self,
        index: str,
        query: str,
        *,
        fields: Mapping[str, float],
        fuzziness: str = "AUTO",
        size: int = 10,
    ) -> StoreHits:
        """
        Run a fuzzy multi-field match over ``fields`` (name -> boost).

        Hits are sorted by descending score; ties keep the store's own order.
        Raises SearchError.
        """


__all__ = ["DocumentStore", "StoredHit", "StoreHits"]
