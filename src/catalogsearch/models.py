"""
Data models for catalog extraction, loading and search.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Any, Union


@dataclass(slots=True)
class ProductRecord:
    """
    One product tile from the catalog page.

    Attributes:
        name: Product name, None when the tile has no name element
        prices: Price tokens exactly as printed on the page (e.g. "120.50 TL")
        quantities: Weight/size labels exactly as printed (e.g. "250 g")

    Prices and quantities are independent lists; ``prices[i]`` is not
    assumed to belong to ``quantities[i]``.
    """

    name: Optional[str] = None
    prices: List[str] = field(default_factory=list)
    quantities: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the document shape written to the store."""
        return {
            "name": self.name,
            "prices": list(self.prices),
            "quantities": list(self.quantities),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ProductRecord:
        """Build a record from a stored document, tolerating missing keys."""
        return cls(
            name=data.get("name"),
            prices=list(data.get("prices") or []),
            quantities=list(data.get("quantities") or []),
        )

    @classmethod
    def index_mappings(cls) -> dict:
        """
        Derive the store mapping from the record's fields.

        Every field holds text (or a list of text), so each is mapped as
        ``text`` with a ``keyword`` sub-field for exact lookups.
        """
        properties = {
            f.name: {
                "type": "text",
                "fields": {"keyword": {"type": "keyword", "ignore_above": 256}},
            }
            for f in fields(cls)
        }
        return {"properties": properties}


# ============================================================================
# LOAD OUTCOMES
# ============================================================================

@dataclass(frozen=True)
class Skipped:
    """The completion marker was already set; nothing was written."""

    kind = "skipped"

    def to_dict(self) -> dict:
        return {"outcome": self.kind}


@dataclass(frozen=True)
class Loaded:
    """Every record was written."""

    count: int
    kind = "loaded"

    def to_dict(self) -> dict:
        return {"outcome": self.kind, "loaded": self.count, "failed": 0}


@dataclass(frozen=True)
class PartialFailure:
    """Some writes failed; the rest were kept and the catalog was still marked done."""

    failed_count: int
    loaded_count: int = 0
    kind = "partial_failure"

    def to_dict(self) -> dict:
        return {"outcome": self.kind, "loaded": self.loaded_count, "failed": self.failed_count}


LoadOutcome = Union[Skipped, Loaded, PartialFailure]


# ============================================================================
# SEARCH RESULTS
# ============================================================================

@dataclass(slots=True)
class SearchHit:
    """A record returned by the store together with its relevance score."""

    record: ProductRecord
    score: Optional[float] = None

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["score"] = self.score
        return data


@dataclass
class SearchResult:
    """
    Ranked search results.

    Attributes:
        query: Query text as issued
        hits: Hits in descending score order (may be fewer than ``total``)
        total: Total match count reported by the store
    """

    query: str
    hits: List[SearchHit] = field(default_factory=list)
    total: int = 0

    @property
    def records(self) -> List[ProductRecord]:
        return [hit.record for hit in self.hits]

    def top(self, limit: int) -> List[SearchHit]:
        """Return at most ``limit`` hits, keeping their order."""
        return self.hits[:max(limit, 0)]

    def to_dict(self, limit: Optional[int] = None) -> dict:
        """Convert to dictionary for JSON serialization."""
        hits = self.hits if limit is None else self.top(limit)
        return {
            "query": self.query,
            "products": [hit.to_dict() for hit in hits],
            "count": len(hits),
            "total": self.total,
        }


__all__ = [
    "ProductRecord",
    "Skipped",
    "Loaded",
    "PartialFailure",
    "LoadOutcome",
    "SearchHit",
    "SearchResult",
]
