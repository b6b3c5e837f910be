"""Ranked fuzzy product search and plain-text result rendering."""
from __future__ import annotations

import sys
from typing import Mapping, Optional, TextIO

from ..errors import SearchError
from ..logger import get_logger
from ..models import ProductRecord, SearchHit, SearchResult
from ..store.base import DocumentStore

logger = get_logger(__name__)

SEPARATOR = "-" * 44
DEFAULT_FIELDS: Mapping[str, float] = {"name": 3.0}


class QueryEngine:
    """
    Search product names in the store.

    Only the fields in ``fields`` are searched, each with its boost. Results
    come back ordered by descending relevance score.
    """

    def __init__(
        self,
        store: DocumentStore,
        index: str,
        *,
        fields: Optional[Mapping[str, float]] = None,
        fuzziness: str = "AUTO",
        fetch_size: int = 50,
    ) -> None:
        self.store = store
        self.index = index
        self.fields = dict(fields or DEFAULT_FIELDS)
        self.fuzziness = fuzziness
        self.fetch_size = fetch_size

    def search(self, query_text: str) -> SearchResult:
        """
        Run ``query_text`` against the store.

        Raises:
            SearchError: the store query failed
        """
        try:
            response = self.store.search(
                self.index,
                query_text,
                fields=self.fields,
                fuzziness=self.fuzziness,
                size=self.fetch_size,
            )
        except SearchError as e:
            logger.error("Error searching products for %r: %s", query_text, e)
            raise

        hits = [SearchHit(record=ProductRecord.from_dict(h.source), score=h.score) for h in response.hits]
        logger.info("Search %r matched %d product(s), %d returned", query_text, response.total, len(hits))
        return SearchResult(query=query_text, hits=hits, total=response.total)


def render_results(result: SearchResult, *, limit: int = 10, out: Optional[TextIO] = None) -> int:
    """
    Print at most ``limit`` results followed by the total match count.

    The trailing count is the store's total, which can be larger than the
    number of entries printed.

    Returns:
        Number of entries printed
    """
    out = out or sys.stdout
    print("Results:", file=out)
    print(SEPARATOR, file=out)

    shown = result.top(limit)
    for hit in shown:
        product = hit.record
        print(f"Product: {product.name or ''}", file=out)
        for price in product.prices:
            print(f"Price: {price}", file=out)
        for quantity in product.quantities:
            print(f"Quantity: {quantity}", file=out)
        print(SEPARATOR, file=out)

    print(f"{result.total} match(es).", file=out)
    return len(shown)


__all__ = ["QueryEngine", "render_results", "DEFAULT_FIELDS", "SEPARATOR"]
