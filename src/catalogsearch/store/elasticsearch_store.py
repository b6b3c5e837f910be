"""Elasticsearch-backed document store."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from elasticsearch import ApiError, Elasticsearch, TransportError

from ..errors import IndexCreationError, SearchError, WriteError
from ..logger import get_logger
from .base import DocumentStore, StoredHit, StoreHits

logger = get_logger(__name__)


def build_multi_match(query: str, fields: Mapping[str, float], fuzziness: str) -> dict:
    """Build a ``multi_match`` clause with per-field boosts (``name^3.0``)."""
    return {
        "multi_match": {
            "query": query,
            "fields": [f"{name}^{float(boost)}" for name, boost in fields.items()],
            "fuzziness": fuzziness,
        }
    }


class ElasticsearchDocumentStore(DocumentStore):
    """
    Document store on top of the official Elasticsearch client.

    Client and transport failures are wrapped in the pipeline's own error
    types so callers never depend on the client's exception hierarchy.
    """

    def __init__(self, client: Optional[Elasticsearch] = None, *, url: str = "http://localhost:9200") -> None:
        self.client = client if client is not None else Elasticsearch(url)
        self.url = url

    def index_exists(self, index: str) -> bool:
        try:
            return bool(self.client.indices.exists(index=index))
        except (ApiError, TransportError) as e:
            logger.error("ES Could not check index %s: %s: %s", index, type(e).__name__, e)
            raise IndexCreationError(f"Could not check index {index}: {e}", index=index) from e

    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None:
        try:
            self.client.indices.create(index=index, mappings=dict(mappings))
        except (ApiError, TransportError) as e:
            logger.error("ES Error creating index %s: %s: %s", index, type(e).__name__, e)
            raise IndexCreationError(f"Error creating index {index}: {e}", index=index) from e
        logger.info("ES Created index %s", index)

    def upsert(self, index: str, document: Mapping[str, Any]) -> None:
        try:
            self.client.index(index=index, document=dict(document))
        except (ApiError, TransportError) as e:
            raise WriteError(f"Error indexing document into {index}: {e}", index=index) from e

    def search(
        self,
        index: str,
        query: str,
        *,
        fields: Mapping[str, float],
        fuzziness: str = "AUTO",
        size: int = 10,
    ) -> StoreHits:
        try:
            response = self.client.search(
                index=index,
                query=build_multi_match(query, fields, fuzziness),
                sort=[{"_score": {"order": "desc"}}],
                size=size,
                track_total_hits=True,
            )
        except (ApiError, TransportError) as e:
            logger.error("ES Error searching %s for %r: %s: %s", index, query, type(e).__name__, e)
            raise SearchError(f"Error searching products: {e}", query=query) from e

        body = response["hits"]
        total = body.get("total") or {}
        # Older clusters report a bare integer
        total_value = total.get("value", 0) if isinstance(total, dict) else int(total)

        hits = [
            StoredHit(source=dict(hit.get("_source") or {}), score=hit.get("_score"))
            for hit in body.get("hits", [])
        ]
        logger.debug("ES Query %r returned %d hit(s) of %d", query, len(hits), total_value)
        return StoreHits(hits=hits, total=total_value)


__all__ = ["ElasticsearchDocumentStore", "build_multi_match"]
