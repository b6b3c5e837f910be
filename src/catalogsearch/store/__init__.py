"""
Document store backends.

Supports two backends:
- ElasticsearchDocumentStore: the official Elasticsearch client
- InMemoryDocumentStore: in-process store with the same query semantics
"""
from typing import Optional

from .base import DocumentStore, StoredHit, StoreHits
from .elasticsearch_store import ElasticsearchDocumentStore
from .memory_store import InMemoryDocumentStore


def build_store(backend: str = "elasticsearch", *, url: Optional[str] = None) -> DocumentStore:
    """Create the store named by ``backend``."""
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "elasticsearch":
        return ElasticsearchDocumentStore(url=url or "http://localhost:9200")
    raise ValueError(f"Unknown store backend: {backend!r}. Must be 'elasticsearch' or 'memory'")


__all__ = [
    "DocumentStore",
    "StoredHit",
    "StoreHits",
    "ElasticsearchDocumentStore",
    "InMemoryDocumentStore",
    "build_store",
]
