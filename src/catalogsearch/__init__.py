"""
Catalog Search - product catalog extraction and fuzzy search.

Scrapes a retail catalog page, loads the products into a document store
once per catalog, and answers ranked fuzzy name queries.
"""

__version__ = "1.0.0"

from .models import ProductRecord, SearchResult
from .extractors.catalog_extractor import CatalogExtractor
from .loader import LoadController
from .search.query_engine import QueryEngine, render_results

__all__ = [
    "ProductRecord",
    "SearchResult",
    "CatalogExtractor",
    "LoadController",
    "QueryEngine",
    "render_results",
]
