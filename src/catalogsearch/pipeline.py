"""
End-to-end run: create index, extract the catalog, load it once, search, print.
"""
from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from .completion import CompletionStore, FileCompletionStore
from .config import Config
from .errors import FetchError, IndexCreationError, SearchError
from .extractors.catalog_extractor import CatalogExtractor
from .loader import LoadController
from .logger import get_logger
from .models import LoadOutcome, ProductRecord, SearchResult
from .search.query_engine import QueryEngine, render_results
from .store import DocumentStore, build_store

logger = get_logger(__name__)


@dataclass
class PipelineReport:
    """What happened during one run."""
    products: List[ProductRecord] = field(default_factory=list)
    outcome: Optional[LoadOutcome] = None
    result: Optional[SearchResult] = None
    errors: List[str] = field(default_factory=list)
    search_ms: int = 0
    total_ms: int = 0


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def build_query_engine(store: DocumentStore) -> QueryEngine:
    """Query engine configured from ``Config``."""
    return QueryEngine(
        store,
        Config.INDEX_NAME,
        fields={"name": Config.SEARCH_BOOST},
        fuzziness=Config.SEARCH_FUZZINESS,
        fetch_size=Config.SEARCH_FETCH_SIZE,
    )


def default_completion() -> CompletionStore:
    return FileCompletionStore(Config.FLAG_DIR, Config.marker_name())


def run_pipeline(
    *,
    store: Optional[DocumentStore] = None,
    extractor: Optional[CatalogExtractor] = None,
    completion: Optional[CompletionStore] = None,
    catalog_url: Optional[str] = None,
    query: Optional[str] = None,
    limit: Optional[int] = None,
    out: Optional[TextIO] = None,
) -> PipelineReport:
    """
    Run the whole catalog pipeline once.

    Each phase reports its own failure and the run carries on: a failed
    fetch loads nothing and still searches what was indexed before, and a
    failed search prints no results but still prints the timings.
    """
    out = out or sys.stdout
    report = PipelineReport()
    started = time.perf_counter()

    store = store if store is not None else build_store(Config.STORE_BACKEND, url=Config.ELASTICSEARCH_URL)
    extractor = extractor or CatalogExtractor(timeout_s=Config.REQUEST_TIMEOUT_S)
    loader = LoadController(store, completion or default_completion(), Config.INDEX_NAME)
    engine = build_query_engine(store)

    try:
        loader.ensure_index()
    except IndexCreationError as e:
        logger.error("Error creating index: %s", e)
        report.errors.append(str(e))

    url = catalog_url or Config.CATALOG_URL
    try:
        report.products = extractor.extract(url)
    except FetchError as e:
        logger.error("Request error: %s", e)
        report.errors.append(str(e))

    try:
        report.outcome = loader.ensure_indexed(report.products)
    except IndexCreationError as e:
        report.errors.append(str(e))

    search_started = time.perf_counter()
    try:
        report.result = engine.search(query or Config.SEARCH_QUERY)
    except SearchError as e:
        report.errors.append(str(e))
    else:
        render_results(report.result, limit=limit if limit is not None else Config.RESULT_LIMIT, out=out)
    report.search_ms = _elapsed_ms(search_started)
    report.total_ms = _elapsed_ms(started)

    print(f"Search completed in {report.search_ms} ms.", file=out)
    print(f"All completed in {report.total_ms} ms.", file=out)
    return report


def main() -> int:
    """Console entry point; takes no arguments."""
    errors = Config.validate()
    if errors:
        logger.warning("Configuration warnings:")
        for error in errors:
            logger.warning("  - %s", error)

    logger.debug("Configuration: %s", Config.get_summary())
    run_pipeline()
    return 0


if __name__ == "__main__":
    sys.exit(main())
