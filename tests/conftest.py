"""
Pytest configuration and fixtures for Catalog Search tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from catalogsearch.completion import FileCompletionStore
from catalogsearch.extractors.catalog_extractor import CatalogExtractor
from catalogsearch.loader import LoadController
from catalogsearch.search.query_engine import QueryEngine
from catalogsearch.store.memory_store import InMemoryDocumentStore

INDEX = "test-products"

TILE = """
<div class="col-xl-4 col-lg-6 col-md-6 mt-4">
    <div class="productCard">
        <a class="text-decoration-none textBlack" href="/urun/{slug}">
            {name}
        </a>
        {prices}
        {quantities}
    </div>
</div>
"""


def _make_tile(name=None, prices=(), quantities=(), slug="urun"):
    """Render one product tile in the catalog page's markup."""
    name_html = name if name is not None else ""
    html = TILE.format(
        slug=slug,
        name=name_html,
        prices="".join(f'<div class="price newPrice"> {p} </div>' for p in prices),
        quantities="".join(f'<span class="productQuantityText">{q}</span>' for q in quantities),
    )
    if name is None:
        # Drop the name anchor altogether
        start = html.index("<a ")
        end = html.index("</a>") + len("</a>")
        html = html[:start] + html[end:]
    return html


def _make_page(*tiles):
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>Kategori</title></head>
    <body>
        <div class="row">
            {''.join(tiles)}
        </div>
    </body>
    </html>
    """


@pytest.fixture
def extractor():
    """Create a basic extractor for testing."""
    return CatalogExtractor(timeout_s=5)


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def completion(tmp_path):
    """Completion marker in a temporary flags directory."""
    return FileCompletionStore(tmp_path / "flags", "indexing_done_test.flag")


@pytest.fixture
def loader(memory_store, completion):
    return LoadController(memory_store, completion, INDEX)


@pytest.fixture
def engine(memory_store):
    return QueryEngine(memory_store, INDEX, fields={"name": 3.0}, fuzziness="AUTO", fetch_size=50)


@pytest.fixture
def sample_html():
    """Catalog page with one complete tile."""
    return _make_page(_make_tile("Kavrulmuş Badem", ["120.50"], ["250 g"]))


@pytest.fixture
def sample_url():
    """Sample URL for testing."""
    return "https://example.com/Kategori"


@pytest.fixture
def make_tile():
    """Factory for product tile markup."""
    return _make_tile


@pytest.fixture
def make_page():
    """Factory for a catalog page wrapping tiles."""
    return _make_page
