from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

import requests
from bs4 import BeautifulSoup, Tag

from ..errors import FetchError
from ..logger import get_logger
from ..models import ProductRecord
from ..utils.validators import is_valid_url

logger = get_logger(__name__)

T = TypeVar("T")

# A tag predicate over an element's tag name and its joined class attribute.
ClassMatcher = Callable[[Tag], bool]


def _class_string(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def class_contains(tag_name: str, fragment: str) -> ClassMatcher:
    """Match ``tag_name`` elements whose class attribute contains ``fragment``."""
    def _match(tag: Tag) -> bool:
        return tag.name == tag_name and fragment in _class_string(tag)
    return _match


def class_equals(tag_name: str, value: str) -> ClassMatcher:
    """Match ``tag_name`` elements whose class attribute is exactly ``value``."""
    def _match(tag: Tag) -> bool:
        return tag.name == tag_name and _class_string(tag) == value
    return _match


# Structural patterns of one product tile on the catalog page
CONTAINER = class_contains("div", "col-xl-4 col-lg-6 col-md-6 mt-4")
NAME = class_equals("a", "text-decoration-none textBlack")
PRICE = class_contains("div", "newPrice")
QUANTITY = class_contains("span", "productQuantityText")


@dataclass(slots=True)
class FieldLookup(Generic[T]):
    """Result of looking up one sub-field inside a product tile."""
    value: T
    found: bool = False


@dataclass(slots=True)
class _RecordBuilder:
    name: FieldLookup[Optional[str]]
    prices: FieldLookup[List[str]]
    quantities: FieldLookup[List[str]]

    def build(self) -> ProductRecord:
        return ProductRecord(
            name=self.name.value,
            prices=list(self.prices.value),
            quantities=list(self.quantities.value),
        )


class CatalogExtractor:
    """
    Extract product tiles from a catalog listing page.

    This extractor can work in two modes:
    1. URL mode: ``extract(url)`` fetches the page with a single GET
    2. HTML mode: ``parse(html)`` works on pre-fetched markup

    Every tile becomes a record even if its name, prices or quantities
    are missing. A page without any tiles yields an empty list.
    """

    def __init__(
        self,
        *,
        timeout_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the catalog extractor.

        Args:
            timeout_s: Request timeout in seconds (None keeps the client default)
            session: Optional requests session to issue the GET with
        """
        self.timeout_s = timeout_s
        self.session = session

    def extract(self, page_url: str) -> List[ProductRecord]:
        """
        Fetch ``page_url`` and parse its product tiles.

        Raises:
            FetchError: the page could not be retrieved
        """
        html = self.fetch(page_url)
        records = self.parse(html)
        logger.info("Extracted %d product(s) from %s", len(records), page_url)
        return records

    def fetch(self, page_url: str) -> str:
        """Retrieve the page body as text. Single attempt, no retry."""
        if not is_valid_url(page_url):
            raise FetchError(f"Not a valid http(s) URL: {page_url!r}", url=page_url)

        get = self.session.get if self.session is not None else requests.get
        logger.debug("FETCH GET %s (timeout=%s)", page_url, self.timeout_s)

        try:
            r = get(page_url, timeout=self.timeout_s)
        except requests.Timeout as e:
            logger.error("FETCH Timeout after %ss for URL: %s", self.timeout_s, page_url)
            raise FetchError(f"Timed out fetching {page_url}", url=page_url) from e
        except requests.RequestException as e:
            logger.error("FETCH Request error for URL %s: %s: %s", page_url, type(e).__name__, e)
            raise FetchError(f"Request failed for {page_url}: {e}", url=page_url) from e

        logger.debug("FETCH Response: status=%d, content-type=%s, length=%d",
                     r.status_code, r.headers.get("Content-Type", "unknown"), len(r.text))

        if not 200 <= r.status_code < 300:
            logger.error("FETCH Failed with status %d for URL: %s", r.status_code, page_url)
            raise FetchError(
                f"HTTP {r.status_code} fetching {page_url}",
                url=page_url,
                status_code=r.status_code,
            )

        # Without a charset in the header requests assumes ISO-8859-1
        if "charset" not in r.headers.get("Content-Type", "").lower():
            r.encoding = r.apparent_encoding
            logger.debug("FETCH No charset in header, decoding as %s", r.encoding)

        return r.text

    def parse(self, html: str) -> List[ProductRecord]:
        """
        Parse product tiles out of ``html`` (no fetching).

        Args:
            html: Raw HTML content as string

        Returns:
            One record per tile, in document order
        """
        if not html or not html.strip():
            return []

        soup = BeautifulSoup(html, "html.parser")
        containers = soup.find_all(CONTAINER)

        if not containers:
            logger.warning("PARSE No product containers found on page")
            return []

        records = [self._parse_container(node) for node in containers]
        logger.debug("PARSE Built %d record(s) from %d container(s)", len(records), len(containers))
        return records

    def _parse_container(self, node: Tag) -> ProductRecord:
        builder = _RecordBuilder(
            name=self._lookup_name(node),
            prices=self._lookup_texts(node, PRICE),
            quantities=self._lookup_texts(node, QUANTITY),
        )
        if not builder.name.found:
            logger.debug("PARSE Tile without a name element (prices=%d, quantities=%d)",
                         len(builder.prices.value), len(builder.quantities.value))
        return builder.build()

    def _lookup_name(self, node: Tag) -> FieldLookup[Optional[str]]:
        element = node.find(NAME)
        if element is None:
            return FieldLookup(None)
        return FieldLookup(element.get_text().strip(), found=True)

    def _lookup_texts(self, node: Tag, matcher: ClassMatcher) -> FieldLookup[List[str]]:
        elements = node.find_all(matcher)
        return FieldLookup([el.get_text().strip() for el in elements], found=bool(elements))


__all__ = ["CatalogExtractor", "FieldLookup", "class_contains", "class_equals"]
