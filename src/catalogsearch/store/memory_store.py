"""
In-process document store.

Keeps documents in memory and answers the same weighted fuzzy queries as
the Elasticsearch adapter, using Elasticsearch's ``AUTO`` fuzziness rule:
terms shorter than 3 characters must match exactly, terms of 3 to 5
characters tolerate one edit, and longer terms tolerate two. Adjacent
transpositions count as a single edit.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from rapidfuzz.distance import OSA

from ..errors import IndexCreationError, SearchError
from ..logger import get_logger
from .base import DocumentStore, StoredHit, StoreHits

logger = get_logger(__name__)

_token_re = re.compile(r"\w+", re.UNICODE)

AUTO_LOW = 3
AUTO_HIGH = 6


def tokenize(value: Any) -> List[str]:
    """Lowercase word tokens of a string or a list of strings."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        tokens: List[str] = []
        for item in value:
            tokens.extend(tokenize(item))
        return tokens
    return [t.lower() for t in _token_re.findall(str(value))]


def parse_fuzziness(fuzziness: str) -> Tuple[Optional[int], int, int]:
    """
    Parse a fuzziness setting.

    Returns ``(fixed_edits, low, high)``; ``fixed_edits`` is None for AUTO.

    >>> parse_fuzziness("AUTO")
    (None, 3, 6)
    >>> parse_fuzziness("AUTO:4,7")
    (None, 4, 7)
    >>> parse_fuzziness("1")
    (1, 3, 6)
    """
    text = str(fuzziness).strip().upper()
    if text.startswith("AUTO"):
        if ":" in text:
            low, high = text.split(":", 1)[1].split(",")
            return None, int(low), int(high)
        return None, AUTO_LOW, AUTO_HIGH
    edits = int(float(text))
    if edits not in (0, 1, 2):
        raise ValueError(f"fuzziness must be AUTO, 0, 1 or 2, got {fuzziness!r}")
    return edits, AUTO_LOW, AUTO_HIGH


def max_edits(term: str, fuzziness: str = "AUTO") -> int:
    """Number of edits ``term`` may differ by under ``fuzziness``."""
    fixed, low, high = parse_fuzziness(fuzziness)
    if fixed is not None:
        return fixed
    if len(term) < low:
        return 0
    if len(term) < high:
        return 1
    return 2


def term_score(term: str, tokens: Iterable[str], allowed: int) -> float:
    """Best match of ``term`` against ``tokens``: 1.0 exact, less per edit, 0 if none."""
    best = 0.0
    for token in tokens:
        if token == term:
            return 1.0
        if allowed == 0:
            continue
        distance = OSA.distance(term, token, score_cutoff=allowed)
        if distance <= allowed:
            best = max(best, 1.0 / (1 + distance))
    return best


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-of-lists store for tests and the ``memory`` backend.

    Writing to a missing index creates it, as Elasticsearch does.
    """

    def __init__(self) -> None:
        self._indices: Dict[str, Dict[str, Any]] = {}
        self._documents: Dict[str, List[Dict[str, Any]]] = {}

    def index_exists(self, index: str) -> bool:
        return index in self._indices

    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None:
        if index in self._indices:
            raise IndexCreationError(f"Index {index} already exists", index=index)
        self._indices[index] = dict(mappings)
        self._documents[index] = []
        logger.info("MEMORY Created index %s", index)

    def upsert(self, index: str, document: Mapping[str, Any]) -> None:
        if index not in self._indices:
            logger.debug("MEMORY Auto-creating index %s on first write", index)
            self._indices[index] = {}
            self._documents[index] = []
        self._documents[index].append(dict(document))

    def documents(self, index: str) -> List[Dict[str, Any]]:
        """All stored documents of ``index`` in insertion order."""
        return [dict(doc) for doc in self._documents.get(index, [])]

    def count(self, index: str) -> int:
        return len(self._documents.get(index, []))

    def search(
        self,
        index: str,
        query: str,
        *,
        fields: Mapping[str, float],
        fuzziness: str = "AUTO",
        size: int = 10,
    ) -> StoreHits:
        if index not in self._indices:
            raise SearchError(f"no such index [{index}]", query=query)

        try:
            terms = [(term, max_edits(term, fuzziness)) for term in tokenize(query)]
        except ValueError as e:
            raise SearchError(f"Malformed query: {e}", query=query) from e

        scored: List[Tuple[float, Dict[str, Any]]] = []
        for doc in self._documents[index]:
            score = self._score(doc, terms, fields)
            if score > 0:
                scored.append((score, doc))

        # sort() is stable, so equal scores keep insertion order
        scored.sort(key=lambda pair: pair[0], reverse=True)

        hits = [StoredHit(source=dict(doc), score=score) for score, doc in scored[:max(size, 0)]]
        return StoreHits(hits=hits, total=len(scored))

    @staticmethod
    def _score(doc: Mapping[str, Any], terms: List[Tuple[str, int]], fields: Mapping[str, float]) -> float:
        # best_fields: the highest-scoring field wins
        best = 0.0
        for field_name, boost in fields.items():
            tokens = tokenize(doc.get(field_name))
            if not tokens:
                continue
            matched = sum(term_score(term, tokens, allowed) for term, allowed in terms)
            if matched:
                best = max(best, float(boost) * matched / math.sqrt(len(tokens)))
        return best


__all__ = ["InMemoryDocumentStore", "max_edits", "parse_fuzziness", "tokenize"]
