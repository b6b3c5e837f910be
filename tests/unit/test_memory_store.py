"""
Unit tests for the in-memory document store.

Tests:
- AUTO fuzziness thresholds
- Scoring and ordering
- Index lifecycle and error mapping
"""
import pytest

from catalogsearch.errors import IndexCreationError, SearchError
from catalogsearch.models import ProductRecord
from catalogsearch.store.memory_store import InMemoryDocumentStore, max_edits, parse_fuzziness, tokenize

NAME_FIELD = {"name": 3.0}


def _store_with(*names, index="products"):
    store = InMemoryDocumentStore()
    store.create_index(index, ProductRecord.index_mappings())
    for name in names:
        store.upsert(index, ProductRecord(name=name).to_dict())
    return store


class TestFuzziness:
    """Tests for Elasticsearch-style AUTO fuzziness."""

    @pytest.mark.parametrize("term,expected", [
        ("a", 0),
        ("ab", 0),
        ("abc", 1),
        ("badem", 1),
        ("ceviz1", 2),
        ("kavrulmuş", 2),
    ])
    def test_auto_edit_thresholds(self, term, expected):
        assert max_edits(term, "AUTO") == expected

    def test_custom_auto_bounds(self):
        assert parse_fuzziness("AUTO:4,7") == (None, 4, 7)
        assert max_edits("abc", "AUTO:4,7") == 0

    def test_fixed_fuzziness(self):
        assert max_edits("kavrulmuş", "0") == 0
        assert max_edits("ab", "1") == 1

    def test_rejects_out_of_range_fuzziness(self):
        with pytest.raises(ValueError):
            parse_fuzziness("3")

    def test_tokenize_lowercases_unicode_words(self):
        assert tokenize("Kavrulmuş BADEM") == ["kavrulmuş", "badem"]
        assert tokenize(["250 g", "1 kg"]) == ["250", "g", "1", "kg"]
        assert tokenize(None) == []


class TestSearch:
    """Tests for ranked fuzzy search."""

    def test_one_substitution_matches_long_term(self):
        """'bodem' is one edit from 'badem' and long enough for one edit."""
        store = _store_with("Kavrulmuş Badem")

        response = store.search("products", "bodem", fields=NAME_FIELD)

        assert response.total == 1
        assert response.hits[0].source["name"] == "Kavrulmuş Badem"

    def test_transposition_counts_as_one_edit(self):
        store = _store_with("Badem")

        assert store.search("products", "bdaem", fields=NAME_FIELD).total == 1

    def test_short_term_requires_exact_match(self):
        store = _store_with("Ay Çekirdeği")

        assert store.search("products", "ay", fields=NAME_FIELD).total == 1
        assert store.search("products", "az", fields=NAME_FIELD).total == 0

    def test_too_many_edits_do_not_match(self):
        store = _store_with("Badem")

        assert store.search("products", "bxdxm", fields=NAME_FIELD).total == 0

    def test_exact_match_outranks_fuzzy_match(self):
        store = _store_with("Kavrulmuş Bodem", "Kavrulmuş Badem")

        response = store.search("products", "badem", fields=NAME_FIELD)

        assert [h.source["name"] for h in response.hits] == ["Kavrulmuş Badem", "Kavrulmuş Bodem"]
        assert response.hits[0].score > response.hits[1].score

    def test_shorter_name_ranks_higher_for_same_match(self):
        store = _store_with("Çiğ Badem İç Kalite", "Badem")

        names = [h.source["name"] for h in store.search("products", "badem", fields=NAME_FIELD).hits]
        assert names == ["Badem", "Çiğ Badem İç Kalite"]

    def test_ties_keep_insertion_order(self):
        store = _store_with("Badem", "Badem", "Badem")
        store.upsert("products", {"name": "Badem", "prices": ["1"], "quantities": []})

        hits = store.search("products", "badem", fields=NAME_FIELD).hits
        assert [h.source["prices"] for h in hits] == [[], [], [], ["1"]]

    def test_only_listed_fields_are_searched(self):
        store = InMemoryDocumentStore()
        store.create_index("products", {})
        store.upsert("products", ProductRecord(name="Fındık", quantities=["badem"]).to_dict())

        assert store.search("products", "badem", fields=NAME_FIELD).total == 0

    def test_boost_scales_score(self):
        store = _store_with("Badem")

        plain = store.search("products", "badem", fields={"name": 1.0}).hits[0].score
        boosted = store.search("products", "badem", fields={"name": 3.0}).hits[0].score
        assert boosted == pytest.approx(plain * 3)

    def test_size_bounds_hits_but_not_total(self):
        store = _store_with(*["Badem"] * 15)

        response = store.search("products", "badem", fields=NAME_FIELD, size=10)

        assert len(response.hits) == 10
        assert response.total == 15

    def test_missing_name_never_matches(self):
        store = _store_with(None)

        assert store.search("products", "badem", fields=NAME_FIELD).total == 0

    def test_unknown_index_raises_search_error(self):
        store = InMemoryDocumentStore()

        with pytest.raises(SearchError):
            store.search("missing", "badem", fields=NAME_FIELD)

    def test_malformed_fuzziness_raises_search_error(self):
        store = _store_with("Badem")

        with pytest.raises(SearchError):
            store.search("products", "badem", fields=NAME_FIELD, fuzziness="7")


class TestIndexLifecycle:
    """Tests for index creation and writes."""

    def test_create_then_exists(self):
        store = InMemoryDocumentStore()
        assert not store.index_exists("products")

        store.create_index("products", ProductRecord.index_mappings())

        assert store.index_exists("products")

    def test_create_twice_raises(self):
        store = _store_with()

        with pytest.raises(IndexCreationError):
            store.create_index("products", {})

    def test_write_auto_creates_index(self):
        store = InMemoryDocumentStore()

        store.upsert("products", {"name": "Badem"})

        assert store.index_exists("products")
        assert store.count("products") == 1

    def test_documents_are_copies(self):
        store = _store_with("Badem")

        store.documents("products")[0]["name"] = "changed"

        assert store.documents("products")[0]["name"] == "Badem"
