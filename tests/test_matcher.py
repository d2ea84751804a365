"""
tests/test_matcher.py
---------------------
Unit tests for Component 2: DatasetMatcher

Run with:
    pytest tests/test_matcher.py -v

Catalogs are synthetic so results do not depend on the shipped config.
"""

import os
import pytest
from unittest.mock import patch

from catalog import Catalog, DatasetRecord, Source
from dataset_matcher import DatasetMatcher, KeywordRule

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "config", "bps_medan.json")

RULES = [
    KeywordRule("populasi", "pop"),
    KeywordRule("ekonomi", "econ"),
    KeywordRule("pendidikan", "edu"),
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def make_record(record_id: str, category: str) -> DatasetRecord:
    """Helper: construct a catalog record with throwaway text fields."""
    return DatasetRecord(
        id=record_id,
        title=f"Dataset {record_id}",
        description="",
        url=f"https://example.test/{record_id}",
        category=category,
    )


def make_catalog(*records: DatasetRecord) -> Catalog:
    return Catalog(records=records, categories=(), portal=Source("Portal", "https://example.test"))


@pytest.fixture
def catalog():
    return make_catalog(
        make_record("pop_001", "Kependudukan"),
        make_record("econ_001", "Ekonomi"),
        make_record("edu_001", "Pendidikan"),
    )


@pytest.fixture
def matcher(catalog):
    return DatasetMatcher(catalog, RULES)


# ---------------------------------------------------------------------------
# detect_keywords tests
# ---------------------------------------------------------------------------

class TestDetectKeywords:
    def test_rule_phrase_selects_id_prefix(self, matcher):
        assert [r.id for r in matcher.detect_keywords("populasi kota medan")] == ["pop_001"]

    def test_category_name_selects_records(self, matcher):
        assert [r.id for r in matcher.detect_keywords("data kependudukan")] == ["pop_001"]

    def test_case_insensitive(self, matcher):
        assert [r.id for r in matcher.detect_keywords("EKONOMI Medan")] == ["econ_001"]

    def test_hits_follow_catalog_order(self, matcher):
        hits = matcher.detect_keywords("pendidikan dan populasi")
        assert [r.id for r in hits] == ["pop_001", "edu_001"]

    def test_no_hit(self, matcher):
        assert matcher.detect_keywords("cuaca hari ini") == []

    def test_prefix_must_start_the_id(self):
        matcher = DatasetMatcher(make_catalog(make_record("xpop_1", "Lain")), RULES)
        assert matcher.detect_keywords("populasi") == []

    def test_without_rules_only_categories_match(self, catalog):
        matcher = DatasetMatcher(catalog)
        assert matcher.detect_keywords("populasi") == []
        assert [r.id for r in matcher.detect_keywords("ekonomi")] == ["econ_001"]

    def test_search_uses_same_detection(self, matcher):
        for text in ("populasi", "ekonomi dan pendidikan", "cuaca"):
            assert matcher.search(text) == matcher.detect_keywords(text)


# ---------------------------------------------------------------------------
# match tests
# ---------------------------------------------------------------------------

class TestMatch:
    def test_population_record_first(self, matcher):
        results = matcher.match("populasi kota medan")
        assert results[0].id == "pop_001"

    def test_education_query(self, matcher):
        assert [r.id for r in matcher.match("data pendidikan")] == ["edu_001"]

    def test_unknown_text_returns_empty(self, matcher):
        assert matcher.match("xyzxyz not a real keyword") == []

    def test_empty_text_returns_empty(self, matcher):
        assert matcher.match("") == []

    def test_capped_at_five(self):
        records = [make_record(f"econ_{i:03}", "Ekonomi") for i in range(7)]
        matcher = DatasetMatcher(make_catalog(*records), RULES)
        results = matcher.match("ekonomi")
        assert [r.id for r in results] == [f"econ_{i:03}" for i in range(5)]

    def test_no_duplicate_ids(self, matcher):
        results = matcher.match("populasi kependudukan ekonomi pendidikan")
        ids = [r.id for r in results]
        assert len(ids) == len(set(ids)) == 3

    def test_keyword_phase_short_circuits(self, matcher):
        with patch.object(matcher, "search") as search:
            matcher.match("ekonomi")
        search.assert_not_called()

    def test_full_text_phase_returns_first_five(self, matcher):
        records = [make_record(f"r_{i}", f"Kat{i}") for i in range(7)]
        with patch.object(matcher, "detect_keywords", return_value=[]), \
             patch.object(matcher, "search", return_value=records) as search, \
             patch.object(matcher, "_match_words") as match_words:
            results = matcher.match("statistik kota")
        assert results == records[:5]
        search.assert_called_once_with("statistik kota")
        match_words.assert_not_called()

    def test_real_config(self):
        matcher = DatasetMatcher.from_config(CONFIG_PATH)
        assert [r.id for r in matcher.match("statistik ekonomi")] == ["econ_001"]


# ---------------------------------------------------------------------------
# Per-word fallback tests
# ---------------------------------------------------------------------------

class TestPerWordPhase:
    """
    With identical keyword and full-text detection a word can only hit when
    the whole message already did, so these tests fake detect_keywords to
    reach the per-word phase.
    """

    @pytest.fixture
    def records(self):
        return [make_record(f"r_{i}", f"Kat{i}") for i in range(5)]

    @pytest.fixture
    def word_matcher(self, records):
        return DatasetMatcher(make_catalog(*records), RULES)

    def test_accumulates_dedupes_and_caps_at_three(self, word_matcher, records):
        r0, r1, r2, r3, _ = records
        hits = {"alpha": [r0, r1], "beta": [r1, r2], "gamma": [r3]}
        with patch.object(word_matcher, "detect_keywords", side_effect=lambda t: hits.get(t, [])):
            results = word_matcher.match("alpha beta gamma")
        assert [r.id for r in results] == ["r_0", "r_1", "r_2"]

    def test_short_words_are_skipped(self, word_matcher):
        with patch.object(word_matcher, "detect_keywords", return_value=[]) as detect:
            word_matcher.match("ab cde")
        checked = [c.args[0] for c in detect.call_args_list]
        assert "ab" not in checked
        assert "cde" in checked

    def test_search_fallback_keeps_two_hits(self, word_matcher, records):
        with patch.object(word_matcher, "detect_keywords", return_value=[]), \
             patch.object(word_matcher, "search", side_effect=lambda t: records if t == "alpha" else []):
            results = word_matcher.match("alpha zzz")
        assert [r.id for r in results] == ["r_0", "r_1"]

    def test_search_skipped_when_word_has_keyword_hit(self, word_matcher, records):
        r0 = records[0]
        with patch.object(word_matcher, "detect_keywords", side_effect=lambda t: [r0] if t == "alpha" else []), \
             patch.object(word_matcher, "search", return_value=[]) as search:
            results = word_matcher.match("alpha zzz")
        assert [r.id for r in results] == ["r_0"]
        searched = [c.args[0] for c in search.call_args_list]
        assert "alpha" not in searched
        assert "zzz" in searched
