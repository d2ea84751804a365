"""
dataset_matcher.py
------------------
Component 2: Dataset Matcher

Responsibility
--------------
Given a raw user message, find the catalog records the reply should cite.

Algorithm
---------
1. Keyword phase: look for domain keyword phrases ("populasi", "ekonomi",
   "pendidikan", ...) and category names in the lower-cased message.
   Each phrase selects the records whose id starts with the phrase's prefix;
   a category name selects the records of that category.
2. Full-text phase: only when phase 1 found nothing. Uses the same
   detection as phase 1 over the whole message.
3. Per-word phase: only when phase 2 found nothing. Split the message into
   words longer than 2 characters; for each word try keyword detection,
   else full-text search keeping its first 2 hits.
   Results are de-duplicated by id and capped at 3.

Phases 1 and 2 return at most 5 records, in catalog order.
A message that matches nothing yields an empty list; that is not an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from catalog import Catalog, DatasetRecord

logger = logging.getLogger(__name__)

MAX_RESULTS = 5
MAX_WORD_RESULTS = 3
MAX_SEARCH_HITS_PER_WORD = 2
MIN_WORD_LENGTH = 3


@dataclass(frozen=True)
class KeywordRule:
    """A domain phrase and the id prefix of the records it selects."""

    phrase: str
    id_prefix: str


class DatasetMatcher:
    """
    Matches user messages against an injected, read-only catalog.

    Parameters
    ----------
    catalog:
        The Catalog to search.
    keyword_rules:
        Phrase → id-prefix rules for the keyword phase. Phrases are
        compared lower-cased. Defaults to no rules (category names only).
    """

    def __init__(self, catalog: Catalog, keyword_rules: list[KeywordRule] | None = None):
        self.catalog = catalog
        self.keyword_rules = [
            KeywordRule(rule.phrase.lower(), rule.id_prefix)
            for rule in (keyword_rules or [])
        ]

    @classmethod
    def from_config(cls, config_path: str, catalog: Catalog | None = None) -> "DatasetMatcher":
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        rules = [KeywordRule(**raw) for raw in config.get("keyword_rules", [])]
        if catalog is None:
            catalog = Catalog.from_dict(config)
        return cls(catalog, rules)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def match(self, text: str) -> list[DatasetRecord]:
        """
        Main entry point.

        Args:
            text: Raw user message.

        Returns:
            Ordered list of at most 5 unique records, in the order they
            were discovered. Empty when nothing matches.
        """
        # 1. Keyword phase
        records = self.detect_keywords(text)
        if records:
            logger.debug("Keyword phase for %r: %d result(s)", text, len(records))
            return records[:MAX_RESULTS]

        # 2. Full-text phase
        records = self.search(text)
        if records:
            logger.debug("Full-text phase for %r: %d result(s)", text, len(records))
            return records[:MAX_RESULTS]

        # 3. Per-word phase
        records = self._match_words(text)
        if not records:
            logger.info("No datasets found for message: %r", text)
        else:
            logger.info(
                "Found %d dataset(s) word by word: %s",
                len(records), [r.id for r in records],
            )
        return records

    def detect_keywords(self, text: str) -> list[DatasetRecord]:
        """Return records selected by a category name or keyword rule in text."""
        q = text.lower()
        prefixes = [rule.id_prefix for rule in self.keyword_rules if rule.phrase in q]
        return [
            record for record in self.catalog
            if record.category.lower() in q
            or any(record.id.startswith(prefix) for prefix in prefixes)
        ]

    def search(self, text: str) -> list[DatasetRecord]:
        """
        Full-text search over the catalog.

        Same detection as detect_keywords(); kept as its own step so the
        matcher's phases stay explicit.
        """
        return self.detect_keywords(text)

    # ------------------------------------------------------------------
    # Per-word fallback
    # ------------------------------------------------------------------

    def _match_words(self, text: str) -> list[DatasetRecord]:
        words = [w for w in text.lower().split() if len(w) >= MIN_WORD_LENGTH]

        seen_ids: set[str] = set()
        results: list[DatasetRecord] = []

        for word in words:
            hits = self.detect_keywords(word)
            if not hits:
                hits = self.search(word)[:MAX_SEARCH_HITS_PER_WORD]
            for record in hits:
                if record.id not in seen_ids:
                    seen_ids.add(record.id)
                    results.append(record)

        return results[:MAX_WORD_RESULTS]
