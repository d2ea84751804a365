"""
intent_classifier.py
--------------------
Component 1: Query Intent Classifier

Reads intent keyword patterns from the domain config JSON.
Returns the first matching intent, or Intent.INFORMATION as fallback.

Simple, deterministic: no ML, no ambiguity.
"""

import json
from enum import Enum


class Intent(str, Enum):
    GREETING = "greeting"
    THANKS = "thanks"
    IDENTITY = "identity"
    LIST_CATEGORIES = "list"
    INFORMATION = "information"


class IntentClassifier:
    """
    Classifies a user message into an Intent by checking whether the
    message contains any of the intent's keywords.

    Parameters
    ----------
    intent_patterns:
        Ordered dict where each key is an intent name ("greeting", "thanks",
        "identity", "list") and the value has a "keywords" list. Key order
        is the priority order: the first intent with a hit wins.

    Raises
    ------
    ValueError
        If a pattern names an unknown intent or tries to override the
        "information" fallback.
    """

    def __init__(self, intent_patterns: dict):
        # Build {Intent: [keyword, ...]}, lowercase for fast matching
        self._patterns: dict[Intent, list[str]] = {}
        for name, pattern in intent_patterns.items():
            try:
                intent = Intent(name)
            except ValueError:
                raise ValueError(f"Unknown intent in intent_patterns: {name!r}") from None
            if intent is Intent.INFORMATION:
                raise ValueError("'information' is the fallback intent and takes no keywords")
            self._patterns[intent] = [kw.lower() for kw in pattern["keywords"]]

    @classmethod
    def from_config(cls, config_path: str) -> "IntentClassifier":
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        return cls(config["intent_patterns"])

    def classify(self, text: str) -> Intent:
        """
        Return the intent whose keywords appear first in the text,
        or Intent.INFORMATION if no keyword matches.

        Args:
            text: Raw user message. May be empty.

        Returns:
            An Intent member, e.g. Intent.GREETING, Intent.INFORMATION.
        """
        q = text.lower()
        for intent, keywords in self._patterns.items():
            if any(kw in q for kw in keywords):
                return intent
        return Intent.INFORMATION

    def all_intents(self) -> list[Intent]:
        """Return all keyword-driven intents (excluding INFORMATION)."""
        return list(self._patterns.keys())
