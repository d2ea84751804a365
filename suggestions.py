"""
suggestions.py
--------------
Example questions offered on the welcome screen and while typing.
"""

import json

MIN_QUERY_LENGTH = 2
WELCOME_COUNT = 6
FALLBACK_COUNT = 4


class SuggestionProvider:
    """
    Filters a fixed list of example questions.

    Parameters
    ----------
    suggestions:
        Example questions in display order.
    """

    def __init__(self, suggestions: list[str]):
        self._suggestions = list(suggestions)

    @classmethod
    def from_config(cls, config_path: str) -> "SuggestionProvider":
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        return cls(config.get("suggestions", []))

    def suggest(self, text: str = "") -> list[str]:
        """
        Short or empty text gets the welcome set; otherwise the suggestions
        containing the text, or a few defaults when none do.
        """
        if not text or len(text) < MIN_QUERY_LENGTH:
            return self._suggestions[:WELCOME_COUNT]

        q = text.lower()
        matching = [s for s in self._suggestions if q in s.lower()]
        return matching or self._suggestions[:FALLBACK_COUNT]
