"""
response_composer.py
--------------------
Component 3: Response Composer

Turns an intent and a list of matched datasets into the reply text shown
to the user, plus the sources cited under it. Reply wording comes from the
"replies" templates in the domain config JSON.

Output structure (informational reply)
--------------------------------------
Bagus! Saya menemukan dataset yang relevan: **Statistik Pendidikan Kota Medan**

Data lengkap tentang jumlah sekolah, siswa, dan tenaga pendidik di Kota Medan

Klik link di bawah untuk melihat data lengkap dari portal resmi BPS. 🔗
"""

import json

from catalog import Catalog, DatasetRecord, Source
from intent_classifier import Intent

_REQUIRED_REPLIES = (
    "greeting", "thanks", "identity", "list_header",
    "found", "related", "call_to_action", "not_found",
)


class ResponseComposer:
    """
    Composes reply text and citations. Pure: same arguments, same output.

    Parameters
    ----------
    catalog:
        Supplies the category list and the portal fallback source.
    replies:
        Reply templates keyed by name (see _REQUIRED_REPLIES).

    Raises
    ------
    ValueError
        If a reply template is missing, or if an Intent has no handler.
    """

    def __init__(self, catalog: Catalog, replies: dict[str, str]):
        missing = [name for name in _REQUIRED_REPLIES if name not in replies]
        if missing:
            raise ValueError(f"Domain config is missing reply templates: {missing}")
        self.catalog = catalog
        self._replies = dict(replies)

        self._dispatch = {
            Intent.GREETING:        self._canned,
            Intent.THANKS:          self._canned,
            Intent.IDENTITY:        self._canned,
            Intent.LIST_CATEGORIES: self._list_categories,
            Intent.INFORMATION:     self._information,
        }
        unhandled = [i for i in Intent if i not in self._dispatch]
        if unhandled:
            raise ValueError(f"No reply handler for intents: {unhandled}")

    @classmethod
    def from_config(cls, config_path: str, catalog: Catalog | None = None) -> "ResponseComposer":
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        if catalog is None:
            catalog = Catalog.from_dict(config)
        return cls(catalog, config["replies"])

    def compose(self, intent: Intent, matches: list[DatasetRecord]) -> str:
        """
        Build the reply text.

        Args:
            intent:  Classified intent of the user message.
            matches: Records returned by DatasetMatcher.match().

        Returns:
            The full reply string (the shell decides how to reveal it).
        """
        return self._dispatch[intent](intent, matches)

    def sources(self, intent: Intent, matches: list[DatasetRecord]) -> list[Source]:
        """
        Citations for the reply: one per match for informational replies,
        the portal link when nothing matched, none for small talk or lists.
        """
        if intent is not Intent.INFORMATION:
            return []
        if not matches:
            return [self.catalog.portal]
        return [Source(title=r.title, url=r.url) for r in matches]

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _canned(self, intent: Intent, matches: list[DatasetRecord]) -> str:
        return self._replies[intent.value]

    def _list_categories(self, intent: Intent, matches: list[DatasetRecord]) -> str:
        categories = self.catalog.categories
        lines = [self._replies["list_header"].format(count=len(categories)), ""]
        for i, category in enumerate(categories, start=1):
            lines.append(f"{i}. {category}")
        return "\n".join(lines)

    def _information(self, intent: Intent, matches: list[DatasetRecord]) -> str:
        if not matches:
            return self._replies["not_found"]

        primary = matches[0]
        lines = [
            self._replies["found"].format(title=primary.title),
            "",
            primary.description,
            "",
        ]
        if len(matches) > 1:
            lines.append(self._replies["related"])
        lines.append(self._replies["call_to_action"])
        return "\n".join(lines)
