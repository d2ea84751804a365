"""
assistant.py
------------
Pipeline wiring: message → Reply

    IntentClassifier → DatasetMatcher → ResponseComposer

Usage
-----
    from assistant import DataAssistant

    bot = DataAssistant.from_config("config/bps_medan.json")
    reply = bot.answer("data pendidikan")
    print(reply.text)
    for source in reply.sources:
        print(source.title, source.url)
"""

import json
import logging
from dataclasses import dataclass, field

from catalog import Catalog, DatasetRecord, Source
from dataset_matcher import DatasetMatcher, KeywordRule
from intent_classifier import Intent, IntentClassifier
from response_composer import ResponseComposer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    intent: Intent
    text: str
    sources: list[Source] = field(default_factory=list)
    related: list[DatasetRecord] = field(default_factory=list)


class DataAssistant:
    """
    Runs one user message through the whole pipeline.

    Synchronous and stateless: every call computes the full reply at once.
    Empty input is not filtered here; the chat session skips it.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        matcher: DatasetMatcher,
        composer: ResponseComposer,
    ):
        self.classifier = classifier
        self.matcher = matcher
        self.composer = composer

    @classmethod
    def from_config(cls, config_path: str) -> "DataAssistant":
        """Build every component from a single domain config JSON."""
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)

        catalog = Catalog.from_dict(config)
        rules = [KeywordRule(**raw) for raw in config.get("keyword_rules", [])]
        logger.info(
            "Assistant ready: %d dataset(s), %d keyword rule(s) from %s",
            len(catalog), len(rules), config_path,
        )
        return cls(
            IntentClassifier(config["intent_patterns"]),
            DatasetMatcher(catalog, rules),
            ResponseComposer(catalog, config["replies"]),
        )

    @property
    def catalog(self) -> Catalog:
        return self.matcher.catalog

    def answer(self, text: str) -> Reply:
        intent = self.classifier.classify(text)
        matches = self.matcher.match(text)
        logger.debug("Message %r → intent=%s, matches=%s", text, intent.value, [m.id for m in matches])
        return Reply(
            intent=intent,
            text=self.composer.compose(intent, matches),
            sources=self.composer.sources(intent, matches),
            related=matches,
        )
