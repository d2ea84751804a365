"""
catalog.py
----------
Component 0: Dataset Catalog

The fixed, read-only list of BPS Kota Medan dataset records the assistant
can cite, plus the subject-area categories and the general portal link.

The catalog is an immutable value built once from the domain config JSON
and passed explicitly to the matcher and composer, so tests can inject a
synthetic catalog instead of the real one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "title", "description", "url", "category")


@dataclass(frozen=True)
class DatasetRecord:
    id: str
    title: str
    description: str
    url: str
    category: str


@dataclass(frozen=True)
class Source:
    """A citation shown under a reply: link text plus external URL."""

    title: str
    url: str


@dataclass(frozen=True)
class Catalog:
    """
    Immutable collection of dataset records.

    Parameters
    ----------
    records:
        Dataset records in catalog order. Ids must be unique.
    categories:
        Subject-area names listed by the "list" reply, in display order.
    portal:
        Fallback citation used when an informational query matches nothing.

    Raises
    ------
    ValueError
        If a record is missing a required field or an id is duplicated.
    """

    records: tuple[DatasetRecord, ...]
    categories: tuple[str, ...]
    portal: Source

    def __post_init__(self):
        seen: set[str] = set()
        for record in self.records:
            for field in ("id", "title", "url", "category"):
                if not getattr(record, field):
                    raise ValueError(f"Dataset record {record.id!r} has an empty {field!r}")
            if record.id in seen:
                raise ValueError(f"Duplicate dataset id in catalog: {record.id!r}")
            seen.add(record.id)

    @classmethod
    def from_dict(cls, config: dict) -> "Catalog":
        """Build a catalog from the parsed domain config."""
        records = []
        for raw in config.get("datasets", []):
            missing = [f for f in _REQUIRED_FIELDS if f not in raw]
            if missing:
                raise ValueError(
                    f"Dataset entry {raw.get('id', '?')!r} is missing fields: {missing}"
                )
            records.append(DatasetRecord(**{f: raw[f] for f in _REQUIRED_FIELDS}))

        portal = config.get("portal") or {}
        if not portal.get("url"):
            raise ValueError("Domain config has no portal url")

        catalog = cls(
            records=tuple(records),
            categories=tuple(config.get("categories", [])),
            portal=Source(title=portal.get("title", portal["url"]), url=portal["url"]),
        )
        logger.debug(
            "Loaded catalog: %d record(s), %d categories",
            len(catalog.records), len(catalog.categories),
        )
        return catalog

    @classmethod
    def from_config(cls, config_path: str) -> "Catalog":
        with open(config_path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def get(self, record_id: str) -> DatasetRecord | None:
        return next((r for r in self.records if r.id == record_id), None)
