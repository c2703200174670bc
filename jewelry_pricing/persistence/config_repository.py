"""
Configuration Repository — persistence for the single pricing document.

There is exactly one live configuration, stored as one record keyed
``pricing-config``.  Documents cross this boundary as JSON-safe dicts
(decimals as strings) so both backends store the same shape.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Protocol

from pymongo.errors import PyMongoError

from jewelry_pricing.errors import ConfigurationUnavailable

logger = logging.getLogger(__name__)

CONFIG_DOCUMENT_ID = "pricing-config"
RING_SIZES_FIELD = "ringSizeAdjustments"


class ConfigRepository(Protocol):
    def load(self) -> dict[str, Any] | None: ...

    def save(self, document: dict[str, Any]) -> None: ...


class InMemoryConfigRepository:
    """Keeps the document in process memory. Used for development and tests."""

    def __init__(self, document: dict[str, Any] | None = None):
        self._document = deepcopy(document) if document is not None else None

    def load(self) -> dict[str, Any] | None:
        return deepcopy(self._document) if self._document is not None else None

    def save(self, document: dict[str, Any]) -> None:
        self._document = deepcopy(document)
        logger.debug(f"Saved pricing configuration v{document.get('version', '?')} in memory")


# ── MongoDB ──────────────────────────────────────────────


def ring_sizes_to_records(adjustments: dict[str, Any]) -> list[dict[str, Any]]:
    """{'6.5': '2'} -> [{'size': '6.5', 'percentageAdjustment': '2'}]"""
    return [{"size": size, "percentageAdjustment": pct} for size, pct in adjustments.items()]


def ring_sizes_from_records(records: Any) -> Any:
    """Inverse of ring_sizes_to_records. Anything else is handed on unchanged for validation."""
    if not isinstance(records, list):
        return records
    adjustments: dict[str, Any] = {}
    for record in records:
        if not isinstance(record, dict) or "size" not in record:
            return records
        adjustments[str(record["size"])] = record.get("percentageAdjustment")
    return adjustments


class MongoConfigRepository:
    """
    Single-document replace on a MongoDB collection.
    Ring sizes like "6.5" contain a dot, so they are stored as an array of
    {size, percentageAdjustment} records rather than as field names.
    """

    def __init__(self, collection: Any):
        self._collection = collection

    def load(self) -> dict[str, Any] | None:
        try:
            doc = self._collection.find_one({"_id": CONFIG_DOCUMENT_ID})
        except PyMongoError as e:
            raise ConfigurationUnavailable(f"Failed loading pricing configuration: {e}") from e
        if doc is None:
            return None
        doc.pop("_id", None)
        if RING_SIZES_FIELD in doc:
            doc[RING_SIZES_FIELD] = ring_sizes_from_records(doc[RING_SIZES_FIELD])
        return doc

    def save(self, document: dict[str, Any]) -> None:
        stored = {"_id": CONFIG_DOCUMENT_ID, **document}
        if isinstance(stored.get(RING_SIZES_FIELD), dict):
            stored[RING_SIZES_FIELD] = ring_sizes_to_records(stored[RING_SIZES_FIELD])
        try:
            self._collection.replace_one({"_id": CONFIG_DOCUMENT_ID}, stored, upsert=True)
        except PyMongoError as e:
            raise ConfigurationUnavailable(f"Failed saving pricing configuration: {e}") from e
        logger.info(f"Saved pricing configuration v{document.get('version', '?')} to MongoDB")
