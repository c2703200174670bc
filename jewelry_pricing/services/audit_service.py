"""
Audit Service — records every committed pricing configuration change.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class AuditService:
    """
    Records who changed the pricing configuration, when, and to what.
    Writes to a MongoDB collection when one is given, otherwise keeps
    entries in memory.
    """

    def __init__(self, collection: Any = None):
        self._collection = collection
        self._entries: list[dict[str, Any]] = []

    def record(
        self,
        action: str,
        version: int,
        fingerprint: str,
        updated_by: str | None = None,
        section: str = "",
    ) -> dict[str, Any]:
        """Record an audit entry and return it."""
        entry = {
            "action": action,
            "section": section,
            "version": version,
            "fingerprint": fingerprint,
            "updated_by": updated_by or "",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if self._collection is not None:
            try:
                self._collection.insert_one(dict(entry))
            except PyMongoError as e:
                # Configuration is already committed at this point
                logger.error(f"[AUDIT] Failed writing entry for v{version}: {e}")
        else:
            self._entries.append(entry)
        logger.info(f"[AUDIT] {action} {section or 'all'} → v{version} by {updated_by or 'unknown'}")

        return entry

    def get_trail(self, limit: int = 50) -> list[dict[str, Any]]:
        """Return the most recent entries, newest first."""
        if self._collection is not None:
            cursor = self._collection.find({}, {"_id": 0}).sort("version", -1).limit(limit)
            return list(cursor)
        return list(reversed(self._entries))[:limit]
