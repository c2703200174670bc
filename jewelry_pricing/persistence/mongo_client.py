"""
Mongo Client — raw database connection management.
Only created when the storage backend is "mongo".
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import PyMongoError

from jewelry_pricing.config import Settings, get_settings
from jewelry_pricing.errors import ConfigurationUnavailable

logger = logging.getLogger(__name__)


class MongoClient:
    """Thin wrapper around pymongo with a lazily opened connection."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._client: Any = None
        self._db: Any = None

    def connect(self) -> None:
        """Establish the MongoDB connection."""
        try:
            self._client = PyMongoClient(
                self.settings.mongodb_uri,
                serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms,
            )
            self._db = self._client[self.settings.mongodb_database]
            logger.info(f"Connected to MongoDB: {self.settings.mongodb_database}")
        except PyMongoError as e:
            raise ConfigurationUnavailable(f"MongoDB connection failed: {e}") from e

    def get_database(self) -> Any:
        """Return the database handle."""
        if self._db is None:
            self.connect()
        return self._db

    def get_collection(self, name: str) -> Any:
        return self.get_database()[name]

    def close(self) -> None:
        """Close the connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")
