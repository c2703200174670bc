"""Persistence — MongoClient, configuration repositories."""

from jewelry_pricing.persistence.mongo_client import MongoClient
from jewelry_pricing.persistence.config_repository import (
    ConfigRepository,
    InMemoryConfigRepository,
    MongoConfigRepository,
)

__all__ = ["MongoClient", "ConfigRepository", "InMemoryConfigRepository", "MongoConfigRepository"]
