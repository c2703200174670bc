"""
Pricing Config Store — owns the single live pricing configuration.

Readers get the current immutable snapshot without taking a lock; writers
validate, persist and then publish the new snapshot with one reference swap,
so a reader sees either the configuration before a write or the one after it.
Writes are serialized with respect to each other (last writer wins).
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from pydantic.alias_generators import to_camel

from jewelry_pricing.config import Settings, get_settings
from jewelry_pricing.errors import (
    ConfigurationMissing,
    ConfigurationUnavailable,
    ValidationError,
)
from jewelry_pricing.models.enums import ConfigSection, StorageBackend
from jewelry_pricing.models.schemas import METADATA_FIELDS, PricingConfiguration
from jewelry_pricing.persistence.config_repository import (
    ConfigRepository,
    InMemoryConfigRepository,
    MongoConfigRepository,
)
from jewelry_pricing.pricing.defaults import default_configuration
from jewelry_pricing.pricing.validation import ConfigurationRules, parse_configuration
from jewelry_pricing.services.audit_service import AuditService
from jewelry_pricing.utils.hashing import document_fingerprint

logger = logging.getLogger(__name__)


class PricingConfigStore:
    """Snapshot reads, validated replace-or-nothing writes."""

    def __init__(
        self,
        repository: ConfigRepository,
        audit: AuditService | None = None,
        rules: ConfigurationRules | None = None,
    ):
        self._repository = repository
        self._audit = audit or AuditService()
        self._rules = rules or ConfigurationRules()
        self._snapshot: PricingConfiguration | None = None
        self._write_lock = threading.Lock()

    @property
    def audit(self) -> AuditService:
        return self._audit

    # ── Reads ────────────────────────────────────────────

    def get_configuration(self) -> PricingConfiguration:
        """
        Return the current configuration snapshot.
        Raises ConfigurationMissing if none was ever initialized.
        """
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        # Cold start only: load the persisted document once
        with self._write_lock:
            if self._snapshot is None:
                self._snapshot = self._load_persisted()
            if self._snapshot is None:
                raise ConfigurationMissing("Pricing configuration has not been initialized")
            return self._snapshot

    def _load_persisted(self) -> PricingConfiguration | None:
        document = self._repository.load()
        if document is None:
            return None
        try:
            return parse_configuration(document)
        except ValidationError as e:
            raise ConfigurationUnavailable(
                f"Stored pricing configuration is invalid: {e.message}", field=e.field
            ) from e

    def _load_for_write(self) -> tuple[PricingConfiguration | None, int]:
        """
        Current configuration and version for a write. Caller holds the write lock.
        An invalid stored document counts as no current configuration, so the
        write replaces it; its version number is kept when readable.
        """
        if self._snapshot is not None:
            return self._snapshot, self._snapshot.version

        document = self._repository.load()
        if document is None:
            return None, 0
        try:
            current = parse_configuration(document)
        except ValidationError as e:
            logger.warning(f"Replacing invalid stored pricing configuration ({e.field}: {e.message})")
            version = document.get("version")
            if isinstance(version, int) and not isinstance(version, bool) and version > 0:
                return None, version
            return None, 0
        return current, current.version

    # ── Writes ───────────────────────────────────────────

    def initialize(self, defaults: PricingConfiguration | None = None) -> PricingConfiguration:
        """Seed the configuration at first boot. No-op when a valid one is already stored."""
        with self._write_lock:
            existing, version = self._load_for_write()
            if existing is not None:
                self._snapshot = existing
                logger.info(f"Loaded pricing configuration v{existing.version}")
                return existing

            seed = self._rules.validate(defaults if defaults is not None else default_configuration())
            committed = self._commit(seed, version=version + 1, updated_by="system")

        self._audit.record(
            "seed", committed.version, document_fingerprint(committed.rules_dump()), "system"
        )
        logger.info("Seeded default pricing configuration")
        return committed

    def update_configuration(
        self,
        new_config: PricingConfiguration | dict[str, Any],
        updated_by: str | None = None,
        section: str = "",
        action: str = "update",
    ) -> PricingConfiguration:
        """
        Validate and replace the whole configuration.
        Raises ValidationError (store unchanged) on any violation.
        """
        candidate = self._rules.validate(new_config)

        with self._write_lock:
            current, version = self._load_for_write()
            if current is not None and current.same_rules(candidate):
                logger.info(f"Pricing configuration unchanged (v{current.version})")
                self._snapshot = current
                return current

            committed = self._commit(candidate, version=version + 1, updated_by=updated_by)

        self._audit.record(
            action,
            committed.version,
            document_fingerprint(committed.rules_dump()),
            updated_by,
            section=section,
        )
        return committed

    def update_section(
        self,
        section: ConfigSection | str,
        value: Any,
        updated_by: str | None = None,
    ) -> PricingConfiguration:
        """Replace one top-level section and re-validate the whole document."""
        try:
            section = ConfigSection(section)
        except ValueError:
            valid = ", ".join(s.value for s in ConfigSection)
            raise ValidationError(f"Unknown section '{section}'. Valid sections: {valid}", field=str(section)) from None

        current = self.get_configuration()
        document = current.model_dump(mode="json", by_alias=True, exclude=METADATA_FIELDS)
        document[to_camel(section.field_name)] = value
        return self.update_configuration(document, updated_by=updated_by, section=section.value)

    def reset(self, updated_by: str | None = None) -> PricingConfiguration:
        """Restore the default configuration through the normal write path."""
        return self.update_configuration(default_configuration(), updated_by=updated_by, action="reset")

    def _commit(
        self,
        candidate: PricingConfiguration,
        version: int,
        updated_by: str | None,
    ) -> PricingConfiguration:
        """Persist then publish. Caller holds the write lock."""
        committed = candidate.model_copy(update={
            "version": version,
            "updated_at": datetime.now(timezone.utc),
            "updated_by": updated_by,
        })
        self._repository.save(committed.model_dump(mode="json", by_alias=True))
        self._snapshot = committed
        logger.info(f"Committed pricing configuration v{version} (by {updated_by or 'unknown'})")
        return committed


# ── Factory ──────────────────────────────────────────────


def build_config_store(settings: Settings) -> PricingConfigStore:
    """Wire a store to the configured storage backend."""
    rules = ConfigurationRules(max_multiplier=settings.max_material_multiplier)

    if settings.storage_backend == StorageBackend.MONGO.value:
        from jewelry_pricing.persistence.mongo_client import MongoClient

        client = MongoClient(settings)
        repository = MongoConfigRepository(client.get_collection(settings.pricing_collection))
        audit = AuditService(client.get_collection(settings.audit_collection))
        return PricingConfigStore(repository, audit=audit, rules=rules)

    return PricingConfigStore(InMemoryConfigRepository(), rules=rules)


@lru_cache()
def get_config_store() -> PricingConfigStore:
    """Return the process-wide store (singleton)."""
    return build_config_store(get_settings())
