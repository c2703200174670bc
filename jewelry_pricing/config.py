"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Jewelry Pricing Service"
    debug: bool = True

    # ── Storage ──────────────────────────────────────────
    storage_backend: str = "memory"  # "memory" | "mongo"
    seed_defaults_on_startup: bool = True

    # ── MongoDB ──────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "jewelry_store"
    mongodb_timeout_ms: int = 5000
    pricing_collection: str = "pricingconfigs"
    audit_collection: str = "pricing_audit"

    # ── Admin ────────────────────────────────────────────
    admin_token: str = ""  # empty = admin routes refused
    allow_unauthenticated_admin: bool = False  # local development only

    # ── Validation Limits ────────────────────────────────
    max_material_multiplier: float = 5.0

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
