"""Shared pytest fixtures for pricing tests."""

from copy import deepcopy

import pytest

from jewelry_pricing.models.schemas import PricingConfiguration
from jewelry_pricing.persistence.config_repository import InMemoryConfigRepository
from jewelry_pricing.pricing.config_store import PricingConfigStore


EXAMPLE_DOCUMENT = {
    "compositionRates": [
        {
            "composition": "14K",
            "label": "14 Karat Gold",
            "pricePerGram": "50",
            "enabled": True,
            "materials": [
                {"material": "yellow-gold", "label": "Yellow Gold", "priceMultiplier": "1.0"},
                {"material": "white-gold", "label": "White Gold", "priceMultiplier": "1.1"},
            ],
        },
        {
            "composition": "18K",
            "label": "18 Karat Gold",
            "pricePerGram": "70",
            "materials": [
                {"material": "yellow-gold", "label": "Yellow Gold", "priceMultiplier": "1.0"},
            ],
        },
        {
            "composition": "10K",
            "label": "10 Karat Gold",
            "pricePerGram": "30",
            "enabled": False,
            "materials": [
                {"material": "yellow-gold", "label": "Yellow Gold", "priceMultiplier": "1.0"},
                {"material": "white-gold", "label": "White Gold", "priceMultiplier": "1.1"},
            ],
        },
    ],
    "diamondPricing": [
        {"diamondType": "none", "label": "No Diamond"},
        {
            "diamondType": "natural",
            "label": "Natural Diamond",
            "pricingMethod": "per-carat",
            "basePrice": "100",
            "pricePerCarat": "200",
        },
        {
            "diamondType": "lab-grown",
            "label": "Lab-Grown Diamond",
            "pricingMethod": "fixed",
            "basePrice": "300",
        },
        {
            "diamondType": "moissanite",
            "label": "Moissanite",
            "enabled": False,
            "pricingMethod": "fixed",
            "basePrice": "150",
        },
    ],
    "ringSizeAdjustments": {"6": "-10", "7": "0", "8": "5"},
    "additionalCosts": {
        "laborCost": "50",
        "laborCostPerGram": "0",
        "makingCharges": "30",
        "otherCharges": "10",
        "profitMarginPercentage": "30",
        "minimumPrice": "0",
    },
}


@pytest.fixture
def config_document() -> dict:
    """A fresh wire-format copy of the example configuration, safe to mutate."""
    return deepcopy(EXAMPLE_DOCUMENT)


@pytest.fixture
def example_config(config_document) -> PricingConfiguration:
    return PricingConfiguration.model_validate(config_document)


@pytest.fixture
def store(example_config) -> PricingConfigStore:
    """An in-memory store seeded with the example configuration (v1)."""
    config_store = PricingConfigStore(InMemoryConfigRepository())
    config_store.initialize(example_config)
    return config_store


ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def client(store, monkeypatch):
    """API client for the example store, sending the admin token by default."""
    from fastapi.testclient import TestClient
    from jewelry_pricing.api import create_app, routes
    from jewelry_pricing.config import Settings

    monkeypatch.setattr(routes, "get_settings", lambda: Settings(admin_token=ADMIN_TOKEN))
    with TestClient(create_app(store=store)) as test_client:
        test_client.headers["X-Admin-Token"] = ADMIN_TOKEN
        yield test_client
