"""
Tests: command-line entry point.

Run with:
    pytest jewelry_pricing/tests/test_main.py -v
"""

from decimal import Decimal

import pytest

from jewelry_pricing import main
from jewelry_pricing.persistence.config_repository import InMemoryConfigRepository
from jewelry_pricing.pricing.config_store import PricingConfigStore


@pytest.fixture(autouse=True)
def fresh_store(monkeypatch):
    store = PricingConfigStore(InMemoryConfigRepository())
    monkeypatch.setattr(main, "get_config_store", lambda: store)
    return store


def test_parse_pairs():
    assert main.parse_pairs(["weight=5", " composition = 14K "]) == {"weight": "5", "composition": "14K"}
    with pytest.raises(ValueError):
        main.parse_pairs(["weight"])


def test_run_prices_against_defaults(fresh_store):
    breakdown = main.run(["weight=5", "composition=14K", "material=white-gold", "ring_size=7"])
    # 5g × 35/g × 1.1, no labor, no margin in the defaults
    assert breakdown.final_price == Decimal("192.50")
    assert fresh_store.get_configuration().version == 1


def test_run_reports_calculation_error():
    assert main.run(["weight=5", "composition=9K", "material=white-gold"]) is None


def test_run_reports_bad_input():
    assert main.run(["weight=-1", "composition=14K", "material=white-gold"]) is None
