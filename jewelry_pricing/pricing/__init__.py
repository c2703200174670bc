"""
Pricing — the single boundary every surface prices through.

    from jewelry_pricing.pricing import calculate, get_config_store

The storefront, cart, checkout and admin calculator all call ``calculate``
with a snapshot from the store; nothing else computes a price.
"""

from .calculator import calculate, calculate_current, round_money
from .config_store import PricingConfigStore, build_config_store, get_config_store
from .defaults import default_configuration
from .validation import ConfigurationRules

__all__ = [
    "calculate",
    "calculate_current",
    "round_money",
    "PricingConfigStore",
    "build_config_store",
    "get_config_store",
    "default_configuration",
    "ConfigurationRules",
]
