"""
Default pricing configuration, seeded at first boot and restored by reset.
Rates are illustrative; the store owner is expected to set real ones.
"""

from __future__ import annotations

from decimal import Decimal

from jewelry_pricing.models.enums import NO_DIAMOND, PricingMethod
from jewelry_pricing.models.schemas import (
    AdditionalCosts,
    CompositionRate,
    DiamondRule,
    MaterialMultiplier,
    PricingConfiguration,
)

GOLD_MATERIALS = (
    MaterialMultiplier(material="yellow-gold", label="Yellow Gold", price_multiplier=Decimal("1.0")),
    MaterialMultiplier(material="white-gold", label="White Gold", price_multiplier=Decimal("1.1")),
    MaterialMultiplier(material="rose-gold", label="Rose Gold", price_multiplier=Decimal("1.05")),
)

# composition -> (label, price per gram)
GOLD_PURITIES = {
    "10K": ("10 Karat Gold", Decimal("25")),
    "12K": ("12 Karat Gold", Decimal("30")),
    "14K": ("14 Karat Gold", Decimal("35")),
    "18K": ("18 Karat Gold", Decimal("45")),
    "22K": ("22 Karat Gold", Decimal("55")),
    "24K": ("24 Karat Gold", Decimal("60")),
}

RING_SIZES = tuple(
    str(whole) if half == 0 else f"{whole}.5"
    for whole in range(4, 13)
    for half in (0, 5)
    if not (whole == 12 and half)
)


def default_configuration() -> PricingConfiguration:
    """Build the documented first-boot configuration."""
    compositions = [
        CompositionRate(composition=code, label=label, price_per_gram=rate, materials=GOLD_MATERIALS)
        for code, (label, rate) in GOLD_PURITIES.items()
    ]
    compositions.append(
        CompositionRate(
            composition="925-silver",
            label="925 Sterling Silver",
            price_per_gram=Decimal("2"),
            materials=(MaterialMultiplier(material="silver", label="Silver"),),
        )
    )
    compositions.append(
        CompositionRate(
            composition="platinum",
            label="Platinum",
            price_per_gram=Decimal("60"),
            materials=(MaterialMultiplier(material="platinum", label="Platinum"),),
        )
    )

    diamonds = (
        DiamondRule(diamond_type=NO_DIAMOND, label="No Diamond"),
        DiamondRule(
            diamond_type="natural",
            label="Natural Diamond",
            pricing_method=PricingMethod.FIXED,
            base_price=Decimal("500"),
        ),
        DiamondRule(
            diamond_type="lab-grown",
            label="Lab-Grown Diamond",
            pricing_method=PricingMethod.FIXED,
            base_price=Decimal("300"),
        ),
    )

    return PricingConfiguration(
        composition_rates=tuple(compositions),
        diamond_pricing=diamonds,
        ring_size_adjustments={size: Decimal("0") for size in RING_SIZES},
        additional_costs=AdditionalCosts(),
    )
