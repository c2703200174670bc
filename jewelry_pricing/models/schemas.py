"""
Data schemas for the pricing ruleset and for one price calculation.

Attributes are snake_case in Python; the JSON wire format uses camelCase
(``compositionRates``, ``pricePerGram``...) and accepts either spelling.
Every model is frozen so a configuration snapshot handed to a reader can
never change under it.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import NO_DIAMOND, PricingMethod


class PricingModel(BaseModel):
    """Shared config: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── Configuration ────────────────────────────────────────


class MaterialMultiplier(PricingModel):
    """Finish/colour of a composition, e.g. white gold costs 10% more."""
    material: str = Field(min_length=1)
    label: str = ""
    price_multiplier: Decimal = Field(default=Decimal("1"), ge=0)


class CompositionRate(PricingModel):
    """Per-gram rate of one metal purity (10K, 14K, platinum...)."""
    composition: str = Field(min_length=1)
    label: str = ""
    price_per_gram: Decimal = Field(ge=0)
    enabled: bool = True
    materials: tuple[MaterialMultiplier, ...] = ()

    def find_material(self, material: str) -> Optional[MaterialMultiplier]:
        for entry in self.materials:
            if entry.material == material:
                return entry
        return None


class DiamondRule(PricingModel):
    diamond_type: str = Field(min_length=1)
    label: str = ""
    enabled: bool = True
    pricing_method: PricingMethod = PricingMethod.FIXED
    base_price: Decimal = Field(default=Decimal("0"), ge=0)
    price_per_carat: Decimal = Field(default=Decimal("0"), ge=0)  # per-carat only


class AdditionalCosts(PricingModel):
    """Store-wide cost dials. Every dial is additive; absent dials are 0."""
    labor_cost: Decimal = Field(default=Decimal("0"), ge=0)
    labor_cost_per_gram: Decimal = Field(default=Decimal("0"), ge=0)
    making_charges: Decimal = Field(default=Decimal("0"), ge=0)
    other_charges: Decimal = Field(default=Decimal("0"), ge=0)
    profit_margin_percentage: Decimal = Field(default=Decimal("0"), ge=0)
    minimum_price: Decimal = Field(default=Decimal("0"), ge=0)


# Metadata fields stamped by the store, excluded from rule comparisons.
METADATA_FIELDS = {"version", "updated_at", "updated_by"}


class PricingConfiguration(PricingModel):
    """The single, process-wide pricing ruleset."""
    composition_rates: tuple[CompositionRate, ...] = ()
    diamond_pricing: tuple[DiamondRule, ...] = ()
    ring_size_adjustments: dict[str, Decimal] = Field(default_factory=dict)
    additional_costs: AdditionalCosts = Field(default_factory=AdditionalCosts)

    version: int = 0
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    def find_composition(self, composition: str) -> Optional[CompositionRate]:
        for rate in self.composition_rates:
            if rate.composition == composition:
                return rate
        return None

    def find_diamond_rule(self, diamond_type: str) -> Optional[DiamondRule]:
        for rule in self.diamond_pricing:
            if rule.diamond_type == diamond_type:
                return rule
        return None

    def ring_size_percentage(self, ring_size: Optional[str]) -> Decimal:
        """Percentage adjustment for a size; unknown or missing sizes are 0%."""
        if not ring_size:
            return Decimal("0")
        return self.ring_size_adjustments.get(ring_size, Decimal("0"))

    def same_rules(self, other: PricingConfiguration) -> bool:
        """True when both carry identical rules (amounts compared numerically)."""
        return self.model_dump(exclude=METADATA_FIELDS) == other.model_dump(exclude=METADATA_FIELDS)

    def rules_dump(self) -> dict[str, Any]:
        """JSON-safe wire document of the rules, without store metadata."""
        return self.model_dump(mode="json", by_alias=True, exclude=METADATA_FIELDS)


# ── Calculation ──────────────────────────────────────────


class PricingRequest(PricingModel):
    """The chosen attributes of one product to price."""
    weight: Decimal = Field(gt=0)  # grams
    composition: str = Field(min_length=1)
    material: str = Field(min_length=1)
    diamond_type: str = NO_DIAMOND
    diamond_carat: Decimal = Decimal("0")  # checked against the diamond rule
    ring_size: Optional[str] = None


class PriceBreakdown(PricingModel):
    """
    Every term of the price formula. Intermediates keep full precision;
    only ``final_price`` is rounded to cents for display.
    """
    metal_cost: Decimal
    diamond_cost: Decimal
    labor_and_making_cost: Decimal
    pre_adjustment_subtotal: Decimal
    ring_size_adjustment_amount: Decimal
    subtotal: Decimal
    profit_amount: Decimal
    unrounded_final_price: Decimal
    final_price: Decimal
    configuration_version: int = 0
    request: PricingRequest


class PriceRange(PricingModel):
    min: Decimal
    max: Decimal
