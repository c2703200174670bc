"""
Price Calculator — turns a product's chosen attributes plus the pricing
configuration into a full price breakdown.

Pure and deterministic: no I/O, no hidden state.  The same request and the
same configuration snapshot always give the same breakdown, which is what
lets the admin test calculator and the storefront agree on every price.

Formula order (percentages apply to the subtotal, never to the final price):

    metal       = weight × pricePerGram × priceMultiplier
    diamond     = 0 | basePrice | basePrice + pricePerCarat × carat
    labor       = laborCost + laborCostPerGram × weight + makingCharges + otherCharges
    pre         = metal + diamond + labor
    ring size   = pre × sizePercentage / 100
    subtotal    = pre + ring size
    profit      = subtotal × margin / 100
    final       = max(subtotal + profit, minimumPrice), rounded half-up to cents
"""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

from jewelry_pricing.errors import (
    CompositionDisabled,
    DiamondTypeDisabled,
    InvalidCarat,
    UnknownComposition,
    UnknownDiamondType,
    UnknownMaterial,
)
from jewelry_pricing.models.enums import NO_DIAMOND, PricingMethod
from jewelry_pricing.models.schemas import (
    CompositionRate,
    MaterialMultiplier,
    PriceBreakdown,
    PricingConfiguration,
    PricingRequest,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, half-up (771.225 -> 771.23)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def resolve_metal(
    request: PricingRequest, config: PricingConfiguration
) -> tuple[CompositionRate, MaterialMultiplier]:
    rate = config.find_composition(request.composition)
    if rate is None:
        raise UnknownComposition(
            f"Composition '{request.composition}' is not configured", field="composition"
        )
    if not rate.enabled:
        raise CompositionDisabled(
            f"Composition '{request.composition}' is disabled", field="composition"
        )

    material = rate.find_material(request.material)
    if material is None:
        raise UnknownMaterial(
            f"Material '{request.material}' is not offered for {request.composition}",
            field="material",
        )
    return rate, material


def diamond_cost(request: PricingRequest, config: PricingConfiguration) -> Decimal:
    """Cost of the stone; 'none' is always free and ignores the carat."""
    if request.diamond_type == NO_DIAMOND:
        return ZERO

    rule = config.find_diamond_rule(request.diamond_type)
    if rule is None:
        raise UnknownDiamondType(
            f"Diamond type '{request.diamond_type}' is not configured", field="diamondType"
        )
    if not rule.enabled:
        raise DiamondTypeDisabled(
            f"Diamond type '{request.diamond_type}' is disabled", field="diamondType"
        )

    if rule.pricing_method == PricingMethod.FIXED:
        return rule.base_price

    if request.diamond_carat <= 0:
        raise InvalidCarat(
            f"Diamond type '{request.diamond_type}' is priced per carat; "
            f"carat weight must be greater than 0",
            field="diamondCarat",
        )
    return rule.base_price + rule.price_per_carat * request.diamond_carat


def labor_and_making_cost(request: PricingRequest, config: PricingConfiguration) -> Decimal:
    costs = config.additional_costs
    return (
        costs.labor_cost
        + costs.labor_cost_per_gram * request.weight
        + costs.making_charges
        + costs.other_charges
    )


def calculate(request: PricingRequest, config: PricingConfiguration) -> PriceBreakdown:
    """
    Compute the full price breakdown.
    Raises a CalculationError subclass if any attribute cannot be resolved;
    no partial breakdown is ever returned.
    """
    rate, material = resolve_metal(request, config)
    metal = request.weight * rate.price_per_gram * material.price_multiplier
    diamond = diamond_cost(request, config)
    labor = labor_and_making_cost(request, config)

    pre_adjustment = metal + diamond + labor
    size_pct = config.ring_size_percentage(request.ring_size)
    size_adjustment = pre_adjustment * size_pct / HUNDRED
    subtotal = pre_adjustment + size_adjustment

    costs = config.additional_costs
    profit = subtotal * costs.profit_margin_percentage / HUNDRED
    unrounded = max(subtotal + profit, costs.minimum_price)

    final = round_money(unrounded)
    if final < costs.minimum_price:
        # Sub-cent minimum: round up so the floor still holds
        final = costs.minimum_price.quantize(CENTS, rounding=ROUND_CEILING)

    logger.debug(
        f"Priced {request.weight}g {request.composition}/{request.material} "
        f"diamond={request.diamond_type} size={request.ring_size} → {final}"
    )

    return PriceBreakdown(
        metal_cost=metal,
        diamond_cost=diamond,
        labor_and_making_cost=labor,
        pre_adjustment_subtotal=pre_adjustment,
        ring_size_adjustment_amount=size_adjustment,
        subtotal=subtotal,
        profit_amount=profit,
        unrounded_final_price=unrounded,
        final_price=final,
        configuration_version=config.version,
        request=request,
    )


def calculate_current(request: PricingRequest, store) -> PriceBreakdown:
    """Price a request against the store's current snapshot."""
    return calculate(request, store.get_configuration())
