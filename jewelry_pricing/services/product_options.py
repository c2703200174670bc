"""
Product Options — adapter between the product catalog and the calculator.

The catalog owns each product's weight and enabled option lists.  This module
intersects them with what the live configuration enables, turns a customer's
selection into a PricingRequest, and derives the price range shown on
listing pages.  The calculator itself never looks at products.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from itertools import product as cartesian_product
from typing import Optional

from pydantic import Field

from jewelry_pricing.errors import CalculationError, OptionNotOffered, ProductNotPurchasable
from jewelry_pricing.models.enums import NO_DIAMOND
from jewelry_pricing.models.schemas import (
    PriceBreakdown,
    PriceRange,
    PricingConfiguration,
    PricingModel,
    PricingRequest,
)
from jewelry_pricing.pricing.calculator import calculate

logger = logging.getLogger(__name__)


class ProductOptions(PricingModel):
    """The subset of a stored product that pricing needs."""
    weight: Optional[Decimal] = None  # grams; None = not purchasable yet
    compositions: tuple[str, ...] = ()
    materials: tuple[str, ...] = ()
    ring_sizes: tuple[str, ...] = ()
    diamond_types: tuple[str, ...] = (NO_DIAMOND,)
    diamond_carat: Decimal = Field(default=Decimal("0"), ge=0)


class OptionSelection(PricingModel):
    """What the customer picked on the product page."""
    composition: str
    material: str
    diamond_type: str = NO_DIAMOND
    ring_size: Optional[str] = None


class OptionChoice(PricingModel):
    code: str
    label: str = ""


class CompositionChoice(OptionChoice):
    materials: tuple[OptionChoice, ...] = ()


class AvailableOptions(PricingModel):
    """Option-picker view: enabled codes and labels, never raw rates."""
    compositions: tuple[CompositionChoice, ...] = ()
    diamond_types: tuple[OptionChoice, ...] = ()
    ring_sizes: tuple[str, ...] = ()


def is_purchasable(product: ProductOptions) -> bool:
    return product.weight is not None and product.weight > 0


def public_options(config: PricingConfiguration) -> AvailableOptions:
    """Everything the configuration enables, for rendering option pickers."""
    compositions = tuple(
        CompositionChoice(
            code=rate.composition,
            label=rate.label,
            materials=tuple(OptionChoice(code=m.material, label=m.label) for m in rate.materials),
        )
        for rate in config.composition_rates
        if rate.enabled
    )
    diamonds = [OptionChoice(code=NO_DIAMOND, label="No Diamond")]
    for rule in config.diamond_pricing:
        if rule.diamond_type == NO_DIAMOND:
            diamonds[0] = OptionChoice(code=NO_DIAMOND, label=rule.label or "No Diamond")
        elif rule.enabled:
            diamonds.append(OptionChoice(code=rule.diamond_type, label=rule.label))
    return AvailableOptions(
        compositions=compositions,
        diamond_types=tuple(diamonds),
        ring_sizes=tuple(config.ring_size_adjustments),
    )


def available_selections(product: ProductOptions, config: PricingConfiguration) -> AvailableOptions:
    """
    Intersect the product's enabled lists with the configuration.
    Materials are kept per composition, only where that composition prices them.
    """
    enabled = public_options(config)
    compositions = []
    for choice in enabled.compositions:
        if choice.code not in product.compositions:
            continue
        materials = tuple(m for m in choice.materials if m.code in product.materials)
        if materials:
            compositions.append(choice.model_copy(update={"materials": materials}))

    diamonds = tuple(d for d in enabled.diamond_types if d.code in product.diamond_types)
    return AvailableOptions(
        compositions=tuple(compositions),
        diamond_types=diamonds,
        ring_sizes=product.ring_sizes,
    )


def build_request(product: ProductOptions, selection: OptionSelection) -> PricingRequest:
    """Check a selection against the product and build the calculator input."""
    if not is_purchasable(product):
        raise ProductNotPurchasable(
            "Product has no weight set and cannot be priced", field="weight"
        )

    for field, value, offered in (
        ("composition", selection.composition, product.compositions),
        ("material", selection.material, product.materials),
        ("diamondType", selection.diamond_type, product.diamond_types),
    ):
        if value not in offered:
            raise OptionNotOffered(f"'{value}' is not offered for this product", field=field)
    if selection.ring_size and selection.ring_size not in product.ring_sizes:
        raise OptionNotOffered(
            f"Ring size '{selection.ring_size}' is not offered for this product", field="ringSize"
        )

    return PricingRequest(
        weight=product.weight,
        composition=selection.composition,
        material=selection.material,
        diamond_type=selection.diamond_type,
        diamond_carat=product.diamond_carat,
        ring_size=selection.ring_size,
    )


def quote(
    product: ProductOptions,
    selection: OptionSelection,
    config: PricingConfiguration,
) -> PriceBreakdown:
    return calculate(build_request(product, selection), config)


def price_range(product: ProductOptions, config: PricingConfiguration) -> Optional[PriceRange]:
    """
    Cheapest and dearest final price across every priceable combination,
    priced at the product's first ring size.  None when nothing is priceable.
    """
    if not is_purchasable(product):
        return None

    ring_size = product.ring_sizes[0] if product.ring_sizes else None
    prices: list[Decimal] = []
    for composition, material, diamond_type in cartesian_product(
        product.compositions, product.materials, product.diamond_types
    ):
        selection = OptionSelection(
            composition=composition,
            material=material,
            diamond_type=diamond_type,
            ring_size=ring_size,
        )
        try:
            prices.append(quote(product, selection, config).final_price)
        except CalculationError as e:
            logger.debug(f"Skipping {composition}/{material}/{diamond_type}: {e.message}")

    if not prices:
        return None
    return PriceRange(min=min(prices), max=max(prices))


def display_price(product: ProductOptions, config: PricingConfiguration) -> Optional[Decimal]:
    """Listing-page price: the cheapest priceable combination."""
    found = price_range(product, config)
    return found.min if found is not None else None
