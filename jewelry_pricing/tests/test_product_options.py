"""
Tests: Product option adapter.

Run with:
    pytest jewelry_pricing/tests/test_product_options.py -v
"""

from decimal import Decimal

import pytest

from jewelry_pricing.errors import OptionNotOffered, ProductNotPurchasable
from jewelry_pricing.services.product_options import (
    OptionSelection,
    ProductOptions,
    available_selections,
    build_request,
    display_price,
    is_purchasable,
    price_range,
    public_options,
    quote,
)


@pytest.fixture
def ring() -> ProductOptions:
    return ProductOptions(
        weight="5",
        compositions=("14K", "10K", "18K"),
        materials=("white-gold", "yellow-gold", "rose-gold"),
        ring_sizes=("8", "6"),
        diamond_types=("none", "natural", "moissanite"),
        diamond_carat="0.5",
    )


class TestPurchasable:
    @pytest.mark.parametrize("weight", [None, "0"])
    def test_no_weight_means_not_purchasable(self, ring, weight):
        product = ring.model_copy(update={"weight": None if weight is None else Decimal(weight)})
        assert not is_purchasable(product)
        with pytest.raises(ProductNotPurchasable):
            build_request(product, OptionSelection(composition="14K", material="white-gold"))

    def test_weighted_product_is_purchasable(self, ring):
        assert is_purchasable(ring)


class TestBuildRequest:
    def test_uses_product_weight_and_carat(self, ring):
        selection = OptionSelection(
            composition="14K", material="white-gold", diamond_type="natural", ring_size="8"
        )
        request = build_request(ring, selection)
        assert request.weight == Decimal("5")
        assert request.diamond_carat == Decimal("0.5")
        assert request.ring_size == "8"

    @pytest.mark.parametrize("selection,field", [
        ({"composition": "22K", "material": "white-gold"}, "composition"),
        ({"composition": "14K", "material": "platinum"}, "material"),
        ({"composition": "14K", "material": "white-gold", "diamond_type": "lab-grown"}, "diamondType"),
        ({"composition": "14K", "material": "white-gold", "ring_size": "11"}, "ringSize"),
    ])
    def test_selection_outside_product_lists(self, ring, selection, field):
        with pytest.raises(OptionNotOffered) as exc:
            build_request(ring, OptionSelection(**selection))
        assert exc.value.field == field

    def test_quote_matches_worked_example(self, ring, example_config):
        selection = OptionSelection(
            composition="14K", material="white-gold", diamond_type="natural", ring_size="8"
        )
        assert quote(ring, selection, example_config).final_price == Decimal("771.23")


class TestAvailableSelections:
    def test_intersects_product_and_configuration(self, ring, example_config):
        options = available_selections(ring, example_config)

        # 10K is disabled; rose gold is priced nowhere
        assert [c.code for c in options.compositions] == ["14K", "18K"]
        fourteen = options.compositions[0]
        assert [m.code for m in fourteen.materials] == ["yellow-gold", "white-gold"]
        assert [m.code for m in options.compositions[1].materials] == ["yellow-gold"]
        # moissanite is disabled in configuration
        assert [d.code for d in options.diamond_types] == ["none", "natural"]
        assert options.ring_sizes == ("8", "6")

    def test_public_options_hide_rates(self, example_config):
        options = public_options(example_config)
        dumped = options.model_dump_json(by_alias=True)
        assert "pricePerGram" not in dumped
        assert "10K" not in [c.code for c in options.compositions]
        assert [d.code for d in options.diamond_types] == ["none", "natural", "lab-grown"]
        assert options.ring_sizes == ("6", "7", "8")


class TestPriceRange:
    def test_min_and_max_over_combinations(self, ring, example_config):
        product = ring.model_copy(update={
            "compositions": ("14K", "10K"),
            "materials": ("white-gold", "yellow-gold"),
            "diamond_types": ("none", "natural"),
        })
        found = price_range(product, example_config)
        # cheapest: 14K yellow, no diamond; dearest: 14K white, natural 0.5ct
        assert found.min == Decimal("464.10")
        assert found.max == Decimal("771.23")
        assert display_price(product, example_config) == Decimal("464.10")

    def test_nothing_priceable(self, ring, example_config):
        product = ring.model_copy(update={"compositions": ("10K",)})
        assert price_range(product, example_config) is None
        assert display_price(product, example_config) is None

    def test_not_purchasable(self, ring, example_config):
        product = ring.model_copy(update={"weight": None})
        assert price_range(product, example_config) is None
