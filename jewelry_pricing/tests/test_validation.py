"""
Tests: Configuration validation rules.

Run with:
    pytest jewelry_pricing/tests/test_validation.py -v
"""

import pytest

from jewelry_pricing.errors import ValidationError
from jewelry_pricing.pricing.defaults import default_configuration
from jewelry_pricing.pricing.validation import ConfigurationRules, format_field_path


class TestStructural:
    def test_negative_price_reports_field_path(self, config_document):
        config_document["compositionRates"][1]["pricePerGram"] = "-5"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "compositionRates[1].pricePerGram"

    def test_unknown_pricing_method(self, config_document):
        config_document["diamondPricing"][1]["pricingMethod"] = "per-gram"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "diamondPricing[1].pricingMethod"

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "abc"])
    def test_non_finite_amounts_rejected(self, config_document, value):
        config_document["additionalCosts"]["laborCost"] = value
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "additionalCosts.laborCost"

    def test_every_violation_is_listed(self, config_document):
        config_document["compositionRates"][0]["pricePerGram"] = "-1"
        config_document["additionalCosts"]["minimumPrice"] = "-1"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        fields = {e["field"] for e in exc.value.errors}
        assert fields == {"compositionRates[0].pricePerGram", "additionalCosts.minimumPrice"}


class TestSemantic:
    def test_valid_document_passes(self, config_document):
        config = ConfigurationRules().validate(config_document)
        assert len(config.composition_rates) == 3

    def test_defaults_pass(self):
        assert ConfigurationRules().check_configuration(default_configuration()) == []

    def test_multiplier_above_bound(self, config_document):
        config_document["compositionRates"][0]["materials"][1]["priceMultiplier"] = "11"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "compositionRates[0].materials[1].priceMultiplier"

    def test_multiplier_bound_is_configurable(self, config_document):
        config_document["compositionRates"][0]["materials"][1]["priceMultiplier"] = "1.6"
        with pytest.raises(ValidationError):
            ConfigurationRules(max_multiplier=1.5).validate(config_document)

    def test_duplicate_composition(self, config_document):
        config_document["compositionRates"][2]["composition"] = "14K"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "compositionRates[2].composition"
        assert "Duplicate" in exc.value.message

    def test_duplicate_material_within_composition(self, config_document):
        config_document["compositionRates"][0]["materials"][1]["material"] = "yellow-gold"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "compositionRates[0].materials[1].material"

    def test_same_material_in_two_compositions_is_fine(self, config_document):
        # yellow-gold appears under 14K, 18K and 10K
        ConfigurationRules().validate(config_document)

    def test_duplicate_diamond_type(self, config_document):
        config_document["diamondPricing"][2]["diamondType"] = "natural"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "diamondPricing[2].diamondType"

    def test_priced_none_diamond_rejected(self, config_document):
        config_document["diamondPricing"][0]["basePrice"] = "25"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "diamondPricing[0].basePrice"

    def test_invalid_code(self, config_document):
        config_document["compositionRates"][0]["composition"] = "14 K!"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == "compositionRates[0].composition"


class TestRingSizeLabels:
    @pytest.mark.parametrize("label", ["13.5", "3", "15", "20.5"])
    def test_unlisted_numeric_sizes_accepted(self, config_document, label):
        config_document["ringSizeAdjustments"][label] = "2"
        config = ConfigurationRules().validate(config_document)
        assert label in config.ring_size_adjustments

    @pytest.mark.parametrize("label", ["large", "6.25", "7.", "M"])
    def test_malformed_sizes_rejected(self, config_document, label):
        config_document["ringSizeAdjustments"][label] = "0"
        with pytest.raises(ValidationError) as exc:
            ConfigurationRules().validate(config_document)
        assert exc.value.field_path == f"ringSizeAdjustments.{label}"

    def test_adjustment_cannot_remove_whole_price(self, config_document):
        config_document["ringSizeAdjustments"]["9"] = "-100"
        with pytest.raises(ValidationError):
            ConfigurationRules().validate(config_document)


class TestFieldPath:
    def test_format(self):
        assert format_field_path(("compositionRates", 2, "pricePerGram")) == "compositionRates[2].pricePerGram"
        assert format_field_path(("additionalCosts", "laborCost")) == "additionalCosts.laborCost"
        assert format_field_path(()) == ""
