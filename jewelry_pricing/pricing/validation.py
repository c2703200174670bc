"""
Configuration Validation — structural and semantic checks applied to every
configuration write before it is committed.

Structural checks (types, enums, non-negative bounds) come from the pydantic
schema; semantic checks (finite amounts, multiplier range, duplicate codes,
ring-size label syntax) live here.  Violations are reported with the wire
field path of the offending value so the admin UI can highlight one input.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Any

import pydantic

from jewelry_pricing.errors import ValidationError
from jewelry_pricing.models.enums import NO_DIAMOND
from jewelry_pricing.models.schemas import PricingConfiguration

logger = logging.getLogger(__name__)

CODE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
RING_SIZE_PATTERN = re.compile(r"^\d+(\.5)?$")

DEFAULT_MAX_MULTIPLIER = Decimal("5")


def format_field_path(loc: tuple[Any, ...]) -> str:
    """('compositionRates', 2, 'pricePerGram') -> 'compositionRates[2].pricePerGram'."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def parse_configuration(data: Any) -> PricingConfiguration:
    """
    Build a PricingConfiguration from a wire document.
    Raises ValidationError carrying every structural violation.
    """
    if isinstance(data, PricingConfiguration):
        return data
    try:
        return PricingConfiguration.model_validate(data)
    except pydantic.ValidationError as e:
        errors = [
            {"field": format_field_path(err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        first = errors[0]
        raise ValidationError(first["message"], field=first["field"], errors=errors) from e


class ConfigurationRules:
    """Semantic rules a pricing configuration must satisfy."""

    def __init__(self, max_multiplier: Decimal | float = DEFAULT_MAX_MULTIPLIER):
        self.max_multiplier = Decimal(str(max_multiplier))

    def check_configuration(self, config: PricingConfiguration) -> list[dict[str, str]]:
        """
        Apply every semantic check.
        Returns list of violations: {field, message}.
        """
        violations: list[dict[str, str]] = []

        # ── Compositions & materials ─────────────────────
        seen_compositions: set[str] = set()
        for i, rate in enumerate(config.composition_rates):
            path = f"compositionRates[{i}]"
            self._check_code(violations, f"{path}.composition", rate.composition)
            if rate.composition in seen_compositions:
                violations.append({
                    "field": f"{path}.composition",
                    "message": f"Duplicate composition '{rate.composition}'",
                })
            seen_compositions.add(rate.composition)
            self._check_amount(violations, f"{path}.pricePerGram", rate.price_per_gram)

            seen_materials: set[str] = set()
            for j, entry in enumerate(rate.materials):
                mpath = f"{path}.materials[{j}]"
                self._check_code(violations, f"{mpath}.material", entry.material)
                if entry.material in seen_materials:
                    violations.append({
                        "field": f"{mpath}.material",
                        "message": (
                            f"Duplicate material '{entry.material}' "
                            f"in composition '{rate.composition}'"
                        ),
                    })
                seen_materials.add(entry.material)
                self._check_amount(
                    violations,
                    f"{mpath}.priceMultiplier",
                    entry.price_multiplier,
                    upper=self.max_multiplier,
                )

        # ── Diamonds ─────────────────────────────────────
        seen_diamonds: set[str] = set()
        for i, rule in enumerate(config.diamond_pricing):
            path = f"diamondPricing[{i}]"
            self._check_code(violations, f"{path}.diamondType", rule.diamond_type)
            if rule.diamond_type in seen_diamonds:
                violations.append({
                    "field": f"{path}.diamondType",
                    "message": f"Duplicate diamond type '{rule.diamond_type}'",
                })
            seen_diamonds.add(rule.diamond_type)
            self._check_amount(violations, f"{path}.basePrice", rule.base_price)
            self._check_amount(violations, f"{path}.pricePerCarat", rule.price_per_carat)
            if rule.diamond_type == NO_DIAMOND and (rule.base_price or rule.price_per_carat):
                violations.append({
                    "field": f"{path}.basePrice",
                    "message": "The 'none' diamond type cannot carry a price",
                })

        # ── Ring sizes ───────────────────────────────────
        for size, pct in config.ring_size_adjustments.items():
            path = f"ringSizeAdjustments.{size}"
            if not RING_SIZE_PATTERN.match(size):
                violations.append({
                    "field": path,
                    "message": f"Ring size '{size}' must be numeric, optionally ending in .5",
                })
            if not pct.is_finite():
                violations.append({"field": path, "message": "Adjustment must be a finite number"})
            elif pct <= -100:
                violations.append({
                    "field": path,
                    "message": f"Adjustment {pct}% would make the price zero or negative",
                })

        # ── Additional costs ─────────────────────────────
        costs = config.additional_costs
        for name, value in (
            ("laborCost", costs.labor_cost),
            ("laborCostPerGram", costs.labor_cost_per_gram),
            ("makingCharges", costs.making_charges),
            ("otherCharges", costs.other_charges),
            ("profitMarginPercentage", costs.profit_margin_percentage),
            ("minimumPrice", costs.minimum_price),
        ):
            self._check_amount(violations, f"additionalCosts.{name}", value)

        return violations

    def validate(self, data: Any) -> PricingConfiguration:
        """Parse and check a configuration; raise ValidationError on any violation."""
        config = parse_configuration(data)
        violations = self.check_configuration(config)
        if violations:
            logger.warning(f"Rejected pricing configuration: {len(violations)} violation(s)")
            first = violations[0]
            raise ValidationError(first["message"], field=first["field"], errors=violations)
        return config

    # ── Helpers ──────────────────────────────────────────

    @staticmethod
    def _check_code(violations: list[dict[str, str]], path: str, code: str) -> None:
        if not CODE_PATTERN.match(code):
            violations.append({"field": path, "message": f"Invalid code '{code}'"})

    @staticmethod
    def _check_amount(
        violations: list[dict[str, str]],
        path: str,
        value: Decimal,
        upper: Decimal | None = None,
    ) -> None:
        if not value.is_finite():
            violations.append({"field": path, "message": "Must be a finite number"})
        elif value < 0:
            violations.append({"field": path, "message": "Must not be negative"})
        elif upper is not None and value > upper:
            violations.append({"field": path, "message": f"Must not exceed {upper}"})
