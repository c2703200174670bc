"""
Pricing errors — the typed failures of the configuration store,
the calculation engine and the product option adapter.

Every error carries a machine-readable ``code``, the offending ``field``
(a dotted path in wire names, e.g. ``compositionRates[2].pricePerGram``)
and the HTTP status the API layer answers with.
"""

from __future__ import annotations


class PricingError(Exception):
    """Base class for every error raised by this package."""

    code = "pricing_error"
    http_status = 400

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "field": self.field, "message": self.message}


# ── Configuration writes ─────────────────────────────────


class ValidationError(PricingError):
    """Malformed or out-of-range configuration write. Never partially applied."""

    code = "validation_error"
    http_status = 422

    def __init__(self, message: str, field: str = "", errors: list[dict[str, str]] | None = None):
        super().__init__(message, field)
        self.errors = errors or [{"field": field, "message": message}]

    @property
    def field_path(self) -> str:
        return self.field

    def to_dict(self) -> dict:
        return {**super().to_dict(), "errors": self.errors}


# ── Calculation ──────────────────────────────────────────


class CalculationError(PricingError):
    """A request attribute could not be resolved against the configuration."""

    http_status = 422


class UnknownComposition(CalculationError):
    code = "unknown_composition"


class CompositionDisabled(CalculationError):
    code = "composition_disabled"


class UnknownMaterial(CalculationError):
    code = "unknown_material"


class UnknownDiamondType(CalculationError):
    code = "unknown_diamond_type"


class DiamondTypeDisabled(CalculationError):
    code = "diamond_type_disabled"


class InvalidCarat(CalculationError):
    code = "invalid_carat"


# ── Product options ──────────────────────────────────────


class ProductNotPurchasable(PricingError):
    """The product has no weight set, so it cannot be priced."""

    code = "product_not_purchasable"
    http_status = 422


class OptionNotOffered(PricingError):
    """The selected option is not in the product's enabled option lists."""

    code = "option_not_offered"
    http_status = 422


# ── Storage ──────────────────────────────────────────────


class ConfigurationMissing(PricingError):
    code = "configuration_missing"
    http_status = 503


class ConfigurationUnavailable(PricingError):
    code = "configuration_unavailable"
    http_status = 503
