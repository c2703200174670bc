from enum import Enum

class PricingMethod(str, Enum):
    FIXED = "fixed"
    PER_CARAT = "per-carat"

class ConfigSection(str, Enum):
    COMPOSITIONS = "compositions"
    DIAMONDS = "diamonds"
    RING_SIZES = "ring-sizes"
    ADDITIONAL_COSTS = "additional-costs"

    @property
    def field_name(self) -> str:
        """Attribute of PricingConfiguration holding this section."""
        return {
            ConfigSection.COMPOSITIONS: "composition_rates",
            ConfigSection.DIAMONDS: "diamond_pricing",
            ConfigSection.RING_SIZES: "ring_size_adjustments",
            ConfigSection.ADDITIONAL_COSTS: "additional_costs",
        }[self]

class StorageBackend(str, Enum):
    MEMORY = "memory"
    MONGO = "mongo"

NO_DIAMOND = "none"
