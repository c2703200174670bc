"""Dynamic pricing configuration and calculation for a jewelry storefront."""

__version__ = "0.1.0"
