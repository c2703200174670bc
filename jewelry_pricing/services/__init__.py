"""Services — AuditService, product option adapter."""

from jewelry_pricing.services.audit_service import AuditService
from jewelry_pricing.services.product_options import (
    OptionSelection,
    ProductOptions,
    available_selections,
    price_range,
    public_options,
    quote,
)

__all__ = [
    "AuditService",
    "OptionSelection",
    "ProductOptions",
    "available_selections",
    "price_range",
    "public_options",
    "quote",
]
