"""
API routes — thin HTTP layer over the config store and the calculator.

Routes:
  GET  /health                              → API health check
  GET  /api/pricing/config                  → Full configuration (admin)
  PUT  /api/pricing/config                  → Replace configuration (admin)
  PUT  /api/pricing/config/{section}        → Replace one section (admin)
  POST /api/pricing/config/reset            → Restore defaults (admin)
  GET  /api/pricing/config/history          → Audit trail (admin)
  GET  /api/pricing/options                 → Enabled options, no rates
  POST /api/pricing/calculate               → Price one request
  POST /api/pricing/products/quote          → Price a product selection
  POST /api/pricing/products/options        → Options a product can be bought in
  POST /api/pricing/products/price-range    → Cheapest / dearest product price
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request
from pydantic import BaseModel

from jewelry_pricing.config import get_settings
from jewelry_pricing.models.enums import ConfigSection
from jewelry_pricing.models.schemas import (
    PriceBreakdown,
    PriceRange,
    PricingConfiguration,
    PricingModel,
    PricingRequest,
)
from jewelry_pricing.pricing.calculator import calculate_current
from jewelry_pricing.pricing.config_store import PricingConfigStore
from jewelry_pricing.services.product_options import (
    AvailableOptions,
    OptionSelection,
    ProductOptions,
    available_selections,
    is_purchasable,
    price_range,
    public_options,
    quote,
)

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
pricing_router = APIRouter()


# ── Request / response schemas ───────────────────────────
class QuoteRequest(PricingModel):
    product: ProductOptions
    selection: OptionSelection


class PriceRangeResponse(PricingModel):
    purchasable: bool
    range: Optional[PriceRange] = None


class AuditEntryResponse(BaseModel):
    action: str
    section: str = ""
    version: int
    fingerprint: str
    updated_by: str = ""
    timestamp: str


# ── Dependencies ─────────────────────────────────────────

def get_store(request: Request) -> PricingConfigStore:
    return request.app.state.config_store


def require_admin(
    x_admin_token: str = Header(default=""),
    x_admin_user: str = Header(default=""),
) -> str:
    """
    Gate for admin routes. Identity belongs to the external auth system;
    here we only check the shared admin token and pass the actor name on.
    """
    settings = get_settings()
    if not settings.admin_token:
        if settings.allow_unauthenticated_admin:
            return x_admin_user or "admin"
        logger.error("Admin route called but ADMIN_TOKEN is not configured")
        raise HTTPException(status_code=503, detail="Admin access is not configured")
    if not secrets.compare_digest(x_admin_token.encode(), settings.admin_token.encode()):
        raise HTTPException(status_code=401, detail="Admin token required")
    return x_admin_user or "admin"


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Configuration (admin) ────────────────────────────────

@pricing_router.get("/config", response_model=PricingConfiguration)
def get_configuration(
    store: PricingConfigStore = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return store.get_configuration()


@pricing_router.put("/config", response_model=PricingConfiguration)
def update_configuration(
    body: dict[str, Any] = Body(...),
    store: PricingConfigStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    logger.info(f"Configuration replace requested by {admin}")
    return store.update_configuration(body, updated_by=admin)


@pricing_router.post("/config/reset", response_model=PricingConfiguration)
def reset_configuration(
    store: PricingConfigStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    logger.info(f"Configuration reset requested by {admin}")
    return store.reset(updated_by=admin)


@pricing_router.get("/config/history", response_model=list[AuditEntryResponse])
def configuration_history(
    limit: int = 50,
    store: PricingConfigStore = Depends(get_store),
    _admin: str = Depends(require_admin),
):
    return store.audit.get_trail(limit=limit)


@pricing_router.put("/config/{section}", response_model=PricingConfiguration)
def update_configuration_section(
    section: ConfigSection,
    body: Any = Body(...),
    store: PricingConfigStore = Depends(get_store),
    admin: str = Depends(require_admin),
):
    logger.info(f"Configuration section '{section.value}' replace requested by {admin}")
    return store.update_section(section, body, updated_by=admin)


# ── Public ───────────────────────────────────────────────

@pricing_router.get("/options", response_model=AvailableOptions)
def get_public_options(store: PricingConfigStore = Depends(get_store)):
    return public_options(store.get_configuration())


@pricing_router.post("/calculate", response_model=PriceBreakdown)
def calculate_price(body: PricingRequest, store: PricingConfigStore = Depends(get_store)):
    return calculate_current(body, store)


@pricing_router.post("/products/quote", response_model=PriceBreakdown)
def quote_product(body: QuoteRequest, store: PricingConfigStore = Depends(get_store)):
    return quote(body.product, body.selection, store.get_configuration())


@pricing_router.post("/products/options", response_model=AvailableOptions)
def product_options(body: ProductOptions, store: PricingConfigStore = Depends(get_store)):
    return available_selections(body, store.get_configuration())


@pricing_router.post("/products/price-range", response_model=PriceRangeResponse)
def product_price_range(body: ProductOptions, store: PricingConfigStore = Depends(get_store)):
    return PriceRangeResponse(
        purchasable=is_purchasable(body),
        range=price_range(body, store.get_configuration()),
    )
