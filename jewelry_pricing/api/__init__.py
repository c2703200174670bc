"""
FastAPI application factory and API package.

Run with:
    uvicorn jewelry_pricing.api:app --reload --port 8000

Or via main.py:
    python -m jewelry_pricing --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jewelry_pricing.config import get_settings
from jewelry_pricing.errors import PricingError, ValidationError
from jewelry_pricing.api.routes import pricing_router, health_router
from jewelry_pricing.pricing.config_store import PricingConfigStore, get_config_store
from jewelry_pricing.pricing.validation import format_field_path

logger = logging.getLogger(__name__)


def create_app(store: PricingConfigStore | None = None) -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Jewelry Pricing API",
        description="Pricing configuration and price calculation for the storefront",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.config_store = store or get_config_store()

    # CORS — allow the storefront and admin frontends (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(pricing_router, prefix="/api/pricing", tags=["Pricing"])

    @application.exception_handler(PricingError)
    async def pricing_error_handler(request: Request, exc: PricingError):
        logger.warning(f"{request.method} {request.url.path} → {exc.code}: {exc.message}")
        return JSONResponse(status_code=exc.http_status, content={"detail": exc.to_dict()})

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # loc is (source, *path), e.g. ("body", "weight")
        errors = [
            {"field": format_field_path(tuple(err["loc"][1:])), "message": err["msg"]}
            for err in exc.errors()
        ]
        first = errors[0] if errors else {"field": "", "message": "Invalid request"}
        error = ValidationError(first["message"], field=first["field"], errors=errors or None)
        return await pricing_error_handler(request, error)

    @application.on_event("startup")
    def startup():
        logger.info(f"Starting {settings.app_name} API ({settings.storage_backend} storage)")
        if not settings.seed_defaults_on_startup:
            return
        try:
            application.state.config_store.initialize()
        except PricingError as e:
            logger.error(f"Could not initialize pricing configuration: {e.message}")

    return application


# Module-level instance for `uvicorn jewelry_pricing.api:app`
app = create_app()
