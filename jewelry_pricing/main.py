"""
Jewelry Pricing — Main Entry Point

Price one request from the command line (against the default configuration,
or the stored one when the Mongo backend is configured):
    python -m jewelry_pricing weight=5 composition=14K material=white-gold \
        diamond_type=natural diamond_carat=0.5 ring_size=8

Seed the default configuration into storage:
    python -m jewelry_pricing --seed

Run as an API server:
    python -m jewelry_pricing --serve
    # or: uvicorn jewelry_pricing.api:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys

from jewelry_pricing.config import get_settings
from jewelry_pricing.errors import PricingError
from jewelry_pricing.models.schemas import PriceBreakdown, PricingRequest
from jewelry_pricing.pricing.calculator import calculate_current
from jewelry_pricing.pricing.config_store import get_config_store
from jewelry_pricing.utils.logger import setup_logging


def parse_pairs(args: list[str]) -> dict[str, str]:
    """['weight=5', 'composition=14K'] -> {'weight': '5', 'composition': '14K'}"""
    pairs: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got '{arg}'")
        pairs[key.strip()] = value.strip()
    return pairs


def run(args: list[str]) -> PriceBreakdown | None:
    """Price the request described by key=value args and log the breakdown."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    try:
        request = PricingRequest(**parse_pairs(args))
    except ValueError as e:  # includes pydantic.ValidationError
        logger.error(f"Invalid request: {e}")
        return None

    try:
        store = get_config_store()
        store.initialize()
        breakdown = calculate_current(request, store)
    except PricingError as e:
        logger.error(f"Cannot price request: [{e.code}] {e.field}: {e.message}")
        return None

    _print_breakdown(breakdown)
    return breakdown


def _print_breakdown(breakdown: PriceBreakdown) -> None:
    """Log a human-readable cost breakdown."""
    logger = logging.getLogger(__name__)
    req = breakdown.request

    logger.info("-" * 60)
    logger.info(f"  {req.weight}g {req.composition} {req.material}, "
                f"diamond: {req.diamond_type} ({req.diamond_carat} ct), size: {req.ring_size or '-'}")
    logger.info("-" * 60)
    logger.info(f"  Metal:            {breakdown.metal_cost:>12,.2f}")
    logger.info(f"  Diamond:          {breakdown.diamond_cost:>12,.2f}")
    logger.info(f"  Labor & making:   {breakdown.labor_and_making_cost:>12,.2f}")
    logger.info(f"  Ring size adj.:   {breakdown.ring_size_adjustment_amount:>12,.2f}")
    logger.info(f"  Subtotal:         {breakdown.subtotal:>12,.2f}")
    logger.info(f"  Profit:           {breakdown.profit_amount:>12,.2f}")
    logger.info(f"  Final price:      {breakdown.final_price:>12,.2f}")
    logger.info(f"  (configuration v{breakdown.configuration_version})")
    logger.info("-" * 60)


def seed() -> None:
    """Write the default configuration if storage holds none."""
    settings = get_settings()
    setup_logging(settings.log_level)
    config = get_config_store().initialize()
    logging.getLogger(__name__).info(
        f"Pricing configuration v{config.version} ready ({settings.storage_backend} storage)"
    )


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("jewelry_pricing.api:app", host=host, port=port, reload=True)


def cli(argv: list[str]) -> None:
    if "--serve" in argv:
        serve()
    elif "--seed" in argv:
        seed()
    else:
        run(argv)


def main() -> None:
    cli(sys.argv[1:])


if __name__ == "__main__":
    main()
