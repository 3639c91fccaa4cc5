"""FastAPI application exposing funding snapshots and value context."""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Literal

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from funding_scan import __version__
from funding_scan.aggregation import get_aggregated_funding
from funding_scan.exceptions import InvalidRequestError
from funding_scan.exchanges import BaseExchange, build_registry
from funding_scan.logging_setup import parse_csv
from funding_scan.settings import Settings
from funding_scan.symbols import SUPPORTED_ASSETS, SUPPORTED_EXCHANGES
from funding_scan.value_context import (
    WAGE_PRESETS,
    CostItem,
    compare,
    generate_one_line_summary,
    load_catalog,
    pick_wage_unit,
    select_smart_context_items,
    wage_equivalents,
)

logger = logging.getLogger(__name__)

CACHE_HEADERS = {"Cache-Control": "s-maxage=60, stale-while-revalidate=120"}


def create_app(
    settings: Settings | None = None,
    adapters: Mapping[str, BaseExchange] | None = None,
    catalog: list[CostItem] | None = None,
) -> FastAPI:
    """Build the API; collaborators are injectable for tests."""
    settings = settings or Settings()
    if adapters is None:
        adapters = build_registry(
            apr_mode=settings.apr_mode, request_timeout=settings.request_timeout
        )
    registry = adapters
    costs = catalog if catalog is not None else load_catalog(settings.costs_file)

    app = FastAPI(
        title="Funding Scan API",
        description="Annualized perpetual funding rates across exchanges",
        version=__version__,
    )

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api/funding")
    async def funding(
        assets: str | None = Query(default=None, description="Comma-separated assets"),
        exchanges: str | None = Query(default=None, description="Comma-separated exchanges"),
    ):
        requested_assets = parse_csv(assets) if assets is not None else list(SUPPORTED_ASSETS)
        requested_exchanges = (
            parse_csv(exchanges) if exchanges is not None else list(SUPPORTED_EXCHANGES)
        )

        try:
            result = await get_aggregated_funding(
                requested_assets,
                requested_exchanges,
                adapters=registry,
                timeout=settings.venue_timeout,
            )
        except InvalidRequestError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        except Exception as e:
            logger.error(f"Funding API error: {e}", exc_info=True)
            return JSONResponse(
                {"error": "Internal server error"}, status_code=500, headers=CACHE_HEADERS
            )

        return JSONResponse(result.to_dict(), headers=CACHE_HEADERS)

    @app.get("/api/value-context")
    async def value_context(
        amount: float = Query(..., description="USD amount, negative for a loss"),
        region: Literal["US", "EU", "JP"] = "US",
    ):
        if not math.isfinite(amount):
            return JSONResponse({"error": "amount must be finite"}, status_code=400)

        items = select_smart_context_items(costs, amount)
        comparisons = [compare(amount, item) for item in items]
        equivalents = wage_equivalents(amount, WAGE_PRESETS[region])
        unit, value = pick_wage_unit(equivalents)

        return {
            "amount": amount,
            "summary": generate_one_line_summary(amount, comparisons),
            "comparisons": [
                {
                    "item": {
                        "id": comp.item.id,
                        "label": comp.item.label,
                        "usd": comp.item.usd,
                        "category": comp.item.category,
                    },
                    "multiple": comp.multiple,
                    "isNiceInteger": comp.is_nice_integer,
                    "formatted": comp.formatted,
                }
                for comp in comparisons
            ],
            "wage": {
                "region": region,
                "days": equivalents.days,
                "months": equivalents.months,
                "years": equivalents.years,
                "display": {"unit": unit, "value": value},
            },
        }

    return app
