"""Aggregation layer for funding scan.

Fans a request out to every selected exchange adapter and merges the results
into a single snapshot for the API, CLI and polling loop.

Example:
    result = await get_aggregated_funding(["BTC", "ETH"], ["binance", "bybit"])
    result.meta.stale        # True if any venue failed
    result.to_dict()         # {"data": [...], "meta": {...}}
"""

from funding_scan.aggregation.aggregator import (
    AggregatedFunding,
    AggregationMeta,
    get_aggregated_funding,
    validate_request,
)

__all__ = ["AggregatedFunding", "AggregationMeta", "get_aggregated_funding", "validate_request"]
