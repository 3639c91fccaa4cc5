"""Exchange adapters registry.

This module maintains a registry of all available exchange adapters.
Each adapter is a BaseExchange subclass exposing ``fetch_funding(assets)``.

To add a new exchange:
1. Create exchanges/{exchange_name}.py with a BaseExchange subclass
2. Add its symbol format to SYMBOL_FORMATS in funding_scan.symbols
3. Add the class to ADAPTER_CLASSES below
4. The validate_adapter() function will automatically check your implementation
"""

import logging

from funding_scan.exchanges.aster import AsterExchange
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.binance import BinanceExchange
from funding_scan.exchanges.bybit import BybitExchange
from funding_scan.exchanges.dto import FundingPoint, FundingTicker
from funding_scan.exchanges.extended import ExtendedExchange
from funding_scan.exchanges.hyperliquid import HyperliquidExchange
from funding_scan.exchanges.lighter import LighterExchange
from funding_scan.infrastructure.http_client import DEFAULT_TIMEOUT
from funding_scan.rates import AprMode

logger = logging.getLogger(__name__)

ADAPTER_CLASSES: tuple[type[BaseExchange], ...] = (
    BinanceExchange,
    BybitExchange,
    HyperliquidExchange,
    LighterExchange,
    ExtendedExchange,
    AsterExchange,
)


def validate_adapter(adapter: object, name: str) -> None:
    """Validate that an adapter can be dispatched by the aggregator.

    Raises:
        TypeError: If the adapter lacks EXCHANGE_ID, has an EXCHANGE_ID that
                   does not match its registry key, or has no fetch_funding()
    """
    exchange_id = getattr(adapter, "EXCHANGE_ID", None)
    if not isinstance(exchange_id, str):
        raise TypeError(f"{name}: EXCHANGE_ID must be str, got {type(exchange_id)}")

    if exchange_id != name:
        raise TypeError(
            f"{name}: registry key does not match EXCHANGE_ID {exchange_id!r}"
        )

    if not callable(getattr(adapter, "fetch_funding", None)):
        raise TypeError(f"{name}: missing required method fetch_funding()")


def build_registry(
    apr_mode: AprMode = "simple", request_timeout: float = DEFAULT_TIMEOUT
) -> dict[str, BaseExchange]:
    """Instantiate and validate every adapter.

    Returns:
        Dict mapping exchange_id to a validated adapter instance

    Raises:
        TypeError: If any adapter fails validation
    """
    registry = {}
    for adapter_cls in ADAPTER_CLASSES:
        adapter = adapter_cls(apr_mode=apr_mode, request_timeout=request_timeout)
        validate_adapter(adapter, adapter_cls.EXCHANGE_ID)
        registry[adapter_cls.EXCHANGE_ID] = adapter

    logger.debug(f"Exchange adapter registry initialized with {len(registry)} exchanges")
    return registry


# Registry mapping exchange_id to adapter instance (with validation)
EXCHANGES: dict[str, BaseExchange] = build_registry()

__all__ = [
    "ADAPTER_CLASSES",
    "EXCHANGES",
    "BaseExchange",
    "FundingPoint",
    "FundingTicker",
    "build_registry",
    "validate_adapter",
]
