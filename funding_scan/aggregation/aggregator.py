"""Funding aggregator."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from funding_scan.exceptions import InvalidRequestError
from funding_scan.exchanges import EXCHANGES, BaseExchange, FundingTicker
from funding_scan.exchanges.utils import iso_now
from funding_scan.symbols import SUPPORTED_ASSETS, SUPPORTED_EXCHANGES

logger = logging.getLogger(__name__)

DEFAULT_VENUE_TIMEOUT = 25.0


@dataclass
class AggregationMeta:
    timestamp: str
    assets: list[str]
    exchanges: list[str]
    stale: bool
    failed_exchanges: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "assets": self.assets,
            "exchanges": self.exchanges,
            "stale": self.stale,
            "failedExchanges": self.failed_exchanges,
        }


@dataclass
class AggregatedFunding:
    meta: AggregationMeta
    data: list[FundingTicker] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [ticker.to_dict() for ticker in self.data],
            "meta": self.meta.to_dict(),
        }


def _filter_supported(requested: Iterable[str], supported: tuple[str, ...]) -> list[str]:
    """Keep supported values in request order, dropping duplicates."""
    valid: list[str] = []
    for value in requested:
        if value in supported and value not in valid:
            valid.append(value)
    return valid


def validate_request(
    assets: Iterable[str], exchanges: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Intersect the request with the supported assets and exchanges.

    Raises:
        InvalidRequestError: If either intersection is empty
    """
    valid_assets = _filter_supported(assets, SUPPORTED_ASSETS)
    valid_exchanges = _filter_supported(exchanges, SUPPORTED_EXCHANGES)

    if not valid_assets or not valid_exchanges:
        raise InvalidRequestError("Invalid assets or exchanges")
    return valid_assets, valid_exchanges


async def get_aggregated_funding(
    assets: Iterable[str],
    exchanges: Iterable[str],
    *,
    adapters: Mapping[str, BaseExchange] | None = None,
    timeout: float | None = DEFAULT_VENUE_TIMEOUT,
) -> AggregatedFunding:
    """Fetch funding tickers from every requested exchange concurrently.

    Each venue runs as its own task. A venue that raises or exceeds
    ``timeout`` contributes no tickers and counts as failed; if any venue
    failed the whole snapshot is marked stale.

    Raises:
        InvalidRequestError: If no requested asset or exchange is supported
    """
    valid_assets, valid_exchanges = validate_request(assets, exchanges)
    registry = adapters if adapters is not None else EXCHANGES

    start_time = datetime.now()

    async def fetch_exchange(exchange_id: str) -> tuple[list[FundingTicker], bool]:
        try:
            adapter = registry[exchange_id]
            tickers = await asyncio.wait_for(adapter.fetch_funding(valid_assets), timeout)
            return tickers, False
        except asyncio.TimeoutError:
            logger.error(f"Timed out fetching from {exchange_id} after {timeout}s")
        except Exception as e:
            logger.error(f"Failed to fetch from {exchange_id}: {e}", exc_info=True)
        return [], True

    results = await asyncio.gather(*(fetch_exchange(ex) for ex in valid_exchanges))

    tickers = [ticker for venue_tickers, _ in results for ticker in venue_tickers]
    failed_count = sum(1 for _, failed in results if failed)
    stale = failed_count > 0

    if stale:
        for ticker in tickers:
            ticker.stale = True

    duration = datetime.now() - start_time
    logger.info(
        f"Aggregated {len(tickers)} tickers from {len(valid_exchanges)} exchange(s) "
        f"in {duration} ({failed_count} failed)"
    )

    return AggregatedFunding(
        data=tickers,
        meta=AggregationMeta(
            timestamp=iso_now(),
            assets=valid_assets,
            exchanges=valid_exchanges,
            stale=stale,
            failed_exchanges=failed_count,
        ),
    )
