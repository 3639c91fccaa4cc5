"""Base exchange adapter using ABC."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from funding_scan.exchanges.dto import FundingPoint, FundingTicker
from funding_scan.exchanges.utils import first_present, iso_from_ms, iso_now, to_ms
from funding_scan.infrastructure import http_client
from funding_scan.rates import AprMode, calculate_apr
from funding_scan.symbols import SymbolPair, get_symbol_for_exchange, normalize_symbol


class BaseExchange(ABC):
    """Base class for exchange adapters.

    Subclasses implement ``_fetch_ticker()`` for a single asset and may
    override ``_prepare()`` to load batch-level data once per call.
    ``fetch_funding()`` handles symbol translation and failure isolation.
    """

    EXCHANGE_ID: str
    API_ENDPOINT: str

    def __init__(
        self,
        apr_mode: AprMode = "simple",
        request_timeout: float = http_client.DEFAULT_TIMEOUT,
    ) -> None:
        self.apr_mode = apr_mode
        self.request_timeout = request_timeout

    @property
    def logger(self) -> logging.Logger:
        """Exchange logger.

        Enables per-exchange log control via DEBUG_EXCHANGES={EXCHANGE_ID}
        """
        return logging.getLogger(f"funding_scan.exchanges.{self.EXCHANGE_ID}")

    def __init_subclass__(cls) -> None:
        """Validate subclass declares its identity."""
        super().__init_subclass__()

        if not hasattr(cls, "EXCHANGE_ID"):
            raise NotImplementedError(f"{cls.__name__}: missing EXCHANGE_ID class attribute")
        if not hasattr(cls, "API_ENDPOINT"):
            raise NotImplementedError(f"{cls.__name__}: missing API_ENDPOINT class attribute")

    async def fetch_funding(self, assets: list[str]) -> list[FundingTicker]:
        """Fetch one ticker per asset.

        Assets are fetched sequentially to keep rate-limit pressure low.
        A failing asset is logged and skipped; a failing batch-level request
        yields an empty list for the whole venue.
        """
        try:
            context = await self._prepare(assets)
        except Exception as e:
            self.logger.error(f"{self.EXCHANGE_ID} funding fetch failed: {e}")
            return []

        results = []
        for asset in assets:
            symbol_raw = get_symbol_for_exchange(asset, self.EXCHANGE_ID)
            pair = normalize_symbol(symbol_raw, self.EXCHANGE_ID)
            if pair is None:
                self.logger.debug(f"Skipping {asset}: unrecognized symbol {symbol_raw}")
                continue

            try:
                ticker = await self._fetch_ticker(asset, symbol_raw, pair, context)
            except Exception as e:
                self.logger.warning(f"Failed to fetch {self.EXCHANGE_ID} data for {asset}: {e}")
                continue

            if ticker is None:
                self.logger.debug(f"No funding data for {symbol_raw}")
                continue
            results.append(ticker)

        self.logger.debug(
            f"Fetched {len(results)}/{len(assets)} tickers from {self.EXCHANGE_ID}"
        )
        return results

    async def _prepare(self, assets: list[str]) -> Any:
        """Load data shared by every asset in one call (markets, metadata).

        The return value is passed to ``_fetch_ticker()`` as ``context``.
        Raising here fails the whole venue.
        """
        return None

    @abstractmethod
    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: Any
    ) -> FundingTicker | None:
        """Fetch and build the ticker for one asset; None when the venue has no data."""
        ...

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await http_client.get(
            f"{self.API_ENDPOINT}{path}", params=params, timeout=self.request_timeout
        )

    async def _post(self, path: str, json: dict[str, Any]) -> Any:
        return await http_client.post(
            f"{self.API_ENDPOINT}{path}",
            json=json,
            headers={"Content-Type": "application/json"},
            timeout=self.request_timeout,
        )

    def _build_ticker(
        self,
        *,
        pair: SymbolPair,
        symbol_raw: str,
        period_hours: float,
        last_rate: float,
        next_rate: float | None = None,
        est_rate: float | None = None,
        next_funding_ms: float | None = None,
        history: list[FundingPoint] | None = None,
    ) -> FundingTicker:
        """Assemble a ticker; the APR always derives from ``last_rate`` and the period."""
        return FundingTicker(
            id=f"{self.EXCHANGE_ID}-{symbol_raw}",
            exchange=self.EXCHANGE_ID,
            base=pair.base,
            quote=pair.quote,
            symbol_raw=symbol_raw,
            funding_period_hours=period_hours,
            last_funding_rate=last_rate,
            next_funding_rate=next_rate,
            current_est_rate=est_rate if est_rate is not None else last_rate,
            apr_signed=calculate_apr(last_rate, period_hours, self.apr_mode),
            next_funding_time=iso_from_ms(next_funding_ms) if next_funding_ms else None,
            ts=iso_now(),
            history=history or [],
            source=self.EXCHANGE_ID,
        )

    def _parse_history(
        self,
        records: Iterable[Mapping[str, Any]],
        ts_keys: tuple[str, ...],
        rate_keys: tuple[str, ...],
    ) -> list[FundingPoint]:
        """Parse raw history records into points sorted oldest first.

        Records missing a timestamp or rate are dropped.
        """
        points = []
        for record in records:
            ts = first_present(record, ts_keys)
            rate = first_present(record, rate_keys)
            if ts is None or rate is None or rate == "":
                continue
            points.append(FundingPoint(ts=to_ms(ts), rate=float(rate)))

        points.sort(key=lambda point: point.ts)
        return points
