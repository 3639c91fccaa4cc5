"""Binance USD-M exchange adapter.

Binance USDⓈ-M has mixed funding intervals (1-8 hours). Symbols whose interval
was adjusted are listed by /v1/fundingInfo; everything else settles every 8h.

**API Characteristics:**
- Symbol format: BTCUSDT (no dash)
- premiumIndex: lastFundingRate, nextFundingTime (ms), sometimes nextFundingRate
- Standard response: direct list/dict (no envelope)
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingTicker
from funding_scan.exchanges.utils import optional_float
from funding_scan.symbols import SymbolPair


class BinanceExchange(BaseExchange):
    """Binance USD-M exchange adapter."""

    EXCHANGE_ID = "binance"
    API_ENDPOINT = "https://fapi.binance.com/fapi"

    DEFAULT_PERIOD_HOURS = 8
    HISTORY_LIMIT = 10

    async def _prepare(self, assets: list[str]) -> dict[str, int]:
        """Funding interval overrides by symbol; empty if the endpoint is unavailable."""
        try:
            response: Any = await self._get("/v1/fundingInfo")
            if not isinstance(response, list):
                return {}
            return {
                item["symbol"]: int(item["fundingIntervalHours"])
                for item in response
                if "symbol" in item and item.get("fundingIntervalHours")
            }
        except Exception as e:
            self.logger.warning(f"fundingInfo unavailable, assuming 8h intervals: {e}")
            return {}

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: dict[str, int]
    ) -> FundingTicker | None:
        premium: Any = await self._get("/v1/premiumIndex", params={"symbol": symbol_raw})
        if not isinstance(premium, dict) or "lastFundingRate" not in premium:
            raise ExchangeAPIError(self.EXCHANGE_ID, f"unexpected premiumIndex payload: {premium}")

        try:
            raw_history: Any = await self._get(
                "/v1/fundingRate", params={"symbol": symbol_raw, "limit": self.HISTORY_LIMIT}
            )
        except Exception as e:
            self.logger.debug(f"History unavailable for {symbol_raw}: {e}")
            raw_history = []

        history = self._parse_history(
            raw_history if isinstance(raw_history, list) else [],
            ts_keys=("fundingTime",),
            rate_keys=("fundingRate",),
        )

        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=context.get(symbol_raw, self.DEFAULT_PERIOD_HOURS),
            last_rate=float(premium["lastFundingRate"]),
            next_rate=optional_float(premium.get("nextFundingRate")),
            next_funding_ms=optional_float(premium.get("nextFundingTime")),
            history=history,
        )
