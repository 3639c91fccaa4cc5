"""Bybit exchange adapter.

Linear USDT perpetuals. The funding interval is published per instrument
(in minutes) by /v5/market/instruments-info; most symbols settle every 8h.

**API Characteristics:**
- Symbol format: BTCUSDT
- Envelope response: {"retCode": 0, "result": {"list": [...]}}
- funding/history returns newest first
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingTicker
from funding_scan.symbols import SymbolPair


class BybitExchange(BaseExchange):
    """Bybit exchange adapter."""

    EXCHANGE_ID = "bybit"
    API_ENDPOINT = "https://api.bybit.com"

    DEFAULT_PERIOD_HOURS = 8
    HISTORY_LIMIT = 10

    def _unwrap(self, response: Any) -> list[dict[str, Any]]:
        if not isinstance(response, dict):
            raise ExchangeAPIError(self.EXCHANGE_ID, f"unexpected payload: {response}")
        if response.get("retCode", 0) != 0:
            raise ExchangeAPIError(
                self.EXCHANGE_ID, f"retCode={response.get('retCode')} {response.get('retMsg')}"
            )
        return (response.get("result") or {}).get("list") or []

    async def _fetch_period_hours(self, symbol_raw: str) -> float:
        try:
            instruments = self._unwrap(
                await self._get(
                    "/v5/market/instruments-info",
                    params={"category": "linear", "symbol": symbol_raw},
                )
            )
        except Exception as e:
            self.logger.debug(f"instruments-info unavailable for {symbol_raw}: {e}")
            return self.DEFAULT_PERIOD_HOURS

        interval_minutes = instruments[0].get("fundingInterval") if instruments else None
        if not interval_minutes:
            return self.DEFAULT_PERIOD_HOURS
        return int(interval_minutes) / 60

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: Any
    ) -> FundingTicker | None:
        records = self._unwrap(
            await self._get(
                "/v5/market/funding/history",
                params={"category": "linear", "symbol": symbol_raw, "limit": self.HISTORY_LIMIT},
            )
        )
        history = self._parse_history(
            records, ts_keys=("fundingRateTimestamp",), rate_keys=("fundingRate",)
        )
        if not history:
            return None

        period_hours = await self._fetch_period_hours(symbol_raw)
        latest = history[-1]

        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=period_hours,
            last_rate=latest.rate,
            next_funding_ms=latest.ts + period_hours * 3_600_000,
            history=history,
        )
