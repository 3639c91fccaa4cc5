"""Extended exchange adapter.

Extended (Starknet) uses 1-hour funding interval.

**API Characteristics:**
- Envelope response: {"status": "OK", "data": [...]}
- Symbol format: BTC-USD, ETH-USD
- Funding records use terse keys: {"m": market, "T": ms timestamp, "f": rate}
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingTicker
from funding_scan.exchanges.utils import now_ms
from funding_scan.symbols import SymbolPair


class ExtendedExchange(BaseExchange):
    """Extended (Starknet) exchange adapter."""

    EXCHANGE_ID = "extended"
    API_ENDPOINT = "https://api.starknet.extended.exchange"

    PERIOD_HOURS = 1
    HISTORY_WINDOW_MS = 24 * 3_600_000
    HISTORY_LIMIT = 10

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: Any
    ) -> FundingTicker | None:
        end_ms = now_ms()
        response: Any = await self._get(
            f"/api/v1/info/{symbol_raw}/funding",
            params={
                "startTime": end_ms - self.HISTORY_WINDOW_MS,
                "endTime": end_ms,
                "limit": self.HISTORY_LIMIT,
            },
        )

        if not isinstance(response, dict):
            raise ExchangeAPIError(self.EXCHANGE_ID, f"unexpected payload: {response}")
        if response.get("status") != "OK":
            raise ExchangeAPIError(self.EXCHANGE_ID, f"API error: {response}")

        history = self._parse_history(
            response.get("data") or [],
            ts_keys=("T", "timestamp", "fundingTime"),
            rate_keys=("f", "fundingRate", "rate"),
        )
        if not history:
            self.logger.warning(f"No funding history found for {symbol_raw}")
            return None

        latest = history[-1]
        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=self.PERIOD_HOURS,
            last_rate=latest.rate,
            next_funding_ms=latest.ts + self.PERIOD_HOURS * 3_600_000,
            history=history,
        )
