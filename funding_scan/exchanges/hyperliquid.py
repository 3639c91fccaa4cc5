"""HyperLiquid exchange adapter.

API docs: https://hyperliquid.gitbook.io/hyperliquid-docs/for-developers/api

Funding is computed over an 8h window but paid every hour, and the API
reports the hourly amount. Rates are therefore annualized with a 1h period.
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingTicker
from funding_scan.exchanges.utils import now_ms, optional_float
from funding_scan.symbols import SymbolPair


class HyperliquidExchange(BaseExchange):
    """HyperLiquid exchange adapter."""

    EXCHANGE_ID = "hyperliquid"
    API_ENDPOINT = "https://api.hyperliquid.xyz"

    REPORTING_PERIOD_HOURS = 1
    HISTORY_WINDOW_MS = 24 * 3_600_000

    async def _prepare(self, assets: list[str]) -> dict[str, float]:
        """Predicted funding per coin; empty if the contexts call fails."""
        try:
            response: Any = await self._post("/info", json={"type": "metaAndAssetCtxs"})
            # Response: [meta, contexts] - parallel arrays
            universe = response[0]["universe"]
            contexts = response[1]
            predicted = {}
            for listing, ctx in zip(universe, contexts):
                rate = optional_float(ctx.get("funding"))
                if rate is not None:
                    predicted[listing["name"]] = rate
        except Exception as e:
            self.logger.warning(f"metaAndAssetCtxs unavailable, no predicted rates: {e}")
            return {}
        return predicted

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: dict[str, float]
    ) -> FundingTicker | None:
        end_ms = now_ms()
        response: Any = await self._post(
            "/info",
            json={
                "type": "fundingHistory",
                "coin": symbol_raw,
                "startTime": end_ms - self.HISTORY_WINDOW_MS,
                "endTime": end_ms,
            },
        )
        if not isinstance(response, list):
            raise ExchangeAPIError(self.EXCHANGE_ID, f"unexpected fundingHistory: {response}")

        history = self._parse_history(response, ts_keys=("time",), rate_keys=("fundingRate",))
        if not history:
            return None

        latest = history[-1]
        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=self.REPORTING_PERIOD_HOURS,
            last_rate=latest.rate,
            est_rate=context.get(symbol_raw),
            next_funding_ms=latest.ts + self.REPORTING_PERIOD_HOURS * 3_600_000,
            history=history,
        )
