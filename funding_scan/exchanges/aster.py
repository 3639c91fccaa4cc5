"""Aster exchange adapter.

Aster uses variable funding intervals (1, 4, or 8 hours) per symbol.
API does NOT provide funding_interval directly - it is inferred from the gaps
between recent settlements.

**API Characteristics:**
- Binance-style format: BTCUSDT (no dash)
- premiumIndex: lastFundingRate, nextFundingTime (ms)
- Standard response: direct list/dict (no envelope)
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingPoint, FundingTicker
from funding_scan.exchanges.utils import now_ms, optional_float
from funding_scan.rates import infer_period_hours_from_history
from funding_scan.symbols import SymbolPair


class AsterExchange(BaseExchange):
    """Aster exchange adapter with per-symbol funding interval detection."""

    EXCHANGE_ID = "aster"
    API_ENDPOINT = "https://fapi.asterdex.com/fapi"

    DEFAULT_PERIOD_HOURS = 8
    HISTORY_LIMIT = 10

    def _period_hours(self, history: list[FundingPoint]) -> int:
        if len(history) < 2:
            return self.DEFAULT_PERIOD_HOURS
        return infer_period_hours_from_history(point.ts for point in history)

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: Any
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
        period_hours = self._period_hours(history)

        next_funding_ms = optional_float(premium.get("nextFundingTime"))
        if not next_funding_ms:
            next_funding_ms = now_ms() + period_hours * 3_600_000

        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=period_hours,
            last_rate=float(premium["lastFundingRate"]),
            next_rate=optional_float(premium.get("nextFundingRate")),
            next_funding_ms=next_funding_ms,
            history=history,
        )
