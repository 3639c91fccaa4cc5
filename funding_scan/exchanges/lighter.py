"""Lighter exchange adapter.

/funding-rates lists current rates for every market in one request. The
payload is undocumented and has changed shape before, so symbol and rate
fields are looked up under several candidate names. Rates from this endpoint
are quoted per 8h.

History comes from /fundings (hourly settlements, rate in percent with a
separate direction field) when the market entry carries a market id.
"""

from typing import Any

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges.base import BaseExchange
from funding_scan.exchanges.dto import FundingPoint, FundingTicker
from funding_scan.exchanges.utils import first_present, now_ms, to_ms
from funding_scan.symbols import SymbolPair


class LighterExchange(BaseExchange):
    """Lighter exchange adapter."""

    EXCHANGE_ID = "lighter"
    API_ENDPOINT = "https://mainnet.zklighter.elliot.ai/api/v1"

    PERIOD_HOURS = 8
    HISTORY_LIMIT = 10

    SYMBOL_KEYS = ("symbol", "market", "pair", "token", "coin")
    RATE_KEYS = ("rate", "funding_rate", "fundingRate", "lastFundingRate")
    MARKET_ID_KEYS = ("market_id", "marketId")

    async def _prepare(self, assets: list[str]) -> list[dict[str, Any]]:
        response: Any = await self._get("/funding-rates")
        if not isinstance(response, dict):
            raise ExchangeAPIError(self.EXCHANGE_ID, f"unexpected funding-rates: {response}")
        return response.get("funding_rates") or []

    def _find_market(
        self, entries: list[dict[str, Any]], asset: str, symbol_raw: str
    ) -> dict[str, Any] | None:
        candidates = {
            symbol_raw.upper(),
            asset.upper(),
            f"{asset}USDT".upper(),
            f"{asset}-USDT".upper(),
            f"{asset}_USDT".upper(),
        }
        for entry in entries:
            # the endpoint also mirrors other venues' rates
            venue = entry.get("exchange")
            if venue is not None and str(venue).lower() != self.EXCHANGE_ID:
                continue
            entry_symbol = first_present(entry, self.SYMBOL_KEYS)
            if entry_symbol is not None and str(entry_symbol).upper() in candidates:
                return entry
        return None

    async def _fetch_history(self, market_id: Any) -> list[FundingPoint]:
        end_ms = now_ms()
        response: Any = await self._get(
            "/fundings",
            params={
                "market_id": int(market_id),
                "resolution": "1h",
                "start_timestamp": (end_ms - 24 * 3_600_000) // 1000,
                "end_timestamp": end_ms // 1000,
                "count_back": self.HISTORY_LIMIT,
            },
        )
        records = response.get("fundings", []) if isinstance(response, dict) else response

        points = []
        for record in records or []:
            ts = first_present(record, ("timestamp", "t"))
            rate = first_present(record, ("rate", "fundingRate"))
            if ts is None or rate is None:
                continue
            value = float(rate) / 100
            if record.get("direction") == "short":
                value = -value
            points.append(FundingPoint(ts=to_ms(ts), rate=value))

        points.sort(key=lambda point: point.ts)
        return points

    async def _fetch_ticker(
        self, asset: str, symbol_raw: str, pair: SymbolPair, context: list[dict[str, Any]]
    ) -> FundingTicker | None:
        entry = self._find_market(context, asset, symbol_raw)
        if entry is None:
            available = [first_present(item, self.SYMBOL_KEYS) for item in context]
            self.logger.warning(f"No data for {symbol_raw}. Available symbols: {available}")
            return None

        rate = first_present(entry, self.RATE_KEYS)
        if rate is None or rate == "":
            raise ExchangeAPIError(self.EXCHANGE_ID, f"no rate field in {entry}")

        history: list[FundingPoint] = []
        market_id = first_present(entry, self.MARKET_ID_KEYS)
        if market_id is not None:
            try:
                history = await self._fetch_history(market_id)
            except Exception as e:
                self.logger.debug(f"History unavailable for {symbol_raw}: {e}")

        return self._build_ticker(
            pair=pair,
            symbol_raw=symbol_raw,
            period_hours=self.PERIOD_HOURS,
            last_rate=float(rate),
            next_funding_ms=now_ms() + self.PERIOD_HOURS * 3_600_000,
            history=history,
        )
