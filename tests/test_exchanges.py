"""Tests for exchange adapters.

All tests replace the HTTP client with a FakeVenue to avoid real API calls.
"""

import pytest

from funding_scan.exceptions import ExchangeAPIError
from funding_scan.exchanges import (
    EXCHANGES,
    BaseExchange,
    build_registry,
    validate_adapter,
)
from funding_scan.exchanges.aster import AsterExchange
from funding_scan.exchanges.binance import BinanceExchange
from funding_scan.exchanges.bybit import BybitExchange
from funding_scan.exchanges.extended import ExtendedExchange
from funding_scan.exchanges.hyperliquid import HyperliquidExchange
from funding_scan.exchanges.lighter import LighterExchange
from funding_scan.exchanges.utils import iso_from_ms, optional_float, to_ms
from funding_scan.rates import calculate_apr
from funding_scan.symbols import SUPPORTED_EXCHANGES

HOUR_MS = 3_600_000
T0 = 1_700_000_000_000  # 2023-11-14T22:13:20Z


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_supported_exchange_is_registered(self) -> None:
        assert set(EXCHANGES) == set(SUPPORTED_EXCHANGES)

    def test_registry_keys_match_exchange_ids(self) -> None:
        for exchange_id, adapter in build_registry(apr_mode="compound").items():
            assert adapter.EXCHANGE_ID == exchange_id
            assert adapter.apr_mode == "compound"

    def test_validate_adapter_rejects_mismatched_key(self) -> None:
        with pytest.raises(TypeError, match="registry key"):
            validate_adapter(BybitExchange(), "binance")

    def test_validate_adapter_rejects_missing_exchange_id(self) -> None:
        with pytest.raises(TypeError, match="EXCHANGE_ID must be str"):
            validate_adapter(object(), "binance")

    def test_subclass_without_identity_is_rejected(self) -> None:
        with pytest.raises(NotImplementedError, match="EXCHANGE_ID"):

            class Nameless(BaseExchange):
                API_ENDPOINT = "https://example.invalid"

                async def _fetch_ticker(self, asset, symbol_raw, pair, context):
                    return None


def test_utils_timestamp_helpers() -> None:
    assert iso_from_ms(T0) == "2023-11-14T22:13:20.000Z"
    assert iso_from_ms(T0 + 123) == "2023-11-14T22:13:20.123Z"
    assert to_ms(1_700_000_000) == T0
    assert to_ms("1700000000000") == T0
    assert optional_float("") is None
    assert optional_float("0.5") == 0.5


# ---------------------------------------------------------------------------
# Binance
# ---------------------------------------------------------------------------


def _binance_routes(premium=None):
    return {
        "/v1/fundingInfo": [{"symbol": "BTCUSDT", "fundingIntervalHours": 4}],
        "/v1/premiumIndex": premium
        or {"symbol": "BTCUSDT", "lastFundingRate": "0.0001", "nextFundingTime": T0},
        "/v1/fundingRate": [
            {"symbol": "BTCUSDT", "fundingTime": T0 - 4 * HOUR_MS, "fundingRate": "0.00012"},
            {"symbol": "BTCUSDT", "fundingTime": T0 - 8 * HOUR_MS, "fundingRate": "0.00008"},
        ],
    }


class TestBinance:
    @pytest.mark.asyncio
    async def test_builds_ticker_with_interval_override(self, fake_venue) -> None:
        fake_venue(_binance_routes())

        [ticker] = await BinanceExchange().fetch_funding(["BTC"])

        assert ticker.id == "binance-BTCUSDT"
        assert (ticker.base, ticker.quote) == ("BTC", "USDT")
        assert ticker.funding_period_hours == 4
        assert ticker.last_funding_rate == 0.0001
        assert ticker.current_est_rate == 0.0001
        assert ticker.apr_signed == pytest.approx(calculate_apr(0.0001, 4))
        assert ticker.next_funding_time == "2023-11-14T22:13:20.000Z"
        assert ticker.source == "binance"
        assert [point.ts for point in ticker.history] == [T0 - 8 * HOUR_MS, T0 - 4 * HOUR_MS]

    @pytest.mark.asyncio
    async def test_missing_funding_info_defaults_to_eight_hours(self, fake_venue) -> None:
        routes = _binance_routes()
        routes["/v1/fundingInfo"] = RuntimeError("unavailable")
        fake_venue(routes)

        [ticker] = await BinanceExchange().fetch_funding(["BTC"])

        assert ticker.funding_period_hours == 8

    @pytest.mark.asyncio
    async def test_malformed_interval_defaults_to_eight_hours(self, fake_venue) -> None:
        routes = _binance_routes()
        routes["/v1/fundingInfo"] = [{"symbol": "BTCUSDT", "fundingIntervalHours": "abc"}]
        fake_venue(routes)

        [ticker] = await BinanceExchange().fetch_funding(["BTC"])

        assert ticker.funding_period_hours == 8

    @pytest.mark.asyncio
    async def test_failing_asset_is_skipped(self, fake_venue) -> None:
        def premium(params):
            if params["symbol"] == "ETHUSDT":
                raise RuntimeError("boom")
            return {"symbol": params["symbol"], "lastFundingRate": "-0.0002"}

        fake_venue(_binance_routes(premium=premium))

        tickers = await BinanceExchange().fetch_funding(["BTC", "ETH", "SOL"])

        assert [ticker.base for ticker in tickers] == ["BTC", "SOL"]
        assert all(ticker.apr_signed < 0 for ticker in tickers)
        assert tickers[0].next_funding_time is None

    @pytest.mark.asyncio
    async def test_compound_mode(self, fake_venue) -> None:
        fake_venue(_binance_routes())

        [ticker] = await BinanceExchange(apr_mode="compound").fetch_funding(["BTC"])

        assert ticker.apr_signed == pytest.approx(calculate_apr(0.0001, 4, "compound"))


# ---------------------------------------------------------------------------
# Bybit
# ---------------------------------------------------------------------------


def _bybit_history(_params):
    return {
        "retCode": 0,
        "result": {
            "list": [
                {"symbol": "BTCUSDT", "fundingRate": "0.0001", "fundingRateTimestamp": str(T0)},
                {
                    "symbol": "BTCUSDT",
                    "fundingRate": "0.00005",
                    "fundingRateTimestamp": str(T0 - 4 * HOUR_MS),
                },
            ]
        },
    }


class TestBybit:
    @pytest.mark.asyncio
    async def test_uses_latest_settlement_and_instrument_interval(self, fake_venue) -> None:
        fake_venue(
            {
                "/v5/market/funding/history": _bybit_history,
                "/v5/market/instruments-info": {
                    "retCode": 0,
                    "result": {"list": [{"symbol": "BTCUSDT", "fundingInterval": 240}]},
                },
            }
        )

        [ticker] = await BybitExchange().fetch_funding(["BTC"])

        assert ticker.funding_period_hours == 4
        assert ticker.last_funding_rate == 0.0001
        assert ticker.next_funding_time == iso_from_ms(T0 + 4 * HOUR_MS)
        assert [point.rate for point in ticker.history] == [0.00005, 0.0001]

    @pytest.mark.asyncio
    async def test_error_envelope_skips_asset(self, fake_venue) -> None:
        fake_venue({"/v5/market/funding/history": {"retCode": 10001, "retMsg": "bad symbol"}})

        assert await BybitExchange().fetch_funding(["BTC"]) == []

    def test_unwrap_raises_on_error_envelope(self) -> None:
        with pytest.raises(ExchangeAPIError, match="bybit: retCode=10001"):
            BybitExchange()._unwrap({"retCode": 10001, "retMsg": "bad symbol"})


# ---------------------------------------------------------------------------
# Hyperliquid
# ---------------------------------------------------------------------------


def _hyperliquid_info(body):
    if body["type"] == "metaAndAssetCtxs":
        return [
            {"universe": [{"name": "BTC"}, {"name": "ETH"}]},
            [{"funding": "0.00002"}, {"funding": "0.00003"}],
        ]
    if body["coin"] != "BTC":
        return []
    return [
        {"coin": "BTC", "fundingRate": "0.0000125", "time": T0},
        {"coin": "BTC", "fundingRate": "0.00001", "time": T0 - HOUR_MS},
    ]


class TestHyperliquid:
    @pytest.mark.asyncio
    async def test_hourly_period_and_predicted_rate(self, fake_venue) -> None:
        fake_venue({"/info": _hyperliquid_info})

        tickers = await HyperliquidExchange().fetch_funding(["BTC", "ETH"])

        assert len(tickers) == 1
        ticker = tickers[0]
        assert ticker.id == "hyperliquid-BTC"
        assert ticker.quote == "USD"
        assert ticker.funding_period_hours == 1
        assert ticker.apr_signed == pytest.approx(0.1095)
        assert ticker.current_est_rate == 0.00002
        assert ticker.next_funding_time == iso_from_ms(T0 + HOUR_MS)

    @pytest.mark.asyncio
    async def test_missing_contexts_still_returns_ticker(self, fake_venue) -> None:
        def info(body):
            if body["type"] == "metaAndAssetCtxs":
                raise RuntimeError("unavailable")
            return _hyperliquid_info(body)

        fake_venue({"/info": info})

        [ticker] = await HyperliquidExchange().fetch_funding(["BTC"])

        assert ticker.current_est_rate == ticker.last_funding_rate

    @pytest.mark.asyncio
    async def test_malformed_contexts_still_return_ticker(self, fake_venue) -> None:
        def info(body):
            if body["type"] == "metaAndAssetCtxs":
                return [{"universe": [{"name": "BTC"}]}, ["bad"]]
            return _hyperliquid_info(body)

        fake_venue({"/info": info})

        [ticker] = await HyperliquidExchange().fetch_funding(["BTC"])

        assert ticker.current_est_rate == ticker.last_funding_rate


# ---------------------------------------------------------------------------
# Lighter
# ---------------------------------------------------------------------------


LIGHTER_RATES = {
    "code": 200,
    "funding_rates": [
        {"market_id": 1, "exchange": "binance", "symbol": "BTC", "rate": 0.0003},
        {"market_id": 1, "exchange": "lighter", "symbol": "BTC", "rate": 0.0001},
    ],
}


class TestLighter:
    @pytest.mark.asyncio
    async def test_reads_own_rate_and_signed_history(self, fake_venue) -> None:
        venue = fake_venue(
            {
                "/funding-rates": LIGHTER_RATES,
                "/fundings": {
                    "fundings": [
                        {"timestamp": 1_700_003_600, "rate": "0.0010", "direction": "long"},
                        {"timestamp": 1_700_000_000, "rate": "0.0012", "direction": "short"},
                    ]
                },
            }
        )

        tickers = await LighterExchange().fetch_funding(["BTC", "ETH"])

        assert len(tickers) == 1
        ticker = tickers[0]
        assert ticker.last_funding_rate == 0.0001
        assert ticker.funding_period_hours == 8
        assert ticker.apr_signed == pytest.approx(calculate_apr(0.0001, 8))
        assert [point.ts for point in ticker.history] == [T0, T0 + HOUR_MS]
        assert ticker.history[0].rate == pytest.approx(-0.000012)
        assert ticker.history[1].rate == pytest.approx(0.00001)
        assert venue.paths().count(f"{LighterExchange.API_ENDPOINT}/funding-rates") == 1

    @pytest.mark.asyncio
    async def test_reads_alternate_field_names(self, fake_venue) -> None:
        entry = {"coin": "sol", "fundingRate": "-0.0004"}
        fake_venue({"/funding-rates": {"funding_rates": [entry]}})

        [ticker] = await LighterExchange().fetch_funding(["SOL"])

        assert ticker.last_funding_rate == -0.0004
        assert ticker.history == []

    @pytest.mark.asyncio
    async def test_batch_failure_returns_empty(self, fake_venue) -> None:
        fake_venue({"/funding-rates": RuntimeError("down")})

        assert await LighterExchange().fetch_funding(["BTC", "ETH"]) == []


# ---------------------------------------------------------------------------
# Extended
# ---------------------------------------------------------------------------


class TestExtended:
    @pytest.mark.asyncio
    async def test_latest_record_is_current_rate(self, fake_venue) -> None:
        venue = fake_venue(
            {
                "/api/v1/info/BTC-USD/funding": {
                    "status": "OK",
                    "data": [
                        {"m": "BTC-USD", "T": T0, "f": "0.000013"},
                        {"m": "BTC-USD", "T": T0 - HOUR_MS, "f": "0.00001"},
                    ],
                }
            }
        )

        [ticker] = await ExtendedExchange().fetch_funding(["BTC"])

        assert ticker.id == "extended-BTC-USD"
        assert (ticker.base, ticker.quote) == ("BTC", "USD")
        assert ticker.last_funding_rate == 0.000013
        assert ticker.funding_period_hours == 1
        assert venue.calls[0][1]["limit"] == ExtendedExchange.HISTORY_LIMIT

    @pytest.mark.asyncio
    async def test_error_status_skips_asset(self, fake_venue) -> None:
        fake_venue({"/funding": {"status": "ERROR", "error": {"code": 404}}})

        assert await ExtendedExchange().fetch_funding(["BTC"]) == []


# ---------------------------------------------------------------------------
# Aster
# ---------------------------------------------------------------------------


class TestAster:
    @pytest.mark.asyncio
    async def test_period_inferred_from_history(self, fake_venue) -> None:
        fake_venue(
            {
                "/v1/premiumIndex": {"lastFundingRate": "0.0002", "nextFundingTime": 0},
                "/v1/fundingRate": [
                    {"fundingTime": T0 - 4 * HOUR_MS * i, "fundingRate": "0.0001"}
                    for i in range(4)
                ],
            }
        )

        [ticker] = await AsterExchange().fetch_funding(["ETH"])

        assert ticker.symbol_raw == "ETHUSDT"
        assert ticker.funding_period_hours == 4
        assert ticker.apr_signed == pytest.approx(calculate_apr(0.0002, 4))
        assert ticker.next_funding_time is not None

    @pytest.mark.asyncio
    async def test_short_history_defaults_to_eight_hours(self, fake_venue) -> None:
        fake_venue(
            {
                "/v1/premiumIndex": {"lastFundingRate": "0.0002", "nextFundingTime": T0},
                "/v1/fundingRate": [{"fundingTime": T0 - HOUR_MS, "fundingRate": "0.0001"}],
            }
        )

        [ticker] = await AsterExchange().fetch_funding(["ETH"])

        assert ticker.funding_period_hours == 8


def test_ticker_wire_format(ticker_factory) -> None:
    payload = ticker_factory(history=[]).to_dict()

    assert set(payload) == {
        "id",
        "exchange",
        "base",
        "quote",
        "symbolRaw",
        "fundingPeriodHours",
        "lastFundingRate",
        "nextFundingRate",
        "currentEstRate",
        "aprSigned",
        "nextFundingTime",
        "ts",
        "history",
        "source",
        "stale",
    }
    assert payload["stale"] is False
