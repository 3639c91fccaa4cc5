"""Shared test fixtures for funding scan."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from funding_scan.exchanges import FundingPoint, FundingTicker
from funding_scan.infrastructure import http_client
from funding_scan.rates import calculate_apr
from funding_scan.value_context import CostItem


def make_ticker(
    exchange: str = "binance",
    base: str = "BTC",
    rate: float = 0.0001,
    period_hours: float = 8,
    history: list[FundingPoint] | None = None,
) -> FundingTicker:
    symbol_raw = f"{base}USDT"
    return FundingTicker(
        id=f"{exchange}-{symbol_raw}",
        exchange=exchange,
        base=base,
        quote="USDT",
        symbol_raw=symbol_raw,
        funding_period_hours=period_hours,
        apr_signed=calculate_apr(rate, period_hours),
        ts="2025-01-01T00:00:00Z",
        source=exchange,
        last_funding_rate=rate,
        current_est_rate=rate,
        next_funding_time="2025-01-01T08:00:00Z",
        history=history or [],
    )


def make_adapter(exchange_id: str, tickers=None, error: Exception | None = None) -> AsyncMock:
    """Adapter double whose fetch_funding returns ``tickers`` or raises ``error``."""
    adapter = AsyncMock()
    adapter.EXCHANGE_ID = exchange_id
    if error is not None:
        adapter.fetch_funding = AsyncMock(side_effect=error)
    else:
        adapter.fetch_funding = AsyncMock(return_value=tickers or [])
    return adapter


class FakeVenue:
    """Routes http_client.get/post calls by URL suffix.

    A route value may be a JSON payload, an exception instance to raise, or a
    callable receiving the request params/body and returning the payload.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, Any]] = []

    async def __call__(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        payload = params if params is not None else json
        self.calls.append((url, payload))
        for suffix, response in self.routes.items():
            if url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                if callable(response):
                    return response(payload)
                return response
        raise AssertionError(f"unexpected request: {url}")

    def paths(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def fake_venue(monkeypatch) -> Callable[[dict[str, Any]], FakeVenue]:
    """Install a FakeVenue in place of the HTTP client."""

    def install(routes: dict[str, Any]) -> FakeVenue:
        venue = FakeVenue(routes)
        monkeypatch.setattr(http_client, "get", venue)
        monkeypatch.setattr(http_client, "post", venue)
        return venue

    return install


@pytest.fixture
def small_catalog() -> list[CostItem]:
    return [
        CostItem("coffee", "Coffee", 3, "food"),
        CostItem("commuter_pass", "Commuter pass", 75, "travel"),
        CostItem("groceries", "Groceries", 250, "food"),
        CostItem("laptop", "Laptop", 1000, "tech"),
        CostItem("used_car", "Used car", 14000, "travel"),
        CostItem("apartment", "Apartment", 1_200_000, "housing"),
    ]


@pytest.fixture
def ticker_factory() -> Callable[..., FundingTicker]:
    return make_ticker


@pytest.fixture
def adapter_factory() -> Callable[..., AsyncMock]:
    return make_adapter
