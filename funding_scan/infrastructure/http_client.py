"""HTTP client with exponential backoff retry."""

import logging
from typing import Any

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

logger = logging.getLogger(__name__)

# JSON can be any of these types
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

DEFAULT_TIMEOUT = 10.0
USER_AGENT = "FundingScan/1.0"

# Dashboard polls every 30-60s: give up quickly rather than stall the batch
RETRY_CONFIG = {
    "retry": retry_if_exception_type((httpx.HTTPError, httpx.TimeoutException)),
    "stop": stop_after_attempt(2) | stop_after_delay(10),
    "wait": wait_exponential(multiplier=0.5, max=2),
    "before_sleep": before_sleep_log(logger, logging.DEBUG),
    "reraise": True,
}


def _headers(headers: dict[str, str] | None) -> dict[str, str]:
    return {"User-Agent": USER_AGENT, **(headers or {})}


@retry(**RETRY_CONFIG)
async def get(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> JsonValue:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(url, params=params, headers=_headers(headers))
        response.raise_for_status()
        return response.json()


@retry(**RETRY_CONFIG)
async def post(
    url: str,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> JsonValue:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(url, json=json, headers=_headers(headers))
        response.raise_for_status()
        return response.json()
