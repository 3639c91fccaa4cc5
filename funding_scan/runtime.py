"""Runtime configuration building for funding scan startup."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from funding_scan.logging_setup import parse_csv
from funding_scan.rates import AprMode
from funding_scan.settings import Settings
from funding_scan.symbols import SUPPORTED_ASSETS, SUPPORTED_EXCHANGES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved startup configuration after CLI/ENV merge."""

    assets: list[str]
    exchanges: list[str]
    apr_mode: AprMode
    request_timeout: float
    venue_timeout: float
    poll_interval: int
    costs_file: str | None
    log_level: str
    debug_exchanges: str | None


def _cli_or_env(args: argparse.Namespace, name: str, env_value):
    value = getattr(args, name, None)
    return value if value is not None else env_value


def build_runtime_config(args: argparse.Namespace, settings: Settings) -> RuntimeConfig:
    """Resolve final runtime configuration; CLI arguments override the environment."""
    poll_interval = _cli_or_env(args, "interval", settings.poll_interval)
    if poll_interval < 5:
        raise ValueError("Poll interval must be at least 5 seconds")

    return RuntimeConfig(
        assets=_parse_spec(
            _cli_or_env(args, "assets", settings.assets), SUPPORTED_ASSETS, str.upper, "asset"
        ),
        exchanges=_parse_spec(
            _cli_or_env(args, "exchanges", settings.exchanges),
            SUPPORTED_EXCHANGES,
            str.lower,
            "exchange",
        ),
        apr_mode=_cli_or_env(args, "apr_mode", settings.apr_mode),
        request_timeout=settings.request_timeout,
        venue_timeout=settings.venue_timeout,
        poll_interval=poll_interval,
        costs_file=_cli_or_env(args, "costs", settings.costs_file),
        log_level=settings.log_level,
        debug_exchanges=_cli_or_env(args, "debug_exchanges", settings.debug_exchanges),
    )


def _parse_spec(
    spec: str | None,
    supported: tuple[str, ...],
    normalize: Callable[[str], str],
    kind: str,
) -> list[str]:
    """Parse a comma-separated selection; empty means everything supported.

    Unknown values are dropped with a warning. The result may be empty, which
    the aggregator rejects as an invalid request.
    """
    requested = [normalize(item) for item in parse_csv(spec)]
    if not requested:
        return list(supported)

    unknown = sorted(set(requested) - set(supported))
    if unknown:
        logger.warning(
            "Unknown %s IDs requested: %s. Available: %s", kind, unknown, list(supported)
        )

    valid = [item for item in dict.fromkeys(requested) if item in supported]
    if valid:
        logger.info("Filtered to %s %s(s): %s", len(valid), kind, valid)
    return valid
