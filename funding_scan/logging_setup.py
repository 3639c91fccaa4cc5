"""Logging setup helpers for funding scan startup."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure base logging and quiet chatty third-party loggers."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def configure_exchange_debug_logging(exchanges_spec: str | None) -> None:
    """Enable DEBUG logs for exchange-level loggers."""
    exchange_names = parse_csv(exchanges_spec)
    for exchange_name in exchange_names:
        logging.getLogger(f"funding_scan.exchanges.{exchange_name}").setLevel(logging.DEBUG)
    if exchange_names:
        logger.info("Enabling DEBUG logging for exchanges: %s", exchange_names)


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
