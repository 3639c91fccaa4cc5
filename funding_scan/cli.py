"""CLI argument parsing for funding scan."""

from __future__ import annotations

import argparse


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--assets",
        type=str,
        default=None,
        help="Comma-separated list of assets (default: all supported).",
    )
    parser.add_argument(
        "--exchanges",
        type=str,
        default=None,
        help="Comma-separated list of exchanges (default: all supported).",
    )
    parser.add_argument(
        "--apr-mode",
        choices=("simple", "compound"),
        default=None,
        help="Annualization mode (default: simple).",
    )
    parser.add_argument(
        "--debug-exchanges",
        type=str,
        default=None,
        help="Comma-separated list of exchanges for DEBUG logging.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser used by the main entrypoint."""
    parser = argparse.ArgumentParser(
        prog="funding-scan",
        description="Funding scan - Perpetual funding rates across exchanges, annualized",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One snapshot of every asset on every exchange
  funding-scan fetch

  # Specific assets and exchanges, as JSON
  funding-scan fetch --assets BTC,ETH --exchanges hyperliquid,bybit --json

  # Refresh every 60 seconds
  funding-scan watch --interval 60

  # What does $2,500 buy?
  funding-scan value 2500 --region JP

  # Serve GET /api/funding
  funding-scan serve --port 8000

Environment Variables:
  FUNDING_SCAN_ASSETS          Comma-separated assets (overridden by CLI)
  FUNDING_SCAN_EXCHANGES       Comma-separated exchanges (overridden by CLI)
  FUNDING_SCAN_APR_MODE        simple or compound
  FUNDING_SCAN_POLL_INTERVAL   Seconds between refreshes in watch mode
  FUNDING_SCAN_COSTS_FILE      JSON cost catalog for the value command
  DEBUG_EXCHANGES              Comma-separated list for debug logging
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Fetch one funding snapshot.")
    _add_selection_arguments(fetch)
    fetch.add_argument("--json", action="store_true", help="Print the raw JSON response.")

    watch = subparsers.add_parser("watch", help="Poll funding rates on an interval.")
    _add_selection_arguments(watch)
    watch.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Seconds between refreshes (default: 30).",
    )

    value = subparsers.add_parser("value", help="Express an amount in everyday items.")
    value.add_argument("amount", type=float, help="USD amount, negative for a loss.")
    value.add_argument("--region", choices=("US", "EU", "JP"), default="US")
    value.add_argument("--costs", type=str, default=None, help="JSON cost catalog file.")
    value.add_argument("--fx-eur-usd", type=float, default=None, help="EUR→USD rate.")
    value.add_argument("--fx-jpy-usd", type=float, default=None, help="JPY per USD.")

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", type=str, default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser
