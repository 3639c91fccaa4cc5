"""Exchange adapter verification CLI."""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from funding_scan.exchanges import EXCHANGES, FundingTicker
from funding_scan.formatting import format_apr, format_rate
from funding_scan.rates import calculate_apr
from funding_scan.symbols import SUPPORTED_ASSETS, get_symbol_for_exchange, normalize_symbol

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify exchange adapter with real API calls")
    parser.add_argument(
        "exchange_id",
        nargs="?",
        help="Exchange ID from EXCHANGES registry (for example: hyperliquid)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available exchange IDs and exit",
    )
    parser.add_argument(
        "--asset",
        action="append",
        default=None,
        help="Asset to request; repeat for several (default: all supported)",
    )
    return parser


def _render_tickers(tickers: list[FundingTicker]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Pair", style="yellow")
    table.add_column("Period", style="green", justify="right")
    table.add_column("Last rate", justify="right")
    table.add_column("APR", justify="right")
    table.add_column("Next funding")
    table.add_column("History", justify="right")

    for ticker in tickers:
        table.add_row(
            ticker.id,
            f"{ticker.base}/{ticker.quote}",
            f"{ticker.funding_period_hours:g}h",
            format_rate(ticker.last_funding_rate),
            format_apr(ticker.apr_signed),
            ticker.next_funding_time or "—",
            str(len(ticker.history)),
        )

    console.print(table)


def _check_ticker(ticker: FundingTicker) -> list[str]:
    """Return consistency problems for one ticker."""
    problems = []
    if ticker.funding_period_hours <= 0:
        problems.append(f"non-positive period {ticker.funding_period_hours}")
    if ticker.last_funding_rate is not None:
        expected = calculate_apr(ticker.last_funding_rate, ticker.funding_period_hours)
        if abs(expected - ticker.apr_signed) > 1e-9 * max(1.0, abs(expected)):
            problems.append(f"aprSigned {ticker.apr_signed} != {expected} (simple mode)")
    timestamps = [point.ts for point in ticker.history]
    if timestamps != sorted(timestamps):
        problems.append("history not in ascending time order")
    return problems


async def verify_exchange(exchange_id: str, assets: list[str]) -> bool:
    console.print(f"\n[bold cyan]Verifying exchange adapter: {exchange_id}[/bold cyan]\n")

    if exchange_id not in EXCHANGES:
        available = ", ".join(sorted(EXCHANGES.keys()))
        console.print(
            f"[bold red][FAIL][/bold red] Exchange '{exchange_id}' "
            "not found in EXCHANGES registry.\n"
            f"Available exchanges: {available}"
        )
        return False

    adapter = EXCHANGES[exchange_id]

    console.print("[bold]Step 1: Symbol round trip[/bold]")
    for asset in assets:
        symbol = get_symbol_for_exchange(asset, exchange_id)
        pair = normalize_symbol(symbol, exchange_id)
        if pair is None or pair.base != asset:
            console.print(f"  [bold red][FAIL][/bold red] {asset} -> {symbol} -> {pair}")
            return False
        console.print(f"  [green][OK][/green] {asset} -> {symbol} -> {pair.base}/{pair.quote}")

    console.print(f"\n[bold]Step 2: API - fetch_funding({assets})[/bold]")
    try:
        tickers = await adapter.fetch_funding(assets)
    except Exception as exc:
        console.print(f"  [bold red][FAIL][/bold red] fetch_funding() raised: {exc}")
        return False

    console.print(f"  [green][OK][/green] Retrieved {len(tickers)}/{len(assets)} tickers")
    if not tickers:
        console.print("  [bold red][FAIL][/bold red] fetch_funding() returned empty list")
        return False
    _render_tickers(tickers)

    console.print("\n[bold]Step 3: Ticker consistency[/bold]")
    ok = True
    for ticker in tickers:
        problems = _check_ticker(ticker)
        if problems:
            ok = False
            console.print(f"  [bold red][FAIL][/bold red] {ticker.id}: {'; '.join(problems)}")
        else:
            console.print(f"  [green][OK][/green] {ticker.id}")

    missing = set(assets) - {ticker.base for ticker in tickers}
    if missing:
        console.print(f"  [yellow][WARN][/yellow] No data for: {', '.join(sorted(missing))}")

    if ok:
        console.print(f"\n[bold green][OK] All checks passed for {exchange_id}[/bold green]\n")
    return ok


async def amain(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list:
        console.print("Available exchange IDs:")
        for exchange_id in sorted(EXCHANGES.keys()):
            console.print(f"  - {exchange_id}")
        return 0

    if args.exchange_id is None:
        parser.print_help()
        console.print("\nExample: funding-scan-verify hyperliquid --asset BTC")
        return 1

    assets = [asset.upper() for asset in args.asset] if args.asset else list(SUPPORTED_ASSETS)
    unsupported = [asset for asset in assets if asset not in SUPPORTED_ASSETS]
    if unsupported:
        console.print(f"[bold red][FAIL][/bold red] Unsupported assets: {unsupported}")
        return 1

    success = await verify_exchange(args.exchange_id, assets)
    return 0 if success else 1


def main() -> int:
    return asyncio.run(amain())


def entrypoint() -> None:
    sys.exit(main())
