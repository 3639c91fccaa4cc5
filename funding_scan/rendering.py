"""Rich console rendering for funding snapshots and value context."""

from rich.console import Console
from rich.table import Table

from funding_scan.aggregation import AggregatedFunding
from funding_scan.formatting import (
    apr_style,
    format_apr,
    format_rate,
    format_time_remaining,
    format_usd,
    time_until_next_funding,
)
from funding_scan.value_context import ValueComparison, WageEquivalents, pick_wage_unit

console = Console()


def render_funding(result: AggregatedFunding) -> Table:
    meta = result.meta
    title = f"Funding rates @ {meta.timestamp}"
    if meta.stale:
        title += f"  [bold red](stale: {meta.failed_exchanges} exchange(s) failed)[/bold red]"

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Exchange", style="cyan")
    table.add_column("Pair", style="cyan")
    table.add_column("Period", justify="right")
    table.add_column("Last rate", justify="right")
    table.add_column("APR", justify="right")
    table.add_column("Next funding", justify="right")
    table.add_column("History", justify="right", style="dim")

    # sorted by APR descending so the extremes stand out
    for ticker in sorted(result.data, key=lambda t: t.apr_signed, reverse=True):
        remaining = time_until_next_funding(ticker.next_funding_time)
        table.add_row(
            ticker.exchange,
            f"{ticker.base}/{ticker.quote}",
            f"{ticker.funding_period_hours:g}h",
            format_rate(ticker.last_funding_rate),
            f"[{apr_style(ticker.apr_signed)}]{format_apr(ticker.apr_signed)}[/]",
            format_time_remaining(remaining) if remaining is not None else "—",
            str(len(ticker.history)),
        )

    return table


def render_value_context(
    amount: float,
    comparisons: list[ValueComparison],
    equivalents: WageEquivalents,
    region: str,
) -> Table:
    unit, value = pick_wage_unit(equivalents)
    table = Table(
        title=f"{format_usd(amount)} ≈ {value:,.1f} {unit} of {region} median wages",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Item", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Multiple", justify="right", style="green")

    for comp in comparisons:
        table.add_row(comp.item.label, format_usd(comp.item.usd), comp.formatted)

    return table
