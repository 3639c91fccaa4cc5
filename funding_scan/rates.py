"""Funding rate annualization.

Venues quote funding over different settlement windows (1h, 4h, 8h, ...).
Every rate is first converted to a per-hour rate and then to a yearly one so
values from different venues can be compared directly.

Simple mode is the default: funding flips sign often and is not actually
reinvested, so compounding a small signed rate 8760 times overstates it.
"""

from collections.abc import Iterable
from typing import Literal

AprMode = Literal["simple", "compound"]

HOURS_PER_YEAR = 24 * 365

# Settlement periods a venue is assumed to use, in hours
PERIOD_CANDIDATES: tuple[int, ...] = (1, 2, 4, 8, 12)

DEFAULT_PERIOD_HOURS = 1


def _check_mode(mode: str) -> None:
    if mode not in ("simple", "compound"):
        raise ValueError(f"Unknown APR mode: {mode!r} (expected 'simple' or 'compound')")


def to_hourly_rate(period_rate: float, period_hours: float, mode: AprMode = "simple") -> float:
    """Convert a per-period rate to a per-hour rate; non-positive periods give 0."""
    _check_mode(mode)
    if period_hours <= 0:
        return 0.0
    if mode == "compound":
        # a period that loses the whole position or more has no real hourly root
        if 1 + period_rate <= 0:
            return -1.0
        return (1 + period_rate) ** (1 / period_hours) - 1
    return period_rate / period_hours


def annualize_from_hourly(hourly_rate: float, mode: AprMode = "simple") -> float:
    _check_mode(mode)
    if mode == "compound":
        return (1 + hourly_rate) ** HOURS_PER_YEAR - 1
    return hourly_rate * HOURS_PER_YEAR


def calculate_apr(period_rate: float, period_hours: float, mode: AprMode = "simple") -> float:
    """Annualize a funding rate quoted over ``period_hours``.

    All adapters go through this function, so ``apr_signed`` on a ticker is
    always reproducible from its period rate and period length.

    Example:
        >>> round(calculate_apr(0.0001, 8), 6)
        0.1095
    """
    return annualize_from_hourly(to_hourly_rate(period_rate, period_hours, mode), mode)


def infer_period_hours_from_history(timestamps_ms: Iterable[float]) -> int:
    """Infer the settlement period from funding timestamps (ms, any order).

    Takes the lower median of consecutive gaps and snaps it to the nearest
    candidate period. Fewer than two timestamps returns the 1h default.
    """
    timestamps = sorted(timestamps_ms)
    if len(timestamps) < 2:
        return DEFAULT_PERIOD_HOURS

    gaps = sorted(
        abs(later - earlier) / 3_600_000 for earlier, later in zip(timestamps, timestamps[1:])
    )
    median = gaps[len(gaps) // 2]

    best = PERIOD_CANDIDATES[0]
    for candidate in PERIOD_CANDIDATES[1:]:
        # strict comparison keeps the earlier candidate on ties
        if abs(candidate - median) < abs(best - median):
            best = candidate
    return best
