"""Display formatting for rates, multiples and amounts."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

NICE_INTEGER_BAND = 0.15

# Below this absolute APR the value is rendered muted
APR_MUTED_THRESHOLD = 0.02


def _round_half_up(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point string with half-way digits rounded away from zero.

    Rounds the exact binary value, so ``to_fixed(2.25, 1) == "2.3"`` while
    ``to_fixed(1.005, 2) == "1.00"``.
    """
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def is_nice_integer(multiple: float) -> bool:
    """True when ``|multiple|`` lies within 0.15 of a whole number."""
    magnitude = abs(multiple)
    return abs(magnitude - _round_half_up(magnitude)) < NICE_INTEGER_BAND


def format_apr(apr: float | None) -> str:
    if apr is None:
        return "—"
    sign = "+" if apr >= 0 else ""
    return f"{sign}{to_fixed(apr * 100, 2)}%"


def format_multiple(multiple: float) -> str:
    """Format a value multiple with magnitude-dependent precision.

    ``>= 10`` renders as an integer, ``[2, 10)`` with one decimal and below 2
    with two decimals. Values close to a whole number get a ``~`` prefix.
    """
    magnitude = abs(multiple)
    if magnitude >= 10:
        formatted = str(_round_half_up(magnitude))
    elif magnitude >= 2:
        formatted = to_fixed(magnitude, 1)
    else:
        formatted = to_fixed(magnitude, 2)

    sign = "" if multiple >= 0 else "-"
    prefix = "~" if is_nice_integer(multiple) else ""
    return f"{prefix}{sign}{formatted}×"


def format_usd(amount: float) -> str:
    """Whole-dollar currency string, e.g. ``-$1,235``."""
    rounded = _round_half_up(abs(amount))
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}${rounded:,}"


def format_amount(amount: float) -> str:
    """Grouped dollar amount with up to three decimals, e.g. ``$-1,234.5``."""
    text = f"{Decimal(amount).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP):,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"${text}"


def format_rate(rate: float | None) -> str:
    if rate is None:
        return "—"
    if abs(rate) < 0.001:
        return f"{rate:.2e}"
    return f"{rate:.6f}"


def format_time_remaining(ms: float) -> str:
    hours = int(ms // 3_600_000)
    minutes = int((ms % 3_600_000) // 60_000)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def time_until_next_funding(
    next_funding_time: str | None, now: datetime | None = None
) -> float | None:
    """Milliseconds until the ISO ``next_funding_time``; None if unknown or past."""
    if not next_funding_time:
        return None
    target = datetime.fromisoformat(next_funding_time.replace("Z", "+00:00"))
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    current = now or datetime.now(timezone.utc)
    diff_ms = (target - current).total_seconds() * 1000
    return diff_ms if diff_ms > 0 else None


def apr_style(apr: float | None) -> str:
    """Rich style for an APR cell: muted when small, amber positive, red negative."""
    if apr is None or abs(apr) < APR_MUTED_THRESHOLD:
        return "dim"
    return "yellow" if apr >= 0 else "red"
