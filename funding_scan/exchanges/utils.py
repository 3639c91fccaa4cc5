"""Common utilities for exchange adapters."""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def iso_from_ms(ms: float) -> str:
    """Format milliseconds since Unix epoch as an ISO-8601 UTC string."""
    moment = datetime.fromtimestamp(0, tz=timezone.utc) + timedelta(milliseconds=ms)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def iso_now() -> str:
    return iso_from_ms(now_ms())


def to_ms(value: Any) -> int:
    """Coerce a venue timestamp (ms or seconds, number or string) to ms."""
    number = float(value)
    # anything below ~2001-09 in ms is a seconds timestamp
    if number < 1e12:
        number *= 1000
    return int(number)


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the value of the first key present in ``record`` and not None."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def optional_float(value: Any) -> float | None:
    """Parse a numeric field that venues may omit or send as an empty string."""
    if value is None or value == "":
        return None
    return float(value)
