"""Value comparisons: how many of each item an amount buys."""

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from funding_scan.formatting import format_amount, format_multiple, is_nice_integer
from funding_scan.value_context.catalog import ESSENTIAL_CATEGORIES, CostItem

SortMode = Literal["amount", "priority", "edited"]

# UI filter name -> categories it keeps
PERIOD_FILTERS: dict[str, frozenset[str]] = {
    "oneOff": frozenset({"tech"}),
    "monthly": frozenset({"housing", "food", "utilities"}),
    "annual": frozenset({"leisure"}),
}


@dataclass(frozen=True)
class ValueComparison:
    item: CostItem
    multiple: float
    is_nice_integer: bool

    @property
    def formatted(self) -> str:
        return format_multiple(self.multiple)


def compare(amount: float, item: CostItem) -> ValueComparison:
    multiple = amount / item.usd
    return ValueComparison(item=item, multiple=multiple, is_nice_integer=is_nice_integer(multiple))


def _matches_filters(item: CostItem, filters: Sequence[str]) -> bool:
    return any(item.category in PERIOD_FILTERS.get(name, ()) for name in filters)


def compute_comparisons(
    amount: float,
    items: Iterable[CostItem],
    sort_mode: SortMode = "amount",
    filters: Sequence[str] = (),
    pinned: Sequence[str] = (),
) -> list[ValueComparison]:
    """Compare ``amount`` against every positively priced item.

    ``filters`` keeps only items in the named period groups. Results are
    ordered by ``|multiple|`` descending; ``priority`` puts essentials first.
    Pinned item ids always lead, in the order given.
    """
    if amount == 0:
        return []

    candidates = [item for item in items if math.isfinite(item.usd) and item.usd > 0]
    if filters:
        candidates = [item for item in candidates if _matches_filters(item, filters)]

    comparisons = [compare(amount, item) for item in candidates]

    sort_key: Callable[[ValueComparison], tuple[float, ...]]
    if sort_mode == "priority":
        def sort_key(comp: ValueComparison) -> tuple[float, ...]:
            essential = 0 if comp.item.category in ESSENTIAL_CATEGORIES else 1
            return (essential, -abs(comp.multiple))
    else:
        # TODO: "edited" needs per-item edit timestamps on CostItem; sorts like "amount"
        def sort_key(comp: ValueComparison) -> tuple[float, ...]:
            return (-abs(comp.multiple),)

    comparisons.sort(key=sort_key)

    if pinned:
        rank = {item_id: index for index, item_id in enumerate(pinned)}
        comparisons.sort(key=lambda comp: rank.get(comp.item.id, len(rank)))
    return comparisons


def generate_one_line_summary(amount: float, comparisons: Sequence[ValueComparison]) -> str:
    """One-line summary of the top three comparisons.

    Example: ``$1,000 = ~4.0× groceries (1 month) · ~1.00× laptop (mid-tier)``
    """
    if amount == 0 or not comparisons:
        return ""
    parts = [f"{comp.formatted} {comp.item.label.lower()}" for comp in comparisons[:3]]
    return f"{format_amount(amount)} = {' · '.join(parts)}"


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def make_log_positioner(low: float, high: float) -> Callable[[float], float]:
    """Return a function mapping a multiple onto 0..1 along a log10 scale."""
    low_c = max(low, 1e-6)
    high_c = max(high, low_c * 1.000001)
    log_low = math.log10(low_c)
    span = max(math.log10(high_c) - log_low, 1e-9)

    def position(multiple: float) -> float:
        return (math.log10(clamp(multiple, low_c, high_c)) - log_low) / span

    return position
