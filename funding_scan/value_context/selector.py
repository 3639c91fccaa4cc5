"""Smart context item selection.

Picks up to five comparison anchors spread across a log-relative range around
an amount (small, mid-small, roughly equal, mid-large, large) instead of the
five closest prices, which cluster when many items cost about the same.
"""

import math
from collections.abc import Callable, Iterable

from funding_scan.value_context.catalog import CostItem

MAX_ITEMS = 5

# Slot 5 never reaches beyond max(CAP_MULTIPLE * amount, CAP_FLOOR_USD)
CAP_MULTIPLE = 10
CAP_FLOOR_USD = 10_000


def _price_key(item: CostItem) -> tuple[float, str]:
    return (item.usd, item.label)


def _closest_key(target: float) -> Callable[[CostItem], tuple[float, float, str]]:
    return lambda item: (abs(item.usd - target), item.usd, item.label)


class _Picker:
    """Tracks chosen items; every query only considers items not yet taken."""

    def __init__(self, items: list[CostItem]) -> None:
        self._items = items
        self._used: set[str] = set()
        self.picked: list[CostItem] = []

    def take(self, item: CostItem | None) -> None:
        if item is not None and item.id not in self._used:
            self._used.add(item.id)
            self.picked.append(item)

    def pool(self) -> list[CostItem]:
        return [item for item in self._items if item.id not in self._used]

    def closest_in_range(self, low: float, high: float, target: float) -> CostItem | None:
        candidates = [item for item in self.pool() if low <= item.usd <= high]
        return min(candidates, key=_closest_key(target), default=None)

    def min_above(self, low: float) -> CostItem | None:
        candidates = [item for item in self.pool() if item.usd >= low]
        return min(candidates, key=_price_key, default=None)

    def max_in_range(self, low: float, high: float = math.inf) -> CostItem | None:
        candidates = [item for item in self.pool() if low <= item.usd <= high]
        # largest price first, then label ascending
        return min(candidates, key=lambda item: (-item.usd, item.label), default=None)


def select_smart_context_items(
    catalog: Iterable[CostItem],
    amount: float,
    predicate: Callable[[CostItem], bool] | None = None,
) -> list[CostItem]:
    """Select at most five distinct items to compare ``amount`` against.

    Negative amounts (losses) use their magnitude. When the amount is at or
    above the most expensive item, the five most expensive items are returned
    in descending price order; otherwise the result is ascending by price,
    then label.
    """
    items = [item for item in catalog if math.isfinite(item.usd) and item.usd > 0]
    if predicate is not None:
        items = [item for item in items if predicate(item)]
    if not items:
        return []

    items.sort(key=_price_key)
    x = abs(amount)

    if x >= items[-1].usd:
        return list(reversed(items[-MAX_ITEMS:]))

    picker = _Picker(items)

    # 1: price floor
    picker.take(items[0])

    # 2: mid-small, around 0.3x
    picker.take(picker.closest_in_range(0.1 * x, 0.5 * x, 0.3 * x))

    # 3: roughly equal
    picker.take(picker.closest_in_range(0.5 * x, 1.5 * x, x))

    # 4: cheapest at or above half, else the largest left
    slot4 = picker.min_above(0.5 * x)
    if slot4 is None:
        remaining = picker.pool()
        slot4 = remaining[-1] if remaining else None
    picker.take(slot4)

    # 5: largest at or above 0.1x, capped
    cap = max(CAP_MULTIPLE * x, CAP_FLOOR_USD)
    slot5 = picker.max_in_range(0.1 * x)
    if slot5 is None:
        slot5 = min(picker.pool(), key=_closest_key(2 * x), default=None)
    elif slot5.usd > cap:
        # an over-cap item stays when nothing fits under the cap
        slot5 = picker.max_in_range(0.1 * x, cap) or slot5
    picker.take(slot5)

    if len(picker.picked) < MAX_ITEMS:
        for item in sorted(picker.pool(), key=_closest_key(x)):
            picker.take(item)
            if len(picker.picked) == MAX_ITEMS:
                break

    return sorted(picker.picked, key=_price_key)
