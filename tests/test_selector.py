"""Tests for smart context item selection."""

from funding_scan.value_context import DEFAULT_COSTS, CostItem, select_smart_context_items


def _prices(items: list[CostItem]) -> list[float]:
    return [item.usd for item in items]


def test_spread_around_amount(small_catalog) -> None:
    selected = select_smart_context_items(small_catalog, 1000)

    assert _prices(selected) == [3, 250, 1000, 14000, 1_200_000]


def test_loss_uses_magnitude(small_catalog) -> None:
    assert select_smart_context_items(small_catalog, -1000) == select_smart_context_items(
        small_catalog, 1000
    )


def test_amount_above_every_price_returns_top_five_descending(small_catalog) -> None:
    selected = select_smart_context_items(small_catalog, 5_000_000)

    assert _prices(selected) == [1_200_000, 14000, 1000, 250, 75]


def test_small_catalog_returns_everything(small_catalog) -> None:
    selected = select_smart_context_items(small_catalog[:3], 100)

    assert _prices(selected) == [3, 75, 250]


def test_unpriced_items_are_ignored() -> None:
    catalog = [
        CostItem("free", "Free sample", 0),
        CostItem("coffee", "Coffee", 3),
        CostItem("ramen", "Ramen", 9),
    ]

    assert [item.id for item in select_smart_context_items(catalog, 5)] == ["coffee", "ramen"]


def test_empty_catalog() -> None:
    assert select_smart_context_items([], 1000) == []


def test_predicate_filters_catalog(small_catalog) -> None:
    selected = select_smart_context_items(
        small_catalog, 1000, predicate=lambda item: item.category == "food"
    )

    # the amount tops every food price, so the order is descending
    assert [item.id for item in selected] == ["groceries", "coffee"]


def test_default_catalog_gives_five_distinct_items() -> None:
    for amount in (12, 250, 1000, 42_000, 900_000):
        selected = select_smart_context_items(DEFAULT_COSTS, amount)
        assert len(selected) == 5
        assert len({item.id for item in selected}) == 5
        assert _prices(selected) == sorted(_prices(selected))


def test_fifth_slot_respects_cap() -> None:
    catalog = [
        CostItem("coffee", "Coffee", 3),
        CostItem("lunch", "Lunch", 15),
        CostItem("dinner", "Dinner", 40),
        CostItem("shoes", "Shoes", 120),
        CostItem("watch", "Watch", 900),
        CostItem("yacht", "Yacht", 2_000_000),
    ]

    selected = select_smart_context_items(catalog, 50)

    # cap is max(10 * 50, 10_000); the yacht is out of reach
    assert "yacht" not in {item.id for item in selected}
    assert _prices(selected) == [3, 15, 40, 120, 900]


def test_fifth_slot_keeps_large_item_when_nothing_fits_under_cap() -> None:
    catalog = [
        CostItem("coffee", "Coffee", 3),
        CostItem("lunch", "Lunch", 15),
        CostItem("dinner", "Dinner", 40),
        CostItem("shoes", "Shoes", 120),
        CostItem("yacht", "Yacht", 2_000_000),
    ]

    selected = select_smart_context_items(catalog, 50)

    assert _prices(selected) == [3, 15, 40, 120, 2_000_000]


def test_fifth_slot_falls_back_to_double_amount() -> None:
    catalog = [
        CostItem("coffee", "Coffee", 3),
        CostItem("snack", "Snack", 5),
        CostItem("laptop", "Laptop", 1000),
    ]

    # nothing is left at or above 0.1x once the laptop fills slot 4
    selected = select_smart_context_items(catalog, 500)

    assert [item.id for item in selected] == ["coffee", "snack", "laptop"]
