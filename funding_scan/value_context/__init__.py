"""Value context: express a USD amount in everyday items and working time."""

from funding_scan.value_context.catalog import DEFAULT_COSTS, CostItem, load_catalog, save_catalog
from funding_scan.value_context.comparison import (
    ValueComparison,
    compare,
    compute_comparisons,
    generate_one_line_summary,
    make_log_positioner,
)
from funding_scan.value_context.selector import select_smart_context_items
from funding_scan.value_context.wages import (
    WAGE_PRESETS,
    WageEquivalents,
    WagePreset,
    pick_wage_unit,
    recalculate_wage_presets_with_fx,
    wage_equivalents,
)

__all__ = [
    "DEFAULT_COSTS",
    "WAGE_PRESETS",
    "CostItem",
    "ValueComparison",
    "WageEquivalents",
    "WagePreset",
    "compare",
    "compute_comparisons",
    "generate_one_line_summary",
    "load_catalog",
    "make_log_positioner",
    "pick_wage_unit",
    "recalculate_wage_presets_with_fx",
    "save_catalog",
    "select_smart_context_items",
    "wage_equivalents",
]
