"""Cost catalog: the priced everyday items amounts are compared against.

The catalog is user-editable configuration. It is stored as a JSON list of
``{"id", "label", "usd", "category"}`` objects; the defaults below are used
when no file is configured or the file cannot be read.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

Category = Literal["housing", "tech", "travel", "food", "utilities", "leisure"]

ESSENTIAL_CATEGORIES: frozenset[str] = frozenset({"housing", "food", "utilities"})


@dataclass(frozen=True)
class CostItem:
    id: str
    label: str
    usd: Annotated[float, Field(gt=0)]
    category: Category | None = None
    editable: bool = True


_COST_ITEM_ADAPTER = TypeAdapter(CostItem)

DEFAULT_COSTS: tuple[CostItem, ...] = (
    # Housing / basket anchors
    CostItem("rent_1br", "Month of rent (1BR)", 1200, "housing"),
    CostItem("rent_room", "Month of rent (room in shared apt.)", 700, "housing"),
    CostItem("living_barebones_month", "Barebones living basket (1 month)", 1000, "housing"),
    CostItem("living_comfortable_month", "Comfortable living basket (1 month)", 1800, "housing"),
    # Food
    CostItem("groceries_month", "Groceries (1 month)", 250, "food"),
    CostItem("coffee", "Coffee", 3, "food"),
    CostItem("ramen_bowl", "Ramen bowl", 9, "food"),
    CostItem("conbini_bento", "Convenience-store bento", 5, "food"),
    CostItem("sushi_omakase_mid", "Sushi omakase (mid-range, per person)", 60, "food"),
    CostItem("casual_dinner_for_two", "Casual dinner for two", 80, "food"),
    CostItem("cocktail_bar", "Cocktail (nice bar)", 12, "food"),
    # Travel & local transport
    CostItem("metro_daypass", "Metro/Train day pass (24h)", 7, "travel"),
    CostItem("commuter_pass_month", "Commuter pass (1 month)", 75, "travel"),
    CostItem("rideshare_10km", "Rideshare (10 km)", 15, "travel"),
    CostItem("airport_train_oneway", "Airport express train (one-way)", 25, "travel"),
    CostItem("domestic_flight_rt", "Domestic flight (RT, economy)", 150, "travel"),
    CostItem("shinkansen_rt", "Shinkansen Tokyo–Osaka (RT)", 220, "travel"),
    CostItem("jrpass_7d", "JR Pass (7 days)", 330, "travel"),
    CostItem("flight_eu_jp_rt", "Flight EU↔JP (RT, economy)", 900, "travel"),
    CostItem("gas_tank_50l", "Gasoline (full tank ~50 L)", 70, "travel"),
    # Tech / work setup
    CostItem("macbook_air", "Laptop (mid-tier)", 1000, "tech"),
    CostItem("smartphone_mid", "Smartphone (mid-tier)", 700, "tech"),
    CostItem("monitor_27_4k", '27" 4K monitor', 300, "tech"),
    CostItem("ext_ssd_2tb", "External SSD (2 TB)", 120, "tech"),
    CostItem("nc_headphones", "Noise-cancelling headphones", 250, "tech"),
    CostItem("hardware_wallet", "Hardware wallet", 79, "tech"),
    CostItem("domain_ssl_year", "Domain + SSL (1 year)", 15, "tech"),
    CostItem("vps_dev_month", "VPS (dev box, 1 month)", 25, "tech"),
    # Utilities
    CostItem("electricity_month", "Electricity (1 month)", 75, "utilities"),
    CostItem("water_month", "Water (1 month)", 25, "utilities"),
    CostItem("heating_gas_month", "Heating gas (1 month)", 60, "utilities"),
    CostItem("fiber_internet_month", "Fiber internet (1 month)", 40, "utilities"),
    CostItem("mobile_plan_month", "Mobile plan (1 month)", 25, "utilities"),
    CostItem("cloud_storage_month", "Cloud storage 2 TB (1 month)", 10, "utilities"),
    # Leisure & lifestyle
    CostItem("gym_month", "Gym (1 month)", 35, "leisure"),
    CostItem("gym_year", "Gym (1 year)", 300, "leisure"),
    CostItem("onsen_day", "Onsen day pass", 8, "leisure"),
    CostItem("karaoke_2h_room", "Karaoke room (2 hours)", 20, "leisure"),
    CostItem("cinema_ticket", "Cinema ticket", 12, "leisure"),
    CostItem("netflix_month", "Netflix (1 month)", 16, "leisure"),
    CostItem("museum_entry", "Museum entry", 10, "leisure"),
    CostItem("ski_pass_week", "Ski pass (1 week, Hokkaidō)", 350, "leisure"),
    # Vehicles
    CostItem("car_used_compact_5y", "Used car (5-yr compact sedan)", 15000, "travel"),
    CostItem("car_new_mid_sedan", "New car (mid-tier sedan)", 30000, "travel"),
    CostItem("car_tesla_model3_lr", "Tesla Model 3 Long Range (new)", 45000, "travel"),
    CostItem("car_land_cruiser_new", "Toyota Land Cruiser (new)", 65000, "travel"),
    CostItem("car_porsche_911_gt3rs", "Porsche 911 GT3 RS (new, base)", 250000, "travel"),
    CostItem("supercar_maintenance_year", "Supercar maintenance (1 year)", 10000, "travel"),
    # Housing (purchase scale)
    CostItem("house_down_payment_20", "20% down payment (median home)", 80000, "housing"),
    CostItem("house_median_national", "Median home price (national)", 400000, "housing"),
    CostItem("apartment_prime_city_2br", "Prime-city apartment (2BR)", 1200000, "housing"),
)


def parse_catalog(raw_items: list[object]) -> list[CostItem]:
    """Validate raw catalog entries, skipping invalid ones and duplicate ids."""
    items: list[CostItem] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_items):
        try:
            item = _COST_ITEM_ADAPTER.validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Skipping invalid cost item #{index}: {e.error_count()} error(s)")
            continue
        if item.id in seen:
            logger.warning(f"Skipping duplicate cost item id {item.id!r}")
            continue
        seen.add(item.id)
        items.append(item)
    return items


def load_catalog(path: str | Path | None) -> list[CostItem]:
    """Load the catalog from a JSON file, falling back to DEFAULT_COSTS."""
    if path is None:
        return list(DEFAULT_COSTS)

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load costs from {path}, using defaults: {e}")
        return list(DEFAULT_COSTS)

    if not isinstance(raw, list):
        logger.warning(f"Costs file {path} must contain a JSON list, using defaults")
        return list(DEFAULT_COSTS)

    return parse_catalog(raw)


def save_catalog(path: str | Path, items: list[CostItem]) -> None:
    Path(path).write_text(
        json.dumps([asdict(item) for item in items], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
