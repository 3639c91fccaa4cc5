"""Wage presets and time-of-labor equivalents."""

import math
from dataclasses import dataclass, replace
from typing import Literal

Region = Literal["US", "EU", "JP"]
WageUnit = Literal["days", "months", "years"]

DEFAULT_FX_EUR_USD = 1.08
DEFAULT_FX_JPY_USD = 150.0

# Local-currency bases the EU/JP presets are converted from
EU_DAILY_EUR = 113.68
EU_MONTHLY_EUR = 2462.75
EU_ANNUAL_EUR = 29573.0
JP_MONTHLY_JPY = 329778.0
JP_DAYS_WORKED_PER_MONTH = 17.6


@dataclass(frozen=True)
class WagePreset:
    region: Region
    daily_usd: float
    monthly_usd: float
    annual_usd: float
    source: str
    notes: str | None = None


@dataclass(frozen=True)
class WageEquivalents:
    days: float
    months: float
    years: float


WAGE_PRESETS: dict[Region, WagePreset] = {
    # BLS median usual weekly earnings Q2 2025 = $1,196; daily = weekly / 5, annual = weekly * 52
    "US": WagePreset(
        region="US",
        daily_usd=239.20,
        monthly_usd=5182.67,
        annual_usd=62192.00,
        source="BLS: Median usual weekly earnings, Q2 2025",
        notes="Median weekly $1,196; monthly = annual/12.",
    ),
    "EU": WagePreset(
        region="EU",
        daily_usd=122.84,
        monthly_usd=2661.57,
        annual_usd=31938.84,
        source="Eurostat: net annual earnings (EU-27, 2024)",
        notes="Assumes fx EUR→USD = 1.08; adjust in presets if needed.",
    ),
    "JP": WagePreset(
        region="JP",
        daily_usd=124.92,
        monthly_usd=2198.52,
        annual_usd=26382.24,
        source="Japan Statistical Handbook 2024 (monthly cash earnings & days worked)",
        notes="Assumes fx JPY→USD = 150; adjust in presets if needed.",
    ),
}


def wage_equivalents(amount_usd: float, wage: WagePreset) -> WageEquivalents:
    """Days, months and years of work ``amount_usd`` represents, signed like the amount."""
    magnitude = abs(amount_usd)
    sign = 1 if amount_usd >= 0 else -1
    return WageEquivalents(
        days=sign * magnitude / wage.daily_usd,
        months=sign * magnitude / wage.monthly_usd,
        years=sign * magnitude / wage.annual_usd,
    )


def pick_wage_unit(equivalents: WageEquivalents) -> tuple[WageUnit, float]:
    """Largest unit whose magnitude reaches one half."""
    if abs(equivalents.years) >= 0.5:
        return "years", equivalents.years
    if abs(equivalents.months) >= 0.5:
        return "months", equivalents.months
    return "days", equivalents.days


def recalculate_wage_presets_with_fx(
    presets: dict[Region, WagePreset],
    fx_eur_usd: float = DEFAULT_FX_EUR_USD,
    fx_jpy_usd: float = DEFAULT_FX_JPY_USD,
) -> dict[Region, WagePreset]:
    """Rebuild EU and JP presets from their local-currency bases.

    ``fx_eur_usd`` is USD per EUR; ``fx_jpy_usd`` is JPY per USD.

    Raises:
        ValueError: If an FX rate is not a positive finite number
    """
    for name, fx in (("fx_eur_usd", fx_eur_usd), ("fx_jpy_usd", fx_jpy_usd)):
        if not math.isfinite(fx) or fx <= 0:
            raise ValueError(f"{name} must be a positive number, got {fx}")

    jp_daily_jpy = JP_MONTHLY_JPY / JP_DAYS_WORKED_PER_MONTH
    return {
        **presets,
        "EU": replace(
            presets["EU"],
            daily_usd=EU_DAILY_EUR * fx_eur_usd,
            monthly_usd=EU_MONTHLY_EUR * fx_eur_usd,
            annual_usd=EU_ANNUAL_EUR * fx_eur_usd,
            notes=f"Assumes fx EUR→USD = {fx_eur_usd}; adjust in presets if needed.",
        ),
        "JP": replace(
            presets["JP"],
            daily_usd=jp_daily_jpy / fx_jpy_usd,
            monthly_usd=JP_MONTHLY_JPY / fx_jpy_usd,
            annual_usd=JP_MONTHLY_JPY * 12 / fx_jpy_usd,
            notes=f"Assumes fx JPY→USD = {fx_jpy_usd}; adjust in presets if needed.",
        ),
    }
