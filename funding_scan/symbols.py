"""Symbol format registry.

Maps a base asset to each venue's native symbol and parses native symbols
back into a canonical base/quote pair.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SUPPORTED_ASSETS: tuple[str, ...] = ("BTC", "ETH", "SOL", "HYPE")
SUPPORTED_EXCHANGES: tuple[str, ...] = (
    "binance",
    "bybit",
    "hyperliquid",
    "lighter",
    "extended",
    "aster",
)

# Venues keyed by bare base asset settle against this quote
BARE_BASE_QUOTE = "USD"

_USDT_PATTERN = re.compile(r"^([A-Z]+)USDT$")


@dataclass(frozen=True)
class SymbolPair:
    base: str
    quote: str


SYMBOL_FORMATS: dict[str, Callable[[str], str]] = {
    "binance": lambda base: f"{base}USDT",
    "bybit": lambda base: f"{base}USDT",
    "aster": lambda base: f"{base}USDT",
    "hyperliquid": lambda base: base,
    "lighter": lambda base: base,
    "extended": lambda base: f"{base}-USD",
}


def _build_known_symbols() -> dict[str, dict[str, SymbolPair]]:
    quotes = {
        "binance": "USDT",
        "bybit": "USDT",
        "aster": "USDT",
        "hyperliquid": BARE_BASE_QUOTE,
        "lighter": BARE_BASE_QUOTE,
        "extended": "USD",
    }
    return {
        exchange_id: {
            formatter(asset): SymbolPair(base=asset, quote=quotes[exchange_id])
            for asset in SUPPORTED_ASSETS
        }
        for exchange_id, formatter in SYMBOL_FORMATS.items()
    }


# exchange_id -> native symbol -> pair, for every supported asset
KNOWN_SYMBOLS: dict[str, dict[str, SymbolPair]] = _build_known_symbols()


def get_symbol_for_exchange(base: str, exchange_id: str) -> str:
    """Format the venue-native symbol for a base asset.

    Unknown venues fall back to the Binance-style ``BASEUSDT`` format.
    """
    formatter = SYMBOL_FORMATS.get(exchange_id)
    if formatter is None:
        return f"{base}USDT"
    return formatter(base)


def normalize_symbol(raw_symbol: str, exchange_id: str) -> SymbolPair | None:
    """Parse a venue-native symbol into a canonical pair.

    Lookup order: known-symbol table, venue fallback pattern, ``USDT`` suffix.
    Returns None when the symbol is not recognised; callers skip the asset.
    """
    normalized = raw_symbol.strip().upper()
    if not normalized:
        return None

    known = KNOWN_SYMBOLS.get(exchange_id, {}).get(normalized)
    if known is not None:
        return known

    if exchange_id == "extended" and "-" in normalized:
        base, _, quote = normalized.partition("-")
        if base and quote:
            return SymbolPair(base=base, quote=quote)
        return None

    if exchange_id in ("hyperliquid", "lighter"):
        return SymbolPair(base=normalized, quote=BARE_BASE_QUOTE)

    match = _USDT_PATTERN.match(normalized)
    if match:
        return SymbolPair(base=match.group(1), quote="USDT")

    logger.debug(f"Unrecognized symbol {raw_symbol!r} for {exchange_id}")
    return None
