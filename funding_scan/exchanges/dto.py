"""Data Transfer Objects for exchange adapters."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FundingPoint:
    ts: int  # settlement time, ms since epoch
    rate: float  # Decimal format: 0.0001 = 0.01%

    def to_dict(self) -> dict[str, Any]:
        return {"ts": self.ts, "rate": self.rate}


@dataclass
class FundingTicker:
    id: str
    exchange: str
    base: str
    quote: str
    symbol_raw: str
    funding_period_hours: float
    apr_signed: float
    ts: str
    source: str
    last_funding_rate: float | None = None
    next_funding_rate: float | None = None
    current_est_rate: float | None = None
    next_funding_time: str | None = None
    history: list[FundingPoint] = field(default_factory=list)
    stale: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with camelCase keys."""
        return {
            "id": self.id,
            "exchange": self.exchange,
            "base": self.base,
            "quote": self.quote,
            "symbolRaw": self.symbol_raw,
            "fundingPeriodHours": self.funding_period_hours,
            "lastFundingRate": self.last_funding_rate,
            "nextFundingRate": self.next_funding_rate,
            "currentEstRate": self.current_est_rate,
            "aprSigned": self.apr_signed,
            "nextFundingTime": self.next_funding_time,
            "ts": self.ts,
            "history": [point.to_dict() for point in self.history],
            "source": self.source,
            "stale": self.stale,
        }
