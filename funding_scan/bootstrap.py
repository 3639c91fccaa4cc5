"""Bootstrap function for setting up the funding scan polling scheduler."""

import logging
from collections.abc import Awaitable, Callable, Mapping

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from funding_scan.aggregation import AggregatedFunding, get_aggregated_funding
from funding_scan.exchanges import BaseExchange

logger = logging.getLogger(__name__)

SnapshotHandler = Callable[[AggregatedFunding], Awaitable[None] | None]


class FundingPoller:
    """Runs one aggregation per tick and hands the snapshot to a handler.

    Nothing is carried over between ticks; each snapshot is built from scratch.
    """

    def __init__(
        self,
        assets: list[str],
        exchanges: list[str],
        adapters: Mapping[str, BaseExchange],
        on_snapshot: SnapshotHandler,
        venue_timeout: float | None,
    ) -> None:
        self._assets = assets
        self._exchanges = exchanges
        self._adapters = adapters
        self._on_snapshot = on_snapshot
        self._venue_timeout = venue_timeout

    async def poll(self) -> None:
        try:
            result = await get_aggregated_funding(
                self._assets,
                self._exchanges,
                adapters=self._adapters,
                timeout=self._venue_timeout,
            )
        except Exception as e:
            logger.error(f"Funding poll failed: {e}", exc_info=True)
            return

        outcome = self._on_snapshot(result)
        if outcome is not None:
            await outcome


def bootstrap(
    poller: FundingPoller,
    interval_seconds: int,
) -> AsyncIOScheduler:
    """Set up a scheduler that polls immediately and then every ``interval_seconds``.

    Returns:
        Configured AsyncIOScheduler ready to start
    """
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Skip missed runs if overlapping
            "max_instances": 1,  # Only one poll at a time
            "misfire_grace_time": interval_seconds,
        }
    )

    scheduler.add_job(
        poller.poll,
        trigger=OrTrigger(
            [
                DateTrigger(),  # Run immediately on start
                IntervalTrigger(seconds=interval_seconds),
            ]
        ),
        name="funding_poll",
    )
    logger.info(f"Registered funding poll (immediate + every {interval_seconds}s)")

    return scheduler
