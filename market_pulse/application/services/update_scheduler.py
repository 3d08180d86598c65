"""
Application service: periodic refresh of every mutable asset class.

One independent timer per asset class, each on its own fixed cadence.
A tick mutates the class collection and hands the new snapshot to the
injected ISnapshotPublisher. There is no backpressure or skip-if-busy:
if delivery overruns, the next tick fires as soon as the loop allows.
"""

import asyncio
from typing import Awaitable, Callable, Mapping, Optional

from loguru import logger

from market_pulse.application.services.market_refresher import MarketRefresher
from market_pulse.domain.entities.market_data import AssetClass
from market_pulse.domain.ports.snapshot_publisher_port import ISnapshotPublisher

DEFAULT_INTERVALS: dict[AssetClass, float] = {
    AssetClass.STOCKS: 3.0,
    AssetClass.INDICES: 5.0,
    AssetClass.CURRENCIES: 7.0,
    AssetClass.CRYPTOS: 4.0,
}


class PeriodicTask:
    """Runs an async callback every *interval* seconds on the running loop."""

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], Awaitable[None]],
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval for {name!r} must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self._callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            deadline += self.interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            try:
                await self._callback()
            except Exception:
                logger.exception(f"Periodic task {self.name!r} failed; keeping schedule")


class UpdateScheduler:
    def __init__(
        self,
        refresher: MarketRefresher,
        publisher: ISnapshotPublisher,
        intervals: Optional[Mapping[AssetClass, float]] = None,
    ) -> None:
        self._refresher = refresher
        self._publisher = publisher
        intervals = dict(DEFAULT_INTERVALS if intervals is None else intervals)
        static = [asset_class.value for asset_class in intervals if not asset_class.mutable]
        if static:
            raise ValueError(f"static asset classes cannot be scheduled: {static}")
        self._tasks = {
            asset_class: PeriodicTask(
                f"{asset_class.value}-updater",
                interval,
                self._make_callback(asset_class),
            )
            for asset_class, interval in intervals.items()
        }

    @property
    def running(self) -> bool:
        return any(task.running for task in self._tasks.values())

    @property
    def intervals(self) -> dict[AssetClass, float]:
        return {asset_class: task.interval for asset_class, task in self._tasks.items()}

    def _make_callback(self, asset_class: AssetClass) -> Callable[[], Awaitable[None]]:
        async def callback() -> None:
            await self.tick(asset_class)

        return callback

    async def tick(self, asset_class: AssetClass) -> None:
        """Refresh *asset_class* once and publish the resulting snapshot."""
        snapshot = self._refresher.refresh(asset_class)
        await self._publisher.publish(asset_class, snapshot)

    def start(self) -> None:
        for task in self._tasks.values():
            task.start()
        logger.info(
            "Update scheduler started: "
            + ", ".join(f"{a.value} every {t.interval:g}s" for a, t in self._tasks.items())
        )

    async def stop(self) -> None:
        for task in self._tasks.values():
            await task.stop()
        logger.info("Update scheduler stopped")
