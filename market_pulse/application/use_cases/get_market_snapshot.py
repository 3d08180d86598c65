"""
Use-case: read the full snapshot of one asset class.
Depends only on application services and domain entities — no infrastructure imports.

With refresh_on_read the collection is mutated once before it is returned
(pull delivery). Overlapping requests race on the shared collection and the
last write wins.
"""

from market_pulse.application.services.market_data_store import MarketDataStore
from market_pulse.application.services.market_refresher import MarketRefresher
from market_pulse.domain.entities.market_data import AssetClass, MarketRecord


class GetMarketSnapshotUseCase:
    def __init__(
        self,
        store: MarketDataStore,
        refresher: MarketRefresher,
        refresh_on_read: bool = False,
    ) -> None:
        self._store = store
        self._refresher = refresher
        self.refresh_on_read = refresh_on_read

    def execute(self, asset_class: AssetClass) -> tuple[MarketRecord, ...]:
        if self.refresh_on_read:
            return self._refresher.refresh(asset_class)
        return self._store.snapshot(asset_class)
