"""
Application service: mutate-and-replace for one asset class.
Shared by the update scheduler (push delivery) and the snapshot use case
(pull delivery) so both paths run the exact same mutation.
"""

from market_pulse.application.services.market_data_store import MarketDataStore
from market_pulse.application.services.price_mutator import PriceMutator
from market_pulse.domain.entities.market_data import AssetClass, MarketRecord


class MarketRefresher:
    def __init__(self, store: MarketDataStore, mutator: PriceMutator) -> None:
        self._store = store
        self._mutator = mutator

    def refresh(self, asset_class: AssetClass) -> tuple[MarketRecord, ...]:
        """Replace the collection of *asset_class* with its mutated copy.

        News is static: refreshing it returns the current snapshot untouched.
        """
        collection = self._store.collection(asset_class)
        if not asset_class.mutable:
            return collection.snapshot()
        return collection.replace(self._mutator.mutate_all(collection.snapshot()))
