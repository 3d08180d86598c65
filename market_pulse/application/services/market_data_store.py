"""
Application service: in-memory state holders, one per asset class.

Each collection is stored as an immutable tuple and only ever replaced
wholesale, so a reader always sees a fully-formed snapshot.
"""

from typing import Iterable, Mapping, Optional

from market_pulse.domain.entities.market_data import AssetClass, MarketRecord, record_key


class AssetCollection:
    def __init__(self, asset_class: AssetClass, records: Iterable[MarketRecord]) -> None:
        self.asset_class = asset_class
        self._records: tuple[MarketRecord, ...] = ()
        self.replace(records)

    def snapshot(self) -> tuple[MarketRecord, ...]:
        return self._records

    def replace(self, records: Iterable[MarketRecord]) -> tuple[MarketRecord, ...]:
        """Swap in a new snapshot.

        Raises:
            ValueError: if two records share a symbol/id.
        """
        records = tuple(records)
        keys = [record_key(record) for record in records]
        if len(set(keys)) != len(keys):
            raise ValueError(f"duplicate keys in {self.asset_class.value} collection")
        self._records = records
        return records

    def find(self, key: str) -> Optional[MarketRecord]:
        """Case-insensitive lookup by symbol (or id for news)."""
        wanted = key.upper()
        return next(
            (record for record in self._records if record_key(record).upper() == wanted),
            None,
        )

    def __len__(self) -> int:
        return len(self._records)


class MarketDataStore:
    def __init__(self, seed: Mapping[AssetClass, Iterable[MarketRecord]]) -> None:
        self._collections = {
            asset_class: AssetCollection(asset_class, seed.get(asset_class, ()))
            for asset_class in AssetClass
        }

    def collection(self, asset_class: AssetClass) -> AssetCollection:
        return self._collections[asset_class]

    def snapshot(self, asset_class: AssetClass) -> tuple[MarketRecord, ...]:
        return self._collections[asset_class].snapshot()

    def snapshots(self) -> list[tuple[AssetClass, tuple[MarketRecord, ...]]]:
        """Current snapshot of every asset class, in catch-up order."""
        return [(asset_class, self.snapshot(asset_class)) for asset_class in AssetClass]
