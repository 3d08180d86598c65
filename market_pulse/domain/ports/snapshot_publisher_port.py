"""
Port (interface) for delivering refreshed snapshots to listeners.
Infrastructure adapters (e.g. WebSocketBroadcaster) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from market_pulse.domain.entities.market_data import AssetClass, MarketRecord


class ISnapshotPublisher(ABC):
    @abstractmethod
    async def publish(self, asset_class: AssetClass, snapshot: Sequence[MarketRecord]) -> None:
        """Deliver the full *snapshot* of *asset_class* to every connected listener."""
        ...
