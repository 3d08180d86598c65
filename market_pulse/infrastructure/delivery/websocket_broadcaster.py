"""
Infrastructure adapter: FastAPI/Starlette WebSockets → ISnapshotPublisher.

Frames are strict JSON text {"event": <name>, "data": <payload>}. A new listener
receives one full snapshot of every asset class (catch-up) before it is
registered for the incremental broadcasts driven by the update scheduler.
"""

import asyncio
import json
from typing import Sequence

from fastapi import WebSocket
from loguru import logger

from market_pulse.application.services.market_data_store import MarketDataStore
from market_pulse.domain.entities.market_data import AssetClass, MarketRecord
from market_pulse.domain.ports.snapshot_publisher_port import ISnapshotPublisher
from market_pulse.infrastructure.delivery.schemas import (
    encode_frame,
    serialize_record,
    serialize_snapshot,
)

SUBSCRIBE_STOCK = "subscribe-stock"
STOCK_UPDATE = "stock-update"
ERROR = "error"


class WebSocketBroadcaster(ISnapshotPublisher):
    """Fans refreshed snapshots out to every connected dashboard."""

    def __init__(self, store: MarketDataStore) -> None:
        self._store = store
        self._listeners: set[WebSocket] = set()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        for asset_class, snapshot in self._store.snapshots():
            await websocket.send_text(
                encode_frame(asset_class.event_name, serialize_snapshot(asset_class, snapshot))
            )
        self._listeners.add(websocket)
        logger.info(f"Listener connected ({self.listener_count} total)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._listeners:
            self._listeners.discard(websocket)
            logger.info(f"Listener disconnected ({self.listener_count} total)")

    async def publish(self, asset_class: AssetClass, snapshot: Sequence[MarketRecord]) -> None:
        if not self._listeners:
            return
        payload = encode_frame(asset_class.event_name, serialize_snapshot(asset_class, snapshot))
        listeners = list(self._listeners)
        results = await asyncio.gather(
            *(listener.send_text(payload) for listener in listeners),
            return_exceptions=True,
        )
        for listener, result in zip(listeners, results):
            if isinstance(result, Exception):
                logger.warning(f"Dropping listener after failed {asset_class.event_name}: {result!r}")
                self._listeners.discard(listener)

    async def handle_message(self, websocket: WebSocket, raw: str) -> None:
        """Answer one client frame; only subscribe-stock is understood."""
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            await websocket.send_text(encode_frame(ERROR, {"error": "Malformed message"}))
            return
        if not isinstance(message, dict):
            await websocket.send_text(encode_frame(ERROR, {"error": "Malformed message"}))
            return

        event = message.get("event")
        if event != SUBSCRIBE_STOCK:
            await websocket.send_text(encode_frame(ERROR, {"error": f"Unknown event: {event}"}))
            return

        symbol = message.get("data")
        stock = (
            self._store.collection(AssetClass.STOCKS).find(symbol.strip())
            if isinstance(symbol, str) and symbol.strip()
            else None
        )
        if stock is None:
            logger.debug(f"subscribe-stock for unknown symbol {symbol!r}")
            await websocket.send_text(encode_frame(ERROR, {"error": "Stock not found"}))
            return
        await websocket.send_text(
            encode_frame(STOCK_UPDATE, serialize_record(AssetClass.STOCKS, stock))
        )
