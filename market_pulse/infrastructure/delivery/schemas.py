"""
Wire schemas for the HTTP and WebSocket surfaces.

Domain entities stay snake_case dataclasses; the dashboard expects camelCase
JSON with ISO-8601 timestamps, which is owned here.
"""

import math
from datetime import datetime
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from market_pulse.domain.entities.market_data import AssetClass, MarketRecord


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_serializer("change_percent", when_used="json", check_fields=False)
    def _finite_percent(self, value: float) -> Optional[float]:
        # a zero base yields inf/nan, which strict JSON cannot carry
        return value if math.isfinite(value) else None


class EquitySchema(WireModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: int
    last_updated: datetime


class MarketIndexSchema(WireModel):
    symbol: str
    name: str
    value: float
    change: float
    change_percent: float
    region: str
    last_updated: datetime


class CurrencyPairSchema(WireModel):
    symbol: str
    from_currency: str
    to_currency: str
    rate: float
    change: float
    change_percent: float
    last_updated: datetime


class CryptoAssetSchema(WireModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    market_cap: int
    volume: int
    supply: int
    last_updated: datetime


class NewsItemSchema(WireModel):
    id: str
    title: str
    summary: str
    source: str
    url: str
    image_url: Optional[str] = None
    published_at: datetime
    related_symbols: Optional[list[str]] = None


class ErrorResponse(BaseModel):
    error: str


class EventFrame(BaseModel):
    """One WebSocket frame: {"event": <name>, "data": <payload>}."""

    model_config = ConfigDict(ser_json_inf_nan="null")

    event: str
    data: Any


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str
    mode: str


SCHEMAS: dict[AssetClass, type[WireModel]] = {
    AssetClass.STOCKS: EquitySchema,
    AssetClass.INDICES: MarketIndexSchema,
    AssetClass.CURRENCIES: CurrencyPairSchema,
    AssetClass.CRYPTOS: CryptoAssetSchema,
    AssetClass.NEWS: NewsItemSchema,
}


def serialize_record(asset_class: AssetClass, record: MarketRecord) -> dict[str, Any]:
    """JSON-ready camelCase dict; optional news fields are omitted when absent."""
    return SCHEMAS[asset_class].model_validate(record).model_dump(
        mode="json",
        by_alias=True,
        exclude_none=asset_class is AssetClass.NEWS,
    )


def serialize_snapshot(
    asset_class: AssetClass, snapshot: Sequence[MarketRecord]
) -> list[dict[str, Any]]:
    return [serialize_record(asset_class, record) for record in snapshot]


def encode_frame(event: str, data: Any) -> str:
    """Strict JSON text for one frame; non-finite floats become null."""
    return EventFrame(event=event, data=data).model_dump_json()
