"""
Domain entities for the mock market dataset.
Zero external dependencies — pure Python dataclasses only.

Every record is frozen: a mutation always produces a full replacement copy,
so readers never observe a half-updated record.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class AssetClass(str, Enum):
    STOCKS = "stocks"
    INDICES = "indices"
    CURRENCIES = "currencies"
    CRYPTOS = "cryptos"
    NEWS = "news"

    @property
    def event_name(self) -> str:
        """Push-channel event carrying a full snapshot of this class."""
        return f"{self.value}-update"

    @property
    def mutable(self) -> bool:
        return self is not AssetClass.NEWS


@dataclass(frozen=True)
class Equity:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: int
    last_updated: datetime


@dataclass(frozen=True)
class MarketIndex:
    symbol: str
    name: str
    value: float
    change: float
    change_percent: float
    region: str
    last_updated: datetime


@dataclass(frozen=True)
class CurrencyPair:
    symbol: str
    from_currency: str
    to_currency: str
    rate: float
    change: float
    change_percent: float
    last_updated: datetime


@dataclass(frozen=True)
class CryptoAsset:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    market_cap: int
    volume: int
    supply: int
    last_updated: datetime


@dataclass(frozen=True)
class NewsItem:
    id: str
    title: str
    summary: str
    source: str
    url: str
    published_at: datetime
    image_url: Optional[str] = None
    related_symbols: Optional[tuple[str, ...]] = None


PricedRecord = Union[Equity, MarketIndex, CurrencyPair, CryptoAsset]
MarketRecord = Union[Equity, MarketIndex, CurrencyPair, CryptoAsset, NewsItem]


def record_key(record: MarketRecord) -> str:
    """Unique key of a record within its collection (symbol, or id for news)."""
    if isinstance(record, NewsItem):
        return record.id
    return record.symbol
