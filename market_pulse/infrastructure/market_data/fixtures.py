"""
Static seed fixtures for the mock market dataset.

The values below are what a freshly started process serves before the
first refresh. Only last_updated (and news published_at) depend on the
seeding instant.
"""

from datetime import datetime, timedelta
from typing import Iterable

from market_pulse.domain.entities.market_data import (
    AssetClass,
    CryptoAsset,
    CurrencyPair,
    Equity,
    MarketIndex,
    MarketRecord,
    NewsItem,
)

STOCKS = [
    # symbol, name, price, change, change %, volume, market cap
    ("AAPL", "Apple Inc.", 187.32, 1.28, 0.69, 58394210, 2920000000000),
    ("MSFT", "Microsoft Corp.", 402.65, 3.71, 0.93, 22154780, 2990000000000),
    ("GOOGL", "Alphabet Inc.", 157.95, -0.63, -0.40, 18729340, 1980000000000),
    ("AMZN", "Amazon.com Inc.", 179.83, 1.02, 0.57, 27194600, 1870000000000),
    ("NVDA", "NVIDIA Corp.", 950.02, 18.75, 2.01, 42638210, 2340000000000),
    ("TSLA", "Tesla Inc.", 237.47, -3.25, -1.35, 67129580, 756000000000),
    ("META", "Meta Platforms Inc.", 474.99, 5.12, 1.09, 15283940, 1215000000000),
    ("V", "Visa Inc.", 267.80, -1.05, -0.39, 8943760, 548000000000),
]

INDICES = [
    # symbol, name, value, change, change %, region
    ("SPX", "S&P 500", 5123.41, 34.85, 0.68, "United States"),
    ("DJI", "Dow Jones", 38239.98, 125.68, 0.33, "United States"),
    ("COMP", "NASDAQ", 16780.30, 183.05, 1.10, "United States"),
    ("N225", "Nikkei 225", 38400.00, -156.34, -0.41, "Japan"),
    ("FTSE", "FTSE 100", 8127.35, 54.32, 0.67, "United Kingdom"),
    ("DAX", "DAX", 17850.50, -23.45, -0.13, "Germany"),
]

CURRENCIES = [
    # from, to, rate, change, change %
    ("EUR", "USD", 1.0834, 0.0023, 0.21),
    ("USD", "JPY", 151.59, -0.43, -0.28),
    ("GBP", "USD", 1.2718, 0.0035, 0.28),
    ("USD", "CAD", 1.3642, -0.0015, -0.11),
    ("USD", "CHF", 0.9037, -0.0028, -0.31),
    ("AUD", "USD", 0.6628, 0.0014, 0.21),
]

CRYPTOS = [
    # symbol, name, price, change, change %, market cap, volume, supply
    ("BTC", "Bitcoin", 65841.25, 1203.45, 1.86, 1293000000000, 28740000000, 19637500),
    ("ETH", "Ethereum", 3487.92, 62.34, 1.82, 418700000000, 14280000000, 120100000),
    ("BNB", "Binance Coin", 567.39, -12.86, -2.22, 87900000000, 2945000000, 155000000),
    ("SOL", "Solana", 143.28, 8.57, 6.36, 61500000000, 4720000000, 429700000),
    ("XRP", "XRP", 0.52, -0.008, -1.51, 28700000000, 1890000000, 55200000000),
]

NEWS = [
    {
        "id": "1",
        "title": "Federal Reserve Signals Potential Rate Cuts Later This Year",
        "summary": (
            "The Federal Reserve indicated it may begin cutting interest rates later this "
            "year if inflation continues to moderate, according to minutes from the recent "
            "FOMC meeting."
        ),
        "source": "Financial Times",
        "hours_ago": 2,
        "related_symbols": ("SPX", "DJI"),
    },
    {
        "id": "2",
        "title": "Apple Announces New AI Features for iPhone",
        "summary": (
            "Apple unveiled new AI capabilities for the upcoming iPhone models at its annual "
            "developer conference, highlighting privacy-focused on-device processing."
        ),
        "source": "Tech Insider",
        "image_url": (
            "https://images.unsplash.com/photo-1611186871348-b1ce696e52c9"
            "?q=80&w=1470&auto=format&fit=crop"
        ),
        "hours_ago": 5,
        "related_symbols": ("AAPL",),
    },
    {
        "id": "3",
        "title": "NVIDIA Surpasses $2 Trillion Market Cap on AI Chip Demand",
        "summary": (
            "NVIDIA's stock reached new heights, pushing its market cap above $2 trillion as "
            "demand for AI chips continues to exceed expectations."
        ),
        "source": "Market Watch",
        "hours_ago": 8,
        "related_symbols": ("NVDA",),
    },
    {
        "id": "4",
        "title": "Oil Prices Drop Amid Concerns of Slowing Global Demand",
        "summary": (
            "Crude oil prices fell more than 2% on Thursday as investors weighed reports "
            "suggesting slower-than-expected global economic growth."
        ),
        "source": "Energy Report",
        "hours_ago": 10,
    },
    {
        "id": "5",
        "title": "Tesla Deliveries Beat Estimates Despite EV Market Slowdown",
        "summary": (
            "Tesla reported quarterly deliveries that exceeded analyst expectations, bucking "
            "the trend of a broader slowdown in electric vehicle sales."
        ),
        "source": "Auto Insights",
        "image_url": (
            "https://images.unsplash.com/photo-1617788138017-80ad40651399"
            "?q=80&w=1632&auto=format&fit=crop"
        ),
        "hours_ago": 12,
        "related_symbols": ("TSLA",),
    },
]


def _stocks(now: datetime) -> Iterable[Equity]:
    for symbol, name, price, change, percent, volume, market_cap in STOCKS:
        yield Equity(symbol, name, price, change, percent, volume, market_cap, now)


def _indices(now: datetime) -> Iterable[MarketIndex]:
    for symbol, name, value, change, percent, region in INDICES:
        yield MarketIndex(symbol, name, value, change, percent, region, now)


def _currencies(now: datetime) -> Iterable[CurrencyPair]:
    for base, quote, rate, change, percent in CURRENCIES:
        yield CurrencyPair(f"{base}/{quote}", base, quote, rate, change, percent, now)


def _cryptos(now: datetime) -> Iterable[CryptoAsset]:
    for symbol, name, price, change, percent, market_cap, volume, supply in CRYPTOS:
        yield CryptoAsset(symbol, name, price, change, percent, market_cap, volume, supply, now)


def _news(now: datetime) -> Iterable[NewsItem]:
    for item in NEWS:
        yield NewsItem(
            id=item["id"],
            title=item["title"],
            summary=item["summary"],
            source=item["source"],
            url="#",
            published_at=now - timedelta(hours=item["hours_ago"]),
            image_url=item.get("image_url"),
            related_symbols=item.get("related_symbols"),
        )


def seed_market_data(now: datetime) -> dict[AssetClass, tuple[MarketRecord, ...]]:
    """Build every fixture collection, stamped with *now*."""
    return {
        AssetClass.STOCKS: tuple(_stocks(now)),
        AssetClass.INDICES: tuple(_indices(now)),
        AssetClass.CURRENCIES: tuple(_currencies(now)),
        AssetClass.CRYPTOS: tuple(_cryptos(now)),
        AssetClass.NEWS: tuple(_news(now)),
    }
