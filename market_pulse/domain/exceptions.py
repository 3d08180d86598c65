"""
Domain exceptions.
Boundary lookups are the only operations that report errors; mutation is
total over its input domain.
"""


class MarketDataError(Exception):
    """Base class for market data errors."""


class SymbolNotFoundError(MarketDataError, LookupError):
    def __init__(self, symbol: str, asset_class: str = "stocks") -> None:
        self.symbol = symbol
        self.asset_class = asset_class
        super().__init__(f"Symbol {symbol!r} not found in {asset_class}")
