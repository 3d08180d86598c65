"""
Use-case: look up a single equity by ticker symbol.
Depends only on Domain entities and the snapshot use-case — no infrastructure imports.
"""

from market_pulse.application.use_cases.get_market_snapshot import GetMarketSnapshotUseCase
from market_pulse.domain.entities.market_data import AssetClass, Equity
from market_pulse.domain.exceptions import SymbolNotFoundError


class GetStockUseCase:
    def __init__(self, snapshots: GetMarketSnapshotUseCase) -> None:
        self._snapshots = snapshots

    def execute(self, symbol: str) -> Equity:
        """Return the current record for *symbol* (case-insensitive).

        Raises:
            ValueError: if *symbol* is blank.
            SymbolNotFoundError: if no equity with that symbol is held.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        wanted = symbol.upper().strip()
        for stock in self._snapshots.execute(AssetClass.STOCKS):
            if stock.symbol.upper() == wanted:
                return stock
        raise SymbolNotFoundError(wanted, AssetClass.STOCKS.value)
