"""
Application service: random perturbation of market records.

Business decisions owned here:
  - Volatility factor per asset class (half-width of the perturbation as a
    fraction of the current value).
  - Positive floor and rounding precision per asset class.
  - The change-percent convention: change / (new_value - change) * 100,
    i.e. relative to the previous value implied by the running change.

The random source and the clock are injected; nothing here touches shared state.
"""

import dataclasses
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable

from market_pulse.domain.entities.market_data import (
    CryptoAsset,
    CurrencyPair,
    Equity,
    MarketIndex,
    PricedRecord,
)
from market_pulse.domain.ports.random_source_port import IRandomSource

PERCENT_PRECISION = 2
LARGE_CAP_CRYPTOS = frozenset({"BTC", "ETH"})


@dataclass(frozen=True)
class MutationProfile:
    """How one asset class is perturbed.

    value_field:  name of the primary value attribute (price, value or rate).
    volatility:   record -> volatility factor.
    floor:        smallest value the primary value may take.
    precision:    record (pre-mutation) -> decimals for value and change.
    """

    value_field: str
    volatility: Callable[[PricedRecord], float]
    floor: float
    precision: Callable[[PricedRecord], int]


def _crypto_volatility(record: CryptoAsset) -> float:
    return 0.005 if record.symbol in LARGE_CAP_CRYPTOS else 0.012


def _crypto_precision(record: CryptoAsset) -> int:
    return 4 if record.price < 1 else 2


PROFILES: dict[type, MutationProfile] = {
    Equity: MutationProfile("price", lambda _: 0.01, 0.01, lambda _: 2),
    MarketIndex: MutationProfile("value", lambda _: 0.0015, 0.01, lambda _: 2),
    CurrencyPair: MutationProfile("rate", lambda _: 0.0008, 0.0001, lambda _: 4),
    CryptoAsset: MutationProfile("price", _crypto_volatility, 0.000001, _crypto_precision),
}


def change_percent(value: float, change: float) -> float:
    """Percent change relative to the previous value (value - change).

    A zero denominator is not guarded: the result is inf or nan, matching
    the published behaviour of the feed.
    """
    base = value - change
    if base == 0:
        if change == 0:
            return float("nan")
        return float("inf") if change > 0 else float("-inf")
    return change / base * 100


def round_half_away(value: float, digits: int) -> float:
    """Round exact binary halves away from zero.

    Non-finite values pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PriceMutator:
    def __init__(
        self,
        random_source: IRandomSource,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._random = random_source
        self._clock = clock

    def mutate(self, record: PricedRecord) -> PricedRecord:
        """Return a perturbed copy of *record* with a refreshed timestamp.

        Raises:
            TypeError: if *record* has no mutation profile (e.g. a NewsItem).
        """
        profile = PROFILES.get(type(record))
        if profile is None:
            raise TypeError(f"{type(record).__name__} records are not mutable")

        value = getattr(record, profile.value_field)
        delta = (self._random.random() - 0.5) * (value * profile.volatility(record))
        new_value = max(value + delta, profile.floor)
        new_change = record.change + delta
        percent = change_percent(new_value, new_change)

        digits = profile.precision(record)
        return dataclasses.replace(
            record,
            **{
                profile.value_field: max(round_half_away(new_value, digits), profile.floor),
                "change": round_half_away(new_change, digits),
                "change_percent": round_half_away(percent, PERCENT_PRECISION),
                "last_updated": self._clock(),
            },
        )

    def mutate_all(self, records: Iterable[PricedRecord]) -> tuple[PricedRecord, ...]:
        return tuple(self.mutate(record) for record in records)
