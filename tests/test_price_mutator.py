"""Unit tests for the price mutator"""

import dataclasses
import math

import pytest

from market_pulse.application.services.price_mutator import (
    PriceMutator,
    change_percent,
    round_half_away,
)
from market_pulse.domain.entities.market_data import AssetClass, NewsItem
from market_pulse.infrastructure.market_data.fixtures import seed_market_data
from market_pulse.infrastructure.randomness.seeded_random import SeededRandomSource
from tests.factories import SEED_TIME, TICK_TIME, FixedClock, FixedRandomSource, RecordFactory


def mutator(*draws: float) -> PriceMutator:
    return PriceMutator(FixedRandomSource(*draws), FixedClock())


def test_equity_scenario_a():
    """0.75 draw on AAPL: delta = 0.25 * 187.32 * 0.01 = 0.4683"""
    stock = RecordFactory.equity(price=187.32, change=1.28)

    result = mutator(0.75).mutate(stock)

    assert result.price == 187.79
    assert result.change == 1.75
    # 1.7483 / (187.7883 - 1.7483) * 100
    assert result.change_percent == 0.94
    assert result.last_updated == TICK_TIME


def test_index_uses_value_and_index_volatility():
    index = RecordFactory.index(value=5123.41, change=34.85)

    result = mutator(0.0).mutate(index)

    # delta = -0.5 * 5123.41 * 0.0015 = -3.8425575
    assert result.value == 5119.57
    assert result.change == 31.01
    assert result.change_percent == 0.61


def test_currency_rounds_rate_and_change_to_four_decimals():
    pair = RecordFactory.currency(rate=1.0834, change=0.0023)

    result = mutator(0.75).mutate(pair)

    # delta = 0.25 * 1.0834 * 0.0008 = 0.00021668
    assert result.rate == 1.0836
    assert result.change == 0.0025
    assert result.change_percent == 0.23


def test_large_cap_crypto_uses_lower_volatility():
    btc = RecordFactory.crypto(symbol="BTC", price=65841.25, change=1203.45)

    result = mutator(0.75).mutate(btc)

    # delta = 0.25 * 65841.25 * 0.005 = 82.3015625
    assert result.price == 65923.55
    assert result.change == 1285.75
    assert result.change_percent == round(change_percent(65923.5515625, 1285.7515625), 2)


def test_small_cap_crypto_uses_higher_volatility():
    sol = RecordFactory.crypto(symbol="SOL", price=143.28, change=8.57)

    result = mutator(0.75).mutate(sol)

    # delta = 0.25 * 143.28 * 0.012 = 0.42984
    assert result.price == 143.71
    assert result.change == 9.0


def test_sub_dollar_crypto_keeps_four_decimals():
    xrp = RecordFactory.crypto(symbol="XRP", price=0.52, change=-0.008)

    result = mutator(0.75).mutate(xrp)

    # delta = 0.25 * 0.52 * 0.012 = 0.00156
    assert result.price == 0.5216
    assert result.change == -0.0064
    assert result.change_percent == -1.22


def test_change_accumulates_across_ticks():
    stock = RecordFactory.equity(price=100.0, change=0.0)
    price_mutator = mutator(0.75, 0.75)

    first = price_mutator.mutate(stock)
    second = price_mutator.mutate(first)

    assert first.change == 0.25
    # second delta = 0.25 * 100.25 * 0.01 = 0.250625
    assert second.change == 0.5
    assert second.price == 100.5


def test_price_is_floored_at_positive_epsilon():
    stock = RecordFactory.equity(price=0.01, change=0.0)

    result = mutator(0.0).mutate(stock)

    assert result.price == 0.01
    assert result.price > 0


def test_sub_dollar_crypto_floor_survives_rounding():
    """Four-decimal rounding must not take a tiny price to zero"""
    shib = RecordFactory.crypto(symbol="SHIB", price=0.00004, change=0.0)
    price_mutator = mutator(0.25)

    first = price_mutator.mutate(shib)
    second = price_mutator.mutate(first)

    assert first.price == 0.000001
    assert second.price == 0.000001
    assert second.price > 0


@pytest.mark.parametrize(
    "value,digits,expected",
    [
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (2.5, 0, 3.0),
        (187.7883, 2, 187.79),
    ],
)
def test_rounding_takes_halves_away_from_zero(value, digits, expected):
    assert round_half_away(value, digits) == expected


def test_rounding_passes_non_finite_through():
    assert math.isinf(round_half_away(float("inf"), 2))
    assert math.isnan(round_half_away(float("nan"), 2))


def test_exact_half_change_rounds_away_from_zero():
    # 0.5 draw leaves the change at exactly 0.125
    stock = RecordFactory.equity(price=100.0, change=0.125)

    result = mutator(0.5).mutate(stock)

    assert result.change == 0.13


def test_zero_denominator_is_not_corrected():
    """Known sharp edge: new value equal to accumulated change"""
    stock = RecordFactory.equity(price=1.0, change=1.0)

    result = mutator(0.5).mutate(stock)

    assert result.price == 1.0
    assert math.isinf(result.change_percent)


def test_percent_inverts_sign_when_change_exceeds_value():
    """Known sharp edge: previous value implied by the change goes negative"""
    stock = RecordFactory.equity(price=1.0, change=2.0)

    result = mutator(0.5).mutate(stock)

    assert result.change_percent == -200.0


def test_news_is_rejected():
    item = NewsItem("1", "t", "s", "src", "#", SEED_TIME)

    with pytest.raises(TypeError):
        mutator(0.5).mutate(item)


@pytest.mark.parametrize(
    "asset_class,descriptive",
    [
        (AssetClass.STOCKS, ("symbol", "name", "volume", "market_cap")),
        (AssetClass.INDICES, ("symbol", "name", "region")),
        (AssetClass.CURRENCIES, ("symbol", "from_currency", "to_currency")),
        (AssetClass.CRYPTOS, ("symbol", "name", "market_cap", "volume", "supply")),
    ],
)
def test_mutation_preserves_shape(asset_class, descriptive):
    records = seed_market_data(SEED_TIME)[asset_class]

    mutated = mutator(0.1, 0.9, 0.3).mutate_all(records)

    assert len(mutated) == len(records)
    for before, after in zip(records, mutated):
        assert type(after) is type(before)
        for name in descriptive:
            assert getattr(after, name) == getattr(before, name)
        assert after.last_updated == TICK_TIME
        assert before.last_updated == SEED_TIME


def test_mutate_all_draws_once_per_record():
    random_source = FixedRandomSource(0.5)
    records = seed_market_data(SEED_TIME)[AssetClass.STOCKS]

    PriceMutator(random_source, FixedClock()).mutate_all(records)

    assert random_source.calls == len(records)


@pytest.mark.parametrize(
    "asset_class,field,max_volatility",
    [
        (AssetClass.STOCKS, "price", 0.01),
        (AssetClass.INDICES, "value", 0.0015),
        (AssetClass.CURRENCIES, "rate", 0.0008),
        (AssetClass.CRYPTOS, "price", 0.012),
    ],
)
def test_perturbation_stays_within_volatility_band(asset_class, field, max_volatility):
    price_mutator = PriceMutator(SeededRandomSource(42), FixedClock())
    records = seed_market_data(SEED_TIME)[asset_class]

    for _ in range(200):
        mutated = price_mutator.mutate_all(records)
        for before, after in zip(records, mutated):
            old, new = getattr(before, field), getattr(after, field)
            assert new > 0
            # half-width of the band plus rounding slack
            assert abs(new - old) <= old * max_volatility / 2 + 0.0051
        records = mutated


def test_record_is_a_new_object():
    stock = RecordFactory.equity()

    result = mutator(0.75).mutate(stock)

    assert result is not stock
    assert stock.price == 187.32
    assert dataclasses.replace(result, price=stock.price, change=stock.change,
                               change_percent=stock.change_percent,
                               last_updated=stock.last_updated) == stock
