"""Pytest fixtures for the market data server tests"""

import pytest

from market_pulse.application.services.market_data_store import MarketDataStore
from market_pulse.application.services.market_refresher import MarketRefresher
from market_pulse.application.services.price_mutator import PriceMutator
from market_pulse.domain.entities.market_data import AssetClass
from market_pulse.infrastructure.config.settings import Settings
from market_pulse.infrastructure.market_data.fixtures import seed_market_data
from tests.factories import SEED_TIME, FixedClock, FixedRandomSource

# Long enough that no timer fires during a request/response test
QUIET_INTERVALS = {asset_class: 3600.0 for asset_class in AssetClass if asset_class.mutable}


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> MarketDataStore:
    return MarketDataStore(seed_market_data(SEED_TIME))


@pytest.fixture
def refresher(store, clock) -> MarketRefresher:
    return MarketRefresher(store, PriceMutator(FixedRandomSource(0.75), clock))


@pytest.fixture
def push_settings() -> Settings:
    return Settings(delivery_mode="push", intervals=dict(QUIET_INTERVALS))


@pytest.fixture
def pull_settings() -> Settings:
    return Settings(delivery_mode="pull", intervals=dict(QUIET_INTERVALS))
