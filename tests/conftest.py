"""Pytest configuration for doubloon-powah tests."""

import pytest
from fakes import DBL, MASTERCHEF, OWNER, POOL_ID, SUSHI_PAIR, UNI_PAIR, USDC, FakeMasterChef, FakePair

from doubloon_powah.core import SourceRegistry, VotingPowerAggregator
from doubloon_powah.escrow import Ledger


def pytest_configure(config):
    """Disable ape plugin during tests."""
    # Unregister ape pytest plugin to avoid network connection issues
    config.pluginmanager.set_blocked("ape_test")


@pytest.fixture
def ledger():
    return Ledger(timestamp=1_700_000_000)


@pytest.fixture
def dbl(ledger):
    return ledger.deploy_token(DBL, "Doubloon", "DBL", 18)


@pytest.fixture
def usdc(ledger):
    return ledger.deploy_token(USDC, "USD Coin", "USDC", 6)


@pytest.fixture
def uni_pair():
    return FakePair(UNI_PAIR)


@pytest.fixture
def sushi_pair():
    return FakePair(SUSHI_PAIR)


@pytest.fixture
def masterchef():
    return FakeMasterChef(MASTERCHEF)


@pytest.fixture
def registry(masterchef):
    return SourceRegistry(owner=OWNER, staking_protocol=masterchef, staking_pool_id=POOL_ID)


@pytest.fixture
def aggregator(dbl, registry, uni_pair, sushi_pair):
    return VotingPowerAggregator(token=dbl, registry=registry, venue_a=uni_pair, venue_b=sushi_pair)
