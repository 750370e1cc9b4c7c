"""Pytest configuration and fixtures."""

import pytest

from balancer_sdk.config import Network, NetworkConfig, get_network_config
from balancer_sdk.pools.snapshot import PoolSnapshot
from tests.helpers import (
    make_composable_stable_pool,
    make_fx_pool,
    make_gyro2_pool,
    make_linear_pool,
    make_stable_pool,
    make_weighted_pool,
)


@pytest.fixture(autouse=True)
def _mainnet_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the default network so tests don't depend on the environment."""
    monkeypatch.delenv("BALANCER_NETWORK", raising=False)


@pytest.fixture
def mainnet() -> NetworkConfig:
    """Mainnet addresses (Vault, WETH)."""
    return get_network_config(Network.MAINNET)


@pytest.fixture
def weighted_pool() -> PoolSnapshot:
    """Fee-less 50/50 WETH/DAI pool with 1000 of each and 2000 BPT."""
    return make_weighted_pool()


@pytest.fixture
def stable_pool() -> PoolSnapshot:
    """Balanced DAI/USDC/USDT pool with amp 100."""
    return make_stable_pool()


@pytest.fixture
def composable_pool() -> PoolSnapshot:
    """Balanced WETH/wstETH composable stable pool holding its own BPT."""
    return make_composable_stable_pool()


@pytest.fixture
def linear_pool() -> PoolSnapshot:
    """DAI/aDAI linear pool with its main balance between the targets."""
    return make_linear_pool()


@pytest.fixture
def gyro2_pool() -> PoolSnapshot:
    return make_gyro2_pool()


@pytest.fixture
def fx_pool() -> PoolSnapshot:
    return make_fx_pool()
