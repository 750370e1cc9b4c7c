"""Test helpers module for shared test utilities.

- constants: Token, account and pool addresses
- factories: Pool snapshot and route factory functions
"""

from tests.helpers.constants import (
    ADAI,
    COMPOSABLE_POOL,
    COMPOSABLE_POOL_ID,
    DAI,
    EURS,
    FX_POOL,
    FX_POOL_ID,
    GYRO_POOL,
    GYRO_POOL_ID,
    LINEAR_POOL,
    LINEAR_POOL_ID,
    ONE,
    RECIPIENT,
    SENDER,
    STABLE_POOL,
    STABLE_POOL_ID,
    USDC,
    USDT,
    WEIGHTED_POOL,
    WEIGHTED_POOL_ID,
    WETH,
    WSTETH,
)
from tests.helpers.factories import (
    make_composable_stable_pool,
    make_fx_pool,
    make_gyro2_pool,
    make_gyro3_pool,
    make_linear_pool,
    make_route,
    make_stable_pool,
    make_weighted_pool,
)

__all__ = [
    # Tokens and accounts
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WSTETH",
    "ADAI",
    "EURS",
    "SENDER",
    "RECIPIENT",
    "ONE",
    # Pools
    "WEIGHTED_POOL",
    "WEIGHTED_POOL_ID",
    "STABLE_POOL",
    "STABLE_POOL_ID",
    "COMPOSABLE_POOL",
    "COMPOSABLE_POOL_ID",
    "LINEAR_POOL",
    "LINEAR_POOL_ID",
    "GYRO_POOL",
    "GYRO_POOL_ID",
    "FX_POOL",
    "FX_POOL_ID",
    # Factories
    "make_weighted_pool",
    "make_stable_pool",
    "make_composable_stable_pool",
    "make_linear_pool",
    "make_gyro2_pool",
    "make_gyro3_pool",
    "make_fx_pool",
    "make_route",
]
