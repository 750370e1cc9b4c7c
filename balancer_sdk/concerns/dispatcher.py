"""Pool type dispatcher.

Maps a pool type tag to its family's concerns. The set of tags is closed:
there is no runtime registration.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from balancer_sdk.config import NetworkConfig, default_network_config
from balancer_sdk.errors import UnsupportedPoolType
from balancer_sdk.pools.snapshot import PoolSnapshot, PoolType, SnapshotProvider

from .base import PoolConcerns
from .fx import fx_concerns
from .gyro import gyro_concerns
from .linear import linear_concerns
from .stable import (
    composable_stable_concerns,
    meta_stable_concerns,
    stable_concerns,
    stable_phantom_concerns,
)
from .weighted import weighted_concerns

logger = structlog.get_logger()

_FAMILIES: dict[PoolType, Callable[[NetworkConfig], PoolConcerns]] = {
    PoolType.WEIGHTED: weighted_concerns,
    PoolType.INVESTMENT: weighted_concerns,
    PoolType.LIQUIDITY_BOOTSTRAPPING: weighted_concerns,
    PoolType.STABLE: stable_concerns,
    PoolType.META_STABLE: meta_stable_concerns,
    PoolType.COMPOSABLE_STABLE: composable_stable_concerns,
    PoolType.STABLE_PHANTOM: stable_phantom_concerns,
    PoolType.LINEAR: linear_concerns,
    PoolType.AAVE_LINEAR: linear_concerns,
    PoolType.ERC4626_LINEAR: linear_concerns,
    PoolType.EULER_LINEAR: linear_concerns,
    PoolType.GEARBOX_LINEAR: linear_concerns,
    PoolType.YEARN_LINEAR: linear_concerns,
    PoolType.BEEFY_LINEAR: linear_concerns,
    PoolType.REAPER_LINEAR: linear_concerns,
    PoolType.SILO_LINEAR: linear_concerns,
    PoolType.TETU_LINEAR: linear_concerns,
    PoolType.MIDAS_LINEAR: linear_concerns,
    PoolType.FX: fx_concerns,
    PoolType.GYRO2: gyro_concerns,
    PoolType.GYRO3: gyro_concerns,
    PoolType.GYROE: gyro_concerns,
}


def resolve(pool_type: str, network_config: NetworkConfig | None = None) -> PoolConcerns:
    """Return the concerns for a pool type tag.

    Args:
        pool_type: Pool type tag, e.g. "Weighted" or "AaveLinear"
        network_config: Addresses used to build Vault calls. Defaults to the
            network selected by BALANCER_NETWORK.

    Raises:
        UnsupportedPoolType: If the tag is not a known pool type
    """
    try:
        family = _FAMILIES[PoolType(pool_type)]
    except ValueError:
        logger.debug("unsupported_pool_type", pool_type=pool_type)
        raise UnsupportedPoolType(f"Unsupported pool type: {pool_type}") from None

    if network_config is None:
        network_config = default_network_config()
    return family(network_config)


def resolve_pool(
    provider: SnapshotProvider,
    pool_id: str,
    network_config: NetworkConfig | None = None,
    block: int | None = None,
) -> tuple[PoolSnapshot, PoolConcerns]:
    """Fetch a pool from a snapshot provider and resolve its concerns.

    The provider is called once; its result is neither cached nor retried.

    Raises:
        ValueError: If the provider has no such pool
        UnsupportedPoolType: If the pool's type tag is not a known pool type
    """
    snapshot = provider.get_pool(pool_id, block)
    if snapshot is None:
        raise ValueError(f"Pool {pool_id} not found")
    return snapshot, resolve(snapshot.pool_type, network_config)
