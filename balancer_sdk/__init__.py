"""Balancer V2 pool math and Vault transaction building.

Typical use:

    from balancer_sdk import JoinRequest, resolve

    concerns = resolve(snapshot.pool_type)
    result = concerns.join.join(snapshot, JoinRequest(amounts=(10**18, 10**18)))
"""

__version__ = "0.1.0"

from balancer_sdk.concerns import PoolConcerns, resolve
from balancer_sdk.config import NetworkConfig, SwapOptions, get_network_config
from balancer_sdk.errors import BalancerError
from balancer_sdk.pools import (
    ExitRequest,
    ExitResult,
    JoinRequest,
    JoinResult,
    PoolSnapshot,
    PoolToken,
    PoolType,
)
from balancer_sdk.swaps import Route, RouteStep, SwapType, build_swap, compute_limits

__all__ = [
    "__version__",
    "BalancerError",
    "NetworkConfig",
    "SwapOptions",
    "get_network_config",
    "PoolConcerns",
    "resolve",
    "PoolSnapshot",
    "PoolToken",
    "PoolType",
    "JoinRequest",
    "JoinResult",
    "ExitRequest",
    "ExitResult",
    "Route",
    "RouteStep",
    "SwapType",
    "build_swap",
    "compute_limits",
]
