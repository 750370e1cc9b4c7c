"""Pool snapshots, scaling and per-family invariant math.

Math modules operate on upscaled Bfp values:
- weighted_math: Weighted, Investment, LiquidityBootstrapping
- stable_math: Stable, MetaStable, ComposableStable, StablePhantom
- linear_math: every *Linear pool type
- gyro_math: Gyro2 and Gyro3
- fx_math: FX
"""

from .parsing import PoolParseError, parse_pool, parse_pools
from .scaling import (
    InvalidScalingFactorError,
    compute_scaling_factor,
    scale_down_down,
    scale_down_up,
    scale_up,
    token_scaling_factor,
)
from .snapshot import (
    ExitRequest,
    ExitResult,
    JoinRequest,
    JoinResult,
    PoolSnapshot,
    PoolToken,
    PoolType,
    SnapshotProvider,
)

__all__ = [
    # Snapshots
    "PoolSnapshot",
    "PoolToken",
    "PoolType",
    "SnapshotProvider",
    # Join/exit values
    "JoinRequest",
    "JoinResult",
    "ExitRequest",
    "ExitResult",
    # Parsing
    "PoolParseError",
    "parse_pool",
    "parse_pools",
    # Scaling
    "InvalidScalingFactorError",
    "compute_scaling_factor",
    "token_scaling_factor",
    "scale_up",
    "scale_down_down",
    "scale_down_up",
]
