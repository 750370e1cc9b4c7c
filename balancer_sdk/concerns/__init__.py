"""Pool-math concerns: join, exit, spot price, price impact and liquidity per pool family."""

from balancer_sdk.concerns.base import (
    ExitConcern,
    JoinConcern,
    LiquidityConcern,
    PoolConcerns,
    PriceImpactConcern,
    SpotPriceConcern,
)
from balancer_sdk.concerns.dispatcher import resolve, resolve_pool

__all__ = [
    "ExitConcern",
    "JoinConcern",
    "LiquidityConcern",
    "PoolConcerns",
    "PriceImpactConcern",
    "SpotPriceConcern",
    "resolve",
    "resolve_pool",
]
