"""Gyroscope pool concerns (Gyro2, Gyro3, GyroE).

Gyro pools are joined and exited proportionally only. A join given token
amounts becomes the largest proportional join they cover.
"""

from __future__ import annotations

from decimal import Decimal

from balancer_sdk.config import NetworkConfig
from balancer_sdk.errors import UnsupportedOperation
from balancer_sdk.math.fixed_point import Bfp
from balancer_sdk.pools import gyro_math
from balancer_sdk.pools.snapshot import PoolSnapshot, PoolType
from balancer_sdk.swaps.encoding import GYRO_ENCODER

from .base import (
    PoolConcerns,
    PoolExit,
    PoolJoin,
    PoolLiquidity,
    PoolMath,
    PoolPriceImpact,
    PoolSpotPrice,
    PoolState,
)


def _param(snapshot: PoolSnapshot, name: str) -> Bfp:
    value: Decimal | None = getattr(snapshot, name)
    if value is None or value <= 0:
        raise ValueError(f"Gyro pool {snapshot.id} is missing {name}")
    return Bfp.from_decimal(value)


def _check_token_count(state: PoolState, expected: int) -> None:
    if len(state.balances) != expected:
        raise ValueError(
            f"{state.snapshot.pool_type} pool {state.snapshot.id} must have {expected} tokens"
        )


class GyroPoolMath(PoolMath):
    name = "Gyro"
    proportional_only = True

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        pool_type = state.snapshot.pool_type
        if pool_type == PoolType.GYRO2:
            _check_token_count(state, 2)
            return gyro_math.calc_2clp_spot_price(
                state.balances,
                _param(state.snapshot, "sqrt_alpha"),
                _param(state.snapshot, "sqrt_beta"),
                token_index_in,
                token_index_out,
            )
        if pool_type == PoolType.GYRO3:
            _check_token_count(state, 3)
            return gyro_math.calc_3clp_spot_price(
                state.balances,
                _param(state.snapshot, "root3_alpha"),
                token_index_in,
                token_index_out,
            )
        raise UnsupportedOperation(f"Spot price is not supported for {pool_type} pools")

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        pool_type = state.snapshot.pool_type
        if pool_type == PoolType.GYRO2:
            _check_token_count(state, 2)
            return gyro_math.calc_2clp_bpt_prices(
                state.balances,
                _param(state.snapshot, "sqrt_alpha"),
                _param(state.snapshot, "sqrt_beta"),
                state.total_supply,
            )
        if pool_type == PoolType.GYRO3:
            _check_token_count(state, 3)
            return gyro_math.calc_3clp_bpt_prices(
                state.balances, _param(state.snapshot, "root3_alpha"), state.total_supply
            )
        raise UnsupportedOperation(f"Price impact is not supported for {pool_type} pools")


def gyro_concerns(network_config: NetworkConfig) -> PoolConcerns:
    math = GyroPoolMath()
    return PoolConcerns(
        name=math.name,
        join=PoolJoin(math, GYRO_ENCODER, network_config),
        exit=PoolExit(math, GYRO_ENCODER, network_config),
        spot_price=PoolSpotPrice(math),
        price_impact=PoolPriceImpact(math),
        liquidity=PoolLiquidity(),
    )
