"""FX pool concerns.

Joins and exits are proportional; prices come from each token's numeraire
(USD) rate.
"""

from __future__ import annotations

from decimal import Decimal

from balancer_sdk.config import NetworkConfig
from balancer_sdk.math.fixed_point import Bfp
from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools import fx_math
from balancer_sdk.pools.snapshot import PoolSnapshot
from balancer_sdk.swaps.encoding import FX_ENCODER

from .base import (
    PoolConcerns,
    PoolExit,
    PoolJoin,
    PoolMath,
    PoolPriceImpact,
    PoolSpotPrice,
    PoolState,
)


def _rates(snapshot: PoolSnapshot) -> list[Bfp]:
    rates = []
    for token in snapshot.pool_tokens:
        if token.token_rate is None or token.token_rate <= 0:
            raise ValueError(f"FX pool {snapshot.id} token {token.address} has no token rate")
        rates.append(Bfp.from_decimal(token.token_rate))
    return rates


class FXPoolMath(PoolMath):
    name = "FX"
    proportional_only = True

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        return fx_math.calc_spot_price(_rates(state.snapshot), token_index_in, token_index_out)

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        return fx_math.calc_bpt_prices(state.balances, _rates(state.snapshot), state.total_supply)


class FXPoolLiquidity:
    """Pool value, using each token's numeraire rate when no price is given."""

    def liquidity(self, snapshot: PoolSnapshot, prices: dict[str, Decimal]) -> Decimal:
        normalized = {normalize_address(token): price for token, price in prices.items()}
        value = Decimal(0)
        for token in snapshot.pool_tokens:
            price = normalized.get(normalize_address(token.address), token.token_rate)
            if price is None:
                continue
            value += Decimal(token.balance).scaleb(-token.decimals) * price
        return value


def fx_concerns(network_config: NetworkConfig) -> PoolConcerns:
    math = FXPoolMath()
    return PoolConcerns(
        name=math.name,
        join=PoolJoin(math, FX_ENCODER, network_config),
        exit=PoolExit(math, FX_ENCODER, network_config),
        spot_price=PoolSpotPrice(math),
        price_impact=PoolPriceImpact(math),
        liquidity=FXPoolLiquidity(),
    )
