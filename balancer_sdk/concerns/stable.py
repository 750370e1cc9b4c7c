"""Stable-family pool concerns.

Stable, MetaStable, ComposableStable and StablePhantom pools share the
StableSwap invariant. They differ in how balances are presented:

- MetaStable and ComposableStable tokens carry price rates, applied when
  balances are upscaled.
- ComposableStable and StablePhantom pools hold their own BPT, which is
  dropped from the balance set (and `total_shares` is the virtual supply).

and in the userData kinds their contracts accept.
"""

from __future__ import annotations

from balancer_sdk.config import NetworkConfig
from balancer_sdk.math.fixed_point import AMP_PRECISION, Bfp
from balancer_sdk.pools import stable_math
from balancer_sdk.pools.snapshot import PoolSnapshot
from balancer_sdk.swaps.encoding import (
    COMPOSABLE_STABLE_ENCODER,
    STABLE_ENCODER,
    STABLE_PHANTOM_ENCODER,
    UserDataEncoder,
)

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


def _amp(snapshot: PoolSnapshot) -> int:
    """Amplification parameter scaled by AMP_PRECISION."""
    if snapshot.amp is None or snapshot.amp <= 0:
        raise ValueError(f"Stable pool {snapshot.id} has no amplification parameter")
    return int(snapshot.amp * AMP_PRECISION)


class StablePoolMath(PoolMath):
    name = "Stable"

    def __init__(self, name: str = "Stable") -> None:
        self.name = name

    def bpt_out_given_exact_tokens_in(self, state: PoolState, amounts_in: list[Bfp]) -> Bfp:
        amp = _amp(state.snapshot)
        return stable_math.calc_bpt_out_given_exact_tokens_in(
            amp,
            state.balances,
            amounts_in,
            state.total_supply,
            stable_math.calculate_invariant(amp, state.balances),
            state.swap_fee,
        )

    def token_in_given_exact_bpt_out(self, state: PoolState, bpt_out: Bfp, token_index: int) -> Bfp:
        amp = _amp(state.snapshot)
        return stable_math.calc_token_in_given_exact_bpt_out(
            amp,
            state.balances,
            token_index,
            bpt_out,
            state.total_supply,
            stable_math.calculate_invariant(amp, state.balances),
            state.swap_fee,
        )

    def bpt_in_given_exact_tokens_out(self, state: PoolState, amounts_out: list[Bfp]) -> Bfp:
        amp = _amp(state.snapshot)
        return stable_math.calc_bpt_in_given_exact_tokens_out(
            amp,
            state.balances,
            amounts_out,
            state.total_supply,
            stable_math.calculate_invariant(amp, state.balances),
            state.swap_fee,
        )

    def token_out_given_exact_bpt_in(self, state: PoolState, bpt_in: Bfp, token_index: int) -> Bfp:
        amp = _amp(state.snapshot)
        return stable_math.calc_token_out_given_exact_bpt_in(
            amp,
            state.balances,
            token_index,
            bpt_in,
            state.total_supply,
            stable_math.calculate_invariant(amp, state.balances),
            state.swap_fee,
        )

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        return stable_math.calc_spot_price(
            _amp(state.snapshot), state.balances, token_index_in, token_index_out
        )

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        return stable_math.calc_bpt_prices(
            _amp(state.snapshot), state.balances, state.total_supply
        )


def _stable_family(
    name: str, encoder: UserDataEncoder, network_config: NetworkConfig
) -> PoolConcerns:
    math = StablePoolMath(name)
    return PoolConcerns(
        name=name,
        join=PoolJoin(math, encoder, network_config),
        exit=PoolExit(math, encoder, network_config),
        spot_price=PoolSpotPrice(math),
        price_impact=PoolPriceImpact(math),
        liquidity=PoolLiquidity(),
    )


def stable_concerns(network_config: NetworkConfig) -> PoolConcerns:
    return _stable_family("Stable", STABLE_ENCODER, network_config)


def meta_stable_concerns(network_config: NetworkConfig) -> PoolConcerns:
    return _stable_family("MetaStable", STABLE_ENCODER, network_config)


def composable_stable_concerns(network_config: NetworkConfig) -> PoolConcerns:
    return _stable_family("ComposableStable", COMPOSABLE_STABLE_ENCODER, network_config)


def stable_phantom_concerns(network_config: NetworkConfig) -> PoolConcerns:
    return _stable_family("StablePhantom", STABLE_PHANTOM_ENCODER, network_config)
