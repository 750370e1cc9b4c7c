"""Weighted pool concerns (Weighted, Investment, LiquidityBootstrapping)."""

from __future__ import annotations

from decimal import Decimal

from balancer_sdk.config import NetworkConfig
from balancer_sdk.math.fixed_point import Bfp
from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools import weighted_math
from balancer_sdk.pools.snapshot import PoolSnapshot
from balancer_sdk.swaps.encoding import WEIGHTED_ENCODER

from .base import (
    PoolConcerns,
    PoolExit,
    PoolJoin,
    PoolMath,
    PoolPriceImpact,
    PoolSpotPrice,
    PoolState,
)


def _weights(snapshot: PoolSnapshot) -> list[Bfp]:
    weights = []
    for token in snapshot.pool_tokens:
        if token.weight is None or token.weight <= 0:
            raise ValueError(f"Weighted pool {snapshot.id} token {token.address} has no weight")
        weights.append(Bfp.from_decimal(token.weight))
    return weights


class WeightedPoolMath(PoolMath):
    name = "Weighted"

    def bpt_out_given_exact_tokens_in(self, state: PoolState, amounts_in: list[Bfp]) -> Bfp:
        return weighted_math.calc_bpt_out_given_exact_tokens_in(
            state.balances, _weights(state.snapshot), amounts_in, state.total_supply, state.swap_fee
        )

    def token_in_given_exact_bpt_out(self, state: PoolState, bpt_out: Bfp, token_index: int) -> Bfp:
        return weighted_math.calc_token_in_given_exact_bpt_out(
            state.balances[token_index],
            _weights(state.snapshot)[token_index],
            bpt_out,
            state.total_supply,
            state.swap_fee,
        )

    def bpt_in_given_exact_tokens_out(self, state: PoolState, amounts_out: list[Bfp]) -> Bfp:
        return weighted_math.calc_bpt_in_given_exact_tokens_out(
            state.balances, _weights(state.snapshot), amounts_out, state.total_supply, state.swap_fee
        )

    def token_out_given_exact_bpt_in(self, state: PoolState, bpt_in: Bfp, token_index: int) -> Bfp:
        return weighted_math.calc_token_out_given_exact_bpt_in(
            state.balances[token_index],
            _weights(state.snapshot)[token_index],
            bpt_in,
            state.total_supply,
            state.swap_fee,
        )

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        weights = _weights(state.snapshot)
        return weighted_math.calc_spot_price(
            state.balances[token_index_in],
            weights[token_index_in],
            state.balances[token_index_out],
            weights[token_index_out],
        )

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        return weighted_math.calc_bpt_prices(
            state.balances, _weights(state.snapshot), state.total_supply
        )


class WeightedPoolLiquidity:
    """Pool value from token prices, extrapolating unpriced tokens from weights."""

    def liquidity(self, snapshot: PoolSnapshot, prices: dict[str, Decimal]) -> Decimal:
        normalized = {normalize_address(token): price for token, price in prices.items()}
        value = Decimal(0)
        priced_weight = Decimal(0)
        for token in snapshot.pool_tokens:
            price = normalized.get(normalize_address(token.address))
            if price is None or token.weight is None:
                continue
            value += Decimal(token.balance).scaleb(-token.decimals) * price
            priced_weight += token.weight
        if priced_weight == 0:
            return Decimal(0)
        return value / priced_weight


def weighted_concerns(network_config: NetworkConfig) -> PoolConcerns:
    math = WeightedPoolMath()
    return PoolConcerns(
        name=math.name,
        join=PoolJoin(math, WEIGHTED_ENCODER, network_config),
        exit=PoolExit(math, WEIGHTED_ENCODER, network_config),
        spot_price=PoolSpotPrice(math),
        price_impact=PoolPriceImpact(math),
        liquidity=WeightedPoolLiquidity(),
    )
