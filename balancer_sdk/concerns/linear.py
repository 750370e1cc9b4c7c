"""Linear pool concerns (every *Linear pool type).

Linear pools have no join/exit kinds of their own: BPT is minted and burned
by swapping main or wrapped tokens against the pool's BPT through
Vault.batchSwap. Proportional exits use the recovery-mode exit.
"""

from __future__ import annotations

from balancer_sdk.config import NetworkConfig
from balancer_sdk.constants import MAX_DEADLINE
from balancer_sdk.errors import UnsupportedOperation
from balancer_sdk.math.fixed_point import ONE, Bfp
from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools import linear_math
from balancer_sdk.pools.linear_math import LinearParams
from balancer_sdk.pools.snapshot import ExitRequest, JoinRequest, PoolSnapshot
from balancer_sdk.swaps.encoding import LINEAR_ENCODER, ExitKind, JoinKind, encode_batch_swap
from balancer_sdk.swaps.types import BatchSwapStep, FundManagement, SwapType

from .base import (
    ExitAmounts,
    JoinAmounts,
    PoolConcerns,
    PoolExit,
    PoolJoin,
    PoolLiquidity,
    PoolMath,
    PoolPriceImpact,
    PoolSpotPrice,
    PoolState,
    VaultCall,
    native_join_value,
    vault_assets,
)


def _pool_token_index(snapshot: PoolSnapshot, token_index: int | None, default: int) -> int:
    # main_index/wrapped_index refer to `tokens`, which include the BPT
    if token_index is None:
        return default
    return snapshot.token_index(snapshot.tokens[token_index].address)


def linear_indices(snapshot: PoolSnapshot) -> tuple[int, int]:
    """(main, wrapped) positions within `snapshot.pool_tokens`."""
    if len(snapshot.pool_tokens) != 2:
        raise ValueError(f"Linear pool {snapshot.id} must hold exactly main and wrapped tokens")
    main = _pool_token_index(snapshot, snapshot.main_index, 0)
    wrapped = _pool_token_index(snapshot, snapshot.wrapped_index, 1)
    if main == wrapped:
        raise ValueError(f"Linear pool {snapshot.id} main and wrapped tokens must differ")
    return main, wrapped


def _params(state: PoolState) -> LinearParams:
    snapshot = state.snapshot
    if snapshot.lower_target is None or snapshot.upper_target is None:
        raise ValueError(f"Linear pool {snapshot.id} is missing its targets")
    return LinearParams(
        fee=state.swap_fee,
        lower_target=Bfp.from_decimal(snapshot.lower_target),
        upper_target=Bfp.from_decimal(snapshot.upper_target),
    )


class LinearPoolMath(PoolMath):
    name = "Linear"

    def bpt_out_given_exact_tokens_in(self, state: PoolState, amounts_in: list[Bfp]) -> Bfp:
        main, wrapped = linear_indices(state.snapshot)
        params = _params(state)
        main_balance = state.balances[main]
        wrapped_balance = state.balances[wrapped]
        supply = state.total_supply

        # Main then wrapped, as the batch swap executes them
        bpt_out = Bfp(0)
        if amounts_in[main].value > 0:
            step = linear_math.calc_bpt_out_per_main_in(
                amounts_in[main], main_balance, wrapped_balance, supply, params
            )
            main_balance = main_balance.add(amounts_in[main])
            supply = supply.add(step)
            bpt_out = bpt_out.add(step)
        if amounts_in[wrapped].value > 0:
            step = linear_math.calc_bpt_out_per_wrapped_in(
                amounts_in[wrapped], main_balance, wrapped_balance, supply, params
            )
            bpt_out = bpt_out.add(step)
        return bpt_out

    def token_in_given_exact_bpt_out(self, state: PoolState, bpt_out: Bfp, token_index: int) -> Bfp:
        main, wrapped = linear_indices(state.snapshot)
        calc = (
            linear_math.calc_main_in_per_bpt_out
            if token_index == main
            else linear_math.calc_wrapped_in_per_bpt_out
        )
        return calc(
            bpt_out, state.balances[main], state.balances[wrapped], state.total_supply, _params(state)
        )

    def bpt_in_given_exact_tokens_out(self, state: PoolState, amounts_out: list[Bfp]) -> Bfp:
        main, wrapped = linear_indices(state.snapshot)
        params = _params(state)
        main_balance = state.balances[main]
        wrapped_balance = state.balances[wrapped]
        supply = state.total_supply

        bpt_in = Bfp(0)
        if amounts_out[main].value > 0:
            step = linear_math.calc_bpt_in_per_main_out(
                amounts_out[main], main_balance, wrapped_balance, supply, params
            )
            main_balance = main_balance.sub(amounts_out[main])
            supply = supply.sub(step)
            bpt_in = bpt_in.add(step)
        if amounts_out[wrapped].value > 0:
            step = linear_math.calc_bpt_in_per_wrapped_out(
                amounts_out[wrapped], main_balance, wrapped_balance, supply, params
            )
            bpt_in = bpt_in.add(step)
        return bpt_in

    def token_out_given_exact_bpt_in(self, state: PoolState, bpt_in: Bfp, token_index: int) -> Bfp:
        main, wrapped = linear_indices(state.snapshot)
        calc = (
            linear_math.calc_main_out_per_bpt_in
            if token_index == main
            else linear_math.calc_wrapped_out_per_bpt_in
        )
        return calc(
            bpt_in, state.balances[main], state.balances[wrapped], state.total_supply, _params(state)
        )

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        main, _ = linear_indices(state.snapshot)
        # One main unit is worth d(nominal)/d(main) wrapped units at the margin
        derivative = linear_math.nominal_derivative(state.balances[main], _params(state))
        if token_index_in == main:
            return ONE.div_down(derivative)
        return derivative

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        main, wrapped = linear_indices(state.snapshot)
        main_price, wrapped_price = linear_math.calc_bpt_prices(
            state.balances[main], state.balances[wrapped], state.total_supply, _params(state)
        )
        prices = [Bfp(0), Bfp(0)]
        prices[main] = main_price
        prices[wrapped] = wrapped_price
        return prices


def _bpt_asset_index(snapshot: PoolSnapshot, assets: list[str]) -> int:
    bpt = normalize_address(snapshot.address)
    if bpt not in assets:
        raise ValueError(f"Linear pool {snapshot.id} must list its own BPT among its tokens")
    return assets.index(bpt)


def _asset_index(snapshot: PoolSnapshot, pool_token_index: int) -> int:
    """Position of a pool token within `snapshot.tokens`."""
    address = normalize_address(snapshot.pool_tokens[pool_token_index].address)
    for i, token in enumerate(snapshot.tokens):
        if normalize_address(token.address) == address:
            return i
    raise ValueError(f"Token {address} not in pool {snapshot.id}")


def _funds(sender: str, recipient: str | None) -> FundManagement:
    return FundManagement(sender=sender, recipient=recipient or sender)


class LinearPoolJoin(PoolJoin):
    """Mints BPT by swapping main/wrapped tokens for BPT."""

    def proportional(self, state: PoolState, request: JoinRequest) -> JoinAmounts:
        raise UnsupportedOperation("Linear pools do not support proportional joins")

    def vault_call(
        self, snapshot: PoolSnapshot, request: JoinRequest, amounts: JoinAmounts
    ) -> VaultCall:
        assets = vault_assets(snapshot, self.network_config, request.use_native_asset)
        bpt_index = _bpt_asset_index(snapshot, assets)
        limits = [0] * len(assets)

        if amounts.kind == JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT:
            kind = SwapType.SWAP_EXACT_OUT
            asset_index = _asset_index(snapshot, amounts.token_index)
            steps = [BatchSwapStep(snapshot.id, asset_index, bpt_index, amounts.bpt_out)]
            limits[asset_index] = amounts.max_amounts_in[amounts.token_index]
        else:
            kind = SwapType.SWAP_EXACT_IN
            steps = []
            for i, amount in enumerate(amounts.amounts_in):
                if amount == 0:
                    continue
                asset_index = _asset_index(snapshot, i)
                steps.append(BatchSwapStep(snapshot.id, asset_index, bpt_index, amount))
                limits[asset_index] = amount
        limits[bpt_index] = -amounts.min_bpt_out

        data = encode_batch_swap(
            kind, steps, assets, _funds(request.sender, request.recipient), limits, MAX_DEADLINE
        )
        value = native_join_value(assets, [max(limit, 0) for limit in limits])
        return VaultCall("batchSwap", data, assets, value)


class LinearPoolExit(PoolExit):
    """Burns BPT by swapping it for main/wrapped tokens; proportional exits use recovery mode."""

    def vault_call(
        self, snapshot: PoolSnapshot, request: ExitRequest, amounts: ExitAmounts
    ) -> VaultCall:
        if amounts.kind == ExitKind.RECOVERY:
            return super().vault_call(snapshot, request, amounts)

        assets = vault_assets(snapshot, self.network_config, request.use_native_asset)
        bpt_index = _bpt_asset_index(snapshot, assets)
        limits = [0] * len(assets)

        if amounts.kind == ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT:
            kind = SwapType.SWAP_EXACT_IN
            asset_index = _asset_index(snapshot, amounts.token_index)
            steps = [BatchSwapStep(snapshot.id, bpt_index, asset_index, amounts.bpt_in)]
            limits[asset_index] = -amounts.min_amounts_out[amounts.token_index]
        else:
            kind = SwapType.SWAP_EXACT_OUT
            steps = []
            for i, amount in enumerate(amounts.amounts_out):
                if amount == 0:
                    continue
                asset_index = _asset_index(snapshot, i)
                steps.append(BatchSwapStep(snapshot.id, bpt_index, asset_index, amount))
                limits[asset_index] = -amount
        limits[bpt_index] = amounts.max_bpt_in

        data = encode_batch_swap(
            kind, steps, assets, _funds(request.sender, request.recipient), limits, MAX_DEADLINE
        )
        return VaultCall("batchSwap", data, assets)


def linear_concerns(network_config: NetworkConfig) -> PoolConcerns:
    math = LinearPoolMath()
    return PoolConcerns(
        name=math.name,
        join=LinearPoolJoin(math, LINEAR_ENCODER, network_config),
        exit=LinearPoolExit(math, LINEAR_ENCODER, network_config),
        spot_price=PoolSpotPrice(math),
        price_impact=PoolPriceImpact(math),
        liquidity=PoolLiquidity(),
    )
