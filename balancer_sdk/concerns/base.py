"""Pool concern interfaces and the shared join/exit machinery.

Each pool family provides a PoolMath (invariant math on upscaled balances).
The generic concerns here handle everything around it: variant selection,
scaling, slippage bounds, Vault calldata and price impact.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Protocol

import structlog

from balancer_sdk.config import NetworkConfig
from balancer_sdk.constants import ZERO_ADDRESS
from balancer_sdk.errors import (
    ExceedsPoolBalance,
    InsufficientLiquidity,
    PoolPaused,
    UnsupportedOperation,
    ZeroBalanceError,
)
from balancer_sdk.math.fixed_point import ONE, Bfp
from balancer_sdk.models.types import normalize_address
from balancer_sdk.pools.scaling import scale_down_down, scale_down_up, scale_up, token_scaling_factor
from balancer_sdk.pools.snapshot import (
    ExitRequest,
    ExitResult,
    JoinRequest,
    JoinResult,
    PoolSnapshot,
)
from balancer_sdk.swaps.encoding import (
    ExitKind,
    JoinKind,
    UserDataEncoder,
    encode_exit_pool,
    encode_join_pool,
)
from balancer_sdk.swaps.limits import add_slippage, subtract_slippage

logger = structlog.get_logger()


# =============================================================================
# Concern protocols
# =============================================================================


class JoinConcern(Protocol):
    def join(self, snapshot: PoolSnapshot, request: JoinRequest) -> JoinResult: ...


class ExitConcern(Protocol):
    def exit(self, snapshot: PoolSnapshot, request: ExitRequest) -> ExitResult: ...


class SpotPriceConcern(Protocol):
    def spot_price(self, snapshot: PoolSnapshot, token_in: str, token_out: str) -> Decimal: ...


class PriceImpactConcern(Protocol):
    def price_impact(
        self, snapshot: PoolSnapshot, amounts: list[int], bpt_amount: int, is_join: bool
    ) -> Decimal: ...


class LiquidityConcern(Protocol):
    def liquidity(self, snapshot: PoolSnapshot, prices: dict[str, Decimal]) -> Decimal: ...


@dataclass(frozen=True)
class PoolConcerns:
    """The capabilities of one pool family, as returned by the dispatcher."""

    name: str
    join: JoinConcern
    exit: ExitConcern
    spot_price: SpotPriceConcern
    price_impact: PriceImpactConcern
    liquidity: LiquidityConcern


# =============================================================================
# Pool math
# =============================================================================


@dataclass(frozen=True)
class PoolState:
    """Upscaled view of a snapshot's non-BPT tokens."""

    snapshot: PoolSnapshot
    balances: list[Bfp]
    scaling_factors: list[Bfp]
    total_supply: Bfp
    swap_fee: Bfp


class PoolMath:
    """Invariant math of one pool family.

    Amounts and balances are upscaled Bfp and exclude the pool's own BPT.
    Operations a family cannot perform raise UnsupportedOperation.
    """

    name: ClassVar[str] = "Pool"
    # Families that can only be joined/exited proportionally
    proportional_only: ClassVar[bool] = False

    def upscale(self, snapshot: PoolSnapshot) -> PoolState:
        tokens = snapshot.pool_tokens
        scaling_factors = [token_scaling_factor(token) for token in tokens]
        return PoolState(
            snapshot=snapshot,
            balances=[
                scale_up(token.balance, sf) for token, sf in zip(tokens, scaling_factors, strict=True)
            ],
            scaling_factors=scaling_factors,
            total_supply=Bfp(snapshot.total_shares),
            swap_fee=Bfp.from_decimal(snapshot.swap_fee),
        )

    def _unsupported(self, operation: str) -> UnsupportedOperation:
        return UnsupportedOperation(f"{self.name} pools do not support {operation}")

    def bpt_out_given_exact_tokens_in(self, state: PoolState, amounts_in: list[Bfp]) -> Bfp:
        raise self._unsupported("exact tokens in joins")

    def token_in_given_exact_bpt_out(self, state: PoolState, bpt_out: Bfp, token_index: int) -> Bfp:
        raise self._unsupported("single token joins")

    def bpt_in_given_exact_tokens_out(self, state: PoolState, amounts_out: list[Bfp]) -> Bfp:
        raise self._unsupported("exact tokens out exits")

    def token_out_given_exact_bpt_in(self, state: PoolState, bpt_in: Bfp, token_index: int) -> Bfp:
        raise self._unsupported("single token exits")

    def tokens_in_given_exact_bpt_out(self, state: PoolState, bpt_out: Bfp) -> list[Bfp]:
        """Proportional amounts in, rounded up."""
        ratio = bpt_out.div_up(state.total_supply)
        return [balance.mul_up(ratio) for balance in state.balances]

    def tokens_out_given_exact_bpt_in(self, state: PoolState, bpt_in: Bfp) -> list[Bfp]:
        """Proportional amounts out, rounded down."""
        ratio = bpt_in.div_down(state.total_supply)
        return [balance.mul_down(ratio) for balance in state.balances]

    def spot_price(self, state: PoolState, token_index_in: int, token_index_out: int) -> Bfp:
        raise self._unsupported("spot price")

    def bpt_prices(self, state: PoolState) -> list[Bfp]:
        """Marginal BPT per unit of each upscaled token."""
        raise self._unsupported("price impact")


# =============================================================================
# Helpers
# =============================================================================


def _check_amounts(snapshot: PoolSnapshot, amounts: tuple[int, ...] | list[int]) -> None:
    expected = len(snapshot.pool_tokens)
    if len(amounts) != expected:
        raise ValueError(f"Expected {expected} amounts for pool {snapshot.id}, got {len(amounts)}")
    for amount in amounts:
        if amount < 0:
            raise ValueError(f"Amounts must be non-negative, got {amount}")


def _check_token_index(snapshot: PoolSnapshot, token_index: int) -> None:
    if token_index < 0 or token_index >= len(snapshot.pool_tokens):
        raise IndexError(f"token_index {token_index} out of range for pool {snapshot.id}")


def _check_supply(state: PoolState) -> None:
    if state.total_supply.value <= 0:
        raise InsufficientLiquidity(f"Pool {state.snapshot.id} has no BPT supply")


def is_proportional(amounts: list[int], balances: list[int]) -> bool:
    """Whether amounts match the balance ratios up to one unit of rounding per token."""
    if not any(amounts):
        return True
    for i in range(1, len(amounts)):
        cross = amounts[i] * balances[0] - amounts[0] * balances[i]
        if abs(cross) >= max(balances[0], balances[i], 1):
            return False
    return True


def with_bpt(snapshot: PoolSnapshot, amounts: list[int], bpt_value: int = 0) -> list[int]:
    """Insert a value at the BPT position so amounts line up with `snapshot.tokens`."""
    bpt_index = snapshot.bpt_index
    if bpt_index is None:
        return list(amounts)
    return list(amounts[:bpt_index]) + [bpt_value] + list(amounts[bpt_index:])


def vault_assets(snapshot: PoolSnapshot, config: NetworkConfig, use_native_asset: bool) -> list[str]:
    """Asset list for a Vault call, substituting the native asset if requested."""
    assets = [normalize_address(token.address) for token in snapshot.tokens]
    if not use_native_asset:
        return assets
    wrapped = normalize_address(config.wrapped_native_asset)
    if wrapped not in assets:
        raise ValueError(f"Pool {snapshot.id} does not hold the wrapped native asset {wrapped}")
    return [ZERO_ADDRESS if asset == wrapped else asset for asset in assets]


def native_join_value(assets: list[str], max_amounts_in: list[int]) -> int:
    for asset, amount in zip(assets, max_amounts_in, strict=True):
        if asset == ZERO_ADDRESS:
            return amount
    return 0


# =============================================================================
# Generic concerns
# =============================================================================


class PoolPriceImpact:
    """Price impact against the BPT value of the amounts at spot."""

    def __init__(self, math: PoolMath) -> None:
        self.math = math

    def price_impact(
        self, snapshot: PoolSnapshot, amounts: list[int], bpt_amount: int, is_join: bool
    ) -> Decimal:
        """Join: 1 - bpt / bpt_zero_pi. Exit: 1 - bpt_zero_pi / bpt. Clamped to [0, 1]."""
        _check_amounts(snapshot, amounts)
        balances = [token.balance for token in snapshot.pool_tokens]
        if is_proportional(list(amounts), balances):
            return Decimal(0)

        state = self.math.upscale(snapshot)
        prices = self.math.bpt_prices(state)
        bpt_zero_pi = Bfp(0)
        for amount, sf, price in zip(amounts, state.scaling_factors, prices, strict=True):
            bpt_zero_pi = bpt_zero_pi.add(scale_up(amount, sf).mul_down(price))

        bpt = Bfp(bpt_amount)
        if bpt_zero_pi.value == 0 or bpt.value == 0:
            return Decimal(0)
        if is_join:
            impact = ONE.sub(bpt.div_down(bpt_zero_pi))
        else:
            impact = ONE.sub(bpt_zero_pi.div_down(bpt))
        return impact.to_decimal()


class PoolSpotPrice:
    """Spot price in human units: token_in paid per unit of token_out."""

    def __init__(self, math: PoolMath) -> None:
        self.math = math

    def spot_price(self, snapshot: PoolSnapshot, token_in: str, token_out: str) -> Decimal:
        index_in = snapshot.token_index(token_in)
        index_out = snapshot.token_index(token_out)
        if index_in == index_out:
            raise ValueError("token_in and token_out must differ")

        state = self.math.upscale(snapshot)
        price = self.math.spot_price(state, index_in, index_out)

        # Upscaled amounts embed price rates; undo them for human units
        tokens = snapshot.pool_tokens
        rate_in = Bfp.from_decimal(tokens[index_in].price_rate)
        rate_out = Bfp.from_decimal(tokens[index_out].price_rate)
        price = price.mul_down(rate_out).div_down(rate_in)

        price = price.div_down(state.swap_fee.complement())
        logger.debug(
            "spot_price",
            pool_id=snapshot.id,
            token_in=token_in,
            token_out=token_out,
            price=str(price),
        )
        return price.to_decimal()


class PoolLiquidity:
    """Pool value from token prices.

    Tokens without a price are valued like the average priced token, which
    is exact for stable-like pools and a good estimate elsewhere.
    """

    def liquidity(self, snapshot: PoolSnapshot, prices: dict[str, Decimal]) -> Decimal:
        normalized = {normalize_address(token): price for token, price in prices.items()}
        priced_value = Decimal(0)
        priced_balance = Decimal(0)
        total_balance = Decimal(0)
        for token in snapshot.pool_tokens:
            balance = _human_balance(token.balance, token.decimals) * token.price_rate
            total_balance += balance
            price = normalized.get(normalize_address(token.address))
            if price is None:
                continue
            priced_value += _human_balance(token.balance, token.decimals) * price
            priced_balance += balance
        if priced_balance == 0:
            return Decimal(0)
        return priced_value * total_balance / priced_balance


def _human_balance(balance: int, decimals: int) -> Decimal:
    return Decimal(balance).scaleb(-decimals)


@dataclass(frozen=True)
class JoinAmounts:
    """Expected and slippage-bounded amounts of one join variant."""

    kind: JoinKind
    amounts_in: list[int]
    max_amounts_in: list[int]
    bpt_out: int
    min_bpt_out: int
    token_index: int | None = None


@dataclass(frozen=True)
class ExitAmounts:
    """Expected and slippage-bounded amounts of one exit variant."""

    kind: ExitKind
    amounts_out: list[int]
    min_amounts_out: list[int]
    bpt_in: int
    max_bpt_in: int
    token_index: int | None = None


@dataclass(frozen=True)
class VaultCall:
    function_name: str
    data: str
    assets: list[str]
    value: int = 0


class PoolJoin:
    """Join concern: variant selection and a Vault.joinPool call."""

    def __init__(
        self, math: PoolMath, encoder: UserDataEncoder, network_config: NetworkConfig
    ) -> None:
        self.math = math
        self.encoder = encoder
        self.network_config = network_config
        self.price_impact = PoolPriceImpact(math)

    def join(self, snapshot: PoolSnapshot, request: JoinRequest) -> JoinResult:
        if snapshot.paused:
            raise PoolPaused(f"Pool {snapshot.id} is paused")

        state = self.math.upscale(snapshot)
        proportional = False
        if request.token_index is not None and request.bpt_amount is not None:
            amounts = self.single_token(state, request)
        elif request.proportional or request.bpt_amount is not None or self.math.proportional_only:
            amounts = self.proportional(state, request)
            proportional = True
        else:
            amounts = self.exact_tokens_in(state, request)

        if proportional:
            price_impact = Decimal(0)
        else:
            price_impact = self.price_impact.price_impact(
                snapshot, amounts.amounts_in, amounts.bpt_out, True
            )

        call = self.vault_call(snapshot, request, amounts)
        logger.debug(
            "pool_join",
            pool_id=snapshot.id,
            pool_type=snapshot.pool_type,
            kind=amounts.kind.value,
            bpt_out=amounts.bpt_out,
            amounts_in=amounts.amounts_in,
        )
        return JoinResult(
            kind=amounts.kind.value,
            bpt_out=amounts.bpt_out,
            min_bpt_out=amounts.min_bpt_out,
            amounts_in=tuple(amounts.amounts_in),
            max_amounts_in=tuple(amounts.max_amounts_in),
            to=self.network_config.vault,
            function_name=call.function_name,
            data=call.data,
            value=call.value,
            assets=tuple(call.assets),
            price_impact=price_impact,
        )

    def vault_call(
        self, snapshot: PoolSnapshot, request: JoinRequest, amounts: JoinAmounts
    ) -> VaultCall:
        if amounts.kind == JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT:
            user_data = self.encoder.join_token_in_for_exact_bpt_out(
                amounts.bpt_out, amounts.token_index
            )
        elif amounts.kind == JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT:
            user_data = self.encoder.join_all_tokens_in_for_exact_bpt_out(amounts.bpt_out)
        else:
            user_data = self.encoder.join_exact_tokens_in_for_bpt_out(
                amounts.amounts_in, amounts.min_bpt_out
            )

        assets = vault_assets(snapshot, self.network_config, request.use_native_asset)
        max_amounts_in = with_bpt(snapshot, amounts.max_amounts_in)
        data = encode_join_pool(
            snapshot.id,
            request.sender,
            request.recipient or request.sender,
            assets,
            max_amounts_in,
            user_data,
        )
        return VaultCall("joinPool", data, assets, native_join_value(assets, max_amounts_in))

    def exact_tokens_in(self, state: PoolState, request: JoinRequest) -> JoinAmounts:
        snapshot = state.snapshot
        _check_amounts(snapshot, request.amounts)
        _check_supply(state)
        upscaled = [
            scale_up(amount, sf)
            for amount, sf in zip(request.amounts, state.scaling_factors, strict=True)
        ]
        bpt_out = self.math.bpt_out_given_exact_tokens_in(state, upscaled).value
        if bpt_out <= 0:
            raise InsufficientLiquidity(f"Join would mint {bpt_out} BPT")
        amounts_in = list(request.amounts)
        return JoinAmounts(
            kind=JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT,
            amounts_in=amounts_in,
            max_amounts_in=amounts_in,
            bpt_out=bpt_out,
            min_bpt_out=subtract_slippage(bpt_out, request.slippage_bps),
        )

    def single_token(self, state: PoolState, request: JoinRequest) -> JoinAmounts:
        snapshot = state.snapshot
        token_index = request.token_index
        _check_token_index(snapshot, token_index)
        _check_supply(state)
        if request.bpt_amount <= 0:
            raise InsufficientLiquidity(f"Join would mint {request.bpt_amount} BPT")

        amount_up = self.math.token_in_given_exact_bpt_out(
            state, Bfp(request.bpt_amount), token_index
        )
        amounts_in = [0] * len(state.balances)
        amounts_in[token_index] = scale_down_up(amount_up, state.scaling_factors[token_index])
        return JoinAmounts(
            kind=JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT,
            amounts_in=amounts_in,
            max_amounts_in=[add_slippage(amount, request.slippage_bps) for amount in amounts_in],
            bpt_out=request.bpt_amount,
            min_bpt_out=request.bpt_amount,
            token_index=token_index,
        )

    def proportional(self, state: PoolState, request: JoinRequest) -> JoinAmounts:
        _check_supply(state)
        if request.bpt_amount is not None:
            bpt_out = request.bpt_amount
        else:
            bpt_out = self._bpt_for_amounts(state, request.amounts)
        if bpt_out <= 0:
            raise InsufficientLiquidity(f"Join would mint {bpt_out} BPT")

        amounts_up = self.math.tokens_in_given_exact_bpt_out(state, Bfp(bpt_out))
        amounts_in = [
            scale_down_up(amount, sf)
            for amount, sf in zip(amounts_up, state.scaling_factors, strict=True)
        ]

        if self.encoder.supports_join(JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT):
            return JoinAmounts(
                kind=JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT,
                amounts_in=amounts_in,
                max_amounts_in=[
                    add_slippage(amount, request.slippage_bps) for amount in amounts_in
                ],
                bpt_out=bpt_out,
                min_bpt_out=bpt_out,
            )

        # No proportional kind on-chain: send the proportional amounts exactly
        return JoinAmounts(
            kind=JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT,
            amounts_in=amounts_in,
            max_amounts_in=amounts_in,
            bpt_out=bpt_out,
            min_bpt_out=subtract_slippage(bpt_out, request.slippage_bps),
        )

    def _bpt_for_amounts(self, state: PoolState, amounts: tuple[int, ...]) -> int:
        """BPT for the largest proportional join that fits within `amounts`."""
        _check_amounts(state.snapshot, amounts)
        ratio = None
        for amount, balance, sf in zip(amounts, state.balances, state.scaling_factors, strict=True):
            if balance.value <= 0:
                raise ZeroBalanceError(f"Pool {state.snapshot.id} has an empty balance")
            token_ratio = scale_up(amount, sf).div_down(balance)
            if ratio is None or token_ratio < ratio:
                ratio = token_ratio
        if ratio is None:
            return 0
        return state.total_supply.mul_down(ratio).value


class PoolExit:
    """Exit concern: variant selection and a Vault.exitPool call."""

    def __init__(
        self, math: PoolMath, encoder: UserDataEncoder, network_config: NetworkConfig
    ) -> None:
        self.math = math
        self.encoder = encoder
        self.network_config = network_config
        self.price_impact = PoolPriceImpact(math)

    def exit(self, snapshot: PoolSnapshot, request: ExitRequest) -> ExitResult:
        if snapshot.paused:
            raise PoolPaused(f"Pool {snapshot.id} is paused")

        state = self.math.upscale(snapshot)
        if request.bpt_amount is not None:
            _check_supply(state)
            if request.bpt_amount <= 0:
                raise ValueError(f"BPT in must be positive, got {request.bpt_amount}")
            if request.bpt_amount > snapshot.total_shares:
                raise ExceedsPoolBalance(
                    f"BPT in {request.bpt_amount} exceeds supply {snapshot.total_shares}"
                )

        if request.token_index is not None and request.bpt_amount is not None:
            amounts = self.single_token(state, request)
        elif request.bpt_amount is not None:
            amounts = self.proportional(state, request)
        else:
            amounts = self.exact_tokens_out(state, request)

        if amounts.kind in (ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT, ExitKind.RECOVERY):
            price_impact = Decimal(0)
        else:
            price_impact = self.price_impact.price_impact(
                snapshot, amounts.amounts_out, amounts.bpt_in, False
            )

        call = self.vault_call(snapshot, request, amounts)
        logger.debug(
            "pool_exit",
            pool_id=snapshot.id,
            pool_type=snapshot.pool_type,
            kind=amounts.kind.value,
            bpt_in=amounts.bpt_in,
            amounts_out=amounts.amounts_out,
        )
        return ExitResult(
            kind=amounts.kind.value,
            bpt_in=amounts.bpt_in,
            max_bpt_in=amounts.max_bpt_in,
            amounts_out=tuple(amounts.amounts_out),
            min_amounts_out=tuple(amounts.min_amounts_out),
            to=self.network_config.vault,
            function_name=call.function_name,
            data=call.data,
            value=call.value,
            assets=tuple(call.assets),
            price_impact=price_impact,
        )

    def vault_call(
        self, snapshot: PoolSnapshot, request: ExitRequest, amounts: ExitAmounts
    ) -> VaultCall:
        if amounts.kind == ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT:
            user_data = self.encoder.exit_exact_bpt_in_for_one_token_out(
                amounts.bpt_in, amounts.token_index
            )
        elif amounts.kind == ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT:
            user_data = self.encoder.exit_exact_bpt_in_for_tokens_out(amounts.bpt_in)
        elif amounts.kind == ExitKind.RECOVERY:
            user_data = self.encoder.exit_recovery(amounts.bpt_in)
        else:
            user_data = self.encoder.exit_bpt_in_for_exact_tokens_out(
                amounts.amounts_out, amounts.max_bpt_in
            )

        assets = vault_assets(snapshot, self.network_config, request.use_native_asset)
        data = encode_exit_pool(
            snapshot.id,
            request.sender,
            request.recipient or request.sender,
            assets,
            with_bpt(snapshot, amounts.min_amounts_out),
            user_data,
        )
        return VaultCall("exitPool", data, assets)

    def single_token(self, state: PoolState, request: ExitRequest) -> ExitAmounts:
        snapshot = state.snapshot
        token_index = request.token_index
        _check_token_index(snapshot, token_index)

        amount_up = self.math.token_out_given_exact_bpt_in(
            state, Bfp(request.bpt_amount), token_index
        )
        if amount_up >= state.balances[token_index]:
            raise ExceedsPoolBalance(f"Exit would drain token {token_index} of pool {snapshot.id}")
        amounts_out = [0] * len(state.balances)
        amounts_out[token_index] = scale_down_down(amount_up, state.scaling_factors[token_index])
        return ExitAmounts(
            kind=ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT,
            amounts_out=amounts_out,
            min_amounts_out=[
                subtract_slippage(amount, request.slippage_bps) for amount in amounts_out
            ],
            bpt_in=request.bpt_amount,
            max_bpt_in=request.bpt_amount,
            token_index=token_index,
        )

    def proportional(self, state: PoolState, request: ExitRequest) -> ExitAmounts:
        amounts_up = self.math.tokens_out_given_exact_bpt_in(state, Bfp(request.bpt_amount))
        amounts_out = [
            scale_down_down(amount, sf)
            for amount, sf in zip(amounts_up, state.scaling_factors, strict=True)
        ]
        kind = ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT
        if ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT not in self.encoder.exit_kinds:
            kind = ExitKind.RECOVERY
        return ExitAmounts(
            kind=kind,
            amounts_out=amounts_out,
            min_amounts_out=[
                subtract_slippage(amount, request.slippage_bps) for amount in amounts_out
            ],
            bpt_in=request.bpt_amount,
            max_bpt_in=request.bpt_amount,
        )

    def exact_tokens_out(self, state: PoolState, request: ExitRequest) -> ExitAmounts:
        snapshot = state.snapshot
        _check_amounts(snapshot, request.amounts)
        _check_supply(state)
        if self.math.proportional_only:
            raise UnsupportedOperation(f"{self.math.name} pools only support proportional exits")
        for i, (amount, token) in enumerate(zip(request.amounts, snapshot.pool_tokens, strict=True)):
            if amount >= token.balance:
                raise ExceedsPoolBalance(
                    f"Amount out {amount} of token {i} exceeds pool balance {token.balance}"
                )

        upscaled = [
            scale_up(amount, sf)
            for amount, sf in zip(request.amounts, state.scaling_factors, strict=True)
        ]
        bpt_in = self.math.bpt_in_given_exact_tokens_out(state, upscaled).value
        if bpt_in >= snapshot.total_shares:
            raise ExceedsPoolBalance(
                f"BPT in {bpt_in} would burn the whole supply {snapshot.total_shares}"
            )
        amounts_out = list(request.amounts)
        return ExitAmounts(
            kind=ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT,
            amounts_out=amounts_out,
            min_amounts_out=amounts_out,
            bpt_in=bpt_in,
            max_bpt_in=add_slippage(bpt_in, request.slippage_bps),
        )
