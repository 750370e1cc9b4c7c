"""Factory functions for creating test pools and routes.

Usage:
    from tests.helpers import make_weighted_pool
    # or
    from tests.helpers.factories import make_weighted_pool, make_route

    pool = make_weighted_pool(balances=(1000 * ONE, 1000 * ONE))
"""

from decimal import Decimal

from balancer_sdk.pools.snapshot import PoolSnapshot, PoolToken
from balancer_sdk.swaps.types import Route, RouteStep
from tests.helpers.constants import (
    ADAI,
    COMPOSABLE_POOL,
    COMPOSABLE_POOL_ID,
    DAI,
    EURS,
    FX_POOL,
    FX_POOL_ID,
    GYRO_POOL,
    GYRO_POOL_ID,
    LINEAR_POOL,
    LINEAR_POOL_ID,
    ONE,
    STABLE_POOL,
    STABLE_POOL_ID,
    USDC,
    USDT,
    WEIGHTED_POOL,
    WEIGHTED_POOL_ID,
    WETH,
    WSTETH,
)


def make_weighted_pool(
    tokens: tuple[str, ...] = (WETH, DAI),
    balances: tuple[int, ...] = (1000 * ONE, 1000 * ONE),
    weights: tuple[str, ...] = ("0.5", "0.5"),
    decimals: tuple[int, ...] | None = None,
    swap_fee: str = "0",
    total_shares: int = 2000 * ONE,
    pool_type: str = "Weighted",
    paused: bool = False,
) -> PoolSnapshot:
    """Create a weighted pool snapshot.

    Defaults to a fee-less 50/50 pool of 1000 WETH and 1000 DAI, so the
    arithmetic in tests is easy to follow.
    """
    decimals = decimals or tuple(18 for _ in tokens)
    return PoolSnapshot(
        id=WEIGHTED_POOL_ID,
        address=WEIGHTED_POOL,
        pool_type=pool_type,
        tokens=tuple(
            PoolToken(address=t, balance=b, decimals=d, weight=Decimal(w))
            for t, b, w, d in zip(tokens, balances, weights, decimals, strict=True)
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=total_shares,
        paused=paused,
    )


def make_stable_pool(
    balances: tuple[int, ...] = (1000 * ONE, 1000 * 10**6, 1000 * 10**6),
    amp: str = "100",
    swap_fee: str = "0",
    total_shares: int = 3000 * ONE,
    pool_type: str = "Stable",
) -> PoolSnapshot:
    """Create a DAI/USDC/USDT stable pool snapshot."""
    return PoolSnapshot(
        id=STABLE_POOL_ID,
        address=STABLE_POOL,
        pool_type=pool_type,
        tokens=(
            PoolToken(address=DAI, balance=balances[0], decimals=18),
            PoolToken(address=USDC, balance=balances[1], decimals=6),
            PoolToken(address=USDT, balance=balances[2], decimals=6),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=total_shares,
        amp=Decimal(amp),
    )


def make_composable_stable_pool(
    balances: tuple[int, int] = (1000 * ONE, 1000 * ONE),
    rates: tuple[str, str] = ("1", "1"),
    amp: str = "50",
    swap_fee: str = "0",
    virtual_supply: int = 2000 * ONE,
    pool_type: str = "ComposableStable",
) -> PoolSnapshot:
    """Create a WETH/wstETH composable stable pool holding its own BPT at index 1."""
    return PoolSnapshot(
        id=COMPOSABLE_POOL_ID,
        address=COMPOSABLE_POOL,
        pool_type=pool_type,
        tokens=(
            PoolToken(address=WETH, balance=balances[0], price_rate=Decimal(rates[0])),
            # Pre-minted BPT held by the pool; ignored by the math
            PoolToken(address=COMPOSABLE_POOL, balance=2**111),
            PoolToken(address=WSTETH, balance=balances[1], price_rate=Decimal(rates[1])),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=virtual_supply,
        amp=Decimal(amp),
    )


def make_linear_pool(
    main_balance: int = 2000 * ONE,
    wrapped_balance: int = 1000 * ONE,
    wrapped_rate: str = "1.1",
    lower_target: str = "1000",
    upper_target: str = "5000",
    swap_fee: str = "0.01",
    virtual_supply: int = 3100 * ONE,
    pool_type: str = "AaveLinear",
) -> PoolSnapshot:
    """Create a DAI/aDAI linear pool: main at index 0, BPT at 1, wrapped at 2."""
    return PoolSnapshot(
        id=LINEAR_POOL_ID,
        address=LINEAR_POOL,
        pool_type=pool_type,
        tokens=(
            PoolToken(address=DAI, balance=main_balance),
            PoolToken(address=LINEAR_POOL, balance=2**111),
            PoolToken(address=ADAI, balance=wrapped_balance, price_rate=Decimal(wrapped_rate)),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=virtual_supply,
        lower_target=Decimal(lower_target),
        upper_target=Decimal(upper_target),
        main_index=0,
        wrapped_index=2,
    )


def make_gyro2_pool(
    balances: tuple[int, int] = (1000 * ONE, 1000 * 10**6),
    sqrt_alpha: str = "0.97",
    sqrt_beta: str = "1.03",
    swap_fee: str = "0",
    total_shares: int = 2000 * ONE,
) -> PoolSnapshot:
    """Create a DAI/USDC 2-CLP snapshot."""
    return PoolSnapshot(
        id=GYRO_POOL_ID,
        address=GYRO_POOL,
        pool_type="Gyro2",
        tokens=(
            PoolToken(address=DAI, balance=balances[0]),
            PoolToken(address=USDC, balance=balances[1], decimals=6),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=total_shares,
        sqrt_alpha=Decimal(sqrt_alpha),
        sqrt_beta=Decimal(sqrt_beta),
    )


def make_gyro3_pool(
    balances: tuple[int, int, int] = (1000 * ONE, 1000 * 10**6, 1000 * 10**6),
    root3_alpha: str = "0.99",
    swap_fee: str = "0",
    total_shares: int = 3000 * ONE,
    pool_type: str = "Gyro3",
) -> PoolSnapshot:
    """Create a DAI/USDC/USDT 3-CLP snapshot."""
    return PoolSnapshot(
        id=GYRO_POOL_ID,
        address=GYRO_POOL,
        pool_type=pool_type,
        tokens=(
            PoolToken(address=DAI, balance=balances[0]),
            PoolToken(address=USDC, balance=balances[1], decimals=6),
            PoolToken(address=USDT, balance=balances[2], decimals=6),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=total_shares,
        root3_alpha=Decimal(root3_alpha),
    )


def make_fx_pool(
    balances: tuple[int, int] = (1_000_000 * 10**6, 925_000 * 10**2),
    token_rates: tuple[str, str] = ("1", "1.08"),
    swap_fee: str = "0",
    total_shares: int = 2_000_000 * ONE,
) -> PoolSnapshot:
    """Create a USDC/EURS FX pool with USD numeraire rates."""
    return PoolSnapshot(
        id=FX_POOL_ID,
        address=FX_POOL,
        pool_type="FX",
        tokens=(
            PoolToken(
                address=USDC, balance=balances[0], decimals=6, token_rate=Decimal(token_rates[0])
            ),
            PoolToken(
                address=EURS, balance=balances[1], decimals=2, token_rate=Decimal(token_rates[1])
            ),
        ),
        swap_fee=Decimal(swap_fee),
        total_shares=total_shares,
    )


def make_route(
    token_in: str = WETH,
    token_out: str = DAI,
    swap_amount: int = 1000,
    return_amount: int = 500,
    hops: tuple[tuple[str, int, int, int], ...] | None = None,
    token_addresses: tuple[str, ...] | None = None,
) -> Route:
    """Create a route; defaults to a single WETH -> DAI hop through the weighted pool.

    Args:
        hops: (pool_id, asset_in_index, asset_out_index, amount) per step
    """
    if token_addresses is None:
        token_addresses = (token_in, token_out)
    if hops is None:
        hops = ((WEIGHTED_POOL_ID, 0, 1, swap_amount),)
    return Route(
        token_in=token_in,
        token_out=token_out,
        token_addresses=token_addresses,
        swaps=tuple(RouteStep(pool_id, i, j, amount) for pool_id, i, j, amount in hops),
        swap_amount=swap_amount,
        return_amount=return_amount,
    )
