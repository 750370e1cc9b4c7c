"""Simple flash swaps.

A simple flash swap is a two-token, two-pool arbitrage: swap in the first pool
and back in the second, keeping the profit. Limits are zero, so the batch
only succeeds if neither asset leaves the sender's account.
"""

from __future__ import annotations

from dataclasses import dataclass

from balancer_sdk.constants import MAX_DEADLINE
from balancer_sdk.models.types import normalize_address

from .encoding import encode_batch_swap
from .query import BatchSwapQuerier, query_batch_swap
from .types import BatchSwapStep, FundManagement, SwapType


@dataclass(frozen=True)
class SimpleFlashSwap:
    flash_loan_amount: int
    pool_ids: tuple[str, str]
    assets: tuple[str, str]
    wallet_address: str


@dataclass(frozen=True)
class BatchSwapParams:
    kind: SwapType
    swaps: list[BatchSwapStep]
    assets: list[str]
    funds: FundManagement
    limits: list[int]
    deadline: int


@dataclass(frozen=True)
class FlashSwapQuote:
    profits: dict[str, int]
    is_profitable: bool


def to_batch_swap(params: SimpleFlashSwap) -> BatchSwapParams:
    """Batch swap parameters of a simple flash swap.

    Raises:
        ValueError: If both assets are the same token
    """
    asset_0 = normalize_address(params.assets[0])
    asset_1 = normalize_address(params.assets[1])
    if asset_0 == asset_1:
        raise ValueError("Simple flash swaps need two different assets")

    wallet = normalize_address(params.wallet_address)
    return BatchSwapParams(
        kind=SwapType.SWAP_EXACT_IN,
        swaps=[
            BatchSwapStep(params.pool_ids[0], 0, 1, params.flash_loan_amount),
            BatchSwapStep(params.pool_ids[1], 1, 0, 0),
        ],
        assets=[asset_0, asset_1],
        funds=FundManagement(sender=wallet, recipient=wallet),
        limits=[0, 0],
        deadline=MAX_DEADLINE,
    )


def encode_simple_flash_swap(params: SimpleFlashSwap) -> str:
    batch = to_batch_swap(params)
    return encode_batch_swap(
        batch.kind, batch.swaps, batch.assets, batch.funds, batch.limits, batch.deadline
    )


def query_simple_flash_swap(params: SimpleFlashSwap, querier: BatchSwapQuerier) -> FlashSwapQuote:
    """Profit per asset of a simple flash swap, from a Vault query."""
    batch = to_batch_swap(params)
    deltas = query_batch_swap(batch.kind, batch.swaps, batch.assets, querier, batch.funds)
    # Negative deltas leave the Vault, i.e. reach the wallet
    profits = {asset: -delta for asset, delta in zip(batch.assets, deltas, strict=True)}
    return FlashSwapQuote(
        profits=profits,
        is_profitable=all(profit > 0 for profit in profits.values()),
    )
