"""Vault swap queries.

Simulate a batch swap through Vault.queryBatchSwap and report the net asset
deltas. The call itself (usually an eth_call against a node) is made by a
caller-provided querier; this module only shapes its inputs and outputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import structlog

from balancer_sdk.constants import ZERO_ADDRESS

from .types import BatchSwapStep, FundManagement, Route, SwapType

logger = structlog.get_logger()

# queryBatchSwap ignores who pays; the zero address keeps queries wallet-free
QUERY_FUNDS = FundManagement(sender=ZERO_ADDRESS, recipient=ZERO_ADDRESS)


class BatchSwapQuerier(Protocol):
    """Vault.queryBatchSwap, provided by the caller."""

    def query_batch_swap(
        self,
        kind: SwapType,
        swaps: list[BatchSwapStep],
        assets: list[str],
        funds: FundManagement,
    ) -> list[int]: ...


def query_batch_swap(
    kind: SwapType,
    swaps: Sequence[BatchSwapStep],
    assets: Sequence[str],
    querier: BatchSwapQuerier,
    funds: FundManagement = QUERY_FUNDS,
) -> list[int]:
    """Net Vault deltas of a batch swap, aligned with `assets`.

    Positive amounts are sent to the Vault, negative amounts leave it.

    Raises:
        ValueError: If the querier does not return one delta per asset
    """
    raw = querier.query_batch_swap(SwapType(kind), list(swaps), list(assets), funds)
    deltas = [int(delta) for delta in raw]
    if len(deltas) != len(assets):
        raise ValueError(f"Query returned {len(deltas)} deltas for {len(assets)} assets")
    logger.debug("batch_swap_queried", kind=SwapType(kind).name, hops=len(swaps), deltas=deltas)
    return deltas


def _asset_deltas(route: Route, kind: SwapType, querier: BatchSwapQuerier) -> dict[str, int]:
    deltas = query_batch_swap(kind, route.swaps, route.token_addresses, querier)
    return dict(zip(route.token_addresses, deltas, strict=True))


def query_exact_in(route: Route, querier: BatchSwapQuerier) -> dict[str, int]:
    """Vault deltas per token address of selling the route's swap amount."""
    return _asset_deltas(route, SwapType.SWAP_EXACT_IN, querier)


def query_exact_out(route: Route, querier: BatchSwapQuerier) -> dict[str, int]:
    """Vault deltas per token address of buying the route's swap amount."""
    return _asset_deltas(route, SwapType.SWAP_EXACT_OUT, querier)
