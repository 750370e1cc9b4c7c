"""Tests for Vault batch swap queries."""

import pytest

from balancer_sdk.constants import ZERO_ADDRESS
from balancer_sdk.swaps.query import (
    QUERY_FUNDS,
    query_batch_swap,
    query_exact_in,
    query_exact_out,
)
from balancer_sdk.swaps.types import BatchSwapStep, FundManagement, SwapType
from tests.helpers import DAI, SENDER, USDC, WETH, make_route
from tests.helpers.constants import STABLE_POOL_ID, WEIGHTED_POOL_ID


class RecordingQuerier:
    """Returns canned deltas and records each query."""

    def __init__(self, deltas: list[int]) -> None:
        self.deltas = deltas
        self.calls: list[tuple] = []

    def query_batch_swap(
        self,
        kind: SwapType,
        swaps: list[BatchSwapStep],
        assets: list[str],
        funds: FundManagement,
    ) -> list[int]:
        self.calls.append((kind, swaps, assets, funds))
        return self.deltas


class TestQueryBatchSwap:
    def test_returns_deltas(self) -> None:
        querier = RecordingQuerier([1000, -498])
        swaps = [BatchSwapStep(WEIGHTED_POOL_ID, 0, 1, 1000)]
        deltas = query_batch_swap(SwapType.SWAP_EXACT_IN, swaps, [WETH, DAI], querier)
        assert deltas == [1000, -498]

        kind, sent_swaps, assets, funds = querier.calls[0]
        assert kind == SwapType.SWAP_EXACT_IN
        assert sent_swaps == swaps
        assert assets == [WETH, DAI]
        assert funds == QUERY_FUNDS
        assert funds.sender == funds.recipient == ZERO_ADDRESS

    def test_plain_int_kind(self) -> None:
        querier = RecordingQuerier([0, 0])
        query_batch_swap(1, [], [WETH, DAI], querier)
        assert querier.calls[0][0] is SwapType.SWAP_EXACT_OUT

    def test_explicit_funds(self) -> None:
        querier = RecordingQuerier([0, 0])
        funds = FundManagement(sender=SENDER, recipient=SENDER)
        query_batch_swap(SwapType.SWAP_EXACT_IN, [], [WETH, DAI], querier, funds)
        assert querier.calls[0][3] == funds

    def test_delta_count_mismatch(self) -> None:
        with pytest.raises(ValueError, match="1 deltas for 2 assets"):
            query_batch_swap(SwapType.SWAP_EXACT_IN, [], [WETH, DAI], RecordingQuerier([5]))


class TestQueryRoute:
    def test_exact_in_maps_deltas_to_tokens(self) -> None:
        querier = RecordingQuerier([1000, -498])
        assert query_exact_in(make_route(), querier) == {WETH: 1000, DAI: -498}
        assert querier.calls[0][0] == SwapType.SWAP_EXACT_IN

    def test_exact_out(self) -> None:
        querier = RecordingQuerier([502, -1000])
        assert query_exact_out(make_route(), querier) == {WETH: 502, DAI: -1000}
        assert querier.calls[0][0] == SwapType.SWAP_EXACT_OUT

    def test_multihop_intermediate_token_nets_out(self) -> None:
        route = make_route(
            token_addresses=(WETH, USDC, DAI),
            hops=((WEIGHTED_POOL_ID, 0, 1, 1000), (STABLE_POOL_ID, 1, 2, 0)),
        )
        querier = RecordingQuerier([1000, 0, -497])
        deltas = query_exact_in(route, querier)
        assert deltas == {WETH: 1000, USDC: 0, DAI: -497}
        assert len(querier.calls[0][1]) == 2
