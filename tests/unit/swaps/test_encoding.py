"""Tests for Vault calldata and userData encoding."""

import pytest
from eth_abi import decode  # type: ignore[attr-defined]

from balancer_sdk.errors import UnsupportedOperation
from balancer_sdk.swaps.encoding import (
    COMPOSABLE_STABLE_ENCODER,
    GYRO_ENCODER,
    LINEAR_ENCODER,
    STABLE_ENCODER,
    STABLE_PHANTOM_ENCODER,
    WEIGHTED_ENCODER,
    JoinKind,
    encode_batch_swap,
    encode_exit_pool,
    encode_join_pool,
    encode_swap,
)
from balancer_sdk.swaps.types import BatchSwapStep, FundManagement, SingleSwap, SwapType
from tests.helpers import DAI, ONE, RECIPIENT, SENDER, USDC, WETH
from tests.helpers.constants import STABLE_POOL_ID, WEIGHTED_POOL_ID

FUNDS = FundManagement(sender=SENDER, recipient=RECIPIENT)


def args(data: str) -> bytes:
    return bytes.fromhex(data[10:])


class TestSwap:
    def test_selector(self) -> None:
        single = SingleSwap(WEIGHTED_POOL_ID, SwapType.SWAP_EXACT_IN, WETH, DAI, ONE)
        assert encode_swap(single, FUNDS, 495, 1_700_000_000).startswith("0x52bbbe29")

    def test_arguments(self) -> None:
        single = SingleSwap(WEIGHTED_POOL_ID, SwapType.SWAP_EXACT_OUT, WETH, DAI, ONE)
        data = encode_swap(single, FUNDS, 505, 1_700_000_000)
        request, funds, limit, deadline = decode(
            [
                "(bytes32,uint8,address,address,uint256,bytes)",
                "(address,bool,address,bool)",
                "uint256",
                "uint256",
            ],
            args(data),
        )
        assert "0x" + request[0].hex() == WEIGHTED_POOL_ID
        assert request[1] == 1
        assert request[2].lower() == WETH
        assert request[3].lower() == DAI
        assert request[4] == ONE
        assert request[5] == b""
        assert funds[0].lower() == SENDER
        assert funds[2].lower() == RECIPIENT
        assert (limit, deadline) == (505, 1_700_000_000)

    def test_pool_id_must_be_32_bytes(self) -> None:
        single = SingleSwap("0x1234", SwapType.SWAP_EXACT_IN, WETH, DAI, ONE)
        with pytest.raises(ValueError, match="32 bytes"):
            encode_swap(single, FUNDS, 0, 0)


class TestBatchSwap:
    def test_signed_limits(self) -> None:
        steps = [
            BatchSwapStep(WEIGHTED_POOL_ID, 0, 1, 1000),
            BatchSwapStep(STABLE_POOL_ID, 1, 2, 0),
        ]
        data = encode_batch_swap(
            SwapType.SWAP_EXACT_IN, steps, [WETH, USDC, DAI], FUNDS, [1000, 0, -495], 123
        )
        assert data.startswith("0x945bcec9")
        kind, swaps, assets, _, limits, deadline = decode(
            [
                "uint8",
                "(bytes32,uint256,uint256,uint256,bytes)[]",
                "address[]",
                "(address,bool,address,bool)",
                "int256[]",
                "uint256",
            ],
            args(data),
        )
        assert kind == 0
        assert [swap[1:4] for swap in swaps] == [(0, 1, 1000), (1, 2, 0)]
        assert [asset.lower() for asset in assets] == [WETH, USDC, DAI]
        assert list(limits) == [1000, 0, -495]
        assert deadline == 123


class TestJoinExitPool:
    def test_join_selector(self) -> None:
        data = encode_join_pool(WEIGHTED_POOL_ID, SENDER, SENDER, [WETH, DAI], [1, 2], b"")
        assert data.startswith("0xb95cac28")

    def test_exit_selector(self) -> None:
        data = encode_exit_pool(WEIGHTED_POOL_ID, SENDER, SENDER, [WETH, DAI], [1, 2], b"")
        assert data.startswith("0x8bdb3913")

    def test_join_request_tuple(self) -> None:
        user_data = WEIGHTED_ENCODER.join_all_tokens_in_for_exact_bpt_out(ONE)
        data = encode_join_pool(WEIGHTED_POOL_ID, SENDER, RECIPIENT, [WETH, DAI], [5, 6], user_data)
        _, sender, recipient, request = decode(
            ["bytes32", "address", "address", "(address[],uint256[],bytes,bool)"], args(data)
        )
        assert sender.lower() == SENDER
        assert recipient.lower() == RECIPIENT
        assert list(request[1]) == [5, 6]
        assert request[2] == user_data
        assert request[3] is False


class TestUserData:
    def test_weighted_kinds(self) -> None:
        assert decode(
            ["uint256", "uint256[]", "uint256"],
            WEIGHTED_ENCODER.join_exact_tokens_in_for_bpt_out([1, 2], 3),
        ) == (1, (1, 2), 3)
        assert decode(
            ["uint256", "uint256", "uint256"],
            WEIGHTED_ENCODER.join_token_in_for_exact_bpt_out(ONE, 1),
        ) == (2, ONE, 1)
        assert decode(
            ["uint256", "uint256"], WEIGHTED_ENCODER.exit_exact_bpt_in_for_tokens_out(ONE)
        ) == (1, ONE)

    def test_composable_exit_kinds(self) -> None:
        assert decode(
            ["uint256", "uint256"], COMPOSABLE_STABLE_ENCODER.exit_exact_bpt_in_for_tokens_out(ONE)
        ) == (2, ONE)
        assert decode(
            ["uint256", "uint256[]", "uint256"],
            COMPOSABLE_STABLE_ENCODER.exit_bpt_in_for_exact_tokens_out([1, 2], 3),
        ) == (1, (1, 2), 3)

    def test_recovery_kind(self) -> None:
        assert decode(["uint256", "uint256"], LINEAR_ENCODER.exit_recovery(ONE)) == (255, ONE)

    def test_stable_has_no_proportional_join(self) -> None:
        assert not STABLE_ENCODER.supports_join(JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT)
        with pytest.raises(UnsupportedOperation):
            STABLE_ENCODER.join_all_tokens_in_for_exact_bpt_out(ONE)

    def test_stable_phantom_has_no_proportional_join(self) -> None:
        assert not STABLE_PHANTOM_ENCODER.supports_join(JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT)
        with pytest.raises(UnsupportedOperation, match="StablePhantom"):
            STABLE_PHANTOM_ENCODER.join_all_tokens_in_for_exact_bpt_out(ONE)
        assert decode(
            ["uint256", "uint256[]", "uint256"],
            STABLE_PHANTOM_ENCODER.join_exact_tokens_in_for_bpt_out([1, 2], 3),
        ) == (1, (1, 2), 3)
        assert decode(
            ["uint256", "uint256"], STABLE_PHANTOM_ENCODER.exit_exact_bpt_in_for_tokens_out(ONE)
        ) == (2, ONE)

    def test_gyro_rejects_single_token(self) -> None:
        with pytest.raises(UnsupportedOperation, match="Gyro"):
            GYRO_ENCODER.exit_exact_bpt_in_for_one_token_out(ONE, 0)

    def test_linear_has_no_proportional_exit(self) -> None:
        with pytest.raises(UnsupportedOperation):
            LINEAR_ENCODER.exit_exact_bpt_in_for_tokens_out(ONE)
