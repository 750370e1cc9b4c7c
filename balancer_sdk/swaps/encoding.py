"""Balancer Vault calldata encoding.

Encodes swap, batchSwap, joinPool and exitPool calls and the pool-specific
userData blobs that select a join/exit kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from balancer_sdk.constants import RECOVERY_MODE_EXIT_KIND
from balancer_sdk.errors import UnsupportedOperation
from balancer_sdk.models.types import normalize_address

from .types import BatchSwapStep, FundManagement, SingleSwap, SwapType

# Function selectors for the Vault
# swap((bytes32,uint8,address,address,uint256,bytes),(address,bool,address,bool),uint256,uint256)
SWAP_SELECTOR = bytes.fromhex("52bbbe29")

# batchSwap(uint8,(bytes32,uint256,uint256,uint256,bytes)[],address[],(address,bool,address,bool),int256[],uint256)
BATCH_SWAP_SELECTOR = bytes.fromhex("945bcec9")

# joinPool(bytes32,address,address,(address[],uint256[],bytes,bool))
JOIN_POOL_SELECTOR = bytes.fromhex("b95cac28")

# exitPool(bytes32,address,address,(address[],uint256[],bytes,bool))
EXIT_POOL_SELECTOR = bytes.fromhex("8bdb3913")

_FUNDS_TYPE = "(address,bool,address,bool)"


def _address(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address)[2:])


def _bytes32(value: str) -> bytes:
    raw = bytes.fromhex(value.removeprefix("0x"))
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}: {value}")
    return raw


def _hex_bytes(value: str) -> bytes:
    return bytes.fromhex(value.removeprefix("0x"))


def _funds(funds: FundManagement) -> tuple:
    return (
        _address(funds.sender),
        funds.from_internal_balance,
        _address(funds.recipient),
        funds.to_internal_balance,
    )


def encode_swap(single: SingleSwap, funds: FundManagement, limit: int, deadline: int) -> str:
    """Encode Vault.swap calldata as a 0x-prefixed hex string."""
    from eth_abi import encode  # type: ignore[attr-defined]

    encoded = encode(
        ["(bytes32,uint8,address,address,uint256,bytes)", _FUNDS_TYPE, "uint256", "uint256"],
        [
            (
                _bytes32(single.pool_id),
                int(single.kind),
                _address(single.asset_in),
                _address(single.asset_out),
                single.amount,
                _hex_bytes(single.user_data),
            ),
            _funds(funds),
            limit,
            deadline,
        ],
    )
    return "0x" + (SWAP_SELECTOR + encoded).hex()


def encode_batch_swap(
    kind: SwapType,
    steps: list[BatchSwapStep],
    assets: list[str],
    funds: FundManagement,
    limits: list[int],
    deadline: int,
) -> str:
    """Encode Vault.batchSwap calldata as a 0x-prefixed hex string."""
    from eth_abi import encode  # type: ignore[attr-defined]

    encoded = encode(
        [
            "uint8",
            "(bytes32,uint256,uint256,uint256,bytes)[]",
            "address[]",
            _FUNDS_TYPE,
            "int256[]",
            "uint256",
        ],
        [
            int(kind),
            [
                (
                    _bytes32(step.pool_id),
                    step.asset_in_index,
                    step.asset_out_index,
                    step.amount,
                    _hex_bytes(step.user_data),
                )
                for step in steps
            ],
            [_address(asset) for asset in assets],
            _funds(funds),
            list(limits),
            deadline,
        ],
    )
    return "0x" + (BATCH_SWAP_SELECTOR + encoded).hex()


def encode_join_pool(
    pool_id: str,
    sender: str,
    recipient: str,
    assets: list[str],
    max_amounts_in: list[int],
    user_data: bytes,
    from_internal_balance: bool = False,
) -> str:
    """Encode Vault.joinPool calldata as a 0x-prefixed hex string."""
    from eth_abi import encode  # type: ignore[attr-defined]

    encoded = encode(
        ["bytes32", "address", "address", "(address[],uint256[],bytes,bool)"],
        [
            _bytes32(pool_id),
            _address(sender),
            _address(recipient),
            (
                [_address(asset) for asset in assets],
                list(max_amounts_in),
                user_data,
                from_internal_balance,
            ),
        ],
    )
    return "0x" + (JOIN_POOL_SELECTOR + encoded).hex()


def encode_exit_pool(
    pool_id: str,
    sender: str,
    recipient: str,
    assets: list[str],
    min_amounts_out: list[int],
    user_data: bytes,
    to_internal_balance: bool = False,
) -> str:
    """Encode Vault.exitPool calldata as a 0x-prefixed hex string."""
    from eth_abi import encode  # type: ignore[attr-defined]

    encoded = encode(
        ["bytes32", "address", "address", "(address[],uint256[],bytes,bool)"],
        [
            _bytes32(pool_id),
            _address(sender),
            _address(recipient),
            (
                [_address(asset) for asset in assets],
                list(min_amounts_out),
                user_data,
                to_internal_balance,
            ),
        ],
    )
    return "0x" + (EXIT_POOL_SELECTOR + encoded).hex()


# =============================================================================
# userData
# =============================================================================


class JoinKind(str, Enum):
    EXACT_TOKENS_IN_FOR_BPT_OUT = "EXACT_TOKENS_IN_FOR_BPT_OUT"
    TOKEN_IN_FOR_EXACT_BPT_OUT = "TOKEN_IN_FOR_EXACT_BPT_OUT"
    ALL_TOKENS_IN_FOR_EXACT_BPT_OUT = "ALL_TOKENS_IN_FOR_EXACT_BPT_OUT"


class ExitKind(str, Enum):
    EXACT_BPT_IN_FOR_ONE_TOKEN_OUT = "EXACT_BPT_IN_FOR_ONE_TOKEN_OUT"
    EXACT_BPT_IN_FOR_TOKENS_OUT = "EXACT_BPT_IN_FOR_TOKENS_OUT"
    BPT_IN_FOR_EXACT_TOKENS_OUT = "BPT_IN_FOR_EXACT_TOKENS_OUT"
    RECOVERY = "RECOVERY"


@dataclass(frozen=True)
class UserDataEncoder:
    """Maps join/exit kinds to one pool family's on-chain enum values.

    A kind missing from the mapping is not supported by that family.
    """

    name: str
    join_kinds: dict[JoinKind, int]
    exit_kinds: dict[ExitKind, int]

    def supports_join(self, kind: JoinKind) -> bool:
        return kind in self.join_kinds

    def _join_kind(self, kind: JoinKind) -> int:
        if kind not in self.join_kinds:
            raise UnsupportedOperation(f"{self.name} pools do not support {kind.value} joins")
        return self.join_kinds[kind]

    def _exit_kind(self, kind: ExitKind) -> int:
        if kind not in self.exit_kinds:
            raise UnsupportedOperation(f"{self.name} pools do not support {kind.value} exits")
        return self.exit_kinds[kind]

    def join_exact_tokens_in_for_bpt_out(self, amounts_in: list[int], min_bpt_out: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._join_kind(JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT)
        return encode(["uint256", "uint256[]", "uint256"], [kind, list(amounts_in), min_bpt_out])

    def join_token_in_for_exact_bpt_out(self, bpt_out: int, token_index: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._join_kind(JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT)
        return encode(["uint256", "uint256", "uint256"], [kind, bpt_out, token_index])

    def join_all_tokens_in_for_exact_bpt_out(self, bpt_out: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._join_kind(JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT)
        return encode(["uint256", "uint256"], [kind, bpt_out])

    def exit_exact_bpt_in_for_one_token_out(self, bpt_in: int, token_index: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._exit_kind(ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT)
        return encode(["uint256", "uint256", "uint256"], [kind, bpt_in, token_index])

    def exit_exact_bpt_in_for_tokens_out(self, bpt_in: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._exit_kind(ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT)
        return encode(["uint256", "uint256"], [kind, bpt_in])

    def exit_bpt_in_for_exact_tokens_out(self, amounts_out: list[int], max_bpt_in: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._exit_kind(ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT)
        return encode(["uint256", "uint256[]", "uint256"], [kind, list(amounts_out), max_bpt_in])

    def exit_recovery(self, bpt_in: int) -> bytes:
        from eth_abi import encode  # type: ignore[attr-defined]

        kind = self._exit_kind(ExitKind.RECOVERY)
        return encode(["uint256", "uint256"], [kind, bpt_in])


WEIGHTED_ENCODER = UserDataEncoder(
    name="Weighted",
    join_kinds={
        JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT: 1,
        JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT: 2,
        JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT: 3,
    },
    exit_kinds={
        ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT: 0,
        ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT: 1,
        ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT: 2,
        ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND,
    },
)

# Legacy stable and metastable pools have no proportional join kind
STABLE_ENCODER = UserDataEncoder(
    name="Stable",
    join_kinds={
        JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT: 1,
        JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT: 2,
    },
    exit_kinds={
        ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT: 0,
        ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT: 1,
        ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT: 2,
        ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND,
    },
)

COMPOSABLE_STABLE_ENCODER = UserDataEncoder(
    name="ComposableStable",
    join_kinds={
        JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT: 1,
        JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT: 2,
        JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT: 3,
    },
    exit_kinds={
        ExitKind.EXACT_BPT_IN_FOR_ONE_TOKEN_OUT: 0,
        ExitKind.BPT_IN_FOR_EXACT_TOKENS_OUT: 1,
        ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT: 2,
        ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND,
    },
)

# Phantom pools share the composable layout but predate its all-tokens join
STABLE_PHANTOM_ENCODER = UserDataEncoder(
    name="StablePhantom",
    join_kinds={
        JoinKind.EXACT_TOKENS_IN_FOR_BPT_OUT: 1,
        JoinKind.TOKEN_IN_FOR_EXACT_BPT_OUT: 2,
    },
    exit_kinds=COMPOSABLE_STABLE_ENCODER.exit_kinds,
)

# Gyro pools only accept proportional joins and exits
GYRO_ENCODER = UserDataEncoder(
    name="Gyro",
    join_kinds={JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT: 3},
    exit_kinds={
        ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT: 1,
        ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND,
    },
)

FX_ENCODER = UserDataEncoder(
    name="FX",
    join_kinds={JoinKind.ALL_TOKENS_IN_FOR_EXACT_BPT_OUT: 3},
    exit_kinds={
        ExitKind.EXACT_BPT_IN_FOR_TOKENS_OUT: 1,
        ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND,
    },
)

# Linear pools join and exit through swaps; only recovery exits go through exitPool
LINEAR_ENCODER = UserDataEncoder(
    name="Linear",
    join_kinds={},
    exit_kinds={ExitKind.RECOVERY: RECOVERY_MODE_EXIT_KIND},
)
