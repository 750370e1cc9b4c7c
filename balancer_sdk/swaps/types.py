"""Swap value types.

Mirror the Vault's swap structs. Amounts are raw integers in each token's
native decimals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class SwapType(IntEnum):
    """Vault swap kind: which side of the trade is fixed."""

    SWAP_EXACT_IN = 0  # GIVEN_IN
    SWAP_EXACT_OUT = 1  # GIVEN_OUT


@dataclass(frozen=True)
class RouteStep:
    """One hop of a route (the Vault's BatchSwapStep).

    `amount` is the fixed amount for this hop; 0 means "use the previous
    hop's output" in a multihop batch.
    """

    pool_id: str
    asset_in_index: int
    asset_out_index: int
    amount: int
    user_data: str = "0x"


@dataclass(frozen=True)
class Route:
    """A route found by a route provider.

    Attributes:
        token_in / token_out: Trade tokens
        token_addresses: Asset list referenced by the steps' indices
        swaps: Hops, in execution order
        swap_amount: Fixed-side amount (token_in for ExactIn, token_out for
            ExactOut)
        return_amount: Expected amount on the other side
    """

    token_in: str
    token_out: str
    token_addresses: tuple[str, ...]
    swaps: tuple[RouteStep, ...]
    swap_amount: int
    return_amount: int


@dataclass(frozen=True)
class FundManagement:
    sender: str
    recipient: str
    from_internal_balance: bool = False
    to_internal_balance: bool = False


@dataclass(frozen=True)
class SingleSwap:
    pool_id: str
    kind: SwapType
    asset_in: str
    asset_out: str
    amount: int
    user_data: str = "0x"


# The Vault's BatchSwapStep has exactly a route step's fields
BatchSwapStep = RouteStep


@dataclass(frozen=True)
class SwapAttributes:
    """A ready-to-send Vault call.

    Attributes:
        to: Vault address
        function_name: "swap" or "batchSwap"
        data: ABI-encoded calldata (0x-prefixed)
        value: Native asset amount to attach
        limits: Slippage-bounded Vault deltas aligned with the route's token
            addresses
        attributes: Decoded call arguments, for display and re-encoding
    """

    to: str
    function_name: str
    data: str
    value: int = 0
    limits: list[int] = field(default_factory=list)
    attributes: dict = field(default_factory=dict, compare=False)

