"""Pool snapshot and join/exit value types.

All types here are frozen: a snapshot is an immutable view of on-chain pool
state supplied by the caller, and every join/exit produces a fresh result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Protocol

from balancer_sdk.constants import ZERO_ADDRESS
from balancer_sdk.errors import InvalidFeeError
from balancer_sdk.models.types import normalize_address


class PoolType(str, Enum):
    """Closed set of pool type tags understood by the dispatcher."""

    WEIGHTED = "Weighted"
    INVESTMENT = "Investment"
    LIQUIDITY_BOOTSTRAPPING = "LiquidityBootstrapping"
    STABLE = "Stable"
    META_STABLE = "MetaStable"
    COMPOSABLE_STABLE = "ComposableStable"
    STABLE_PHANTOM = "StablePhantom"
    LINEAR = "Linear"
    AAVE_LINEAR = "AaveLinear"
    ERC4626_LINEAR = "ERC4626Linear"
    EULER_LINEAR = "EulerLinear"
    GEARBOX_LINEAR = "GearboxLinear"
    YEARN_LINEAR = "YearnLinear"
    BEEFY_LINEAR = "BeefyLinear"
    REAPER_LINEAR = "ReaperLinear"
    SILO_LINEAR = "SiloLinear"
    TETU_LINEAR = "TetuLinear"
    MIDAS_LINEAR = "MidasLinear"
    FX = "FX"
    GYRO2 = "Gyro2"
    GYRO3 = "Gyro3"
    GYROE = "GyroE"


@dataclass(frozen=True)
class PoolToken:
    """A token held by a pool.

    Attributes:
        address: Token address (case-insensitive comparison supported)
        balance: Raw balance (in token's native decimals)
        decimals: Token decimals, at most 18
        weight: Normalized weight for weighted pools (sum of weights = 1)
        price_rate: Rate provider value (MetaStable, ComposableStable, Linear
            wrapped token). Balances are multiplied by it before pool math.
        token_rate: FX numeraire rate (USD value of one token)
    """

    address: str
    balance: int
    decimals: int = 18
    weight: Decimal | None = None
    price_rate: Decimal = Decimal(1)
    token_rate: Decimal | None = None


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable view of a pool's state.

    Attributes:
        id: balancerPoolId (32-byte hex string used in vault calls)
        address: Pool contract address, which is also the BPT address
        pool_type: Pool type tag (see PoolType)
        tokens: Pool tokens in vault order. Composable/phantom/linear pools
            include their own BPT here.
        swap_fee: Swap fee as decimal (e.g., 0.003 for 0.3%), in [0, 1)
        total_shares: BPT supply in wei (virtual supply for pools holding
            their own BPT)
        paused: True if the pool is inactive
        amp: Raw amplification parameter for stable-family pools (e.g. 200)
        lower_target / upper_target: Linear pool targets (main token units)
        main_index / wrapped_index: Linear pool token indices in `tokens`
        sqrt_alpha / sqrt_beta: Gyro2 price range parameters
        root3_alpha: Gyro3 price range parameter
    """

    id: str
    address: str
    pool_type: str
    tokens: tuple[PoolToken, ...]
    swap_fee: Decimal
    total_shares: int
    paused: bool = False
    amp: Decimal | None = None
    lower_target: Decimal | None = None
    upper_target: Decimal | None = None
    main_index: int | None = None
    wrapped_index: int | None = None
    sqrt_alpha: Decimal | None = None
    sqrt_beta: Decimal | None = None
    root3_alpha: Decimal | None = None

    def __post_init__(self) -> None:
        if self.swap_fee < 0 or self.swap_fee >= 1:
            raise InvalidFeeError(f"Swap fee must be in range [0, 1), got {self.swap_fee}")
        for token in self.tokens:
            if token.balance < 0:
                raise ValueError(f"Negative balance for {token.address}: {token.balance}")

    @property
    def bpt_index(self) -> int | None:
        """Index of the pool's own BPT within `tokens`, if present."""
        pool_address = normalize_address(self.address)
        for i, token in enumerate(self.tokens):
            if normalize_address(token.address) == pool_address:
                return i
        return None

    @property
    def pool_tokens(self) -> tuple[PoolToken, ...]:
        """Tokens excluding the pool's own BPT."""
        bpt_index = self.bpt_index
        if bpt_index is None:
            return self.tokens
        return self.tokens[:bpt_index] + self.tokens[bpt_index + 1 :]

    def token_index(self, token: str) -> int:
        """Index of a token within `pool_tokens`.

        Raises:
            ValueError: If the token is not in the pool
        """
        token_norm = normalize_address(token)
        for i, pool_token in enumerate(self.pool_tokens):
            if normalize_address(pool_token.address) == token_norm:
                return i
        raise ValueError(f"Token {token} not in pool {self.id}")


class SnapshotProvider(Protocol):
    """Source of pool state (subgraph, node, fixture), provided by the caller."""

    def get_pool(self, pool_id: str, block: int | None = None) -> PoolSnapshot | None: ...


@dataclass(frozen=True)
class JoinRequest:
    """Parameters of a join.

    Variants, in order of precedence:
    - `token_index` and `bpt_amount`: single token in for exact BPT out
    - `bpt_amount` (with or without `proportional`): all tokens in for
      exact BPT out
    - `proportional` and `amounts`: proportional join limited by the
      smallest amount/balance ratio
    - `amounts`: exact tokens in for BPT out

    `amounts` is ordered like `PoolSnapshot.pool_tokens` (no BPT entry).
    """

    amounts: tuple[int, ...] = ()
    bpt_amount: int | None = None
    proportional: bool = False
    token_index: int | None = None
    slippage_bps: int = 0
    sender: str = ZERO_ADDRESS
    recipient: str | None = None
    use_native_asset: bool = False


@dataclass(frozen=True)
class ExitRequest:
    """Parameters of an exit.

    Variants, in order of precedence:
    - `token_index` and `bpt_amount`: exact BPT in for one token out
    - `bpt_amount`: exact BPT in for proportional tokens out
    - `amounts`: BPT in for exact tokens out
    """

    amounts: tuple[int, ...] = ()
    bpt_amount: int | None = None
    token_index: int | None = None
    slippage_bps: int = 0
    sender: str = ZERO_ADDRESS
    recipient: str | None = None
    use_native_asset: bool = False


@dataclass(frozen=True)
class JoinResult:
    """Outcome of a join calculation and its vault call.

    `bpt_out`/`amounts_in` are the expected values; `min_bpt_out` and
    `max_amounts_in` are the bounds that hold under the requested slippage.
    """

    kind: str
    bpt_out: int
    min_bpt_out: int
    amounts_in: tuple[int, ...]
    max_amounts_in: tuple[int, ...]
    to: str
    function_name: str
    data: str
    value: int
    assets: tuple[str, ...]
    price_impact: Decimal
    attributes: dict = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ExitResult:
    """Outcome of an exit calculation and its vault call.

    `bpt_in`/`amounts_out` are the expected values; `max_bpt_in` and
    `min_amounts_out` are the bounds that hold under the requested slippage.
    """

    kind: str
    bpt_in: int
    max_bpt_in: int
    amounts_out: tuple[int, ...]
    min_amounts_out: tuple[int, ...]
    to: str
    function_name: str
    data: str
    value: int
    assets: tuple[str, ...]
    price_impact: Decimal
    attributes: dict = field(default_factory=dict, compare=False)
