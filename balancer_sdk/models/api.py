"""Pydantic models for the HTTP API.

Field names follow the camelCase used by Balancer's subgraph and SDK; every
model also accepts the snake_case attribute names.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from balancer_sdk.models.types import Address, Bytes, Int256, PoolId, Uint256


class PoolTokenModel(BaseModel):
    """A pool token as reported by the subgraph."""

    address: Address
    balance: Uint256
    decimals: int = Field(default=18, ge=0, le=18)
    weight: Decimal | None = None
    price_rate: Decimal = Field(default=Decimal(1), alias="priceRate", gt=0)
    token_rate: Decimal | None = Field(default=None, alias="tokenRate")

    model_config = {"populate_by_name": True}


class PoolModel(BaseModel):
    """Pool state supplied by the caller."""

    id: PoolId
    address: Address
    pool_type: str = Field(alias="poolType")
    tokens: list[PoolTokenModel] = Field(min_length=1)
    swap_fee: Decimal = Field(alias="swapFee")
    total_shares: Uint256 = Field(alias="totalShares")
    paused: bool = False
    amp: Decimal | None = None
    lower_target: Decimal | None = Field(default=None, alias="lowerTarget")
    upper_target: Decimal | None = Field(default=None, alias="upperTarget")
    main_index: int | None = Field(default=None, alias="mainIndex")
    wrapped_index: int | None = Field(default=None, alias="wrappedIndex")
    sqrt_alpha: Decimal | None = Field(default=None, alias="sqrtAlpha")
    sqrt_beta: Decimal | None = Field(default=None, alias="sqrtBeta")
    root3_alpha: Decimal | None = Field(default=None, alias="root3Alpha")

    model_config = {"populate_by_name": True}


class JoinRequestModel(BaseModel):
    pool: PoolModel
    amounts: list[Uint256] = Field(default_factory=list)
    bpt_amount: Uint256 | None = Field(default=None, alias="bptAmount")
    proportional: bool = False
    token_index: int | None = Field(default=None, alias="tokenIndex", ge=0)
    slippage_bps: int = Field(default=0, alias="slippageBps", ge=0, le=10_000)
    sender: Address
    recipient: Address | None = None
    use_native_asset: bool = Field(default=False, alias="useNativeAsset")

    model_config = {"populate_by_name": True}


class ExitRequestModel(BaseModel):
    pool: PoolModel
    amounts: list[Uint256] = Field(default_factory=list)
    bpt_amount: Uint256 | None = Field(default=None, alias="bptAmount")
    token_index: int | None = Field(default=None, alias="tokenIndex", ge=0)
    slippage_bps: int = Field(default=0, alias="slippageBps", ge=0, le=10_000)
    sender: Address
    recipient: Address | None = None
    use_native_asset: bool = Field(default=False, alias="useNativeAsset")

    model_config = {"populate_by_name": True}


class VaultCallModel(BaseModel):
    """Transaction fields of a Vault call."""

    to: Address
    function_name: str = Field(alias="functionName")
    data: Bytes
    value: Uint256 = 0

    model_config = {"populate_by_name": True}


class JoinResponse(VaultCallModel):
    kind: str
    bpt_out: Uint256 = Field(alias="bptOut")
    min_bpt_out: Uint256 = Field(alias="minBptOut")
    amounts_in: list[Uint256] = Field(alias="amountsIn")
    max_amounts_in: list[Uint256] = Field(alias="maxAmountsIn")
    assets: list[Address]
    price_impact: str = Field(alias="priceImpact")


class ExitResponse(VaultCallModel):
    kind: str
    bpt_in: Uint256 = Field(alias="bptIn")
    max_bpt_in: Uint256 = Field(alias="maxBptIn")
    amounts_out: list[Uint256] = Field(alias="amountsOut")
    min_amounts_out: list[Uint256] = Field(alias="minAmountsOut")
    assets: list[Address]
    price_impact: str = Field(alias="priceImpact")


class SpotPriceRequest(BaseModel):
    pool: PoolModel
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")

    model_config = {"populate_by_name": True}


class SpotPriceResponse(BaseModel):
    # Decimal string: token_in paid per unit of token_out, fee included
    spot_price: str = Field(alias="spotPrice")

    model_config = {"populate_by_name": True}


class PriceImpactRequest(BaseModel):
    pool: PoolModel
    amounts: list[Uint256]
    bpt_amount: Uint256 = Field(alias="bptAmount")
    is_join: bool = Field(default=True, alias="isJoin")

    model_config = {"populate_by_name": True}


class PriceImpactResponse(BaseModel):
    price_impact: str = Field(alias="priceImpact")

    model_config = {"populate_by_name": True}


class RouteStepModel(BaseModel):
    pool_id: PoolId = Field(alias="poolId")
    asset_in_index: int = Field(alias="assetInIndex", ge=0)
    asset_out_index: int = Field(alias="assetOutIndex", ge=0)
    amount: Uint256
    user_data: Bytes = Field(default="0x", alias="userData")

    model_config = {"populate_by_name": True}


class RouteModel(BaseModel):
    """A route found by a smart order router."""

    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    token_addresses: list[Address] = Field(alias="tokenAddresses")
    swaps: list[RouteStepModel]
    swap_amount: Uint256 = Field(alias="swapAmount")
    return_amount: Uint256 = Field(alias="returnAmount")

    model_config = {"populate_by_name": True}


class SwapBuildRequest(BaseModel):
    route: RouteModel
    # 0 = exact in, 1 = exact out
    kind: int = Field(default=0, ge=0, le=1)
    sender: Address
    recipient: Address | None = None
    deadline: Uint256
    slippage_bps: int = Field(default=10, alias="slippageBps", ge=0, le=10_000)
    # Pools of the route, used to recognize native BPT swaps
    pools: list[PoolModel] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class SwapBuildResponse(VaultCallModel):
    limits: list[Int256]


class LimitsRequest(BaseModel):
    """Expected deltas to bound by a slippage tolerance.

    With `assets`, `kind`, `tokensIn` and `tokensOut` the fixed side of the
    trade keeps its exact delta; without them every delta is scaled.
    """

    deltas: list[Int256]
    slippage_bps: int = Field(alias="slippageBps")
    assets: list[Address] | None = None
    kind: int = Field(default=0, ge=0, le=1)
    tokens_in: list[Address] = Field(default_factory=list, alias="tokensIn")
    tokens_out: list[Address] = Field(default_factory=list, alias="tokensOut")

    model_config = {"populate_by_name": True}


class LimitsResponse(BaseModel):
    limits: list[Int256]
