"""API endpoints for pool operations and swap building."""

import structlog
from fastapi import APIRouter, Depends

from balancer_sdk.concerns import resolve
from balancer_sdk.config import NetworkConfig, default_network_config, get_network_config
from balancer_sdk.models.api import (
    ExitRequestModel,
    ExitResponse,
    JoinRequestModel,
    JoinResponse,
    LimitsRequest,
    LimitsResponse,
    PriceImpactRequest,
    PriceImpactResponse,
    RouteModel,
    SpotPriceRequest,
    SpotPriceResponse,
    SwapBuildRequest,
    SwapBuildResponse,
)
from balancer_sdk.pools.parsing import parse_pool, parse_pools
from balancer_sdk.pools.snapshot import ExitRequest, JoinRequest
from balancer_sdk.swaps.builder import build_swap
from balancer_sdk.swaps.limits import compute_limits, get_limits_for_slippage
from balancer_sdk.swaps.types import Route, RouteStep, SwapType

logger = structlog.get_logger()

router = APIRouter()


def get_network(network: str | None = None) -> NetworkConfig:
    """Dependency provider for the network configuration.

    `?network=` selects a network by name or chain id; without it the
    BALANCER_NETWORK default applies. Override in tests with:
        app.dependency_overrides[get_network] = lambda: config
    """
    if network is None:
        return default_network_config()
    return get_network_config(network)


@router.post("/pools/join")
def join_pool(
    body: JoinRequestModel, network_config: NetworkConfig = Depends(get_network)
) -> JoinResponse:
    """Expected amounts, slippage bounds and Vault calldata of a join."""
    snapshot = parse_pool(body.pool)
    concerns = resolve(snapshot.pool_type, network_config)
    result = concerns.join.join(
        snapshot,
        JoinRequest(
            amounts=tuple(body.amounts),
            bpt_amount=body.bpt_amount,
            proportional=body.proportional,
            token_index=body.token_index,
            slippage_bps=body.slippage_bps,
            sender=body.sender,
            recipient=body.recipient,
            use_native_asset=body.use_native_asset,
        ),
    )
    logger.info("join_built", pool_id=snapshot.id, kind=result.kind, bpt_out=result.bpt_out)
    return JoinResponse(
        to=result.to,
        function_name=result.function_name,
        data=result.data,
        value=result.value,
        kind=result.kind,
        bpt_out=result.bpt_out,
        min_bpt_out=result.min_bpt_out,
        amounts_in=list(result.amounts_in),
        max_amounts_in=list(result.max_amounts_in),
        assets=list(result.assets),
        price_impact=str(result.price_impact),
    )


@router.post("/pools/exit")
def exit_pool(
    body: ExitRequestModel, network_config: NetworkConfig = Depends(get_network)
) -> ExitResponse:
    """Expected amounts, slippage bounds and Vault calldata of an exit."""
    snapshot = parse_pool(body.pool)
    concerns = resolve(snapshot.pool_type, network_config)
    result = concerns.exit.exit(
        snapshot,
        ExitRequest(
            amounts=tuple(body.amounts),
            bpt_amount=body.bpt_amount,
            token_index=body.token_index,
            slippage_bps=body.slippage_bps,
            sender=body.sender,
            recipient=body.recipient,
            use_native_asset=body.use_native_asset,
        ),
    )
    logger.info("exit_built", pool_id=snapshot.id, kind=result.kind, bpt_in=result.bpt_in)
    return ExitResponse(
        to=result.to,
        function_name=result.function_name,
        data=result.data,
        value=result.value,
        kind=result.kind,
        bpt_in=result.bpt_in,
        max_bpt_in=result.max_bpt_in,
        amounts_out=list(result.amounts_out),
        min_amounts_out=list(result.min_amounts_out),
        assets=list(result.assets),
        price_impact=str(result.price_impact),
    )


@router.post("/pools/spot-price")
def spot_price(
    body: SpotPriceRequest, network_config: NetworkConfig = Depends(get_network)
) -> SpotPriceResponse:
    snapshot = parse_pool(body.pool)
    concerns = resolve(snapshot.pool_type, network_config)
    price = concerns.spot_price.spot_price(snapshot, body.token_in, body.token_out)
    return SpotPriceResponse(spot_price=str(price))


@router.post("/pools/price-impact")
def price_impact(
    body: PriceImpactRequest, network_config: NetworkConfig = Depends(get_network)
) -> PriceImpactResponse:
    snapshot = parse_pool(body.pool)
    concerns = resolve(snapshot.pool_type, network_config)
    impact = concerns.price_impact.price_impact(
        snapshot, list(body.amounts), body.bpt_amount, body.is_join
    )
    return PriceImpactResponse(price_impact=str(impact))


def _route(model: RouteModel) -> Route:
    return Route(
        token_in=model.token_in,
        token_out=model.token_out,
        token_addresses=tuple(model.token_addresses),
        swaps=tuple(
            RouteStep(
                pool_id=step.pool_id,
                asset_in_index=step.asset_in_index,
                asset_out_index=step.asset_out_index,
                amount=step.amount,
                user_data=step.user_data,
            )
            for step in model.swaps
        ),
        swap_amount=model.swap_amount,
        return_amount=model.return_amount,
    )


@router.post("/swaps/build")
def build_swap_call(
    body: SwapBuildRequest, network_config: NetworkConfig = Depends(get_network)
) -> SwapBuildResponse:
    """Bounded Vault.swap or Vault.batchSwap call for a route.

    Limits are aligned with the route's token addresses.
    """
    route = _route(body.route)
    kind = SwapType(body.kind)
    for i, step in enumerate(route.swaps):
        for index in (step.asset_in_index, step.asset_out_index):
            if index >= len(route.token_addresses):
                raise ValueError(f"Swap {i} references asset {index} outside tokenAddresses")

    swap = build_swap(
        route,
        kind,
        body.sender,
        body.deadline,
        body.slippage_bps,
        recipient=body.recipient,
        network_config=network_config,
        pools=parse_pools(body.pools),
    )
    return SwapBuildResponse(
        to=swap.to,
        function_name=swap.function_name,
        data=swap.data,
        value=swap.value,
        limits=swap.limits,
    )


@router.post("/swaps/limits")
def limits(body: LimitsRequest) -> LimitsResponse:
    """Slippage-bounded limits for expected Vault deltas."""
    if body.assets is None:
        return LimitsResponse(limits=compute_limits(body.deltas, body.slippage_bps))
    return LimitsResponse(
        limits=get_limits_for_slippage(
            body.tokens_in,
            body.tokens_out,
            SwapType(body.kind),
            body.deltas,
            body.assets,
            body.slippage_bps,
        )
    )
