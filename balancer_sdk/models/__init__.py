"""Pydantic models for the HTTP API and shared wire types."""

from balancer_sdk.models.api import (
    ExitRequestModel,
    ExitResponse,
    JoinRequestModel,
    JoinResponse,
    LimitsRequest,
    LimitsResponse,
    PoolModel,
    PoolTokenModel,
    PriceImpactRequest,
    PriceImpactResponse,
    RouteModel,
    RouteStepModel,
    SpotPriceRequest,
    SpotPriceResponse,
    SwapBuildRequest,
    SwapBuildResponse,
)
from balancer_sdk.models.types import Address, Bytes, Int256, PoolId, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes",
    "Int256",
    "PoolId",
    "Uint256",
    # Pools
    "PoolModel",
    "PoolTokenModel",
    # Join/exit
    "JoinRequestModel",
    "JoinResponse",
    "ExitRequestModel",
    "ExitResponse",
    # Prices
    "SpotPriceRequest",
    "SpotPriceResponse",
    "PriceImpactRequest",
    "PriceImpactResponse",
    # Swaps
    "RouteModel",
    "RouteStepModel",
    "SwapBuildRequest",
    "SwapBuildResponse",
    "LimitsRequest",
    "LimitsResponse",
]
