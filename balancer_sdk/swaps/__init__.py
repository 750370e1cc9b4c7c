"""Swap transaction assembly: route types, limits, builders and Vault encoding."""

from balancer_sdk.swaps.builder import (
    BatchSwapBuilder,
    RouteProvider,
    SingleSwapBuilder,
    build_route_exact_in,
    build_route_exact_out,
    build_swap,
)
from balancer_sdk.swaps.flash_swap import SimpleFlashSwap, encode_simple_flash_swap
from balancer_sdk.swaps.join_exit import some_join_exit
from balancer_sdk.swaps.limits import check_limits, compute_limits, get_limits_for_slippage
from balancer_sdk.swaps.query import (
    BatchSwapQuerier,
    query_batch_swap,
    query_exact_in,
    query_exact_out,
)
from balancer_sdk.swaps.types import (
    BatchSwapStep,
    FundManagement,
    Route,
    RouteStep,
    SingleSwap,
    SwapAttributes,
    SwapType,
)

__all__ = [
    "BatchSwapBuilder",
    "BatchSwapQuerier",
    "BatchSwapStep",
    "FundManagement",
    "Route",
    "RouteProvider",
    "RouteStep",
    "SimpleFlashSwap",
    "SingleSwap",
    "SingleSwapBuilder",
    "SwapAttributes",
    "SwapType",
    "build_route_exact_in",
    "build_route_exact_out",
    "build_swap",
    "check_limits",
    "compute_limits",
    "encode_simple_flash_swap",
    "get_limits_for_slippage",
    "query_batch_swap",
    "query_exact_in",
    "query_exact_out",
    "some_join_exit",
]
