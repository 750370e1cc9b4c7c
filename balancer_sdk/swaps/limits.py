"""Slippage limits for Vault swaps.

Vault deltas are signed from the Vault's point of view: positive amounts are
sent to the Vault, negative amounts are received from it. A limit bounds each
delta: the sender pays at most a positive limit and receives at least the
absolute value of a negative one.
"""

from __future__ import annotations

import structlog

from balancer_sdk.constants import BPS_DENOMINATOR, MAX_SLIPPAGE_BPS
from balancer_sdk.errors import InvalidTolerance, SlippageExceeded
from balancer_sdk.models.types import normalize_address

from .types import Route, SwapType

logger = structlog.get_logger()


def _validate_tolerance(tolerance_bps: int) -> None:
    if isinstance(tolerance_bps, bool) or not isinstance(tolerance_bps, int):
        raise InvalidTolerance(f"Tolerance must be an integer in bps, got {tolerance_bps!r}")
    if tolerance_bps < 0 or tolerance_bps > MAX_SLIPPAGE_BPS:
        raise InvalidTolerance(
            f"Tolerance must be in range [0, {MAX_SLIPPAGE_BPS}] bps, got {tolerance_bps}"
        )


def add_slippage(amount: int, tolerance_bps: int) -> int:
    """Upper bound for an amount paid: ceil(amount * (1 + t))."""
    _validate_tolerance(tolerance_bps)
    numerator = amount * (BPS_DENOMINATOR + tolerance_bps)
    return -(-numerator // BPS_DENOMINATOR)


def subtract_slippage(amount: int, tolerance_bps: int) -> int:
    """Lower bound for an amount received: floor(amount * (1 - t))."""
    _validate_tolerance(tolerance_bps)
    return amount * (BPS_DENOMINATOR - tolerance_bps) // BPS_DENOMINATOR


def compute_limits(deltas: list[int], tolerance_bps: int) -> list[int]:
    """Scale every delta in the unfavourable direction by the tolerance.

    Positive deltas (paid) round up, negative deltas (received) round toward
    zero, zero deltas stay zero. A tolerance of 0 returns the deltas unchanged.

    Raises:
        InvalidTolerance: If tolerance_bps is outside [0, 10000]
    """
    _validate_tolerance(tolerance_bps)
    limits = []
    for delta in deltas:
        if delta > 0:
            limits.append(add_slippage(delta, tolerance_bps))
        elif delta < 0:
            limits.append(-subtract_slippage(-delta, tolerance_bps))
        else:
            limits.append(0)
    return limits


def get_limits_for_slippage(
    tokens_in: list[str],
    tokens_out: list[str],
    swap_type: SwapType,
    deltas: list[int],
    assets: list[str],
    tolerance_bps: int,
) -> list[int]:
    """Limits for a batch swap, leaving the fixed side unscaled.

    For ExactIn the amounts of `tokens_in` are exact, so only received
    amounts get slippage; for ExactOut only paid amounts do.

    Raises:
        InvalidTolerance: If tolerance_bps is outside [0, 10000]
        ValueError: If deltas and assets differ in length
    """
    if len(deltas) != len(assets):
        raise ValueError(f"Got {len(deltas)} deltas for {len(assets)} assets")

    fixed = {
        normalize_address(token)
        for token in (tokens_in if swap_type == SwapType.SWAP_EXACT_IN else tokens_out)
    }
    scaled = compute_limits(deltas, tolerance_bps)
    return [
        delta if normalize_address(asset) in fixed else limit
        for asset, delta, limit in zip(assets, deltas, scaled, strict=True)
    ]


def route_deltas(route: Route, swap_type: SwapType) -> list[int]:
    """Expected Vault deltas of a route, aligned with `route.token_addresses`."""
    if swap_type == SwapType.SWAP_EXACT_IN:
        amount_in, amount_out = route.swap_amount, route.return_amount
    else:
        amount_in, amount_out = route.return_amount, route.swap_amount

    token_in = normalize_address(route.token_in)
    token_out = normalize_address(route.token_out)
    deltas = []
    for asset in route.token_addresses:
        asset_norm = normalize_address(asset)
        if asset_norm == token_in:
            deltas.append(amount_in)
        elif asset_norm == token_out:
            deltas.append(-amount_out)
        else:
            deltas.append(0)
    return deltas


def check_limits(deltas: list[int], limits: list[int], assets: list[str] | None = None) -> None:
    """Verify that actual deltas respect previously computed limits.

    Raises:
        SlippageExceeded: If any delta exceeds its limit
    """
    if len(deltas) != len(limits):
        raise ValueError(f"Got {len(deltas)} deltas for {len(limits)} limits")
    for i, (delta, limit) in enumerate(zip(deltas, limits, strict=True)):
        if delta > limit:
            asset = assets[i] if assets is not None else i
            logger.debug("slippage_exceeded", asset=asset, delta=delta, limit=limit)
            raise SlippageExceeded(f"Delta {delta} for asset {asset} exceeds limit {limit}")
