"""Pool parsing.

Converts API pool models into PoolSnapshot values, checking the parameters
each pool family needs before any math runs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from balancer_sdk.errors import InvalidFeeError
from balancer_sdk.models.types import normalize_address

from .snapshot import PoolSnapshot, PoolToken, PoolType

if TYPE_CHECKING:
    from balancer_sdk.models.api import PoolModel

logger = structlog.get_logger()

WEIGHTED_TYPES = frozenset(
    {PoolType.WEIGHTED, PoolType.INVESTMENT, PoolType.LIQUIDITY_BOOTSTRAPPING}
)
STABLE_TYPES = frozenset(
    {
        PoolType.STABLE,
        PoolType.META_STABLE,
        PoolType.COMPOSABLE_STABLE,
        PoolType.STABLE_PHANTOM,
    }
)
LINEAR_TYPES = frozenset(t for t in PoolType if t.value.endswith("Linear"))

# Allowed drift of the weight sum from 1 (subgraph weights are rounded)
WEIGHT_SUM_TOLERANCE = Decimal("0.01")


class PoolParseError(ValueError):
    """Pool model lacks parameters its family needs."""


def _fail(event: str, model: PoolModel, **fields: object) -> PoolParseError:
    logger.warning(event, pool_id=model.id, pool_type=model.pool_type, **fields)
    detail = ", ".join(f"{k}={v}" for k, v in fields.items())
    return PoolParseError(f"{event} for pool {model.id}" + (f" ({detail})" if detail else ""))


def _check_weights(model: PoolModel, bpt: str) -> None:
    weights = []
    for token in model.tokens:
        if normalize_address(token.address) == bpt:
            continue
        if token.weight is None or token.weight <= 0:
            raise _fail("weighted_pool_missing_weight", model, token=token.address)
        weights.append(token.weight)

    total_weight = sum(weights, Decimal(0))
    if abs(total_weight - 1) > WEIGHT_SUM_TOLERANCE:
        raise _fail("weighted_pool_invalid_weight_sum", model, total_weight=str(total_weight))


def _check_family(model: PoolModel, pool_type: PoolType | None, bpt: str) -> None:
    if pool_type in WEIGHTED_TYPES:
        _check_weights(model, bpt)
    elif pool_type in STABLE_TYPES:
        if model.amp is None or model.amp <= 0:
            raise _fail("stable_pool_missing_amp", model)
    elif pool_type in LINEAR_TYPES:
        if model.lower_target is None or model.upper_target is None:
            raise _fail("linear_pool_missing_targets", model)
        if model.lower_target > model.upper_target:
            raise _fail(
                "linear_pool_invalid_targets",
                model,
                lower=str(model.lower_target),
                upper=str(model.upper_target),
            )
    elif pool_type == PoolType.GYRO2:
        if model.sqrt_alpha is None or model.sqrt_beta is None:
            raise _fail("gyro2_pool_missing_price_range", model)
    elif pool_type == PoolType.GYRO3:
        if model.root3_alpha is None:
            raise _fail("gyro3_pool_missing_price_range", model)
    elif pool_type == PoolType.FX:
        for token in model.tokens:
            if token.token_rate is None:
                raise _fail("fx_pool_missing_token_rate", model, token=token.address)


def parse_pool(model: PoolModel) -> PoolSnapshot:
    """Convert a pool model into a snapshot.

    Unknown pool types are passed through; the dispatcher rejects them when
    an operation is requested.

    Raises:
        PoolParseError: If the pool lacks parameters its family needs
        InvalidFeeError: If the swap fee is outside [0, 1)
    """
    bpt = normalize_address(model.address)
    try:
        pool_type: PoolType | None = PoolType(model.pool_type)
    except ValueError:
        pool_type = None
    _check_family(model, pool_type, bpt)

    tokens = tuple(
        PoolToken(
            address=normalize_address(token.address),
            balance=token.balance,
            decimals=token.decimals,
            weight=token.weight,
            price_rate=token.price_rate,
            token_rate=token.token_rate,
        )
        for token in model.tokens
    )
    return PoolSnapshot(
        id=model.id.lower(),
        address=bpt,
        pool_type=model.pool_type,
        tokens=tokens,
        swap_fee=model.swap_fee,
        total_shares=model.total_shares,
        paused=model.paused,
        amp=model.amp,
        lower_target=model.lower_target,
        upper_target=model.upper_target,
        main_index=model.main_index,
        wrapped_index=model.wrapped_index,
        sqrt_alpha=model.sqrt_alpha,
        sqrt_beta=model.sqrt_beta,
        root3_alpha=model.root3_alpha,
    )


def parse_pools(models: list[PoolModel]) -> list[PoolSnapshot]:
    """Parse every pool that can be parsed; invalid pools are logged and skipped."""
    pools = []
    for model in models:
        try:
            pools.append(parse_pool(model))
        except (PoolParseError, InvalidFeeError) as err:
            logger.debug("pool_skipped", pool_id=model.id, reason=str(err))
    return pools
