"""Scaling helpers.

Pool math runs on 18-decimal fixed-point balances. A token's scaling factor
is 10^(18 - decimals) times its price rate, stored as Bfp, so that
upscaling both normalizes decimals and applies rate providers.
"""

from decimal import Decimal

from balancer_sdk.math.fixed_point import ONE_18, Bfp

from .snapshot import PoolToken


class InvalidScalingFactorError(ValueError):
    """Scaling factor is non-positive."""


def compute_scaling_factor(decimals: int, rate: Decimal = Decimal(1)) -> Bfp:
    """Scaling factor for a token with `decimals` and a price rate.

    Raises:
        InvalidScalingFactorError: If decimals is outside [0, 18] or rate <= 0
    """
    if decimals < 0 or decimals > 18:
        raise InvalidScalingFactorError(f"Token decimals must be in [0, 18], got {decimals}")
    if rate <= 0:
        raise InvalidScalingFactorError(f"Price rate must be positive, got {rate}")
    return Bfp(10 ** (18 - decimals) * ONE_18).mul_down(Bfp.from_decimal(rate))


def token_scaling_factor(token: PoolToken) -> Bfp:
    return compute_scaling_factor(token.decimals, token.price_rate)


def _check(scaling_factor: Bfp) -> None:
    if scaling_factor.value <= 0:
        raise InvalidScalingFactorError(
            f"Scaling factor must be positive, got {scaling_factor.value}"
        )


def scale_up(amount: int, scaling_factor: Bfp) -> Bfp:
    """Scale a native amount to 18-decimal fixed-point, rounding down."""
    _check(scaling_factor)
    return Bfp(amount).mul_down(scaling_factor)


def scale_down_down(bfp: Bfp, scaling_factor: Bfp) -> int:
    """Scale an 18-decimal result back to native decimals, rounding down.

    Used for amounts the pool pays out.
    """
    _check(scaling_factor)
    return bfp.div_down(scaling_factor).value


def scale_down_up(bfp: Bfp, scaling_factor: Bfp) -> int:
    """Scale an 18-decimal result back to native decimals, rounding up.

    Used for amounts the pool takes in.
    """
    _check(scaling_factor)
    return bfp.div_up(scaling_factor).value
