"""Gyroscope concentrated liquidity pool math.

2-CLP pools trade on (x + L/sqrt_beta)(y + L*sqrt_alpha) = L^2 and 3-CLP pools
on (x + L*a)(y + L*a)(z + L*a) = L^3 with a = cbrt(alpha). Both invariants are
homogeneous of degree one in the balances, so BPT per unit of token i is
total_supply * p_i / sum_j(balance_j * p_j) for marginal prices p in any
common numeraire.
"""

from balancer_sdk.errors import DivisionByZero, InvariantDidNotConverge, ZeroBalanceError
from balancer_sdk.math.fixed_point import ONE, Bfp

from .stable_math import STABLE_MAX_ITERATIONS

TWO = Bfp(2 * ONE.value)
THREE = Bfp(3 * ONE.value)
FOUR = Bfp(4 * ONE.value)


def _check_balances(balances: list[Bfp]) -> None:
    for i, balance in enumerate(balances):
        if balance.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")


# -----------------------------------------------------------------------------
# 2-CLP
# -----------------------------------------------------------------------------


def calc_2clp_invariant(balances: list[Bfp], sqrt_alpha: Bfp, sqrt_beta: Bfp) -> Bfp:
    """Positive root of (1 - sa/sb) L^2 - (x*sa + y/sb) L - x*y = 0."""
    _check_balances(balances)
    x, y = balances
    a = ONE.sub(sqrt_alpha.div_up(sqrt_beta))
    if a.value == 0:
        raise DivisionByZero("sqrt_alpha must be lower than sqrt_beta")

    mb = x.mul_down(sqrt_alpha).add(y.div_down(sqrt_beta))
    discriminant = mb.mul_down(mb).add(FOUR.mul_down(a).mul_down(x).mul_down(y))
    return mb.add(discriminant.sqrt()).div_down(TWO.mul_down(a))


def _2clp_virtual_balances(
    balances: list[Bfp], sqrt_alpha: Bfp, sqrt_beta: Bfp
) -> tuple[Bfp, Bfp]:
    invariant = calc_2clp_invariant(balances, sqrt_alpha, sqrt_beta)
    x, y = balances
    return x.add(invariant.div_down(sqrt_beta)), y.add(invariant.mul_down(sqrt_alpha))


def calc_2clp_spot_price(
    balances: list[Bfp],
    sqrt_alpha: Bfp,
    sqrt_beta: Bfp,
    token_index_in: int,
    token_index_out: int,
) -> Bfp:
    """Marginal price of the output token in units of the input token, fee excluded."""
    virtual = _2clp_virtual_balances(balances, sqrt_alpha, sqrt_beta)
    return virtual[token_index_in].div_down(virtual[token_index_out])


def calc_2clp_bpt_prices(
    balances: list[Bfp], sqrt_alpha: Bfp, sqrt_beta: Bfp, total_supply: Bfp
) -> list[Bfp]:
    virtual_x, virtual_y = _2clp_virtual_balances(balances, sqrt_alpha, sqrt_beta)
    # Prices in units of token 1
    prices = [virtual_y.div_down(virtual_x), ONE]
    return _bpt_prices(balances, prices, total_supply)


# -----------------------------------------------------------------------------
# 3-CLP
# -----------------------------------------------------------------------------


def calc_3clp_invariant(balances: list[Bfp], root3_alpha: Bfp) -> Bfp:
    """Largest root of (1 - a^3) L^3 - a^2 S1 L^2 - a S2 L - S3 = 0.

    S1, S2 and S3 are the elementary symmetric polynomials of the balances.
    Newton's method starting from the AM-GM upper bound S1 / (3 (1 - a))
    decreases monotonically onto the root.

    Raises:
        InvariantDidNotConverge: If iteration doesn't converge
    """
    _check_balances(balances)
    x, y, z = balances
    a = root3_alpha
    one_minus_a = ONE.sub(a)
    if one_minus_a.value == 0:
        raise DivisionByZero("root3_alpha must be lower than 1")

    a2 = a.mul_down(a)
    a3 = a2.mul_down(a)
    s1 = x.add(y).add(z)
    s2 = x.mul_down(y).add(y.mul_down(z)).add(z.mul_down(x))
    s3 = x.mul_down(y).mul_down(z)
    leading = ONE.sub(a3)

    invariant = s1.div_up(THREE.mul_down(one_minus_a))
    for _ in range(STABLE_MAX_ITERATIONS):
        l2 = invariant.mul_down(invariant)
        l3 = l2.mul_down(invariant)
        positive = leading.mul_down(l3)
        negative = a2.mul_down(s1).mul_down(l2).add(a.mul_down(s2).mul_down(invariant)).add(s3)
        if positive <= negative:
            return invariant

        derivative = (
            THREE.mul_down(leading).mul_down(l2)
            .sub(TWO.mul_down(a2).mul_down(s1).mul_down(invariant))
            .sub(a.mul_down(s2))
        )
        if derivative.value == 0:
            raise InvariantDidNotConverge("3-CLP invariant derivative vanished")
        delta = positive.sub(negative).div_down(derivative)
        if delta.value <= 1:
            return invariant.sub(delta)
        invariant = invariant.sub(delta)

    raise InvariantDidNotConverge(
        f"3-CLP invariant did not converge after {STABLE_MAX_ITERATIONS} iterations"
    )


def _3clp_virtual_balances(balances: list[Bfp], root3_alpha: Bfp) -> list[Bfp]:
    offset = calc_3clp_invariant(balances, root3_alpha).mul_down(root3_alpha)
    return [balance.add(offset) for balance in balances]


def calc_3clp_spot_price(
    balances: list[Bfp], root3_alpha: Bfp, token_index_in: int, token_index_out: int
) -> Bfp:
    virtual = _3clp_virtual_balances(balances, root3_alpha)
    return virtual[token_index_in].div_down(virtual[token_index_out])


def calc_3clp_bpt_prices(balances: list[Bfp], root3_alpha: Bfp, total_supply: Bfp) -> list[Bfp]:
    virtual = _3clp_virtual_balances(balances, root3_alpha)
    # Prices in units of token 0
    prices = [virtual[0].div_down(v) for v in virtual]
    return _bpt_prices(balances, prices, total_supply)


def _bpt_prices(balances: list[Bfp], prices: list[Bfp], total_supply: Bfp) -> list[Bfp]:
    value = Bfp(0)
    for balance, price in zip(balances, prices, strict=True):
        value = value.add(balance.mul_down(price))
    return [total_supply.mul_down(price).div_down(value) for price in prices]
