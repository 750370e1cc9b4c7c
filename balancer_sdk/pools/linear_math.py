"""Balancer linear pool math.

A linear pool holds a main token, its yield-bearing wrapped counterpart and
its own BPT. Main-token balances are mapped to a "nominal" balance that
charges (below the lower target) or pays (above the upper target) the swap
fee; the invariant is nominal main plus wrapped.

All values are upscaled Bfp; the wrapped balance already includes its rate.
"""

from dataclasses import dataclass

from balancer_sdk.math.fixed_point import ONE, Bfp


@dataclass(frozen=True)
class LinearParams:
    fee: Bfp
    lower_target: Bfp
    upper_target: Bfp


def to_nominal(real: Bfp, params: LinearParams) -> Bfp:
    if real < params.lower_target:
        fees = params.lower_target.sub(real).mul_down(params.fee)
        return real.sub(fees)
    if real <= params.upper_target:
        return real
    fees = real.sub(params.upper_target).mul_down(params.fee)
    return real.sub(fees)


def from_nominal(nominal: Bfp, params: LinearParams) -> Bfp:
    if nominal < params.lower_target:
        return nominal.add(params.fee.mul_down(params.lower_target)).div_down(ONE.add(params.fee))
    if nominal <= params.upper_target:
        return nominal
    return nominal.sub(params.fee.mul_down(params.upper_target)).div_down(params.fee.complement())


def nominal_derivative(real: Bfp, params: LinearParams) -> Bfp:
    """d(nominal)/d(real) at a main balance."""
    if real < params.lower_target:
        return ONE.add(params.fee)
    if real <= params.upper_target:
        return ONE
    return params.fee.complement()


def calc_invariant(nominal_main: Bfp, wrapped: Bfp) -> Bfp:
    return nominal_main.add(wrapped)


def calc_bpt_out_per_main_in(
    main_in: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    if supply.value == 0:
        return to_nominal(main_in, params)

    previous_nominal_main = to_nominal(main, params)
    after_nominal_main = to_nominal(main.add(main_in), params)
    delta_nominal_main = after_nominal_main.sub(previous_nominal_main)
    invariant = calc_invariant(previous_nominal_main, wrapped)
    return supply.mul_down(delta_nominal_main).div_down(invariant)


def calc_bpt_in_per_main_out(
    main_out: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    previous_nominal_main = to_nominal(main, params)
    after_nominal_main = to_nominal(main.sub(main_out), params)
    delta_nominal_main = previous_nominal_main.sub(after_nominal_main)
    invariant = calc_invariant(previous_nominal_main, wrapped)
    return supply.mul_up(delta_nominal_main).div_up(invariant)


def calc_main_in_per_bpt_out(
    bpt_out: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    if supply.value == 0:
        return from_nominal(bpt_out, params)

    previous_nominal_main = to_nominal(main, params)
    invariant = calc_invariant(previous_nominal_main, wrapped)
    delta_nominal_main = invariant.mul_up(bpt_out).div_up(supply)
    after_nominal_main = previous_nominal_main.add(delta_nominal_main)
    new_main_balance = from_nominal(after_nominal_main, params)
    return new_main_balance.sub(main)


def calc_main_out_per_bpt_in(
    bpt_in: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    previous_nominal_main = to_nominal(main, params)
    invariant = calc_invariant(previous_nominal_main, wrapped)
    delta_nominal_main = invariant.mul_down(bpt_in).div_down(supply)
    after_nominal_main = previous_nominal_main.sub(delta_nominal_main)
    new_main_balance = from_nominal(after_nominal_main, params)
    return main.sub(new_main_balance)


def calc_bpt_out_per_wrapped_in(
    wrapped_in: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    if supply.value == 0:
        return wrapped_in

    nominal_main = to_nominal(main, params)
    previous_invariant = calc_invariant(nominal_main, wrapped)
    new_invariant = calc_invariant(nominal_main, wrapped.add(wrapped_in))
    new_bpt_balance = supply.mul_down(new_invariant).div_down(previous_invariant)
    return new_bpt_balance.sub(supply)


def calc_bpt_in_per_wrapped_out(
    wrapped_out: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    nominal_main = to_nominal(main, params)
    previous_invariant = calc_invariant(nominal_main, wrapped)
    new_invariant = calc_invariant(nominal_main, wrapped.sub(wrapped_out))
    new_bpt_balance = supply.mul_down(new_invariant).div_down(previous_invariant)
    return supply.sub(new_bpt_balance)


def calc_wrapped_in_per_bpt_out(
    bpt_out: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    if supply.value == 0:
        return bpt_out

    nominal_main = to_nominal(main, params)
    previous_invariant = calc_invariant(nominal_main, wrapped)
    new_bpt_balance = supply.add(bpt_out)
    new_wrapped_balance = new_bpt_balance.mul_up(previous_invariant).div_up(supply).sub(nominal_main)
    return new_wrapped_balance.sub(wrapped)


def calc_wrapped_out_per_bpt_in(
    bpt_in: Bfp, main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams
) -> Bfp:
    nominal_main = to_nominal(main, params)
    previous_invariant = calc_invariant(nominal_main, wrapped)
    new_bpt_balance = supply.sub(bpt_in)
    new_wrapped_balance = new_bpt_balance.mul_up(previous_invariant).div_up(supply).sub(nominal_main)
    return wrapped.sub(new_wrapped_balance)


def calc_bpt_prices(main: Bfp, wrapped: Bfp, supply: Bfp, params: LinearParams) -> tuple[Bfp, Bfp]:
    """Marginal BPT per unit of (main, wrapped)."""
    derivative = nominal_derivative(main, params)
    if supply.value == 0:
        return derivative, ONE
    invariant = calc_invariant(to_nominal(main, params), wrapped)
    bpt_per_nominal = supply.div_down(invariant)
    return bpt_per_nominal.mul_down(derivative), bpt_per_nominal
