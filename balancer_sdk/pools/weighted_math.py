"""Balancer weighted pool math.

Join/exit math for weighted product pools. All balances and amounts are
upscaled Bfp values; weights are normalized (sum to ONE).

Single-sided and non-proportional operations charge the swap fee only on the
"taxable" part of an amount, i.e. the part that exceeds what a proportional
join/exit would have used.
"""

from balancer_sdk.errors import ExceedsPoolBalance, ZeroBalanceError
from balancer_sdk.math.fixed_point import ONE, Bfp


def _check_balances(balances: list[Bfp]) -> None:
    for i, balance in enumerate(balances):
        if balance.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")


def calc_bpt_out_given_exact_tokens_in(
    balances: list[Bfp],
    weights: list[Bfp],
    amounts_in: list[Bfp],
    total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT minted for an arbitrary set of token amounts.

    Formula (per token, after removing fees on the taxable part):
        invariant_ratio = prod((balance_i + amount_i) / balance_i) ^ weight_i
        bpt_out = total_supply * (invariant_ratio - 1)

    Returns ZERO when the invariant does not grow.
    """
    _check_balances(balances)

    balance_ratios_with_fee = []
    invariant_ratio_with_fees = Bfp(0)
    for balance, weight, amount in zip(balances, weights, amounts_in, strict=True):
        ratio = balance.add(amount).div_down(balance)
        balance_ratios_with_fee.append(ratio)
        invariant_ratio_with_fees = invariant_ratio_with_fees.add(ratio.mul_down(weight))

    invariant_ratio = ONE
    for i, (balance, weight, amount) in enumerate(zip(balances, weights, amounts_in, strict=True)):
        if balance_ratios_with_fee[i] > invariant_ratio_with_fees:
            non_taxable = balance.mul_down(invariant_ratio_with_fees.sub(ONE))
            taxable = amount.sub(non_taxable)
            amount_without_fee = non_taxable.add(taxable.mul_down(swap_fee.complement()))
        else:
            amount_without_fee = amount

        balance_ratio = balance.add(amount_without_fee).div_down(balance)
        invariant_ratio = invariant_ratio.mul_down(balance_ratio.pow_down(weight))

    if invariant_ratio <= ONE:
        return Bfp(0)
    return total_supply.mul_down(invariant_ratio.sub(ONE))


def calc_token_in_given_exact_bpt_out(
    balance: Bfp,
    weight: Bfp,
    bpt_out: Bfp,
    total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Amount of a single token needed to mint exactly `bpt_out`."""
    if balance.value <= 0:
        raise ZeroBalanceError("balance must be positive")

    invariant_ratio = total_supply.add(bpt_out).div_up(total_supply)
    balance_ratio = invariant_ratio.pow_up(ONE.div_up(weight))
    amount_without_fee = balance.mul_up(balance_ratio.sub(ONE))

    # Only the share not matched by the other tokens' weights is swapped
    taxable = amount_without_fee.mul_up(weight.complement())
    non_taxable = amount_without_fee.sub(taxable)
    return non_taxable.add(taxable.div_up(swap_fee.complement()))


def calc_bpt_in_given_exact_tokens_out(
    balances: list[Bfp],
    weights: list[Bfp],
    amounts_out: list[Bfp],
    total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT burned to withdraw an arbitrary set of token amounts."""
    _check_balances(balances)

    balance_ratios_without_fee = []
    invariant_ratio_without_fees = Bfp(0)
    for balance, weight, amount in zip(balances, weights, amounts_out, strict=True):
        ratio = balance.sub(amount).div_up(balance)
        balance_ratios_without_fee.append(ratio)
        invariant_ratio_without_fees = invariant_ratio_without_fees.add(ratio.mul_up(weight))

    invariant_ratio = ONE
    for i, (balance, weight, amount) in enumerate(zip(balances, weights, amounts_out, strict=True)):
        if invariant_ratio_without_fees > balance_ratios_without_fee[i]:
            non_taxable = balance.mul_down(invariant_ratio_without_fees.complement())
            taxable = amount.sub(non_taxable)
            amount_with_fee = non_taxable.add(taxable.div_up(swap_fee.complement()))
        else:
            amount_with_fee = amount
        if amount_with_fee > balance:
            raise ExceedsPoolBalance(
                f"Amount out with fees {amount_with_fee.value} exceeds balance {balance.value}"
            )

        balance_ratio = balance.sub(amount_with_fee).div_down(balance)
        invariant_ratio = invariant_ratio.mul_down(balance_ratio.pow_down(weight))

    return total_supply.mul_up(invariant_ratio.complement())


def calc_token_out_given_exact_bpt_in(
    balance: Bfp,
    weight: Bfp,
    bpt_in: Bfp,
    total_supply: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Amount of a single token received for burning exactly `bpt_in`."""
    if balance.value <= 0:
        raise ZeroBalanceError("balance must be positive")

    invariant_ratio = total_supply.sub(bpt_in).div_up(total_supply)
    balance_ratio = invariant_ratio.pow_up(ONE.div_down(weight))
    amount_without_fee = balance.mul_down(balance_ratio.complement())

    taxable = amount_without_fee.mul_up(weight.complement())
    non_taxable = amount_without_fee.sub(taxable)
    return non_taxable.add(taxable.mul_down(swap_fee.complement()))


def calc_spot_price(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
) -> Bfp:
    """Marginal price of the output token in units of the input token, fee excluded.

    Formula:
        (balance_in / weight_in) / (balance_out / weight_out)
    """
    if balance_out.value <= 0:
        raise ZeroBalanceError("balance_out must be positive")
    numerator = balance_in.div_down(weight_in)
    denominator = balance_out.div_down(weight_out)
    return numerator.div_down(denominator)


def calc_bpt_prices(balances: list[Bfp], weights: list[Bfp], total_supply: Bfp) -> list[Bfp]:
    """Marginal BPT per unit of each token: total_supply * weight_i / balance_i."""
    _check_balances(balances)
    return [
        total_supply.mul_down(weight).div_down(balance)
        for balance, weight in zip(balances, weights, strict=True)
    ]
