"""Balancer stable pool math.

StableSwap invariant and the BPT join/exit formulas built on it.
Uses Newton-Raphson iteration for the invariant and for single balances.

IMPORTANT: Invariant iterations use SafeInt for overflow protection and
explicit bounds checking. Amp is always scaled by AMP_PRECISION.
"""

from balancer_sdk.errors import ExceedsPoolBalance, InvariantDidNotConverge, ZeroBalanceError
from balancer_sdk.math.fixed_point import AMP_PRECISION, ONE, Bfp
from balancer_sdk.safe_int import S, SafeInt

# Maximum iterations for Newton-Raphson convergence
STABLE_MAX_ITERATIONS = 255


def _check_balances(balances: list[Bfp]) -> None:
    for i, bal in enumerate(balances):
        if bal.value <= 0:
            raise ZeroBalanceError(f"Balance at index {i} must be positive")


def _d_p(invariant: SafeInt, balances: list[Bfp]) -> SafeInt:
    """D^(n+1) / (n^n * prod(x_i)), folded in one balance at a time, rounding down."""
    n_coins = S(len(balances))
    d_p = invariant
    for bal in balances:
        d_p = (d_p * invariant) // (n_coins * S(bal.value))
    return d_p


def calculate_invariant(amp: int, balances: list[Bfp]) -> Bfp:
    """StableSwap invariant D of upscaled balances.

    Newton-Raphson on

        A*n*S + D = A*n*D + D^(n+1) / (n^n * prod(x_i))

    starting from D = S, the sum of balances. `amp` carries AMP_PRECISION,
    and Balancer's A*n stands where Curve writes A*n^n; the n^n lives in D_P.

    Raises:
        InvariantDidNotConverge: If D still moves by more than 1 wei after
            STABLE_MAX_ITERATIONS steps
        ZeroBalanceError: If any balance is zero
    """
    if not balances:
        return Bfp(0)
    _check_balances(balances)

    n_coins = S(len(balances))
    precision = S(AMP_PRECISION)
    total = S(sum(b.value for b in balances))
    ann = S(amp) * n_coins

    invariant = total
    for _ in range(STABLE_MAX_ITERATIONS):
        d_p = _d_p(invariant, balances)
        # D' = (Ann*S + n*D_P) * D / ((Ann - 1) * D + (n + 1) * D_P)
        numerator = ((ann * total) // precision + d_p * n_coins) * invariant
        denominator = ((ann - precision) * invariant) // precision + (n_coins + 1) * d_p
        next_invariant = numerator // denominator
        if next_invariant.abs_diff(invariant) <= 1:
            return Bfp(next_invariant.value)
        invariant = next_invariant

    raise InvariantDidNotConverge(
        f"Stable invariant did not converge after {STABLE_MAX_ITERATIONS} iterations"
    )


def get_token_balance_given_invariant_and_all_other_balances(
    amp: int,
    balances: list[Bfp],
    invariant: Bfp,
    token_index: int,
) -> Bfp:
    """Balance of `token_index` that keeps the pool at `invariant`.

    Fixing every other balance turns the invariant into a quadratic in the
    unknown balance y:

        y^2 + (b - D) * y = c
        b = S' + D / (A*n)                      S' = sum of the other balances
        c = D^(n+1) / (A*n * n^n * prod(x_j))   j != token_index

    solved by Newton-Raphson, rounding up so the pool never pays out extra.
    The current value at token_index only enters c and is divided back out,
    so any positive placeholder works there.

    Raises:
        InvariantDidNotConverge: If the iteration stalls or fails to settle
        IndexError: If token_index is out of range
    """
    n_coins = len(balances)
    if not 0 <= token_index < n_coins:
        raise IndexError(f"token_index {token_index} out of range for {n_coins} tokens")

    d = S(invariant.value)
    precision = S(AMP_PRECISION)
    ann = S(amp) * S(n_coins)
    placeholder = S(balances[token_index].value)

    # P_D = n^n * prod(x) / D^(n-1); dividing by D per step keeps it near D's size
    total = S(balances[0].value)
    p_d = S(balances[0].value) * S(n_coins)
    for bal in balances[1:]:
        p_d = (p_d * S(bal.value) * S(n_coins)) // d
        total = total + S(bal.value)

    d_squared = d * d
    ann_p_d = ann * p_d
    if ann_p_d == 0:
        raise InvariantDidNotConverge("Stable balance solver: A*n*P_D is zero")
    c = d_squared.ceiling_div(ann_p_d) * precision * placeholder
    b = total - placeholder + (d // ann) * precision

    y = (d_squared + c).ceiling_div(d + b)
    for _ in range(STABLE_MAX_ITERATIONS):
        # y' = (y^2 + c) / (2y + b - D)
        if S(2) * y + b <= d:
            raise InvariantDidNotConverge("Stable balance solver step has no positive slope")
        next_y = (y * y + c).ceiling_div(S(2) * y + b - d)
        if next_y.abs_diff(y) <= 1:
            return Bfp(next_y.value)
        y = next_y

    raise InvariantDidNotConverge(
        f"Stable balance did not converge after {STABLE_MAX_ITERATIONS} iterations"
    )


def calc_bpt_out_given_exact_tokens_in(
    amp: int,
    balances: list[Bfp],
    amounts_in: list[Bfp],
    total_supply: Bfp,
    current_invariant: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT minted for an arbitrary set of token amounts.

    Token weights are approximated by each balance's share of the sum; the fee
    is charged on the part of each amount exceeding the proportional share.
    """
    sum_balances = Bfp(sum(b.value for b in balances))

    balance_ratios_with_fee = []
    invariant_ratio_with_fees = Bfp(0)
    for balance, amount in zip(balances, amounts_in, strict=True):
        current_weight = balance.div_down(sum_balances)
        ratio = balance.add(amount).div_down(balance)
        balance_ratios_with_fee.append(ratio)
        invariant_ratio_with_fees = invariant_ratio_with_fees.add(ratio.mul_down(current_weight))

    new_balances = []
    for i, (balance, amount) in enumerate(zip(balances, amounts_in, strict=True)):
        if balance_ratios_with_fee[i] > invariant_ratio_with_fees:
            non_taxable = balance.mul_down(invariant_ratio_with_fees.sub(ONE))
            taxable = amount.sub(non_taxable)
            amount_without_fee = non_taxable.add(taxable.mul_down(swap_fee.complement()))
        else:
            amount_without_fee = amount
        new_balances.append(balance.add(amount_without_fee))

    new_invariant = calculate_invariant(amp, new_balances)
    invariant_ratio = new_invariant.div_down(current_invariant)
    if invariant_ratio <= ONE:
        return Bfp(0)
    return total_supply.mul_down(invariant_ratio.sub(ONE))


def calc_token_in_given_exact_bpt_out(
    amp: int,
    balances: list[Bfp],
    token_index: int,
    bpt_out: Bfp,
    total_supply: Bfp,
    current_invariant: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Amount of one token needed to mint exactly `bpt_out`."""
    new_invariant = total_supply.add(bpt_out).div_up(total_supply).mul_up(current_invariant)
    new_balance = get_token_balance_given_invariant_and_all_other_balances(
        amp, balances, new_invariant, token_index
    )
    amount_without_fee = new_balance.sub(balances[token_index])

    sum_balances = Bfp(sum(b.value for b in balances))
    current_weight = balances[token_index].div_down(sum_balances)
    taxable = amount_without_fee.mul_up(current_weight.complement())
    non_taxable = amount_without_fee.sub(taxable)
    return non_taxable.add(taxable.div_up(swap_fee.complement()))


def calc_bpt_in_given_exact_tokens_out(
    amp: int,
    balances: list[Bfp],
    amounts_out: list[Bfp],
    total_supply: Bfp,
    current_invariant: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """BPT burned to withdraw an arbitrary set of token amounts."""
    sum_balances = Bfp(sum(b.value for b in balances))

    balance_ratios_without_fee = []
    invariant_ratio_without_fees = Bfp(0)
    for balance, amount in zip(balances, amounts_out, strict=True):
        current_weight = balance.div_up(sum_balances)
        ratio = balance.sub(amount).div_up(balance)
        balance_ratios_without_fee.append(ratio)
        invariant_ratio_without_fees = invariant_ratio_without_fees.add(
            ratio.mul_up(current_weight)
        )

    new_balances = []
    for i, (balance, amount) in enumerate(zip(balances, amounts_out, strict=True)):
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
        new_balances.append(balance.sub(amount_with_fee))

    new_invariant = calculate_invariant(amp, new_balances)
    invariant_ratio = new_invariant.div_down(current_invariant)
    return total_supply.mul_up(invariant_ratio.complement())


def calc_token_out_given_exact_bpt_in(
    amp: int,
    balances: list[Bfp],
    token_index: int,
    bpt_in: Bfp,
    total_supply: Bfp,
    current_invariant: Bfp,
    swap_fee: Bfp,
) -> Bfp:
    """Amount of one token received for burning exactly `bpt_in`."""
    new_invariant = total_supply.sub(bpt_in).div_up(total_supply).mul_up(current_invariant)
    new_balance = get_token_balance_given_invariant_and_all_other_balances(
        amp, balances, new_invariant, token_index
    )
    amount_without_fee = balances[token_index].sub(new_balance)

    sum_balances = Bfp(sum(b.value for b in balances))
    current_weight = balances[token_index].div_down(sum_balances)
    taxable = amount_without_fee.mul_up(current_weight.complement())
    non_taxable = amount_without_fee.sub(taxable)
    return non_taxable.add(taxable.mul_down(swap_fee.complement()))


def _invariant_partials(amp: int, balances: list[Bfp], invariant: Bfp) -> list[Bfp]:
    # dF/dx_i = Ann + D_P / x_i
    ann = Bfp(amp * len(balances) * ONE.value // AMP_PRECISION)
    d_p = Bfp(_d_p(S(invariant.value), balances).value)
    return [ann.add(d_p.div_down(balance)) for balance in balances]


def calc_spot_price(amp: int, balances: list[Bfp], token_index_in: int, token_index_out: int) -> Bfp:
    """Marginal price of the output token in units of the input token, fee excluded.

    Ratio of invariant partial derivatives: dD/dx_out / dD/dx_in.
    """
    _check_balances(balances)
    invariant = calculate_invariant(amp, balances)
    partials = _invariant_partials(amp, balances, invariant)
    return partials[token_index_out].div_down(partials[token_index_in])


def calc_bpt_prices(amp: int, balances: list[Bfp], total_supply: Bfp) -> list[Bfp]:
    """Marginal BPT per unit of each token: total_supply / D * dD/dx_i.

    dD/dx_i = (Ann + D_P / x_i) / (Ann - 1 + (n + 1) * D_P / D)
    """
    invariant = calculate_invariant(amp, balances)
    n_coins = len(balances)
    ann = Bfp(amp * n_coins * ONE.value // AMP_PRECISION)
    d_p = Bfp(_d_p(S(invariant.value), balances).value)
    denominator = ann.sub(ONE).add(Bfp(d_p.value * (n_coins + 1)).div_down(invariant))

    prices = []
    for partial in _invariant_partials(amp, balances, invariant):
        d_invariant = partial.div_down(denominator)
        prices.append(total_supply.mul_down(d_invariant).div_down(invariant))
    return prices
