"""FX pool math.

FX pools price every token against a USD numeraire through an oracle rate.
Only the marginal behaviour at the current balances is modelled here: the
spot price is the oracle cross rate and each token's BPT value is its share of
the pool's numeraire value.
"""

from balancer_sdk.errors import ZeroBalanceError
from balancer_sdk.math.fixed_point import Bfp


def calc_spot_price(rates: list[Bfp], token_index_in: int, token_index_out: int) -> Bfp:
    """Price of the output token in units of the input token: rate_out / rate_in."""
    return rates[token_index_out].div_down(rates[token_index_in])


def calc_bpt_prices(balances: list[Bfp], rates: list[Bfp], total_supply: Bfp) -> list[Bfp]:
    """Marginal BPT per unit of each token: total_supply * rate_i / pool value."""
    value = Bfp(0)
    for balance, rate in zip(balances, rates, strict=True):
        value = value.add(balance.mul_down(rate))
    if value.value == 0:
        raise ZeroBalanceError("FX pool has no numeraire value")
    return [total_supply.mul_down(rate).div_down(value) for rate in rates]
