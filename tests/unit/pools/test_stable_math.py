"""Tests for StableSwap invariant and join/exit math."""

from decimal import Decimal

import pytest

from balancer_sdk.errors import ExceedsPoolBalance, ZeroBalanceError
from balancer_sdk.math.fixed_point import AMP_PRECISION, ONE, ONE_18, Bfp
from balancer_sdk.pools import stable_math

AMP = 100 * AMP_PRECISION
NO_FEE = Bfp(0)


def balanced(n: int, amount: int = 1000) -> list[Bfp]:
    return [Bfp.from_int(amount) for _ in range(n)]


class TestInvariant:
    def test_balanced_pool_equals_sum(self) -> None:
        assert stable_math.calculate_invariant(AMP, balanced(2)).value == 2000 * ONE_18

    def test_three_tokens(self) -> None:
        assert stable_math.calculate_invariant(AMP, balanced(3)).value == 3000 * ONE_18

    def test_imbalanced_pool_below_sum(self) -> None:
        balances = [Bfp.from_int(1500), Bfp.from_int(500)]
        invariant = stable_math.calculate_invariant(AMP, balances)
        assert invariant.value < 2000 * ONE_18
        assert invariant.value > 1990 * ONE_18

    def test_empty_pool(self) -> None:
        assert stable_math.calculate_invariant(AMP, []).value == 0

    def test_zero_balance_raises(self) -> None:
        with pytest.raises(ZeroBalanceError):
            stable_math.calculate_invariant(AMP, [Bfp(0), Bfp.from_int(1)])


class TestGetTokenBalance:
    def test_recovers_balance(self) -> None:
        balances = [Bfp.from_int(1000), Bfp.from_int(1200), Bfp.from_int(800)]
        invariant = stable_math.calculate_invariant(AMP, balances)
        solved = stable_math.get_token_balance_given_invariant_and_all_other_balances(
            AMP, balances, invariant, 1
        )
        assert abs(solved.value - balances[1].value) <= 10**6

    def test_index_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            stable_math.get_token_balance_given_invariant_and_all_other_balances(
                AMP, balanced(2), Bfp.from_int(2000), 2
            )


class TestJoinExit:
    def test_proportional_join_is_exact(self) -> None:
        balances = balanced(3)
        bpt_out = stable_math.calc_bpt_out_given_exact_tokens_in(
            AMP,
            balances,
            [Bfp.from_int(100)] * 3,
            Bfp.from_int(3000),
            stable_math.calculate_invariant(AMP, balances),
            NO_FEE,
        )
        assert bpt_out.value == 300 * ONE_18

    def test_fee_on_imbalanced_join(self) -> None:
        balances = balanced(3)
        invariant = stable_math.calculate_invariant(AMP, balances)
        amounts = [Bfp.from_int(100), Bfp(0), Bfp(0)]
        without_fee = stable_math.calc_bpt_out_given_exact_tokens_in(
            AMP, balances, amounts, Bfp.from_int(3000), invariant, NO_FEE
        )
        with_fee = stable_math.calc_bpt_out_given_exact_tokens_in(
            AMP, balances, amounts, Bfp.from_int(3000), invariant, Bfp.from_decimal(Decimal("0.01"))
        )
        assert 0 < with_fee.value < without_fee.value < 100 * ONE_18

    def test_single_token_out_slightly_below_share(self) -> None:
        balances = balanced(3)
        amount = stable_math.calc_token_out_given_exact_bpt_in(
            AMP,
            balances,
            0,
            Bfp.from_int(30),
            Bfp.from_int(3000),
            stable_math.calculate_invariant(AMP, balances),
            NO_FEE,
        )
        assert 29 * ONE_18 < amount.value < 30 * ONE_18

    def test_single_token_in_slightly_above_share(self) -> None:
        balances = balanced(3)
        amount = stable_math.calc_token_in_given_exact_bpt_out(
            AMP,
            balances,
            2,
            Bfp.from_int(30),
            Bfp.from_int(3000),
            stable_math.calculate_invariant(AMP, balances),
            NO_FEE,
        )
        assert 30 * ONE_18 < amount.value < 31 * ONE_18

    def test_exact_tokens_out(self) -> None:
        balances = balanced(3)
        bpt_in = stable_math.calc_bpt_in_given_exact_tokens_out(
            AMP,
            balances,
            [Bfp.from_int(100)] * 3,
            Bfp.from_int(3000),
            stable_math.calculate_invariant(AMP, balances),
            NO_FEE,
        )
        assert abs(bpt_in.value - 300 * ONE_18) <= 10**6

    def test_exact_tokens_out_above_balance_with_fees(self) -> None:
        balances = balanced(2)
        with pytest.raises(ExceedsPoolBalance):
            stable_math.calc_bpt_in_given_exact_tokens_out(
                AMP,
                balances,
                [Bfp.from_int(990), Bfp(0)],
                Bfp.from_int(2000),
                stable_math.calculate_invariant(AMP, balances),
                Bfp.from_decimal(Decimal("0.5")),
            )


class TestPrices:
    def test_balanced_spot_price_is_one(self) -> None:
        assert stable_math.calc_spot_price(AMP, balanced(3), 0, 1) == ONE

    def test_scarce_token_is_more_expensive(self) -> None:
        balances = [Bfp.from_int(1500), Bfp.from_int(500)]
        # Buying the scarce token 1 with token 0
        assert stable_math.calc_spot_price(AMP, balances, 0, 1) > ONE
        assert stable_math.calc_spot_price(AMP, balances, 1, 0) < ONE

    def test_balanced_bpt_prices(self) -> None:
        prices = stable_math.calc_bpt_prices(AMP, balanced(2), Bfp.from_int(2000))
        for price in prices:
            assert abs(price.value - ONE_18) <= 10**6
