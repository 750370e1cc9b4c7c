"""Tests for Bfp fixed-point arithmetic.

Covers rounding direction of every operation, clamping subtraction, division
by zero, and the pow approximations used by weighted math.
"""

from decimal import Decimal

import pytest

from balancer_sdk.errors import DivisionByZero
from balancer_sdk.math.fixed_point import ONE, ONE_18, ZERO, Bfp, InvalidExponent, exp, pow_raw


class TestBfpConstruction:
    def test_from_int_scales(self) -> None:
        assert Bfp.from_int(3).value == 3 * ONE_18

    def test_from_wei_is_raw(self) -> None:
        assert Bfp.from_wei(5).value == 5

    def test_from_decimal_rounds_half_up(self) -> None:
        """Digits past 18 decimals round half up."""
        assert Bfp.from_decimal(Decimal("0.0000000000000000015")).value == 2
        assert Bfp.from_decimal(Decimal("0.0000000000000000014")).value == 1

    def test_from_decimal_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Bfp.from_decimal(Decimal("-0.1"))

    def test_to_decimal_is_exact(self) -> None:
        assert Bfp(1_500_000_000_000_000_001).to_decimal() == Decimal("1.500000000000000001")


class TestBfpRounding:
    """Up/down variants differ by exactly one wei when the result is inexact."""

    def test_mul_down_truncates(self) -> None:
        a = Bfp(ONE_18 + 1)
        assert a.mul_down(a).value == ONE_18 + 2

    def test_mul_up_rounds_up(self) -> None:
        a = Bfp(ONE_18 + 1)
        assert a.mul_up(a).value == ONE_18 + 3

    def test_mul_up_of_zero_is_zero(self) -> None:
        assert ZERO.mul_up(ONE).value == 0

    def test_div_down_and_up(self) -> None:
        one = ONE
        three = Bfp.from_int(3)
        assert one.div_down(three).value == 333_333_333_333_333_333
        assert one.div_up(three).value == 333_333_333_333_333_334

    def test_exact_division_agrees(self) -> None:
        six = Bfp.from_int(6)
        two = Bfp.from_int(2)
        assert six.div_down(two) == six.div_up(two) == Bfp.from_int(3)

    def test_div_down_by_zero_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            ONE.div_down(ZERO)

    def test_div_up_by_zero_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            ONE.div_up(ZERO)

    def test_division_by_zero_is_zero_division_error(self) -> None:
        """Callers catching the builtin still see it."""
        with pytest.raises(ZeroDivisionError):
            ONE.div_down(ZERO)


class TestBfpClamping:
    def test_sub_clamps_to_zero(self) -> None:
        assert Bfp.from_int(1).sub(Bfp.from_int(2)).value == 0

    def test_sub_normal(self) -> None:
        assert Bfp.from_int(5).sub(Bfp.from_int(2)) == Bfp.from_int(3)

    def test_complement(self) -> None:
        assert Bfp.from_decimal(Decimal("0.3")).complement().value == 7 * 10**17

    def test_complement_above_one_clamps(self) -> None:
        assert Bfp.from_int(2).complement().value == 0


class TestBfpPow:
    def test_pow_down_below_pow_up(self) -> None:
        x = Bfp.from_decimal(Decimal("1.1"))
        half = Bfp.from_decimal(Decimal("0.5"))
        assert x.pow_down(half) < x.pow_up(half)

    def test_square_root_via_pow(self) -> None:
        x = Bfp.from_int(4)
        half = Bfp.from_decimal(Decimal("0.5"))
        result = x.pow_down(half).to_decimal()
        assert abs(result - 2) < Decimal("1e-12")

    def test_zero_exponent_is_one(self) -> None:
        assert pow_raw(5 * ONE_18, 0) == ONE_18

    def test_exp_of_zero(self) -> None:
        assert exp(0) == ONE_18

    def test_exp_out_of_range_raises(self) -> None:
        with pytest.raises(InvalidExponent):
            exp(131 * ONE_18)


class TestBfpSqrt:
    def test_sqrt_exact(self) -> None:
        assert Bfp.from_int(9).sqrt() == Bfp.from_int(3)

    def test_sqrt_rounds_down(self) -> None:
        assert Bfp.from_int(2).sqrt().value == 1_414_213_562_373_095_048


class TestBfpComparison:
    def test_ordering(self) -> None:
        assert Bfp(1) < Bfp(2) <= Bfp(2) < Bfp(3)
        assert Bfp(3) > Bfp(2) >= Bfp(2)

    def test_equality_with_other_types(self) -> None:
        assert Bfp(1) != 1

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(Bfp(1))
