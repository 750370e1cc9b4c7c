"""Balancer Fixed Point (Bfp) math library.

18-decimal fixed-point arithmetic matching Balancer's on-chain FixedPoint.sol
and LogExpMath.sol. All values are stored as integers scaled by 10^18.

Rounding discipline: ``*_up`` variants are used for amounts the user owes the
pool, ``*_down`` variants for amounts the pool owes the user.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from math import isqrt
from typing import ClassVar

from balancer_sdk.errors import BalancerError, DivisionByZero

__all__ = [
    # Classes
    "Bfp",
    # Errors
    "LogExpMathError",
    "XOutOfBounds",
    "YOutOfBounds",
    "ProductOutOfBounds",
    "InvalidExponent",
    # Functions
    "pow_raw",
    "exp",
    # Constants
    "ONE_18",
    "ONE_20",
    "ONE_36",
    "AMP_PRECISION",
]

# =============================================================================
# Constants (matching LogExpMath.sol)
# =============================================================================

ONE_18 = 10**18
ONE_20 = 10**20
ONE_36 = 10**36

AMP_PRECISION = 1000

MAX_NATURAL_EXPONENT = 130 * ONE_18
MIN_NATURAL_EXPONENT = -41 * ONE_18

LN_36_LOWER_BOUND = ONE_18 - 10**17
LN_36_UPPER_BOUND = ONE_18 + 10**17

# 2^254 / ONE_20
MILD_EXPONENT_BOUND = (1 << 254) // ONE_20

# x_n are powers of two used as exponents, a_n = e^x_n
X_18 = (128 * ONE_18, 64 * ONE_18)
A_18 = (
    38877084059945950922200000000000000000000000000000000000,  # e^128
    6235149080811616882910000000,  # e^64
)

X_20 = (
    3_200_000_000_000_000_000_000,  # 2^5
    1_600_000_000_000_000_000_000,  # 2^4
    800_000_000_000_000_000_000,  # 2^3
    400_000_000_000_000_000_000,  # 2^2
    200_000_000_000_000_000_000,  # 2^1
    100_000_000_000_000_000_000,  # 2^0
    50_000_000_000_000_000_000,  # 2^-1
    25_000_000_000_000_000_000,  # 2^-2
    12_500_000_000_000_000_000,  # 2^-3
    6_250_000_000_000_000_000,  # 2^-4
)
A_20 = (
    7_896_296_018_268_069_516_100_000_000_000_000,  # e^32
    888_611_052_050_787_263_676_000_000,  # e^16
    298_095_798_704_172_827_474_000,  # e^8
    5_459_815_003_314_423_907_810,  # e^4
    738_905_609_893_065_022_723,  # e^2
    271_828_182_845_904_523_536,  # e^1
    164_872_127_070_012_814_685,  # e^0.5
    128_402_541_668_774_148_407,  # e^0.25
    113_314_845_306_682_631_683,  # e^0.125
    106_449_445_891_785_942_956,  # e^0.0625
)


# =============================================================================
# Error classes
# =============================================================================


class LogExpMathError(BalancerError):
    """Base error for LogExpMath operations."""

    code = "LOG_EXP_MATH"


class XOutOfBounds(LogExpMathError):
    """Error 006: Base x is out of valid range."""


class YOutOfBounds(LogExpMathError):
    """Error 007: Exponent y exceeds MILD_EXPONENT_BOUND."""


class ProductOutOfBounds(LogExpMathError):
    """Error 008: Result of y * ln(x) is outside valid range for exp."""


class InvalidExponent(LogExpMathError):
    """Error 009: Exponent is out of valid range after reduction."""


# =============================================================================
# LogExpMath
# =============================================================================


def _div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero (Solidity semantics).

    Python's // floors toward negative infinity; the two differ only when the
    operands have different signs.
    """
    if b == 0:
        raise DivisionByZero("Division by zero in _div_trunc")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _ln(a: int) -> int:
    """Natural logarithm of a positive 18-decimal value."""
    if a < ONE_18:
        return -_ln((ONE_18 * ONE_18) // a)

    sum_val = 0
    for x_n, a_n in zip(X_18, A_18):
        if a >= a_n * ONE_18:
            a //= a_n
            sum_val += x_n

    # Switch to 20 decimals for the medium powers
    sum_val *= 100
    a *= 100

    for x_n, a_n in zip(X_20, A_20):
        if a >= a_n:
            a = (a * ONE_20) // a_n
            sum_val += x_n

    # ln(a) = 2 * arctanh((a-1)/(a+1)) = 2 * (z + z^3/3 + z^5/5 + ...)
    z = ((a - ONE_20) * ONE_20) // (a + ONE_20)
    z_squared = (z * z) // ONE_20

    num = z
    series_sum = num
    for i in range(3, 12, 2):
        num = (num * z_squared) // ONE_20
        series_sum += num // i

    return (sum_val + series_sum * 2) // 100


def _ln_36(x: int) -> int:
    """Natural logarithm with 36-decimal precision, for x close to 1."""
    x *= ONE_18

    z = _div_trunc((x - ONE_36) * ONE_36, x + ONE_36)
    z_squared = _div_trunc(z * z, ONE_36)

    num = z
    series_sum = num
    for i in range(3, 16, 2):
        num = _div_trunc(num * z_squared, ONE_36)
        series_sum += _div_trunc(num, i)

    return series_sum * 2


def exp(x: int) -> int:
    """Compute e^x where x is 18-decimal fixed-point.

    Raises:
        InvalidExponent: If x is outside [MIN_NATURAL_EXPONENT, MAX_NATURAL_EXPONENT]
    """
    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise InvalidExponent(f"Exponent {x} outside valid range")

    if x < 0:
        return (ONE_18 * ONE_18) // exp(-x)

    if x >= X_18[0]:
        x -= X_18[0]
        first_an = A_18[0]
    elif x >= X_18[1]:
        x -= X_18[1]
        first_an = A_18[1]
    else:
        first_an = 1

    x *= 100

    # Only the first eight 20-decimal terms are used by exp
    product = ONE_20
    for x_n, a_n in zip(X_20[:8], A_20[:8]):
        if x >= x_n:
            x -= x_n
            product = (product * a_n) // ONE_20

    # Taylor series up to x^12/12!
    series_sum = ONE_20 + x
    term = x
    for i in range(2, 13):
        term = ((term * x) // ONE_20) // i
        series_sum += term

    return (((product * series_sum) // ONE_20) * first_an) // 100


def pow_raw(x: int, y: int) -> int:
    """Compute x^y where both are non-negative 18-decimal fixed-point values.

    Raises:
        XOutOfBounds: If x is too large
        YOutOfBounds: If y exceeds MILD_EXPONENT_BOUND
        ProductOutOfBounds: If y * ln(x) is outside valid range
    """
    if y == 0:
        return ONE_18
    if x == 0:
        return 0

    if x >= (1 << 255):
        raise XOutOfBounds(f"Base {x} too large")
    if y >= MILD_EXPONENT_BOUND:
        raise YOutOfBounds(f"Exponent {y} exceeds bound")

    if LN_36_LOWER_BOUND < x < LN_36_UPPER_BOUND:
        ln_36_x = _ln_36(x)
        quotient = _div_trunc(ln_36_x, ONE_18)
        remainder = ln_36_x - quotient * ONE_18
        logx_times_y = quotient * y + _div_trunc(remainder * y, ONE_18)
    else:
        logx_times_y = _ln(x) * y

    logx_times_y = _div_trunc(logx_times_y, ONE_18)

    if not (MIN_NATURAL_EXPONENT <= logx_times_y <= MAX_NATURAL_EXPONENT):
        raise ProductOutOfBounds(f"Product {logx_times_y} outside valid range")

    return exp(logx_times_y)


# =============================================================================
# Bfp
# =============================================================================


class Bfp:
    """18-decimal fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000
    """

    ONE: ClassVar[int] = ONE_18
    MAX_POW_RELATIVE_ERROR: ClassVar[int] = 10000  # 10^-14 relative error

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def from_wei(cls, wei: int) -> Bfp:
        """Create from raw value already scaled to 18 decimals."""
        return cls(wei)

    @classmethod
    def from_decimal(cls, d: Decimal) -> Bfp:
        """Create from a non-negative decimal, rounding half up at 18 decimals."""
        if d < 0:
            raise ValueError(f"Bfp.from_decimal requires non-negative input, got {d}")
        with localcontext() as ctx:
            ctx.prec = 80
            scaled = (d * cls.ONE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(scaled))

    @classmethod
    def from_int(cls, i: int) -> Bfp:
        """Create from integer (will be scaled by 10^18)."""
        return cls(i * cls.ONE)

    def to_decimal(self) -> Decimal:
        """Exact decimal representation."""
        with localcontext() as ctx:
            ctx.prec = 80
            return Decimal(self.value) / Decimal(self.ONE)

    def mul_down(self, other: Bfp) -> Bfp:
        """Multiply, truncating: (a * b) // 10^18"""
        return Bfp((self.value * other.value) // self.ONE)

    def mul_up(self, other: Bfp) -> Bfp:
        """Multiply, rounding up."""
        product = self.value * other.value
        if product == 0:
            return Bfp(0)
        return Bfp((product - 1) // self.ONE + 1)

    def div_down(self, other: Bfp) -> Bfp:
        """Divide, truncating: (a * 10^18) // b"""
        if other.value == 0:
            raise DivisionByZero("Bfp division by zero")
        return Bfp((self.value * self.ONE) // other.value)

    def div_up(self, other: Bfp) -> Bfp:
        """Divide, rounding up."""
        if other.value == 0:
            raise DivisionByZero("Bfp division by zero")
        numerator = self.value * self.ONE
        if numerator == 0:
            return Bfp(0)
        return Bfp((numerator - 1) // other.value + 1)

    def complement(self) -> Bfp:
        """Return 1 - self. Clamps to 0 if self > 1."""
        return Bfp(max(0, self.ONE - self.value))

    def add(self, other: Bfp) -> Bfp:
        return Bfp(self.value + other.value)

    def sub(self, other: Bfp) -> Bfp:
        """Subtract other from self. Clamps to 0 if result would be negative."""
        return Bfp(max(0, self.value - other.value))

    def sqrt(self) -> Bfp:
        """Square root, rounded down."""
        return Bfp(isqrt(self.value * self.ONE))

    def _pow_error(self, raw: int) -> int:
        # max_error = mul_up(raw, MAX_POW_RELATIVE_ERROR) + 1
        product = raw * self.MAX_POW_RELATIVE_ERROR
        return ((product - 1) // self.ONE + 1 if product > 0 else 0) + 1

    def pow_down(self, exponent: Bfp) -> Bfp:
        """Compute self^exponent rounded down."""
        raw = pow_raw(self.value, exponent.value)
        max_error = self._pow_error(raw)
        if raw < max_error:
            return Bfp(0)
        return Bfp(raw - max_error)

    def pow_up(self, exponent: Bfp) -> Bfp:
        """Compute self^exponent rounded up."""
        raw = pow_raw(self.value, exponent.value)
        return Bfp(raw + self._pow_error(raw))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: Bfp) -> bool:
        return self.value < other.value

    def __le__(self, other: Bfp) -> bool:
        return self.value <= other.value

    def __gt__(self, other: Bfp) -> bool:
        return self.value > other.value

    def __ge__(self, other: Bfp) -> bool:
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())


ONE = Bfp(ONE_18)
ZERO = Bfp(0)
