from __future__ import annotations
from math import gcd

from errors import ArithmeticDomainError
from float_bits import FloatBits
from formats import BINARY64
from ratio_base import RatioBase, install_constants, is_integer


class BigRatio(RatioBase):
    """Ratio of two arbitrary-precision integers. Negation never overflows."""

    @classmethod
    def _component(cls, value, what: str) -> int:
        if not is_integer(value):
            raise TypeError(f"{what} must be an integer, got {type(value).__name__}")
        return int(value)

    @classmethod
    def _gcd(cls, x: int, y: int) -> int:
        return gcd(x, y)

    @classmethod
    def _negate(cls, value: int) -> int:
        return -value

    @classmethod
    def from_ratio(cls, ratio: RatioBase) -> BigRatio:
        return cls(ratio.numerator, ratio.denominator)

    @classmethod
    def from_exact_double(cls, value) -> BigRatio:
        """
        The exact value of a binary64 double, with no rounding.

        NaN raises ArithmeticDomainError. Infinities are not special-cased: their bit
        patterns go through the same arithmetic and give ±2^1024.
        """
        return cls.from_exact_float(value, BINARY64)

    @classmethod
    def from_exact_float(cls, value, fmt=None) -> BigRatio:
        """
        The exact value of `value` stored in `fmt`. A value that `fmt` cannot hold
        without rounding (or overflowing to infinity) raises ArithmeticDomainError.
        """
        bits = FloatBits.from_float(value, fmt)
        if bits.is_nan:
            raise ArithmeticDomainError(f"Cannot represent NaN exactly as a ratio ({bits}).")
        if float(bits.to_float()) != value:
            raise ArithmeticDomainError(f"{value!r} is not exactly representable in {bits.fmt.name}.")

        is_negative, exponent, mantissa, _ = bits.normalized_logical()
        if exponent < 0:
            result = cls.create(mantissa, 1 << -exponent)
        elif exponent == 0:
            result = cls.create_whole(mantissa)
        else:
            result = cls.create_whole(mantissa << exponent)
        return -result if is_negative else result


install_constants(BigRatio)
