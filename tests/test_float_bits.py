"""
Tests for FloatBits

Covers:
1. Exact round trips of bit patterns (every binary16 pattern, sampled binary32/binary64)
2. Classification from field values
3. Logical and normalized logical components
4. value == sign * logical_mantissa * 2^logical_exponent for every finite value
"""

import warnings
from fractions import Fraction

import numpy as np
import pytest

from float_bits import FloatBits, double_bits, half_bits, single_bits
from formats import BINARY16, BINARY32, BINARY64

NAN_NEGATIVE = 0xFFF8000000000000   # default NaN with the sign bit set
NAN_POSITIVE = 0x7FF8000000000000
POS_INF = 0x7FF0000000000000
NEG_INF = 0xFFF0000000000000
DOUBLE_MAX = 0x7FEFFFFFFFFFFFFF
DOUBLE_MIN = 0xFFEFFFFFFFFFFFFF
POS_ZERO = 0x0000000000000000
NEG_ZERO = 0x8000000000000000
MIN_SUBNORMAL = 0x0000000000000001
MAX_NEG_SUBNORMAL = 0x8000000000000001
ONE = 0x3FF0000000000000


def _random_patterns(total_bits: int, n: int, seed: int):
    rng = np.random.default_rng(seed)
    hi = rng.integers(0, 1 << 32, size=n)
    lo = rng.integers(0, 1 << 32, size=n)
    mask = (1 << total_bits) - 1
    return [((int(h) << 32) | int(l)) & mask for h, l in zip(hi, lo)]


def _bits_of(value) -> int:
    arr = np.array([value], dtype=value.dtype)
    return int(arr.view(np.dtype(f"u{value.dtype.itemsize}"))[0])


# =============================================================================
# ROUND TRIPS
# =============================================================================


class TestRoundTrip:
    def test_every_half_pattern(self) -> None:
        values = np.arange(1 << 16, dtype=np.uint16).view(np.float16)
        for expected, value in enumerate(values):
            rep = FloatBits.from_float(value)
            assert rep.fmt is BINARY16
            assert rep.to_bits() == expected
            assert _bits_of(rep.to_float()) == expected

    @pytest.mark.parametrize("fmt,seed", [(BINARY32, 1), (BINARY64, 2)])
    def test_random_patterns(self, fmt, seed) -> None:
        for bits in _random_patterns(fmt.total_bits, 5000, seed):
            rep = FloatBits.from_bits(bits, fmt)
            assert rep.to_bits() == bits
            assert _bits_of(rep.to_float()) == bits
            assert FloatBits.from_float(rep.to_float()).to_bits() == bits

    @pytest.mark.parametrize("bits", [
        NAN_NEGATIVE, NAN_POSITIVE, POS_INF, NEG_INF, DOUBLE_MAX, DOUBLE_MIN,
        POS_ZERO, NEG_ZERO, MIN_SUBNORMAL, MAX_NEG_SUBNORMAL,
        0x7FF0000000000001,     # signalling NaN, smallest payload
        0xFFF7FFFFFFFFFFFF,     # signalling NaN, largest payload, negative
        0x7FFDEADBEEF00001,     # quiet NaN with payload
    ])
    def test_special_doubles(self, bits) -> None:
        rep = FloatBits.from_bits(bits, "double")
        assert rep.to_bits() == bits
        assert _bits_of(rep.to_float()) == bits

    def test_narrowing_is_silent(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert half_bits(1e10).is_infinity
            assert half_bits(-1e300).literal() == (True, 0x1F, 0)
            assert single_bits(1e300).is_infinity
            assert half_bits(0.1).to_bits() == 0x2E66

    def test_signed_zero_survives_from_float(self) -> None:
        assert double_bits(-0.0).to_bits() == NEG_ZERO
        assert double_bits(0.0).to_bits() == POS_ZERO
        assert half_bits(-0.0).to_bits() == 0x8000
        assert single_bits(-0.0).to_bits() == 0x80000000

    def test_from_float_defaults(self) -> None:
        assert FloatBits.from_float(1.0).fmt is BINARY64
        assert FloatBits.from_float(np.float32(1.5)).fmt is BINARY32
        assert FloatBits.from_float(np.float16(1.5)).fmt is BINARY16

    def test_per_width_helpers(self) -> None:
        assert half_bits(1.0).to_bits() == 0x3C00
        assert half_bits(1.5).to_bits() == 0x3E00
        assert single_bits(1.0).to_bits() == 0x3F800000
        assert double_bits(1.0).to_bits() == ONE

    def test_fields(self) -> None:
        rep = double_bits(-2.5)   # -1.25 * 2^1
        assert rep.literal() == (True, 1024, 1 << 50)


class TestValidation:
    def test_pattern_too_wide(self) -> None:
        with pytest.raises(ValueError):
            FloatBits.from_bits(1 << 16, "half")
        with pytest.raises(ValueError):
            FloatBits.from_bits(-1, "double")

    def test_fields_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            FloatBits(BINARY16, False, 32, 0)
        with pytest.raises(ValueError):
            FloatBits(BINARY16, False, 0, 1 << 10)

    def test_unknown_format(self) -> None:
        with pytest.raises(NotImplementedError):
            FloatBits.from_bits(0, "bfloat16")


# =============================================================================
# CLASSIFICATION
# =============================================================================


#            bits,              negative, nan,   inf,   finite, subnormal, zero
CATEGORIES = [
    (NAN_NEGATIVE,      True,  True,  False, False, False, False),
    (POS_INF,           False, False, True,  False, False, False),
    (NEG_INF,           True,  False, True,  False, False, False),
    (DOUBLE_MAX,        False, False, False, True,  False, False),
    (DOUBLE_MIN,        True,  False, False, True,  False, False),
    (POS_ZERO,          False, False, False, True,  False, True),
    (NEG_ZERO,          True,  False, False, True,  False, True),
    (ONE,               False, False, False, True,  False, False),
    (ONE | NEG_ZERO,    True,  False, False, True,  False, False),
    (MIN_SUBNORMAL,     False, False, False, True,  True,  False),
    (MAX_NEG_SUBNORMAL, True,  False, False, True,  True,  False),
]


class TestClassification:
    @pytest.mark.parametrize("bits,negative,nan,inf,finite,subnormal,zero", CATEGORIES)
    def test_double(self, bits, negative, nan, inf, finite, subnormal, zero) -> None:
        rep = FloatBits.from_bits(bits, BINARY64)
        assert rep.is_negative == negative
        assert rep.is_positive == (not negative)
        assert rep.is_nan == nan
        assert rep.is_infinity == inf
        assert rep.is_finite == finite
        assert rep.is_subnormal == subnormal
        assert rep.is_zero == zero

    @pytest.mark.parametrize("value,nan,inf,subnormal,zero", [
        (np.float16(np.inf), False, True, False, False),
        (np.float16(65504.0), False, False, False, False),
        (np.float16(2.0 ** -24), False, False, True, False),
        (np.float16(0.0), False, False, False, True),
        (np.float32(np.nan), True, False, False, False),
        (np.float32(1e-45), False, False, True, False),
    ])
    def test_narrow_formats(self, value, nan, inf, subnormal, zero) -> None:
        rep = FloatBits.from_float(value)
        assert rep.is_nan == nan
        assert rep.is_infinity == inf
        assert rep.is_subnormal == subnormal
        assert rep.is_zero == zero

    def test_agrees_with_numpy_for_every_half(self) -> None:
        values = np.arange(1 << 16, dtype=np.uint16).view(np.float16)
        nan = np.isnan(values)
        inf = np.isinf(values)
        for i, value in enumerate(values):
            rep = FloatBits.from_float(value)
            assert rep.is_nan == bool(nan[i])
            assert rep.is_infinity == bool(inf[i])
            assert rep.is_finite == (not nan[i] and not inf[i])


# =============================================================================
# LOGICAL COMPONENTS
# =============================================================================


class TestLogicalComponents:
    @pytest.mark.parametrize("bits,sign,exponent,mantissa", [
        (NAN_NEGATIVE, -1, BINARY64.max_logical_exponent, BINARY64.implicit_bit | (1 << 51)),
        (POS_INF, 1, BINARY64.max_logical_exponent, BINARY64.implicit_bit),
        (NEG_INF, -1, BINARY64.max_logical_exponent, BINARY64.implicit_bit),
        (DOUBLE_MAX, 1, BINARY64.max_finite_logical_exponent, BINARY64.max_logical_mantissa),
        (DOUBLE_MIN, -1, BINARY64.max_finite_logical_exponent, BINARY64.max_logical_mantissa),
        (POS_ZERO, 1, BINARY64.min_logical_exponent, 0),
        (NEG_ZERO, -1, BINARY64.min_logical_exponent, 0),
        (MIN_SUBNORMAL, 1, BINARY64.min_logical_exponent, 1),
        (MAX_NEG_SUBNORMAL, -1, BINARY64.min_logical_exponent, 1),
        (ONE, 1, -52, 1 << 52),
    ])
    def test_logical(self, bits, sign, exponent, mantissa) -> None:
        rep = FloatBits.from_bits(bits, BINARY64)
        assert rep.logical_sign == sign
        assert rep.logical_exponent == exponent
        assert rep.logical_mantissa == mantissa
        assert rep.logical() == (sign < 0, exponent, mantissa, rep.is_finite)

    @pytest.mark.parametrize("bits,sign,exponent,mantissa", [
        (NAN_NEGATIVE, -1, BINARY64.max_logical_exponent + 51, 3),
        (POS_INF, 1, BINARY64.max_logical_exponent + 52, 1),
        (NEG_INF, -1, BINARY64.max_logical_exponent + 52, 1),
        (DOUBLE_MAX, 1, BINARY64.max_finite_logical_exponent, BINARY64.max_logical_mantissa),
        (DOUBLE_MIN, -1, BINARY64.max_finite_logical_exponent, BINARY64.max_logical_mantissa),
        (POS_ZERO, 1, 0, 0),
        (NEG_ZERO, -1, 0, 0),
        (MIN_SUBNORMAL, 1, BINARY64.min_logical_exponent, 1),
        (MAX_NEG_SUBNORMAL, -1, BINARY64.min_logical_exponent, 1),
        (ONE, 1, 0, 1),
    ])
    def test_normalized_logical(self, bits, sign, exponent, mantissa) -> None:
        rep = FloatBits.from_bits(bits, BINARY64)
        assert rep.logical_sign == sign
        assert rep.normalized_logical_exponent == exponent
        assert rep.normalized_logical_mantissa == mantissa
        assert rep.normalized_logical() == (sign < 0, exponent, mantissa, rep.is_finite)

    def test_half_components(self) -> None:
        rep = half_bits(3.0)    # 0x4200
        assert rep.literal() == (False, 16, 0x200)
        assert rep.logical_mantissa == 0x600
        assert rep.logical_exponent == -9
        assert rep.normalized_logical_mantissa == 3
        assert rep.normalized_logical_exponent == 0

    def test_half_infinity_normalizes_to_power_of_two(self) -> None:
        rep = half_bits(np.inf)
        assert rep.normalized_logical_mantissa == 1
        assert rep.normalized_logical_exponent == 16

    def test_fraction_value(self) -> None:
        rep = double_bits(0.5)
        assert rep.normalized_logical_mantissa == 1
        assert rep.normalized_logical_exponent == -1

    def test_logical_value_matches_every_finite_half(self) -> None:
        values = np.arange(1 << 16, dtype=np.uint16).view(np.float16)
        for value in values:
            rep = FloatBits.from_float(value)
            if not rep.is_finite:
                continue
            expected = Fraction(float(value))
            logical = rep.logical_sign * rep.logical_mantissa * Fraction(2) ** rep.logical_exponent
            normalized = (rep.logical_sign * rep.normalized_logical_mantissa
                          * Fraction(2) ** rep.normalized_logical_exponent)
            assert logical == expected
            assert normalized == expected
            assert rep.normalized_logical_mantissa == 0 or rep.normalized_logical_mantissa % 2 == 1

    def test_logical_value_matches_sampled_doubles(self) -> None:
        for bits in _random_patterns(64, 3000, 3):
            rep = FloatBits.from_bits(bits, BINARY64)
            if not rep.is_finite:
                continue
            value = float(rep.to_float())
            assert rep.logical_sign * rep.logical_mantissa * Fraction(2) ** rep.logical_exponent == Fraction(value)


class TestString:
    def test_double(self) -> None:
        assert str(double_bits(1.0)) == \
            "FloatBits(binary64) { is_negative=False, exponent=0x3FF, mantissa=0x0000000000000 }"

    def test_half(self) -> None:
        assert str(half_bits(-1.5)) == "FloatBits(binary16) { is_negative=True, exponent=0x0F, mantissa=0x200 }"
