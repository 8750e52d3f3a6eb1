"""Sign / exponent / mantissa decomposition of IEEE-754 binary16, binary32 and binary64 values.

The decomposition reinterprets bits only (numpy views); no arithmetic is done on the
value itself, so every bit pattern, including signed zeros and NaN payloads, survives
a round trip through FloatBits unchanged.

Besides the literal fields, FloatBits exposes the "logical" view

    value = sign · logical_mantissa · 2^logical_exponent

which holds for normal and subnormal numbers alike, and a normalized variant in which
the mantissa has no trailing zero bits (zero maps to 0 · 2^0).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from formats import FloatFormat, BINARY16, BINARY32, BINARY64, get_float_format, format_of_type


@dataclass(frozen=True)
class FloatBits:
    fmt: FloatFormat
    is_negative: bool
    exponent_field: int     # biased exponent, 0 .. fmt.max_exponent_field
    mantissa_field: int     # stored mantissa, 0 .. fmt.mantissa_mask

    def __post_init__(self):
        if not 0 <= self.exponent_field <= self.fmt.max_exponent_field:
            raise ValueError(f"exponent field {self.exponent_field} out of range for {self.fmt.name}")
        if not 0 <= self.mantissa_field <= self.fmt.mantissa_mask:
            raise ValueError(f"mantissa field {self.mantissa_field} out of range for {self.fmt.name}")

    # ------------------------------------------------------------------
    # Construction / reconstruction
    # ------------------------------------------------------------------

    @classmethod
    def from_bits(cls, bits: int, fmt="binary64") -> FloatBits:
        fmt = get_float_format(fmt)
        bits = int(bits)
        if not 0 <= bits < (1 << fmt.total_bits):
            raise ValueError(f"bit pattern {bits:#x} does not fit in {fmt.total_bits} bits")
        return cls(
            fmt=fmt,
            is_negative=(bits & fmt.sign_bit) != 0,
            exponent_field=(bits >> fmt.mantissa_bits) & fmt.max_exponent_field,
            mantissa_field=bits & fmt.mantissa_mask,
        )

    @classmethod
    def from_float(cls, value, fmt: Optional[object] = None) -> FloatBits:
        """
        Decompose `value`. Without an explicit format, numpy floating scalars keep their
        own width and anything else is treated as binary64.
        """
        if fmt is None:
            fmt = format_of_type(type(value)) if isinstance(value, np.floating) else BINARY64
        else:
            fmt = get_float_format(fmt)
        # narrowing casts round, or overflow to infinity, without a warning
        with np.errstate(over="ignore"):
            arr = np.array([value], dtype=fmt.float_type)
        return cls.from_bits(int(arr.view(fmt.bits_type)[0]), fmt)

    def to_bits(self) -> int:
        return ((self.fmt.sign_bit if self.is_negative else 0)
                | (self.exponent_field << self.fmt.mantissa_bits)
                | self.mantissa_field)

    def to_float(self):
        """The represented value as the format's numpy scalar (np.float16/32/64)."""
        arr = np.array([self.to_bits()], dtype=self.fmt.bits_type)
        return arr.view(self.fmt.float_type)[0]

    # ------------------------------------------------------------------
    # Classification (field values only)
    # ------------------------------------------------------------------

    @property
    def is_positive(self) -> bool:
        return not self.is_negative

    @property
    def is_zero(self) -> bool:
        return self.exponent_field == 0 and self.mantissa_field == 0

    @property
    def is_subnormal(self) -> bool:
        return self.exponent_field == 0 and self.mantissa_field != 0

    @property
    def is_infinity(self) -> bool:
        return self.exponent_field == self.fmt.max_exponent_field and self.mantissa_field == 0

    @property
    def is_nan(self) -> bool:
        return self.exponent_field == self.fmt.max_exponent_field and self.mantissa_field != 0

    @property
    def is_finite(self) -> bool:
        return self.exponent_field != self.fmt.max_exponent_field

    # ------------------------------------------------------------------
    # Logical components
    # ------------------------------------------------------------------

    @property
    def logical_sign(self) -> int:
        return -1 if self.is_negative else 1

    @property
    def logical_mantissa(self) -> int:
        if self.exponent_field == 0:
            return self.mantissa_field
        return self.mantissa_field | self.fmt.implicit_bit

    @property
    def logical_exponent(self) -> int:
        return (self.exponent_field or 1) - (self.fmt.bias + self.fmt.mantissa_bits)

    @property
    def _normalization_shift(self) -> int:
        m = self.logical_mantissa
        if m == 0:
            return 0
        # m & -m isolates the lowest set bit
        return (m & -m).bit_length() - 1

    @property
    def normalized_logical_mantissa(self) -> int:
        return self.logical_mantissa >> self._normalization_shift

    @property
    def normalized_logical_exponent(self) -> int:
        if self.logical_mantissa == 0:
            return 0
        return self.logical_exponent + self._normalization_shift

    def literal(self) -> Tuple[bool, int, int]:
        return self.is_negative, self.exponent_field, self.mantissa_field

    def logical(self) -> Tuple[bool, int, int, bool]:
        """(is_negative, exponent, mantissa, is_finite) in the logical view."""
        return self.is_negative, self.logical_exponent, self.logical_mantissa, self.is_finite

    def normalized_logical(self) -> Tuple[bool, int, int, bool]:
        shift = self._normalization_shift
        mantissa = self.logical_mantissa
        exponent = 0 if mantissa == 0 else self.logical_exponent + shift
        return self.is_negative, exponent, mantissa >> shift, self.is_finite

    def __str__(self) -> str:
        return (f"FloatBits({self.fmt.name}) {{ "
                f"is_negative={self.is_negative}, "
                f"exponent=0x{self.exponent_field:0{self.fmt.exponent_hex_width}X}, "
                f"mantissa=0x{self.mantissa_field:0{self.fmt.mantissa_hex_width}X} }}")


def half_bits(value) -> FloatBits:
    return FloatBits.from_float(value, BINARY16)

def single_bits(value) -> FloatBits:
    return FloatBits.from_float(value, BINARY32)

def double_bits(value) -> FloatBits:
    return FloatBits.from_float(value, BINARY64)
