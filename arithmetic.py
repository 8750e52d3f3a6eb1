from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from digits import expand
from errors import RatioOverflowError

Q = Fraction  # rational type alias

def qstr(q: Fraction) -> str:
    """
    Exact decimal expansion of a Fraction without float rounding.
    - If it terminates, returns all digits.
    - If it repeats, returns a string with the repeating part in parentheses, e.g. "0.(3)".
    """
    return expand(q.numerator, q.denominator, 10).compact()

@dataclass(frozen=True)
class IntWidth:
    name: str
    bits: int
    min: int     # most negative representable value; its negation is not representable
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def check(self, value: int, what: str = "value") -> int:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"{what} must be an integer, got {type(value).__name__}")
        value = int(value)
        if not self.contains(value):
            raise ValueError(f"{what} {value} is outside the {self.name} range [{self.min}, {self.max}]")
        return value

def _derive(dtype) -> IntWidth:
    info = np.iinfo(dtype)
    return IntWidth(name=np.dtype(dtype).name, bits=info.bits, min=int(info.min), max=int(info.max))

# Signed two's complement widths backing the bounded ratio types.
WIDTHS = {
    8:  _derive(np.int8),
    16: _derive(np.int16),
    32: _derive(np.int32),
    64: _derive(np.int64),
}

def get_int_width(bits: int) -> IntWidth:
    try:
        return WIDTHS[bits]
    except KeyError:
        raise NotImplementedError(f"Integer width {bits} not implemented. Supported widths {sorted(WIDTHS)}")

def checked_negate(value: int, width: IntWidth) -> int:
    """Negate a bounded integer, raising RatioOverflowError for the width's minimum."""
    if value == width.min:
        raise RatioOverflowError(f"Negation of {value} overflows {width.name}.")
    return -value

def bounded_gcd(x: int, y: int, width: IntWidth) -> int:
    """
    Euclid on bounded values. The result is non-negative except when it is the
    width's minimum, which is returned as is: it only arises when both inputs are
    that minimum, and dividing by it still gives the right quotient.
    """
    while y != 0:
        x, y = y, x % y
    return x if x == width.min else abs(x)
