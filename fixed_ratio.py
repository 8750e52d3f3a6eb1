"""Ratios of fixed-width signed integers (int8, int16, int32, int64).

Components always fit the width. Because the sign is carried by the numerator, any
construction that has to negate the width's minimum (e.g. 1 / -2^31 for Ratio32) has no
canonical form and raises RatioOverflowError. Comparisons cross-multiply in Python ints,
which are wide enough for the product of any two components.
"""

from __future__ import annotations
from typing import ClassVar, Dict, Type

from arithmetic import IntWidth, WIDTHS, bounded_gcd, checked_negate
from big_ratio import BigRatio
from ratio_base import RatioBase, install_constants


class FixedRatio(RatioBase):
    WIDTH: ClassVar[IntWidth]

    @classmethod
    def _component(cls, value, what: str) -> int:
        width = getattr(cls, "WIDTH", None)
        if width is None:
            raise TypeError("FixedRatio has no width; use Ratio8, Ratio16, Ratio32 or Ratio64")
        return width.check(value, what)

    @classmethod
    def _gcd(cls, x: int, y: int) -> int:
        return bounded_gcd(x, y, cls.WIDTH)

    @classmethod
    def _negate(cls, value: int) -> int:
        return checked_negate(value, cls.WIDTH)

    @classmethod
    def for_width(cls, bits: int) -> Type[FixedRatio]:
        try:
            return _BY_WIDTH[bits]
        except KeyError:
            raise NotImplementedError(f"No ratio type for {bits}-bit integers. Supported widths {sorted(_BY_WIDTH)}")

    def to_big(self) -> BigRatio:
        return BigRatio.from_ratio(self)


class Ratio8(FixedRatio):
    WIDTH = WIDTHS[8]

class Ratio16(FixedRatio):
    WIDTH = WIDTHS[16]

class Ratio32(FixedRatio):
    WIDTH = WIDTHS[32]

class Ratio64(FixedRatio):
    WIDTH = WIDTHS[64]


_BY_WIDTH: Dict[int, Type[FixedRatio]] = {}
for _cls in (Ratio8, Ratio16, Ratio32, Ratio64):
    install_constants(_cls)
    _BY_WIDTH[_cls.WIDTH.bits] = _cls
del _cls
