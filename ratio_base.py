"""Behaviour shared by the bounded (FixedRatio) and unbounded (BigRatio) ratio types.

Every instance is canonical: denominator > 0, gcd(|numerator|, denominator) == 1, and
zero is stored as 0 / 1. Subclasses only decide how components are checked, reduced
and negated; the factory pipeline, ordering and rendering live here.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from math import gcd
from typing import ClassVar, Iterator, Optional, Tuple

import numpy as np

from arithmetic import Q
from digits import DigitExpansion, expand
from errors import DivideByZeroError, ZeroDenominatorError

COMPONENT_SEPARATOR = "/"


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def of(cls, lhs: int, rhs: int) -> Ordering:
        return cls((lhs > rhs) - (lhs < rhs))


def is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True, eq=False, repr=False)
class RatioBase:
    numerator: int
    denominator: int = 1

    ZERO: ClassVar[RatioBase]
    ONE: ClassVar[RatioBase]
    NEGATIVE_ONE: ClassVar[RatioBase]

    def __post_init__(self):
        n = self._component(self.numerator, "numerator")
        d = self._component(self.denominator, "denominator")
        if d <= 0 or gcd(n, d) != 1:
            raise ValueError(
                f"{n} {COMPONENT_SEPARATOR} {d} is not canonical; use {type(self).__name__}.create")
        object.__setattr__(self, "numerator", n)
        object.__setattr__(self, "denominator", d)

    # ------------------------------------------------------------------
    # Component hooks
    # ------------------------------------------------------------------

    @classmethod
    def _component(cls, value, what: str) -> int:
        raise NotImplementedError

    @classmethod
    def _gcd(cls, x: int, y: int) -> int:
        raise NotImplementedError

    @classmethod
    def _negate(cls, value: int) -> int:
        raise NotImplementedError

    @classmethod
    def _positive_denominator(cls, numerator: int, denominator: int) -> Tuple[int, int]:
        if denominator < 0:
            return cls._negate(numerator), cls._negate(denominator)
        return numerator, denominator

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, numerator, denominator):
        """numerator / denominator, reduced, with the sign carried by the numerator."""
        numerator = cls._component(numerator, "numerator")
        denominator = cls._component(denominator, "denominator")
        if denominator == 0:
            raise ZeroDenominatorError()
        if numerator == 0:
            return cls.ZERO

        g = cls._gcd(numerator, denominator)
        return cls(*cls._positive_denominator(numerator // g, denominator // g))

    @classmethod
    def create_whole(cls, numerator):
        return cls(cls._component(numerator, "numerator"), 1)

    @classmethod
    def create_one_over(cls, denominator):
        denominator = cls._component(denominator, "denominator")
        if denominator == 0:
            raise ZeroDenominatorError()
        return cls(*cls._positive_denominator(1, denominator))

    @classmethod
    def from_fraction(cls, q: Q):
        return cls.create(q.numerator, q.denominator)

    def reciprocal(self):
        if self.numerator == 0:
            raise DivideByZeroError()
        return type(self)(*self._positive_denominator(self.denominator, self.numerator))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def sign(self) -> int:
        return (self.numerator > 0) - (self.numerator < 0)

    @property
    def is_whole(self) -> bool:
        return self.denominator == 1

    def whole_value(self) -> Optional[int]:
        """The integer this ratio equals, or None if it is not whole."""
        return self.numerator if self.denominator == 1 else None

    def as_tuple(self) -> Tuple[int, int]:
        return self.numerator, self.denominator

    def __iter__(self) -> Iterator[int]:
        return iter(self.as_tuple())

    def to_fraction(self) -> Q:
        return Q(self.numerator, self.denominator)

    def represent_in_base(self, base: int = 10) -> DigitExpansion:
        return expand(self.numerator, self.denominator, base)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def compare(self, other) -> Ordering:
        """Tri-state comparison against a ratio of the same type or an integer, by cross-multiplication."""
        if isinstance(other, type(self)):
            return Ordering.of(self.numerator * other.denominator, other.numerator * self.denominator)
        if is_integer(other):
            return Ordering.of(self.numerator, int(other) * self.denominator)
        raise TypeError(f"cannot compare {type(self).__name__} with {type(other).__name__}")

    def _try_compare(self, other) -> Optional[Ordering]:
        if isinstance(other, type(self)) or is_integer(other):
            return self.compare(other)
        return None

    def __lt__(self, other):
        c = self._try_compare(other)
        return NotImplemented if c is None else c < 0

    def __le__(self, other):
        c = self._try_compare(other)
        return NotImplemented if c is None else c <= 0

    def __gt__(self, other):
        c = self._try_compare(other)
        return NotImplemented if c is None else c > 0

    def __ge__(self, other):
        c = self._try_compare(other)
        return NotImplemented if c is None else c >= 0

    def __eq__(self, other):
        if isinstance(other, type(self)):
            return self.numerator == other.numerator and self.denominator == other.denominator
        if is_integer(other):
            return self.denominator == 1 and self.numerator == int(other)
        return NotImplemented

    def __hash__(self):
        # agrees with hash(int) and hash(Fraction) for equal values
        return hash(Q(self.numerator, self.denominator))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __neg__(self):
        return type(self)(self._negate(self.numerator), self.denominator)

    def __bool__(self) -> bool:
        return self.numerator != 0

    def __float__(self) -> float:
        return self.numerator / self.denominator

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.numerator} {COMPONENT_SEPARATOR} {self.denominator}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.numerator}, {self.denominator})"


def install_constants(cls) -> None:
    cls.ZERO = cls(0, 1)
    cls.ONE = cls(1, 1)
    cls.NEGATIVE_ONE = cls(-1, 1)
