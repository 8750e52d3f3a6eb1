from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

from errors import BaseOutOfRangeError

Digits = Tuple[int, ...]

_DIGIT_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"

def digits_of(n: int, base: int) -> Digits:
    """Digits of a non-negative integer in `base`, most significant first. Zero has no digits."""
    if n < 0:
        raise ValueError(f"digits_of requires n >= 0, got {n}")
    out = []
    while n:
        n, d = divmod(n, base)
        out.append(d)
    out.reverse()
    return tuple(out)

@dataclass(frozen=True)
class DigitExpansion:
    """
    Positional expansion of a rational in some base:

        [-] whole . terminating (repeating repeating ...)

    An empty `repeating` part means the expansion is exact. Zero has all three parts empty.
    """
    is_negative: bool
    whole: Digits
    terminating: Digits
    repeating: Digits
    base: int = 10

    @property
    def is_exact(self) -> bool:
        return not self.repeating

    @property
    def is_zero(self) -> bool:
        return not (self.whole or self.terminating or self.repeating)

    @property
    def has_fraction(self) -> bool:
        return bool(self.terminating or self.repeating)

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self, show_base: bool = False) -> str:
        """
        Space separated digit tokens, e.g. "1 0 . 3 [ 2 8 5 7 1 4 ]".
        With show_base, " (Base N)" is appended whenever more than one digit is shown.
        """
        tokens = [str(d) for d in self.whole] or ["0"]
        n_digits = len(tokens)
        if self.has_fraction:
            tokens.append(".")
            tokens.extend(str(d) for d in self.terminating)
            if self.repeating:
                tokens.append("[")
                tokens.extend(str(d) for d in self.repeating)
                tokens.append("]")
            n_digits += len(self.terminating) + len(self.repeating)
        if self.is_negative and not self.is_zero:
            tokens[0] = "-" + tokens[0]
        s = " ".join(tokens)
        if show_base and n_digits > 1:
            s += f" (Base {self.base})"
        return s

    def compact(self) -> str:
        """
        Contiguous rendering with the repeating part in parentheses, e.g. "10.3(285714)".
        Only bases up to 36 have single-character digits.
        """
        if self.base > len(_DIGIT_CHARS):
            raise ValueError(f"compact rendering supports bases up to {len(_DIGIT_CHARS)}, got {self.base}")
        if self.is_zero:
            return "0"

        def chars(ds: Digits) -> str:
            return "".join(_DIGIT_CHARS[d] for d in ds)

        sign = '-' if self.is_negative else ''
        int_part = chars(self.whole) or "0"
        if not self.has_fraction:
            return f"{sign}{int_part}"
        if self.repeating:
            return f"{sign}{int_part}.{chars(self.terminating)}({chars(self.repeating)})"
        return f"{sign}{int_part}.{chars(self.terminating)}"

def expand(numerator: int, denominator: int, base: int = 10) -> DigitExpansion:
    """
    Exact base-`base` expansion of numerator/denominator (denominator > 0).

    Long division on |numerator|; a remainder that reappears marks the start of the cycle.
    Remainders lie in [0, denominator), so this takes at most `denominator` steps.
    """
    if base < 2:
        raise BaseOutOfRangeError(base)
    if denominator <= 0:
        raise ValueError(f"expand requires a positive denominator, got {denominator}")

    is_negative = numerator < 0
    n = abs(numerator)

    if denominator == 1:
        return DigitExpansion(is_negative, digits_of(n, base), (), (), base)

    whole, rem = divmod(n, denominator)
    whole_digits = digits_of(whole, base)
    if rem == 0:
        return DigitExpansion(is_negative, whole_digits, (), (), base)

    # Long division for fractional part with cycle detection
    seen: Dict[int, int] = {rem: 0}  # remainder -> index in digits
    digits: List[int] = []
    index = 0
    while True:
        index += 1
        rem *= base
        digit, rem = divmod(rem, denominator)
        digits.append(digit)
        if rem == 0:
            # Terminates
            return DigitExpansion(is_negative, whole_digits, tuple(digits), (), base)
        start = seen.setdefault(rem, index)
        if start != index:
            # Repeats
            return DigitExpansion(is_negative, whole_digits, tuple(digits[:start]), tuple(digits[start:]), base)
