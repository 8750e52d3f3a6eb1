from big_ratio import BigRatio
from float_bits import FloatBits
from formats import get_float_format

RATIO_CHARS = set("0123456789-/ ")
FLOAT_WORDS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity", "nan", "+nan", "-nan"}
FLOAT_CHARS = set("0123456789.eE+-")
HEX_CHARS = set("0123456789abcdefABCDEF")

class ParseError(ValueError):
    pass

def load_text_strict(s: str, allowed: set, what: str) -> str:
    s = s.strip()
    if not s:
        raise ParseError(f"Empty {what}.")
    if any(c not in allowed for c in s):
        bad = sorted(set(c for c in s if c not in allowed))
        raise ParseError(f"Illegal character(s) in {what}: {bad}.")
    return s

def skip_spaces(s: str, i: int) -> int:
    while i < len(s) and s[i] == ' ':
        i += 1
    return i

def parse_integer(s: str, i: int):
    n = len(s)
    start = i
    # optional leading '-'
    if i < n and s[i] == '-':
        i += 1
        if i >= n or not s[i].isdigit():
            raise ParseError(f"'-' must be followed by digits at position {i}")
    if i >= n or not s[i].isdigit():
        raise ParseError(f"Expected digit at position {i}")
    while i < n and s[i].isdigit():
        i += 1
    return int(s[start:i]), i

def parse_ratio(text: str) -> BigRatio:
    """Parse "n", "n/d" or "n / d" (either component may be negative) into a canonical BigRatio."""
    s = load_text_strict(text, RATIO_CHARS, "ratio")
    numerator, i = parse_integer(s, 0)
    i = skip_spaces(s, i)
    if i == len(s):
        return BigRatio.create_whole(numerator)
    if s[i] != '/':
        raise ParseError(f"Expected '/' at position {i}")
    i = skip_spaces(s, i + 1)
    denominator, i = parse_integer(s, i)
    if i != len(s):
        raise ParseError(f"Unexpected trailing content at position {i}: {s[i:]}")
    return BigRatio.create(numerator, denominator)

def parse_base(text: str) -> int:
    s = load_text_strict(text, set("0123456789"), "base")
    base, _ = parse_integer(s, 0)
    return base

def parse_float_bits(text: str, fmt="binary64") -> FloatBits:
    """
    A float literal ("1.5", "-0.0", "inf", "nan") converted to `fmt`, or a raw
    bit pattern written as "0x..." which is taken as is.
    """
    fmt = get_float_format(fmt)
    s = text.strip()
    if s.lower().startswith("0x"):
        digits = load_text_strict(s[2:], HEX_CHARS, "bit pattern")
        bits = int(digits, 16)
        if bits >= (1 << fmt.total_bits):
            raise ParseError(f"Bit pattern {s} does not fit in {fmt.total_bits} bits ({fmt.name}).")
        return FloatBits.from_bits(bits, fmt)
    if s.lower() not in FLOAT_WORDS:
        s = load_text_strict(s, FLOAT_CHARS, "float literal")
    try:
        value = float(s)
    except ValueError:
        raise ParseError(f"Not a float literal: {text!r}")
    return FloatBits.from_float(value, fmt)
