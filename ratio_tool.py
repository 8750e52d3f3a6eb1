from __future__ import annotations
from typing import List, Optional

import sys, json, time

from arithmetic import Q, qstr
from big_ratio import BigRatio
from digits import DigitExpansion
from errors import RatioError
from float_bits import FloatBits
from parsing import ParseError, parse_base, parse_float_bits, parse_ratio
from ratio_base import RatioBase

DEFAULT_BASE = 10
LONG_PERIOD_WARNING = 10 ** 6   # denominators above this may take a while to expand

USAGE = (
    "Usage:\n"
    "  {prog} expand <ratio> [base] [--json]\n"
    "  {prog} bits <format> <value|0xbits>\n"
    "  {prog} exact <value> [--json]"
)

class RatioEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, RatioBase):
            return str(obj)
        if isinstance(obj, DigitExpansion):
            return {
                "base": obj.base,
                "is_negative": obj.is_negative,
                "whole": list(obj.whole),
                "terminating": list(obj.terminating),
                "repeating": list(obj.repeating),
                "text": str(obj),
            }
        if isinstance(obj, Q):
            return qstr(obj)
        return super().default(obj)

def float_bits_summary(bits: FloatBits) -> List[str]:
    neg, exp, mant, finite = bits.logical()
    _, nexp, nmant, _ = bits.normalized_logical()
    kinds = [name for name, flag in (("zero", bits.is_zero), ("subnormal", bits.is_subnormal),
                                     ("infinity", bits.is_infinity), ("nan", bits.is_nan),
                                     ("finite", bits.is_finite)) if flag]
    return [
        str(bits),
        f"  bits:       0x{bits.to_bits():0{bits.fmt.total_bits // 4}X}",
        f"  value:      {float(bits.to_float())!r}",
        f"  class:      {', '.join(kinds)}",
        f"  logical:    {'-' if neg else '+'}{mant} * 2^{exp}",
        f"  normalized: {'-' if neg else '+'}{nmant} * 2^{nexp}",
    ]

def run_expand(args: List[str], as_json: bool) -> None:
    if len(args) not in (1, 2):
        raise ParseError("expand takes <ratio> [base]")
    ratio = parse_ratio(args[0])
    base = parse_base(args[1]) if len(args) == 2 else DEFAULT_BASE

    if ratio.denominator > LONG_PERIOD_WARNING:
        print(f"WARNING: denominator {ratio.denominator} allows up to {ratio.denominator} fractional digits.")
        print(f"         Expansion may take a while.")

    start = time.perf_counter()
    expansion = ratio.represent_in_base(base)
    elapsed = time.perf_counter() - start

    if as_json:
        print(json.dumps({"ratio": ratio, "expansion": expansion}, indent=2, cls=RatioEncoder))
        return
    print(f"Ratio:     {ratio}")
    print(f"Expansion: {expansion.to_string(show_base=True)}")
    if base <= 36:
        print(f"Compact:   {expansion.compact()}")
    print(f"  terminating digits: {len(expansion.terminating)}, period: {len(expansion.repeating)}")
    print(f"  time (ms): {elapsed * 1000}")

def run_bits(args: List[str]) -> None:
    if len(args) != 2:
        raise ParseError("bits takes <format> <value>")
    try:
        bits = parse_float_bits(args[1], args[0])
    except NotImplementedError as e:
        raise ParseError(str(e))
    text = args[1].strip()
    if not text.lower().startswith("0x") and not bits.is_nan and float(bits.to_float()) != float(text):
        print(f"WARNING: {text} is not exactly representable in {bits.fmt.name}; showing the nearest value.")
    for line in float_bits_summary(bits):
        print(line)

def run_exact(args: List[str], as_json: bool) -> None:
    if len(args) != 1:
        raise ParseError("exact takes <value>")
    bits = parse_float_bits(args[0], "binary64")
    if bits.is_infinity:
        print(f"WARNING: {args[0]} is infinite; converting its bit pattern as if it were finite.")
    ratio = BigRatio.from_exact_double(bits.to_float())
    if as_json:
        print(json.dumps({"value": args[0], "ratio": ratio, "decimal": ratio.to_fraction()},
                         indent=2, cls=RatioEncoder))
        return
    print(f"Exact ratio: {ratio}")
    print(f"Decimal:     {ratio.represent_in_base(10).compact()}")

def main(argv: Optional[List[str]] = None) -> None:
    argv = list(sys.argv if argv is None else argv)
    prog, args = argv[0], argv[1:]
    as_json = bool(args) and args[-1] == "--json"
    if as_json:
        args = args[:-1]

    if not args or args[0] not in ("expand", "bits", "exact"):
        print(USAGE.format(prog=prog))
        sys.exit(1)

    command, rest = args[0], args[1:]
    try:
        if command == "expand":
            run_expand(rest, as_json)
        elif command == "bits":
            run_bits(rest)
        else:
            run_exact(rest, as_json)
    except ParseError as e:
        print(f"Error parsing arguments: {e}"); sys.exit(1)
    except RatioError as e:
        print(f"Error: {e}"); sys.exit(1)

if __name__ == "__main__":
    main()
