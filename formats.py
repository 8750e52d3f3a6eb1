from dataclasses import dataclass

import numpy as np

@dataclass(frozen=True)
class FloatFormat:
    name: str
    exponent_bits: int          # width of the biased exponent field
    mantissa_bits: int          # width of the stored mantissa field (excl. implicit 1)
    float_type: type            # numpy scalar type holding values of this format
    bits_type: type             # unsigned numpy scalar type of the same width
    # Derived (IEEE-754 binary interchange layout):
    total_bits: int             # 1 + exponent_bits + mantissa_bits
    bias: int                   # 2^(exponent_bits-1) - 1
    max_exponent_field: int     # all ones; uniquely identifies infinities and NaNs
    mantissa_mask: int          # 2^mantissa_bits - 1
    implicit_bit: int           # 2^mantissa_bits, set in the logical mantissa of normal numbers
    sign_bit: int               # 2^(total_bits-1)
    p: int                      # precision in bits (incl. implicit 1)
    emin: int                   # minimum normal exponent (unbiased)
    emax: int                   # maximum finite exponent (unbiased)
    min_logical_exponent: int   # logical exponent of zero, subnormals and the smallest normals
    max_finite_logical_exponent: int
    max_logical_exponent: int   # logical exponent of infinities and NaNs
    max_logical_mantissa: int

    @property
    def exponent_hex_width(self) -> int:
        return (self.exponent_bits + 3) // 4

    @property
    def mantissa_hex_width(self) -> int:
        return (self.mantissa_bits + 3) // 4

def _derive(name: str, exponent_bits: int, mantissa_bits: int, float_type: type, bits_type: type) -> FloatFormat:
    total_bits = 1 + exponent_bits + mantissa_bits
    # bias = 2^(k-1) - 1
    bias = (1 << (exponent_bits - 1)) - 1
    max_exponent_field = (1 << exponent_bits) - 1
    mantissa_mask = (1 << mantissa_bits) - 1
    implicit_bit = 1 << mantissa_bits
    return FloatFormat(
        name=name, exponent_bits=exponent_bits, mantissa_bits=mantissa_bits,
        float_type=float_type, bits_type=bits_type,
        total_bits=total_bits, bias=bias, max_exponent_field=max_exponent_field,
        mantissa_mask=mantissa_mask, implicit_bit=implicit_bit,
        sign_bit=1 << (total_bits - 1),
        p=mantissa_bits + 1, emin=1 - bias, emax=bias,
        # The subnormal range shares the exponent of exponent field 1.
        min_logical_exponent=1 - bias - mantissa_bits,
        max_finite_logical_exponent=(max_exponent_field - 1) - bias - mantissa_bits,
        max_logical_exponent=max_exponent_field - bias - mantissa_bits,
        max_logical_mantissa=mantissa_mask | implicit_bit,
    )

# Authoritative IEEE-754 binary layouts (exponent bits, stored mantissa bits):
# - binary16:  5, 10
# - binary32:  8, 23
# - binary64: 11, 52
_LAYOUTS = {
    "binary16": (5, 10, np.float16, np.uint16),
    "binary32": (8, 23, np.float32, np.uint32),
    "binary64": (11, 52, np.float64, np.uint64),
}

_REGISTRY = {
    "float16":   "binary16",
    "fp16":      "binary16",
    "binary16":  "binary16",
    "half":      "binary16",

    "float32":   "binary32",
    "fp32":      "binary32",
    "binary32":  "binary32",
    "single":    "binary32",

    "float64":   "binary64",
    "fp64":      "binary64",
    "binary64":  "binary64",
    "double":    "binary64",
}

_FORMATS = {key: _derive(key, *layout) for key, layout in _LAYOUTS.items()}

BINARY16 = _FORMATS["binary16"]
BINARY32 = _FORMATS["binary32"]
BINARY64 = _FORMATS["binary64"]

def get_float_format(name) -> FloatFormat:
    if isinstance(name, FloatFormat):
        return name
    key = (name or "binary64").lower()
    try:
        return _FORMATS[_REGISTRY[key]]
    except KeyError:
        raise NotImplementedError(f"Format '{name}' not implemented. Supported formats {sorted(_REGISTRY)}")

def format_of_type(float_type) -> FloatFormat:
    """Format whose numpy scalar type matches `float_type` (e.g. np.float32)."""
    dtype = np.dtype(float_type)
    for fmt in _FORMATS.values():
        if np.dtype(fmt.float_type) == dtype:
            return fmt
    raise NotImplementedError(f"No binary format for dtype {dtype}")
