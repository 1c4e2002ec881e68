from __future__ import annotations
import math

from .codecs.bitcursor import sign_extend

# Fractional bits and field widths (RFC 6225 / 802.11 Z subelement)
LATLON_FRAC_BITS = 25
LATLON_WIDTH = 34
ALTITUDE_FRAC_BITS = 8
ALTITUDE_WIDTH = 30
FLOOR_FRAC_BITS = 4
FLOOR_WIDTH = 14
HEIGHT_FRAC_BITS = 12
HEIGHT_WIDTH = 24
HEIGHT_WIDTH_SHORT = 16  # 5-octet Z variant

# Uncertainty exponent offsets: uncertainty = 2^(m - code)
LATLON_UNC_M = 8
ALTITUDE_UNC_M = 21
HEIGHT_UNC_M = 11

# Maximum codes correspond to the *smallest* uncertainty; larger codes are reserved
MAX_LCI_UNCERTAINTY = 34
MAX_Z_UNCERTAINTY = 24

# Guards against round-trip mismatch at exact powers of two
UNCERTAINTY_EPS = 1e-6


class UncertaintyRangeError(ValueError):
    pass


def round_half_away(x: float) -> int:
    """Round to nearest, ties away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def to_fixed(value: float, frac_bits: int) -> int:
    return round_half_away(value * (1 << frac_bits))


def fixed_limits(width: int) -> tuple[int, int]:
    return -(1 << (width - 1)), (1 << (width - 1)) - 1


def fixed_fits(raw: int, width: int) -> bool:
    lo, hi = fixed_limits(width)
    return lo <= raw <= hi


def to_field(raw: int, width: int) -> int:
    """Two's complement bit pattern of `raw` in a `width`-bit field."""
    return raw & ((1 << width) - 1)


def from_field(raw: int, frac_bits: int, width: int) -> float:
    return sign_extend(raw, width) / (1 << frac_bits)


def uncertainty_exponent(value: float, m: int) -> int:
    """
    Unclamped exponent code c with 2^(m-c) >= value, i.e. m - ceil(log2(value) - eps).
    Non-positive values have no code.
    """
    if not value > 0:
        raise UncertaintyRangeError(f"uncertainty {value!r} is not positive")
    return m - int(math.ceil(math.log2(value) - UNCERTAINTY_EPS))


def uncertainty_from_code(code: int, m: int) -> float:
    """Code 0 means unknown and decodes as 0."""
    if code == 0:
        return 0.0
    return 2.0 ** (m - code)
