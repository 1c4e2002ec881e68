from __future__ import annotations
import math

from lcicoder.binary.scale import (
    UncertaintyRangeError,
    fixed_fits,
    fixed_limits,
    from_field,
    to_field,
    to_fixed,
    uncertainty_exponent,
    uncertainty_from_code,
)
from lcicoder.models.common import ZeroUncertainty
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics


def encode_fixed(
    value: float,
    *,
    frac_bits: int,
    width: int,
    name: str,
    diags: Diagnostics,
    sid: int,
) -> int:
    """Fixed-point field bits for `value`, clamped to what `width` bits can hold."""
    if math.isnan(value):
        diags.error(DiagnosticKind.RANGE_VIOLATION, f"{name} is NaN; encoded as 0", subelement_id=sid)
        return 0
    lo, hi = fixed_limits(width)
    # inf, or a finite value that overflows once scaled, saturates by sign
    if math.isfinite(value * (1 << frac_bits)):
        raw = to_fixed(value, frac_bits)
    else:
        raw = hi + 1 if value > 0 else lo - 1
    if not fixed_fits(raw, width):
        clamped = min(max(raw, lo), hi)
        diags.warning(
            DiagnosticKind.RANGE_VIOLATION,
            f"{name} {value!r} does not fit {width} bits; clamped to {clamped / (1 << frac_bits)!r}",
            subelement_id=sid,
        )
        raw = clamped
    return to_field(raw, width)


def decode_fixed(raw: int, *, frac_bits: int, width: int) -> float:
    return from_field(raw, frac_bits, width)


def encode_uncertainty(
    value: float,
    *,
    m: int,
    max_code: int,
    policy: ZeroUncertainty,
    name: str,
    diags: Diagnostics,
    sid: int,
) -> int:
    """
    Exponent code for a physical uncertainty. 0 is encoded as "unknown" (code 0)
    or, under ZeroUncertainty.SMALLEST, as the maximum code.
    """
    if value == 0:
        return 0 if policy == ZeroUncertainty.UNKNOWN else max_code
    try:
        code = 0 if value == math.inf else uncertainty_exponent(value, m)
    except UncertaintyRangeError as e:
        diags.error(DiagnosticKind.RANGE_VIOLATION, f"{name}: {e}; encoded as unknown",
                    subelement_id=sid)
        return 0
    if code <= 0:
        diags.warning(
            DiagnosticKind.RANGE_VIOLATION,
            f"{name} {value!r} too large (code {code} not positive); using code 1",
            subelement_id=sid,
        )
        return 1
    if code > max_code:
        diags.warning(
            DiagnosticKind.RANGE_VIOLATION,
            f"{name} {value!r} too small (code {code} > {max_code}); using code {max_code}",
            subelement_id=sid,
        )
        return max_code
    return code


def decode_uncertainty(
    code: int,
    *,
    m: int,
    max_code: int,
    name: str,
    diags: Diagnostics,
    sid: int,
    offset: int | None = None,
) -> float:
    if code > max_code:
        diags.warning(
            DiagnosticKind.RANGE_VIOLATION,
            f"{name} code {code} > {max_code} is reserved; clamped to {max_code}",
            subelement_id=sid,
            offset=offset,
        )
        code = max_code
    return uncertainty_from_code(code, m)
