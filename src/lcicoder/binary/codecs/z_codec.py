from __future__ import annotations
import logging

from .bitcursor import Cursor, Writer, sign_extend
from .fields import decode_fixed, decode_uncertainty, encode_fixed, encode_uncertainty
from .subelement_header import SubelementId, encode_subelement_header
from lcicoder.binary.scale import (
    FLOOR_FRAC_BITS,
    FLOOR_WIDTH,
    HEIGHT_FRAC_BITS,
    HEIGHT_UNC_M,
    HEIGHT_WIDTH,
    HEIGHT_WIDTH_SHORT,
    MAX_Z_UNCERTAINTY,
)
from lcicoder.models.common import ExpectedToMove, ZeroUncertainty
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics
from lcicoder.models.location import FloorInfo

logger = logging.getLogger(__name__)

Z_LENGTH = 6
Z_LENGTH_SHORT = 5  # seen from real producers: 16-bit height above floor

FLOOR_UNKNOWN = -(1 << (FLOOR_WIDTH - 1))    # -8192
HEIGHT_UNKNOWN = -(1 << (HEIGHT_WIDTH - 1))  # -8388608


def encode_z(w: Writer, floor: FloorInfo, *, policy: ZeroUncertainty, diags: Diagnostics) -> None:
    """
    Z subelement: STA Floor Info (u16: expected-to-move in bits 0-1, floor in
    bits 2-15), STA Height Above Floor (s24), height uncertainty code (u8).
    """
    sid = SubelementId.Z
    encode_subelement_header(w, sid, Z_LENGTH)

    floor_bits = encode_fixed(floor.floor, frac_bits=FLOOR_FRAC_BITS, width=FLOOR_WIDTH,
                              name="floor", diags=diags, sid=sid)
    height = encode_fixed(floor.height_above_floor, frac_bits=HEIGHT_FRAC_BITS, width=HEIGHT_WIDTH,
                          name="height above floor", diags=diags, sid=sid)
    unc = encode_uncertainty(floor.height_above_floor_uncertainty, m=HEIGHT_UNC_M, max_code=MAX_Z_UNCERTAINTY,
                             policy=policy, name="height above floor uncertainty", diags=diags, sid=sid)
    floor_info = (int(floor.expected_to_move) & 0x03) | (floor_bits << 2)
    logger.debug(f"Z floor {floor.floor} height {floor.height_above_floor} -> info {floor_info:#06x} "
                 f"height {height:#08x} unc {unc}")

    w.u16(floor_info)
    w.u24(height)
    w.u8(unc)


def decode_z(cur: Cursor, diags: Diagnostics, *, offset: int = 0) -> FloorInfo | None:
    sid = SubelementId.Z
    length = cur.remaining()
    if length not in (Z_LENGTH, Z_LENGTH_SHORT):
        diags.error(DiagnosticKind.LENGTH_MISMATCH, f"Z subelement length {length} != {Z_LENGTH}; skipped",
                    subelement_id=sid, offset=offset)
        return None

    floor_info = cur.u16()
    expected_to_move = ExpectedToMove(floor_info & 0x03)
    floor_raw = floor_info >> 2
    if sign_extend(floor_raw, FLOOR_WIDTH) == FLOOR_UNKNOWN:
        diags.info(DiagnosticKind.RANGE_VIOLATION, "STA floor unknown", subelement_id=sid, offset=offset)
    floor = decode_fixed(floor_raw, frac_bits=FLOOR_FRAC_BITS, width=FLOOR_WIDTH)

    if length == Z_LENGTH_SHORT:
        diags.warning(DiagnosticKind.LENGTH_MISMATCH,
                      f"Z subelement length {length} != {Z_LENGTH}; decoding 16-bit height above floor",
                      subelement_id=sid, offset=offset)
        height = decode_fixed(cur.u16(), frac_bits=HEIGHT_FRAC_BITS, width=HEIGHT_WIDTH_SHORT)
    else:
        height_raw = cur.u24()
        if sign_extend(height_raw, HEIGHT_WIDTH) == HEIGHT_UNKNOWN:
            diags.info(DiagnosticKind.RANGE_VIOLATION, "STA height above floor unknown",
                       subelement_id=sid, offset=offset)
        height = decode_fixed(height_raw, frac_bits=HEIGHT_FRAC_BITS, width=HEIGHT_WIDTH)

    unc = decode_uncertainty(cur.u8(), m=HEIGHT_UNC_M, max_code=MAX_Z_UNCERTAINTY,
                             name="height above floor uncertainty", diags=diags, sid=sid, offset=offset)

    return FloorInfo(
        expected_to_move=expected_to_move,
        floor=floor,
        height_above_floor=height,
        height_above_floor_uncertainty=unc,
    )
