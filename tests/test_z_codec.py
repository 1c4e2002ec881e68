# tests/test_z_codec.py
import math

from lcicoder.binary.codecs.bitcursor import Cursor, OctetBuffer, Writer
from lcicoder.binary.codecs.z_codec import decode_z, encode_z
from lcicoder.models.common import ExpectedToMove, ZeroUncertainty
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics, Severity
from lcicoder.models.location import FloorInfo


def _encode(floor, policy=ZeroUncertainty.UNKNOWN):
    diags = Diagnostics()
    ob = OctetBuffer.zeroed(8)
    encode_z(Writer(ob), floor, policy=policy, diags=diags)
    return ob.to_hex(), diags


def _decode(hexpayload):
    diags = Diagnostics()
    return decode_z(Cursor(bytes.fromhex(hexpayload)), diags), diags


def test_decode_sydney_z():
    floor, diags = _decode("000000000012")
    assert floor.expected_to_move == ExpectedToMove.FIXED
    assert floor.floor == 0.0
    assert floor.height_above_floor == 0.0
    assert floor.height_above_floor_uncertainty == 0.0078125
    assert len(diags) == 0


def test_encode_layout():
    out, diags = _encode(FloorInfo(expected_to_move=ExpectedToMove.VARIABLE, floor=2.5,
                                   height_above_floor=-1.25, height_above_floor_uncertainty=0.5))
    assert out == "040600a1ffec000c"
    assert len(diags) == 0

    floor, _ = _decode(out[4:])
    assert floor.expected_to_move == ExpectedToMove.VARIABLE
    assert floor.floor == 2.5
    assert floor.height_above_floor == -1.25
    assert floor.height_above_floor_uncertainty == 0.5


def test_negative_floor_is_sign_extended():
    out, _ = _encode(FloorInfo(floor=-1))
    assert out[4:8] == "ffc0"
    floor, _ = _decode(out[4:])
    assert floor.floor == -1.0


def test_zero_height_uncertainty_smallest_policy():
    out, _ = _encode(FloorInfo(), ZeroUncertainty.SMALLEST)
    assert out.endswith("18")
    floor, _ = _decode(out[4:])
    assert floor.height_above_floor_uncertainty == 2.0 ** (11 - 24)


def test_tiny_height_uncertainty_clamps_to_max_code():
    out, diags = _encode(FloorInfo(height_above_floor_uncertainty=1e-9))
    assert out.endswith("18")
    assert diags.of_kind(DiagnosticKind.RANGE_VIOLATION)


def test_five_octet_variant_is_accepted():
    floor, diags = _decode("0000c00012")
    assert floor.height_above_floor == -4.0
    assert floor.height_above_floor_uncertainty == 0.0078125
    mismatch = diags.of_kind(DiagnosticKind.LENGTH_MISMATCH)
    assert [d.severity for d in mismatch] == [Severity.WARNING]


def test_other_lengths_are_skipped():
    floor, diags = _decode("00000000001200")
    assert floor is None
    assert diags.of_kind(DiagnosticKind.LENGTH_MISMATCH)[0].severity == Severity.ERROR


def test_reserved_uncertainty_code_is_clamped():
    floor, diags = _decode("00000000001e")
    assert floor.height_above_floor_uncertainty == 2.0 ** (11 - 24)
    assert len(diags.of_kind(DiagnosticKind.RANGE_VIOLATION)) == 1


def test_unknown_floor_sentinel_is_reported():
    floor, diags = _decode("800000000000")
    assert floor.floor == -512.0
    assert floor.height_above_floor_uncertainty == 0.0
    assert [d.severity for d in diags] == [Severity.INFO]


def test_values_overflowing_the_scaling_saturate():
    out, diags = _encode(FloorInfo(floor=1e308, height_above_floor=-math.inf,
                                   height_above_floor_uncertainty=math.inf))
    floor, _ = _decode(out[4:])
    assert floor.floor == ((1 << 13) - 1) / 16
    assert floor.height_above_floor == -(1 << 23) / 4096
    assert floor.height_above_floor_uncertainty == 2.0 ** 10
    assert len(diags.of_kind(DiagnosticKind.RANGE_VIOLATION)) == 3
    assert not diags.has_errors()
