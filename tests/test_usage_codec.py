# tests/test_usage_codec.py
import pytest

from lcicoder.binary.codecs.bitcursor import Cursor, OctetBuffer, Writer
from lcicoder.binary.codecs.usage_codec import decode_usage, encode_usage, reconcile_usage, usage_length
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics, Severity
from lcicoder.models.location import UsagePolicy


def _decode(hexpayload):
    diags = Diagnostics()
    return decode_usage(Cursor(bytes.fromhex(hexpayload)), diags), diags


def _encode(usage):
    diags = Diagnostics()
    usage = reconcile_usage(usage, diags)
    ob = OctetBuffer.zeroed(2 + usage_length(usage))
    encode_usage(Writer(ob), usage)
    return ob.to_hex(), diags


def test_decode_default_rules():
    usage, diags = _decode("01")
    assert usage.retransmission_allowed
    assert not usage.retention_expires_present
    assert not usage.sta_location_policy
    assert usage.expiration == 0
    assert len(diags) == 0


def test_decode_with_expiration():
    usage, diags = _decode("070018")
    assert usage.retention_expires_present
    assert usage.sta_location_policy
    assert usage.expiration == 24
    assert len(diags) == 0


@pytest.mark.parametrize("payload", ["02", "010005"])
def test_decode_reports_flag_expiration_disagreement(payload):
    _, diags = _decode(payload)
    assert diags.of_kind(DiagnosticKind.SEMANTIC_INCONSISTENCY)[0].severity == Severity.WARNING


def test_zero_expiration_without_flag_is_informational():
    usage, diags = _decode("010000")
    assert usage.expiration == 0
    assert all(d.severity == Severity.INFO for d in diags)


def test_reserved_bits_reported():
    usage, diags = _decode("81")
    assert usage.retransmission_allowed
    assert diags.of_kind(DiagnosticKind.RANGE_VIOLATION)


def test_bad_length_is_skipped():
    usage, diags = _decode("0100")
    assert usage is None
    assert diags.of_kind(DiagnosticKind.LENGTH_MISMATCH)


def test_encode_default():
    out, diags = _encode(UsagePolicy())
    assert out == "060101"
    assert len(diags) == 0


def test_encode_with_expiration():
    out, _ = _encode(UsagePolicy(retention_expires_present=True, expiration=16))
    assert out == "0603030010"


def test_encode_reconciles_flag_to_expiration():
    out, diags = _encode(UsagePolicy(retention_expires_present=True, expiration=0))
    assert out == "060101"
    assert diags.of_kind(DiagnosticKind.SEMANTIC_INCONSISTENCY)

    out, diags = _encode(UsagePolicy(expiration=10))
    assert out == "060303000a"
    assert diags.of_kind(DiagnosticKind.SEMANTIC_INCONSISTENCY)
