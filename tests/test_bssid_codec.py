# tests/test_bssid_codec.py
import pytest

from lcicoder.binary.codecs.bitcursor import Cursor, OctetBuffer, Writer
from lcicoder.binary.codecs.bssid_codec import (
    bssid_length,
    collect_bssids,
    decode_bssids,
    encode_bssids,
    format_mac,
    parse_mac,
)
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics

MAC = bytes.fromhex("0011223344ff")


@pytest.mark.parametrize("text", [
    "00:11:22:33:44:ff",
    "00-11-22-33-44-FF",
    "00_11_22_33_44_ff",
    "0011223344ff",
    " 00:11:22:33:44:Ff ",
])
def test_parse_mac_notations(text):
    assert parse_mac(text) == MAC


@pytest.mark.parametrize("text", [
    "00:11:22:33:44",
    "00:11:22:33:44:fg",
    "00.11.22.33.44.ff",
    "0011223344f",
    "",
])
def test_parse_mac_rejects(text):
    assert parse_mac(text) is None


def test_format_mac():
    assert format_mac(MAC) == "00:11:22:33:44:ff"


def test_collect_drops_malformed_and_keeps_order():
    diags = Diagnostics()
    macs = collect_bssids(["aabbccddeeff", "bogus", "00:11:22:33:44:ff", "aabbccddeeff"], diags)
    assert macs == [bytes.fromhex("aabbccddeeff"), MAC, bytes.fromhex("aabbccddeeff")]
    assert len(diags.of_kind(DiagnosticKind.MALFORMED_INPUT)) == 1


def _encode(macs, zero_indicator=False):
    ob = OctetBuffer.zeroed(2 + bssid_length(len(macs)))
    encode_bssids(Writer(ob), macs, zero_indicator=zero_indicator)
    return ob.to_hex()


def test_encode_indicator():
    macs = [MAC, bytes.fromhex("aabbccddeeff")]
    assert _encode(macs) == "070d02" + "0011223344ff" + "aabbccddeeff"
    assert _encode(macs, zero_indicator=True) == "070d00" + "0011223344ff" + "aabbccddeeff"


def _decode(hexpayload):
    diags = Diagnostics()
    return decode_bssids(Cursor(bytes.fromhex(hexpayload)), diags), diags


def test_decode_zero_indicator_uses_length():
    out, diags = _decode("00" + "aabbccddeeff" + "0011223344ff" + "010203040506")
    assert out == ["aa:bb:cc:dd:ee:ff", "00:11:22:33:44:ff", "01:02:03:04:05:06"]
    assert len(diags) == 0


def test_decode_indicator_equal_to_count_is_policy_warning():
    out, diags = _decode("02" + "aabbccddeeff" + "0011223344ff")
    assert len(out) == 2
    assert [d.kind for d in diags] == [DiagnosticKind.POLICY_WARNING]


def test_decode_indicator_disagreeing_with_count():
    out, diags = _decode("05" + "aabbccddeeff")
    assert out == ["aa:bb:cc:dd:ee:ff"]
    assert [d.kind for d in diags] == [DiagnosticKind.POLICY_WARNING, DiagnosticKind.RANGE_VIOLATION]


def test_decode_ragged_length():
    out, diags = _decode("00" + "aabbccddeeff" + "01")
    assert out == ["aa:bb:cc:dd:ee:ff"]
    assert diags.of_kind(DiagnosticKind.LENGTH_MISMATCH)


def test_decode_empty_payload():
    out, diags = _decode("")
    assert out == []
    assert diags.of_kind(DiagnosticKind.LENGTH_MISMATCH)
