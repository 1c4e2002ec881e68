from __future__ import annotations
import string
from typing import Iterable, List

from .bitcursor import Cursor, Writer
from .subelement_header import SubelementId, encode_subelement_header
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics

MAC_LEN = 6
MAC_SEPARATORS = ":-_"
# length octet holds 1 + 6N
MAX_BSSIDS = (0xFF - 1) // MAC_LEN

_HEX = frozenset(string.hexdigits)


def parse_mac(text: str) -> bytes | None:
    """
    Parse aa:bb:cc:dd:ee:ff (':', '-' or '_' separators) or aabbccddeeff.
    Returns None when the text is not a MAC address.
    """
    s = text.strip()
    if len(s) == 3 * MAC_LEN - 1:
        if any(s[3 * k - 1] not in MAC_SEPARATORS for k in range(1, MAC_LEN)):
            return None
        pairs = [s[3 * k:3 * k + 2] for k in range(MAC_LEN)]
    elif len(s) == 2 * MAC_LEN:
        pairs = [s[2 * k:2 * k + 2] for k in range(MAC_LEN)]
    else:
        return None
    if not all(ch in _HEX for p in pairs for ch in p):
        return None
    return bytes(int(p, 16) for p in pairs)


def format_mac(raw: bytes) -> str:
    return ":".join(f"{b:02x}" for b in raw)


def collect_bssids(addresses: Iterable[str], diags: Diagnostics) -> List[bytes]:
    """Valid addresses in input order; malformed ones are reported and dropped."""
    sid = SubelementId.COLOCATED_BSSID
    out: List[bytes] = []
    for text in addresses:
        mac = parse_mac(text)
        if mac is None:
            diags.error(DiagnosticKind.MALFORMED_INPUT, f"invalid colocated BSSID {text!r}", subelement_id=sid)
            continue
        out.append(mac)
    if len(out) > MAX_BSSIDS:
        diags.error(DiagnosticKind.RANGE_VIOLATION,
                    f"{len(out)} colocated BSSIDs do not fit one subelement; keeping the first {MAX_BSSIDS}",
                    subelement_id=sid)
        out = out[:MAX_BSSIDS]
    return out


def bssid_length(count: int) -> int:
    return 1 + MAC_LEN * count


def encode_bssids(w: Writer, macs: List[bytes], *, zero_indicator: bool = False) -> None:
    """
    Colocated BSSID list: MaxBSSID Indicator octet, then N addresses.
    The indicator is 0 per 802.11; deployed implementations put N there.
    """
    encode_subelement_header(w, SubelementId.COLOCATED_BSSID, bssid_length(len(macs)))
    w.u8(0 if zero_indicator else len(macs))
    for mac in macs:
        w.raw(mac)


def decode_bssids(cur: Cursor, diags: Diagnostics, *, offset: int = 0) -> List[str]:
    sid = SubelementId.COLOCATED_BSSID
    length = cur.remaining()
    if length == 0:
        diags.error(DiagnosticKind.LENGTH_MISMATCH, "colocated BSSID subelement has no MaxBSSID Indicator",
                    subelement_id=sid, offset=offset)
        return []
    if (length - 1) % MAC_LEN:
        diags.warning(DiagnosticKind.LENGTH_MISMATCH,
                      f"colocated BSSID length {length} is not 1 + 6N; trailing {(length - 1) % MAC_LEN} octets ignored",
                      subelement_id=sid, offset=offset)

    # size from the length octet; the indicator is supposed to be 0
    count = (length - 1) // MAC_LEN
    indicator = cur.u8()
    if indicator != 0:
        diags.warning(DiagnosticKind.POLICY_WARNING, f"MaxBSSID Indicator {indicator} != 0",
                      subelement_id=sid, offset=offset)
        if indicator != count:
            diags.warning(DiagnosticKind.RANGE_VIOLATION,
                          f"MaxBSSID Indicator {indicator} != address count {count}",
                          subelement_id=sid, offset=offset)

    return [format_mac(cur.take(MAC_LEN)) for _ in range(count)]
