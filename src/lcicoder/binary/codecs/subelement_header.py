from __future__ import annotations
from .bitcursor import Cursor, Writer

# Subelements are ordered by nondecreasing ID within the element.
class SubelementId:
    LCI = 0
    AZIMUTH = 1
    ORIGINATOR_MAC = 2
    TARGET_MAC = 3
    Z = 4
    RELATIVE_ERROR = 5
    USAGE = 6
    COLOCATED_BSSID = 7
    VENDOR_SPECIFIC = 221

SUBELEMENT_HEADER_SIZE = 2

_NAMES = {
    SubelementId.LCI: "LCI",
    SubelementId.AZIMUTH: "Azimuth Report",
    SubelementId.ORIGINATOR_MAC: "Originator Requesting STA MAC Address",
    SubelementId.TARGET_MAC: "Target MAC Address",
    SubelementId.Z: "Z",
    SubelementId.RELATIVE_ERROR: "Relative Location Error",
    SubelementId.USAGE: "Usage Rules/Policy",
    SubelementId.COLOCATED_BSSID: "Colocated BSSID List",
    SubelementId.VENDOR_SPECIFIC: "Vendor Specific",
}

def subelement_name(sid: int) -> str:
    return _NAMES.get(sid, "reserved")

def decode_subelement_header(cur: Cursor) -> tuple[int, int]:
    """
    2-octet subelement header: ID, length of the payload that follows.
    Returns (subelement_id, length).
    """
    sid = cur.u8()
    length = cur.u8()
    return sid, length

def encode_subelement_header(w: Writer, sid: int, length: int) -> None:
    w.u8(sid)
    w.u8(length)
