from __future__ import annotations
import logging
from typing import List, Tuple

from .codecs.bitcursor import BufferOverrun, Cursor, HexFormatError, OctetBuffer
from .codecs.bssid_codec import decode_bssids
from .codecs.lci_codec import decode_lci
from .codecs.measurement_header import HEADER_SIZE, decode_measurement_header, is_lci_header
from .codecs.subelement_header import (
    SUBELEMENT_HEADER_SIZE,
    SubelementId,
    decode_subelement_header,
    subelement_name,
)
from .codecs.usage_codec import decode_usage
from .codecs.z_codec import decode_z
from ..models.diagnostics import Diagnostic, DiagnosticKind, Diagnostics, Severity
from ..models.location import LocationRecord
from ..models.report import LciReport, SubelementInfo
from ..policy import check_policy

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    pass


def _decode_subelement(sid: int, payload: Cursor, record: LocationRecord, diags: Diagnostics, offset: int) -> None:
    if sid == SubelementId.LCI:
        lci = decode_lci(payload, diags, offset=offset)
        if lci is not None:
            record.lci = lci
    elif sid == SubelementId.Z:
        floor = decode_z(payload, diags, offset=offset)
        if floor is not None:
            record.floor = floor
    elif sid == SubelementId.USAGE:
        usage = decode_usage(payload, diags, offset=offset)
        if usage is not None:
            record.usage = usage
    elif sid == SubelementId.COLOCATED_BSSID:
        record.colocated_bssids.extend(decode_bssids(payload, diags, offset=offset))
    else:
        diags.info(DiagnosticKind.UNRECOGNIZED_SUBELEMENT,
                   f"unrecognized subelement ID {sid} ({subelement_name(sid)}) length {payload.remaining()}; skipped",
                   subelement_id=sid, offset=offset)


def parse_lci(text: str, *, strict: bool = False) -> LciReport:
    """
    Decode a hex LCI measurement element (as in hostapd `lci=`).

    Decoding is best-effort: problems become diagnostics and the offending
    subelement is skipped. A length that would run past the end of the string
    stops the scan. With strict=True, ERROR diagnostics raise ParseError.
    """
    diags = Diagnostics()
    report = LciReport()
    record = report.record

    try:
        octets = OctetBuffer.from_hex(text)
    except HexFormatError as e:
        diags.error(DiagnosticKind.MALFORMED_INPUT, f"not a hex string: {e}")
        return _finish(report, diags, strict)

    cur = Cursor(octets)
    if cur.remaining() < HEADER_SIZE:
        diags.error(DiagnosticKind.MALFORMED_INPUT,
                    f"element of {cur.remaining()} octets is shorter than the {HEADER_SIZE}-octet header")
        return _finish(report, diags, strict)

    hdr = decode_measurement_header(cur)
    report.header = hdr
    if not is_lci_header(hdr):
        diags.error(DiagnosticKind.MALFORMED_INPUT,
                    f"bad measurement report header {hdr.token:02x} {hdr.request_mode:02x} "
                    f"{hdr.measurement_type:02x} (expected 01 00 08)", offset=0)

    last_sid = -1
    while cur.remaining() > 0:
        start = cur.tell()
        if cur.remaining() < SUBELEMENT_HEADER_SIZE:
            diags.error(DiagnosticKind.MALFORMED_INPUT, "truncated subelement header", offset=start)
            break
        sid, length = decode_subelement_header(cur)
        if length > cur.remaining():
            diags.error(DiagnosticKind.MALFORMED_INPUT,
                        f"subelement ID {sid} length {length} runs past the end "
                        f"({cur.remaining()} octets left)", subelement_id=sid, offset=start)
            break
        logger.debug(f"subelement ID {sid} length {length} at octet {start}")
        report.subelements.append(SubelementInfo(id=sid, length=length, offset=start))
        if sid < last_sid:
            diags.info(DiagnosticKind.MALFORMED_INPUT, f"subelement ID {sid} follows ID {last_sid}",
                       subelement_id=sid, offset=start)
        last_sid = max(last_sid, sid)

        payload = Cursor(cur.take(length))
        try:
            _decode_subelement(sid, payload, record, diags, start)
        except BufferOverrun as e:
            diags.error(DiagnosticKind.MALFORMED_INPUT, f"subelement ID {sid} truncated: {e}",
                        subelement_id=sid, offset=start)

    check_policy(record, diags)
    return _finish(report, diags, strict)


def _finish(report: LciReport, diags: Diagnostics, strict: bool) -> LciReport:
    report.diagnostics = diags.items
    if strict and diags.has_errors():
        first = next(d for d in diags.items if d.severity == Severity.ERROR)
        raise ParseError(str(first))
    return report


def decode(text: str) -> Tuple[LocationRecord, List[Diagnostic]]:
    report = parse_lci(text)
    return report.record, report.diagnostics
