from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .codecs.bitcursor import OctetBuffer, Writer
from .codecs.bssid_codec import bssid_length, collect_bssids, encode_bssids
from .codecs.lci_codec import LCI_LENGTH, encode_lci
from .codecs.measurement_header import HEADER_SIZE, encode_measurement_header
from .codecs.subelement_header import SUBELEMENT_HEADER_SIZE, SubelementId
from .codecs.usage_codec import encode_usage, reconcile_usage, usage_length
from .codecs.z_codec import Z_LENGTH, encode_z
from ..models.common import ZeroUncertainty
from ..models.diagnostics import Diagnostic, Diagnostics
from ..models.location import LocationRecord
from ..models.report import EncodeOptions, EncodeResult, IncludeFlags, SubelementInfo
from ..policy import check_location_policy, check_usage_policy

logger = logging.getLogger(__name__)


def encoded_size(
    *,
    lci: bool,
    z: bool,
    usage_len: Optional[int],
    bssid_count: int,
) -> int:
    """Exact element size in octets for the chosen subelements."""
    size = HEADER_SIZE
    if lci:
        size += SUBELEMENT_HEADER_SIZE + LCI_LENGTH
    if z:
        size += SUBELEMENT_HEADER_SIZE + Z_LENGTH
    if usage_len is not None:
        size += SUBELEMENT_HEADER_SIZE + usage_len
    if bssid_count > 0:
        size += SUBELEMENT_HEADER_SIZE + bssid_length(bssid_count)
    return size


def write_lci(record: LocationRecord, options: Optional[EncodeOptions] = None) -> EncodeResult:
    """
    Encode a LocationRecord as the hex LCI string (hostapd `lci=` value).
    Subelements are emitted in ascending ID order: LCI, Z, Usage, Colocated BSSID.
    The Usage subelement is only emitted when some other subelement carries content.
    """
    opts = options or EncodeOptions()
    inc = opts.include
    diags = Diagnostics()

    check_location_policy(record, diags)

    emit_lci = inc.lci
    emit_z = inc.z
    macs = collect_bssids(record.colocated_bssids, diags) if inc.bssids else []
    emit_bssids = len(macs) > 0
    needed = ((emit_lci and record.lci.has_position())
              or (emit_z and record.floor.has_content())
              or emit_bssids)
    usage = None
    if inc.usage and needed:
        usage = reconcile_usage(record.usage, diags)
        check_usage_policy(usage, diags)
    elif inc.usage:
        logger.debug("Usage subelement omitted: no other subelement carries content")

    size = encoded_size(
        lci=emit_lci,
        z=emit_z,
        usage_len=usage_length(usage) if usage is not None else None,
        bssid_count=len(macs),
    )
    octets = OctetBuffer.zeroed(size)
    w = Writer(octets)
    subelements: List[SubelementInfo] = []

    def mark(sid: int, length: int) -> None:
        subelements.append(SubelementInfo(id=sid, length=length, offset=w.tell()))

    encode_measurement_header(w)
    if emit_lci:
        mark(SubelementId.LCI, LCI_LENGTH)
        encode_lci(w, record.lci, policy=opts.zero_policy, diags=diags)
    if emit_z:
        mark(SubelementId.Z, Z_LENGTH)
        encode_z(w, record.floor, policy=opts.zero_policy, diags=diags)
    if usage is not None:
        mark(SubelementId.USAGE, usage_length(usage))
        encode_usage(w, usage)
    if emit_bssids:
        mark(SubelementId.COLOCATED_BSSID, bssid_length(len(macs)))
        encode_bssids(w, macs, zero_indicator=opts.zero_max_bssid_indicator)

    if w.tell() != size:
        raise ValueError(f"encoded {w.tell()} octets, expected {size}")

    lci = octets.to_hex()
    logger.debug(f"lci={lci}")
    return EncodeResult(lci=lci, subelements=subelements, diagnostics=diags.items)


def encode(
    record: LocationRecord,
    include: Optional[IncludeFlags] = None,
    zero_policy: ZeroUncertainty = ZeroUncertainty.UNKNOWN,
) -> Tuple[str, List[Diagnostic]]:
    res = write_lci(record, EncodeOptions(include=include or IncludeFlags(), zero_policy=zero_policy))
    return res.lci, res.diagnostics
