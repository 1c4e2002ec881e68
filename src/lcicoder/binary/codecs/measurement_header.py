from __future__ import annotations
from .bitcursor import Cursor, Writer
from lcicoder.models.report import MeasurementHeader

MEASURE_TOKEN = 1
MEASURE_REQUEST_MODE = 0
HEADER_SIZE = 3


class MeasurementType:
    LCI = 8


def decode_measurement_header(cur: Cursor) -> MeasurementHeader:
    """
    3-octet Measurement Report header: token, request mode, measurement type.
    """
    token = cur.u8()
    mode = cur.u8()
    mtype = cur.u8()
    return MeasurementHeader(token=token, request_mode=mode, measurement_type=mtype)


def is_lci_header(hdr: MeasurementHeader) -> bool:
    return (hdr.token == MEASURE_TOKEN and hdr.request_mode == MEASURE_REQUEST_MODE
            and hdr.measurement_type == MeasurementType.LCI)


def encode_measurement_header(w: Writer) -> None:
    w.u8(MEASURE_TOKEN)
    w.u8(MEASURE_REQUEST_MODE)
    w.u8(MeasurementType.LCI)
