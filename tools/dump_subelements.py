#!/usr/bin/env python3
# tools/dump_subelements.py
from lcicoder.binary.codecs.bitcursor import Cursor, OctetBuffer
from lcicoder.binary.codecs.measurement_header import decode_measurement_header
from lcicoder.binary.codecs.subelement_header import decode_subelement_header, subelement_name, SubelementId
from lcicoder.samples import SYDNEY_LCI

# (name, width) in LCI field order
LCI_FIELDS = (
    ("lat_unc", 6), ("lat", 34), ("lon_unc", 6), ("lon", 34), ("alt_type", 4),
    ("alt_unc", 6), ("alt", 30), ("datum", 3), ("regloc_agreement", 1),
    ("regloc_dse", 1), ("dependent_sta", 1), ("version", 2),
)

def main(text: str):
    cur = Cursor(OctetBuffer.from_hex(text))
    hdr = decode_measurement_header(cur)
    print(f"header token={hdr.token} mode={hdr.request_mode} type={hdr.measurement_type}")
    while cur.remaining() >= 2:
        start = cur.tell()
        sid, n = decode_subelement_header(cur)
        if n > cur.remaining():
            print(f"@{start:3d} ID={sid} len={n} overruns ({cur.remaining()} left)")
            return
        body = cur.take(n)
        print(f"@{start:3d} ID={sid} ({subelement_name(sid)}) len={n} {body.hex()}")
        if sid == SubelementId.LCI and n == 16:
            lc = Cursor(body)
            for name, w in LCI_FIELDS:
                v = lc.bits(w)
                print(f"      {name:<17s} {w:2d} bits  {v:#x} ({v})")

if __name__ == "__main__":
    import sys
    main(sys.argv[1] if len(sys.argv) > 1 else SYDNEY_LCI)
