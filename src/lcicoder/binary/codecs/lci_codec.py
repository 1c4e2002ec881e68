from __future__ import annotations
import logging

from .bitcursor import Cursor, Writer
from .fields import decode_fixed, decode_uncertainty, encode_fixed, encode_uncertainty
from .subelement_header import SubelementId, encode_subelement_header
from lcicoder.binary.scale import (
    ALTITUDE_FRAC_BITS,
    ALTITUDE_UNC_M,
    ALTITUDE_WIDTH,
    LATLON_FRAC_BITS,
    LATLON_UNC_M,
    LATLON_WIDTH,
    MAX_LCI_UNCERTAINTY,
)
from lcicoder.models.common import AltitudeType, Datum, ZeroUncertainty
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics
from lcicoder.models.location import LocationConfiguration

logger = logging.getLogger(__name__)

LCI_LENGTH = 16
LCI_VERSION_1 = 1

# RFC 6225 field order, MSB-first per field. The mirrored bit cursor turns
# this into octet order (two bit-order flips: per field, then per octet).
UNC_BITS = 6
ALT_TYPE_BITS = 4
DATUM_BITS = 3
VERSION_BITS = 2


def encode_lci(
    w: Writer,
    cfg: LocationConfiguration,
    *,
    policy: ZeroUncertainty,
    diags: Diagnostics,
) -> None:
    """Write the LCI subelement: ID 0, length 16, then the 128-bit LCI field."""
    sid = SubelementId.LCI
    encode_subelement_header(w, sid, LCI_LENGTH)
    start = w.tell()

    lat_unc = encode_uncertainty(cfg.latitude_uncertainty, m=LATLON_UNC_M, max_code=MAX_LCI_UNCERTAINTY,
                                 policy=policy, name="latitude uncertainty", diags=diags, sid=sid)
    lon_unc = encode_uncertainty(cfg.longitude_uncertainty, m=LATLON_UNC_M, max_code=MAX_LCI_UNCERTAINTY,
                                 policy=policy, name="longitude uncertainty", diags=diags, sid=sid)
    alt_unc = encode_uncertainty(cfg.altitude_uncertainty, m=ALTITUDE_UNC_M, max_code=MAX_LCI_UNCERTAINTY,
                                 policy=policy, name="altitude uncertainty", diags=diags, sid=sid)
    lat = encode_fixed(cfg.latitude, frac_bits=LATLON_FRAC_BITS, width=LATLON_WIDTH,
                       name="latitude", diags=diags, sid=sid)
    lon = encode_fixed(cfg.longitude, frac_bits=LATLON_FRAC_BITS, width=LATLON_WIDTH,
                       name="longitude", diags=diags, sid=sid)
    alt = encode_fixed(cfg.altitude, frac_bits=ALTITUDE_FRAC_BITS, width=ALTITUDE_WIDTH,
                       name="altitude", diags=diags, sid=sid)

    if cfg.version != LCI_VERSION_1:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, f"LCI version {cfg.version} is not {LCI_VERSION_1}",
                      subelement_id=sid)
    if cfg.datum == Datum.RESERVED:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, "datum is reserved", subelement_id=sid)
    if cfg.altitude_type == AltitudeType.RESERVED:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, "altitude type is reserved", subelement_id=sid)

    logger.debug(f"LCI lat {cfg.latitude} -> {lat:#x} (unc {lat_unc}), lon {cfg.longitude} -> {lon:#x} "
                 f"(unc {lon_unc}), alt {cfg.altitude} -> {alt:#x} (unc {alt_unc})")

    w.bits(UNC_BITS, lat_unc)
    w.bits(LATLON_WIDTH, lat)
    w.bits(UNC_BITS, lon_unc)
    w.bits(LATLON_WIDTH, lon)
    w.bits(ALT_TYPE_BITS, int(cfg.altitude_type))
    w.bits(UNC_BITS, alt_unc)
    w.bits(ALTITUDE_WIDTH, alt)
    w.bits(DATUM_BITS, int(cfg.datum))
    w.bits(1, int(cfg.regloc_agreement))
    w.bits(1, int(cfg.regloc_dse))
    w.bits(1, int(cfg.dependent_sta))
    w.bits(VERSION_BITS, cfg.version)

    if w.tell() - start != LCI_LENGTH:
        raise ValueError("LCI field not 16 octets")


def decode_lci(cur: Cursor, diags: Diagnostics, *, offset: int = 0) -> LocationConfiguration | None:
    """
    Decode the LCI field from a cursor holding exactly the subelement payload.
    Returns None when the payload is absent or has the wrong length.
    """
    sid = SubelementId.LCI
    length = cur.remaining()
    if length == 0:
        diags.info(DiagnosticKind.LENGTH_MISMATCH, "empty LCI subelement: location not available",
                   subelement_id=sid, offset=offset)
        return None
    if length != LCI_LENGTH:
        diags.error(DiagnosticKind.LENGTH_MISMATCH, f"LCI subelement length {length} != {LCI_LENGTH}; skipped",
                    subelement_id=sid, offset=offset)
        return None

    def unc(code: int, m: int, name: str) -> float:
        return decode_uncertainty(code, m=m, max_code=MAX_LCI_UNCERTAINTY, name=name,
                                  diags=diags, sid=sid, offset=offset)

    lat_unc = unc(cur.bits(UNC_BITS), LATLON_UNC_M, "latitude uncertainty")
    lat = decode_fixed(cur.bits(LATLON_WIDTH), frac_bits=LATLON_FRAC_BITS, width=LATLON_WIDTH)
    lon_unc = unc(cur.bits(UNC_BITS), LATLON_UNC_M, "longitude uncertainty")
    lon = decode_fixed(cur.bits(LATLON_WIDTH), frac_bits=LATLON_FRAC_BITS, width=LATLON_WIDTH)
    alt_type_code = cur.bits(ALT_TYPE_BITS)
    alt_unc = unc(cur.bits(UNC_BITS), ALTITUDE_UNC_M, "altitude uncertainty")
    alt = decode_fixed(cur.bits(ALTITUDE_WIDTH), frac_bits=ALTITUDE_FRAC_BITS, width=ALTITUDE_WIDTH)
    datum_code = cur.bits(DATUM_BITS)
    regloc_agreement = bool(cur.bits(1))
    regloc_dse = bool(cur.bits(1))
    dependent_sta = bool(cur.bits(1))
    version = cur.bits(VERSION_BITS)

    alt_type = AltitudeType(alt_type_code)
    if alt_type == AltitudeType.RESERVED:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, f"altitude type {alt_type_code} is reserved",
                      subelement_id=sid, offset=offset)
    datum = Datum(datum_code)
    if datum == Datum.RESERVED:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, f"datum {datum_code} is reserved",
                      subelement_id=sid, offset=offset)
    if version != LCI_VERSION_1:
        diags.error(DiagnosticKind.RANGE_VIOLATION, f"LCI version {version} is not {LCI_VERSION_1}",
                    subelement_id=sid, offset=offset)

    return LocationConfiguration(
        latitude=lat,
        longitude=lon,
        altitude=alt,
        latitude_uncertainty=lat_unc,
        longitude_uncertainty=lon_unc,
        altitude_uncertainty=alt_unc,
        altitude_type=alt_type,
        datum=datum,
        regloc_agreement=regloc_agreement,
        regloc_dse=regloc_dse,
        dependent_sta=dependent_sta,
        version=version,
    )
