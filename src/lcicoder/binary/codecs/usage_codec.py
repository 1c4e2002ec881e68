from __future__ import annotations
from .bitcursor import Cursor, Writer
from .subelement_header import SubelementId, encode_subelement_header
from lcicoder.models.diagnostics import DiagnosticKind, Diagnostics
from lcicoder.models.location import UsagePolicy

USAGE_LENGTH = 1
USAGE_LENGTH_WITH_EXPIRATION = 3

RETRANSMISSION_ALLOWED = 0x01
RETENTION_EXPIRES_PRESENT = 0x02
STA_LOCATION_POLICY = 0x04
RESERVED_MASK = 0xF8


def reconcile_usage(usage: UsagePolicy, diags: Diagnostics) -> UsagePolicy:
    """Make the retention-expires flag agree with the expiration value."""
    sid = SubelementId.USAGE
    if usage.retention_expires_present and usage.expiration == 0:
        diags.warning(DiagnosticKind.SEMANTIC_INCONSISTENCY,
                      "retention expires present but expiration is 0; flag cleared", subelement_id=sid)
        return usage.model_copy(update={"retention_expires_present": False})
    if not usage.retention_expires_present and usage.expiration != 0:
        diags.warning(DiagnosticKind.SEMANTIC_INCONSISTENCY,
                      f"retention expires not present but expiration is {usage.expiration}; flag set",
                      subelement_id=sid)
        return usage.model_copy(update={"retention_expires_present": True})
    return usage


def usage_length(usage: UsagePolicy) -> int:
    return USAGE_LENGTH_WITH_EXPIRATION if usage.retention_expires_present else USAGE_LENGTH


def encode_usage(w: Writer, usage: UsagePolicy) -> None:
    """Expects a policy already passed through reconcile_usage()."""
    length = usage_length(usage)
    encode_subelement_header(w, SubelementId.USAGE, length)
    params = 0
    if usage.retransmission_allowed:
        params |= RETRANSMISSION_ALLOWED
    if usage.retention_expires_present:
        params |= RETENTION_EXPIRES_PRESENT
    if usage.sta_location_policy:
        params |= STA_LOCATION_POLICY
    w.u8(params)
    if usage.retention_expires_present:
        w.u16(usage.expiration)


def decode_usage(cur: Cursor, diags: Diagnostics, *, offset: int = 0) -> UsagePolicy | None:
    sid = SubelementId.USAGE
    length = cur.remaining()
    if length not in (USAGE_LENGTH, USAGE_LENGTH_WITH_EXPIRATION):
        diags.error(DiagnosticKind.LENGTH_MISMATCH,
                    f"Usage Rules/Policy subelement length {length} not 1 or 3; skipped",
                    subelement_id=sid, offset=offset)
        return None

    params = cur.u8()
    if params & RESERVED_MASK:
        diags.warning(DiagnosticKind.RANGE_VIOLATION, f"reserved usage bits set: {params:#04x}",
                      subelement_id=sid, offset=offset)
    retention = bool(params & RETENTION_EXPIRES_PRESENT)
    expiration = cur.u16() if length == USAGE_LENGTH_WITH_EXPIRATION else 0

    if retention and length != USAGE_LENGTH_WITH_EXPIRATION:
        diags.warning(DiagnosticKind.SEMANTIC_INCONSISTENCY,
                      f"retention expires present but length {length} carries no expiration",
                      subelement_id=sid, offset=offset)
    elif not retention and expiration != 0:
        diags.warning(DiagnosticKind.SEMANTIC_INCONSISTENCY,
                      f"retention expires not present but expiration is {expiration} hours",
                      subelement_id=sid, offset=offset)
    elif not retention and length == USAGE_LENGTH_WITH_EXPIRATION:
        # common producer habit: 06 03 01 00 00
        diags.info(DiagnosticKind.SEMANTIC_INCONSISTENCY, "zero expiration carried without retention flag",
                   subelement_id=sid, offset=offset)

    return UsagePolicy(
        retransmission_allowed=bool(params & RETRANSMISSION_ALLOWED),
        retention_expires_present=retention,
        sta_location_policy=bool(params & STA_LOCATION_POLICY),
        expiration=expiration,
    )
