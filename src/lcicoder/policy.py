from __future__ import annotations
from .models.common import AltitudeType, ExpectedToMove
from .models.diagnostics import DiagnosticKind, Diagnostics
from .models.location import LocationRecord, UsagePolicy

# Android's ResponderLocation withholds all location data in these cases.
_WITHHELD = "location consumers (Android ResponderLocation) will not report location"


def check_usage_policy(usage: UsagePolicy, diags: Diagnostics) -> None:
    if not usage.retransmission_allowed:
        diags.warning(DiagnosticKind.POLICY_WARNING, f"retransmission not allowed: {_WITHHELD}")
    if usage.retention_expires_present:
        diags.warning(DiagnosticKind.POLICY_WARNING, f"retention expires present: {_WITHHELD}")
    if usage.expiration != 0:
        diags.warning(DiagnosticKind.POLICY_WARNING, f"expiration {usage.expiration} h != 0: {_WITHHELD}")


def check_location_policy(record: LocationRecord, diags: Diagnostics) -> None:
    floor = record.floor
    if floor.expected_to_move != ExpectedToMove.FIXED:
        diags.warning(DiagnosticKind.POLICY_WARNING,
                      f"expected to move is {floor.expected_to_move.label!r}: {_WITHHELD}")
    if record.lci.altitude_type == AltitudeType.ABOVE_GROUND:
        diags.warning(DiagnosticKind.POLICY_WARNING,
                      "altitude type 'height above ground' is not handled by Android ResponderLocation")


def check_policy(record: LocationRecord, diags: Diagnostics) -> None:
    """Report settings that make known location consumers drop the LCI."""
    check_usage_policy(record.usage, diags)
    check_location_policy(record, diags)
