from __future__ import annotations
from enum import Enum, IntEnum


class Datum(IntEnum):
    """
    All reserved wire codes decode to RESERVED and re-encode as 4; the raw
    code only survives in the decode diagnostic.
    """
    UNDEFINED = 0
    WGS84 = 1
    NAD83_NAVD88 = 2
    NAD83_MLLW = 3
    RESERVED = 4  # wire codes 4..7

    @classmethod
    def _missing_(cls, value):
        return cls.RESERVED

    @property
    def label(self) -> str:
        return _DATUM_LABELS[self]


class AltitudeType(IntEnum):
    """Reserved codes 4..15 collapse to RESERVED (re-encoded as 4), like Datum."""
    UNDEFINED = 0
    METERS = 1
    FLOORS = 2
    ABOVE_GROUND = 3  # height above ground in meters
    RESERVED = 4  # wire codes 4..15

    @classmethod
    def _missing_(cls, value):
        return cls.RESERVED

    @property
    def label(self) -> str:
        return _ALTITUDE_LABELS[self]


class ExpectedToMove(IntEnum):
    FIXED = 0
    VARIABLE = 1
    MOVEMENT_UNKNOWN = 2
    RESERVED = 3

    @property
    def label(self) -> str:
        return _MOVE_LABELS[self]


class ZeroUncertainty(str, Enum):
    """How an uncertainty of exactly 0 is encoded."""
    UNKNOWN = "unknown"    # code 0
    SMALLEST = "smallest"  # maximum code, i.e. smallest representable uncertainty


_DATUM_LABELS = {
    Datum.UNDEFINED: "undefined",
    Datum.WGS84: "WGS84",
    Datum.NAD83_NAVD88: "NAD83 + NAVD88 vertical reference",
    Datum.NAD83_MLLW: "NAD83 + MLLWVD vertical reference",
    Datum.RESERVED: "reserved datum",
}

_ALTITUDE_LABELS = {
    AltitudeType.UNDEFINED: "undefined",
    AltitudeType.METERS: "m",
    AltitudeType.FLOORS: "floors",
    AltitudeType.ABOVE_GROUND: "height above ground m",
    AltitudeType.RESERVED: "reserved altitude type",
}

_MOVE_LABELS = {
    ExpectedToMove.FIXED: "stationary",
    ExpectedToMove.VARIABLE: "expected to move",
    ExpectedToMove.MOVEMENT_UNKNOWN: "movement pattern unknown",
    ExpectedToMove.RESERVED: "reserved",
}
