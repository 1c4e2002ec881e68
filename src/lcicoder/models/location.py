from __future__ import annotations
from typing import TYPE_CHECKING, List

from pydantic import BaseModel, Field

from .common import AltitudeType, Datum, ExpectedToMove

if TYPE_CHECKING:
    from .report import EncodeOptions


class LocationConfiguration(BaseModel):
    """Geodetic part of the record (LCI subelement, RFC 6225)."""
    latitude: float = 0.0    # degrees
    longitude: float = 0.0   # degrees
    altitude: float = 0.0    # unit depends on altitude_type
    latitude_uncertainty: float = Field(0.0, ge=0)   # 0 = unknown
    longitude_uncertainty: float = Field(0.0, ge=0)
    altitude_uncertainty: float = Field(0.0, ge=0)
    altitude_type: AltitudeType = AltitudeType.METERS
    datum: Datum = Datum.WGS84
    regloc_agreement: bool = False
    regloc_dse: bool = False
    dependent_sta: bool = False
    version: int = Field(1, ge=0, le=3)

    def has_position(self) -> bool:
        return self.latitude != 0 or self.longitude != 0 or self.altitude != 0


class FloorInfo(BaseModel):
    """Z subelement: floor and height of the STA relative to the floor."""
    expected_to_move: ExpectedToMove = ExpectedToMove.FIXED
    floor: float = 0.0                  # 1/16 floor resolution
    height_above_floor: float = 0.0     # m
    height_above_floor_uncertainty: float = Field(0.0, ge=0)  # m, 0 = unknown

    def has_content(self) -> bool:
        return (self.floor != 0 or self.height_above_floor != 0
                or self.height_above_floor_uncertainty != 0)


class UsagePolicy(BaseModel):
    retransmission_allowed: bool = True
    retention_expires_present: bool = False
    sta_location_policy: bool = False
    expiration: int = Field(0, ge=0, le=0xFFFF)  # hours


class LocationRecord(BaseModel):
    lci: LocationConfiguration = Field(default_factory=LocationConfiguration)
    floor: FloorInfo = Field(default_factory=FloorInfo)
    usage: UsagePolicy = Field(default_factory=UsagePolicy)
    colocated_bssids: List[str] = Field(default_factory=list)

    @classmethod
    def from_hex(cls, text: str) -> "LocationRecord":
        from ..binary.reader import parse_lci
        return parse_lci(text).record

    def to_hex(self, options: "EncodeOptions | None" = None) -> str:
        from ..binary.writer import write_lci
        return write_lci(self, options).lci
