from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import ZeroUncertainty
from .diagnostics import Diagnostic, DiagnosticKind, Severity
from .location import LocationRecord


class MeasurementHeader(BaseModel):
    token: int = 1
    request_mode: int = 0
    measurement_type: int = 8


class SubelementInfo(BaseModel):
    id: int = Field(..., ge=0, le=255)
    length: int = Field(..., ge=0, le=255)
    offset: int = Field(..., ge=0)  # octet offset of the ID octet


class IncludeFlags(BaseModel):
    """Which subelements the encoder may emit."""
    lci: bool = True
    z: bool = True
    usage: bool = True
    bssids: bool = True


class EncodeOptions(BaseModel):
    include: IncludeFlags = Field(default_factory=IncludeFlags)
    zero_policy: ZeroUncertainty = ZeroUncertainty.UNKNOWN
    # 802.11 mandates 0; deployed producers and consumers use the address count
    zero_max_bssid_indicator: bool = False


class _Result(BaseModel):
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


class LciReport(_Result):
    """Everything learned while decoding one LCI string."""
    header: Optional[MeasurementHeader] = None
    subelements: List[SubelementInfo] = Field(default_factory=list)
    record: LocationRecord = Field(default_factory=LocationRecord)

    def subelement_ids(self) -> List[int]:
        return [s.id for s in self.subelements]

    def find(self, subelement_id: int) -> Optional[SubelementInfo]:
        return next((s for s in self.subelements if s.id == subelement_id), None)


class EncodeResult(_Result):
    lci: str
    subelements: List[SubelementInfo] = Field(default_factory=list)
