from __future__ import annotations
import logging
from enum import Enum
from typing import Iterator, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    MALFORMED_INPUT = "malformed_input"
    LENGTH_MISMATCH = "length_mismatch"
    RANGE_VIOLATION = "range_violation"
    SEMANTIC_INCONSISTENCY = "semantic_inconsistency"
    POLICY_WARNING = "policy_warning"
    UNRECOGNIZED_SUBELEMENT = "unrecognized_subelement"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    severity: Severity
    message: str
    subelement_id: Optional[int] = None
    offset: Optional[int] = None  # octet offset into the element

    def __str__(self) -> str:
        where = ""
        if self.subelement_id is not None:
            where += f" [subelement {self.subelement_id}]"
        if self.offset is not None:
            where += f" [octet {self.offset}]"
        return f"{self.severity.value.upper()} {self.kind.value}: {self.message}{where}"


_LOG_LEVELS = {
    Severity.INFO: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Diagnostics:
    """Accumulates diagnostics for one encode or decode call."""
    __slots__ = ("items",)

    def __init__(self):
        self.items: List[Diagnostic] = []

    def add(
        self,
        kind: DiagnosticKind,
        severity: Severity,
        message: str,
        *,
        subelement_id: int | None = None,
        offset: int | None = None,
    ) -> Diagnostic:
        d = Diagnostic(kind=kind, severity=severity, message=message,
                       subelement_id=subelement_id, offset=offset)
        logger.log(_LOG_LEVELS[severity], str(d))
        self.items.append(d)
        return d

    def info(self, kind: DiagnosticKind, message: str, **where) -> Diagnostic:
        return self.add(kind, Severity.INFO, message, **where)

    def warning(self, kind: DiagnosticKind, message: str, **where) -> Diagnostic:
        return self.add(kind, Severity.WARNING, message, **where)

    def error(self, kind: DiagnosticKind, message: str, **where) -> Diagnostic:
        return self.add(kind, Severity.ERROR, message, **where)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.items)

    def __iter__(self) -> Iterator[Diagnostic]: return iter(self.items)
    def __len__(self) -> int: return len(self.items)
