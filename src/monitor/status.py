"""Severity scale and the status record every check produces."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    SUCCESS = 0
    WARNING = 1
    CRITICAL = 2

    @property
    def text(self) -> str:
        return _SEVERITY_TEXT[self]


_SEVERITY_TEXT = {
    Severity.SUCCESS: "Success",
    Severity.WARNING: "Warning",
    Severity.CRITICAL: "Critical",
}


@dataclass(frozen=True)
class StatusRecord:
    """One classified observation.

    ``updated`` is the epoch second at which the observed condition occurred,
    which is not always the time the check ran (heartbeat products carry
    their own timestamp).
    """

    message: str
    severity: Severity
    updated: int
    check_id: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "check_id": self.check_id,
            "severity": self.severity.text,
            "message": self.message,
            "updated": self.updated,
        }
