"""Run-scoped accumulation of status records and the worst-status reduction."""

from __future__ import annotations

import logging

from .status import Severity, StatusRecord

logger = logging.getLogger(__name__)

ALL_CLEAR = "All checks passed."


class StatusAggregator:
    """Keeps every record of a run and the single worst one.

    A record replaces the current worst when it is not a success and is
    either more severe, or equally severe and more recent. Success records
    are kept in the history but never become the worst status.
    """

    def __init__(self) -> None:
        self._history: list[StatusRecord] = []
        self._worst: StatusRecord | None = None

    def add(self, record: StatusRecord) -> None:
        self._history.append(record)
        if record.severity > Severity.SUCCESS and self._beats_worst(record):
            self._worst = record
        logger.debug("Status [%s] %s", record.severity.text, record.message)

    def _beats_worst(self, record: StatusRecord) -> bool:
        worst = self._worst
        if worst is None:
            return True
        if record.severity > worst.severity:
            return True
        return record.severity == worst.severity and record.updated > worst.updated

    @property
    def worst(self) -> StatusRecord | None:
        return self._worst

    def worst_severity(self) -> Severity:
        return self._worst.severity if self._worst else Severity.SUCCESS

    def worst_message(self) -> str:
        return self._worst.message if self._worst else ALL_CLEAR

    def history(self) -> tuple[StatusRecord, ...]:
        return tuple(self._history)

    def __len__(self) -> int:
        return len(self._history)
