"""Run driver: executes the configured checks in order into one aggregator."""

from __future__ import annotations

import logging

from .aggregator import StatusAggregator
from .checks import execute_check
from .collaborators import Collaborators
from .registry import CheckDef
from .reporter import Reporter
from .status import Severity, StatusRecord

logger = logging.getLogger(__name__)


class Monitor:
    """Runs every configured check once and keeps the results for reporting.

    A fresh aggregator is created per instance; checks run sequentially in
    the order they were configured.
    """

    def __init__(self, collaborators: Collaborators | None = None) -> None:
        self.collaborators = collaborators or Collaborators()
        self.aggregator = StatusAggregator()
        self.reporter = Reporter(self.aggregator, self.collaborators.clock)

    def run_checks(self, checks: list[CheckDef] | None, reason: str = "") -> None:
        """Run all checks. Never raises.

        ``checks=None`` means no configuration could be loaded; ``reason``
        says why and ends up in the recorded status.
        """
        if checks is None:
            self.record_error(f"No configuration loaded: {reason or 'unknown reason'}")
            return
        if not checks:
            self.record_error("No checks configured.")
            return

        for check in checks:
            for record in execute_check(check, self.collaborators):
                self.aggregator.add(record)

        logger.info(
            "Ran %d checks, %d statuses, worst: %s",
            len(checks), len(self.aggregator), self.aggregator.worst_severity().text,
        )

    def record_error(self, message: str) -> None:
        logger.warning(message)
        self.aggregator.add(
            StatusRecord(message, Severity.CRITICAL, self.collaborators.clock.now())
        )

    def summary(self) -> str:
        return self.reporter.summary()

    def details(self) -> str:
        return self.reporter.details()

    def exit_code(self) -> int:
        return self.reporter.exit_code()
