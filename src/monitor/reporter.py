"""Renders a finished run for the supervisor: summary, details, exit code.

The ``text`` format is what Nagios reads: the summary line first, then the
host/date header and one line per status. ``json`` and ``table`` are for
humans and other tooling.
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .aggregator import StatusAggregator
from .collaborators import SystemClock
from .status import Severity

OKAY_SUMMARY = "PDL is okay."
FORMATS = ("text", "json", "table")

_SEVERITY_STYLE = {
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "bold red",
}


class Reporter:
    def __init__(self, aggregator: StatusAggregator, clock: SystemClock) -> None:
        self.aggregator = aggregator
        self.clock = clock

    def summary(self) -> str:
        """Single line: the worst message, or the all-okay sentinel."""
        worst = self.aggregator.worst
        return worst.message if worst else OKAY_SUMMARY

    def details(self) -> str:
        lines = [
            f"Host = {self.clock.hostname()}",
            f"Date = {self.clock.date_string()}",
            "",
        ]
        lines += [f"[{r.severity.text}] {r.message}" for r in self.aggregator.history()]
        return "\n".join(lines) + "\n"

    def exit_code(self) -> int:
        return int(self.aggregator.worst_severity())

    # ── Output formats ───────────────────────────────────────────────────────

    def render(self, fmt: str = "text", console: Console | None = None) -> str:
        """Render the report in ``fmt``; ``table`` prints to ``console`` and returns ""."""
        if fmt == "text":
            return f"{self.summary()}\n{self.details()}"
        if fmt == "json":
            return json.dumps(self.to_dict(), indent=2) + "\n"
        if fmt == "table":
            (console or Console()).print(self.to_table())
            return ""
        raise ValueError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")

    def to_dict(self) -> dict[str, object]:
        severity = self.aggregator.worst_severity()
        return {
            "status": severity.text,
            "exit_code": int(severity),
            "summary": self.summary(),
            "host": self.clock.hostname(),
            "date": self.clock.date_string(),
            "statuses": [r.to_dict() for r in self.aggregator.history()],
        }

    def to_table(self) -> Table:
        table = Table(title=Text(self.summary()), title_justify="left")
        table.add_column("Check", style="cyan")
        table.add_column("Status")
        table.add_column("Message")
        for r in self.aggregator.history():
            # messages contain [brackets]; Text keeps rich from reading them as markup
            table.add_row(
                Text(r.check_id or "-"),
                Text(r.severity.text, style=_SEVERITY_STYLE[r.severity]),
                Text(r.message),
            )
        return table
