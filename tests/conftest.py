"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from src.monitor.collaborators import Collaborators, SystemClock
from src.monitor.exceptions import CollaboratorUnavailable

NOW = 1_700_000_000  # 2023-11-14 22:13:20 UTC


class FakeClock(SystemClock):
    def __init__(self, now: int = NOW, host: str = "pdl-test-01") -> None:
        self.current = now
        self.host = host

    def now(self) -> int:
        return self.current

    def hostname(self) -> str:
        return self.host


class FakeProbe:
    def __init__(self) -> None:
        self.results: dict[str, tuple[str, int] | Exception] = {}
        self.calls: list[str] = []

    def run(self, script: str) -> tuple[str, int]:
        self.calls.append(script)
        result = self.results.get(script, ("", 127))
        if isinstance(result, Exception):
            raise result
        return result


class FakeFiles:
    def __init__(self) -> None:
        self.mtimes: dict[str, int] = {}

    def exists(self, path: str) -> bool:
        return path in self.mtimes

    def last_modified(self, path: str) -> int:
        if path not in self.mtimes:
            raise CollaboratorUnavailable(f"Could not stat [{path}]")
        return self.mtimes[path]


class FakeStore:
    def __init__(self) -> None:
        self.result: tuple[int, int] | Exception = (0, 0)
        self.calls: list[tuple[str, str, str]] = []

    def latest_timestamps(self, dsn: str, username: str = "", password: str = "") -> tuple[int, int]:
        self.calls.append((dsn, username, password))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeDocuments:
    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}

    def read(self, path: str) -> dict[str, Any] | None:
        return self.docs.get(path)


def millis(seconds_ago: int, now: int = NOW) -> int:
    """Millisecond timestamp ``seconds_ago`` before ``now``, with sub-second noise."""
    return (now - seconds_ago) * 1000 + 789


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def collaborators(clock: FakeClock) -> Collaborators:
    """Collaborators backed entirely by in-memory fakes."""
    return Collaborators(
        probe=FakeProbe(),
        files=FakeFiles(),
        store=FakeStore(),
        documents=FakeDocuments(),
        clock=clock,
    )
