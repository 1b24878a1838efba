"""Adapters between the checks and the outside world.

Each adapter is a small class so the check executors can be handed fakes in
tests. Adapters raise ``CollaboratorUnavailable`` when the resource cannot be
reached; the heartbeat document reader is the exception and returns ``None``
instead of raising.
"""

from __future__ import annotations

import json
import logging
import socket
import subprocess
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import CollaboratorUnavailable

logger = logging.getLogger(__name__)


# ── Process probe ────────────────────────────────────────────────────────────


class ProcessProbe:
    """Runs an init script with a status argument and captures its result."""

    def __init__(self, argument: str = "status") -> None:
        self.argument = argument

    def run(self, script: str) -> tuple[str, int]:
        """Return the last line of output and the exit code of ``<script> status``."""
        cmd = [script, self.argument]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise CollaboratorUnavailable(f"Could not run [{' '.join(cmd)}]: {e}") from e

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        message = lines[-1] if lines else ""
        logger.debug("Probe %s exited %d: %s", cmd, result.returncode, message)
        return message, result.returncode


# ── File metadata ────────────────────────────────────────────────────────────


class FileMetadata:
    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def last_modified(self, path: str) -> int:
        try:
            return int(Path(path).stat().st_mtime)
        except OSError as e:
            raise CollaboratorUnavailable(f"Could not stat [{path}]: {e}") from e


# ── Store query ──────────────────────────────────────────────────────────────


class IndexStore:
    """Fetches the newest insert/update timestamps from the product index."""

    def __init__(self, table: str = "event") -> None:
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")
        self.table = table

    def _url(self, dsn: str, username: str = "", password: str = "") -> URL:
        url = make_url(dsn)
        if username and not url.username:
            url = url.set(username=username)
        if password and not url.password:
            url = url.set(password=password)
        return url

    def latest_timestamps(
        self, dsn: str, username: str = "", password: str = "",
    ) -> tuple[int, int]:
        """Return ``(MAX(created), MAX(updated))`` as millisecond integers."""
        query = text(
            f"SELECT MAX(created) AS last_add, MAX(updated) AS last_update FROM {self.table}"
        )
        try:
            engine = create_engine(self._url(dsn, username, password))
        except (SQLAlchemyError, ValueError) as e:
            raise CollaboratorUnavailable(f"Invalid index connection: {e}") from e

        try:
            with engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as e:
            raise CollaboratorUnavailable(f"Index query failed: {e}") from e
        finally:
            engine.dispose()

        if row is None or row["last_add"] is None or row["last_update"] is None:
            raise CollaboratorUnavailable(f"Index table [{self.table}] has no rows")
        return int(row["last_add"]), int(row["last_update"])


# ── Heartbeat document ───────────────────────────────────────────────────────


class DocumentSource:
    def read(self, path: str) -> dict[str, Any] | None:
        """Parse a JSON heartbeat file; ``None`` when missing or unparsable."""
        try:
            doc = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug("Heartbeat %s unreadable: %s", path, e)
            return None
        return doc if isinstance(doc, dict) else None


# ── Clock / host ─────────────────────────────────────────────────────────────


class SystemClock:
    def now(self) -> int:
        return int(time.time())

    def hostname(self) -> str:
        return socket.gethostname()

    def date_string(self) -> str:
        return datetime.fromtimestamp(self.now(), timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class Collaborators:
    """Everything a check executor may need to reach outside the process."""

    probe: ProcessProbe = field(default_factory=ProcessProbe)
    files: FileMetadata = field(default_factory=FileMetadata)
    store: IndexStore = field(default_factory=IndexStore)
    documents: DocumentSource = field(default_factory=DocumentSource)
    clock: SystemClock = field(default_factory=SystemClock)
