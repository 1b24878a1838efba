"""Check executors: one per check kind, plus the kind dispatcher.

Supports: init-script liveness, file freshness, product index freshness and
the composite heartbeat check. Each executor returns the status records for
the measurements it made; ``execute_check`` turns any failure into a single
critical record so one broken check never aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from .classifier import classify
from .collaborators import Collaborators, FileMetadata, SystemClock
from .exceptions import ConfigurationMismatch
from .registry import CheckDef, ThresholdDef
from .status import Severity, StatusRecord

logger = logging.getLogger(__name__)


def millis_to_seconds(raw: Any) -> int:
    """Truncate a millisecond timestamp to whole seconds."""
    return int(raw) // 1000


# ── Check runners ────────────────────────────────────────────────────────────


def check_running(script: str, c: Collaborators) -> list[StatusRecord]:
    """Init-script status probe: exit 0 means running, anything else is critical."""
    message, exit_code = c.probe.run(script)
    if not message:
        message = f"[{script} status] exited with code {exit_code}"
    severity = Severity.SUCCESS if exit_code == 0 else Severity.CRITICAL
    return [StatusRecord(message, severity, c.clock.now())]


def check_file(
    path: str,
    warning: float,
    critical: float,
    files: FileMetadata,
    clock: SystemClock,
) -> list[StatusRecord]:
    """File age against thresholds. A missing file is always critical."""
    now = clock.now()
    if not files.exists(path):
        return [StatusRecord(f"No such file or directory [{path}]", Severity.CRITICAL, now)]

    age = now - files.last_modified(path)
    message, severity = classify(age, warning, critical, f"File [{path}]")
    return [StatusRecord(message, severity, now)]


def check_index(check: CheckDef, c: Collaborators) -> list[StatusRecord]:
    """Index is fresh if either an insert or an update happened recently."""
    now = c.clock.now()
    insert_raw, update_raw = c.store.latest_timestamps(check.dsn, check.username, check.password)
    insert_age = now - millis_to_seconds(insert_raw)
    update_age = now - millis_to_seconds(update_raw)
    age = min(insert_age, update_age)

    message, severity = classify(age, check.warning, check.critical, "Index")
    return [StatusRecord(message, severity, now)]


def check_heartbeat(check: CheckDef, c: Collaborators) -> list[StatusRecord]:
    """Composite heartbeat check.

    Each configured sub-check runs independently. The file-age sub-check uses
    the heartbeat file's mtime as the arrival time. Product and memory
    sub-checks need the parsed document and emit nothing when the data is
    not there.
    """
    doc = c.documents.read(check.file)
    records: list[StatusRecord] = []

    if check.file_age is not None:
        records += check_file(
            check.file, check.file_age.warning, check.file_age.critical, c.files, c.clock,
        )

    if check.product_age is not None:
        records += _check_indexed_product(doc, check.product_age, c.clock)

    if check.memory_usage is not None:
        records += _check_memory_usage(doc, check.memory_usage, c.clock)

    return records


def _check_indexed_product(
    doc: dict[str, Any] | None, thresholds: ThresholdDef, clock: SystemClock,
) -> list[StatusRecord]:
    component = doc.get(thresholds.name) if doc else None
    product = component.get("indexed product") if isinstance(component, dict) else None
    date = _to_int(product.get("date")) if isinstance(product, dict) else None
    if date is None:
        logger.debug("No usable indexed product for [%s] in heartbeat, skipping", thresholds.name)
        return []

    # Record carries the heartbeat's own timestamp, not the time of the check
    updated = millis_to_seconds(date)
    age = clock.now() - updated
    message, severity = classify(
        age, thresholds.warning, thresholds.critical,
        f"Indexed product [{product.get('message', '')}]",
    )
    return [StatusRecord(message, severity, updated)]


def _check_memory_usage(
    doc: dict[str, Any] | None, thresholds: ThresholdDef, clock: SystemClock,
) -> list[StatusRecord]:
    heartbeat = doc.get("heartbeat") if doc else None
    total = heartbeat.get("totalUsed") if isinstance(heartbeat, dict) else None
    if isinstance(total, dict):
        total = total.get("message")

    committed = _to_int(total)
    if committed is None:
        logger.debug("No usable totalUsed in heartbeat (%r), skipping", total)
        return []

    message, severity = classify(
        committed, thresholds.warning, thresholds.critical,
        "Total used memory", unit="bytes", measure="",
    )
    return [StatusRecord(message, severity, clock.now())]


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


# ── Dispatcher ───────────────────────────────────────────────────────────────


def _require(check: CheckDef, *fields: str) -> CheckDef:
    missing = [f for f in fields if getattr(check, f) in (None, "")]
    if missing:
        raise ConfigurationMismatch(
            f"{check.type} check [{check.id}] is missing {', '.join(missing)}"
        )
    return check


CHECK_RUNNERS: dict[str, Callable[[CheckDef, Collaborators], list[StatusRecord]]] = {
    "running": lambda d, c: check_running(_require(d, "script").script, c),
    "file": lambda d, c: check_file(
        _require(d, "file", "warning", "critical").file, d.warning, d.critical, c.files, c.clock,
    ),
    "index": lambda d, c: check_index(_require(d, "dsn", "warning", "critical"), c),
    "heartbeat": lambda d, c: check_heartbeat(_require(d, "file"), c),
}


def execute_check(check: CheckDef, c: Collaborators) -> list[StatusRecord]:
    """Run a check by type and tag its records with the check id.

    Never raises: definition problems and collaborator failures each become
    one critical record.
    """
    if check.error:
        return [_critical(check, f"Invalid check definition [{check.id}]: {check.error}", c)]

    runner = CHECK_RUNNERS.get(check.type)
    if runner is None:
        return [_critical(check, f"Unknown check type [{check.type}] for check [{check.id}]", c)]

    try:
        records = runner(check, c)
    except ConfigurationMismatch as e:
        logger.warning("Invalid check %s: %s", check.id, e)
        return [_critical(check, f"Invalid check definition [{check.id}]: {e}", c)]
    except Exception as e:
        logger.warning("Check %s failed: %s", check.id, e, exc_info=True)
        return [_critical(check, f"Check [{check.id}] failed: {type(e).__name__}: {e}", c)]

    return [replace(r, check_id=check.id) for r in records]


def _critical(check: CheckDef, message: str, c: Collaborators) -> StatusRecord:
    return StatusRecord(message, Severity.CRITICAL, c.clock.now(), check.id)
