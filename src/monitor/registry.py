"""Check registry: loads monitor.yaml into typed check definitions.

Order of the ``checks`` list is the order the checks run in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationMismatch

logger = logging.getLogger(__name__)

CHECK_TYPES = ("running", "file", "index", "heartbeat")


# ── Data models ──────────────────────────────────────────────────────────────


@dataclass
class ThresholdDef:
    """Warning/critical pair, optionally tied to a named heartbeat component."""

    warning: float
    critical: float
    name: str = ""


@dataclass
class CheckDef:
    """Definition of a single check from the configuration."""

    id: str
    type: str  # running | file | index | heartbeat
    script: str = ""  # running
    file: str = ""  # file, heartbeat
    dsn: str = ""  # index
    username: str = ""
    password: str = ""
    warning: float | None = None  # file, index
    critical: float | None = None
    file_age: ThresholdDef | None = None  # heartbeat
    product_age: ThresholdDef | None = None
    memory_usage: ThresholdDef | None = None
    error: str = ""  # set when the entry could not be parsed


# ── Loader ───────────────────────────────────────────────────────────────────


def load_checks(path: Path | str) -> list[CheckDef]:
    """Parse the YAML configuration and return the ordered check list.

    Raises ``ConfigurationMismatch`` when the file is missing, unparsable or
    has no ``checks`` list. Malformed entries are kept with ``error`` set so
    the run records them instead of dropping them.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationMismatch(f"Configuration file not found [{path}]")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationMismatch(f"Failed to parse [{path}]: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("checks"), list):
        raise ConfigurationMismatch(f"No 'checks' list in [{path}]")

    checks = []
    for index, entry in enumerate(raw["checks"]):
        check_id = f"check-{index}"
        if isinstance(entry, dict) and entry.get("id"):
            check_id = str(entry["id"])
        try:
            check = _parse_check(entry, check_id)
            if check.type not in CHECK_TYPES:
                logger.warning("Check %s has unknown type %r", check_id, check.type)
            checks.append(check)
        except ConfigurationMismatch as e:
            logger.warning("Malformed check entry %s: %s", check_id, e)
            checks.append(CheckDef(id=check_id, type="", error=str(e)))

    logger.info("Loaded %d checks from %s", len(checks), path)
    return checks


# ── Parsers ──────────────────────────────────────────────────────────────────


def _parse_check(raw: Any, check_id: str) -> CheckDef:
    if not isinstance(raw, dict):
        raise ConfigurationMismatch(f"Check entry must be a mapping, got {raw!r}")

    return CheckDef(
        id=check_id,
        type=str(raw.get("type") or "").strip().lower(),
        script=str(raw.get("script") or ""),
        file=str(raw.get("file") or ""),
        dsn=str(raw.get("dsn") or ""),
        username=str(raw.get("username") or ""),
        password=str(raw.get("password") or ""),
        warning=_number(raw, "warning"),
        critical=_number(raw, "critical"),
        file_age=_parse_thresholds(raw.get("file_age"), "file_age"),
        product_age=_parse_thresholds(raw.get("product_age"), "product_age"),
        memory_usage=_parse_thresholds(raw.get("memory_usage"), "memory_usage"),
    )


def _parse_thresholds(raw: Any, key: str) -> ThresholdDef | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ConfigurationMismatch(f"'{key}' must be a mapping, got {raw!r}")

    warning = _number(raw, "warning")
    critical = _number(raw, "critical")
    if warning is None or critical is None:
        raise ConfigurationMismatch(f"'{key}' needs both warning and critical thresholds")
    return ThresholdDef(warning=warning, critical=critical, name=str(raw.get("name", "")))


def _number(raw: dict[str, Any], key: str) -> float | None:
    value = raw.get(key)
    if value is None:
        return None
    # bool is an int subclass; "warning: yes" is a typo, not a threshold
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationMismatch(f"'{key}' must be a number, got {value!r}")
    return value
