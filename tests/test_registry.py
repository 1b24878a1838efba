"""Tests for the check registry (YAML configuration)."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from src.monitor.exceptions import ConfigurationMismatch
from src.monitor.registry import CheckDef, ThresholdDef, load_checks


@pytest.fixture
def sample_yaml(tmp_path: Path) -> Path:
    """Create a monitor.yaml with one check of every kind."""
    data = {
        "checks": [
            {"id": "pdl-running", "type": "running", "script": "/etc/init.d/pdl"},
            {
                "id": "receive-log",
                "type": "file",
                "file": "/var/log/pdl/receive.log",
                "warning": 300,
                "critical": 900,
            },
            {
                "id": "index",
                "type": "index",
                "dsn": "mysql+pymysql://db/productindex",
                "username": "monitor",
                "password": "secret",
                "warning": 600,
                "critical": 3600,
            },
            {
                "id": "heartbeat",
                "type": "Heartbeat",
                "file": "/var/lib/pdl/heartbeat.json",
                "file_age": {"warning": 120, "critical": 600},
                "product_age": {"name": "indexer", "warning": 900, "critical": 3600},
                "memory_usage": {"warning": 1_000_000_000, "critical": 2_000_000_000},
            },
        ]
    }
    yml_path = tmp_path / "monitor.yaml"
    yml_path.write_text(yaml.dump(data, sort_keys=False))
    return yml_path


class TestLoadChecks:
    def test_order_preserved(self, sample_yaml: Path) -> None:
        checks = load_checks(sample_yaml)
        assert [c.id for c in checks] == ["pdl-running", "receive-log", "index", "heartbeat"]
        assert [c.type for c in checks] == ["running", "file", "index", "heartbeat"]

    def test_fields(self, sample_yaml: Path) -> None:
        running, log, index, heartbeat = load_checks(sample_yaml)
        assert running.script == "/etc/init.d/pdl"
        assert (log.file, log.warning, log.critical) == ("/var/log/pdl/receive.log", 300, 900)
        assert index.dsn == "mysql+pymysql://db/productindex"
        assert (index.username, index.password) == ("monitor", "secret")
        assert heartbeat.file_age == ThresholdDef(120, 600)
        assert heartbeat.product_age == ThresholdDef(900, 3600, name="indexer")
        assert heartbeat.memory_usage == ThresholdDef(1_000_000_000, 2_000_000_000)

    def test_optional_groups_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "m.yaml"
        path.write_text("checks:\n  - {id: hb, type: heartbeat, file: /hb.json}\n")
        [hb] = load_checks(path)
        assert hb.file_age is None and hb.product_age is None and hb.memory_usage is None
        assert hb.error == ""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationMismatch, match="not found"):
            load_checks(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("checks: [unclosed\n")
        with pytest.raises(ConfigurationMismatch, match="Failed to parse"):
            load_checks(path)

    def test_no_checks_list(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("log_level: DEBUG\n")
        with pytest.raises(ConfigurationMismatch, match="No 'checks' list"):
            load_checks(path)

    def test_malformed_entries_are_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "m.yaml"
        path.write_text(
            "checks:\n"
            "  - just-a-string\n"
            "  - {id: f, type: file, file: /a, warning: soon, critical: 10}\n"
            "  - {id: hb, type: heartbeat, file: /hb.json, memory_usage: {warning: 1}}\n"
            "  - {id: ok, type: running, script: /etc/init.d/pdl}\n"
        )
        bad_entry, bad_number, bad_group, ok = load_checks(path)
        assert bad_entry == CheckDef(
            id="check-0", type="", error="Check entry must be a mapping, got 'just-a-string'",
        )
        assert bad_number.id == "f"
        assert "'warning' must be a number" in bad_number.error
        assert "'memory_usage' needs both" in bad_group.error
        assert ok.error == ""

    def test_missing_id_and_type(self, tmp_path: Path) -> None:
        path = tmp_path / "m.yaml"
        path.write_text("checks:\n  - {file: /a}\n")
        [c] = load_checks(path)
        assert c.id == "check-0"
        assert c.type == ""
