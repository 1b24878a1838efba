"""Entry point for the PDL monitor (Nagios-style check)."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from src.config import settings
from src.monitor import Collaborators, ConfigurationMismatch, Monitor, Severity, load_checks
from src.monitor.collaborators import IndexStore, ProcessProbe
from src.monitor.reporter import FORMATS

logger = logging.getLogger(__name__)


def build_monitor() -> Monitor:
    collaborators = Collaborators(
        probe=ProcessProbe(settings.status_argument),
        store=IndexStore(settings.index_query_table),
    )
    return Monitor(collaborators)


def run(config_path: str, output_format: str, console: Console) -> int:
    """Run every configured check, print the report and return the exit code."""
    monitor = build_monitor()

    try:
        checks = load_checks(config_path)
    except ConfigurationMismatch as e:
        monitor.run_checks(None, reason=str(e))
    else:
        monitor.run_checks(checks)

    output = monitor.reporter.render(output_format, console=console)
    if output:
        console.out(output, end="", highlight=False)
    return monitor.exit_code()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="PDL health monitor")
    parser.add_argument("--config", default=settings.config_path, help="Check definitions (YAML)")
    parser.add_argument(
        "--format", dest="output_format", choices=FORMATS, default=settings.output_format,
        help="Report format",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (stderr)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    console = Console(soft_wrap=True)
    try:
        code = run(args.config, args.output_format, console)
    except Exception as e:
        logger.exception("Monitor run failed")
        console.out(f"PDL monitor failed: {type(e).__name__}: {e}", highlight=False)
        code = int(Severity.CRITICAL)
    sys.exit(code)


if __name__ == "__main__":
    main()
