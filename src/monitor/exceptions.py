"""Errors raised inside the monitor; the run driver turns them into statuses."""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for monitor errors."""


class CollaboratorUnavailable(MonitorError):
    """Raised when a probe, file, store or document cannot be reached."""


class ConfigurationMismatch(MonitorError):
    """Raised for missing configuration, unknown check kinds or bad definitions."""
