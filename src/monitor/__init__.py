"""PDL monitor: status model, threshold classifier, check executors, reporting."""

from .aggregator import StatusAggregator
from .checks import execute_check
from .collaborators import Collaborators
from .engine import Monitor
from .exceptions import CollaboratorUnavailable, ConfigurationMismatch, MonitorError
from .registry import CheckDef, ThresholdDef, load_checks
from .reporter import Reporter
from .status import Severity, StatusRecord

__all__ = [
    "CheckDef",
    "CollaboratorUnavailable",
    "Collaborators",
    "ConfigurationMismatch",
    "Monitor",
    "MonitorError",
    "Reporter",
    "Severity",
    "StatusAggregator",
    "StatusRecord",
    "ThresholdDef",
    "execute_check",
    "load_checks",
]
