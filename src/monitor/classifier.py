"""Three-way threshold classification shared by every age and value check."""

from __future__ import annotations

from .status import Severity

Number = int | float


def classify(
    value: Number,
    warning: Number,
    critical: Number,
    subject: str,
    unit: str = "seconds",
    measure: str = "age",
) -> tuple[str, Severity]:
    """Classify ``value`` against warning/critical thresholds.

    Critical is evaluated before warning and both comparisons are strict, so a
    value equal to a threshold does not breach it.
    """
    label = f"{subject} {measure}" if measure else subject
    observed = f"{label} [{value} {unit}]"

    if value > critical:
        return (
            f"{observed} exceeds critical threshold [{critical} {unit}].",
            Severity.CRITICAL,
        )
    if value > warning:
        return (
            f"{observed} exceeds warning threshold [{warning} {unit}].",
            Severity.WARNING,
        )
    return f"{observed} is okay.", Severity.SUCCESS
