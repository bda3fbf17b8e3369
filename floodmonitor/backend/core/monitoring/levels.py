"""
Water-level classification.

Derives a gauge status from a station's warning/danger thresholds and a
trend from consecutive readings.
"""

from __future__ import annotations

# A reading this far above the danger level is reported as critical.
CRITICAL_FACTOR = 1.2

# Changes smaller than this (metres) count as stable.
TREND_DEAD_BAND = 0.05


def classify_status(level: float, warning_level: float, danger_level: float) -> str:
    """
    Classify a water level against station thresholds.

    Args:
        level: Observed level (m)
        warning_level: Station warning threshold (m)
        danger_level: Station danger threshold (m)

    Returns:
        One of ``"normal"``, ``"warning"``, ``"danger"`` or ``"critical"``
    """
    if level >= danger_level * CRITICAL_FACTOR:
        return "critical"
    if level >= danger_level:
        return "danger"
    if level >= warning_level:
        return "warning"
    return "normal"


def classify_trend(level: float, previous_level: float | None) -> str:
    if previous_level is None:
        return "stable"
    delta = level - previous_level
    if delta > TREND_DEAD_BAND:
        return "rising"
    if delta < -TREND_DEAD_BAND:
        return "falling"
    return "stable"
