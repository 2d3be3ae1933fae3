"""
config/conditions.py
────────────────────
Condition status levels, generic health levels, and their ordering.
"""

from enum import Enum


class ConditionStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"


class HealthLevel(str, Enum):
    """Result of the generic per-sensor threshold table."""
    GOOD = "good"
    AVERAGE = "average"
    BAD = "bad"


# Severity ordering for worst-of aggregation (higher = more severe)
STATUS_ORDER: dict[str, int] = {
    ConditionStatus.BAD: 3,
    ConditionStatus.WARNING: 2,
    ConditionStatus.GOOD: 1,
}

HEALTH_LEVEL_TO_STATUS: dict[str, ConditionStatus] = {
    HealthLevel.GOOD: ConditionStatus.GOOD,
    HealthLevel.AVERAGE: ConditionStatus.WARNING,
    HealthLevel.BAD: ConditionStatus.BAD,
}
