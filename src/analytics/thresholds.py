"""
src/analytics/thresholds.py
────────────────────────────
Threshold engine.

Provides:
  - Generic per-sensor threshold table (good / average cutoffs)
  - Direct (higher is better) and inverted (lower is better) classification
  - Fixed hand-coded rules for the four core health metrics
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from config.conditions import ConditionStatus, HealthLevel


@dataclass(frozen=True)
class Threshold:
    good: float
    average: float
    inverted: bool = False  # True → lower is better (temperatures)


_HEALTH = Threshold(good=70.0, average=40.0)
_PERCENT = Threshold(good=50.0, average=20.0)

THRESHOLDS: dict[str, Threshold] = {
    # Common (0-100, higher is better)
    "batteryHealth": _HEALTH,
    "tyreHealth": _HEALTH,
    "brakeHealth": _HEALTH,
    # Car
    "carEngineHealth": _HEALTH,
    "carFuelLevelPercent": _PERCENT,
    "carRangeKm": Threshold(good=200.0, average=100.0),
    "carEngineTempC": Threshold(good=90.0, average=100.0, inverted=True),
    # Bike
    "bikeEngineHealth": _HEALTH,
    "bikeFuelLevelPercent": _PERCENT,
    "bikeChainHealth": _HEALTH,
    "bikeEngineTempC": Threshold(good=80.0, average=95.0, inverted=True),
    # Scooter
    "scooterBatteryHealth": _HEALTH,
    "scooterStateOfChargePercent": _PERCENT,
    "scooterRangeKm": Threshold(good=50.0, average=25.0),
    "scooterEngineHealth": _HEALTH,
    "scooterFuelLevelPercent": _PERCENT,
    "scooterEngineTempC": Threshold(good=80.0, average=95.0, inverted=True),
}


def is_reading(value: object) -> bool:
    """True for a finite int/float; bools, None, strings and NaN/inf are not readings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def get_threshold(metric: str) -> Threshold | None:
    return THRESHOLDS.get(metric)


def get_health_level(metric: str, value: float) -> HealthLevel:
    """
    Classify a sensor value against the generic threshold table.

    Raises:
        KeyError: if the metric has no threshold entry
    """
    thr = THRESHOLDS[metric]
    if thr.inverted:
        if value <= thr.good:
            return HealthLevel.GOOD
        if value <= thr.average:
            return HealthLevel.AVERAGE
        return HealthLevel.BAD

    if value >= thr.good:
        return HealthLevel.GOOD
    if value >= thr.average:
        return HealthLevel.AVERAGE
    return HealthLevel.BAD


# ── Core metric rules ─────────────────────────────────────────────────────────

def engine_temperature_status(temp_c: float) -> ConditionStatus:
    if temp_c > 110:
        return ConditionStatus.BAD
    if temp_c >= 90:
        return ConditionStatus.WARNING
    return ConditionStatus.GOOD


def battery_level_status(level_pct: float) -> ConditionStatus:
    if level_pct < 20:
        return ConditionStatus.BAD
    if level_pct <= 50:
        return ConditionStatus.WARNING
    return ConditionStatus.GOOD


def tire_pressure_status(pressure_psi: float) -> ConditionStatus:
    """Two-sided band: 30-35 psi is ideal, 25-40 tolerable."""
    if pressure_psi < 25 or pressure_psi > 40:
        return ConditionStatus.BAD
    if pressure_psi < 30 or pressure_psi > 35:
        return ConditionStatus.WARNING
    return ConditionStatus.GOOD


def fuel_level_status(level_pct: float) -> ConditionStatus:
    if level_pct < 10:
        return ConditionStatus.BAD
    if level_pct <= 25:
        return ConditionStatus.WARNING
    return ConditionStatus.GOOD
