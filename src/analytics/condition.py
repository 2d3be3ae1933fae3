"""
src/analytics/condition.py
───────────────────────────
Vehicle condition evaluation.

Two evaluation paths feed one result:
  core metrics       — engine temperature, battery level, tire pressure and
                       fuel level from the canonical record, each with its own
                       hand-coded band (see thresholds.py)
  telemetry metrics  — vehicle-type-specific sensors from the last raw sample,
                       classified with the generic threshold table

Overall status is worst-of-N: any bad → bad, else any warning → warning,
else good.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from config.conditions import HEALTH_LEVEL_TO_STATUS, STATUS_ORDER, ConditionStatus
from src.analytics.thresholds import (
    battery_level_status,
    engine_temperature_status,
    fuel_level_status,
    get_health_level,
    is_reading,
    tire_pressure_status,
)
from src.data.models import ConditionResult, HealthMetricValue, VehicleHealth

logger = logging.getLogger(__name__)

BATTERY_LEVEL = "Battery Level"

# (attribute, display name, unit, rule) in evaluation order
CORE_METRICS: list[tuple[str, str, str, Callable[[float], ConditionStatus]]] = [
    ("engine_temperature", "Engine Temperature", "°C", engine_temperature_status),
    ("battery_level", BATTERY_LEVEL, "%", battery_level_status),
    ("tire_pressure", "Tire Pressure", "psi", tire_pressure_status),
    ("fuel_level", "Fuel Level", "%", fuel_level_status),
]

# (telemetry key, display name) in evaluation order
TELEMETRY_METRICS: list[tuple[str, str]] = [
    ("carEngineHealth", "Car Engine Health"),
    ("bikeEngineHealth", "Bike Engine Health"),
    ("bikeChainHealth", "Bike Chain Health"),
    ("scooterBatteryHealth", "Scooter Battery Health"),
    ("scooterStateOfChargePercent", "Scooter State Of Charge"),
    ("scooterEngineHealth", "Scooter Engine Health"),
    ("batteryHealth", "Battery Health"),
    ("tyreHealth", "Tyre Health"),
    ("brakeHealth", "Brake Health"),
]


def _readable(name: str, value: object) -> bool:
    if is_reading(value):
        return True
    if isinstance(value, float):
        # NaN / inf would otherwise pass every comparison as "good"
        logger.warning("Skipping non-finite value for %s: %r", name, value)
    return False


def _core_evaluations(health: VehicleHealth) -> list[HealthMetricValue]:
    metrics: list[HealthMetricValue] = []
    for attr, name, unit, rule in CORE_METRICS:
        value = getattr(health, attr)
        if not _readable(name, value):
            continue
        metrics.append(HealthMetricValue(name=name, value=value, status=rule(value), unit=unit))
    return metrics


def _telemetry_evaluations(health: VehicleHealth, has_battery_level: bool) -> list[HealthMetricValue]:
    telemetry = health.telemetry or {}
    metrics: list[HealthMetricValue] = []
    for key, name in TELEMETRY_METRICS:
        # Same physical quantity as the core Battery Level
        if key == "batteryHealth" and has_battery_level:
            continue
        value = telemetry.get(key)
        if not _readable(key, value):
            continue
        status = HEALTH_LEVEL_TO_STATUS[get_health_level(key, value)]
        metrics.append(HealthMetricValue(name=name, value=value, status=status, unit="%"))
    return metrics


def overall_status(statuses: Iterable[ConditionStatus]) -> ConditionStatus:
    """Worst status in `statuses`; good when empty."""
    return max(statuses, key=lambda s: STATUS_ORDER[s], default=ConditionStatus.GOOD)


# ── Main API ──────────────────────────────────────────────────────────────────

def evaluate_condition(health: VehicleHealth) -> ConditionResult:
    """Evaluate a canonical health record into a ConditionResult."""
    metrics = _core_evaluations(health)
    has_battery_level = any(m.name == BATTERY_LEVEL for m in metrics)
    metrics.extend(_telemetry_evaluations(health, has_battery_level))

    problematic = [m for m in metrics if m.status != ConditionStatus.GOOD]
    return ConditionResult(
        overall=overall_status(m.status for m in problematic),
        problematic_metrics=problematic,
    )


def fleet_condition(results: list[ConditionResult]) -> ConditionStatus:
    """Fleet-level condition: worst overall status of individual vehicles."""
    return overall_status(r.overall for r in results)
