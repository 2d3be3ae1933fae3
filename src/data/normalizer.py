"""
src/data/normalizer.py
───────────────────────
Telemetry normalization: merge a partial, vehicle-type-specific raw sample
into the vehicle's previous canonical health record.

Rules (first readable source wins, otherwise the previous value is kept):
  batteryLevel       ← batteryHealth
  tirePressure       ← 30 + clamp(tyreHealth, 0, 100) / 100 × 5   (else 35)
  fuelLevel          ← carFuelLevelPercent → bikeFuelLevelPercent → scooterFuelLevelPercent
  engineTemperature  ← the vehicle type's engine temperature field
                       (bike / scooter default to 70 °C, car may stay absent)
  mileage            ← odometerKm
  isActive           ← status == "on"          (always recomputed)
  location           ← label                   (when non-empty)
  telemetry          ← the raw sample, replaced as a whole
  oilPressure, lastServiceDate  kept only when the sample carries them

Other raw keys are carried onto the record as extra attributes.
"""
from __future__ import annotations

from typing import Any

from config.vehicles import (
    DEFAULT_TIRE_PRESSURE_PSI,
    FUEL_LEVEL_FIELDS,
    TIRE_PRESSURE_BASE_PSI,
    TIRE_PRESSURE_SPAN_PSI,
    VEHICLE_PROFILES,
    VehicleType,
)
from src.analytics.thresholds import is_reading
from src.data.models import CANONICAL_HEALTH_KEYS, VehicleHealth

_HEALTH_FIELD_NAMES = frozenset(VehicleHealth.model_fields)


def map_tire_pressure(tyre_health: float) -> float:
    """Map tyre health (0-100 %) onto 30-35 psi; out-of-range input is clamped."""
    clamped = min(max(float(tyre_health), 0.0), 100.0)
    return TIRE_PRESSURE_BASE_PSI + clamped / 100.0 * TIRE_PRESSURE_SPAN_PSI


def _first_reading(sample: dict[str, Any], *keys: str) -> float | None:
    for key in keys:
        value = sample.get(key)
        if is_reading(value):
            return value
    return None


def _carried_fields(existing: VehicleHealth, raw_sample: dict[str, Any]) -> dict[str, Any]:
    """Extra (non-canonical) keys: previous ones first, then the sample's."""
    carried = dict(existing.model_extra or {})
    for key, value in raw_sample.items():
        if key in CANONICAL_HEALTH_KEYS or key in _HEALTH_FIELD_NAMES:
            continue
        carried[key] = value
    return carried


def normalize(
    existing: VehicleHealth,
    vehicle_type: VehicleType | str,
    raw_sample: dict[str, Any],
    status: str,
    label: str | None = None,
) -> VehicleHealth:
    """
    Build the updated canonical health record for one telemetry sample.

    Args:
        existing: Previously stored health snapshot (not modified)
        vehicle_type: "car" | "bike" | "scooter"
        raw_sample: Telemetry fields as received
        status: Device status, "on" marks the vehicle active
        label: Location label reported with the sample

    Returns:
        A new VehicleHealth; the previous condition is carried until re-evaluated.
    """
    profile = VEHICLE_PROFILES[VehicleType(vehicle_type)]

    battery = _first_reading(raw_sample, "batteryHealth")
    tyre = _first_reading(raw_sample, "tyreHealth")
    fuel = _first_reading(raw_sample, *FUEL_LEVEL_FIELDS)
    odometer = _first_reading(raw_sample, "odometerKm")

    if tyre is not None:
        tire_pressure = map_tire_pressure(tyre)
    elif existing.tire_pressure is not None:
        tire_pressure = existing.tire_pressure
    else:
        tire_pressure = DEFAULT_TIRE_PRESSURE_PSI

    engine_temp = _first_reading(raw_sample, profile.engine_temp_field)
    if engine_temp is None:
        engine_temp = existing.engine_temperature
    if engine_temp is None:
        engine_temp = profile.default_engine_temp_c

    record: dict[str, Any] = _carried_fields(existing, raw_sample)
    record.update(
        engineTemperature=engine_temp,
        batteryLevel=battery if battery is not None else existing.battery_level,
        tirePressure=tire_pressure,
        fuelLevel=fuel if fuel is not None else existing.fuel_level,
        mileage=odometer if odometer is not None else existing.mileage,
        isActive=status == "on",
        location=label or existing.location,
        telemetry=dict(raw_sample),
        condition=existing.condition,
    )

    # Legacy fields: a present value of the wrong type (non-finite or
    # non-numeric pressure, non-string date) counts as absent
    oil_pressure = _first_reading(raw_sample, "oilPressure")
    if oil_pressure is not None:
        record["oilPressure"] = oil_pressure
    last_service = raw_sample.get("lastServiceDate")
    if isinstance(last_service, str):
        record["lastServiceDate"] = last_service

    return VehicleHealth.model_validate(record)
