"""
src/data/models.py
──────────────────
Pydantic v2 data models for vehicle health, condition results, telemetry
payloads, vehicles, and telemetry history entries.

Python attributes are snake_case; the persisted JSON and the HTTP API use the
camelCase aliases (``engineTemperature``, ``problematicMetrics``, ...).
"""

import re
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, field_validator
from pydantic.alias_generators import to_camel

from config.conditions import ConditionStatus
from config.vehicles import VehicleType

_VIN_RE = re.compile(r"^[A-Z0-9]+$")
_REGISTRATION_RE = re.compile(r"^[A-Z]{2}\d{2}[A-Z]{1,2}\d{4}$")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys; unset optionals are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Health & condition ────────────────────────────────────────────────────────

class HealthMetricValue(CamelModel):
    name: str
    value: float
    status: ConditionStatus
    unit: str


class ConditionResult(CamelModel):
    overall: ConditionStatus = ConditionStatus.GOOD
    problematic_metrics: list[HealthMetricValue] = Field(default_factory=list)


class VehicleHealth(CamelModel):
    """
    Canonical health snapshot persisted per vehicle.

    Unknown top-level keys are kept as extra attributes (raw telemetry keys
    carried over by the normalizer).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    engine_temperature: float | None = None  # °C, good <90, warning 90-110, bad >110
    battery_level: float | None = None       # %, good >50, warning 20-50, bad <20
    tire_pressure: float | None = None       # psi, good 30-35, warning 25-30/35-40
    fuel_level: float | None = None          # %, good >25, warning 10-25, bad <10
    mileage: float | None = None             # km
    is_active: bool = False
    location: str | None = None
    # Legacy fields, only present when explicitly supplied
    oil_pressure: float | None = None
    last_service_date: str | None = None
    telemetry: dict[str, Any] = Field(default_factory=dict)
    condition: ConditionResult | None = None


# Canonical keys (JSON names) that the normalizer computes explicitly
CANONICAL_HEALTH_KEYS: frozenset[str] = frozenset(
    field.alias or name for name, field in VehicleHealth.model_fields.items()
)


# ── Ingestion payload ─────────────────────────────────────────────────────────

class TelemetryPayload(CamelModel):
    """
    Body posted by a device or the emulator.

    Known sensor fields must be finite JSON numbers (booleans and numeric
    strings are rejected); any other key is accepted as is.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        allow_inf_nan=False,
    )

    code: str = ""
    status: Literal["on", "off"] | None = None
    lat: float | None = None
    lng: float | None = None
    label: str | None = None

    # Common
    battery_health: StrictFloat | None = None
    tyre_health: StrictFloat | None = None
    brake_health: StrictFloat | None = None
    odometer_km: StrictFloat | None = None
    # Car
    car_engine_health: StrictFloat | None = None
    car_fuel_level_percent: StrictFloat | None = None
    car_range_km: StrictFloat | None = None
    car_engine_temp_c: StrictFloat | None = Field(default=None, alias="carEngineTempC")
    # Bike
    bike_engine_health: StrictFloat | None = None
    bike_fuel_level_percent: StrictFloat | None = None
    bike_chain_health: StrictFloat | None = None
    bike_engine_temp_c: StrictFloat | None = Field(default=None, alias="bikeEngineTempC")
    # Scooter
    scooter_battery_health: StrictFloat | None = None
    scooter_state_of_charge_percent: StrictFloat | None = None
    scooter_range_km: StrictFloat | None = None
    scooter_engine_health: StrictFloat | None = None
    scooter_fuel_level_percent: StrictFloat | None = None
    scooter_engine_temp_c: StrictFloat | None = Field(default=None, alias="scooterEngineTempC")


TELEMETRY_ENVELOPE_KEYS: frozenset[str] = frozenset({"code", "status", "lat", "lng", "label"})


def telemetry_sample(body: dict[str, Any]) -> dict[str, Any]:
    """Telemetry fields exactly as received (envelope keys removed)."""
    return {key: value for key, value in body.items() if key not in TELEMETRY_ENVELOPE_KEYS}


# ── Vehicles ──────────────────────────────────────────────────────────────────

class VehicleRegistration(CamelModel):
    type: VehicleType
    model: str = Field(min_length=1)
    vin: str
    registration_number: str

    @field_validator("vin")
    @classmethod
    def _validate_vin(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("VIN is required")
        if len(value) != 17:
            raise ValueError("VIN must be 17 characters")
        if not _VIN_RE.match(value):
            raise ValueError("VIN must contain only letters and numbers")
        return value

    @field_validator("registration_number")
    @classmethod
    def _validate_registration(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("Registration number is required")
        if not _REGISTRATION_RE.match(value):
            raise ValueError("Invalid format (e.g., MH12AB1234)")
        return value


class Vehicle(CamelModel):
    id: str
    user_id: str
    type: VehicleType
    model: str
    vin: str
    registration_number: str
    unique_code: str
    created_at: datetime
    status: str = "off"
    lat: float | None = None
    lng: float | None = None
    label: str | None = None
    last_telemetry_at: datetime | None = None
    health: VehicleHealth = Field(default_factory=VehicleHealth)


# ── Telemetry history ─────────────────────────────────────────────────────────

class LogVehicle(CamelModel):
    id: str
    model: str
    type: VehicleType
    code: str
    registration_number: str


class LogLocation(CamelModel):
    lat: float | None = None
    lng: float | None = None
    label: str | None = None


class TelemetryLogEntry(CamelModel):
    id: int
    timestamp: datetime
    vehicle: LogVehicle
    location: LogLocation
    status: str
    health: dict[str, Any]
