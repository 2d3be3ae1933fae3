"""
src/services/ingestion.py
─────────────────────────
Telemetry ingestion pipeline.

  body ─► validate (TelemetryPayload) ─► look up vehicle by code
       ─► normalize (merge with stored health) ─► evaluate condition
       ─► persist + history entry (one transaction) ─► publish update

The read-merge-write runs inside store.apply_telemetry so concurrent samples
for the same vehicle cannot overwrite each other.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from config.conditions import ConditionStatus
from src.analytics.condition import evaluate_condition
from src.data import store
from src.data.models import ConditionResult, TelemetryPayload, Vehicle, VehicleHealth, telemetry_sample
from src.data.normalizer import normalize
from src.services.broadcaster import TelemetryBroadcaster, broadcaster
from src.services.errors import InvalidTelemetryError, VehicleNotFoundError

logger = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def parse_payload(body: Any) -> TelemetryPayload:
    """
    Validate an ingestion body.

    Raises:
        InvalidTelemetryError: body is not an object, a known sensor field is
            not a finite number, or the vehicle code is missing
    """
    if not isinstance(body, dict):
        raise InvalidTelemetryError("Request body must be a JSON object")
    try:
        payload = TelemetryPayload.model_validate(body)
    except ValidationError as exc:
        raise InvalidTelemetryError(f"Invalid telemetry: {_format_validation_error(exc)}") from exc
    if not payload.code:
        raise InvalidTelemetryError("Vehicle code is required")
    return payload


def ingest_telemetry(body: Any, publisher: TelemetryBroadcaster = broadcaster) -> Vehicle:
    """
    Process one telemetry sample and return the updated vehicle.

    Raises:
        InvalidTelemetryError: see parse_payload
        VehicleNotFoundError: no vehicle holds the posted code
    """
    payload = parse_payload(body)
    raw_sample = telemetry_sample(body)
    status = payload.status or "off"

    def _merge(vehicle: Vehicle) -> VehicleHealth:
        health = normalize(vehicle.health, vehicle.type, raw_sample, status, payload.label)
        return health.model_copy(update={"condition": evaluate_condition(health)})

    vehicle = store.apply_telemetry(
        payload.code,
        _merge,
        status=status,
        lat=payload.lat,
        lng=payload.lng,
        label=payload.label,
    )
    if vehicle is None:
        raise VehicleNotFoundError(f"Vehicle not found with code: {payload.code}")

    condition = vehicle.health.condition or ConditionResult()
    if condition.overall == ConditionStatus.BAD:
        logger.warning(
            "Vehicle %s reported bad condition: %s",
            vehicle.unique_code,
            ", ".join(m.name for m in condition.problematic_metrics),
        )
    else:
        logger.info("Telemetry from %s: %s", vehicle.unique_code, condition.overall.value)

    publisher.publish({
        "type": "telemetry",
        "vehicleId": vehicle.id,
        "code": vehicle.unique_code,
        "status": vehicle.status,
        "label": vehicle.label,
        "condition": condition.to_json_dict(),
    })
    return vehicle


def get_telemetry(code: str | None) -> tuple[Vehicle, ConditionResult]:
    """
    Current state of the vehicle holding `code` and its condition.

    Records stored before any evaluation are evaluated on the fly.
    """
    if not code:
        raise InvalidTelemetryError("Vehicle code is required")
    vehicle = store.get_vehicle_by_code(code)
    if vehicle is None:
        raise VehicleNotFoundError(f"Vehicle not found with code: {code}")
    condition = vehicle.health.condition or evaluate_condition(vehicle.health)
    return vehicle, condition
