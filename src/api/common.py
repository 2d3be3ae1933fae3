"""
src/api/common.py
─────────────────
Shared helpers for the HTTP layer: caller identity, error responses, and
vehicle serialization.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from src.data.models import Vehicle
from src.services.errors import NotAuthenticatedError, ServiceError

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"


def current_user_id() -> str:
    """Caller identity from the X-User-Id header."""
    user_id = request.headers.get(USER_HEADER, "").strip()
    if not user_id:
        raise NotAuthenticatedError("Not authenticated")
    return user_id


def error_response(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def none_if_nan(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def vehicle_summary(vehicle: Vehicle) -> dict[str, Any]:
    """Telemetry-facing view of a vehicle (code instead of owner details)."""
    return {
        "id": vehicle.id,
        "code": vehicle.unique_code,
        "type": vehicle.type.value,
        "status": vehicle.status,
        "lat": vehicle.lat,
        "lng": vehicle.lng,
        "label": vehicle.label,
        "health": vehicle.health.to_json_dict(),
        "lastTelemetryAt": vehicle.last_telemetry_at.isoformat() if vehicle.last_telemetry_at else None,
    }


def register_error_handlers(server: Flask) -> None:

    @server.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError):
        return error_response(exc.message, exc.status_code)

    @server.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response(f"Internal error: {exc}", 500)
