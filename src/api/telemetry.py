"""
src/api/telemetry.py
────────────────────
Telemetry endpoints.

  POST /api/telemetry          ingest one sample (device / emulator)
  GET  /api/telemetry?code=    last telemetry + condition for a code
  GET  /api/telemetry/logs     paginated history of the caller's vehicles
"""
from __future__ import annotations

import math

from flask import Blueprint, jsonify, request

from config.settings import settings
from src.api.common import current_user_id, none_if_nan, vehicle_summary
from src.data import store
from src.data.models import LogLocation, LogVehicle, TelemetryLogEntry
from src.services.ingestion import get_telemetry, ingest_telemetry

bp_telemetry = Blueprint("telemetry", __name__)


@bp_telemetry.post("/api/telemetry")
def post_telemetry():
    vehicle = ingest_telemetry(request.get_json(silent=True))
    return jsonify({
        "success": True,
        "message": "Telemetry received successfully",
        "vehicle": vehicle_summary(vehicle),
    })


@bp_telemetry.get("/api/telemetry")
def read_telemetry():
    vehicle, condition = get_telemetry(request.args.get("code"))
    summary = vehicle_summary(vehicle)
    del summary["health"]
    summary["telemetry"] = vehicle.health.telemetry
    summary["condition"] = condition.to_json_dict()
    return jsonify({"success": True, "vehicle": summary})


def _log_entry(row: dict) -> dict:
    return TelemetryLogEntry(
        id=int(row["id"]),
        timestamp=row["created_at"],
        vehicle=LogVehicle(
            id=row["vehicle_id"],
            model=row["model"],
            type=row["type"],
            code=row["unique_code"],
            registration_number=row["registration_number"],
        ),
        location=LogLocation(
            lat=none_if_nan(row["lat"]),
            lng=none_if_nan(row["lng"]),
            label=none_if_nan(row["label"]),
        ),
        status=row["status"],
        health=row["health_data"],
    ).to_json_dict()


@bp_telemetry.get("/api/telemetry/logs")
def list_logs():
    user_id = current_user_id()
    vehicle_id = request.args.get("vehicleId") or None
    page = max(request.args.get("page", 1, type=int), 1)
    limit = settings.LOGS_PAGE_SIZE

    df = store.get_logs(
        user_id,
        vehicle_id=vehicle_id,
        sort_by=request.args.get("sortBy", "created_at"),
        sort_order=request.args.get("sortOrder", "desc"),
        page=page,
        limit=limit,
    )
    total = store.count_logs(user_id, vehicle_id=vehicle_id)

    return jsonify({
        "success": True,
        "logs": [_log_entry(row) for row in df.to_dict("records")],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit),
        },
    })
