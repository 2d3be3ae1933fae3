"""
src/api/vehicles.py
───────────────────
Vehicle registration endpoints for the calling user.

  GET    /api/vehicles                          list with condition + recommendation
  POST   /api/vehicles                          register (random code + demo health)
  DELETE /api/vehicles/<id>                     delete with its history
  POST   /api/vehicles/<id>/regenerate-code     new code, reset demo health
"""
from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from src.analytics.condition import evaluate_condition, fleet_condition
from src.analytics.recommendation import recommend_service
from src.api.common import current_user_id
from src.data import store
from src.data.models import Vehicle, VehicleRegistration
from src.services.errors import InvalidRequestError, VehicleNotFoundError

bp_vehicles = Blueprint("vehicles", __name__)


def _vehicle_json(vehicle: Vehicle) -> dict:
    condition = vehicle.health.condition or evaluate_condition(vehicle.health)
    service = recommend_service(condition)
    data = vehicle.to_json_dict()
    data["condition"] = condition.to_json_dict()
    data["recommendedService"] = service.value if service else None
    return data


@bp_vehicles.get("/api/vehicles")
def list_vehicles():
    vehicles = store.get_user_vehicles(current_user_id())
    payload = [_vehicle_json(v) for v in vehicles]
    fleet = fleet_condition([
        v.health.condition or evaluate_condition(v.health) for v in vehicles
    ])
    return jsonify({"success": True, "fleetCondition": fleet.value, "vehicles": payload})


@bp_vehicles.post("/api/vehicles")
def register_vehicle():
    user_id = current_user_id()
    try:
        registration = VehicleRegistration.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        message = "; ".join(err["msg"] for err in exc.errors())
        raise InvalidRequestError(message) from exc

    vehicle = store.create_vehicle(user_id, registration)
    return jsonify({"success": True, "vehicle": _vehicle_json(vehicle)}), 201


@bp_vehicles.delete("/api/vehicles/<vehicle_id>")
def delete_vehicle(vehicle_id: str):
    if not store.delete_vehicle(vehicle_id, current_user_id()):
        raise VehicleNotFoundError("Vehicle not found")
    return jsonify({"success": True})


@bp_vehicles.post("/api/vehicles/<vehicle_id>/regenerate-code")
def regenerate_code(vehicle_id: str):
    new_code = store.regenerate_vehicle_code(vehicle_id, current_user_id())
    if new_code is None:
        raise VehicleNotFoundError("Vehicle not found")
    return jsonify({"success": True, "newCode": new_code})
