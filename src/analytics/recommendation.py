"""
src/analytics/recommendation.py
────────────────────────────────
Which kind of facility to suggest for a vehicle's current problems.

Priority: fuel → fuel station; engine / battery / chain → service center;
tires / brakes → garage; anything else → service center.
"""
from __future__ import annotations

from enum import Enum

from src.data.models import ConditionResult


class ServiceType(str, Enum):
    FUEL_STATIONS = "fuel_stations"
    SERVICE_CENTERS = "service_centers"
    GARAGES = "garages"


_RULES: list[tuple[tuple[str, ...], ServiceType]] = [
    (("fuel",), ServiceType.FUEL_STATIONS),
    (("engine", "battery", "chain"), ServiceType.SERVICE_CENTERS),
    (("tire", "tyre", "brake"), ServiceType.GARAGES),
]


def recommend_service(condition: ConditionResult) -> ServiceType | None:
    """None when nothing needs attention."""
    issues = [m.name.lower() for m in condition.problematic_metrics]
    if not issues:
        return None
    for keywords, service in _RULES:
        if any(kw in issue for issue in issues for kw in keywords):
            return service
    return ServiceType.SERVICE_CENTERS
