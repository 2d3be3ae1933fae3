"""
tests/test_recommendation.py
─────────────────────────────
Tests for service facility recommendations.
"""

from config.conditions import ConditionStatus
from src.analytics.recommendation import ServiceType, recommend_service
from src.data.models import ConditionResult, HealthMetricValue


def _condition(*names: str) -> ConditionResult:
    metrics = [
        HealthMetricValue(name=n, value=10, status=ConditionStatus.BAD, unit="%")
        for n in names
    ]
    return ConditionResult(overall=ConditionStatus.BAD if metrics else ConditionStatus.GOOD,
                           problematic_metrics=metrics)


class TestRecommendService:
    def test_nothing_wrong(self):
        assert recommend_service(_condition()) is None

    def test_fuel_first(self):
        assert recommend_service(_condition("Brake Health", "Fuel Level")) == ServiceType.FUEL_STATIONS

    def test_engine_and_battery(self):
        assert recommend_service(_condition("Tire Pressure", "Engine Temperature")) == ServiceType.SERVICE_CENTERS
        assert recommend_service(_condition("Battery Level")) == ServiceType.SERVICE_CENTERS
        assert recommend_service(_condition("Bike Chain Health")) == ServiceType.SERVICE_CENTERS

    def test_tires_and_brakes(self):
        assert recommend_service(_condition("Tire Pressure")) == ServiceType.GARAGES
        assert recommend_service(_condition("Tyre Health", "Brake Health")) == ServiceType.GARAGES

    def test_other_issue_defaults_to_service_center(self):
        assert recommend_service(_condition("Scooter State Of Charge")) == ServiceType.SERVICE_CENTERS
