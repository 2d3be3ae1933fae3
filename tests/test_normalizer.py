"""
tests/test_normalizer.py
─────────────────────────
Tests for merging raw telemetry samples into the canonical health record.
"""

import pytest

from config.conditions import ConditionStatus
from src.data.models import ConditionResult, VehicleHealth
from src.data.normalizer import map_tire_pressure, normalize


class TestTirePressureMapping:
    @pytest.mark.parametrize(
        "tyre_health,expected",
        [(-10, 30.0), (0, 30.0), (50, 32.5), (100, 35.0), (150, 35.0)],
    )
    def test_mapping_is_clamped(self, tyre_health, expected):
        assert map_tire_pressure(tyre_health) == pytest.approx(expected)

    def test_tyre_health_sets_pressure(self, healthy_health):
        out = normalize(healthy_health, "car", {"tyreHealth": 80}, "on")
        assert out.tire_pressure == pytest.approx(34.0)

    def test_default_pressure_without_any_source(self):
        out = normalize(VehicleHealth(), "car", {}, "on")
        assert out.tire_pressure == 35.0

    def test_previous_pressure_kept(self, healthy_health):
        out = normalize(healthy_health, "car", {}, "on")
        assert out.tire_pressure == 32.0


class TestEmptySample:
    def test_previous_values_kept(self, legacy_health):
        out = normalize(legacy_health, "car", {}, "off")
        assert out.engine_temperature == 85.0
        assert out.battery_level == 64.0
        assert out.tire_pressure == 31.0
        assert out.fuel_level == 55.0
        assert out.mileage == 42_000.0
        assert out.location == "Mumbai"

    def test_activity_follows_status(self, legacy_health):
        assert normalize(legacy_health, "car", {}, "off").is_active is False
        assert normalize(legacy_health, "car", {}, "on").is_active is True

    def test_telemetry_replaced(self, legacy_health):
        out = normalize(legacy_health, "car", {}, "on")
        assert out.telemetry == {}

    def test_legacy_fields_dropped(self, legacy_health):
        out = normalize(legacy_health, "car", {}, "on")
        assert out.oil_pressure is None
        assert out.last_service_date is None
        data = out.to_json_dict()
        assert "oilPressure" not in data
        assert "lastServiceDate" not in data

    def test_legacy_fields_kept_when_supplied(self, legacy_health):
        sample = {"oilPressure": 42, "lastServiceDate": "2024-05-01"}
        out = normalize(legacy_health, "car", sample, "on")
        assert out.oil_pressure == 42
        assert out.last_service_date == "2024-05-01"

    def test_mistyped_legacy_fields_dropped(self, legacy_health):
        sample = {"oilPressure": "high", "lastServiceDate": 20240501}
        out = normalize(legacy_health, "car", sample, "on")
        assert out.oil_pressure is None
        assert out.last_service_date is None
        assert out.telemetry == sample

    def test_existing_record_not_modified(self, legacy_health):
        before = legacy_health.model_dump()
        normalize(legacy_health, "bike", {"tyreHealth": 0, "batteryHealth": 5}, "on", "Delhi")
        assert legacy_health.model_dump() == before


class TestFieldSources:
    def test_battery_from_battery_health(self, healthy_health):
        out = normalize(healthy_health, "car", {"batteryHealth": 33}, "on")
        assert out.battery_level == 33

    def test_canonical_key_in_sample_is_not_a_source(self, healthy_health):
        out = normalize(healthy_health, "car", {"batteryLevel": 5}, "on")
        assert out.battery_level == 75.0

    def test_mileage_from_odometer(self, healthy_health):
        out = normalize(healthy_health, "car", {"odometerKm": 15_500}, "on")
        assert out.mileage == 15_500

    def test_fuel_precedence(self, healthy_health):
        out = normalize(
            healthy_health, "scooter",
            {"bikeFuelLevelPercent": 30, "scooterFuelLevelPercent": 70},
            "on",
        )
        assert out.fuel_level == 30

        out = normalize(
            healthy_health, "bike",
            {"carFuelLevelPercent": 10, "bikeFuelLevelPercent": 30},
            "on",
        )
        assert out.fuel_level == 10

    def test_non_numeric_source_treated_as_absent(self, healthy_health):
        out = normalize(healthy_health, "car", {"tyreHealth": "abc", "batteryHealth": None}, "on")
        assert out.tire_pressure == 32.0
        assert out.battery_level == 75.0
        assert out.telemetry == {"tyreHealth": "abc", "batteryHealth": None}


class TestEngineTemperature:
    def test_car_reads_its_own_field(self):
        out = normalize(VehicleHealth(), "car", {"carEngineTempC": 95}, "on")
        assert out.engine_temperature == 95

    def test_car_may_stay_absent(self):
        out = normalize(VehicleHealth(), "car", {"bikeEngineTempC": 99}, "on")
        assert out.engine_temperature is None
        assert "engineTemperature" not in out.to_json_dict()

    @pytest.mark.parametrize("vehicle_type", ["bike", "scooter"])
    def test_two_wheelers_default_to_70(self, vehicle_type):
        out = normalize(VehicleHealth(), vehicle_type, {}, "on")
        assert out.engine_temperature == 70.0

    def test_previous_value_wins_over_default(self):
        out = normalize(VehicleHealth(engine_temperature=88), "bike", {}, "on")
        assert out.engine_temperature == 88

    def test_type_field_wins_over_previous(self):
        existing = VehicleHealth(engine_temperature=88)
        assert normalize(existing, "bike", {"bikeEngineTempC": 100}, "on").engine_temperature == 100
        assert normalize(existing, "scooter", {"scooterEngineTempC": 65}, "on").engine_temperature == 65


class TestLocationAndExtras:
    def test_label_sets_location(self, healthy_health):
        out = normalize(healthy_health, "car", {}, "on", label="Delhi")
        assert out.location == "Delhi"

    def test_empty_label_keeps_location(self, healthy_health):
        assert normalize(healthy_health, "car", {}, "on", label="").location == "Pune"
        assert normalize(healthy_health, "car", {}, "on", label=None).location == "Pune"

    def test_raw_keys_carried_as_extras(self, healthy_health):
        out = normalize(healthy_health, "car", {"brakeHealth": 80, "preset": "best"}, "on")
        assert out.model_extra["brakeHealth"] == 80
        assert out.to_json_dict()["preset"] == "best"

    def test_previous_extras_kept(self):
        existing = VehicleHealth.model_validate({"selectedCity": "Pune"})
        out = normalize(existing, "car", {"brakeHealth": 80}, "on")
        assert out.model_extra == {"selectedCity": "Pune", "brakeHealth": 80}

    def test_previous_condition_carried(self, healthy_health):
        condition = ConditionResult(overall=ConditionStatus.WARNING)
        existing = healthy_health.model_copy(update={"condition": condition})
        assert normalize(existing, "car", {}, "on").condition == condition
