"""
tests/test_simulator.py
────────────────────────
Tests for the demo data generator.
"""

import numpy as np
import pytest

from config.vehicles import CITIES, DEMO_LOCATIONS, PresetType, VehicleType
from src.data.simulator import (
    CODE_ALPHABET,
    CODE_LENGTH,
    build_emulator_payload,
    generate_demo_fleet,
    generate_random_health,
    generate_sample_history,
    generate_unique_code,
    preset_sample,
)


class TestUniqueCode:
    def test_length_and_alphabet(self, rng):
        for _ in range(20):
            code = generate_unique_code(rng)
            assert len(code) == CODE_LENGTH
            assert set(code) <= set(CODE_ALPHABET)

    def test_reproducible_with_seed(self):
        a = generate_unique_code(np.random.default_rng(7))
        b = generate_unique_code(np.random.default_rng(7))
        assert a == b


class TestRandomHealth:
    def test_values_in_demo_ranges(self, rng):
        for _ in range(20):
            health = generate_random_health(rng)
            assert 20 <= health.engine_temperature < 150
            assert 0 <= health.battery_level < 100
            assert 10 <= health.oil_pressure < 100
            assert 20 <= health.tire_pressure < 45
            assert 0 <= health.fuel_level < 100
            assert 0 <= health.mileage < 100_000
            assert health.location in DEMO_LOCATIONS
            assert health.last_service_date is not None

    def test_no_condition_until_evaluated(self, rng):
        assert generate_random_health(rng).condition is None


class TestPresets:
    def test_car_best(self):
        sample = preset_sample("car", "best")
        assert sample["carEngineTempC"] == 75
        assert sample["tyreHealth"] == 90

    def test_scooter_bad(self):
        sample = preset_sample(VehicleType.SCOOTER, PresetType.BAD)
        assert sample["scooterStateOfChargePercent"] == 15
        assert sample["scooterEngineTempC"] == 110

    def test_manual_has_no_values(self):
        with pytest.raises(ValueError):
            preset_sample("bike", "manual")

    def test_preset_sample_is_a_copy(self):
        sample = preset_sample("car", "best")
        sample["tyreHealth"] = 0
        assert preset_sample("car", "best")["tyreHealth"] == 90


class TestEmulatorPayload:
    def test_with_city(self):
        payload = build_emulator_payload("ABCD1234", "bike", "average", city="Pune")
        assert payload["code"] == "ABCD1234"
        assert payload["status"] == "on"
        assert (payload["lat"], payload["lng"]) == CITIES["Pune"]
        assert payload["label"] == "Pune"
        assert payload["preset"] == "average"
        assert payload["bikeChainHealth"] == 50

    def test_without_city(self):
        payload = build_emulator_payload("ABCD1234", "car", status="off")
        assert "lat" not in payload
        assert payload["status"] == "off"


class TestDemoFleet:
    def test_one_vehicle_per_type(self):
        fleet = generate_demo_fleet(seed=42)
        assert [r.type for r in fleet] == list(VehicleType)

    def test_reproducible(self):
        assert generate_demo_fleet(seed=1) == generate_demo_fleet(seed=1)

    def test_history_length_and_shape(self):
        history = generate_sample_history("ABCD1234", "car", samples=6, seed=42)
        assert len(history) == 6
        for payload in history:
            assert payload["code"] == "ABCD1234"
            assert payload["label"] in CITIES
            assert payload["preset"] == "manual"
            assert all(payload[k] >= 0 for k in preset_sample("car", "best"))

    def test_history_drifts_toward_bad(self):
        history = generate_sample_history("ABCD1234", "bike", samples=6, seed=42)
        assert history[0]["bikeEngineHealth"] > history[-1]["bikeEngineHealth"]
        assert history[0]["bikeEngineTempC"] < history[-1]["bikeEngineTempC"]
