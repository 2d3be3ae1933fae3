"""
src/data/simulator.py
─────────────────────
Demo data generator for the vehicle fleet.

Generates:
  - Randomized health snapshots for newly registered vehicles
  - 8-character unique device codes
  - Telemetry samples from the emulator presets (best / average / bad)
  - A small demo fleet (one vehicle per type) with a replayable sample history

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Emulator payloads mirror what the mock-vehicle device posts
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import numpy as np

from config.settings import settings
from config.vehicles import (
    CITIES,
    DEMO_LOCATIONS,
    PRESETS,
    VEHICLE_MODELS,
    PresetType,
    VehicleType,
)
from src.data.models import VehicleHealth, VehicleRegistration

CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
CODE_LENGTH = 8

_VIN_ALPHABET = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"  # no I, O, Q
_STATE_CODES = ["MH", "DL", "KA", "TN", "WB", "TS", "GJ", "RJ", "UP"]


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def generate_unique_code(rng: np.random.Generator | None = None) -> str:
    """8 random characters from A-Z0-9."""
    rng = _rng(rng)
    idx = rng.integers(0, len(CODE_ALPHABET), size=CODE_LENGTH)
    return "".join(CODE_ALPHABET[i] for i in idx)


def generate_random_health(rng: np.random.Generator | None = None) -> VehicleHealth:
    """Randomized demo snapshot assigned at registration and code regeneration."""
    rng = _rng(rng)
    days_ago = float(rng.uniform(0, 180))
    last_service = datetime.now(tz=UTC) - timedelta(days=days_ago)

    return VehicleHealth(
        engine_temperature=int(rng.integers(20, 150)),
        battery_level=int(rng.integers(0, 100)),
        oil_pressure=int(rng.integers(10, 100)),
        tire_pressure=int(rng.integers(20, 45)),
        fuel_level=int(rng.integers(0, 100)),
        mileage=int(rng.integers(0, 100_000)),
        last_service_date=last_service.date().isoformat(),
        is_active=bool(rng.random() > 0.3),
        location=str(rng.choice(DEMO_LOCATIONS)),
    )


def preset_sample(vehicle_type: VehicleType | str, preset: PresetType | str) -> dict[str, float]:
    """
    Telemetry fields for an emulator preset.

    Raises:
        ValueError: for the "manual" preset, which has no fixed values
    """
    preset = PresetType(preset)
    if preset == PresetType.MANUAL:
        raise ValueError("manual preset has no fixed values")
    return dict(PRESETS[VehicleType(vehicle_type)][preset])


def build_emulator_payload(
    code: str,
    vehicle_type: VehicleType | str,
    preset: PresetType | str = PresetType.BEST,
    status: str = "on",
    city: str | None = None,
) -> dict[str, Any]:
    """Full ingestion body as posted by the mock-vehicle emulator."""
    payload: dict[str, Any] = {"code": code, "status": status}
    if city is not None:
        lat, lng = CITIES[city]
        payload.update(lat=lat, lng=lng, label=city, selectedCity=city)
    payload["preset"] = PresetType(preset).value
    payload.update(preset_sample(vehicle_type, preset))
    return payload


def _random_vin(rng: np.random.Generator) -> str:
    idx = rng.integers(0, len(_VIN_ALPHABET), size=17)
    return "".join(_VIN_ALPHABET[i] for i in idx)


def _random_registration(rng: np.random.Generator) -> str:
    state = str(rng.choice(_STATE_CODES))
    district = int(rng.integers(1, 100))
    series = "".join(chr(ord("A") + int(i)) for i in rng.integers(0, 26, size=2))
    number = int(rng.integers(1, 10_000))
    return f"{state}{district:02d}{series}{number:04d}"


def generate_demo_fleet(seed: int = settings.SIMULATION_SEED) -> list[VehicleRegistration]:
    """One registration per vehicle type with a model from the catalog."""
    rng = np.random.default_rng(seed)
    fleet: list[VehicleRegistration] = []
    for vehicle_type in VehicleType:
        fleet.append(VehicleRegistration(
            type=vehicle_type,
            model=str(rng.choice(VEHICLE_MODELS[vehicle_type])),
            vin=_random_vin(rng),
            registration_number=_random_registration(rng),
        ))
    return fleet


def generate_sample_history(
    code: str,
    vehicle_type: VehicleType | str,
    samples: int = 6,
    seed: int = settings.SIMULATION_SEED,
) -> list[dict[str, Any]]:
    """
    Emulator payloads that drift from the best preset toward the bad one.

    Each sample is jittered with small noise and reports a random city.
    """
    rng = np.random.default_rng(seed)
    best = preset_sample(vehicle_type, PresetType.BEST)
    bad = preset_sample(vehicle_type, PresetType.BAD)
    cities = list(CITIES)

    history: list[dict[str, Any]] = []
    for i in range(samples):
        t = i / max(samples - 1, 1)
        city = cities[int(rng.integers(0, len(cities)))]
        payload = build_emulator_payload(code, vehicle_type, PresetType.BEST, status="on", city=city)
        payload["preset"] = PresetType.MANUAL.value
        for key in best:
            value = best[key] + (bad[key] - best[key]) * t + float(rng.normal(0, 2.0))
            payload[key] = round(max(value, 0.0), 1)
        history.append(payload)
    return history
