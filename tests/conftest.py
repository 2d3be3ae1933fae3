"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Vehicle Health Monitor test suite.
"""
import os
import pytest
import numpy as np
from datetime import datetime, timezone

# Use in-memory SQLite for tests
os.environ.setdefault("DATABASE_URL", ":memory:")
os.environ.setdefault("SEED_DEMO_FLEET", "false")
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("LOGS_PAGE_SIZE", "5")

USER_ID = "user-1"


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def healthy_health():
    from src.data.models import VehicleHealth
    return VehicleHealth(
        engine_temperature=80.0,
        battery_level=75.0,
        tire_pressure=32.0,
        fuel_level=60.0,
        mileage=12_000.0,
        is_active=True,
        location="Pune",
    )


@pytest.fixture
def legacy_health():
    """A freshly seeded record: carries the legacy oil pressure / service date."""
    from src.data.models import VehicleHealth
    return VehicleHealth(
        engine_temperature=85.0,
        battery_level=64.0,
        oil_pressure=40.0,
        tire_pressure=31.0,
        fuel_level=55.0,
        mileage=42_000.0,
        last_service_date="2024-03-10",
        is_active=True,
        location="Mumbai",
        telemetry={"batteryHealth": 64},
    )


@pytest.fixture
def db():
    """Empty database for each test."""
    from src.data import store
    store.initialize_db(force_reseed=True, seed_demo=False)
    yield store
    store.initialize_db(force_reseed=True, seed_demo=False)


@pytest.fixture
def car_registration():
    from src.data.models import VehicleRegistration
    return VehicleRegistration(
        type="car",
        model="Tata Nexon",
        vin="MA3EWDE1S00123456",
        registration_number="MH12AB1234",
    )


@pytest.fixture
def bike_registration():
    from src.data.models import VehicleRegistration
    return VehicleRegistration(
        type="bike",
        model="KTM Duke 200",
        vin="MD2A11CZ5KCL01234",
        registration_number="KA05MX9876",
    )


@pytest.fixture
def car(db, car_registration, rng):
    return db.create_vehicle(USER_ID, car_registration, rng=rng)


@pytest.fixture
def bike(db, bike_registration, rng):
    return db.create_vehicle(USER_ID, bike_registration, rng=rng)


@pytest.fixture
def client(db):
    from app import create_app
    server = create_app()
    server.config["TESTING"] = True
    return server.test_client()


@pytest.fixture
def auth_headers():
    return {"X-User-Id": USER_ID}
