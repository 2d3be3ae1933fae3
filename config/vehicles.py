"""
config/vehicles.py
──────────────────
Vehicle-type profiles, demo telemetry presets, and emulator reference data.

Each vehicle type reports its own sensor fields:
  car     — carEngineTempC, carFuelLevelPercent, carEngineHealth, carRangeKm
  bike    — bikeEngineTempC, bikeFuelLevelPercent, bikeEngineHealth, bikeChainHealth
  scooter — scooterEngineTempC, scooterFuelLevelPercent, scooterEngineHealth,
            scooterBatteryHealth, scooterStateOfChargePercent, scooterRangeKm

Common to all: batteryHealth, tyreHealth, brakeHealth, odometerKm.
"""
from dataclasses import dataclass
from enum import Enum


class VehicleType(str, Enum):
    CAR = "car"
    BIKE = "bike"
    SCOOTER = "scooter"


class PresetType(str, Enum):
    MANUAL = "manual"
    BEST = "best"
    AVERAGE = "average"
    BAD = "bad"


@dataclass(frozen=True)
class VehicleProfile:
    """Type-specific telemetry field names used when normalizing a sample."""
    vehicle_type: VehicleType
    engine_temp_field: str
    default_engine_temp_c: float | None  # None → engine temperature may stay absent
    fuel_field: str
    engine_health_field: str


VEHICLE_PROFILES: dict[str, VehicleProfile] = {
    VehicleType.CAR: VehicleProfile(
        vehicle_type=VehicleType.CAR,
        engine_temp_field="carEngineTempC",
        default_engine_temp_c=None,
        fuel_field="carFuelLevelPercent",
        engine_health_field="carEngineHealth",
    ),
    VehicleType.BIKE: VehicleProfile(
        vehicle_type=VehicleType.BIKE,
        engine_temp_field="bikeEngineTempC",
        default_engine_temp_c=70.0,
        fuel_field="bikeFuelLevelPercent",
        engine_health_field="bikeEngineHealth",
    ),
    VehicleType.SCOOTER: VehicleProfile(
        vehicle_type=VehicleType.SCOOTER,
        engine_temp_field="scooterEngineTempC",
        default_engine_temp_c=70.0,
        fuel_field="scooterFuelLevelPercent",
        engine_health_field="scooterEngineHealth",
    ),
}

# Fuel level is taken from the first field present, regardless of vehicle type
FUEL_LEVEL_FIELDS: tuple[str, ...] = (
    "carFuelLevelPercent",
    "bikeFuelLevelPercent",
    "scooterFuelLevelPercent",
)

# ── Tyre health → tire pressure mapping ───────────────────────────────────────
TIRE_PRESSURE_BASE_PSI = 30.0
TIRE_PRESSURE_SPAN_PSI = 5.0
DEFAULT_TIRE_PRESSURE_PSI = 35.0

# ── Demo presets (mock vehicle emulator) ──────────────────────────────────────
PRESETS: dict[str, dict[str, dict[str, float]]] = {
    VehicleType.CAR: {
        PresetType.BEST: {
            "batteryHealth": 95,
            "tyreHealth": 90,
            "brakeHealth": 92,
            "odometerKm": 15_000,
            "carEngineHealth": 95,
            "carFuelLevelPercent": 85,
            "carRangeKm": 450,
            "carEngineTempC": 75,
        },
        PresetType.AVERAGE: {
            "batteryHealth": 55,
            "tyreHealth": 50,
            "brakeHealth": 55,
            "odometerKm": 75_000,
            "carEngineHealth": 60,
            "carFuelLevelPercent": 35,
            "carRangeKm": 180,
            "carEngineTempC": 95,
        },
        PresetType.BAD: {
            "batteryHealth": 25,
            "tyreHealth": 20,
            "brakeHealth": 30,
            "odometerKm": 150_000,
            "carEngineHealth": 25,
            "carFuelLevelPercent": 10,
            "carRangeKm": 50,
            "carEngineTempC": 115,
        },
    },
    VehicleType.BIKE: {
        PresetType.BEST: {
            "batteryHealth": 95,
            "tyreHealth": 90,
            "brakeHealth": 92,
            "odometerKm": 8_000,
            "bikeEngineHealth": 95,
            "bikeFuelLevelPercent": 85,
            "bikeChainHealth": 90,
            "bikeEngineTempC": 70,
        },
        PresetType.AVERAGE: {
            "batteryHealth": 55,
            "tyreHealth": 50,
            "brakeHealth": 55,
            "odometerKm": 40_000,
            "bikeEngineHealth": 55,
            "bikeFuelLevelPercent": 35,
            "bikeChainHealth": 50,
            "bikeEngineTempC": 90,
        },
        PresetType.BAD: {
            "batteryHealth": 25,
            "tyreHealth": 20,
            "brakeHealth": 30,
            "odometerKm": 80_000,
            "bikeEngineHealth": 25,
            "bikeFuelLevelPercent": 10,
            "bikeChainHealth": 20,
            "bikeEngineTempC": 110,
        },
    },
    VehicleType.SCOOTER: {
        PresetType.BEST: {
            "batteryHealth": 95,
            "tyreHealth": 90,
            "brakeHealth": 92,
            "odometerKm": 5_000,
            "scooterBatteryHealth": 95,
            "scooterStateOfChargePercent": 90,
            "scooterRangeKm": 80,
            "scooterEngineHealth": 95,
            "scooterFuelLevelPercent": 85,
            "scooterEngineTempC": 70,
        },
        PresetType.AVERAGE: {
            "batteryHealth": 55,
            "tyreHealth": 50,
            "brakeHealth": 55,
            "odometerKm": 25_000,
            "scooterBatteryHealth": 55,
            "scooterStateOfChargePercent": 40,
            "scooterRangeKm": 35,
            "scooterEngineHealth": 55,
            "scooterFuelLevelPercent": 35,
            "scooterEngineTempC": 90,
        },
        PresetType.BAD: {
            "batteryHealth": 25,
            "tyreHealth": 20,
            "brakeHealth": 30,
            "odometerKm": 60_000,
            "scooterBatteryHealth": 25,
            "scooterStateOfChargePercent": 15,
            "scooterRangeKm": 15,
            "scooterEngineHealth": 25,
            "scooterFuelLevelPercent": 10,
            "scooterEngineTempC": 110,
        },
    },
}

# ── Emulator cities ───────────────────────────────────────────────────────────
CITIES: dict[str, tuple[float, float]] = {
    "Mumbai": (19.076, 72.8777),
    "Delhi": (28.6139, 77.209),
    "Bangalore": (12.9716, 77.5946),
    "Hyderabad": (17.385, 78.4867),
    "Chennai": (13.0827, 80.2707),
    "Kolkata": (22.5726, 88.3639),
    "Pune": (18.5204, 73.8567),
    "Ahmedabad": (23.0225, 72.5714),
    "Jaipur": (26.9124, 75.7873),
    "Lucknow": (26.8467, 80.9462),
}

# Locations used for randomly seeded demo health
DEMO_LOCATIONS = ["Mumbai", "Delhi", "Bangalore", "Chennai", "Kolkata", "Pune", "Hyderabad"]

# ── Model catalog ─────────────────────────────────────────────────────────────
VEHICLE_MODELS: dict[str, list[str]] = {
    VehicleType.CAR: [
        "Maruti Brezza",
        "Hyundai Creta",
        "Tata Punch",
        "Tata Nexon",
        "Mahindra Scorpio-N",
        "Kia Seltos",
        "Maruti Swift",
        "Hyundai Venue",
        "Mahindra Thar",
        "Hyundai i20",
    ],
    VehicleType.BIKE: [
        "Royal Enfield Classic 350",
        "Royal Enfield Hunter 350",
        "Bajaj Pulsar N160",
        "TVS Apache RTR 160 4V",
        "Hero Splendor Plus",
        "Yamaha MT-15",
        "Yamaha R15 V4",
        "KTM Duke 200",
        "Bajaj Pulsar 220F",
        "Honda SP 125",
    ],
    VehicleType.SCOOTER: [
        "Honda Activa 6G",
        "TVS Jupiter",
        "Honda Dio",
        "TVS NTorq 125",
        "Ola S1 Pro",
        "Ather 450X",
        "Suzuki Access 125",
        "Suzuki Burgman Street",
        "Hero Maestro Edge",
        "Bounce Infinity E1",
    ],
}

VEHICLE_TYPES = [t.value for t in VehicleType]
