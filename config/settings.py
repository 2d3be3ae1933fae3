"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database (SQLite path, ":memory:" for tests)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "vehicle_health.db")

    # Demo data
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    SEED_DEMO_FLEET: bool = os.getenv("SEED_DEMO_FLEET", "true").lower() == "true"
    DEMO_USER_ID: str = os.getenv("DEMO_USER_ID", "demo-user")

    # Telemetry history
    LOGS_PAGE_SIZE: int = int(os.getenv("LOGS_PAGE_SIZE", "50"))

    # Live updates (max queued events per subscriber)
    BROADCAST_QUEUE_SIZE: int = int(os.getenv("BROADCAST_QUEUE_SIZE", "100"))


settings = Settings()
