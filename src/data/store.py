"""
src/data/store.py
─────────────────
SQLite data store abstraction.

Provides:
  - initialize_db()            : Create tables + seed the demo fleet on first run
  - create_vehicle()           : Register a vehicle with a unique code and demo health
  - get_vehicle() / get_vehicle_by_code() / get_user_vehicles()
  - delete_vehicle()           : Remove a vehicle and its telemetry history
  - regenerate_vehicle_code()  : Issue a new code and reset demo health
  - apply_telemetry()          : Atomic read-merge-write of a telemetry update + history entry
  - get_logs() / count_logs()  : Paginated telemetry history

Thread safety: uses check_same_thread=False + a module-level lock. Telemetry
updates for the same vehicle are serialized by holding the lock across the
read, merge and write.
"""
from __future__ import annotations

import json
import logging
import sqlite3
import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import numpy as np
import pandas as pd

from config.settings import settings
from src.data.models import Vehicle, VehicleHealth, VehicleRegistration

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_DB: sqlite3.Connection | None = None

MAX_CODE_ATTEMPTS = 10

# Whitelisted sort columns for the history view
LOG_SORT_COLUMNS: dict[str, str] = {
    "created_at": "tl.created_at",
    "model": "v.model",
    "label": "tl.label",
    "status": "tl.status",
}


# ── Connection ────────────────────────────────────────────────────────────────

def _get_conn() -> sqlite3.Connection:
    global _DB
    if _DB is None:
        _DB = sqlite3.connect(settings.DATABASE_URL, check_same_thread=False)
        _DB.row_factory = sqlite3.Row
    return _DB


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_VEHICLES = """
CREATE TABLE IF NOT EXISTS vehicles (
    id                  TEXT PRIMARY KEY,
    user_id             TEXT NOT NULL,
    type                TEXT NOT NULL,
    model               TEXT NOT NULL,
    vin                 TEXT NOT NULL,
    registration_number TEXT NOT NULL,
    unique_code         TEXT NOT NULL UNIQUE,
    status              TEXT NOT NULL DEFAULT 'off',
    lat                 REAL,
    lng                 REAL,
    label               TEXT,
    health              TEXT NOT NULL,
    created_at          TEXT NOT NULL,
    updated_at          TEXT NOT NULL,
    last_telemetry_at   TEXT
);
"""

_CREATE_LOGS = """
CREATE TABLE IF NOT EXISTS telemetry_logs (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    vehicle_id   TEXT NOT NULL,
    status       TEXT NOT NULL,
    lat          REAL,
    lng          REAL,
    label        TEXT,
    health_data  TEXT NOT NULL,
    created_at   TEXT NOT NULL
);
"""

_CREATE_IDX = """
CREATE INDEX IF NOT EXISTS idx_vehicles_user   ON vehicles       (user_id, created_at);
CREATE INDEX IF NOT EXISTS idx_logs_vehicle_ts ON telemetry_logs (vehicle_id, created_at);
"""


def _create_tables(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(_CREATE_VEHICLES + _CREATE_LOGS + _CREATE_IDX)


def _dump_health(health: VehicleHealth) -> str:
    return health.model_dump_json(by_alias=True, exclude_none=True)


def _row_to_vehicle(row: sqlite3.Row) -> Vehicle:
    return Vehicle(
        id=row["id"],
        user_id=row["user_id"],
        type=row["type"],
        model=row["model"],
        vin=row["vin"],
        registration_number=row["registration_number"],
        unique_code=row["unique_code"],
        created_at=row["created_at"],
        status=row["status"],
        lat=row["lat"],
        lng=row["lng"],
        label=row["label"],
        last_telemetry_at=row["last_telemetry_at"],
        health=VehicleHealth.model_validate_json(row["health"]),
    )


def _code_in_use(conn: sqlite3.Connection, code: str) -> bool:
    return conn.execute("SELECT 1 FROM vehicles WHERE unique_code = ?", (code,)).fetchone() is not None


def _new_code(conn: sqlite3.Connection, rng: np.random.Generator | None) -> str:
    from src.data.simulator import generate_unique_code

    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_unique_code(rng)
        if not _code_in_use(conn, code):
            return code
    raise RuntimeError("Could not allocate a unique vehicle code")


# ── Public API ────────────────────────────────────────────────────────────────

def initialize_db(force_reseed: bool = False, seed_demo: bool | None = None) -> None:
    """
    Create tables and populate the demo fleet if the DB is empty.
    Safe to call multiple times (idempotent).
    """
    # Import here to avoid circular deps
    from src.data.simulator import generate_demo_fleet, generate_sample_history
    from src.services.ingestion import ingest_telemetry

    if seed_demo is None:
        seed_demo = settings.SEED_DEMO_FLEET

    conn = _get_conn()
    _create_tables(conn)

    with _lock:
        count = conn.execute("SELECT COUNT(*) FROM vehicles").fetchone()[0]
        if count > 0 and not force_reseed:
            return  # Already seeded

        with conn:
            conn.execute("DELETE FROM telemetry_logs")
            conn.execute("DELETE FROM vehicles")

        if not seed_demo:
            return

        rng = np.random.default_rng(settings.SIMULATION_SEED)
        for registration in generate_demo_fleet():
            vehicle = create_vehicle(settings.DEMO_USER_ID, registration, rng=rng)
            for payload in generate_sample_history(vehicle.unique_code, vehicle.type):
                ingest_telemetry(payload)
        logger.info("Seeded demo fleet for user %s", settings.DEMO_USER_ID)


def create_vehicle(
    user_id: str,
    registration: VehicleRegistration,
    rng: np.random.Generator | None = None,
) -> Vehicle:
    """Insert a vehicle with a fresh unique code and randomized demo health."""
    from src.data.simulator import generate_random_health

    conn = _get_conn()
    vehicle_id = str(uuid.uuid4())
    now = _now()
    with _lock, conn:
        code = _new_code(conn, rng)
        health = generate_random_health(rng)
        conn.execute(
            """INSERT INTO vehicles
               (id, user_id, type, model, vin, registration_number,
                unique_code, health, created_at, updated_at)
               VALUES (?,?,?,?,?,?,?,?,?,?)""",
            (
                vehicle_id,
                user_id,
                registration.type.value,
                registration.model,
                registration.vin,
                registration.registration_number,
                code,
                _dump_health(health),
                now,
                now,
            ),
        )
    logger.info("Registered %s %s with code %s", registration.type.value, registration.model, code)
    return get_vehicle(vehicle_id)  # type: ignore[return-value]


def get_vehicle(vehicle_id: str) -> Vehicle | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute("SELECT * FROM vehicles WHERE id = ?", (vehicle_id,)).fetchone()
    return _row_to_vehicle(row) if row else None


def get_vehicle_by_code(code: str) -> Vehicle | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute("SELECT * FROM vehicles WHERE unique_code = ?", (code,)).fetchone()
    return _row_to_vehicle(row) if row else None


def get_user_vehicles(user_id: str) -> list[Vehicle]:
    """All vehicles owned by a user, newest first."""
    conn = _get_conn()
    with _lock:
        rows = conn.execute(
            "SELECT * FROM vehicles WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        ).fetchall()
    return [_row_to_vehicle(r) for r in rows]


def delete_vehicle(vehicle_id: str, user_id: str) -> bool:
    """Delete a user's vehicle together with its telemetry history."""
    conn = _get_conn()
    with _lock, conn:
        deleted = conn.execute(
            "DELETE FROM vehicles WHERE id = ? AND user_id = ?",
            (vehicle_id, user_id),
        ).rowcount
        if deleted:
            conn.execute("DELETE FROM telemetry_logs WHERE vehicle_id = ?", (vehicle_id,))
    return deleted > 0


def regenerate_vehicle_code(
    vehicle_id: str,
    user_id: str,
    rng: np.random.Generator | None = None,
) -> str | None:
    """Assign a new unique code and reset health; None if the vehicle is not the user's."""
    from src.data.simulator import generate_random_health

    conn = _get_conn()
    with _lock, conn:
        code = _new_code(conn, rng)
        updated = conn.execute(
            """UPDATE vehicles
               SET unique_code = ?, health = ?, updated_at = ?
               WHERE id = ? AND user_id = ?""",
            (code, _dump_health(generate_random_health(rng)), _now(), vehicle_id, user_id),
        ).rowcount
    return code if updated else None


def apply_telemetry(
    code: str,
    update: Callable[[Vehicle], VehicleHealth],
    status: str,
    lat: float | None = None,
    lng: float | None = None,
    label: str | None = None,
) -> Vehicle | None:
    """
    Apply one telemetry update to the vehicle holding `code`.

    `update` receives the current vehicle and returns its new health record.
    The vehicle row and the history entry are written in one transaction.

    Returns:
        The updated Vehicle, or None if no vehicle has this code.
    """
    conn = _get_conn()
    now = _now()
    with _lock:
        with conn:
            row = conn.execute("SELECT * FROM vehicles WHERE unique_code = ?", (code,)).fetchone()
            if row is None:
                return None
            vehicle = _row_to_vehicle(row)
            health_json = _dump_health(update(vehicle))
            conn.execute(
                """UPDATE vehicles
                   SET status = ?, lat = ?, lng = ?, label = ?, health = ?,
                       last_telemetry_at = ?, updated_at = ?
                   WHERE id = ?""",
                (status, lat, lng, label, health_json, now, now, vehicle.id),
            )
            conn.execute(
                """INSERT INTO telemetry_logs
                   (vehicle_id, status, lat, lng, label, health_data, created_at)
                   VALUES (?,?,?,?,?,?,?)""",
                (vehicle.id, status, lat, lng, label, health_json, now),
            )
        return get_vehicle(vehicle.id)


def _logs_filter(user_id: str, vehicle_id: str | None) -> tuple[str, list]:
    where = ["v.user_id = ?"]
    params: list = [user_id]
    if vehicle_id:
        where.append("v.id = ?")
        params.append(vehicle_id)
    return " AND ".join(where), params


def get_logs(
    user_id: str,
    vehicle_id: str | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = settings.LOGS_PAGE_SIZE,
) -> pd.DataFrame:
    """
    Fetch one page of telemetry history for a user's vehicles.

    Unknown sort columns fall back to created_at; any order other than
    "asc" sorts descending.
    """
    column = LOG_SORT_COLUMNS.get(sort_by, LOG_SORT_COLUMNS["created_at"])
    order = "ASC" if sort_order.lower() == "asc" else "DESC"
    offset = (max(page, 1) - 1) * limit
    where, params = _logs_filter(user_id, vehicle_id)

    sql = f"""SELECT tl.id, tl.status, tl.lat, tl.lng, tl.label, tl.health_data,
                     tl.created_at, v.id AS vehicle_id, v.model, v.type,
                     v.unique_code, v.registration_number
              FROM telemetry_logs tl
              INNER JOIN vehicles v ON tl.vehicle_id = v.id
              WHERE {where}
              ORDER BY {column} {order}, tl.id {order}
              LIMIT ? OFFSET ?"""
    params.extend([limit, offset])

    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(sql, conn, params=params)
    if not df.empty:
        df["created_at"] = pd.to_datetime(df["created_at"], utc=True, format="ISO8601")
        df["health_data"] = df["health_data"].map(json.loads)
    return df


def count_logs(user_id: str, vehicle_id: str | None = None) -> int:
    where, params = _logs_filter(user_id, vehicle_id)
    conn = _get_conn()
    with _lock:
        return conn.execute(
            f"""SELECT COUNT(*) FROM telemetry_logs tl
                INNER JOIN vehicles v ON tl.vehicle_id = v.id
                WHERE {where}""",
            params,
        ).fetchone()[0]
