"""
app.py
──────
Vehicle Health Monitor — Application Entry Point.

Startup sequence:
  1. Configure logging
  2. Initialize SQLite DB and seed the demo fleet with emulator history
  3. Create the Flask app and register the API blueprints
  4. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

from flask import Flask

from config.settings import settings
from src.api.common import register_error_handlers
from src.api.telemetry import bp_telemetry
from src.api.vehicles import bp_vehicles
from src.data.store import initialize_db

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    server = Flask(__name__)
    server.json.sort_keys = False
    server.register_blueprint(bp_telemetry)
    server.register_blueprint(bp_vehicles)
    register_error_handlers(server)
    return server


# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ── 2. Seed database on startup ───────────────────────────────────────────────
logger.info("Initializing database...")
initialize_db()
logger.info("Database ready.")

# ── 3. Flask app ──────────────────────────────────────────────────────────────
server = create_app()  # gunicorn entry point: app:server

# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    server.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
