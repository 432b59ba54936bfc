"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
    RUN_MIGRATIONS = os.environ.get("RUN_MIGRATIONS", "false") == "true"
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./movr.db",
    )
    RUN_MIGRATIONS = os.environ.get("RUN_MIGRATIONS", "true") == "true"

# Recognized vehicle tags; comma-separated in the environment.
VEHICLE_TYPES: frozenset[str] = frozenset(
    t.strip()
    for t in os.environ.get("VEHICLE_TYPES", "scooter,bike,skateboard").split(",")
    if t.strip()
)

# Default deadline for ride transactions, seconds.
RIDE_TIMEOUT_S = float(os.environ.get("RIDE_TIMEOUT_S", "10"))
