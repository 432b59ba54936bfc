"""MovR rides: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from utils.config import LOG_LEVEL, RUN_MIGRATIONS

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("ride_core").setLevel(LOG_LEVEL)
from fastapi.middleware.cors import CORSMiddleware

from api.rides import router as rides_router
from api.routes import router
from api.users import router as users_router
from api.vehicles import router as vehicles_router
from ride_core.errors import InvalidArgument, RideError

LOG = logging.getLogger(__name__)

# Stable error code -> HTTP status
ERROR_STATUS: dict[str, int] = {
    "invalid_argument": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "timed_out": status.HTTP_504_GATEWAY_TIMEOUT,
    "unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

app = FastAPI(
    title="MovR Rides",
    description="Vehicle and ride lifecycle backend for the MovR ride-sharing application",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8080", "http://127.0.0.1:8080"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")
app.include_router(vehicles_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(rides_router, prefix="/api")


@app.exception_handler(RideError)
async def ride_error_handler(request: Request, exc: RideError) -> JSONResponse:
    """Map domain errors to their HTTP status with a stable error code."""
    if exc.code == "internal":
        LOG.error("Internal error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=ERROR_STATUS.get(exc.code, 500), content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report schema validation failures as invalid_argument naming the first bad field."""
    errors = exc.errors()
    field = "body"
    message = "Invalid request"
    if errors:
        loc = [str(p) for p in errors[0].get("loc", ()) if p not in ("body", "query", "path")]
        field = loc[-1] if loc else field
        message = f"{field}: {errors[0].get('msg', 'invalid')}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=InvalidArgument(field, message).to_dict(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected failures are logged with traceback and reported as internal."""
    LOG.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal", "message": "Internal error"},
    )


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations."""
    if not RUN_MIGRATIONS:
        return
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    LOG.info("Database migrations applied")


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "movr-rides", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    from utils.config import PORT

    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
