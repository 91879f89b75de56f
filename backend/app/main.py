"""
FamilyFolio FastAPI application.
Main entry point for the backend API.
"""
import sqlite3
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.v1.router import router as api_v1_router
from backend.app.config import get_settings, set_test_mode, is_test_mode
from backend.app.logging_config import configure_logging, get_logger
from backend.app.services.asset_errors import AssetRegistrationError
from backend.app.services.asset_validation import invalid_input_from_errors

# Check for --test flag in command line arguments
# This must be done before any imports that might use settings
if "--test" in sys.argv:
    set_test_mode(True)
    print("[FamilyFolio] 🧪 Test mode enabled (--test flag detected)")
    sys.argv.remove("--test")  # Remove flag so uvicorn doesn't complain

# Get settings after test mode is set
settings = get_settings()

configure_logging(settings.LOG_LEVEL, enable_file_logging=settings.LOG_TO_FILE, log_format=settings.LOG_FORMAT)
logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _count_tables(db_path: Path) -> int:
    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute("SELECT count(*) FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'")
        return cursor.fetchone()[0]
    finally:
        conn.close()


def ensure_database_exists():
    """
    Ensure database exists and is migrated.
    If database file doesn't exist, is empty or has no tables, run migrations automatically.

    Used by the backend server on startup (via lifespan).
    """
    # Get settings at call time to respect test mode
    settings = get_settings()

    db_url = settings.DATABASE_URL
    if not db_url.startswith("sqlite:///"):
        logger.info("Non-file database URL, skipping migration check")
        return

    db_path = Path(db_url.replace("sqlite:///", ""))
    if not db_path.is_absolute():
        db_path = PROJECT_ROOT / db_path

    needs_migration = False
    if not db_path.exists():
        logger.warning("Database file not found, running migrations", db_path=str(db_path))
        needs_migration = True
    elif db_path.stat().st_size == 0:
        logger.warning("Database file is empty (0 bytes), running migrations", db_path=str(db_path))
        needs_migration = True
    else:
        try:
            table_count = _count_tables(db_path)
        except sqlite3.DatabaseError as e:
            logger.warning("Database appears corrupted, running migrations", db_path=str(db_path), error=str(e))
            needs_migration = True
        else:
            if table_count == 0:
                logger.warning("Database has no tables, running migrations", db_path=str(db_path))
                needs_migration = True
            else:
                logger.info("Database initialized", db_path=str(db_path), table_count=table_count)

    if not needs_migration:
        return

    db_path.parent.mkdir(parents=True, exist_ok=True)
    alembic_ini = PROJECT_ROOT / "backend" / "alembic.ini"

    logger.info("Running Alembic migrations...")
    result = subprocess.run(
        ["alembic", "-c", str(alembic_ini), "upgrade", "head"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        )

    if result.returncode != 0:
        logger.error("Failed to create database", stderr=result.stderr)
        sys.exit(1)
    logger.info("Database created and migrated successfully")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan context manager.
    Handles startup and shutdown events.
    """
    logger.info(
        "Starting FamilyFolio",
        version=settings.VERSION,
        database_url=settings.DATABASE_URL.split("///")[-1],  # Hide full path in logs
        test_mode=is_test_mode(),
        )

    ensure_database_exists()

    yield
    logger.info("Shutting down FamilyFolio")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    lifespan=lifespan,
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    )


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(AssetRegistrationError)
async def asset_registration_error_handler(request: Request, exc: AssetRegistrationError):
    """Render every taxonomy error as {"kind", "message", "details"?}."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Framework-level validation failures (bad JSON, query params) are InvalidInput too."""
    error = invalid_input_from_errors(list(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Mount API v1 router
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """
    Root endpoint.
    Provides basic API information.
    """
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
        }
