"""
KinderAdminPro API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- CORS middleware
- Error response shape
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from kinderadmin.api import api_router
from kinderadmin.core import redis as redis_module
from kinderadmin.core.config import settings
from kinderadmin.core.database import async_session_maker, close_db, init_db
from kinderadmin.core.redis import close_redis, init_redis

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown of the Redis and database connections.
    The database is skipped entirely with the in-memory storage backend.
    """
    logger.info(f"Starting KinderAdminPro API in {settings.python_env} mode...")

    await init_redis()

    if settings.storage_backend == "database":
        try:
            await init_db()
            logger.info("Database connected")
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            if settings.is_production:
                raise
    else:
        logger.info("Using in-memory storage backend")

    yield

    logger.info("Shutting down KinderAdminPro API...")
    await close_redis()
    if settings.storage_backend == "database":
        await close_db()
    logger.info("Cleanup complete")


app = FastAPI(
    title="KinderAdminPro API",
    description="Kindergarten enrollment and guardian notifications",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Error Responses
# ============================================
# Every error body is {"failed": true, "error": CODE, "message": ...}


def _field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        field_errors.setdefault(field, []).append(message)
    return field_errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    field_errors = _field_errors(exc)
    logger.warning(f"Request validation failed: {sorted(field_errors)}")
    return JSONResponse(
        status_code=422,
        content={
            "failed": True,
            "error": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "field_errors": field_errors,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = {"failed": True, **exc.detail}
    else:
        content = {"failed": True, "error": "HTTP_ERROR", "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "failed": True,
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )


# ============================================
# Health
# ============================================


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to KinderAdminPro API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check: reports the storage backend and Redis state."""
    checks = {"status": "ready", "storage": settings.storage_backend}

    if settings.storage_backend == "database":
        try:
            async with async_session_maker() as session:
                await session.execute(text("SELECT 1"))
            checks["database"] = "connected"
        except Exception as e:
            logger.error(f"Readiness database check failed: {e}")
            checks["status"] = "degraded"
            checks["database"] = "error"

    checks["redis"] = "connected" if redis_module.redis_client else "memory fallback"
    return checks
