"""
FastAPI application entry point.

Uses structured logging from core.logging. The cache backend is built once
per application and kept on `app.state.cache`.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.cache import CacheBackend, create_cache
from core.config import get_settings
from core.db import db
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import cache as cache_router
from .routers import games as games_router
from .routers import lists as lists_router
from .routers import tier_lists as tier_lists_router

settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else "INFO")
logger = get_logger("api")


def create_app(cache: CacheBackend | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        cache: Backend to use instead of the one selected by CACHE_BACKEND.
    """
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.cache = cache if cache is not None else create_cache(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info("app_startup", app_name=settings.app_name, environment=settings.environment)

        db.initialize(settings.database_url)
        db.create_all_tables()
        logger.info("database_initialized")

        app.state.cache.start_sweeper(settings.cache_sweep_interval_seconds)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")
        app.state.cache.stop_sweeper()

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness probe.

        Returns 503 when the database is unreachable. Cache status is
        informational only.
        """
        checks = {"database": False, "cache": app.state.cache.health_check()}

        try:
            checks["database"] = db.health_check()
        except SQLAlchemyError as e:
            logger.warning("database_health_check_failed", error=str(e))

        if not checks["database"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    app.include_router(tier_lists_router.router, prefix=api_prefix)
    app.include_router(games_router.router, prefix=api_prefix)
    app.include_router(lists_router.router, prefix=api_prefix)
    app.include_router(cache_router.router, prefix=api_prefix)

    return app


app = create_app()
