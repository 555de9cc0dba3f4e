import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import SQLAlchemyError

from src.portfolio.api.middlewares import setup_middlewares
from src.portfolio.api.v1.router import api_router
from src.portfolio.core.config import get_settings
from src.portfolio.core.db import Database, run_migrations_async
from src.portfolio.core.exceptions import AuthenticationError, setup_exception_handlers
from src.portfolio.core.logging import get_logger, setup_logging
from src.portfolio.core.rate_limit import limiter

logger = get_logger(__name__)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - open the store on startup, dispose it on shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    if settings.run_migrations_on_startup:
        logger.info("Running database migrations")
        await run_migrations_async()

    Path(settings.uploads_dir).mkdir(parents=True, exist_ok=True)

    database = Database.from_settings(settings)
    await database.connect()
    app.state.database = database

    yield

    logger.info("Closing connections...")
    await database.disconnect()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and profile management"},
    {"name": "projects", "description": "Portfolio projects"},
    {"name": "testimonials", "description": "Client testimonials and moderation"},
    {"name": "health", "description": "Liveness and database probe"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio content API: projects, testimonials and admin authentication",
        version="1.0.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.limiter = limiter
    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise AuthenticationError("Invalid or missing metrics API key")

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/api/health", tags=["health"])
    @limiter.exempt
    async def health(request: Request) -> JSONResponse:
        """Liveness plus a database round trip; 503 when the database is unreachable."""
        health_status: dict[str, Any] = {
            "success": True,
            "status": "OK",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(time.monotonic() - STARTED_AT, 3),
            "environment": settings.app_env,
            "database": "unknown",
        }

        database: Database | None = getattr(request.app.state, "database", None)
        try:
            if database is None:
                raise RuntimeError("Database is not connected")
            await database.ping()
            health_status["database"] = "connected"
        except (RuntimeError, SQLAlchemyError, OSError) as e:
            logger.warning("Health check failed", error=str(e))
            health_status.update(success=False, status="unavailable", database="disconnected")

        status_code = (
            status.HTTP_200_OK
            if health_status["success"]
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        return JSONResponse(content=health_status, status_code=status_code)

    # Uploaded images; the lifespan creates the directory
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()
