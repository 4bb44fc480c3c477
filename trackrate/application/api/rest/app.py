import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from trackrate.application.api.v1.errors import map_trackrate_error
from trackrate.application.api.v1.routes import (
    activity,
    admin,
    awards,
    comments,
    guests,
    health,
    likes,
    ratings,
    users,
)
from trackrate.application.di import create_container
from trackrate.config import Config, configure_logging
from trackrate.domain.shared.error import TrackRateError
from trackrate.infrastructure.persistence.migrate import run_migrations
from trackrate.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    yield
    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    if config.database.auto_migrate and config.database.url.startswith("sqlite"):
        run_migrations(config.database.url)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    logfire.configure(send_to_logfire="if-token-present", service_name="trackrate")
    logfire.instrument_fastapi(app_instance)

    container = create_container(config)
    setup_dishka(container, app_instance)

    for module in (health, guests, users, awards, likes, ratings, comments, admin, activity):
        app_instance.include_router(module.router, prefix="/api/v1")

    # Global error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(TrackRateError)
    async def trackrate_error_handler(request: Request, exc: TrackRateError):
        http_exc = map_trackrate_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal server error"},
        )

    return app_instance
