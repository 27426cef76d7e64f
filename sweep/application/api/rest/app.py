import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from sweep.application.api.v1.errors import map_sweep_error
from sweep.application.api.v1.routes import health, internal_tasks, tweets
from sweep.application.di import create_container
from sweep.config import Config, configure_logging
from sweep.domain.shared.error import SweepError
from sweep.domain.shared.port.event_bus import EventBus
from sweep.infrastructure.persistence.database import init_schema
from sweep.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_migrate:
        engine = await container.get(AsyncEngine)
        await init_schema(engine)

    # Build the event bus (and its handlers) before the first request
    await container.get(EventBus)

    yield

    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    setup_dishka(container or create_container(config), app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(tweets.router, prefix="/api/v1")
    # Task queue callbacks keep their absolute path
    app_instance.include_router(internal_tasks.router)

    # Global Sweep error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(SweepError)
    async def sweep_error_handler(request: Request, exc: SweepError):
        http_exc = map_sweep_error(exc)
        if http_exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                exc.code,
                request.method,
                request.url.path,
                exc.message,
            )
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
            content={"detail": "Internal server error"},
        )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In tests: configure in conftest.py
app = create_app()
