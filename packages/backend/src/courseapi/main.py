"""FastAPI application factory.

Learn: App factory pattern. create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (logging, tables, engine
disposal). Middleware, CORS, error handlers and routers are all registered
here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseapi import __version__
from courseapi.api import api_router
from courseapi.api.error_handlers import register_error_handlers
from courseapi.config import settings
from courseapi.db.engine import engine, init_models
from courseapi.middleware.request_id import RequestIdMiddleware
from courseapi.middleware.security import SecurityHeadersMiddleware
from courseapi.observability import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    configure_logging()
    logger.info(
        "courseapi.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.create_tables_on_startup:
        await init_models()
        logger.info("courseapi.tables_ready")

    yield

    logger.info("courseapi.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Course Catalog API",
        description="Users and courses with HTTP Basic auth and owner-only edits",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: courseapi.main:app)
app = create_app()
