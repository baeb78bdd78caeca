"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Everything with process lifetime is built here from Settings
and hung on app.state: the database engine, the session factory and the
TokenService holding the signing secret. Route dependencies read them
from the request's app, never from module globals.

Lifespan manages startup/shutdown. Middleware, CORS, exception handlers
and routers are all registered here.

Run with: uvicorn --factory tasklist.main:create_app (or `tasklist serve`).
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasklist import __version__
from tasklist.api import api_router, health_router
from tasklist.auth.jwt import TokenService
from tasklist.config import Settings
from tasklist.db.engine import build_engine, build_session_factory, create_tables
from tasklist.errors import register_exception_handlers
from tasklist.logging_config import configure_logging
from tasklist.middleware.request_id import RequestIdMiddleware
from tasklist.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "tasklist.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.create_tables:
        await create_tables(app.state.engine)
        logger.info("tasklist.tables_created")

    yield

    logger.info("tasklist.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings.log_level, json=settings.log_json)

    app = FastAPI(
        title="Tasklist",
        description="Multi-user task list with email/password accounts and bearer tokens",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.tokens = TokenService(
        secret=settings.jwt_secret.get_secret_value(),
        ttl=timedelta(minutes=settings.token_ttl_minutes),
        algorithm=settings.jwt_algorithm,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router)

    return app
