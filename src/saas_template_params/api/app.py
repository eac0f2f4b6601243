"""
saas_template_params.api.app

FastAPI app factory for the template parameter store.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, session factory, store).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from saas_template_params import __version__
from saas_template_params.api.errors import register_error_handlers
from saas_template_params.api.routers.health import router as health_router
from saas_template_params.api.routers.template_parameters import (
    router as template_parameters_router,
    values_router as template_parameter_values_router,
)
from saas_template_params.db.init_db import init_db
from saas_template_params.db.session import create_engine, create_sessionmaker
from saas_template_params.observability.logging import configure_logging, get_logger
from saas_template_params.observability.middleware import RequestContextMiddleware
from saas_template_params.services.parameter_store import SqlAlchemyParameterStore
from saas_template_params.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, replace_policy=settings.replace_policy.value)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.store = SqlAlchemyParameterStore(
            app.state.sessionmaker, policy=settings.replace_policy
        )
        if settings.env in ("dev", "test"):
            # Prod uses Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Subscription Template Parameter Store",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware, header_name=settings.request_id_header)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(template_parameters_router)
    app.include_router(template_parameter_values_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; persistence rules live in services.parameter_store.
