"""FastAPI application for the agents table.

Five routes map one-to-one onto five SQL statements:
- list, create, full update, partial update, delete
- each request borrows one pooled connection and returns it when done
- OpenAPI docs are generated from the route declarations
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from agents_api.api.routes import register_routes
from agents_api.config import Settings, settings as default_settings
from agents_api.db.connection import ConnectionProvisioner
from agents_api.domain.agents.models import Base
from agents_api.observability.tracing import TracingMiddleware, configure_logging, log_event

tags_metadata = [
    {
        "name": "Agents",
        "description": "Create, read, update and delete rows of the agents table"
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    provisioner = ConnectionProvisioner.from_settings(settings)

    if settings.create_schema:
        async with provisioner.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log_event("db.schema_ready", table="agents")

    app.state.provisioner = provisioner
    log_event("app.startup", pool_size=settings.pool_size)
    try:
        yield
    finally:
        await provisioner.dispose()
        log_event("app.shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title='Agents related API',
        version='1.0.0',
        description='Agents related API Information',
        openapi_tags=tags_metadata,
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(TracingMiddleware)

    # Register all API routes
    register_routes(app)
    return app


app = create_app()
