"""
FastAPI application entry point for the Constituency Desk API.

Configures logging and CORS, creates the request store selected in
settings during the application lifespan, and mounts the API routers
under /api.

Store selection (STORE_BACKEND):
- memory: InMemoryRequestStore, seeded with sample constituents, staff,
  requests and appointments when SEED_SAMPLE_DATA is true
- postgres: PostgresRequestStore on the asyncpg pool from DATABASE_URL
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import __version__
from backend.api import api_router
from backend.core.config import Settings, get_settings
from backend.core.database import close_db, init_db
from backend.models.enums import StoreBackend
from backend.services.request_store import (
    InMemoryRequestStore,
    PostgresRequestStore,
    RequestStore,
)
from backend.services.sample_data import (
    build_sample_appointments,
    build_sample_constituents,
    build_sample_requests,
    build_sample_team_members,
)


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_request_store(settings: Settings) -> RequestStore:
    """Create the request store configured in settings."""
    if settings.store_backend == StoreBackend.POSTGRES:
        return PostgresRequestStore()

    if not settings.seed_sample_data:
        return InMemoryRequestStore()

    now = datetime.now(settings.reporting_tz)
    records = build_sample_requests(
        settings.sample_request_count,
        now=now,
        seed=settings.sample_seed,
    )
    appointments = build_sample_appointments(records, now=now, seed=settings.sample_seed)
    logger.info(
        f"Seeded in-memory store with {len(records)} sample requests "
        f"and {len(appointments)} appointments"
    )
    return InMemoryRequestStore(
        records,
        constituents=build_sample_constituents(),
        team_members=build_sample_team_members(),
        appointments=appointments,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: open the database pool (postgres backend only), create the
    store and attach it to app.state. Shutdown: release both.
    """
    settings = get_settings()
    logger.info(f"Constituency Desk API starting (store={settings.store_backend.value})")

    if settings.store_backend == StoreBackend.POSTGRES:
        await init_db()
        logger.info("Database connection pool initialized")

    store = build_request_store(settings)
    await store.startup()
    app.state.request_store = store

    yield

    logger.info("Constituency Desk API shutting down")
    await store.shutdown()
    app.state.request_store = None
    if settings.store_backend == StoreBackend.POSTGRES:
        await close_db()
        logger.info("Database connection pool closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Constituency Desk API",
        version=__version__,
        description=(
            "Case management API for a constituency office: constituents, "
            "requests, appointments and dashboard statistics."
        ),
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """API name, version and documentation links."""
        return {
            "name": "Constituency Desk API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
