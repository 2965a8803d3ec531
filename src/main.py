"""FastAPI application entry point with lifespan management."""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.health import router as health_router
from src.api.middleware import RequestContextMiddleware
from src.api.tax import router as tax_router
from src.api.vehicles import router as vehicles_router
from src.core.config import settings
from src.core.database import create_engine, create_session_factory, create_tables
from src.core.logging import configure_logging, get_logger
from src.core.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources.

    Startup:
        - Configure structured logging
        - Initialize Sentry error tracking
        - Create database engine and session factory
        - Create tables for SQLite development databases

    Shutdown:
        - Dispose database engine
    """
    configure_logging()
    logger.info("Starting application", environment=settings.environment)

    if init_sentry():
        logger.info("Sentry initialized")

    app.state.db_engine = create_engine()
    app.state.async_session = create_session_factory(app.state.db_engine)
    if settings.database_url.startswith("sqlite"):
        await create_tables(app.state.db_engine)
    logger.info("Database engine created")

    yield

    logger.info("Shutting down application")
    await app.state.db_engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="Motor Tax",
    description="Progressive motor vehicle tax calculator with a vehicle catalog",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request context middleware
app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(vehicles_router)
app.include_router(tax_router)
