"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from khata.config import get_settings
from khata.core.exceptions import register_exception_handlers
from khata.core.logging import configure_logging
from khata.core.middleware import setup_middleware
from khata.core.responses import success
from khata.infrastructure.database import Database

# Import routers
from khata.interfaces.api.auth import router as auth_router
from khata.interfaces.api.customers import router as customers_router
from khata.interfaces.api.dashboard import router as dashboard_router
from khata.interfaces.api.reports import router as reports_router
from khata.interfaces.api.transactions import router as transactions_router
from khata.interfaces.api.users import router as users_router

logger = structlog.get_logger(__name__)

API_VERSION = "1.0.0"


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    Tests pass their own ``Database``; otherwise one is built from settings.
    """
    settings = get_settings()
    configure_logging()

    if database is None:
        database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — startup and shutdown events."""
        logger.info("Starting Khata API", env=settings.ENVIRONMENT)

        # Create DB tables (use scripts/init_db.py for managed deployments)
        app.state.database.create_all()
        logger.info("Database tables created/verified")

        yield

        app.state.database.dispose()
        logger.info("Khata API stopped")

    app = FastAPI(
        title="Khata — Digital Ledger",
        description="API Backend — customers, credit/debit entries and balance reports",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.database = database

    # Setup Middleware (Correlation ID, Logging, CORS)
    setup_middleware(app)

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(customers_router)
    app.include_router(transactions_router)
    app.include_router(reports_router)
    app.include_router(dashboard_router)

    @app.get("/")
    def root():
        return {
            "name": "Khata API",
            "version": API_VERSION,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return success({"status": "ok", "environment": settings.ENVIRONMENT})

    return app


app = create_app()
