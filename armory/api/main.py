"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from armory import __version__
from armory.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from armory.api.middleware.error_handler import setup_exception_handlers
from armory.api.routes import (
    assignments_router,
    audit_router,
    expenditures_router,
    health_router,
    inventory_router,
    purchases_router,
    transfers_router,
)
from armory.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Brings the SQLite schema up to date and opens the connection pool on
    startup; closes the pool on shutdown. The memory backend needs neither.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend=settings.storage.backend,
    )

    if settings.storage.backend == "sqlite":
        from armory.infrastructure.storage.sqlite import get_pool
        from armory.infrastructure.storage.sqlite.migrations import run_migrations

        try:
            results = await run_migrations()
            failed = [r.version for r in results if not r.success]
            if failed:
                raise RuntimeError(f"Migrations failed: {', '.join(failed)}")
            logger.info("database_initialized", applied=len(results))

            await get_pool()
            logger.info("connection_pool_ready")
        except Exception as e:
            logger.error("database_init_failed", error=str(e))
            raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    if settings.storage.backend == "sqlite":
        from armory.infrastructure.storage.sqlite import close_pool

        try:
            await close_pool()
        except Exception as e:
            logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Armory Ledger API",
        description="Military asset inventory ledger and movement transactions",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(purchases_router)
    app.include_router(transfers_router)
    app.include_router(assignments_router)
    app.include_router(expenditures_router)
    app.include_router(inventory_router)
    app.include_router(audit_router)

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "armory.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
