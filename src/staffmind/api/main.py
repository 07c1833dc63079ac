"""
StaffMind API Main Application

Entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from staffmind.platform.config import settings
from staffmind.platform.logging import configure_logging, get_logger
from staffmind.api.routers import allocations, analysis, rules
from staffmind.api.dependencies import (
    init_resources,
    close_resources,
    get_allocation_store,
)
from staffmind.errors import StoreUnavailable

# Configure logging on import
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting StaffMind API...")
    try:
        await init_resources()
        logger.info("Resources initialized successfully.")
    except StoreUnavailable as e:
        logger.error(f"Failed to initialize resources: {e}")
        raise

    yield

    logger.info("Shutting down StaffMind API...")
    await close_resources()
    logger.info("Resources closed.")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Resource Allocation & Workload Rebalancing Engine",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# OBSERVABILITY
# =============================================================================

if settings.METRICS_ENABLED:
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health/live", tags=["Health"])
async def liveness() -> dict:
    """Liveness probe - is the service running?"""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
async def readiness() -> dict:
    """
    Readiness probe - is the service ready to accept traffic?
    Checks the allocation store.
    """
    try:
        store_healthy = get_allocation_store().health_check()
    except StoreUnavailable:
        store_healthy = False

    return {
        "status": "ready" if store_healthy else "not_ready",
        "version": settings.VERSION,
        "checks": {
            "allocation_store": "healthy" if store_healthy else "unhealthy",
        },
    }


# =============================================================================
# API ROUTERS
# =============================================================================

app.include_router(allocations.router, prefix="/api/v1/allocation", tags=["Allocations"])
app.include_router(analysis.router, prefix="/api/v1/allocation", tags=["Analysis"])
app.include_router(rules.router, prefix="/api/v1/allocation", tags=["Rules"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "staffmind.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
