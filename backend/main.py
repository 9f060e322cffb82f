"""Pulseboard - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from config import get_settings
from routers import (
    auth_router,
    brands_router,
    content_router,
    display_router,
    overview_router,
)
from services.cache import ResultCache
from services.metricool_client import MetricoolClient
from services.scheduler import start_scheduler, stop_scheduler
from middleware.rate_limit import limiter, rate_limit_exceeded_handler

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - build shared services, start and stop the scheduler."""
    app.state.cache = ResultCache(
        brands_ttl_seconds=settings.brands_cache_ttl_seconds,
        stats_ttl_seconds=settings.stats_cache_ttl_seconds,
        tz=settings.dashboard_timezone,
    )
    app.state.metricool = MetricoolClient(settings)

    if not settings.metricool_token:
        print("⚠ METRICOOL_TOKEN not set - every upstream call will fail")

    if not settings.dashboard_password:
        print("⚠ DASHBOARD_PASSWORD not set - dashboard login is disabled")

    # Start background scheduler for periodic tasks
    if settings.scheduler_enabled:
        start_scheduler(app.state.metricool, app.state.cache)

    yield

    # Shutdown: stop scheduler and close the upstream connection pool
    if settings.scheduler_enabled:
        stop_scheduler()
    await app.state.metricool.close()


app = FastAPI(
    title="Pulseboard API",
    description="Client social performance for the office TV dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(brands_router)
app.include_router(content_router)
app.include_router(display_router)
app.include_router(overview_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "pulseboard"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Pulseboard API",
        "version": "0.1.0",
        "docs": "/docs",
    }
