"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from rewards_service.api.errors import register_exception_handlers
from rewards_service.api.middleware import RequestIDMiddleware, MetricsMiddleware
from rewards_service.api.v1 import rewards
from rewards_service.infrastructure.cache.rewards_cache import RewardsCache
from rewards_service.infrastructure.cache.scheduler import create_scheduler, schedule_cache_invalidation
from rewards_service.infrastructure.database.models import Base
from rewards_service.infrastructure.database.seed import seed_database
from rewards_service.infrastructure.database.session import SessionLocal, engine
from rewards_service.infrastructure.observability.logging import setup_logging
from rewards_service.config import settings

# Setup structured logging
setup_logging(settings.log_level)

log = logging.getLogger(__name__)


def _seed() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        inserted = seed_database(db, settings.seed_customers_csv, settings.seed_transactions_csv)
        log.info("Seed data loaded", extra=inserted)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_on_startup:
        _seed()

    scheduler = None
    if settings.cache_invalidation_enabled:
        scheduler = create_scheduler()
        schedule_cache_invalidation(scheduler, app.state.rewards_cache, settings.cache_clear_interval_ms)
        scheduler.start()

    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Rewards Service",
        description="Customer loyalty points summaries by month",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # One cache per application instance, shared by all request threads
    app.state.rewards_cache = RewardsCache(
        max_size=settings.cache_max_size,
        ttl_seconds=settings.cache_ttl_seconds,
        initial_capacity=settings.cache_initial_capacity,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(rewards.router, prefix="/api", tags=["rewards"])

    return app


app = create_app()
