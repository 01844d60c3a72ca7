"""FastAPI application entrypoint — lifespan, routers, middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis
from sqlalchemy import text

from homegrow.config import get_settings
from homegrow.database import engine
from homegrow.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from homegrow.middleware.rate_limit import RateLimitMiddleware
from homegrow.routes import auth, forecast, history
from homegrow.services.reference_data import get_reference_store

logger = logging.getLogger("homegrow")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Load and validate reference data (crops, climates, regions, factors)
      3. Check the database connection
      4. Connect to Redis

    Shutdown:
      1. Close Redis connection pool
      2. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "HomeGrow starting",
        extra={
            "log_level": settings.log_level,
            "reference_data_dir": str(settings.reference_data_dir),
        },
    )

    redis: Redis | None = None
    try:
        store = get_reference_store()
        app.state.reference_counts = {
            "crops": len(store.list_crops()),
            "climate_zones": len(store.list_climate_zones()),
        }

        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

        redis = Redis.from_url(settings.redis_url, decode_responses=True)
        await redis.ping()
        app.state.redis = redis
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        raise

    yield

    logger.info("HomeGrow shutting down")
    if redis is not None:
        await redis.aclose()
    await engine.dispose()


app = FastAPI(
    title="HomeGrow Forecast API",
    description=(
        "Home vegetable growing forecasts — expected yield, planting calendar, "
        "climate-adjusted risks and recommendations for each selected crop."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "homegrow",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(forecast.router, prefix="/api/v1")
app.include_router(history.router, prefix="/api/v1")
app.include_router(auth.router, prefix="/api/v1")
