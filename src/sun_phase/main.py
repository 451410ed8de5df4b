"""Main FastAPI application for the sun phase service."""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator, Callable, Optional

import redis.asyncio as redis
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from sun_phase.api.endpoints import router as sun_phase_router
from sun_phase.api.errors import register_exception_handlers
from sun_phase.config import ConfigError, Settings, load_settings
from sun_phase.logging_config import configure_logging
from sun_phase.weather.client import AstronomyClient
from sun_phase.weather.service import SunPhaseService

logger = logging.getLogger(__name__)


def create_redis_client(settings: Settings) -> redis.Redis:
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password,
        decode_responses=True,
    )


def create_app(
    settings: Settings,
    redis_client: Optional[redis.Redis] = None,
    astronomy_client: Optional[AstronomyClient] = None,
    today: Callable[[], date] = date.today
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Loaded process settings
        redis_client: Redis client to use instead of one built from settings
        astronomy_client: Astronomy client to use instead of one built from settings
        today: Returns the local date used for cache keys

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        cache = redis_client if redis_client is not None else create_redis_client(settings)
        astronomy = astronomy_client
        if astronomy is None:
            astronomy = AstronomyClient(
                api_key=settings.wu_key,
                location=settings.wu_location,
                base_url=settings.wu_base_url,
                timeout=settings.wu_timeout_seconds,
            )

        try:
            logger.info(f"Connecting to Redis at {settings.redis_addr} (db={settings.redis_db})")
            pong = await cache.ping()
            logger.info(f"redis ping: {pong}")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await astronomy.aclose()
            await cache.aclose()
            raise

        app.state.sun_phase_service = SunPhaseService(settings, cache, astronomy, today=today)
        logger.info("Starting sun phase service")
        try:
            yield
        finally:
            logger.info("Shutting down sun phase service")
            await astronomy.aclose()
            await cache.aclose()

    app = FastAPI(
        title="Sun Phase Service",
        description="Today's sunrise and sunset, cached in Redis",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    register_exception_handlers(app)
    app.include_router(sun_phase_router)

    return app


def main() -> None:
    """Main entry point for the application."""
    configure_logging()
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)

    logger.info(f"Starting server on {settings.http_host}:{settings.http_port}")
    uvicorn.run(
        create_app(settings),
        host=settings.http_host,
        port=settings.http_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
