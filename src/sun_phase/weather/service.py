"""Cache-aside retrieval of the daily sun phase document."""

import logging
from datetime import date
from typing import Callable, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from sun_phase.config import CACHE_TTL, Settings
from sun_phase.weather.client import AstronomyClient
from sun_phase.weather.models import SunPhaseRecord

logger = logging.getLogger(__name__)

# English month names, independent of the process locale. External pollers
# read the same keys, so this format must not change.
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def sun_phase_cache_key(prefix: str, day: date) -> str:
    """Return the cache key for a calendar day, e.g. ``ph:weather:sun_phase:2024-March-15``."""
    return f"{prefix}weather:sun_phase:{day.year}-{MONTH_NAMES[day.month - 1]}-{day.day}"


class SunPhaseService:
    """Serves today's sun phase from Redis, populating it from the astronomy source on a miss."""

    def __init__(
        self,
        settings: Settings,
        redis_client: redis.Redis,
        astronomy_client: AstronomyClient,
        today: Callable[[], date] = date.today
    ):
        """Initialize the service.

        Args:
            settings: Process settings (provides the cache key prefix)
            redis_client: Shared Redis client, created with ``decode_responses=True``
            astronomy_client: Client for the upstream astronomy source
            today: Returns the local calendar date used for the cache key
        """
        self.prefix = settings.redis_prefix
        self.redis_client = redis_client
        self.astronomy_client = astronomy_client
        self.today = today

    def cache_key(self, day: Optional[date] = None) -> str:
        return sun_phase_cache_key(self.prefix, day or self.today())

    async def get_sun_phase(self) -> str:
        """Return the serialized sun phase document for today.

        Returns:
            JSON:API document, byte-identical whether served from cache or freshly built

        Raises:
            AstronomyError: If the value is not cached and the upstream fetch fails.
                Nothing is written to the cache in that case.
        """
        cache_key = self.cache_key()

        cached = await self._read_cache(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {cache_key}")
            return cached

        logger.info(f"Cache miss for {cache_key}, fetching from astronomy source")
        times = await self.astronomy_client.get_sun_phase()

        payload = SunPhaseRecord(id=cache_key, **times.model_dump()).to_json()

        await self._write_cache(cache_key, payload)
        return payload

    async def _read_cache(self, cache_key: str) -> Optional[str]:
        """Read a cached document, treating any read failure as a miss."""
        try:
            value = await self.redis_client.get(cache_key)
            if isinstance(value, bytes):
                value = value.decode("utf-8")
        except (RedisError, UnicodeDecodeError) as e:
            logger.error(f"Error reading cache: {e}")
            return None
        return value

    async def _write_cache(self, cache_key: str, payload: str) -> None:
        """Store a document for pollers. Failures are logged only."""
        try:
            await self.redis_client.set(cache_key, payload, ex=CACHE_TTL)
        except RedisError as e:
            logger.error(f"Error committing to cache: {e}")
