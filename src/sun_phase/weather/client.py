"""HTTP client for the Weather Underground astronomy API."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from sun_phase.config import DEFAULT_WU_BASE_URL, DEFAULT_WU_TIMEOUT_SECONDS
from sun_phase.weather.models import SunPhaseTimes, WUAstronomy

logger = logging.getLogger(__name__)

ASTRONOMY_FEATURE = "astronomy"


class AstronomyError(Exception):
    """Base class for astronomy source failures."""
    pass


class FetchError(AstronomyError):
    """Raised when the upstream request fails or returns a non-2xx status."""
    pass


class ParseError(AstronomyError):
    """Raised when the upstream body is not a usable astronomy payload."""
    pass


class AstronomyClient:
    """Async client for fetching sunrise/sunset from Weather Underground."""

    def __init__(
        self,
        api_key: str,
        location: str,
        base_url: str = DEFAULT_WU_BASE_URL,
        timeout: float = DEFAULT_WU_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the astronomy client.

        Args:
            api_key: Weather Underground API key
            location: Location query, e.g. ``CA/San_Francisco`` or ``zmw:94101.1.99999``
            base_url: Base URL for the API
            timeout: Deadline in seconds for the whole upstream request
            http_client: Preconfigured client (tests inject a mock transport here)
        """
        self.api_key = api_key
        self.location = location
        self.base_url = base_url.rstrip("/")
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    def feature_url(self, feature: str) -> str:
        """Build the URL for a data feature at the configured location."""
        return f"{self.base_url}/{self.api_key}/{feature}/q/{self.location}.json"

    async def get_astronomy(self) -> WUAstronomy:
        """Fetch and validate the astronomy feature.

        Returns:
            Parsed astronomy payload

        Raises:
            FetchError: If the request fails or the status is not 2xx
            ParseError: If the body is not JSON or lacks valid sun phase times
        """
        url = self.feature_url(ASTRONOMY_FEATURE)
        logger.info(f"Fetching astronomy for location={self.location}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from astronomy API: {e.response.status_code}")
            raise FetchError(
                f"Astronomy API returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Request error to astronomy API: {e!r}")
            raise FetchError(str(e) or e.__class__.__name__) from e

        try:
            return WUAstronomy.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Invalid astronomy response format: {e}")
            raise ParseError(f"Invalid astronomy response: {e.error_count()} validation error(s)") from e

    async def get_sun_phase(self) -> SunPhaseTimes:
        """Fetch today's sunrise and sunset as integer hour/minute pairs.

        Raises:
            AstronomyError: If the upstream call or its parsing fails
        """
        astronomy = await self.get_astronomy()
        sun_phase = astronomy.sun_phase
        return SunPhaseTimes(
            sunrise_h=sun_phase.sunrise.hour,
            sunrise_m=sun_phase.sunrise.minute,
            sunset_h=sun_phase.sunset.hour,
            sunset_m=sun_phase.sunset.minute,
        )

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
