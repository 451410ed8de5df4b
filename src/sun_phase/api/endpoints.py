"""API endpoints for the sun phase service."""

import logging

from fastapi import APIRouter, Depends, Request, Response

from sun_phase.api.errors import error_response
from sun_phase.config import JSONAPI_MEDIA_TYPE, SUN_PHASE_PATH
from sun_phase.weather.client import AstronomyError
from sun_phase.weather.service import SunPhaseService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["weather"])


def get_sun_phase_service(request: Request) -> SunPhaseService:
    """Dependency returning the service built during application startup."""
    return request.app.state.sun_phase_service


@router.get(SUN_PHASE_PATH, response_class=Response)
async def get_sun_phase(
    service: SunPhaseService = Depends(get_sun_phase_service)
) -> Response:
    """Get today's sunrise and sunset.

    Returns:
        JSON:API document of type ``sun_phase``, or a 500 error document
        when the astronomy source cannot be reached or parsed
    """
    try:
        payload = await service.get_sun_phase()
    except AstronomyError as e:
        logger.error(f"Error getting sun phase: {e}")
        return error_response(500, str(e))

    return Response(content=payload, media_type=JSONAPI_MEDIA_TYPE)
