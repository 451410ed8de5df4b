"""JSON:API error envelopes."""

import logging
from typing import Dict, Final, Mapping, Optional

from fastapi import FastAPI, Request, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from sun_phase.config import JSONAPI_MEDIA_TYPE
from sun_phase.weather.models import ErrorDocument, ErrorObject

logger = logging.getLogger(__name__)

STATUS_TITLES: Final[Dict[int, str]] = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    409: "Conflict",
    415: "Unsupported Media Type",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}

# Domain codes refine a status; 0 means "no code"
CODE_TITLES: Final[Dict[int, str]] = {
    1: "Malformed JSON Body",
    2201: "Missing Required Attribute",
    2202: "Requested Relationship Not Found",
}


def build_error_document(status: int, detail: str, code: int = 0) -> ErrorDocument:
    """Build a single-error document.

    Args:
        status: HTTP status code
        detail: Human-readable explanation, used verbatim
        code: Optional domain code; when non-zero it selects the title and is emitted

    Returns:
        ErrorDocument with one error object
    """
    if code == 0:
        title = STATUS_TITLES.get(status)
        code_str = None
    else:
        title = CODE_TITLES.get(code)
        code_str = str(code)

    return ErrorDocument(errors=[
        ErrorObject(title=title, detail=detail, status=str(status), code=code_str)
    ])


def error_response(
    status: int,
    detail: str,
    code: int = 0,
    headers: Optional[Mapping[str, str]] = None
) -> Response:
    """Render an error document as a response carrying ``status``."""
    document = build_error_document(status, detail, code)
    return Response(
        content=document.to_json(),
        status_code=status,
        headers=headers,
        media_type=JSONAPI_MEDIA_TYPE,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    # Routing raises 405 for a known path with another method; report the method
    if exc.status_code == 405:
        detail = request.method
    else:
        detail = str(exc.detail)
    return error_response(exc.status_code, detail, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return error_response(500, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Deliver every failure as an error envelope."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
