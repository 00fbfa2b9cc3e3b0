"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from pydantic import ValidationError

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLInfoResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from quicklink.common.logging_config import get_logger
from quicklink.errors import ClaimError, GenerationError, RandomSourceError
from quicklink.service import ShortURLError
from ..links import short_url_for

logger = get_logger("web.api")

router = APIRouter()

# Mounted both at the site root and under /api
shorten_router = APIRouter()

_STATUS_BY_KIND = {
    ShortURLError.INVALID_URL: status.HTTP_400_BAD_REQUEST,
    ShortURLError.CUSTOM_DISABLED: status.HTTP_400_BAD_REQUEST,
    ClaimError.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    ClaimError.RESERVED: status.HTTP_400_BAD_REQUEST,
    ClaimError.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    GenerationError.EXHAUSTED_RETRIES: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Build a JSON error body and log it."""
    logger.info(f"Error response: {status_code} - {error}: {message}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


async def _read_limited_body(request: Request, limit: int):
    """Read the request body, or return None once it grows past limit bytes."""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            return None
    return bytes(body)


@shorten_router.post(
    "/shorten",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        413: {"model": ErrorResponse, "description": "Request body too large"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a custom short code.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ShortenRequest.model_json_schema()}},
        }
    },
)
async def shorten_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid content type",
            "Content-Type must be application/json",
        )

    raw = await _read_limited_body(request, config.max_body_bytes)
    if raw is None:
        return error_response(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            "Request too large",
            f"Request body must not exceed {config.max_body_bytes} bytes",
        )

    try:
        body = ShortenRequest.model_validate_json(raw)
    except ValidationError:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid JSON",
            "Request body must be valid JSON with 'url' field",
        )

    try:
        result = service.create_short_url(
            original_url=body.url,
            custom_code=body.custom_code,
        )
    except ShortURLError as e:
        return error_response(_STATUS_BY_KIND[e.kind], e.error, e.message)
    except RandomSourceError as e:
        logger.error(f"Secure random source failure: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Generation failed",
            "Failed to generate short code",
        )

    return ShortenResponse(
        short_code=result["short_code"],
        short_url=short_url_for(request, result["short_code"]),
        original_url=result["original_url"],
        created_at=result["created_at"],
    )


@router.get(
    "/urls/{short_code}",
    response_model=URLInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL information",
    description="Get information about a shortened URL.",
)
async def get_url_info(request: Request, short_code: str):
    """Get information about a shortened URL."""
    service = request.app.state.service

    info = service.get_url_info(short_code)

    if not info:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    return URLInfoResponse(short_url=short_url_for(request, short_code), **info)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    return StatisticsResponse(**service.get_statistics())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        storage="healthy" if health["storage"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
