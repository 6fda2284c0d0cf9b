from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tmdb2boxd.api.middlewares import request_cors_headers
from tmdb2boxd.core.exceptions import (
    APIException,
    CacheError,
    IntegrationException,
    MethodNotAllowedError,
    NotFoundError,
    RouteNotFoundError,
)
from tmdb2boxd.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


def create_error_response(request: Request, exc: APIException) -> JSONResponse:
    """
    Render an APIException as a JSON response with the CORS headers.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=request_cors_headers(request)
    )


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """Handle APIException instances without a dedicated handler."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"API Exception: {exc.detail}",
        extra={"data": {"status_code": exc.status_code, "error_code": exc.code}}
    )
    return create_error_response(request, exc)


async def handle_not_found_exception(request: Request, exc: NotFoundError) -> JSONResponse:
    """
    Handle resource not found errors.

    Args:
        request: FastAPI request object
        exc: NotFoundError instance

    Returns:
        JSONResponse: Formatted not found error response
    """
    logger.info(
        f"Resource not found: {exc.detail}",
        extra={"data": {"resource_type": exc.resource_type, "resource_id": exc.resource_id}}
    )
    return create_error_response(request, exc)


async def handle_integration_exception(request: Request, exc: IntegrationException) -> JSONResponse:
    """
    Handle external site integration errors.

    The original error is logged but kept out of the response body.
    """
    logger.error(
        f"Integration error: {exc.detail}",
        extra={
            "data": {
                "original_error": str(exc.original_exception) if exc.original_exception else None,
                "error_code": exc.code,
            }
        }
    )
    return create_error_response(request, exc)


async def handle_cache_exception(request: Request, exc: CacheError) -> JSONResponse:
    """Handle cache backend failures."""
    logger.error(f"Cache error: {str(exc)}")
    return create_error_response(request, exc)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Reshape routing errors raised by Starlette.

    Unknown paths get the usage hint, disallowed methods the 405 body.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return create_error_response(request, RouteNotFoundError(request.url.path))
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return create_error_response(request, MethodNotAllowedError(request.method))

    return create_error_response(
        request,
        APIException(status_code=exc.status_code, detail=str(exc.detail), code="http_error")
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
        headers=request_cors_headers(request)
    )
