"""
HTTP middleware for tmdb2boxd.

Every response carries the permissive cross-origin headers; pre-flight
requests are answered directly and any method other than GET is rejected
before routing.
"""
import time
import uuid
from typing import Callable, Dict

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from tmdb2boxd.core.exceptions import MethodNotAllowedError
from tmdb2boxd.core.logging import get_logger, set_correlation_id

logger = get_logger(__name__)

ALLOWED_METHODS = "GET, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def cors_headers(allow_origin: str = "*") -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def request_cors_headers(request: Request) -> Dict[str, str]:
    """CORS headers for the application serving this request."""
    return cors_headers(request.app.state.settings.CORS_ALLOW_ORIGIN)


async def cors_middleware(request: Request, call_next: Callable) -> Response:
    """Answer pre-flight requests, reject non-GET methods, tag responses."""
    headers = request_cors_headers(request)

    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=headers)

    if request.method != "GET":
        exc = MethodNotAllowedError(request.method)
        logger.info(f"Rejected {request.method} {request.url.path}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    response = await call_next(request)
    response.headers.update(headers)
    return response


async def correlation_id_middleware(request: Request, call_next: Callable) -> Response:
    """Attach a correlation ID to the request context and log timing."""
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    set_correlation_id(correlation_id)

    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {str(e)}",
            extra={
                "data": {
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                }
            },
            exc_info=True
        )
        raise

    response.headers["X-Correlation-ID"] = correlation_id

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        extra={
            "data": {
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2),
            }
        }
    )
    return response
