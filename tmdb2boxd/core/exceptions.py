from fastapi import status
from typing import Any, Dict, Optional, Union


USAGE = "/tmdb/:id where :id is a TMDB movie ID"


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class. The response body
    is a flat JSON object: the message under "error", merged with the context.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "Internal server error",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        return {"error": self.detail, **self.context}


class MethodNotAllowedError(APIException):
    """Exception raised for any HTTP method other than GET and OPTIONS."""

    def __init__(self, method: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method not allowed",
            code="method_not_allowed",
        )
        self.method = method


class RouteNotFoundError(APIException):
    """Exception raised when the request path is not a lookup route."""

    def __init__(self, path: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not found",
            code="route_not_found",
            context={"usage": USAGE}
        )
        self.path = path


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None,
        code: str = "not_found_error",
        context: Optional[Dict[str, Any]] = None
    ):
        if detail is None:
            detail = f"{resource_type} with id '{resource_id}' not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context=context
        )
        self.resource_type = resource_type
        self.resource_id = str(resource_id)


class MovieNotFoundError(NotFoundError):
    """Exception raised when a TMDB id has no Letterboxd counterpart."""

    def __init__(self, tmdb_id: str):
        super().__init__(
            resource_type="movie",
            resource_id=tmdb_id,
            detail="Movie not found on Letterboxd",
            code="movie_not_found",
            context={"tmdbId": tmdb_id}
        )


class IntegrationException(APIException):
    """Exception raised when an external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception


class CacheError(APIException):
    """Exception raised when the cache backend cannot be reached."""

    def __init__(
        self,
        message: str = "Cache error",
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cache unavailable",
            code="cache_error",
        )
        self.message = message
        self.original_exception = original_exception

    def __str__(self) -> str:
        return self.message
