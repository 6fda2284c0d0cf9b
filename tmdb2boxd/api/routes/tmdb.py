import re

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from tmdb2boxd.api.dependencies import get_lookup_service
from tmdb2boxd.core.exceptions import MovieNotFoundError, RouteNotFoundError
from tmdb2boxd.core.logging import get_logger
from tmdb2boxd.services.lookup_service import LookupService

# Initialize router and logger
tmdb_router = APIRouter()
logger = get_logger(__name__)

# Matched against the undecoded path, so "/tmdb/%32%37" is rejected
TMDB_PATH_RE = re.compile(r"/tmdb/([0-9]+)")


def raw_request_path(request: Request) -> str:
    """Request path as sent by the client, before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return request.url.path
    return raw_path.decode("latin-1").split("?", 1)[0]


@tmdb_router.get(
    "/tmdb/{tmdb_id}",
    status_code=status.HTTP_200_OK,
    summary="Resolve a TMDB movie on Letterboxd",
    description="Returns the Letterboxd id, title, description and URL for a TMDB movie id."
)
async def get_letterboxd_film(
    request: Request,
    tmdb_id: str = Path(..., description="TMDB movie ID"),
    lookup_service: LookupService = Depends(get_lookup_service),
) -> JSONResponse:
    """
    Look up the Letterboxd film matching a TMDB movie id.

    Raises:
        RouteNotFoundError: If the path is not /tmdb/ followed by digits
        MovieNotFoundError: If Letterboxd has no matching film
    """
    match = TMDB_PATH_RE.fullmatch(raw_request_path(request))
    if match is None:
        raise RouteNotFoundError(request.url.path)
    tmdb_id = match.group(1)

    record = await lookup_service.resolve(tmdb_id)
    if record is None:
        raise MovieNotFoundError(tmdb_id)

    return JSONResponse(status_code=status.HTTP_200_OK, content=record.to_dict())
