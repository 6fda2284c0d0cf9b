from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
import httpx

from tmdb2boxd.adapters.interfaces.cache import CacheStrategy
from tmdb2boxd.api import error_handlers
from tmdb2boxd.api.middlewares import cors_middleware, correlation_id_middleware
from tmdb2boxd.core.config import Settings, get_settings, load_env_file
from tmdb2boxd.core.exceptions import (
    APIException,
    CacheError,
    IntegrationException,
    NotFoundError,
)
from tmdb2boxd.core.logging import configure_logging, get_logger
from tmdb2boxd.infrastructure.cache import create_cache


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    cache: Optional[CacheStrategy] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment's
        cache: Cache backend; defaults to the one selected by settings
        http_client: Outbound client; defaults to a new AsyncClient

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url="/openapi.json" if settings.ENABLE_DOCS else None,
        docs_url="/docs" if settings.ENABLE_DOCS else None,
        redoc_url=None,
        debug=settings.DEBUG,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # Process-wide bindings, handed to handlers through dependencies
    app.state.settings = settings
    app.state.cache = cache if cache is not None else create_cache(settings)
    app.state.http_client = http_client or httpx.AsyncClient(timeout=settings.FETCH_TIMEOUT)

    configure_middleware(app)
    handle_exceptions(app)
    register_routers(app)

    return app


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and release the shared HTTP client and cache on shutdown."""
    project_name = app.state.settings.PROJECT_NAME
    logger.info(f"Starting up {project_name}")
    try:
        yield
    finally:
        logger.info(f"Shutting down {project_name}")
        await app.state.http_client.aclose()
        await app.state.cache.close()


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware components for the FastAPI application.

    The last middleware added runs first, so correlation IDs are set before
    the CORS gate answers or rejects a request.

    Args:
        app: FastAPI application instance
    """
    app.middleware("http")(cors_middleware)
    app.middleware("http")(correlation_id_middleware)


def handle_exceptions(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(NotFoundError, error_handlers.handle_not_found_exception)
    app.add_exception_handler(IntegrationException, error_handlers.handle_integration_exception)
    app.add_exception_handler(CacheError, error_handlers.handle_cache_exception)
    app.add_exception_handler(APIException, error_handlers.handle_api_exception)
    app.add_exception_handler(StarletteHTTPException, error_handlers.handle_http_exception)
    app.add_exception_handler(Exception, error_handlers.handle_unexpected_exception)


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    # Import routers here to avoid circular imports
    from tmdb2boxd.api.routes.tmdb import tmdb_router

    app.include_router(tmdb_router, tags=["Lookup"])


app = create_application()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("tmdb2boxd.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
