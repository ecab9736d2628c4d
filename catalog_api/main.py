"""Catalog API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and the startup/shutdown sequence.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog_api.api.catalog import router as catalog_router
from catalog_api.api.categories import router as categories_router
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import setup_middleware
from catalog_api.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from catalog_api.infrastructure.config import Settings, settings as default_settings
from catalog_api.infrastructure.context import ServiceContext
from catalog_api.infrastructure.log import configure_logging

logger = structlog.get_logger()

STORAGE_ERROR_MESSAGE = "Unexpected error occurred, please try again later."

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


# ============================================================================
# Custom Exception Handlers
# ============================================================================


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors to HTTP responses.

    Storage failures are reported with a generic message; their cause has
    already been logged by the repository.
    """
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )

    if isinstance(exc, StorageError):
        logger.error(
            "Storage failure while handling request",
            path=request.url.path,
            method=request.method,
            error=exc.message,
        )
        return _error_response(request, status_code, exc.error_code, STORAGE_ERROR_MESSAGE)

    details = [exc.details] if exc.details else []
    return _error_response(request, status_code, exc.error_code, exc.message, details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 validation errors."""
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ValidationError.error_code,
        "invalid request payload",
        [
            {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
            for err in exc.errors()
        ],
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    The service context is created and started by the lifespan handler and
    closed on shutdown; handlers reach it through ``app.state.context``.

    Args:
        settings: Application settings (defaults to environment settings).

    Returns:
        Configured application.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Handle application startup and shutdown events.

        Args:
            app: The FastAPI application instance.

        Yields:
            None after startup, cleanup happens after yield.
        """
        configure_logging(settings)
        logger.info(
            "Starting Catalog API",
            version=settings.api_version,
            debug=settings.debug,
        )

        context = ServiceContext.create(settings)
        await context.start()
        app.state.context = context

        try:
            yield
        finally:
            logger.info("Shutting down Catalog API")
            await context.close()

    app = FastAPI(
        title="Catalog API",
        description="Product and category catalog",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    setup_middleware(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(catalog_router)
    app.include_router(categories_router)

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    return app


app = create_app()
