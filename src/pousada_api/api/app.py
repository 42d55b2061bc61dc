"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pousada_api.api.auth import router as auth_router
from pousada_api.api.bookings import router as bookings_router
from pousada_api.api.images import router as images_router
from pousada_api.api.site_info import router as site_info_router
from pousada_api.app_logging import configure_logging
from pousada_api.containers import AppContainer
from pousada_api.errors import AppError, Unauthenticated


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Pousada Booking API")
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(site_info_router)
    app.include_router(bookings_router)
    app.include_router(images_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error_type": type(exc).__name__},
            )
        headers = (
            {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"message": _describe_validation_error(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500, content={"message": "Internal server error"}
        )

    return app


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Return a short message naming the first invalid field."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in {"body", "query"}
    )
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
