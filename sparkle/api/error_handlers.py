"""API error handlers."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sparkle.utils.exceptions import (
    ExternalServiceError,
    NotFoundError,
    SparkleError,
    ValidationError,
)
from sparkle.utils.logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, error: str, exc: SparkleError, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": exc.message, **extra, "details": exc.details},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register custom error handlers with the FastAPI app.

    Invalid ratings map to 400, unknown presets and reviews to 404, and a
    failing upstream service to 502.
    """

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("validation_error", message=exc.message, field=exc.field)
        return _error_response(400, "validation_error", exc, field=exc.field)

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("resource_not_found", resource=exc.resource, message=exc.message)
        return _error_response(404, "not_found", exc, resource=exc.resource)

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        logger.error(
            "external_service_error",
            service=exc.service,
            status_code=exc.status_code,
            message=exc.message,
        )
        return _error_response(502, "external_service_error", exc, service=exc.service)

    @app.exception_handler(SparkleError)
    async def sparkle_error_handler(request: Request, exc: SparkleError) -> JSONResponse:
        logger.error("application_error", error_type=type(exc).__name__, message=exc.message)
        return _error_response(500, "internal_error", exc)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
            },
        )
