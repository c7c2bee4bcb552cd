import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskvibe.core.config import settings
from taskvibe.core.exceptions import BusinessException

logger = logging.getLogger(__name__)

# Locations FastAPI prefixes to validation error paths
REQUEST_PARTS = ("body", "query", "path", "header")


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the JSON error body shared by every handler."""
    content: Dict[str, Any] = {"error": error, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_name(location) -> str:
    parts = [str(part) for part in location if part not in REQUEST_PARTS]
    return ".".join(parts) or "__root__"


async def handle_business_exception(request: Request, exc: BusinessException) -> JSONResponse:
    """Not found, validation and authentication failures raised by services."""
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}"
    )
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(exc.status_code, exc.code, exc.message, exc.details, headers)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Pydantic errors flattened into a field -> message mapping."""
    details = {
        _field_name(error.get("loc", ())): error.get("msg", "Validation error")
        for error in exc.errors()
    }
    logger.warning(f"{request.method} {request.url.path} rejected: {details}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "validation_error",
        "Input validation failed",
        details,
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} crashed: {exc}", exc_info=True)
    message = str(exc)
    if settings.ENVIRONMENT == "production":
        message = "An internal server error occurred"
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_server_error", message
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers for the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(BusinessException, handle_business_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
