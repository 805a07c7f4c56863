import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from catalog.errors import ErrorType, ERROR_STATUS_MAP
from catalog.responses import respond

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services and routers can raise."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    return respond(status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path params are client errors, reported as 400."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return respond(400, "Invalid request data")


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return respond(500, "Internal server error")
