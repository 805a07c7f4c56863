from enum import Enum


class ErrorType(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    NOT_CONFIGURED = "not_configured"
    STORAGE_ERROR = "storage_error"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.NOT_CONFIGURED: 503,
    ErrorType.STORAGE_ERROR: 502,
    ErrorType.INTERNAL_ERROR: 500,
}
