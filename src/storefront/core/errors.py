"""Error taxonomy and the uniform error envelope.

Every failure leaving the API has the shape::

    {"error": {"code": "<CODE>", "message": "<human readable>"}}

Bad caller input maps to 400, absent entities to 404, the disabled mutating
operations to 501, and everything else (I/O faults, corrupt stored records)
to 500.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
INTERNAL = "INTERNAL"

# Codes for framework-level HTTP errors (unknown route, wrong verb, ...)
_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: VALIDATION_ERROR,
    status.HTTP_404_NOT_FOUND: NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_501_NOT_IMPLEMENTED: NOT_IMPLEMENTED,
}


class AppError(Exception):
    """Base application error carrying its HTTP mapping."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = INTERNAL

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        is_operational: bool = True,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.is_operational = is_operational

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_response(self) -> JSONResponse:
        return error_response(self.status_code, self.code, self.message)


class ValidationFailure(AppError):
    """Malformed or out-of-range caller input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = VALIDATION_ERROR


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = NOT_FOUND


class UnsupportedOperationError(AppError):
    """A mutating operation refused by the read-only catalog."""

    status_code = status.HTTP_501_NOT_IMPLEMENTED
    code = NOT_IMPLEMENTED

class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = INTERNAL

class DataSourceError(InternalError):
    """The catalog file could not be read or parsed."""

# =============================================================================
# Envelope helpers
# =============================================================================

def error_body(code: str, message: str) -> dict:
    """Build the error envelope body."""
    return {"error": {"code": code, "message": message}}

def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(code, message))

def validation_error_response(message: str) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, message)

def not_found_response(message: str) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND, message)

def not_implemented_response(message: str) -> JSONResponse:
    return error_response(status.HTTP_501_NOT_IMPLEMENTED, NOT_IMPLEMENTED, message)

def internal_error_response(message: str) -> JSONResponse:
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL, message)

# =============================================================================
# Exception handlers
# =============================================================================

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return exc.to_response()

async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map FastAPI parameter validation errors to a 400 envelope."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        detail = f"{field}: {first.get('msg', 'invalid value')}"
    else:
        detail = "invalid request"
    return ValidationFailure(f"Invalid query parameter: {detail}").to_response()

async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = _STATUS_CODES.get(exc.status_code, INTERNAL if exc.status_code >= 500 else "HTTP_ERROR")
    response = error_response(exc.status_code, code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
    return internal_error_response("Internal server error")

def register_exception_handlers(app) -> None:
    """Install the envelope-producing handlers on a FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
