"""Error handling middleware and exception handlers.

Every error response carries the same body: ``{"error": ..., "message": ...}``.
Only 404 (missing record or route), 405 (method) and 500 are emitted; malformed
input is a 500 carrying the fault's message.
"""

from http import HTTPStatus

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from src.commons.telemetry.logger import get_logger
from src.domain.exceptions import RecordValidationException, VideoNotFoundException

logger = get_logger(__name__)


class APIError(Exception):
    """Error raised by a route with an explicit status and label."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        """Initialize API error.

        Args:
            error: Short error label for clients.
            message: Human-readable error message.
            status_code: HTTP status code.
        """
        self.error = error
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _build_error_response(error: str, message: str, status_code: int) -> JSONResponse:
    """Build standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message},
    )


def _handle_exception(exc: Exception) -> JSONResponse:
    """Map an exception to its error response.

    Args:
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, APIError):
        logger.warning(f"API error: {exc.error}", extra={"error_message": exc.message})
        return _build_error_response(exc.error, exc.message, exc.status_code)

    if isinstance(exc, RecordValidationException):
        logger.warning(f"Validation error: {exc}", extra={"field": exc.field})
        return _build_error_response(
            "Validation error", str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, VideoNotFoundException):
        logger.warning(f"Video not found: {exc}", extra={"video_id": exc.video_id})
        return _build_error_response(
            "Video not found", str(exc), status.HTTP_404_NOT_FOUND
        )

    # Catch-all for unexpected errors
    logger.exception(f"Unexpected error: {exc}")
    return _build_error_response(
        "Internal server error",
        str(exc) or type(exc).__name__,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(exc)


async def http_exception_handler(
    _request: Request,
    exc: StarletteHTTPException,
) -> Response:
    """Render framework HTTP errors (404 route, 405 method) in the error layout."""
    try:
        label = HTTPStatus(exc.status_code).phrase
    except ValueError:
        label = "HTTP error"
    response = _build_error_response(label, str(exc.detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(
    _request: Request,
    exc: RequestValidationError,
) -> Response:
    """Render malformed request bodies and parameters as 500s with the first fault."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'Invalid value')}"
    else:
        message = "Invalid request"
    logger.warning(f"Request validation failed: {message}")
    return _build_error_response(
        "Validation error", message, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
