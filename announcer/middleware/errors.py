"""Error handling middleware."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from starlette.types import ASGIApp

from announcer.core.errors import AnnouncerError
from announcer.core.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def create_error_response(
    error_type: str,
    detail: str,
    status_code: int,
    correlation_id: str | None,
) -> JSONResponse:
    """Create JSON error response with optional correlation ID."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": error_type,
            "message": detail,
            "status_code": status_code,
            "correlation_id": correlation_id if correlation_id else "unknown",
        },
        media_type="application/json",
    )
    if correlation_id:
        response.headers["X-Request-ID"] = correlation_id
    return response


def log_request_error(
    request: Request,
    exc: Exception,
    status_code: int,
    correlation_id: str | None,
) -> None:
    """Log error details, including the internal message."""
    log = logger.warning
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        log = logger.error
    log(
        "request_error",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        status_code=status_code,
        path=request.url.path,
        method=request.method,
        correlation_id=correlation_id,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render an ``HTTPException`` in the JSON error shape, keeping its detail.

    Covers routing errors as well, since the router raises ``HTTPException``
    for unknown paths and unsupported methods.
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    log_request_error(request, exc, exc.status_code, correlation_id)
    response = create_error_response(
        exc.__class__.__name__,
        str(exc.detail),
        exc.status_code,
        correlation_id,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware to turn unhandled errors into consistent JSON responses.

    Internal exception messages are logged but never returned to the
    caller; announcer errors answer with their ``public_message``.
    Responses produced downstream, error responses included, pass through
    untouched.
    """

    def __init__(self, app: ASGIApp) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
        """
        super().__init__(app)

    def _get_error_detail(self, exc: Exception) -> tuple[str, int]:
        """Get public error detail and status code from exception."""
        if isinstance(exc, HTTPException):
            return str(exc.detail), exc.status_code
        if isinstance(exc, AnnouncerError):
            return exc.public_message, exc.status_code
        return GENERIC_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and handle errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            correlation_id = getattr(request.state, "correlation_id", None)
            detail, status_code = self._get_error_detail(exc)

            log_request_error(request, exc, status_code, correlation_id)
            return create_error_response(
                exc.__class__.__name__, detail, status_code, correlation_id
            )
