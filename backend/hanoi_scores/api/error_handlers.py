"""Error Handlers: global exception handlers for the Hanoi Scores API.

Invariants:
    - ScoreServiceError -> its http_status, body is the error's text rendering
    - RequestValidationError -> 400, one "field: message" line per problem
    - Exception (catch-all) -> 500, never leaks internal details
    - Every body is text/plain
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from hanoi_scores.core.errors import ScoreServiceError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_service_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ScoreServiceError)
    async def service_error_handler(request: Request, exc: ScoreServiceError):
        """Handle storage and other service errors."""
        logger.error(
            f"ScoreServiceError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return PlainTextResponse(exc.to_text(), status_code=exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request body deserialization errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return PlainTextResponse(
            build_validation_error_text(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def build_validation_error_text(exc: RequestValidationError) -> str:
    """Render validation errors as plain text, one line per problem."""
    lines = ["Json deserialize error:"]
    for e in exc.errors():
        # loc starts with "body" for request payload errors
        loc = [str(part) for part in e["loc"] if part != "body"]
        field = ".".join(loc) or "body"
        lines.append(f"  {field}: {e['msg']}")
    return "\n".join(lines)
