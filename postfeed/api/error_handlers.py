"""Error Handlers — global exception handlers for the PostFeed API.

Invariants:
    - Every error body is {"error": "<message>"}
    - PostFeedError → its own http_status and message
    - RequestValidationError → 400 with the FIRST failing rule's message only
    - HTTPException (unknown route, wrong method) → same envelope, same status
    - Exception (catch-all) → 500, raw message only when expose_internal_errors is on
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postfeed.config import get_settings
from postfeed.core.errors import PostFeedError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"
MISSING_BODY_MESSAGE = "Request body is required"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_postfeed_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_postfeed_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PostFeedError)
    async def postfeed_error_handler(request: Request, exc: PostFeedError):
        """Handle all PostFeed domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"PostFeedError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Report only the first violated rule."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": first_error_message(exc.errors())},
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all for anything not mapped to a PostFeedError."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        message = (
            str(exc) or GENERIC_ERROR_MESSAGE
            if get_settings().expose_internal_errors
            else GENERIC_ERROR_MESSAGE
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": message},
        )


def first_error_message(errors: list[dict] | tuple) -> str:
    """Message of the first validation error, in declaration order."""
    if not errors:
        return "Invalid request data"
    first = errors[0]
    if first.get("type") == "missing" and tuple(first.get("loc", ())) == ("body",):
        return MISSING_BODY_MESSAGE
    return first.get("msg") or "Invalid request data"
