"""Global exception handlers.

- ApiError → its own status code and body ({"errors": [...]} or {"message": ...})
- RequestValidationError (bad JSON, wrong types) → 400 {"errors": [...]}
- Exception (catch-all) → 500, logged with traceback, no internals in the body
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from courseapi.errors import ApiError

logger = structlog.get_logger()

INTERNAL_ERROR = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info(
            "request.rejected",
            status=exc.status_code,
            error=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [_format_validation_error(e) for e in exc.errors()]
        logger.warning("request.invalid", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Catch-all. Never leaks internal details."""
        logger.error(
            "request.failed",
            path=request.url.path,
            method=request.method,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_ERROR},
        )


def _format_validation_error(error: dict) -> str:
    # loc looks like ("body", "title"); drop the "body"/"path" prefix
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(loc) or "body"
    return f"{field}: {error.get('msg', 'invalid value')}"
