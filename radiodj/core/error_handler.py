"""Exception handlers turning application errors into HTTP responses."""
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from .exceptions import AppError, AuthenticationError
from .logging import get_logger

logger = get_logger(__name__)


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> HTMLResponse:
    """Plain text body so browser clients can show it as-is."""
    logger.info("request_not_authenticated", path=request.url.path, **exc.details)
    return HTMLResponse(content=exc.message, status_code=exc.status_code)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "request_failed",
        path=request.url.path,
        error=exc.error_code,
        message=exc.message,
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "message": exc.message, "details": exc.details},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error", "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on ``app``."""
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
