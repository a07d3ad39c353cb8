import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """An error whose message and status are safe to show to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


def error_body(message: str, status_code: int, exc: Optional[BaseException], include_stack: bool) -> dict:
    error = {"message": message, "status": status_code}
    if include_stack and exc is not None:
        error["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {"error": error}


def _respond(request: Request, message: str, status_code: int, exc: BaseException) -> JSONResponse:
    settings = request.app.state.settings
    if status_code >= 500:
        logger.error("[Error] %s: %s %s %s", status_code, message, request.method, request.url.path, exc_info=exc)
    else:
        logger.warning("[Error] %s: %s %s %s", status_code, message, request.method, request.url.path)

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=error_body(message, status_code, exc, include_stack=not settings.is_production),
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _respond(request, exc.message, exc.status_code, exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _respond(request, str(exc.detail), exc.status_code, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Validation errors on %s: %s", request.url.path, exc.errors())
    return _respond(request, "Validation failed", status.HTTP_400_BAD_REQUEST, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
