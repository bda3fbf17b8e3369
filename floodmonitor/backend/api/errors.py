"""Exception handlers that render every failure as ``{"error": "<message>"}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from floodmonitor.backend.services.errors import (
    DuplicateFavoriteError,
    DuplicateUsernameError,
    FavoriteNotFoundError,
    ServiceError,
    StationNotFoundError,
)

logger = logging.getLogger(__name__)

_SERVICE_STATUS: dict[type[ServiceError], int] = {
    StationNotFoundError: status.HTTP_404_NOT_FOUND,
    FavoriteNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateUsernameError: status.HTTP_409_CONFLICT,
    DuplicateFavoriteError: status.HTTP_409_CONFLICT,
}


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    # Drop the "body"/"query" prefix; the client only cares about the field.
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def _service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = _SERVICE_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return error_response(status_code, str(exc))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(ServiceError, _service_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
