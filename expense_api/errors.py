"""API error types and the JSON envelopes used for every response."""
from __future__ import annotations

from typing import Any, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import schemas
from .logging import get_stream_logger

LOG = get_stream_logger(__name__)

DataT = TypeVar("DataT")


class ApiError(Exception):
    """Base class for errors rendered as ``{"success": false, "error": ...}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalServerError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def ok(data: DataT) -> schemas.ApiResponse[DataT]:
    return schemas.ApiResponse[Any](data=data)


def bad(message: str) -> BadRequestError:
    return BadRequestError(message)


def not_found(message: str = "Not found") -> NotFoundError:
    return NotFoundError(message)


def error_response(status_code: int, message: str) -> JSONResponse:
    payload = schemas.ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    LOG.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    LOG.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "ApiError",
    "BadRequestError",
    "InternalServerError",
    "NotFoundError",
    "bad",
    "error_response",
    "not_found",
    "ok",
    "register_exception_handlers",
]
