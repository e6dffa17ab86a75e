from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .logging import request_log_extra

logger = logging.getLogger("app.errors")


def _error_response(request: Request, status_code: int, error: str, detail, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "detail": detail,
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error_response(
            request,
            status.HTTP_404_NOT_FOUND,
            "not_found",
            f"No route for {request.method} {request.url.path}",
        )
    return _error_response(
        request,
        exc.status_code,
        "http_error",
        exc.detail,
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    # Malformed JSON and missing fields are plain bad requests, not domain errors.
    errors = jsonable_encoder(exc.errors())
    logger.info(
        "rejected request body",
        extra={**request_log_extra(request), "status": 400, "error_count": len(errors)},
    )
    return _error_response(
        request, status.HTTP_400_BAD_REQUEST, "validation_error", errors
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception(
        "unhandled exception", extra={**request_log_extra(request), "status": 500}
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred.",
    )
