"""Translate application errors into HTTP responses."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from linkhub.core.errors import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    BadRequestError,
    FieldError,
    InternalError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def _field_error(error: dict[str, Any]) -> FieldError:
    location, *path = [str(part) for part in error.get("loc", ())] or ["body"]
    raw = error.get("input")
    value = str(raw) if isinstance(raw, str | int | float) else None
    return FieldError(
        location=location,
        param=".".join(path) or location,
        msg=error.get("msg", "is invalid"),
        value=value,
    )


def _to_app_error(exc: RequestValidationError) -> AppError:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return BadRequestError("invalid json body")
    return ValidationFailedError([_field_error(err) for err in errors])


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error(
            "%s %s: code=%d err=%r cause=%r",
            request.method, request.url.path, exc.status_code, exc, exc.__cause__,
        )
    else:
        logger.info(
            "%s %s: code=%d body=%s",
            request.method, request.url.path, exc.status_code, exc.to_body(),
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return await app_error_handler(request, _to_app_error(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s: unhandled error", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
