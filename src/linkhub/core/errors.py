"""Error types shared by the domain, repositories and the HTTP layer.

Every error the application raises on purpose derives from ``AppError`` and
knows the HTTP status it maps to and the JSON body a client should see.
Anything else reaching the HTTP boundary is reported as a bare 500.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

INTERNAL_ERROR_MESSAGE = "internal server error"


class AppError(Exception):
    """Base class for errors carrying an HTTP status."""

    status_code: int = 500

    def to_body(self) -> dict[str, Any]:
        """Return the JSON body sent to the client."""
        return {"message": INTERNAL_ERROR_MESSAGE}


class MessageError(AppError):
    """Single-cause failure rendered as ``{"message": ...}``."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


class NotFoundError(MessageError):
    status_code = 404


class UnauthorizedError(MessageError):
    status_code = 401

    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class BadRequestError(MessageError):
    status_code = 400


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""

    location: str
    param: str
    msg: str
    value: str | None = None

    def to_dict(self) -> dict[str, str]:
        # "value" is omitted when empty.
        return {key: val for key, val in asdict(self).items() if val}


class ValidationFailedError(AppError):
    """One or more field-level failures rendered as ``{"errors": [...]}``."""

    status_code = 422

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(f"{err.param}: {err.msg}" for err in errors))
        self.errors = errors

    def to_body(self) -> dict[str, Any]:
        return {"errors": [err.to_dict() for err in self.errors]}


class InternalError(AppError):
    """Failure whose details must stay on the server side."""

    status_code = 500


class StorageError(InternalError):
    """A storage driver call failed; the driver error is kept as ``__cause__``."""


class ListNotInitializedError(InternalError):
    """A vote or comment list was used before being initialized."""


@dataclass(frozen=True)
class StatusMessage:
    """Non-error outcome a caller reports back with an explicit status."""

    message: str
    status_code: int = 200

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}


SUCCESS = StatusMessage("success")
