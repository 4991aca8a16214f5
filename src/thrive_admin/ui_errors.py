from __future__ import annotations

from dataclasses import dataclass

from .exceptions import (
    ApiError,
    HttpError,
    NetworkError,
    NotReadyError,
    PartialFailure,
    ValidationError,
)

NOT_READY_MESSAGE = "This section is not available yet. The {entity} endpoint is not ready."
GENERIC_MESSAGE = "Failed to {action}, please try again."


@dataclass(frozen=True)
class UserFacingError:
    message: str
    severity: str = "error"
    details: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def _server_message(exc: HttpError) -> str | None:
    payload = exc.raw_payload if isinstance(exc.raw_payload, dict) else {}
    for key in ("error", "message", "detail"):
        if payload.get(key):
            return exc.message
    return None


def to_user_facing_error(exc: Exception, *, action: str = "load data", entity: str = "records") -> UserFacingError:
    if isinstance(exc, ValidationError):
        return UserFacingError(message=str(exc.issues[0].reason if exc.issues else exc), details=str(exc))
    if isinstance(exc, PartialFailure):
        return UserFacingError(message=str(exc), severity="warning", details=repr(exc.cause))
    if isinstance(exc, NetworkError):
        if exc.timed_out:
            message = "The server took too long to respond. Please try again."
        else:
            message = "Network problem. Check your connection and try again."
        return UserFacingError(message=message, details=f"{exc.code}: {exc.message}")
    if isinstance(exc, NotReadyError):
        return UserFacingError(
            message=NOT_READY_MESSAGE.format(entity=entity),
            severity="warning",
            details=f"{exc.code} (HTTP {exc.status_code})",
        )
    if isinstance(exc, HttpError):
        message = _server_message(exc) or GENERIC_MESSAGE.format(action=action)
        return UserFacingError(message=message, details=f"{exc.code} (HTTP {exc.status_code})")
    if isinstance(exc, ApiError):
        return UserFacingError(message=GENERIC_MESSAGE.format(action=action), details=str(exc))
    return UserFacingError(message=GENERIC_MESSAGE.format(action=action), details=repr(exc))
