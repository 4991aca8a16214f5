from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class NetworkError(ApiError):
    """No HTTP response: timeout, DNS failure, refused connection."""

    @property
    def timed_out(self) -> bool:
        return self.code == "TIMEOUT_ERROR"


class HttpError(ApiError):
    """Non-2xx response from the admin API."""


class NotReadyError(HttpError):
    """404: the endpoint is not deployed yet or the record is gone."""


class ServerError(HttpError):
    """5xx server-side failures."""


class RequestCancelled(ApiError):
    """The owning view closed before the response was consumed."""


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        first = issues[0] if issues else ValidationIssue(field="form", reason="invalid")
        super().__init__(f"{first.field}: {first.reason}")

    @property
    def field_errors(self) -> dict[str, str]:
        return {issue.field: issue.reason for issue in self.issues}


class MissingRequiredField(ValidationError):
    @property
    def field(self) -> str:
        return self.issues[0].field if self.issues else "form"


class DenyListViolation(RuntimeError):
    pass


@dataclass
class PartialFailure(Exception):
    step: str
    committed: list[str] = field(default_factory=list)
    cause: BaseException | None = None

    def __str__(self) -> str:
        done = ", ".join(self.committed) or "nothing"
        return f"{self.step} failed after {done} was saved: {self.cause}"
