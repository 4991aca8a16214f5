from __future__ import annotations

from typing import Any, Mapping

from .exceptions import HttpError, NotReadyError, ServerError


def _message_from(payload: Mapping[str, Any]) -> str | None:
    for key in ("error", "message", "detail"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, Mapping):
            nested = value.get("message")
            if isinstance(nested, str) and nested.strip():
                return nested.strip()
    return None


def map_error(status_code: int, payload: Mapping[str, Any] | None) -> HttpError:
    payload = payload or {}
    code = str(payload.get("code") or f"HTTP_{status_code}")
    message = _message_from(payload) or f"Request failed with status {status_code}"
    mapped: type[HttpError]
    if status_code == 404:
        mapped = NotReadyError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = HttpError
    return mapped(
        code=code,
        message=message,
        details=payload.get("details"),
        status_code=status_code,
        raw_payload=dict(payload),
    )
