from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .exceptions import HttpError

DEFAULT_COLLECTION_KEYS = ("items", "rows", "results")


@dataclass
class RawPage:
    rows: list[dict[str, Any]]
    page: int
    page_size: int
    total: int
    total_pages: int
    total_reported: bool
    raw_meta: dict[str, Any] = field(default_factory=dict)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def ensure_success(payload: Any) -> Any:
    """Raise when an envelope reports ``success: false`` on a 2xx response."""
    if isinstance(payload, dict) and payload.get("success") is False:
        message = payload.get("error") or payload.get("message") or "Request was not successful"
        raise HttpError(
            code="API_ERROR",
            message=str(message),
            details=payload.get("details"),
            status_code=200,
            raw_payload=payload,
        )
    return payload


def normalize_listing(
    payload: Any,
    *,
    page: int = 1,
    page_size: int = 20,
    collection_keys: Iterable[str] = (),
) -> RawPage:
    payload = ensure_success(payload)
    keys = tuple(collection_keys) + DEFAULT_COLLECTION_KEYS
    safe_page = max(1, _to_int(page) or 1)
    safe_page_size = max(1, _to_int(page_size) or 20)

    rows: list[Any] = []
    meta: dict[str, Any] = {}
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        rows = _find_rows(payload, keys)
        for meta_key in ("pagination", "meta"):
            candidate = payload.get(meta_key)
            if isinstance(candidate, dict):
                meta = candidate
                break
        if not meta and _to_int(payload.get("total")) is not None:
            meta = {"total": payload.get("total")}

    records = [row for row in rows if isinstance(row, dict)]
    reported_total = _to_int(meta.get("total"))
    total = reported_total if reported_total is not None else len(records)
    resolved_page = _to_int(meta.get("page")) or safe_page
    resolved_size = _to_int(meta.get("limit")) or _to_int(meta.get("page_size")) or safe_page_size
    total_pages = (
        _to_int(meta.get("totalPages"))
        or _to_int(meta.get("total_pages"))
        or _to_int(meta.get("pages"))
        or max(1, -(-total // max(1, resolved_size)))
    )
    return RawPage(
        rows=records,
        page=max(1, resolved_page),
        page_size=max(1, resolved_size),
        total=max(0, total),
        total_pages=max(1, total_pages),
        total_reported=reported_total is not None,
        raw_meta=dict(meta),
    )


def unwrap_record(payload: Any, record_keys: Iterable[str] = ()) -> dict[str, Any]:
    payload = ensure_success(payload)
    if not isinstance(payload, dict):
        return {}
    keys = tuple(record_keys)
    data = payload.get("data")
    if isinstance(data, dict):
        for key in keys:
            if isinstance(data.get(key), dict):
                return data[key]
        return data
    for key in keys:
        if isinstance(payload.get(key), dict):
            return payload[key]
    if "success" in payload:
        return {}
    return payload


def _find_rows(payload: dict[str, Any], keys: tuple[str, ...]) -> list[Any]:
    data = payload.get("data")
    if isinstance(data, list):
        return data
    for container in (data, payload):
        if not isinstance(container, dict):
            continue
        for key in keys:
            if isinstance(container.get(key), list):
                return container[key]
    return []


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
