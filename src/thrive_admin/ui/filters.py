from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel

from ..reconciler import EntitySchema

FILTER_NAMES = ("search", "category", "vendor", "type")
ALL_VALUE = "all"


def clean_filters(filters: dict[str, Any]) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for key, value in filters.items():
        if value in (None, ""):
            continue
        text = str(value).strip()
        if text and text.lower() != ALL_VALUE:
            cleaned[key] = text
    return cleaned


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def apply_filters(
    records: Iterable[BaseModel],
    filters: dict[str, Any],
    schema: EntitySchema,
) -> list[BaseModel]:
    """Filter already-normalized records of the current page only."""
    active = clean_filters(filters)
    needle = _as_text(active.get("search"))
    matches: list[BaseModel] = []
    for record in records:
        values = record.model_dump()
        if needle and not any(needle in _as_text(values.get(name)) for name in schema.search_fields):
            continue
        if all(_matches(values, schema.filter_fields.get(name), active.get(name)) for name in FILTER_NAMES[1:]):
            matches.append(record)
    return matches


def _matches(values: dict[str, Any], fields: tuple[str, ...] | None, wanted: str | None) -> bool:
    if not wanted or not fields:
        return True
    target = _as_text(wanted)
    return any(_as_text(values.get(name)) == target for name in fields)
