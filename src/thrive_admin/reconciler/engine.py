from __future__ import annotations

import copy
import logging
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from ..exceptions import DenyListViolation, MissingRequiredField, ValidationIssue
from ..logger import get_logger, log_action
from .field_spec import (
    DEFAULT_EMPTY_SENTINELS,
    NOT_PROVIDED,
    EntitySchema,
    FieldKind,
    FieldSpec,
)

DISPLAY_DATE_FORMAT = "%m/%d/%Y"
MASK_PREFIX = "****"

CITY_ALIASES = ("city", "address.city")
STATE_ALIASES = ("state", "address.state")
ZIP_ALIASES = (
    "zip_code",
    "zipCode",
    "zip",
    "postal_code",
    "address.zipCode",
    "address.zip_code",
    "address.zip",
)
SOFT_DELETE_KEYS = ("deleted_at", "deletedAt", "is_deleted", "isDeleted")

_MISSING = object()
_OMIT = object()

logger = get_logger("thrive_admin.reconciler")


def is_empty(value: Any, sentinels: Iterable[str] = DEFAULT_EMPTY_SENTINELS) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        clean = value.strip()
        return not clean or clean in sentinels
    return False


def probe(raw: Mapping[str, Any], alias: str) -> Any:
    current: Any = raw
    for part in alias.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _candidates(raw: Mapping[str, Any], aliases: Iterable[str], sentinels: Iterable[str]):
    for alias in aliases:
        value = probe(raw, alias)
        if value is _MISSING or is_empty(value, sentinels):
            continue
        yield value


def coerce_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        parts = [coerce_text(item) for item in value]
        joined = ", ".join(part for part in parts if part)
        return joined or None
    return None


def coerce_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        clean = value.strip().replace(",", "").replace("$", "").rstrip("%")
        try:
            number = float(clean)
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None


def coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in {0, 1}:
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on", "active"}:
            return True
        if normalized in {"0", "false", "no", "n", "off", "inactive"}:
            return False
    return None


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    clean = value.strip()
    try:
        return datetime.fromisoformat(clean.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for candidate, fmt in ((clean[:10], "%Y-%m-%d"), (clean, DISPLAY_DATE_FORMAT)):
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: Any, fallback: str = NOT_PROVIDED) -> str:
    if is_empty(value):
        return fallback
    parsed = parse_date(value)
    if parsed is not None:
        return parsed.strftime(DISPLAY_DATE_FORMAT)
    text = coerce_text(value)
    return text if text else fallback


def mask_account(value: Any, fallback: str = NOT_PROVIDED) -> str:
    if is_empty(value):
        return fallback
    text = coerce_text(value)
    if not text:
        return fallback
    if len(text) > 4:
        return MASK_PREFIX + text[-4:]
    return text


def synthesize_location(raw: Mapping[str, Any], sentinels: Iterable[str] = DEFAULT_EMPTY_SENTINELS) -> str:
    def _first(aliases: tuple[str, ...]) -> str:
        for value in _candidates(raw, aliases, sentinels):
            text = coerce_text(value)
            if text:
                return text
        return ""

    city = _first(CITY_ALIASES)
    tail = " ".join(part for part in (_first(STATE_ALIASES), _first(ZIP_ALIASES)) if part)
    return ", ".join(part for part in (city, tail) if part)


def _typed_fallback(spec: FieldSpec) -> Any:
    if spec.kind is FieldKind.MAPPING:
        return copy.deepcopy(spec.fallback) if isinstance(spec.fallback, Mapping) else {}
    return spec.fallback


def resolve_value(raw: Mapping[str, Any], spec: FieldSpec) -> Any:
    sentinels = spec.empty_sentinels
    for value in _candidates(raw, spec.aliases, sentinels):
        if spec.kind is FieldKind.NUMBER:
            resolved = coerce_number(value)
        elif spec.kind is FieldKind.BOOLEAN:
            resolved = coerce_bool(value)
        elif spec.kind is FieldKind.DATE:
            resolved = format_date(value, fallback="")
        elif spec.kind is FieldKind.MASKED:
            resolved = mask_account(value, fallback="")
        elif spec.kind is FieldKind.MAPPING:
            resolved = copy.deepcopy(dict(value)) if isinstance(value, Mapping) else None
        else:
            resolved = coerce_text(value)
        if resolved is not None and resolved != "":
            return resolved
    if spec.kind is FieldKind.LOCATION:
        synthesized = synthesize_location(raw, sentinels)
        if synthesized:
            return synthesized
    return _typed_fallback(spec)


def coerce_field(spec: FieldSpec, value: Any) -> Any:
    """Normalize a single user-entered value as if it came from the backend."""
    raw: dict[str, Any] = {}
    cursor = raw
    *parents, leaf = spec.aliases[0].split(".")
    for part in parents:
        cursor = cursor.setdefault(part, {})
    cursor[leaf] = value
    return resolve_value(raw, spec)


def resolve_fields(raw: Any, specs: Iterable[FieldSpec]) -> dict[str, Any]:
    source = raw if isinstance(raw, Mapping) else {}
    return {spec.logical_name: resolve_value(source, spec) for spec in specs}


def normalize(raw: Any, schema: EntitySchema) -> BaseModel:
    """Build the typed record for ``schema`` from any raw shape; never raises."""
    return schema.model.model_validate(resolve_fields(raw, schema.fields))


def normalize_many(rows: Iterable[Any], schema: EntitySchema) -> list[BaseModel]:
    return [normalize(row, schema) for row in rows]


def _view_items(view: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(view, BaseModel):
        return view.model_dump()
    return dict(view)


def _to_wire(spec: FieldSpec, value: Any) -> Any:
    if is_empty(value, spec.empty_sentinels):
        return None if spec.send_null_to_clear else _OMIT
    if spec.kind is FieldKind.DATE:
        parsed = parse_date(value)
        return parsed.isoformat() if parsed is not None else value
    if spec.kind is FieldKind.NUMBER:
        number = coerce_number(value)
        return value if number is None else number
    if spec.kind is FieldKind.BOOLEAN:
        flag = coerce_bool(value)
        return value if flag is None else flag
    if spec.kind is FieldKind.MAPPING:
        return copy.deepcopy(dict(value)) if isinstance(value, Mapping) else value
    if isinstance(value, str):
        return value.strip()
    return value


def denormalize(view: Mapping[str, Any] | BaseModel, schema: EntitySchema) -> dict[str, Any]:
    passthrough: dict[str, Any] = {}
    written: dict[str, Any] = {}
    for key, value in _view_items(view).items():
        spec = schema.find(key)
        if spec is None:
            passthrough[key] = value
            continue
        if spec.read_only:
            continue
        wire_value = _to_wire(spec, value)
        if wire_value is _OMIT:
            continue
        for write_key in spec.write_keys:
            written[write_key] = wire_value
    leaked = sorted(schema.deny_list.intersection(written))
    if leaked:
        raise DenyListViolation(f"{schema.name} fields write denied keys: {leaked}")
    payload = strip_denied(passthrough, schema.deny_list, entity=schema.name)
    payload.update(written)
    return payload


def strip_denied(payload: Mapping[str, Any], deny_list: Iterable[str], *, entity: str = "record") -> dict[str, Any]:
    denied = frozenset(deny_list)
    removed = sorted(key for key in payload if key in denied)
    clean = {key: value for key, value in payload.items() if key not in denied}
    if removed:
        log_action(
            logger,
            module=entity,
            action="strip_denied_keys",
            record_id=None,
            outcome="stripped",
            detail=removed,
            level=logging.WARNING,
        )
    return clean


def validate_required(
    view: Mapping[str, Any] | BaseModel,
    schema: EntitySchema,
    fields: Iterable[str] | None = None,
) -> None:
    items = _view_items(view)
    names = list(fields) if fields is not None else list(schema.required_fields)
    issues: list[ValidationIssue] = []
    for name in names:
        spec = schema.find(name)
        value = items.get(name)
        if value is None and spec is not None:
            value = items.get(spec.ui_name, items.get(spec.logical_name))
        sentinels = spec.empty_sentinels if spec is not None else DEFAULT_EMPTY_SENTINELS
        if is_empty(value, sentinels):
            label = spec.display_label if spec is not None else name
            issues.append(ValidationIssue(field=name, reason=f"{label} is required"))
    if issues:
        raise MissingRequiredField(issues)


def is_soft_deleted(raw: Any) -> bool:
    if not isinstance(raw, Mapping):
        return False
    if any(raw.get(key) for key in SOFT_DELETE_KEYS):
        return True
    return raw.get("deleted") is True
