from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from ..exceptions import MissingRequiredField
from ..reconciler import EntitySchema, validate_required

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


def _normalize_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def validate_fields(
    values: dict[str, Any],
    required: Iterable[str],
    schema: EntitySchema | None = None,
) -> FormResult:
    normalized = {key: _normalize_text(value) for key, value in values.items()}
    field_errors: dict[str, str] = {}
    required_names = list(required)
    if schema is not None:
        try:
            validate_required(normalized, schema, [name for name in required_names if schema.find(name)])
        except MissingRequiredField as exc:
            field_errors.update(exc.field_errors)
    for name in required_names:
        if name in field_errors or (schema is not None and schema.find(name)):
            continue
        if normalized.get(name) in (None, ""):
            field_errors[name] = f"{name.replace('_', ' ').replace('.', ' ').capitalize()} is required"
    email = normalized.get("email")
    if isinstance(email, str) and email and "email" not in field_errors and not EMAIL_REGEX.match(email):
        field_errors["email"] = "Email is invalid. Use the format name@domain.com."
    return FormResult(values=normalized, field_errors=field_errors)


def map_api_validation_errors(details: Any) -> dict[str, str]:
    errors: dict[str, str] = {}
    if isinstance(details, dict):
        for key, value in details.items():
            errors[str(key)] = str(value)
    elif isinstance(details, list):
        for item in details:
            if isinstance(item, dict) and item.get("field"):
                errors[str(item["field"])] = str(item.get("message") or item.get("reason") or "invalid")
    return errors
