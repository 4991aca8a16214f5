from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Mapping

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

NOT_PROVIDED = "Not provided"
DEFAULT_EMPTY_SENTINELS: frozenset[str] = frozenset({"", "N/A", "n/a", NOT_PROVIDED})


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    MASKED = "masked"
    LOCATION = "location"
    MAPPING = "mapping"


@dataclass(frozen=True)
class FieldSpec:
    """How one logical field is read from, and written back to, raw records.

    ``aliases`` are probed in order (dotted aliases reach into nested objects);
    ``write_keys`` receive the value on write-back. A spec without write keys
    is display-only.
    """

    logical_name: str
    aliases: tuple[str, ...]
    kind: FieldKind = FieldKind.TEXT
    fallback: Any = NOT_PROVIDED
    write_keys: tuple[str, ...] = ()
    required: bool = False
    send_null_to_clear: bool = False
    empty_sentinels: frozenset[str] = DEFAULT_EMPTY_SENTINELS
    label: str = ""

    def __post_init__(self) -> None:
        if not self.aliases:
            raise ValueError(f"{self.logical_name}: at least one alias is required")
        if self.write_keys and not set(self.write_keys) & set(self.aliases):
            raise ValueError(f"{self.logical_name}: write keys must include a readable alias")
        if any("." in key for key in self.write_keys):
            raise ValueError(f"{self.logical_name}: write keys must be flat")

    @property
    def ui_name(self) -> str:
        return to_camel(self.logical_name)

    @property
    def display_label(self) -> str:
        return self.label or self.logical_name.replace("_", " ").capitalize()

    @property
    def read_only(self) -> bool:
        return not self.write_keys


@dataclass(frozen=True)
class EntitySchema:
    name: str
    model: type[BaseModel]
    fields: tuple[FieldSpec, ...]
    deny_list: frozenset[str] = frozenset()
    list_columns: tuple[tuple[str, str], ...] = ()
    search_fields: tuple[str, ...] = ()
    filter_fields: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        names = [spec.logical_name for spec in self.fields]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"{self.name}: duplicate fields {sorted(duplicates)}")
        missing = set(self.model.model_fields) - set(names)
        if missing:
            raise ValueError(f"{self.name}: model fields without a spec {sorted(missing)}")

    @cached_property
    def _index(self) -> dict[str, FieldSpec]:
        index: dict[str, FieldSpec] = {}
        for spec in self.fields:
            index[spec.logical_name] = spec
            index.setdefault(spec.ui_name, spec)
        return index

    def find(self, name: str) -> FieldSpec | None:
        return self._index.get(name)

    def spec_for(self, name: str) -> FieldSpec:
        spec = self.find(name)
        if spec is None:
            raise KeyError(f"{self.name} has no field {name!r}")
        return spec

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.logical_name for spec in self.fields if spec.required)

    @property
    def writable_fields(self) -> tuple[str, ...]:
        return tuple(spec.logical_name for spec in self.fields if not spec.read_only)
