from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

from ..clients import ResourceClient
from ..exceptions import ApiError, MissingRequiredField, NetworkError, RequestCancelled
from ..logger import get_logger, log_action
from ..reconciler import EntitySchema, coerce_field, denormalize, normalize, validate_required
from ..ui_errors import to_user_facing_error
from .feedback import Feedback

logger = get_logger("thrive_admin.ui.detail")


class DetailState(str, Enum):
    LOADING = "loading"
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"
    CLOSED = "closed"


@dataclass
class DetailView:
    """Viewing/Editing/Saving state machine for a single record.

    The draft is a plain dict keyed by logical field name; the confirmed
    record is only replaced by data re-fetched after a successful save.
    """

    client: ResourceClient
    schema: EntitySchema
    record_id: str
    feedback: Feedback = field(default_factory=Feedback)

    def __post_init__(self) -> None:
        self.state = DetailState.LOADING
        self.record: BaseModel | None = None
        self.draft: dict[str, Any] | None = None
        self._context_key = f"detail:{self.client.resource}:{self.record_id}:{id(self)}"
        self.client.http.open_context(self._context_key)

    @property
    def closed(self) -> bool:
        return self.state is DetailState.CLOSED

    def _fetch(self) -> BaseModel | None:
        raw = self.client.get(
            self.record_id,
            context_key=self._context_key,
            context_version=self.client.http.get_context_version(self._context_key),
        )
        if self.closed:
            return None
        return normalize(raw, self.schema)

    def load(self, initial: BaseModel | Mapping[str, Any] | None = None) -> BaseModel | None:
        if self.closed:
            return None
        try:
            record = self._fetch()
        except RequestCancelled:
            return None
        except NetworkError as exc:
            if self.closed:
                return None
            if exc.timed_out and initial is not None:
                self.record = initial if isinstance(initial, BaseModel) else normalize(initial, self.schema)
                self.state = DetailState.VIEWING
                self.feedback.show_banner(
                    "warning",
                    "The server did not respond in time. Showing the last known data.",
                    f"{exc.code}: {exc.message}",
                )
                log_action(logger, self.schema.name, "load", self.record_id, "fallback", exc.code)
                return self.record
            self._fail_load(exc)
            return None
        except ApiError as exc:
            if self.closed:
                return None
            self._fail_load(exc)
            return None
        if record is None:
            return None
        self.record = record
        self.state = DetailState.VIEWING
        self.feedback.clear_banner()
        return record

    def _fail_load(self, exc: ApiError) -> None:
        self.state = DetailState.VIEWING
        self.feedback.show_error(
            to_user_facing_error(exc, action=f"load {self.schema.name}", entity=self.client.resource)
        )
        log_action(logger, self.schema.name, "load", self.record_id, "error", str(exc), level=logging.WARNING)

    def start_edit(self) -> dict[str, Any]:
        if self.state is not DetailState.VIEWING or self.record is None:
            raise RuntimeError(f"Cannot edit while {self.state.value}")
        self.draft = self.record.model_dump()
        self.state = DetailState.EDITING
        return self.draft

    def set_field(self, name: str, value: Any) -> None:
        if self.state is not DetailState.EDITING or self.draft is None:
            raise RuntimeError("Start editing before changing fields")
        spec = self.schema.spec_for(name)
        if spec.read_only:
            raise ValueError(f"{spec.display_label} is read-only")
        self.draft[spec.logical_name] = value

    def cancel(self) -> None:
        if self.state is DetailState.EDITING:
            self.draft = None
            self.state = DetailState.VIEWING

    def changes(self) -> dict[str, Any]:
        if self.draft is None or self.record is None:
            return {}
        original = self.record.model_dump()
        return {name: value for name, value in self.draft.items() if original.get(name) != value}

    def save(self) -> bool:
        if self.state is not DetailState.EDITING or self.draft is None or self.record is None:
            raise RuntimeError(f"Cannot save while {self.state.value}")
        try:
            validate_required(self.draft, self.schema)
        except MissingRequiredField as exc:
            self.feedback.toast_error(to_user_facing_error(exc))
            return False

        changes = self.changes()
        if not changes:
            self.draft = None
            self.state = DetailState.VIEWING
            self.feedback.toast("info", "No changes to save.")
            return True

        payload = denormalize(changes, self.schema)
        self.state = DetailState.SAVING
        try:
            self.client.update(self.record_id, payload)
        except ApiError as exc:
            if self.closed:
                return False
            self.state = DetailState.EDITING
            self.feedback.toast_error(to_user_facing_error(exc, action="save"))
            log_action(logger, self.schema.name, "save", self.record_id, "error", str(exc), level=logging.WARNING)
            return False

        log_action(logger, self.schema.name, "save", self.record_id, "success", sorted(payload))
        if self.closed:
            return True
        locally_merged = self._merge_locally(changes)
        try:
            refreshed = self._fetch()
        except RequestCancelled:
            return True
        except ApiError as exc:
            refreshed = locally_merged
            self.feedback.toast("warning", "Saved, but the latest data could not be reloaded.", str(exc))
        else:
            self.feedback.toast("success", f"{self.schema.name.capitalize()} updated.")
        if refreshed is None:
            return True
        self.record = refreshed
        self.draft = None
        self.state = DetailState.VIEWING
        return True

    def _merge_locally(self, changes: Mapping[str, Any]) -> BaseModel:
        if self.record is None:
            raise RuntimeError("No record loaded")
        values = self.record.model_dump()
        for name, value in changes.items():
            spec = self.schema.find(name)
            if spec is not None:
                values[spec.logical_name] = coerce_field(spec, value)
        return self.schema.model.model_validate(values)

    def close(self) -> None:
        self.state = DetailState.CLOSED
        self.draft = None
        self.client.http.release_context(self._context_key)
