from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..clients import ResourceClient
from ..exceptions import ApiError, RequestCancelled
from ..logger import get_logger, log_action
from ..reconciler import EntitySchema, is_soft_deleted, normalize_many
from ..ui_errors import to_user_facing_error
from .feedback import Feedback
from .filters import apply_filters
from .pagination import PaginationState, goto_page, next_page, prev_page

logger = get_logger("thrive_admin.ui.listing")


@dataclass
class ListingPage:
    records: list[BaseModel]
    total: int
    page: int
    page_size: int
    total_pages: int
    excluded: int = 0
    failed: bool = False


@dataclass
class ListView:
    client: ResourceClient
    schema: EntitySchema
    page_size: int = 20
    filters: dict[str, Any] = field(default_factory=dict)
    feedback: Feedback = field(default_factory=Feedback)

    def __post_init__(self) -> None:
        self.pagination = PaginationState(page=1, page_size=self.page_size)
        self.records: list[BaseModel] = []
        self.closed = False
        self._context_key = f"list:{self.client.resource}:{id(self)}"
        self.client.http.open_context(self._context_key)

    @property
    def total(self) -> int:
        return self.pagination.total

    @property
    def visible(self) -> list[BaseModel]:
        return apply_filters(self.records, self.filters, self.schema)

    def set_filters(self, **filters: Any) -> list[BaseModel]:
        self.filters.update(filters)
        return self.visible

    def load_page(self, page: int | None = None, page_size: int | None = None) -> ListingPage | None:
        if self.closed:
            return None
        if page is not None:
            goto_page(self.pagination, page)
        if page_size is not None:
            self.pagination.page_size = max(1, page_size)
        state = self.pagination
        version = self.client.http.get_context_version(self._context_key)
        try:
            raw_page = self.client.list_page(
                state.page,
                state.page_size,
                context_key=self._context_key,
                context_version=version,
            )
        except RequestCancelled:
            return None
        except ApiError as exc:
            if self.closed:
                return None
            self.records = []
            state.total = 0
            state.total_pages = 1
            self.feedback.show_error(
                to_user_facing_error(exc, action=f"load {self.client.resource}", entity=self.client.resource)
            )
            log_action(logger, self.client.resource, "load_page", None, "error", str(exc), level=logging.WARNING)
            return ListingPage([], 0, state.page, state.page_size, 1, failed=True)
        if self.closed:
            return None

        kept = [row for row in raw_page.rows if not is_soft_deleted(row)]
        excluded = len(raw_page.rows) - len(kept)
        self.records = normalize_many(kept, self.schema)
        state.total = max(0, raw_page.total - excluded)
        state.total_pages = raw_page.total_pages
        self.feedback.clear_banner()
        return ListingPage(
            records=list(self.records),
            total=state.total,
            page=state.page,
            page_size=state.page_size,
            total_pages=state.total_pages,
            excluded=excluded,
        )

    def next(self) -> ListingPage | None:
        next_page(self.pagination)
        return self.load_page()

    def prev(self) -> ListingPage | None:
        prev_page(self.pagination)
        return self.load_page()

    def delete(self, record_id: str) -> bool:
        try:
            self.client.delete(record_id)
        except ApiError as exc:
            self.feedback.toast_error(
                to_user_facing_error(exc, action=f"delete {self.schema.name}", entity=self.client.resource)
            )
            log_action(logger, self.client.resource, "delete", record_id, "error", str(exc), level=logging.WARNING)
            return False
        self.records = [record for record in self.records if getattr(record, "id", None) != str(record_id)]
        self.pagination.total = max(0, self.pagination.total - 1)
        self.feedback.toast("success", f"{self.schema.name.capitalize()} deleted.")
        log_action(logger, self.client.resource, "delete", record_id, "success")
        self.load_page()
        return True

    def close(self) -> None:
        self.closed = True
        self.client.http.release_context(self._context_key)
