from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 20
    total: int = 0
    total_pages: int = 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def next_page(state: PaginationState) -> PaginationState:
    if state.has_next:
        state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int) -> PaginationState:
    state.page = max(1, page)
    return state
