from __future__ import annotations

from dataclasses import dataclass, field

from ..ui_errors import UserFacingError


@dataclass(frozen=True)
class Notice:
    level: str
    message: str
    details: str | None = None


@dataclass
class Feedback:
    """Banner and toast queue owned by one view."""

    banner: Notice | None = None
    toasts: list[Notice] = field(default_factory=list)

    def show_banner(self, level: str, message: str, details: str | None = None) -> None:
        self.banner = Notice(level=level, message=message, details=details)

    def show_error(self, error: UserFacingError) -> None:
        self.show_banner(error.severity, error.message, error.technical_details)

    def clear_banner(self) -> None:
        self.banner = None

    def toast(self, level: str, message: str, details: str | None = None) -> None:
        self.toasts.append(Notice(level=level, message=message, details=details))

    def toast_error(self, error: UserFacingError) -> None:
        self.toast(error.severity, error.message, error.technical_details)

    def drain(self) -> list[Notice]:
        pending, self.toasts = self.toasts, []
        return pending


def render_notice(notice: Notice) -> str:
    details = f" details={notice.details}" if notice.details else ""
    return f"[{notice.level.upper()}] message={notice.message}{details}"
