from __future__ import annotations

import sys
from typing import Any, TextIO

from ..reconciler import NOT_PROVIDED

EMPTY_VALUE = "—"


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "ACTIVE" if value else "INACTIVE"
    if isinstance(value, dict):
        return ", ".join(f"{key}: {item}" for key, item in value.items()) or EMPTY_VALUE
    text = str(value).strip()
    if not text or text == NOT_PROVIDED:
        return EMPTY_VALUE
    return text


def print_table(
    title: str,
    rows: list[dict[str, Any]],
    columns: list[tuple[str, str]] | tuple[tuple[str, str], ...],
    out: TextIO | None = None,
) -> None:
    stream = out or sys.stdout
    print(f"\n{title}", file=stream)
    if not rows:
        print("(no results)", file=stream)
        return

    widths = []
    for key, header in columns:
        max_cell = max(len(normalize_value(row.get(key))) for row in rows)
        widths.append(max(len(header), max_cell))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns))
    separator = "-+-".join("-" * width for width in widths)
    print(header_line, file=stream)
    print(separator, file=stream)

    for row in rows:
        line = " | ".join(normalize_value(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns))
        print(line, file=stream)


def print_record(title: str, record: dict[str, Any], labels: list[tuple[str, str]], out: TextIO | None = None) -> None:
    stream = out or sys.stdout
    print(f"\n{title}", file=stream)
    width = max((len(label) for _, label in labels), default=0)
    for key, label in labels:
        print(f"{label.ljust(width)} : {normalize_value(record.get(key))}", file=stream)
